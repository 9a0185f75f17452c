"""Google Cloud SDK (gcloud) commands."""

from __future__ import annotations

import dagger

from athame.adapters.tools.base import ContainerTool
from athame.core.errors import ToolError

KEY_PATH = "/tmp/key.json"


class Gcloud(ContainerTool):
    name = "gcloud"
    image = "google/cloud-sdk"
    # renovate: datasource=docker depName=google/cloud-sdk
    default_tag = "546.0.0-alpine@sha256:cbc3420643b13a8b12950d03d2b0d31c4e522cd3d7438bc10bd741fb9947419c"

    def authenticated(self, service_account_key: dagger.Secret | None = None) -> dagger.Container:
        """Base container, activated with the service account key when given."""

        ctr = self.base()
        if service_account_key is not None:
            ctr = ctr.with_mounted_secret(KEY_PATH, service_account_key).with_exec(
                ["gcloud", "auth", "activate-service-account", f"--key-file={KEY_PATH}"]
            )
        return ctr

    async def deploy(
        self,
        service: str,
        image: str,
        project: str,
        region: str,
        allow_unauthenticated: bool = False,
        service_account_key: dagger.Secret | None = None,
    ) -> str:
        """Deploy `image` to Cloud Run as `service`."""

        args = [
            "gcloud",
            "run",
            "deploy",
            service,
            f"--image={image}",
            f"--project={project}",
            f"--region={region}",
        ]
        if allow_unauthenticated:
            args.append("--allow-unauthenticated")
        return await self.run(self.authenticated(service_account_key).with_exec(args))

    async def get_service_url(
        self,
        service: str,
        project: str,
        region: str,
        service_account_key: dagger.Secret | None = None,
    ) -> str:
        """The service URL Cloud Run assigned (`https://<service>-<hash>.<region>.run.app`)."""

        out = await self.run(
            self.authenticated(service_account_key).with_exec(
                [
                    "gcloud",
                    "run",
                    "services",
                    "describe",
                    service,
                    f"--project={project}",
                    f"--region={region}",
                    "--format=value(status.url)",
                ]
            )
        )
        url = out.strip().rstrip("/")
        if not url:
            raise ToolError(self.name, "service URL not found in response")
        return url
