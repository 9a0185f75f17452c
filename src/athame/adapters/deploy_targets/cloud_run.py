"""Google Cloud Run deploy target.

Cloud Run cannot pull from GHCR directly, so images are pulled through an
Artifact Registry remote repository that mirrors `ghcr.io`.
"""

from __future__ import annotations

import dagger

from athame.adapters.tools.gcloud import Gcloud
from athame.core.domain.models import DeployResult, ImageRef

GHCR = "ghcr.io"


def artifact_registry_image(address: str, *, project: str, repo: str, region: str) -> str:
    """Rewrite a `ghcr.io/...` address to its Artifact Registry remote-repo form.

    Addresses from other registries are returned unchanged.
    """

    ref = ImageRef.parse(address)
    if ref.registry != GHCR:
        return address
    return str(ref.with_registry(f"{region}-docker.pkg.dev", prefix=f"{project}/{repo}"))


class CloudRunTarget:
    name = "cloud-run"
    label = "Google Cloud Run"

    def __init__(
        self,
        client: dagger.Client,
        *,
        service: str,
        project: str,
        service_account_key: dagger.Secret,
        region: str = "us-central1",
        allow_unauthenticated: bool = False,
        artifact_registry_repo: str = "ghcr",
        artifact_registry_region: str = "europe-north2",
    ) -> None:
        self._tool = Gcloud(client)
        self.service = service
        self.project = project
        self.service_account_key = service_account_key
        self.region = region or "us-central1"
        self.allow_unauthenticated = allow_unauthenticated
        self.artifact_registry_repo = artifact_registry_repo
        self.artifact_registry_region = artifact_registry_region

    @property
    def url(self) -> str:
        return f"https://{self.service}-{self.region}.run.app"

    def completion_message(self) -> tuple[str, bool]:
        return f"Deployed to Cloud Run.\n\n**Service:** {self.service}", True

    async def deploy(self, image: str) -> DeployResult:
        pulled = artifact_registry_image(
            image,
            project=self.project,
            repo=self.artifact_registry_repo,
            region=self.artifact_registry_region,
        )
        output = await self._tool.deploy(
            self.service,
            pulled,
            self.project,
            self.region,
            allow_unauthenticated=self.allow_unauthenticated,
            service_account_key=self.service_account_key,
        )
        return DeployResult(target=self.name, image=image, output=output, url=self.url)
