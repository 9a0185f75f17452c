"""Build deploy targets from settings: a target is enabled when its credentials are set."""

from __future__ import annotations

import dagger
from loguru import logger

from athame.adapters import engine
from athame.adapters.deploy_targets.cloud_run import CloudRunTarget
from athame.adapters.deploy_targets.flyio import FlyioTarget
from athame.adapters.deploy_targets.render import RenderTarget
from athame.core.config import AppSettings
from athame.core.interfaces.deploy_target import DeployTarget


def targets_from_settings(
    client: dagger.Client,
    settings: AppSettings,
    *,
    service_name: str,
) -> list[DeployTarget]:
    """Targets in deploy order: Render, Fly.io, then Cloud Run."""

    targets: list[DeployTarget] = []

    hook = engine.secret_from(client, "render-deploy-hook-url", settings.render_deploy_hook_url)
    if hook is not None:
        targets.append(RenderTarget(hook, service_name=service_name, settings=settings))

    fly_token = engine.secret_from(client, "flyio-token", settings.flyio_token)
    if settings.flyio_app and fly_token is not None:
        targets.append(
            FlyioTarget(client, app=settings.flyio_app, token=fly_token, region=settings.flyio_region)
        )

    key = engine.secret_from(client, "gcloud-service-account-key", settings.gcloud_service_account_key)
    if key is not None and settings.gcloud_service and settings.gcloud_project:
        targets.append(
            CloudRunTarget(
                client,
                service=settings.gcloud_service,
                project=settings.gcloud_project,
                service_account_key=key,
                region=settings.gcloud_region,
                allow_unauthenticated=settings.gcloud_allow_unauthenticated,
                artifact_registry_repo=settings.artifact_registry_repo,
                artifact_registry_region=settings.artifact_registry_region,
            )
        )

    logger.debug("Deploy targets: {}", ", ".join(t.name for t in targets) or "none")
    return targets
