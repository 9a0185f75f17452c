"""Deploy targets implementing `athame.core.interfaces.deploy_target.DeployTarget`."""

from athame.adapters.deploy_targets.cloud_run import CloudRunTarget, artifact_registry_image
from athame.adapters.deploy_targets.factory import targets_from_settings
from athame.adapters.deploy_targets.flyio import FlyioTarget
from athame.adapters.deploy_targets.render import RenderTarget

__all__ = [
    "CloudRunTarget",
    "FlyioTarget",
    "RenderTarget",
    "artifact_registry_image",
    "targets_from_settings",
]
