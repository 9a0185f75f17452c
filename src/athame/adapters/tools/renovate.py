"""Renovate dependency updates."""

from __future__ import annotations

import dagger

from athame.adapters.tools.base import ContainerTool


class Renovate(ContainerTool):
    name = "renovate"
    image = "renovate/renovate"
    # renovate: datasource=docker depName=renovate/renovate
    default_tag = "41.163.0@sha256:0c1a0c9222430be38b2cf3136fec3b8c5ecf343807ee0026ee95e50db3e1ffb2"

    async def run_on(self, project: str, token: dagger.Secret, platform: str = "github") -> str:
        """Run Renovate against `project` (e.g. "owner/repo")."""

        return await self.run(
            self.base()
            .with_env_variable("RENOVATE_PLATFORM", platform)
            .with_secret_variable("RENOVATE_TOKEN", token)
            .with_env_variable("RENOVATE_AUTODISCOVER", "false")
            .with_env_variable("RENOVATE_REQUIRE_CONFIG", "optional")
            .with_env_variable("LOG_LEVEL", "debug")
            .with_exec(["renovate", project])
        )
