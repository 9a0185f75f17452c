"""Alpine Linux base containers."""

from __future__ import annotations

from collections.abc import Sequence

import dagger

from athame.adapters.tools.base import ContainerTool


class Alpine(ContainerTool):
    name = "alpine"
    image = "alpine"
    # renovate: datasource=docker depName=alpine
    default_tag = "3.22.2@sha256:4b7ce07002c69e8f3d704a9c5d6fd3053be500b7f1c69fc0d80990c2ad8dd412"

    def with_packages(self, packages: Sequence[str]) -> dagger.Container:
        """Base container with `packages` installed through apk."""

        return self.base().with_exec(["apk", "add", "--no-cache", *packages])
