"""Arch Linux base containers."""

from __future__ import annotations

from collections.abc import Sequence

import dagger

from athame.adapters.tools.base import ContainerTool


class Archlinux(ContainerTool):
    name = "archlinux"
    image = "archlinux/archlinux"
    # renovate: datasource=docker depName=archlinux/archlinux
    default_tag = "base-20251019.0.437072@sha256:4524236733437ff1f35531147aa444b32f674d9f328aebe06d3511be575c80a3"

    def with_packages(self, packages: Sequence[str]) -> dagger.Container:
        return self.base().with_exec(["pacman", "-Sy", "--noconfirm", *packages])
