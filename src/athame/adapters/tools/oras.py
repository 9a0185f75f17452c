"""ORAS (OCI Registry As Storage)."""

from __future__ import annotations

from athame.adapters.tools.base import ContainerTool


class Oras(ContainerTool):
    name = "oras"
    image = "ghcr.io/oras-project/oras"
    # renovate: datasource=docker depName=ghcr.io/oras-project/oras
    default_tag = "v1.3.0@sha256:6ce045ce069a89934d6666b8b49f9c4c0145201bd6de6dbe2aee267814c55468"

    async def manifest_fetch(self, reference: str) -> str:
        return await self.run(self.base().with_exec(["oras", "manifest", "fetch", reference]))
