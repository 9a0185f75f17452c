"""Crane: interact with remote images and registries (go-containerregistry).

Registry credentials, when needed, are a docker `config.json` mounted as a
secret file.
"""

from __future__ import annotations

import dagger

from athame.adapters.tools.base import ContainerTool

DOCKER_CONFIG_PATH = "/root/.docker/config.json"


class Crane(ContainerTool):
    name = "crane"
    image = "gcr.io/go-containerregistry/crane"
    # renovate: datasource=docker depName=gcr.io/go-containerregistry/crane
    default_tag = "v0.20.3@sha256:fc86bcad43a000c2a1ca926a1e167db26c053cebc3fa5d14285c72773fb8c11d"

    def _authenticated(self, secret: dagger.Secret | None) -> dagger.Container:
        ctr = self.base()
        if secret is not None:
            ctr = ctr.with_mounted_secret(DOCKER_CONFIG_PATH, secret)
        return ctr

    async def list(self, repository: str) -> str:
        """All tags of `repository` (`crane ls`)."""

        return await self.run(self.base().with_exec(["crane", "ls", repository]))

    async def digest(self, image: str) -> str:
        return await self.run(self.base().with_exec(["crane", "digest", image]))

    async def manifest(self, image: str) -> str:
        return await self.run(self.base().with_exec(["crane", "manifest", image]))

    async def config(self, image: str) -> str:
        return await self.run(self.base().with_exec(["crane", "config", image]))

    async def validate(self, image: str) -> str:
        """Check that `image` exists and is well formed on the remote."""

        return await self.run(self.base().with_exec(["crane", "validate", "--remote", image]))

    async def copy(self, source: str, destination: str, secret: dagger.Secret | None = None) -> str:
        return await self.run(
            self._authenticated(secret).with_exec(["crane", "copy", source, destination])
        )

    def export(self, image: str) -> dagger.File:
        """Image filesystem as a tarball."""

        return self.base().with_exec(["crane", "export", image, "/tmp/image.tar"]).file("/tmp/image.tar")

    async def tag(self, image: str, tag: str, secret: dagger.Secret | None = None) -> str:
        return await self.run(self._authenticated(secret).with_exec(["crane", "tag", image, tag]))
