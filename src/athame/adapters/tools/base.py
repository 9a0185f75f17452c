"""Common base for containerized tool wrappers.

A wrapper pins an image reference (tag + digest, kept current by renovate)
and builds containers from it. Subclasses add one method per command they
expose; those methods either return lazy Dagger objects or await stdout via
`run`.
"""

from __future__ import annotations

from typing import ClassVar

import dagger

from athame.adapters import engine


class ContainerTool:
    """Wrapper around one pinned container image."""

    name: ClassVar[str]
    image: ClassVar[str]
    default_tag: ClassVar[str]

    def __init__(self, client: dagger.Client, image_tag: str | None = None) -> None:
        self._client = client
        self.image_tag = image_tag or self.default_tag

    @property
    def client(self) -> dagger.Client:
        return self._client

    @property
    def image_ref(self) -> str:
        return f"{self.image}:{self.image_tag}"

    def base(self) -> dagger.Container:
        return self._client.container().from_(self.image_ref).without_entrypoint()

    def with_source(self, source: dagger.Directory, workdir: str = "/src") -> dagger.Container:
        """Base container with `source` mounted at `workdir`."""

        return self.base().with_mounted_directory(workdir, source).with_workdir(workdir)

    async def run(self, container: dagger.Container) -> str:
        return await engine.stdout(container, tool=self.name)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.image_ref!r})"
