"""Node.js containers for build tasks."""

from __future__ import annotations

import dagger

from athame.adapters.tools.base import ContainerTool


class Node(ContainerTool):
    name = "node"
    image = "node"
    # renovate: datasource=docker depName=node
    default_tag = "22.21.0-alpine3.22@sha256:bd26af08779f746650d95a2e4d653b0fd3c8030c44284b6b98d701c9b5eb66b9"

    def __init__(
        self,
        client: dagger.Client,
        source: dagger.Directory | None = None,
        image_tag: str | None = None,
    ) -> None:
        super().__init__(client, image_tag)
        self.source = source

    def base(self) -> dagger.Container:
        """Node runtime; the source directory, when given, is mounted at /src."""

        ctr = super().base()
        if self.source is None:
            return ctr
        return ctr.with_mounted_directory("/src", self.source).with_workdir("/src")
