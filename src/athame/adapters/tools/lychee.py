"""lycheeverse/lychee: fast, async link checker."""

from __future__ import annotations

import dagger

from athame.adapters.tools.base import ContainerTool


class Lychee(ContainerTool):
    name = "lychee"
    image = "lycheeverse/lychee"
    # renovate: datasource=docker depName=lycheeverse/lychee
    default_tag = "0.15.1-alpine@sha256:214ed75d61117c5dc39310b9da73bb9fae5333f6f6eb6891e861e79cda780268"

    def check(self, source: dagger.Directory, target: str = "docs") -> dagger.Container:
        return self.with_source(source).with_exec(["lychee", "--no-progress", target])
