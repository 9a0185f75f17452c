"""Vale, a syntax-aware linter for prose."""

from __future__ import annotations

import dagger

from athame.adapters.tools.base import ContainerTool


class Vale(ContainerTool):
    name = "vale"
    image = "jdkato/vale"
    # renovate: datasource=docker depName=jdkato/vale
    default_tag = "v3.12.0@sha256:d5e8108bfd238192a82f303349b95ce39f605354843bc94811e24da1fe8f8ee0"

    def check(self, source: dagger.Directory, target: str = "docs") -> dagger.Container:
        return self.with_source(source).with_exec(["vale", target])
