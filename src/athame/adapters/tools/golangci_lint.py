"""golangci-lint."""

from __future__ import annotations

import dagger

from athame.adapters.tools.base import ContainerTool


class GolangciLint(ContainerTool):
    name = "golangci-lint"
    image = "golangci/golangci-lint"
    # renovate: datasource=docker depName=golangci/golangci-lint
    default_tag = "v2.6.0-alpine@sha256:1e8c410818ea9f1f4176b89dd2d95776f07184a7d4a8bf88d25e553b04c1995a"

    def check(self, source: dagger.Directory, target: str = "./...") -> dagger.Container:
        args = ["golangci-lint", "run"]
        if target:
            args.append(target)
        return self.with_source(source).with_exec(args)
