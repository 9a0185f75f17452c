"""markdownlint-cli2: configuration-based Markdown linting."""

from __future__ import annotations

import dagger

from athame.adapters.tools.base import ContainerTool


class MarkdownlintCli2(ContainerTool):
    name = "markdownlint-cli2"
    image = "davidanson/markdownlint-cli2"
    # renovate: datasource=docker depName=davidanson/markdownlint-cli2
    default_tag = "v0.18.1@sha256:173cb697a255a8a985f2c6a83b4f7a8b3c98f4fb382c71c45f1c52e4d4fed63a"

    def check(self, source: dagger.Directory, target: str = "**/*.md") -> dagger.Container:
        return self.with_source(source).with_exec(["markdownlint-cli2", target])
