"""Prettier code formatting (installed globally on the Node image)."""

from __future__ import annotations

import dagger

from athame.adapters.tools.base import ContainerTool


class Prettier(ContainerTool):
    name = "prettier"
    image = "node"
    # renovate: datasource=docker depName=node
    default_tag = "22.21.1-alpine3.22@sha256:b2358485e3e33bc3a33114d2b1bdb18cdbe4df01bd2b257198eb51beb1f026c5"

    def base(self) -> dagger.Container:
        return super().base().with_exec(["npm", "install", "-g", "prettier"])

    def check(self, source: dagger.Directory, target: str = "**/*.md") -> dagger.Container:
        return self.with_source(source).with_exec(["prettier", "--check", target])
