"""uv, the Python package manager."""

from __future__ import annotations

import dagger

from athame.adapters.tools.base import ContainerTool


class Uv(ContainerTool):
    name = "uv"
    image = "ghcr.io/astral-sh/uv"
    # renovate: datasource=docker depName=ghcr.io/astral-sh/uv
    default_tag = "0.9.7-alpine3.22@sha256:ce2e7e691797f9bd2ee1b15fe59d272cb26d9662eda746e0fc1542c74a558064"

    def tool_install(self, name: str, version: str = "") -> dagger.Container:
        """Install a Python tool; `version` is a constraint such as "==0.5.0"."""

        spec = f"{name}{version}" if version else name
        return self.base().with_exec(["uv", "tool", "install", spec])
