"""asdf version manager."""

from __future__ import annotations

import dagger

from athame.adapters.tools.base import ContainerTool


class Asdf(ContainerTool):
    name = "asdf"
    image = "asdfvm/asdf"
    # renovate: datasource=docker depName=asdfvm/asdf
    default_tag = "alpine-v0.17.0@sha256:9744fdf066a668d477186560e2680f87bc935d6f1f17d020c00db83e1006d187"

    def install_plugin(self, plugin_name: str, plugin_url: str, version: str = "latest") -> dagger.Container:
        """Add a plugin, install `version` and set it globally."""

        return self.plugin(self.base(), plugin_name, plugin_url, version)

    @staticmethod
    def plugin(
        container: dagger.Container,
        plugin_name: str,
        plugin_url: str,
        version: str = "latest",
    ) -> dagger.Container:
        return (
            container.with_exec(["asdf", "plugin", "add", plugin_name, plugin_url])
            .with_exec(["asdf", "install", plugin_name, version])
            .with_exec(["asdf", "set", plugin_name, version])
        )
