"""MkDocs Material: Material Design theme for the MkDocs static site generator."""

from __future__ import annotations

import dagger

from athame.adapters.tools.base import ContainerTool


class MkdocsMaterial(ContainerTool):
    name = "mkdocs-material"
    image = "squidfunk/mkdocs-material"
    # renovate: datasource=docker depName=squidfunk/mkdocs-material
    default_tag = "9.6.22@sha256:f5c556a6d30ce0c1c0df10e3c38c79bbcafdaea4b1c1be366809d0d4f6f9d57f"

    def build(self, source: dagger.Directory) -> dagger.Directory:
        """Build the site in `source` and return the generated `site/` directory."""

        return self.with_source(source, "/docs").with_exec(["mkdocs", "build"]).directory("/docs/site")
