"""Mermaid CLI: render diagrams from Mermaid syntax."""

from __future__ import annotations

import posixpath

import dagger

from athame.adapters.tools.base import ContainerTool


class MermaidCli(ContainerTool):
    name = "mermaid-cli"
    image = "minlag/mermaid-cli"
    # renovate: datasource=docker depName=minlag/mermaid-cli
    default_tag = "11.12.0@sha256:bad64c9d9ad917c8dfbe9d9e9c162b96f6615ff019b37058638d16eb27ce7783"

    def render(self, source: dagger.Directory, input_path: str, output_path: str) -> dagger.File:
        """Render `input_path` (relative to `source`) to `output_path` (.svg, .png or .pdf)."""

        out = posixpath.join("/src", output_path)
        return (
            self.with_source(source)
            .with_user("root")
            .with_exec(["mmdc", "-p", "/puppeteer-config.json", "-i", input_path, "-o", out])
            .file(out)
        )
