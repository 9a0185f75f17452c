"""terraform-docs."""

from __future__ import annotations

import dagger

from athame.adapters.tools.base import ContainerTool


class TerraformDocs(ContainerTool):
    name = "terraform-docs"
    image = "quay.io/terraform-docs/terraform-docs"
    # renovate: datasource=docker depName=quay.io/terraform-docs/terraform-docs
    default_tag = "0.20.0@sha256:37329e2dc2518e7f719a986a3954b10771c3fe000f50f83fd4d98d489df2eae2"

    def markdown(self, source: dagger.Directory, output_file: str = "README.md") -> dagger.Directory:
        """Module directory with generated markdown docs written to `output_file`."""

        return (
            self.with_source(source)
            .with_exec(["terraform-docs", "markdown", ".", f"--output-file={output_file}", "--output-mode=replace"])
            .directory("/src")
        )
