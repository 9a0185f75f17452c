"""Terraform, plus terraform-local (tflocal) for LocalStack."""

from __future__ import annotations

import dagger

from athame.adapters.tools.base import ContainerTool


class Terraform(ContainerTool):
    name = "terraform"
    image = "hashicorp/terraform"
    # renovate: datasource=docker depName=hashicorp/terraform
    default_tag = "1.13.4@sha256:eebc943e69008b6d6d986800087164274d8c92d83db8d53fb9baa4ccff309884"

    def terraform_local(self) -> dagger.Container:
        """Terraform with the `tflocal` wrapper installed."""

        return (
            self.base()
            .with_exec(["apk", "add", "--no-cache", "python3", "py3-pip"])
            .with_exec(["pip", "install", "--break-system-packages", "terraform-local"])
        )

    def plan(self, source: dagger.Directory) -> dagger.Container:
        return self.with_source(source).with_exec(["terraform", "init"]).with_exec(["terraform", "plan"])
