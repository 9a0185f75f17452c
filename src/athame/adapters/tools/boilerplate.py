"""Gruntwork boilerplate, installed through asdf."""

from __future__ import annotations

import dagger

from athame.adapters.tools.asdf import Asdf
from athame.adapters.tools.base import ContainerTool

PLUGIN_URL = "https://github.com/gruntwork-io/asdf-boilerplate.git"


class Boilerplate(ContainerTool):
    name = "boilerplate"
    image = Asdf.image
    default_tag = Asdf.default_tag

    def __init__(
        self,
        client: dagger.Client,
        # renovate: datasource=github-releases depName=gruntwork-io/boilerplate
        version: str = "0.10.1",
        image_tag: str | None = None,
    ) -> None:
        super().__init__(client, image_tag)
        self.version = version

    def base(self) -> dagger.Container:
        ctr = (
            Asdf(self._client, self.image_tag)
            .base()
            .with_user("root")
            .with_exec(["apk", "add", "--no-cache", "git", "openssh-client"])
            .with_user("asdf")
        )
        return Asdf.plugin(ctr, "boilerplate", PLUGIN_URL, self.version)

    def render(self, template: dagger.Directory, output_folder: str, variables: dict[str, str]) -> dagger.Directory:
        args = ["boilerplate", "--template-url", "/template", "--output-folder", output_folder]
        for key, value in variables.items():
            args += ["--var", f"{key}={value}"]
        args.append("--non-interactive")
        return (
            self.base()
            .with_mounted_directory("/template", template)
            .with_workdir("/work")
            .with_exec(args)
            .directory(f"/work/{output_folder}")
        )
