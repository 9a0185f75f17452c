"""mise (polyglot runtime manager) on Arch Linux."""

from __future__ import annotations

import dagger

from athame.adapters.tools.archlinux import Archlinux
from athame.adapters.tools.base import ContainerTool

SHIMS_PATH = "/root/.local/share/mise/shims"


class Mise(ContainerTool):
    name = "mise"
    image = Archlinux.image
    default_tag = Archlinux.default_tag

    def base(self) -> dagger.Container:
        return Archlinux(self._client, self.image_tag).with_packages(["mise"])

    def use(self, tool: str) -> dagger.Container:
        """Install `tool` globally and put mise shims on PATH."""

        return (
            self.base()
            .with_exec(["mise", "use", "--global", tool])
            .with_env_variable("PATH", f"{SHIMS_PATH}:$PATH", expand=True)
        )
