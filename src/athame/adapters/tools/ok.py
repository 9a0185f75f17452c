"""oslokommune/ok, installed through mise."""

from __future__ import annotations

import dagger

from athame.adapters.tools.base import ContainerTool
from athame.adapters.tools.mise import Mise


class Ok(ContainerTool):
    name = "ok"
    image = Mise.image
    default_tag = Mise.default_tag

    def base(self) -> dagger.Container:
        return Mise(self._client, self.image_tag).use("ubi:oslokommune/ok")

    async def version(self) -> str:
        return await self.run(self.base().with_exec(["ok", "version"]))
