"""Fly.io deploy target."""

from __future__ import annotations

import dagger

from athame.adapters.tools.flyio import Flyio
from athame.core.domain.models import DeployResult


class FlyioTarget:
    name = "flyio"
    label = "Fly.io"

    def __init__(
        self,
        client: dagger.Client,
        *,
        app: str,
        token: dagger.Secret,
        region: str = "arn",
        internal_port: int = 80,
    ) -> None:
        self._tool = Flyio(client)
        self.app = app
        self.token = token
        self.region = region or "arn"
        self.internal_port = internal_port

    @property
    def url(self) -> str:
        return f"https://{self.app}.fly.dev"

    def completion_message(self) -> tuple[str, bool]:
        return f"Deployed to Fly.io.\n\n**App:** {self.app}", True

    async def deploy(self, image: str) -> DeployResult:
        output = await self._tool.deploy(
            self.app,
            image,
            self.token,
            primary_region=self.region,
            internal_port=self.internal_port,
        )
        return DeployResult(target=self.name, image=image, output=output, url=self.url)
