"""Render deploy target (deploy hook over HTTP)."""

from __future__ import annotations

from urllib.parse import quote

import dagger
import httpx

from athame.adapters import engine
from athame.adapters.http_client import build_async_client
from athame.core.config import AppSettings
from athame.core.domain.models import DeployResult
from athame.core.errors import ToolError


class RenderTarget:
    """Triggers a Render deploy hook.

    The hook URL is itself the credential, so it stays a secret until the
    request is made. With `with_image` the hook deploys that exact image
    (image-backed services).
    """

    name = "render"
    label = "Render"

    def __init__(
        self,
        deploy_hook_url: dagger.Secret,
        *,
        service_name: str,
        with_image: bool = False,
        settings: AppSettings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.deploy_hook_url = deploy_hook_url
        self.service_name = service_name
        self.with_image = with_image
        self.settings = settings or AppSettings()
        self._client = client

    @property
    def url(self) -> str:
        return f"https://{self.service_name}.onrender.com"

    def completion_message(self) -> tuple[str, bool]:
        return "Deployed to Render.", False

    async def trigger(self, hook_url: str) -> str:
        try:
            if self._client is not None:
                response = await self._client.post(hook_url)
            else:
                async with build_async_client(self.settings) as client:
                    response = await client.post(hook_url)
        except httpx.HTTPError as exc:
            raise ToolError("render", f"failed to trigger deploy: {exc}") from exc
        if not response.is_success:
            raise ToolError("render", f"deploy hook returned status {response.status_code}")
        return f"Deploy triggered successfully. Status: {response.status_code} {response.reason_phrase}"

    async def deploy(self, image: str) -> DeployResult:
        hook_url = await engine.read_secret(self.deploy_hook_url, name="deploy hook URL")
        if self.with_image:
            hook_url = f"{hook_url}&imgURL={quote(image, safe='')}"
        output = await self.trigger(hook_url)
        return DeployResult(target=self.name, image=image, output=output, url=self.url)
