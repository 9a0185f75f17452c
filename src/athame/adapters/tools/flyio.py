"""Deploy containers to fly.io with a minimal generated configuration."""

from __future__ import annotations

from pathlib import Path

import dagger
from jinja2 import Environment, FileSystemLoader, StrictUndefined

from athame.adapters.tools.alpine import Alpine
from athame.adapters.tools.base import ContainerTool

_TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"

FLYCTL = "/root/.fly/bin/flyctl"


def render_fly_config(*, app: str, image: str, primary_region: str, internal_port: int) -> str:
    """Render `fly.toml` for an image-based app."""

    env = Environment(
        loader=FileSystemLoader(str(_TEMPLATES_DIR)),
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )
    template = env.get_template("fly.toml.j2")
    return template.render(
        app=app,
        image=image,
        primary_region=primary_region,
        internal_port=internal_port,
    )


class Flyio(ContainerTool):
    name = "flyio"
    image = Alpine.image
    default_tag = Alpine.default_tag

    def fly_base(self, token: dagger.Secret) -> dagger.Container:
        """Alpine with flyctl installed and the API token exported."""

        return (
            Alpine(self._client, self.image_tag)
            .with_packages(["curl"])
            .with_exec(["sh", "-c", "curl -L https://fly.io/install.sh | sh"])
            .with_secret_variable("FLY_API_TOKEN", token)
        )

    async def deploy(
        self,
        app: str,
        image: str,
        token: dagger.Secret,
        primary_region: str = "arn",
        internal_port: int = 8080,
    ) -> str:
        config = render_fly_config(
            app=app,
            image=image,
            primary_region=primary_region,
            internal_port=internal_port,
        )
        return await self.run(
            self.fly_base(token)
            .with_new_file("/fly.toml", contents=config)
            .with_exec([FLYCTL, "deploy", "--config", "/fly.toml"])
        )
