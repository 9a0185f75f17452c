"""GitHub CLI (gh), installed through asdf."""

from __future__ import annotations

import dagger

from athame.adapters.tools.asdf import Asdf
from athame.adapters.tools.base import ContainerTool

PLUGIN_URL = "https://github.com/bartlomiejdanek/asdf-github-cli.git"


class GithubCli(ContainerTool):
    name = "gh"
    image = Asdf.image
    default_tag = Asdf.default_tag

    def __init__(
        self,
        client: dagger.Client,
        # renovate: datasource=github-releases depName=cli/cli
        version: str = "2.71.0",
        image_tag: str | None = None,
    ) -> None:
        super().__init__(client, image_tag)
        self.version = version

    def base(self) -> dagger.Container:
        return Asdf(self._client, self.image_tag).install_plugin("github-cli", PLUGIN_URL, self.version)

    def with_token(self, token: dagger.Secret) -> dagger.Container:
        return self.base().with_secret_variable("GITHUB_TOKEN", token)

    async def list_repos(self, token: dagger.Secret, limit: int = 100) -> str:
        return await self.run(self.with_token(token).with_exec(["gh", "repo", "list", "--limit", str(limit)]))
