"""release-please: automated releases based on conventional commits."""

from __future__ import annotations

import dagger

from athame.adapters.tools.base import ContainerTool
from athame.adapters.tools.node import Node


class ReleasePlease(ContainerTool):
    name = "release-please"
    image = Node.image
    default_tag = Node.default_tag

    def __init__(self, client: dagger.Client, source: dagger.Directory, image_tag: str | None = None) -> None:
        super().__init__(client, image_tag)
        self.source = source

    def base(self) -> dagger.Container:
        return Node(self._client, self.source, self.image_tag).base().with_exec(
            ["npm", "install", "-g", "release-please"]
        )

    def manifest(self, token: dagger.Secret, repo_url: str) -> dagger.Container:
        """Open release PRs and create releases from release-please-config.json.

        The token is expanded by the shell from a secret variable.
        """

        return (
            self.base()
            .with_secret_variable("GITHUB_TOKEN", token)
            .with_env_variable("REPO_URL", repo_url)
            .with_exec(["sh", "-c", 'release-please manifest-pr --token="$GITHUB_TOKEN" --repo-url="$REPO_URL"'])
            .with_exec(["sh", "-c", 'release-please manifest-release --token="$GITHUB_TOKEN" --repo-url="$REPO_URL"'])
        )
