"""HTTPie, a user-friendly command-line HTTP client."""

from __future__ import annotations

from collections.abc import Sequence

import dagger

from athame.adapters.tools.base import ContainerTool


class Httpie(ContainerTool):
    name = "httpie"
    image = "alpine/httpie"
    # renovate: datasource=docker depName=alpine/httpie
    default_tag = "3.2.4@sha256:cd81ee5ddd4970cc3175fddf1fdfad8df909a473eb5f82547e37ab510ed62fc5"

    def request(self, method: str, url: str, items: Sequence[str] = ()) -> dagger.Container:
        """`http --check-status METHOD URL [items...]`; 4xx/5xx make the exec fail."""

        return self.base().with_exec(
            ["http", "--ignore-stdin", "--check-status", method.upper(), url, *items]
        )
