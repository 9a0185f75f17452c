"""Apprise: send notifications to most popular notification services.

The service URL (e.g. `discord://WEBHOOK_ID/WEBHOOK_TOKEN`) is a secret; it
reaches the container as an environment variable and is expanded by the
shell, never interpolated into the command line.
"""

from __future__ import annotations

import dagger

from athame.adapters.tools.base import ContainerTool


class Apprise(ContainerTool):
    name = "apprise"
    image = "caronc/apprise"
    # renovate: datasource=docker depName=caronc/apprise
    default_tag = "1.2.2@sha256:0d74af8c1df9cf1de91f20f46d00ddee3a3efa15be179f9dbbe8a0f99d64268f"

    def send(self, title: str, body: str, service: dagger.Secret) -> dagger.Container:
        return (
            self.base()
            .with_secret_variable("APPRISE_SERVICE_URL", service)
            .with_env_variable("APPRISE_TITLE", title)
            .with_env_variable("APPRISE_BODY", body)
            .with_exec(
                [
                    "sh",
                    "-c",
                    'apprise -t "$APPRISE_TITLE" -b "$APPRISE_BODY" "$APPRISE_SERVICE_URL"',
                ]
            )
        )
