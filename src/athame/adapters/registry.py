"""Multi-platform image assembly and registry publishing."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone

import dagger
from loguru import logger

from athame.core.errors import PublishError

# renovate: datasource=docker depName=nginx
NGINX_IMAGE = "nginx:1.27.5-alpine3.21@sha256:65645c7bb6a0661892a8b03b89d0743208a18dd2f3f17a54ef4b76fb8e2f2a10"
NGINX_HTML = "/usr/share/nginx/html"


def build_site_variants(
    client: dagger.Client,
    site: dagger.Directory,
    *,
    image_name: str,
    tag: str,
    source_label: str,
    platforms: Sequence[str],
) -> list[dagger.Container]:
    """One nginx container per platform serving `site` on port 80."""

    created = datetime.now(timezone.utc).isoformat()
    return [
        client.container(platform=dagger.Platform(platform))
        .from_(NGINX_IMAGE)
        .with_directory(NGINX_HTML, site)
        .with_exposed_port(80)
        .with_label("org.opencontainers.image.title", image_name)
        .with_label("org.opencontainers.image.version", tag)
        .with_label("org.opencontainers.image.created", created)
        .with_label("org.opencontainers.image.source", source_label)
        for platform in platforms
    ]


def image_address(registry: str, username: str, namespace: str, image_name: str, tag: str) -> str:
    return f"{registry}/{username}/{namespace}/{image_name}:{tag}"


async def publish_variants(
    client: dagger.Client,
    address: str,
    variants: Sequence[dagger.Container],
    *,
    registry: str,
    username: str,
    token: dagger.Secret,
) -> str:
    """Push `variants` as one multi-platform image; returns the address with digest."""

    logger.info("Publishing {} platform variant(s) to {}", len(variants), address)
    try:
        published = await (
            client.container()
            .with_registry_auth(registry, username, token)
            .publish(address, platform_variants=list(variants))
        )
    except dagger.DaggerError as exc:
        raise PublishError(f"failed to publish to GHCR: {exc}") from exc
    logger.info("Published {}", published)
    return published
