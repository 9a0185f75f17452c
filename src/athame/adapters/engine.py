"""Dagger engine adapter.

The container engine is an opaque collaborator: this module opens the
connection and turns engine failures into `ToolError`, so nothing above the
adapters layer has to know about Dagger's exception types.
"""

from __future__ import annotations

import sys
from collections.abc import AsyncIterator, Sequence
from contextlib import AsyncExitStack, asynccontextmanager

import dagger
from loguru import logger
from pydantic import SecretStr

from athame.core.config import AppSettings
from athame.core.errors import CredentialError, ToolError

DEFAULT_EXCLUDE: tuple[str, ...] = (".git", ".venv", "node_modules", "__pycache__", "site")


@asynccontextmanager
async def open_engine(settings: AppSettings | None = None) -> AsyncIterator[dagger.Client]:
    """Open a Dagger session and yield its client."""

    settings = settings or AppSettings()
    config = dagger.Config(log_output=sys.stderr if settings.engine_log_output else None)

    stack = AsyncExitStack()
    try:
        client = await stack.enter_async_context(dagger.Connection(config))
    except dagger.DaggerError as exc:
        raise ToolError("dagger", f"could not connect to the engine: {exc}") from exc

    logger.debug("Connected to the Dagger engine")
    async with stack:
        yield client


def host_directory(
    client: dagger.Client,
    path: str = ".",
    *,
    exclude: Sequence[str] = DEFAULT_EXCLUDE,
) -> dagger.Directory:
    return client.host().directory(path, exclude=list(exclude))


def secret_from(
    client: dagger.Client,
    name: str,
    value: SecretStr | str | None,
    *,
    required: bool = False,
) -> dagger.Secret | None:
    """Register `value` as a Dagger secret (None when unset and optional)."""

    if value is None:
        if required:
            raise CredentialError(f"missing secret: {name}")
        return None
    plaintext = value.get_secret_value() if isinstance(value, SecretStr) else value
    if not plaintext:
        if required:
            raise CredentialError(f"empty secret: {name}")
        return None
    return client.set_secret(name, plaintext)


async def read_secret(secret: dagger.Secret, *, name: str) -> str:
    try:
        return await secret.plaintext()
    except dagger.DaggerError as exc:
        raise CredentialError(f"failed to read {name}: {exc}") from exc


async def stdout(container: dagger.Container, *, tool: str) -> str:
    """Run the container's pending execs and return stdout."""

    logger.debug("Evaluating {} container", tool)
    try:
        return await container.stdout()
    except dagger.ExecError as exc:
        message = (exc.stderr or "").strip() or exc.message
        raise ToolError(
            tool,
            message,
            command=exc.command,
            exit_code=exc.exit_code,
            stdout=exc.stdout,
            stderr=exc.stderr,
        ) from exc
    except dagger.DaggerError as exc:
        raise ToolError(tool, str(exc)) from exc


async def export_directory(directory: dagger.Directory, path: str, *, tool: str) -> str:
    """Write `directory` to `path` on the host; returns the host path."""

    try:
        return await directory.export(path)
    except dagger.DaggerError as exc:
        raise ToolError(tool, f"export to {path} failed: {exc}") from exc
