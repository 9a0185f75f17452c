"""In-memory stand-ins for the Dagger client, notifiers and deploy targets.

The fake mirrors the builder style of the SDK (every `with_*` call returns a
new container) and records what a pipeline asked the engine to do: images,
exec argument lists, mounts and publishes. Any exec whose command line
contains one of `fail_on` fails at evaluation time like a non-zero exit.
"""

from __future__ import annotations

import asyncio
from typing import Any

import dagger

from athame.core.domain.models import DeployResult, Notification
from athame.core.errors import NotificationError, ToolError

FAKE_DIGEST = "sha256:" + "ab" * 32


class FakeEngineError(dagger.DaggerError):
    pass


class FakeExecError(dagger.ExecError):
    """An exec failure shaped like the one the engine reports for a non-zero exit."""

    def __new__(cls, *args: Any, **kwargs: Any) -> FakeExecError:
        return Exception.__new__(cls)

    def __init__(self, command: list[str], *, exit_code: int = 1, stdout: str = "", stderr: str = "") -> None:
        Exception.__init__(self, command)
        self.command = command
        self.message = f"process {' '.join(command)!r} did not complete successfully: exit code {exit_code}"
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr

    def __str__(self) -> str:
        return self.message


class FakeSecret:
    def __init__(self, name: str, value: str, *, readable: bool = True) -> None:
        self.name = name
        self._value = value
        self._readable = readable

    async def plaintext(self) -> str:
        if not self._readable:
            raise FakeEngineError(f"secret {self.name} is not available")
        return self._value

    def __repr__(self) -> str:
        return f"FakeSecret({self.name!r})"


class FakeFile:
    def __init__(self, path: str, container: "FakeContainer | None" = None) -> None:
        self.path = path
        self.container = container


class FakeDirectory:
    def __init__(self, path: str = "/", container: "FakeContainer | None" = None) -> None:
        self.path = path
        self.container = container

    def directory(self, path: str) -> "FakeDirectory":
        return FakeDirectory(f"{self.path.rstrip('/')}/{path}")

    def file(self, path: str) -> FakeFile:
        return FakeFile(f"{self.path.rstrip('/')}/{path}")

    async def export(self, path: str, **kwargs: Any) -> str:
        if self.container is not None:
            client = self.container._client
            client.evaluated.append(self.container)
            client.exported.append((path, self))
        return path


class FakeHost:
    def directory(self, path: str, exclude: list[str] | None = None) -> FakeDirectory:
        return FakeDirectory(path)


class FakeGitRef:
    def __init__(self, url: str, ref: str) -> None:
        self.url = url
        self.ref = ref

    def tree(self) -> FakeDirectory:
        return FakeDirectory(f"{self.url}#{self.ref}")


class FakeGitRepo:
    def __init__(self, url: str) -> None:
        self.url = url

    def head(self) -> FakeGitRef:
        return FakeGitRef(self.url, "HEAD")

    def branch(self, name: str) -> FakeGitRef:
        return FakeGitRef(self.url, name)


class FakeService:
    def __init__(self, container: "FakeContainer", args: list[str] | None) -> None:
        self.container = container
        self.args = args


class FakeContainer:
    def __init__(self, client: "FakeClient", platform: Any = None, ops: tuple = ()) -> None:
        self._client = client
        self.platform = platform
        self.ops = ops

    def _with(self, *op: Any) -> "FakeContainer":
        return FakeContainer(self._client, self.platform, (*self.ops, op))

    def from_(self, address: str) -> "FakeContainer":
        return self._with("from", address)

    def without_entrypoint(self) -> "FakeContainer":
        return self._with("without_entrypoint")

    def with_entrypoint(self, args: list[str]) -> "FakeContainer":
        return self._with("entrypoint", list(args))

    def with_exec(self, args: list[str], **kwargs: Any) -> "FakeContainer":
        return self._with("exec", list(args))

    def with_workdir(self, path: str) -> "FakeContainer":
        return self._with("workdir", path)

    def with_user(self, name: str) -> "FakeContainer":
        return self._with("user", name)

    def with_env_variable(self, name: str, value: str, expand: bool = False) -> "FakeContainer":
        return self._with("env", name, value)

    def with_secret_variable(self, name: str, secret: Any) -> "FakeContainer":
        return self._with("secret_env", name, secret)

    def with_mounted_secret(self, path: str, secret: Any, **kwargs: Any) -> "FakeContainer":
        return self._with("secret_mount", path, secret)

    def with_mounted_directory(self, path: str, source: Any, **kwargs: Any) -> "FakeContainer":
        return self._with("mount", path, source)

    def with_mounted_file(self, path: str, source: Any, **kwargs: Any) -> "FakeContainer":
        return self._with("mount_file", path, source)

    def with_mounted_cache(self, path: str, cache: Any, **kwargs: Any) -> "FakeContainer":
        return self._with("cache", path, cache)

    def with_directory(self, path: str, source: Any, **kwargs: Any) -> "FakeContainer":
        return self._with("directory", path, source)

    def with_file(self, path: str, source: Any, **kwargs: Any) -> "FakeContainer":
        return self._with("file", path, source)

    def with_new_file(self, path: str, contents: str = "", **kwargs: Any) -> "FakeContainer":
        return self._with("new_file", path, contents)

    def with_exposed_port(self, port: int, **kwargs: Any) -> "FakeContainer":
        return self._with("port", port)

    def with_label(self, name: str, value: str) -> "FakeContainer":
        return self._with("label", name, value)

    def with_registry_auth(self, address: str, username: str, secret: Any) -> "FakeContainer":
        return self._with("registry_auth", address, username, secret)

    def with_service_binding(self, alias: str, service: Any) -> "FakeContainer":
        return self._with("service", alias, service)

    def as_service(self, args: list[str] | None = None, **kwargs: Any) -> FakeService:
        return FakeService(self, args)

    def as_tarball(self, **kwargs: Any) -> FakeFile:
        return FakeFile("image.tar")

    def file(self, path: str) -> FakeFile:
        return FakeFile(path, self)

    def directory(self, path: str) -> FakeDirectory:
        return FakeDirectory(path, self)

    # inspection helpers

    def ops_named(self, name: str) -> list[tuple]:
        return [op for op in self.ops if op[0] == name]

    @property
    def image(self) -> str | None:
        images = [op[1] for op in self.ops if op[0] == "from"]
        return images[-1] if images else None

    @property
    def execs(self) -> list[list[str]]:
        return [op[1] for op in self.ops if op[0] == "exec"]

    @property
    def env(self) -> dict[str, str]:
        return {op[1]: op[2] for op in self.ops if op[0] == "env"}

    @property
    def labels(self) -> dict[str, str]:
        return {op[1]: op[2] for op in self.ops if op[0] == "label"}

    async def stdout(self) -> str:
        self._client.evaluated.append(self)
        for args in self.execs:
            line = " ".join(args)
            delay = self._client.delay_for(line)
            if delay:
                await asyncio.sleep(delay)
            for needle in self._client.fail_on:
                if needle in line:
                    raise FakeExecError(args, stdout="partial output\n", stderr=f"{needle} failed\n")
        return self._client.output_for(self.execs)

    async def publish(self, address: str, platform_variants: list[Any] | None = None, **kwargs: Any) -> str:
        if self._client.fail_publish:
            raise FakeEngineError(f"failed to push {address}: unauthorized")
        self._client.published.append((address, list(platform_variants or []), self))
        return f"{address}@{FAKE_DIGEST}"


class FakeClient:
    def __init__(
        self,
        *,
        fail_on: tuple[str, ...] = (),
        delays: dict[str, float] | None = None,
        outputs: dict[str, str] | None = None,
        fail_publish: bool = False,
    ) -> None:
        self.fail_on = list(fail_on)
        self.delays = delays or {}
        self.outputs = outputs or {}
        self.fail_publish = fail_publish
        self.evaluated: list[FakeContainer] = []
        self.published: list[tuple[str, list[Any], FakeContainer]] = []
        self.exported: list[tuple[str, FakeDirectory]] = []

    def delay_for(self, line: str) -> float:
        return max((d for needle, d in self.delays.items() if needle in line), default=0.0)

    def output_for(self, execs: list[list[str]]) -> str:
        for args in reversed(execs):
            line = " ".join(args)
            for needle, output in self.outputs.items():
                if needle in line:
                    return output
        return "ok\n"

    def container(self, platform: Any = None) -> FakeContainer:
        return FakeContainer(self, platform)

    def host(self) -> FakeHost:
        return FakeHost()

    def set_secret(self, name: str, value: str) -> FakeSecret:
        return FakeSecret(name, value)

    def cache_volume(self, key: str) -> str:
        return f"cache:{key}"

    def git(self, url: str, **kwargs: Any) -> FakeGitRepo:
        return FakeGitRepo(url)

    def evaluated_lines(self) -> list[str]:
        return [" ".join(args) for ctr in self.evaluated for args in ctr.execs]


class RecordingNotifier:
    def __init__(self) -> None:
        self.sent: list[Notification] = []

    async def send(self, notification: Notification) -> str:
        self.sent.append(notification)
        return f"Notification sent successfully to {notification.topic}"

    @property
    def titles(self) -> list[str | None]:
        return [n.title for n in self.sent]


class FailingNotifier:
    def __init__(self) -> None:
        self.attempts = 0

    async def send(self, notification: Notification) -> str:
        self.attempts += 1
        raise NotificationError("ntfy returned non-success status: 503")


class FakeTarget:
    """Deploy target recording the address it received."""

    def __init__(self, name: str, label: str, *, fail: bool = False, delay: float = 0.0) -> None:
        self.name = name
        self.label = label
        self.fail = fail
        self.delay = delay
        self.received: list[str] = []
        self.finished = False

    @property
    def url(self) -> str:
        return f"https://{self.name}.example.com"

    def completion_message(self) -> tuple[str, bool]:
        return f"Deployed to {self.label}.", False

    async def deploy(self, image: str) -> DeployResult:
        self.received.append(image)
        if self.delay:
            await asyncio.sleep(self.delay)
        self.finished = True
        if self.fail:
            raise ToolError(self.name, "deploy rejected", exit_code=1)
        return DeployResult(target=self.name, image=image, output="deployed", url=self.url)
