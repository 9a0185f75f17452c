"""Error taxonomy.

Every failure raised by tools, notifiers, deploy targets and pipelines
derives from `AthameError`, so the CLI can turn any of them into a clean
message and a non-zero exit status.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from athame.core.domain.models import TaskOutcome
    from athame.core.domain.phase import Phase


class AthameError(Exception):
    """Base class for every error raised by athame."""


class ToolError(AthameError):
    """A wrapped CLI exited non-zero, or the engine could not run it."""

    def __init__(
        self,
        tool: str,
        message: str,
        *,
        command: Sequence[str] | None = None,
        exit_code: int | None = None,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        self.tool = tool
        self.command = list(command or [])
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr
        detail = f"{tool}: {message}"
        if exit_code is not None:
            detail = f"{tool} exited with code {exit_code}: {message}"
        super().__init__(detail)


class CredentialError(AthameError):
    """A required secret is missing or could not be read."""


class NotificationError(AthameError):
    """A notification could not be delivered."""


class TaskGroupError(AthameError):
    """One or more concurrent tasks failed.

    `first` is the failure that happened first in time; `outcomes` holds the
    result of every task, including the ones that succeeded.
    """

    def __init__(
        self,
        failures: Sequence[tuple[str, BaseException]],
        *,
        outcomes: Sequence[TaskOutcome] = (),
    ) -> None:
        if not failures:
            raise ValueError("TaskGroupError requires at least one failure")
        self.failures = list(failures)
        self.outcomes = list(outcomes)
        name, exc = self.failures[0]
        suffix = ""
        if len(self.failures) > 1:
            suffix = f" (+{len(self.failures) - 1} more)"
        super().__init__(f"{name}: {exc}{suffix}")

    @property
    def first(self) -> BaseException:
        return self.failures[0][1]

    @property
    def failed_names(self) -> list[str]:
        return [name for name, _ in self.failures]


class PublishError(AthameError):
    """Publishing an image to a registry failed."""


class ScanError(AthameError):
    """A vulnerability scan failed before publishing."""


class DeployError(AthameError):
    """A deploy target rejected the image.

    `address` is the image that was already published; publishing is never
    rolled back.
    """

    def __init__(self, message: str, *, target: str | None = None, address: str | None = None) -> None:
        self.target = target
        self.address = address
        super().__init__(message)


class PipelineError(AthameError):
    """A phase failed and the pipeline stopped."""

    def __init__(self, phase: Phase, message: str) -> None:
        self.phase = phase
        super().__init__(message)


class PhaseOrderError(AthameError):
    """A phase was started out of order or after a failed phase."""
