"""Domain models (Pydantic v2).

These models describe *what* a pipeline produced (image references, task
outcomes, phase results, notifications), not *how* the containers ran.
The domain knows nothing about Dagger, HTTP or the CLI.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field

_DIGEST_RE = re.compile(r"^sha256:[0-9a-f]{64}$")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ImageRef(BaseModel):
    """A fully qualified image reference: `registry/path[:tag][@digest]`."""

    registry: str = Field(..., min_length=1)
    path: str = Field(..., min_length=1, description="Repository path below the registry.")
    tag: str | None = None
    digest: str | None = None

    @classmethod
    def parse(cls, reference: str) -> "ImageRef":
        """Parse a reference such as `ghcr.io/user/athame/site:latest@sha256:...`."""

        ref = reference.strip()
        if not ref:
            raise ValueError("empty image reference")

        digest = None
        if "@" in ref:
            ref, digest = ref.split("@", 1)
            if not _DIGEST_RE.match(digest):
                raise ValueError(f"invalid digest in image reference: {reference!r}")

        if "/" not in ref:
            raise ValueError(f"image reference has no registry: {reference!r}")
        registry, remainder = ref.split("/", 1)

        tag = None
        # A colon after the last slash separates the tag (registry ports come before it).
        last = remainder.rsplit("/", 1)[-1]
        if ":" in last:
            remainder, tag = remainder.rsplit(":", 1)
        if not remainder:
            raise ValueError(f"image reference has no repository path: {reference!r}")

        return cls(registry=registry, path=remainder, tag=tag, digest=digest)

    @property
    def repository(self) -> str:
        return f"{self.registry}/{self.path}"

    def with_registry(self, registry: str, *, prefix: str = "") -> "ImageRef":
        """Return the same image under another registry (optionally below `prefix`)."""

        path = f"{prefix.strip('/')}/{self.path}" if prefix else self.path
        return self.model_copy(update={"registry": registry, "path": path})

    def __str__(self) -> str:
        out = self.repository
        if self.tag:
            out += f":{self.tag}"
        if self.digest:
            out += f"@{self.digest}"
        return out


class Priority(str, Enum):
    """ntfy priorities."""

    MIN = "min"
    LOW = "low"
    DEFAULT = "default"
    HIGH = "high"
    URGENT = "urgent"


class Notification(BaseModel):
    """A one-way notification (topic + message + presentation metadata)."""

    topic: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)
    title: str | None = None
    priority: Priority | None = None
    tags: list[str] = Field(default_factory=list)
    markdown: bool = False
    actions: str | None = Field(
        default=None,
        description="Action buttons, e.g. 'view, View Site, https://example.com'.",
    )
    server: str | None = Field(
        default=None,
        description="Overrides the notifier's default server when set.",
    )


class TaskOutcome(BaseModel):
    """Result of one task inside a concurrent fan-out."""

    name: str = Field(..., min_length=1)
    ok: bool
    output: str | None = None
    error: str | None = None
    duration_seconds: float = Field(default=0.0, ge=0.0)


class DeployResult(BaseModel):
    """What a deploy target reported after accepting an image."""

    target: str = Field(..., min_length=1)
    image: str = Field(..., min_length=1)
    output: str = ""
    url: str | None = None


class PhaseResult(BaseModel):
    """One executed phase of a pipeline run."""

    phase: str
    ok: bool = False
    started_at: datetime = Field(default_factory=_utc_now)
    duration_seconds: float = Field(default=0.0, ge=0.0)
    tasks: list[TaskOutcome] = Field(default_factory=list)
    error: str | None = None


class PipelineReport(BaseModel):
    """Aggregate of a pipeline invocation, suitable for export."""

    pipeline: str = Field(..., min_length=1)
    started_at: datetime = Field(default_factory=_utc_now)
    finished_at: datetime | None = None
    phases: list[PhaseResult] = Field(default_factory=list)
    address: str | None = Field(
        default=None,
        description="Published image address (with digest) when publish succeeded.",
    )
    deployments: list[DeployResult] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return bool(self.phases) and all(p.ok for p in self.phases)

    def phase_names(self) -> list[str]:
        return [p.phase for p in self.phases]
