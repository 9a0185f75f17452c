"""Pipeline phases.

Phases have a fixed successor order: a pipeline may skip phases but never
runs them backwards.
"""

from __future__ import annotations

from enum import Enum


class Phase(str, Enum):
    """Stages of a CI pipeline, declared in execution order."""

    VERIFY = "verify"
    BUILD = "build"
    SCAN = "scan"
    PUBLISH = "publish"
    DEPLOY = "deploy"

    @classmethod
    def ordered(cls) -> list["Phase"]:
        return list(cls)

    @property
    def position(self) -> int:
        return Phase.ordered().index(self)

    def successor(self) -> "Phase | None":
        """Return the next phase, or None for the last one."""

        phases = Phase.ordered()
        idx = phases.index(self)
        return phases[idx + 1] if idx + 1 < len(phases) else None

    def precedes(self, other: "Phase") -> bool:
        return self.position < other.position

    def label(self) -> str:
        """Human readable label for tables and logging."""

        return self.value.capitalize()
