"""Deploy target contract.

Rules:
- `deploy` receives the published image address exactly as the registry
  returned it; any registry rewriting is the target's own business.
- Targets are independent of each other: no shared state between them.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from athame.core.domain.models import DeployResult


@runtime_checkable
class DeployTarget(Protocol):
    name: str
    label: str

    @property
    def url(self) -> str | None:
        """Public URL of the deployed service, when it can be derived."""

        ...

    def completion_message(self) -> tuple[str, bool]:
        """Notification body for a successful deploy and whether it is markdown."""

        ...

    async def deploy(self, image: str) -> DeployResult:
        ...
