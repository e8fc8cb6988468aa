"""Protocols for the orchestrator's collaborators."""

from typing import Any, Protocol


class CrisisStore(Protocol):
    """Interface for persisting crisis records."""

    async def create(self, record: dict[str, Any]) -> str:
        """Persist a record.

        Args:
            record: JSON-compatible crisis record.

        Returns:
            Identifier of the new record.
        """
        ...


class BatchScheduler(Protocol):
    """Interface for pacing sequential batch processing."""

    async def wait(self) -> None:
        """Block until the next country may start."""
        ...
