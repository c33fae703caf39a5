"""Port for generated market and due-date alerts."""

from dataclasses import dataclass, field
from typing import Protocol


@dataclass(frozen=True)
class AlertCandidate:
    """Raw alert proposed by a provider, before conversion."""

    title: str
    amount: object
    due_date: str
    type: str
    sources: list[tuple[str, str]] = field(default_factory=list)


class AlertProviderPort(Protocol):
    """Port fetching alert candidates from an external generator."""

    def fetch_alerts(self) -> list[AlertCandidate]:
        """Return freshly generated alert candidates."""


__all__ = ["AlertCandidate", "AlertProviderPort"]
