"""Session-scoped state shared by every lookup of one dialog."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class OrchestratorState:
    """Mutable flags driven by UI events plus the lookup generation counter.

    ``half_locked`` is set while a text selection drag is in progress and
    ``aimed`` while a pinned lookup owns the panel.
    """

    last_key: Optional[str] = None
    suspended: bool = False
    aimed: bool = False
    half_locked: bool = False
    latest_generation: int = 0

    def next_generation(self) -> int:
        self.latest_generation += 1
        return self.latest_generation

    def is_current(self, generation: int) -> bool:
        return generation == self.latest_generation and not self.suspended


__all__ = ["OrchestratorState"]
