"""
Status effects - transient tags carried by the player.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Iterator


class StatusType(Enum):
    """Status effect types."""
    DEFENDING = auto()


class StatusExpiry(Enum):
    """When a status is removed automatically."""
    NEXT_HIT = auto()  # after the next incoming enemy attack resolves


@dataclass(frozen=True)
class StatusRule:
    """
    Behaviour of a status type.

    Attributes:
        expiry: When the status wears off
        exclusive_with: Statuses removed when this one is applied
    """
    expiry: StatusExpiry
    exclusive_with: frozenset[StatusType] = frozenset()


STATUS_RULES: dict[StatusType, StatusRule] = {
    StatusType.DEFENDING: StatusRule(expiry=StatusExpiry.NEXT_HIT),
}


class StatusSet:
    """
    Set of active statuses with the interactions from STATUS_RULES.

    Every status is transient: all of them are gone once a battle ends.
    """

    def __init__(self, statuses: Iterable[StatusType] = ()):
        self._active: set[StatusType] = set()
        for status in statuses:
            self.add(status)

    def add(self, status: StatusType) -> None:
        """Apply a status, dropping any it is exclusive with."""
        rule = STATUS_RULES[status]
        self._active -= rule.exclusive_with
        self._active.add(status)

    def remove(self, status: StatusType) -> bool:
        """Remove a status. Returns True if it was active."""
        if status in self._active:
            self._active.discard(status)
            return True
        return False

    def has(self, status: StatusType) -> bool:
        return status in self._active

    def expire(self, expiry: StatusExpiry) -> set[StatusType]:
        """
        Remove every status with the given expiry.

        Returns:
            The statuses that were removed
        """
        expired = {s for s in self._active if STATUS_RULES[s].expiry == expiry}
        self._active -= expired
        return expired

    def clear(self) -> None:
        """Remove all statuses (battle end, revival, reset)."""
        self._active.clear()

    def names(self) -> list[str]:
        """Lower-case status names, sorted, for display."""
        return sorted(s.name.lower() for s in self._active)

    def __contains__(self, status: object) -> bool:
        return status in self._active

    def __iter__(self) -> Iterator[StatusType]:
        return iter(sorted(self._active, key=lambda s: s.value))

    def __len__(self) -> int:
        return len(self._active)
