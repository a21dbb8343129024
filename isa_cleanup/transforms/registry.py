"""TransformRegistry: named, priority-ordered catalog of cleanup transforms.

A registry is an ordinary object built once at composition time (see
``isa_cleanup.pipelines.default``) and read-only afterwards. Lower priority
runs first; equal priorities keep registration order.
"""

from __future__ import annotations

from dataclasses import dataclass

from isa_cleanup.core.status import TransformRegistrationError
from isa_cleanup.transforms.base import Transform


@dataclass(frozen=True)
class RegisteredTransform:
    name: str
    priority: int
    transform: Transform
    sequence: int


class TransformRegistry:
    """Dict-backed transform catalog with priority ordering."""

    def __init__(self) -> None:
        self._entries: dict[str, RegisteredTransform] = {}

    def register(self, name: str, priority: int, transform: Transform) -> RegisteredTransform:
        """Register ``transform`` under ``name``. Duplicate names are fatal."""
        if name in self._entries:
            raise TransformRegistrationError(f"Duplicate transform registration: {name}")
        if not isinstance(transform, Transform):
            raise TransformRegistrationError(
                f"Object registered as {name!r} does not implement the Transform protocol"
            )
        if isinstance(priority, bool) or not isinstance(priority, int):
            raise TransformRegistrationError(
                f"Priority of {name!r} must be an int, got {type(priority).__name__}"
            )
        entry = RegisteredTransform(
            name=name,
            priority=priority,
            transform=transform,
            sequence=len(self._entries),
        )
        self._entries[name] = entry
        return entry

    def get(self, name: str) -> RegisteredTransform:
        try:
            return self._entries[name]
        except KeyError:
            raise TransformRegistrationError(f"No transform registered as {name!r}") from None

    def all_by_priority(self) -> list[RegisteredTransform]:
        """All entries, ascending priority, ties in registration order."""
        return sorted(self._entries.values(), key=lambda e: (e.priority, e.sequence))

    def transforms(self) -> list[Transform]:
        return [e.transform for e in self.all_by_priority()]

    def names(self) -> list[str]:
        return [e.name for e in self.all_by_priority()]

    def select(
        self,
        only: list[str] | None = None,
        skip: list[str] | None = None,
    ) -> list[RegisteredTransform]:
        """Ordered entries restricted to ``only`` and without ``skip``.

        Unknown names in either list raise TransformRegistrationError.
        """
        for name in list(only or []) + list(skip or []):
            self.get(name)
        selected = self.all_by_priority()
        if only:
            wanted = set(only)
            selected = [e for e in selected if e.name in wanted]
        if skip:
            unwanted = set(skip)
            selected = [e for e in selected if e.name not in unwanted]
        return selected

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: str) -> bool:
        return name in self._entries
