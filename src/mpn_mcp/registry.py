"""Pattern registry shared by all manufacturer handlers.

Maps each ComponentType to an ordered list of compiled, case-insensitive rules.
Handlers populate it once during initialization; after `freeze()` it is
read-only and safe to share between threads without locking.

Matching against a type always ORs over every rule for that type. Registration
order only decides which rule's capture groups `first_match` hands back.
"""

import logging
import re
from dataclasses import dataclass

from .component_types import ComponentType

logger = logging.getLogger(__name__)


class RegistryFrozenError(RuntimeError):
    """Raised when registering into a registry that has been frozen."""


@dataclass(frozen=True)
class PatternEntry:
    """One compiled rule registered under one component type."""
    component_type: ComponentType
    pattern: re.Pattern[str]
    owner: str | None  # Handler name that registered it
    order: int  # Global registration sequence

    def matches(self, mpn: str) -> bool:
        return self.pattern.fullmatch(mpn) is not None


class PatternRegistry:
    """Ordered ComponentType -> [PatternEntry] table."""

    def __init__(self):
        self._entries: dict[ComponentType, list[PatternEntry]] = {}
        self._count = 0
        self._frozen = False

    def register(
        self,
        component_type: ComponentType,
        pattern: str | re.Pattern[str],
        owner: str | None = None,
    ) -> PatternEntry:
        """Add a rule under `component_type`. Duplicates are allowed and all are tried.

        Args:
            component_type: Tag the rule classifies into
            pattern: Regex source or precompiled pattern (recompiled case-insensitive)
            owner: Name of the handler registering the rule

        Returns:
            The stored PatternEntry
        """
        if self._frozen:
            raise RegistryFrozenError(
                f"Cannot register {component_type.name} pattern after registry is frozen"
            )
        source = pattern.pattern if isinstance(pattern, re.Pattern) else pattern
        entry = PatternEntry(
            component_type=component_type,
            pattern=re.compile(source, re.IGNORECASE),
            owner=owner,
            order=self._count,
        )
        self._entries.setdefault(component_type, []).append(entry)
        self._count += 1
        return entry

    def freeze(self) -> None:
        """Mark population complete. Further `register` calls raise."""
        self._frozen = True

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def __len__(self) -> int:
        return self._count

    def _candidates(self, component_type: ComponentType | None, owner: str | None = None) -> list[PatternEntry]:
        if component_type is None:
            return []
        entries = self._entries.get(component_type, [])
        if owner is None:
            return entries
        return [e for e in entries if e.owner == owner]

    def matches(self, mpn: str | None, component_type: ComponentType | None) -> bool:
        """True iff `mpn` is non-empty and any rule under `component_type` matches it."""
        if not mpn:
            return False
        return any(e.matches(mpn) for e in self._candidates(component_type))

    def matches_for_owner(self, mpn: str | None, component_type: ComponentType | None, owner: str) -> bool:
        """Same as `matches`, restricted to the rules one handler registered."""
        if not mpn:
            return False
        return any(e.matches(mpn) for e in self._candidates(component_type, owner))

    def first_match(
        self,
        mpn: str | None,
        component_type: ComponentType | None,
        owner: str | None = None,
    ) -> re.Match[str] | None:
        """Match object from the earliest-registered rule that matches, for capture groups."""
        if not mpn:
            return None
        for entry in self._candidates(component_type, owner):
            m = entry.pattern.fullmatch(mpn)
            if m:
                return m
        return None

    def first_pattern(self, component_type: ComponentType | None, owner: str | None = None) -> re.Pattern[str] | None:
        """Only the first registered pattern for a type.

        Legacy single-valued lookup. Testing an MPN against this alone
        under-matches any type with more than one disjoint rule; use `matches`
        for classification.
        """
        entries = self._candidates(component_type, owner)
        return entries[0].pattern if entries else None

    def patterns_for(self, component_type: ComponentType | None, owner: str | None = None) -> tuple[re.Pattern[str], ...]:
        return tuple(e.pattern for e in self._candidates(component_type, owner))

    def owners_for(self, component_type: ComponentType | None) -> list[str]:
        """Handler names with rules under a type, in first-registration order."""
        owners: list[str] = []
        for entry in self._candidates(component_type):
            if entry.owner is not None and entry.owner not in owners:
                owners.append(entry.owner)
        return owners

    def has_pattern(self, component_type: ComponentType | None) -> bool:
        return bool(self._candidates(component_type))

    def supported_types(self, owner: str | None = None) -> frozenset[ComponentType]:
        return frozenset(t for t in self._entries if self._candidates(t, owner))
