"""Manufacturer handler contract and shared extraction helpers.

A handler owns one vendor's rules. It registers them into a PatternRegistry
passed in at startup and answers extraction/compatibility queries as pure
functions of the MPN strings. Handlers keep no per-call state.

All public operations return a sentinel for absent data: False for predicates,
"" for extractors. Nothing here raises on bad input.
"""

import logging
import re

from .. import packages
from ..component_types import ComponentType
from ..registry import PatternRegistry

logger = logging.getLogger(__name__)

_PACKAGING_SUFFIX = re.compile(r"-?(REEL|TUBE|TRAY|TR)$")
_SERIES_DEFAULT = re.compile(r"[A-Z]+\d+")
_TRAILING_LETTERS = re.compile(r"\d([A-Z]+)$")


# =============================================================================
# HELPERS
# =============================================================================


def normalize_mpn(mpn: str | None) -> str:
    """Trim and upper-case an MPN; None -> ''"""
    if not mpn:
        return ""
    return mpn.strip().upper()


def same_part(a: str | None, b: str | None) -> bool:
    """Same MPN once normalized; empty input never matches."""
    a = normalize_mpn(a)
    return bool(a) and a == normalize_mpn(b)


def find_first_digit(s: str) -> int:
    """Index of the first digit, or -1."""
    for i, c in enumerate(s):
        if c.isdigit():
            return i
    return -1


def find_last_digit(s: str) -> int:
    """Index of the last digit, or -1."""
    for i in range(len(s) - 1, -1, -1):
        if s[i].isdigit():
            return i
    return -1


def series_with_prefix(mpn: str, prefix: str) -> str:
    """Prefix plus the digit run that follows it: ('JMF667H', 'JMF') -> 'JMF667'"""
    if not mpn.startswith(prefix):
        return ""
    end = len(prefix)
    while end < len(mpn) and mpn[end].isdigit():
        end += 1
    return mpn[:end]


def starts_with_any(mpn: str, prefixes) -> bool:
    return any(mpn.startswith(p) for p in prefixes)


def strip_packaging_suffix(mpn: str) -> str:
    """Drop tape/reel/tray ordering suffixes: 'JMS583-REEL' -> 'JMS583'"""
    return _PACKAGING_SUFFIX.sub("", mpn)


def lookup_prefix(mpn: str, table: list[tuple[str, str]]) -> str:
    """First value whose key prefixes `mpn`. Tables list longer prefixes first."""
    for prefix, value in table:
        if mpn.startswith(prefix):
            return value
    return ""


# =============================================================================
# HANDLER CONTRACT
# =============================================================================


class ManufacturerHandler:
    """Base class for per-vendor rule sets.

    Subclasses declare:
    - name: display name, also the owner tag on registered patterns
    - PATTERNS: ordered (ComponentType, compiled regex) rules
    - SUPPORTED_TYPES: frozenset of tags this handler can produce
    - MANUFACTURER_TYPES: frozenset of vendor-qualified tags it owns (may be empty)

    and override extraction/replacement where the defaults don't fit.
    """

    name: str = ""
    PATTERNS: list[tuple[ComponentType, re.Pattern[str]]] = []
    SUPPORTED_TYPES: frozenset[ComponentType] = frozenset()
    MANUFACTURER_TYPES: frozenset[ComponentType] = frozenset()

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    # -- Classification --------------------------------------------------------

    def initialize_patterns(self, registry: PatternRegistry) -> None:
        """Register this vendor's rules. Safe to call on any number of registries."""
        for component_type, pattern in self.PATTERNS:
            registry.register(component_type, pattern, owner=self.name)
        logger.debug(f"{self.name}: registered {len(self.PATTERNS)} patterns")

    def matches(self, mpn: str | None, component_type: ComponentType | None, registry: PatternRegistry) -> bool:
        """True if any rule this handler registered for `component_type` matches.

        Evaluates every rule for the type, never just the first one.
        """
        mpn = normalize_mpn(mpn)
        if not mpn or component_type is None:
            return False
        return registry.matches_for_owner(mpn, component_type, self.name)

    def get_supported_types(self) -> frozenset[ComponentType]:
        return self.SUPPORTED_TYPES

    def get_manufacturer_types(self) -> frozenset[ComponentType]:
        return self.MANUFACTURER_TYPES

    def supports_type(self, component_type: ComponentType | None) -> bool:
        """Direct support, or support for a qualified tag sharing the base type."""
        if component_type is None:
            return False
        if component_type in self.SUPPORTED_TYPES:
            return True
        base = component_type.base_type
        return any(t.base_type is base for t in self.SUPPORTED_TYPES)

    # -- Extraction ------------------------------------------------------------

    def extract_series(self, mpn: str | None) -> str:
        """Alphabetic prefix plus first digit run: 'LM358N' -> 'LM358'"""
        mpn = normalize_mpn(mpn)
        if not mpn:
            return ""
        match = _SERIES_DEFAULT.match(mpn)
        return match.group(0) if match else ""

    def extract_package_code(self, mpn: str | None) -> str:
        """Hyphen suffix, else trailing letters after the last digit, resolved via the package table."""
        mpn = normalize_mpn(mpn)
        if not mpn:
            return ""
        if "-" in mpn:
            suffix = mpn.rsplit("-", 1)[1]
            if suffix:
                return packages.resolve(suffix)
        match = _TRAILING_LETTERS.search(mpn)
        return packages.resolve(match.group(1)) if match else ""

    def extract_attributes(self, mpn: str | None) -> dict[str, object]:
        """Vendor-specific attributes beyond series/package. Empty by default."""
        return {}

    # -- Compatibility ---------------------------------------------------------

    def is_official_replacement(self, replacement: str | None, original: str | None) -> bool:
        """Whether `replacement` may stand in for `original`.

        Default rule: same non-empty series, and compatible packages when both
        sides carry one.
        """
        if not replacement or not original:
            return False
        if same_part(replacement, original):
            return True
        series1 = self.extract_series(replacement)
        series2 = self.extract_series(original)
        if not series1 or series1 != series2:
            return False
        pkg1 = self.extract_package_code(replacement)
        pkg2 = self.extract_package_code(original)
        if pkg1 and pkg2:
            return packages.are_compatible(pkg1, pkg2)
        return True
