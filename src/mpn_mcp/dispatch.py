"""Dispatch MPNs to the manufacturer handler that owns them.

Handlers are consulted in HANDLER_ORDER; the first whose rules match wins.
Prefixes shared between vendors are settled by that order alone, e.g. "DX..."
is both a KDS crystal and an Elna Dynacap, and KDS comes first.

The default registry and handler set are built once, lazily, and shared.
Every operation also accepts an explicit registry/handlers pair so tests can
use isolated instances.
"""

import logging
import re
import threading

from .component_types import ComponentType, type_order
from .handlers import (
    AbraconHandler,
    AKMHandler,
    ElnaHandler,
    FTDIHandler,
    JMicronHandler,
    KDSHandler,
    LittelfuseHandler,
    ManufacturerHandler,
    WinbondHandler,
    normalize_mpn,
)
from .registry import PatternRegistry

logger = logging.getLogger(__name__)

HANDLER_ORDER: tuple[type[ManufacturerHandler], ...] = (
    KDSHandler,  # Before Elna: owns "DX" crystals
    AbraconHandler,
    AKMHandler,
    ElnaHandler,
    LittelfuseHandler,
    JMicronHandler,
    FTDIHandler,
    WinbondHandler,
)

_TOKEN_SEPARATORS = re.compile(r"[\s;,|]+")
_NON_ALNUM = re.compile(r"[^A-Z0-9]")

# Labels people put in front of part numbers in BOMs and free text
_TEXT_PREFIXES = ("IC-", "PART-", "MPN-", "MPN:", "PN:", "P/N:", "REF:", "REF-", "ITEM:", "ITEM-")
_TEXT_SUFFIXES = ("-SMD", "-THT", "-ROHS")


# =============================================================================
# REGISTRY LIFECYCLE
# =============================================================================


def build_registry(
    handlers: list[ManufacturerHandler] | None = None,
) -> tuple[PatternRegistry, list[ManufacturerHandler]]:
    """Create a frozen registry populated by `handlers` (default: one of each in HANDLER_ORDER)."""
    if handlers is None:
        handlers = [cls() for cls in HANDLER_ORDER]
    registry = PatternRegistry()
    for handler in handlers:
        handler.initialize_patterns(registry)
    registry.freeze()
    logger.info(f"Pattern registry ready: {len(handlers)} handlers, {len(registry)} patterns")
    return registry, handlers


_registry: PatternRegistry | None = None
_handlers: list[ManufacturerHandler] | None = None
_lock = threading.Lock()


def _ensure_default() -> None:
    global _registry, _handlers
    if _registry is None:
        with _lock:
            # Double-check locking pattern
            if _registry is None:
                _registry, _handlers = build_registry()


def get_registry() -> PatternRegistry:
    """Get or build the process-wide registry (thread-safe)."""
    _ensure_default()
    return _registry


def get_handlers() -> list[ManufacturerHandler]:
    """Handlers backing the process-wide registry, in dispatch order."""
    _ensure_default()
    return list(_handlers)


def reset() -> None:
    """Drop the process-wide registry so the next call rebuilds it."""
    global _registry, _handlers
    with _lock:
        _registry = None
        _handlers = None


def _resolve(registry, handlers):
    if registry is None or handlers is None:
        _ensure_default()
    if registry is None:
        registry = _registry
    if handlers is None:
        handlers = _handlers
    return registry, handlers


def _sorted_types(types) -> list[ComponentType]:
    return sorted(types, key=type_order)


# =============================================================================
# LOOKUP
# =============================================================================


def _handler_matches(handler: ManufacturerHandler, mpn: str, registry: PatternRegistry) -> bool:
    return any(handler.matches(mpn, t, registry) for t in _sorted_types(handler.get_supported_types()))


def find_handler(
    mpn: str | None,
    registry: PatternRegistry | None = None,
    handlers: list[ManufacturerHandler] | None = None,
) -> ManufacturerHandler | None:
    """First handler in dispatch order whose rules match `mpn`, or None."""
    mpn = normalize_mpn(mpn)
    if not mpn:
        return None
    registry, handlers = _resolve(registry, handlers)
    for handler in handlers:
        if _handler_matches(handler, mpn, registry):
            return handler
    logger.debug(f"No handler for {mpn}")
    return None


def find_handlers(
    mpn: str | None,
    registry: PatternRegistry | None = None,
    handlers: list[ManufacturerHandler] | None = None,
) -> list[ManufacturerHandler]:
    """Every handler whose rules match `mpn`, in dispatch order."""
    mpn = normalize_mpn(mpn)
    if not mpn:
        return []
    registry, handlers = _resolve(registry, handlers)
    return [h for h in handlers if _handler_matches(h, mpn, registry)]


def normalize(mpn: str | None) -> str:
    """Upper-case and drop everything but letters and digits: 'ft232rl-reel' -> 'FT232RLREEL'"""
    if not mpn:
        return ""
    return _NON_ALNUM.sub("", mpn.upper())


def get_component_type(
    mpn: str | None,
    registry: PatternRegistry | None = None,
    handlers: list[ManufacturerHandler] | None = None,
) -> ComponentType:
    """Most specific tag from the owning handler; GENERIC when nothing matches.

    Manufacturer-qualified tags are preferred over generic ones.
    """
    registry, handlers = _resolve(registry, handlers)
    handler = find_handler(mpn, registry, handlers)
    if handler is None:
        return ComponentType.GENERIC
    mpn = normalize_mpn(mpn)
    types = _sorted_types(handler.get_supported_types())
    qualified = [t for t in types if t.is_manufacturer_specific]
    generic = [t for t in types if not t.is_manufacturer_specific]
    for component_type in qualified + generic:
        if handler.matches(mpn, component_type, registry):
            return component_type
    return ComponentType.GENERIC


def get_matching_types(
    mpn: str | None,
    registry: PatternRegistry | None = None,
    handlers: list[ManufacturerHandler] | None = None,
) -> list[ComponentType]:
    """Every tag any handler matches; qualified tags first, then by name."""
    mpn = normalize_mpn(mpn)
    if not mpn:
        return []
    registry, handlers = _resolve(registry, handlers)
    found: set[ComponentType] = set()
    for handler in handlers:
        for component_type in handler.get_supported_types():
            if handler.matches(mpn, component_type, registry):
                found.add(component_type)
    return sorted(found, key=lambda t: (not t.is_manufacturer_specific, t.name))


def get_handlers_for_type(
    component_type: ComponentType | None,
    handlers: list[ManufacturerHandler] | None = None,
) -> list[ManufacturerHandler]:
    """Handlers that support `component_type` directly or through its base type."""
    if component_type is None:
        return []
    _, handlers = _resolve(None, handlers)
    return [h for h in handlers if h.supports_type(component_type)]


def get_all_handlers() -> list[ManufacturerHandler]:
    return get_handlers()


# =============================================================================
# DELEGATING OPERATIONS
# =============================================================================


def extract_series(
    mpn: str | None,
    registry: PatternRegistry | None = None,
    handlers: list[ManufacturerHandler] | None = None,
) -> str:
    handler = find_handler(mpn, registry, handlers)
    return handler.extract_series(mpn) if handler else ""


def get_package_code(
    mpn: str | None,
    registry: PatternRegistry | None = None,
    handlers: list[ManufacturerHandler] | None = None,
) -> str:
    handler = find_handler(mpn, registry, handlers)
    return handler.extract_package_code(mpn) if handler else ""


def is_official_replacement(
    replacement: str | None,
    original: str | None,
    registry: PatternRegistry | None = None,
    handlers: list[ManufacturerHandler] | None = None,
) -> bool:
    """Whether `replacement` may stand in for `original`.

    Both parts must belong to the same handler, which then applies its own rules.
    Not symmetric: an upgraded grade may replace the standard part but not the
    other way round.
    """
    if not replacement or not original:
        return False
    registry, handlers = _resolve(registry, handlers)
    handler = find_handler(replacement, registry, handlers)
    if handler is None or handler is not find_handler(original, registry, handlers):
        return False
    return handler.is_official_replacement(replacement, original)


# =============================================================================
# FREE TEXT
# =============================================================================


def _clean_token(token: str) -> str:
    token = token.strip().upper()
    for sep in ("=", ":"):
        if sep in token and not token.startswith(_TEXT_PREFIXES):
            token = token.split(sep, 1)[1]
    for prefix in _TEXT_PREFIXES:
        if token.startswith(prefix):
            token = token[len(prefix):]
            break
    for suffix in _TEXT_SUFFIXES:
        if token.endswith(suffix):
            token = token[: -len(suffix)]
            break
    return token


def find_mpn_in_text(
    text: str | None,
    registry: PatternRegistry | None = None,
    handlers: list[ManufacturerHandler] | None = None,
) -> str | None:
    """First token in `text` that some handler recognizes, cleaned of BOM labels.

    'Part: ft232rl, qty 2' -> 'FT232RL'
    """
    if not text:
        return None
    registry, handlers = _resolve(registry, handlers)
    for raw in _TOKEN_SEPARATORS.split(text):
        token = _clean_token(raw)
        if token and find_handler(token, registry, handlers):
            return token
    return None
