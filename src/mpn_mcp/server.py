"""MPN MCP Server - Classify manufacturer part numbers and check replacements."""

import logging
import time
from contextlib import asynccontextmanager

from fastmcp import FastMCP
from mcp.types import ToolAnnotations
from starlette.middleware import Middleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse
from starlette.routing import Route

from . import __version__
from . import dispatch
from .config import RATE_LIMIT_REQUESTS, HTTP_PORT, MAX_MPN_LENGTH, MAX_TEXT_LENGTH

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    """Build the pattern registry on startup (not on first request)."""
    registry = dispatch.get_registry()
    handlers = dispatch.get_handlers()
    logger.info(f"Loaded {len(handlers)} manufacturer handlers, {len(registry)} patterns")
    yield
    logger.info("Shutting down")


mcp = FastMCP(
    name="mpn",
    instructions="Manufacturer part number (MPN) classification. No auth required. Use classify_mpn to identify the manufacturer, component type, series and package of a part number; extract_attributes for vendor-specific details (frequency, voltage, interface...); check_replacement to ask whether one MPN is an official drop-in for another (order matters: the first argument replaces the second); find_mpn to pull a recognizable MPN out of free text such as a BOM line.",
    lifespan=lifespan,
)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Rate limiting middleware - 100 requests/minute per IP.

    Includes protections against memory exhaustion from IP spoofing:
    - Maximum tracked IPs limit (10,000)
    - Periodic cleanup of stale IPs
    """

    MAX_TRACKED_IPS = 10_000

    def __init__(self, app, requests_per_minute: int = RATE_LIMIT_REQUESTS):
        super().__init__(app)
        self.requests_per_minute = requests_per_minute
        self.request_counts: dict[str, list[float]] = {}
        self._last_cleanup = time.time()

    def _get_client_ip(self, request) -> str:
        """Client IP, taking the rightmost X-Forwarded-For entry (set by our proxy)."""
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            ips = [ip.strip() for ip in forwarded.split(",")]
            return ips[-1] if ips else "unknown"
        return request.client.host if request.client else "unknown"

    def _cleanup_stale_ips(self, now: float) -> None:
        window_start = now - 60
        stale = [
            ip for ip, timestamps in self.request_counts.items()
            if not timestamps or timestamps[-1] < window_start
        ]
        for ip in stale:
            del self.request_counts[ip]

    def _check_rate_limit(self, client_ip: str) -> bool:
        """True when `client_ip` is over its budget for the last minute."""
        now = time.time()
        window_start = now - 60

        if now - self._last_cleanup > 60:
            self._cleanup_stale_ips(now)
            self._last_cleanup = now

        if len(self.request_counts) >= self.MAX_TRACKED_IPS:
            self._cleanup_stale_ips(now)
            # Still full: refuse new traffic rather than grow
            if len(self.request_counts) >= self.MAX_TRACKED_IPS:
                return True

        if client_ip not in self.request_counts:
            self.request_counts[client_ip] = [now]
            return False

        recent = [t for t in self.request_counts[client_ip] if t > window_start]
        self.request_counts[client_ip] = recent
        if len(recent) >= self.requests_per_minute:
            return True
        recent.append(now)
        return False

    async def dispatch(self, request, call_next):
        if request.url.path == "/health":
            return await call_next(request)

        if self._check_rate_limit(self._get_client_ip(request)):
            return JSONResponse(
                status_code=429,
                content={"error": "Rate limit exceeded", "retry_after": 60},
                headers={"Retry-After": "60"},
            )
        return await call_next(request)


# Input validation shared by the tools
def _validate_mpn(mpn: str | None, field: str = "mpn") -> str | None:
    """Error message for a missing or oversized MPN argument, None if it's usable."""
    if not mpn or not mpn.strip():
        return f"{field} is required"
    if len(mpn) > MAX_MPN_LENGTH:
        return f"{field} too long (max {MAX_MPN_LENGTH} characters)"
    return None


def _unknown(mpn: str) -> dict:
    logger.warning(f"Unrecognized MPN: {mpn}")
    return {"error": f"No manufacturer handler recognizes '{mpn}'"}


@mcp.tool(
    annotations=ToolAnnotations(
        title="Classify MPN",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    )
)
async def classify_mpn(mpn: str) -> dict:
    """Identify the manufacturer and category of a part number.

    Rule-based: works offline from manufacturer naming conventions, no database.

    Args:
        mpn: Manufacturer part number (e.g., "DSX321G-12.000MHZ", "SMBJ15CA", "FT232RL").
             Case-insensitive; surrounding whitespace is ignored.

    Returns:
        mpn: Normalized part number
        manufacturer: Handler that owns the MPN (e.g., "KDS", "Littelfuse")
        component_type: Most specific type (manufacturer-qualified when available)
        base_type: Generic category of component_type
        matching_types: Every type the MPN matches, qualified first
        series: Product series (e.g., "FT232", "SMBJ")
        package: Package or case code, "" when not encoded in the MPN
    """
    error = _validate_mpn(mpn)
    if error:
        return {"error": error}

    handler = dispatch.find_handler(mpn)
    if handler is None:
        return _unknown(mpn)

    component_type = dispatch.get_component_type(mpn)
    return {
        "mpn": mpn.strip().upper(),
        "manufacturer": handler.name,
        "component_type": component_type.name,
        "base_type": component_type.base_type.name,
        "matching_types": [t.name for t in dispatch.get_matching_types(mpn)],
        "series": handler.extract_series(mpn),
        "package": handler.extract_package_code(mpn),
    }


@mcp.tool(
    annotations=ToolAnnotations(
        title="Extract MPN Attributes",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    )
)
async def extract_attributes(mpn: str) -> dict:
    """Decode the parameters a manufacturer encodes in a part number.

    Attributes depend on the manufacturer:
    - KDS/Abracon crystals: frequency, stability, automotive grade
    - Elna capacitors: voltage, capacitance code and decoded farads
    - Littelfuse: standoff/varistor voltage, fuse current, bidirectional, peak power
    - AKM: resolution, interface, sample rate
    - JMicron/FTDI: interface, USB generation, ports/channels
    - Winbond: density (Mbit), voltage class

    Args:
        mpn: Manufacturer part number (e.g., "ABM3-12.000MHZ-B2-T", "RFS-25V101MH5#5")

    Returns:
        mpn, manufacturer, series, package, plus an attributes dict. Empty strings
        and zeros mean the MPN does not encode that attribute.
    """
    error = _validate_mpn(mpn)
    if error:
        return {"error": error}

    handler = dispatch.find_handler(mpn)
    if handler is None:
        return _unknown(mpn)

    return {
        "mpn": mpn.strip().upper(),
        "manufacturer": handler.name,
        "series": handler.extract_series(mpn),
        "package": handler.extract_package_code(mpn),
        "attributes": handler.extract_attributes(mpn),
    }


@mcp.tool(
    annotations=ToolAnnotations(
        title="Check Official Replacement",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    )
)
async def check_replacement(replacement: str, original: str) -> dict:
    """Check whether one MPN is a manufacturer-sanctioned replacement for another.

    The relation is directional: an automotive-grade or newer-generation part may
    replace the standard one, but not the reverse. Swap the arguments to check the
    other direction.

    Args:
        replacement: Candidate part that would be fitted instead (e.g., "DSX321GA")
        original: Part currently specified in the design (e.g., "DSX321G")

    Returns:
        is_replacement: True if replacement can stand in for original
        replacement_manufacturer, original_manufacturer: Owning handlers ("" if unknown)
        replacement_series, original_series: Extracted series
        reason: Short explanation when is_replacement is False
    """
    for value, field in ((replacement, "replacement"), (original, "original")):
        error = _validate_mpn(value, field)
        if error:
            return {"error": error}

    handler1 = dispatch.find_handler(replacement)
    handler2 = dispatch.find_handler(original)
    if handler1 is None and handler2 is None:
        return {"error": f"No manufacturer handler recognizes '{replacement}' or '{original}'"}

    result = {
        "replacement": replacement.strip().upper(),
        "original": original.strip().upper(),
        "is_replacement": dispatch.is_official_replacement(replacement, original),
        "replacement_manufacturer": handler1.name if handler1 else "",
        "original_manufacturer": handler2.name if handler2 else "",
        "replacement_series": handler1.extract_series(replacement) if handler1 else "",
        "original_series": handler2.extract_series(original) if handler2 else "",
    }
    if not result["is_replacement"]:
        if handler1 is None or handler2 is None:
            result["reason"] = "One part number is not recognized"
        elif handler1 is not handler2:
            result["reason"] = "Different manufacturers"
        else:
            result["reason"] = f"Not an official {handler1.name} replacement"
    return result


@mcp.tool(
    annotations=ToolAnnotations(
        title="Find MPN in Text",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    )
)
async def find_mpn(text: str) -> dict:
    """Pull the first recognizable part number out of free text.

    Splits on whitespace, commas, semicolons and pipes; understands key=value and
    key:value pairs and common BOM labels (MPN:, P/N:, PART-, REF:...).

    Args:
        text: Free text such as a BOM line (e.g., "U3; P/N: FT232RL; qty 1")

    Returns:
        mpn: The recognized part number, upper-cased
        manufacturer: Handler that recognized it
    """
    if not text or not text.strip():
        return {"error": "text is required"}
    if len(text) > MAX_TEXT_LENGTH:
        return {"error": f"text too long (max {MAX_TEXT_LENGTH} characters)"}

    mpn = dispatch.find_mpn_in_text(text)
    if mpn is None:
        logger.warning("No recognizable MPN in text")
        return {"error": "No recognizable MPN found in text"}

    handler = dispatch.find_handler(mpn)
    return {
        "mpn": mpn,
        "manufacturer": handler.name if handler else "",
    }


# Health check endpoint
async def health(request):
    return JSONResponse({
        "status": "healthy",
        "service": "mpn-mcp",
        "version": __version__,
    })


def create_app():
    """Create the ASGI application."""
    middleware = [
        Middleware(RateLimitMiddleware, requests_per_minute=RATE_LIMIT_REQUESTS),
    ]

    # Stateless: clients don't reliably forward session cookies
    app = mcp.http_app(
        path="/mcp",
        middleware=middleware,
        transport="streamable-http",
        stateless_http=True,
    )

    app.routes.append(Route("/health", health))

    return app


app = create_app()


class _HealthFilterLog(logging.Filter):
    """Suppress noisy /health access logs from container healthchecks."""

    def filter(self, record: logging.LogRecord) -> bool:
        return "/health" not in record.getMessage()


def main():
    """Run the server."""
    import uvicorn

    logging.getLogger("uvicorn.access").addFilter(_HealthFilterLog())

    uvicorn.run(
        "mpn_mcp.server:app",
        host="0.0.0.0",
        port=HTTP_PORT,
        lifespan="on",
    )


if __name__ == "__main__":
    main()
