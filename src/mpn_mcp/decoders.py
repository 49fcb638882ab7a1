"""Numeric decoders for codes embedded in part numbers.

Kept separate from the regex layer so each encoding can be tested on its own.
Every decoder returns a float in base units, or None if the code is unparseable.
"""

import re


# =============================================================================
# PRE-COMPILED REGEX PATTERNS
# =============================================================================

_EIA_PATTERN = re.compile(r"(\d)(\d)(\d)")
_R_NOTATION_PATTERN = re.compile(r"(\d*)R(\d+)", re.IGNORECASE)
_VOLTAGE_V_SUFFIX_PATTERN = re.compile(r"(\d+(?:\.\d+)?)V", re.IGNORECASE)
_VOLTAGE_V_DECIMAL_PATTERN = re.compile(r"(\d+)V(\d+)", re.IGNORECASE)
_PLAIN_NUMBER_PATTERN = re.compile(r"\d+(?:\.\d+)?")
_FREQUENCY_PATTERN = re.compile(r"(\d+(?:\.\d+)?)\s*([KMG])?(?:HZ)?", re.IGNORECASE)

_FREQUENCY_MULTIPLIERS = {"": 1.0, "K": 1e3, "M": 1e6, "G": 1e9}

# Base units for EIA capacitance codes
PICOFARAD = 1e-12  # Ceramic/film convention
MICROFARAD = 1e-6  # Electrolytic convention

# Multiplier digits 7 and 8 are unused; 9 means x0.1
_EIA_MULTIPLIERS = {0: 1, 1: 10, 2: 100, 3: 1e3, 4: 1e4, 5: 1e5, 6: 1e6, 9: 0.1}


# =============================================================================
# DECODERS
# =============================================================================


def decode_r_notation(code: str | None) -> float | None:
    """Decode R-notation where R marks the decimal point: '4R7' -> 4.7, 'R47' -> 0.47"""
    if not code:
        return None
    match = _R_NOTATION_PATTERN.fullmatch(code.strip())
    if not match:
        return None
    whole = match.group(1) or "0"
    return float(f"{whole}.{match.group(2)}")


def decode_eia_capacitance(code: str | None, base_unit: float = PICOFARAD) -> float | None:
    """Decode a 3-digit EIA code or R-notation value to farads.

    Three digits are two significant figures plus a power-of-ten multiplier,
    counted in `base_unit`: '101' -> 100pF, '104' -> 100nF. R-notation is a
    literal value in `base_unit`: '4R7' -> 4.7pF.

    Args:
        code: EIA code such as '101', '475' or '4R7'
        base_unit: Farads per unit of the code (PICOFARAD or MICROFARAD)

    Returns:
        Capacitance in farads, or None for an unrecognised code
    """
    if not code:
        return None
    code = code.strip().upper()
    if "R" in code:
        value = decode_r_notation(code)
        return value * base_unit if value is not None else None
    match = _EIA_PATTERN.fullmatch(code)
    if not match:
        return None
    significant = int(match.group(1) + match.group(2))
    multiplier = _EIA_MULTIPLIERS.get(int(match.group(3)))
    if multiplier is None:
        return None
    return significant * multiplier * base_unit


def decode_voltage_code(code: str | None) -> float | None:
    """Decode voltage codes: '25V' -> 25, '6V3' -> 6.3, '5R5' -> 5.5, '16' -> 16"""
    if not code:
        return None
    code = code.strip()
    match = _VOLTAGE_V_DECIMAL_PATTERN.fullmatch(code)
    if match:
        return float(f"{match.group(1)}.{match.group(2)}")
    match = _VOLTAGE_V_SUFFIX_PATTERN.fullmatch(code)
    if match:
        return float(match.group(1))
    if _PLAIN_NUMBER_PATTERN.fullmatch(code):
        return float(code)
    return decode_r_notation(code)


def decode_frequency(text: str | None) -> float | None:
    """Decode frequency in Hz: '12.000MHZ' -> 12e6, '32.768KHZ' -> 32768, '25M' -> 25e6"""
    if not text:
        return None
    match = _FREQUENCY_PATTERN.fullmatch(text.strip())
    if not match:
        return None
    suffix = (match.group(2) or "").upper()
    return float(match.group(1)) * _FREQUENCY_MULTIPLIERS[suffix]


def format_capacitance(farads: float | None) -> str:
    """Format farads for display: 1e-10 -> '100pF', 4.7e-6 -> '4.7uF'"""
    if farads is None or farads <= 0:
        return ""
    for unit, scale in (("F", 1.0), ("mF", 1e-3), ("uF", 1e-6), ("nF", 1e-9)):
        if farads >= scale:
            return f"{round(farads / scale, 6):g}{unit}"
    return f"{round(farads / 1e-12, 6):g}pF"
