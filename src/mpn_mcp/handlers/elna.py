"""Elna aluminium electrolytic capacitors and Dynacap supercapacitors.

Part numbers follow SERIES-<voltage>V<capacitance code>M<case code>, e.g.
RFS-25V101MH5#5 is a Silmic II, 25V, 100uF, 6.3x11mm can. Dynacap uses
R-notation voltage instead: DB-5R5D105T is 5.5V, 1F, radial.
"""

import re

from ..component_types import ComponentType
from ..decoders import MICROFARAD, decode_eia_capacitance, decode_r_notation
from .base import ManufacturerHandler, lookup_prefix, normalize_mpn, same_part

_RADIAL = re.compile(r"R[A-Z0-9]{2}-[0-9]+V.*")
_VOLTAGE = re.compile(r"^[A-Z0-9]+-(\d{1,3})V")
_CAPACITANCE = re.compile(r"^[A-Z0-9]+-\d{1,3}V([0-9R]{3,4})M")
_DYNACAP = re.compile(r"D[BXZ]-?[0-9].*")
_DYNACAP_RATINGS = re.compile(r"D[BXZ]-?([0-9]+R[0-9]+)[A-Z]([0-9]{3})")  # DB-5R5D105T: 5.5V, 1F

_SILMIC = "Silmic II"
_TONEREX_A = "TONEREX Type A"
_TONEREX_B = "TONEREX Type B"

_SERIES = [
    ("RFS-", _SILMIC),
    ("ROA-", _TONEREX_A),
    ("ROB-", _TONEREX_B),
    ("RE3-", "RE3 Standard"),
    ("RJ3-", "RJ3 Standard"),
    ("RJH-", "RJH High Temp"),
    ("RBD-", "RBD Bi-Polar"),
    ("RBI-", "RBI Bi-Polar"),
    ("RSE-", "RSE Super Low ESR"),
    ("RVD-", "RVD Low Leakage"),
    ("RVE-", "RVE Low Leakage"),
    ("DB", "Dynacap Standard"),
    ("DX", "Dynacap Low Profile"),
    ("DZ", "Dynacap Ultra-Low Profile"),
    ("LAO", "STARGET Audio"),
    ("LAS", "STARGET Standard"),
    ("CE-BP", "CE-BP Audio Crossover"),
]

# Case code after the tolerance letter -> can size (D x L)
_CASE_SIZES = {
    "H3": "5x11mm",
    "H5": "6.3x11mm",
    "H7": "8x11.5mm",
    "F3": "5x7mm",
    "F5": "6.3x7mm",
    "L5": "10x12.5mm",
    "L7": "10x16mm",
    "M5": "12.5x15mm",
    "M8": "12.5x20mm",
    "P5": "16x25mm",
    "P8": "16x31.5mm",
    "Q5": "18x25mm",
    "R5": "22x25mm",
}

# Dynacap mounting style, by last letter
_DYNACAP_STYLES = {
    "T": "Radial THT",
    "V": "Vertical SMD",
    "H": "Horizontal SMD",
    "C": "Coin Cell",
}

# Performance tier: (replacement series, original series) pairs that upgrade one way
_TIER_UPGRADES = frozenset({
    (_SILMIC, _TONEREX_A),
    (_SILMIC, _TONEREX_B),
})

# Cross-series pairs interchangeable both ways
_EQUIVALENT_SERIES = frozenset({
    frozenset({_TONEREX_A, _TONEREX_B}),
})


class ElnaHandler(ManufacturerHandler):
    name = "Elna"
    PATTERNS = [
        (ComponentType.CAPACITOR, re.compile(r"RFS-[0-9]+V[0-9A-Z]+.*")),  # Silmic II
        (ComponentType.CAPACITOR, re.compile(r"RO[AB]-[0-9]+V[0-9A-Z]+.*")),  # TONEREX
        (ComponentType.CAPACITOR, re.compile(r"RE3-[0-9]+V[0-9]+.*")),
        (ComponentType.CAPACITOR, re.compile(r"RJ[3H]-[0-9]+V[0-9]+.*")),
        (ComponentType.CAPACITOR, re.compile(r"RB[DI]-[0-9]+V[0-9]+.*")),  # Bi-polar
        (ComponentType.CAPACITOR, re.compile(r"RSE-[0-9]+V[0-9]+.*")),
        (ComponentType.CAPACITOR, re.compile(r"RV[DE]-[0-9]+V[0-9]+.*")),
        (ComponentType.CAPACITOR, re.compile(r"R[A-Z]{2}-[0-9]+V.*")),  # Other radial series
        (ComponentType.CAPACITOR, re.compile(r"D[BXZ]-[0-9]+R[0-9]+[A-Z][0-9]+.*")),  # Dynacap
        (ComponentType.CAPACITOR, re.compile(r"D[BXZ][0-9]+.*")),
        (ComponentType.CAPACITOR, re.compile(r"LA[OS][0-9]+.*")),  # STARGET
        (ComponentType.CAPACITOR, re.compile(r"CE-BP.*")),
    ]
    SUPPORTED_TYPES = frozenset({ComponentType.CAPACITOR})

    def extract_series(self, mpn: str | None) -> str:
        mpn = normalize_mpn(mpn)
        if not mpn:
            return ""
        return lookup_prefix(mpn, _SERIES)

    def extract_package_code(self, mpn: str | None) -> str:
        """Can size from the two characters after the tolerance 'M': 'RFS-25V101MH5' -> '6.3x11mm'"""
        mpn = normalize_mpn(mpn)
        if not mpn:
            return ""
        if _RADIAL.fullmatch(mpn):
            idx = mpn.find("M")
            if idx > 0:
                case = mpn[idx + 1:].split("#")[0]
                if len(case) >= 2:
                    return _CASE_SIZES.get(case[:2], case[:2])
            return ""
        if _DYNACAP.fullmatch(mpn):
            style = mpn[-1]
            return _DYNACAP_STYLES.get(style, style) if style.isalpha() else ""
        return ""

    def get_voltage(self, mpn: str | None) -> str:
        """Rated voltage: 'RFS-25V101MH5' -> '25', 'DB-5R5D105T' -> '5.5'"""
        mpn = normalize_mpn(mpn)
        match = _VOLTAGE.match(mpn)
        if match:
            return match.group(1)
        match = _DYNACAP_RATINGS.match(mpn)
        if match:
            return f"{decode_r_notation(match.group(1)):g}"
        return ""

    def get_capacitance_code(self, mpn: str | None) -> str:
        """EIA code between V and the tolerance M: 'RFS-25V101MH5' -> '101', 'DB-5R5D105T' -> '105'"""
        mpn = normalize_mpn(mpn)
        match = _CAPACITANCE.match(mpn)
        if match:
            return match.group(1)
        match = _DYNACAP_RATINGS.match(mpn)
        return match.group(2) if match else ""

    def get_capacitance(self, mpn: str | None) -> float:
        """Capacitance in farads, 0.0 when not encoded. Codes count in microfarads."""
        farads = decode_eia_capacitance(self.get_capacitance_code(mpn), base_unit=MICROFARAD)
        return farads if farads is not None else 0.0

    def extract_attributes(self, mpn: str | None) -> dict[str, object]:
        return {
            "voltage": self.get_voltage(mpn),
            "capacitance_code": self.get_capacitance_code(mpn),
            "capacitance_farads": self.get_capacitance(mpn),
        }

    def _same_ratings(self, mpn1: str, mpn2: str) -> bool:
        voltage = self.get_voltage(mpn1)
        cap = self.get_capacitance_code(mpn1)
        if not voltage or not cap:
            return False
        if voltage != self.get_voltage(mpn2) or cap != self.get_capacitance_code(mpn2):
            return False
        pkg1 = self.extract_package_code(mpn1)
        pkg2 = self.extract_package_code(mpn2)
        return not pkg1 or not pkg2 or pkg1 == pkg2

    def is_official_replacement(self, replacement: str | None, original: str | None) -> bool:
        """Equal voltage, capacitance and can size, plus a series relation.

        Series relations: identical; Silmic II upgrading a TONEREX; TONEREX A and B
        interchangeable. STARGET and CE-BP numbers encode no ratings, so they only
        replace themselves.
        """
        if not replacement or not original:
            return False
        if same_part(replacement, original):
            return True
        series1 = self.extract_series(replacement)
        series2 = self.extract_series(original)
        if not series1 or not series2:
            return False
        if (
            series1 != series2
            and (series1, series2) not in _TIER_UPGRADES
            and frozenset({series1, series2}) not in _EQUIVALENT_SERIES
        ):
            return False
        return self._same_ratings(replacement, original)
