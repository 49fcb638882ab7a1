"""Abracon crystals, oscillators, RF parts and inductors."""

import re

from ..component_types import ComponentType
from ..decoders import decode_frequency
from .base import ManufacturerHandler, lookup_prefix, normalize_mpn, same_part

_PPM = re.compile(r"(\d+)PPM")
_CRYSTAL_SIZE = re.compile(r"AB[ML](\d+)")
_INDUCTOR_SIZE = re.compile(r"AI[AMR][LP]-?(\d{2,4})")
_PACKAGING_TOKENS = frozenset({"T", "TR", "T3", "T5"})  # Tape/reel ordering options

# Longer prefixes first
_SERIES = [
    ("ABMM", "Ceramic Resonator"),
    ("ABRTS", "RTC with SuperCap"),
    ("ABRC", "Crystal Resonator"),
    ("ABUN", "RF Diplexer"),
    ("ABM", "Standard Crystal"),
    ("ABL", "Low Profile Crystal"),
    ("ABT", "Tuning Fork Crystal"),
    ("ABS", "Automotive Crystal"),
    ("ABA", "RF Antenna"),
    ("ABF", "RF Filter"),
    ("ABB", "RF Balun"),
    ("ASCO", "Standard Oscillator"),
    ("ASFL", "Low Power Oscillator"),
    ("ASTX", "TCXO"),
    ("ASVTX", "VCTCXO"),
    ("ASXV", "VCXO"),
    ("ASV", "VCXO"),
    ("ASE", "EMI Reduced Oscillator"),
    ("AIAL", "Air Core Inductor"),
    ("AIML", "Multilayer Inductor"),
    ("AIRP", "Power Inductor"),
]

# ABM/ABL size number -> body dimensions
_CRYSTAL_SIZES = {
    "2": "2.0 x 1.6mm",
    "3": "5.0 x 3.2mm",
    "7": "6.0 x 3.5mm",
    "8": "3.2 x 2.5mm",
    "10": "2.5 x 2.0mm",
    "11": "2.0 x 1.6mm",
    "12": "1.6 x 1.2mm",
    "13": "1.2 x 1.0mm",
}

# Oscillator package letter (first dash token)
_OSCILLATOR_SIZES = {
    "B": "2.0 x 1.6mm",
    "C": "2.5 x 2.0mm",
    "D": "3.2 x 2.5mm",
    "E": "5.0 x 3.2mm",
    "F": "7.0 x 5.0mm",
}

# Inductor 2-digit size code -> EIA size
_INDUCTOR_SIZES = {
    "02": "0201",
    "03": "0302",
    "05": "0503",
    "10": "1005",
    "15": "1508",
    "20": "2010",
}


class AbraconHandler(ManufacturerHandler):
    """Abracon timing devices.

    Crystals and oscillators register under both the generic tag and the
    Abracon-qualified tag, so a match on CRYSTAL_ABRACON implies CRYSTAL.
    """

    name = "Abracon"
    PATTERNS = [
        # Crystals
        (ComponentType.CRYSTAL, re.compile(r"ABM[0-9].*")),  # Standard
        (ComponentType.CRYSTAL, re.compile(r"ABL[0-9].*")),  # Low profile
        (ComponentType.CRYSTAL, re.compile(r"ABT[0-9].*")),  # Tuning fork
        (ComponentType.CRYSTAL, re.compile(r"ABS[0-9].*")),  # Automotive
        (ComponentType.CRYSTAL, re.compile(r"ABMM[0-9].*")),  # Ceramic resonators
        (ComponentType.CRYSTAL, re.compile(r"ABRC[0-9].*")),  # Crystal resonators
        (ComponentType.CRYSTAL_ABRACON, re.compile(r"ABM[0-9].*")),
        (ComponentType.CRYSTAL_ABRACON, re.compile(r"ABL[0-9].*")),
        (ComponentType.CRYSTAL_ABRACON, re.compile(r"ABT[0-9].*")),
        (ComponentType.CRYSTAL_ABRACON, re.compile(r"ABS[0-9].*")),
        # Oscillators
        (ComponentType.OSCILLATOR, re.compile(r"ASCO[0-9].*")),  # Standard
        (ComponentType.OSCILLATOR, re.compile(r"ASFL[0-9].*")),  # Low power
        (ComponentType.OSCILLATOR, re.compile(r"ASE[0-9]?-.*")),  # EMI reduced
        (ComponentType.OSCILLATOR_ABRACON, re.compile(r"ASCO[0-9].*")),
        (ComponentType.OSCILLATOR_ABRACON, re.compile(r"ASFL[0-9].*")),
        (ComponentType.OSCILLATOR_ABRACON, re.compile(r"ASE[0-9]?-.*")),
        (ComponentType.OSCILLATOR, re.compile(r"ASTX[0-9-].*")),  # TCXO
        (ComponentType.OSCILLATOR, re.compile(r"ASVTX[0-9-].*")),  # VCTCXO
        (ComponentType.OSCILLATOR_TCXO_ABRACON, re.compile(r"ASTX[0-9-].*")),
        (ComponentType.OSCILLATOR_TCXO_ABRACON, re.compile(r"ASVTX[0-9-].*")),
        (ComponentType.OSCILLATOR, re.compile(r"ASV[0-9-].*")),  # VCXO
        (ComponentType.OSCILLATOR, re.compile(r"ASXV[0-9-].*")),
        (ComponentType.OSCILLATOR_VCXO_ABRACON, re.compile(r"ASV[0-9-].*")),
        (ComponentType.OSCILLATOR_VCXO_ABRACON, re.compile(r"ASXV[0-9-].*")),
        # RTC and RF
        (ComponentType.IC, re.compile(r"AB[0-9].*RTC.*")),  # RTC modules
        (ComponentType.IC, re.compile(r"ABRTS[0-9].*")),  # RTC with supercap
        (ComponentType.IC, re.compile(r"ABA[0-9-].*")),  # Antennas
        (ComponentType.IC, re.compile(r"ABF[0-9-].*")),  # Filters
        (ComponentType.IC, re.compile(r"ABB[0-9-].*")),  # Baluns
        (ComponentType.IC, re.compile(r"ABUN[0-9-].*")),  # Diplexers
        # Inductors
        (ComponentType.INDUCTOR, re.compile(r"AIAL-?[0-9].*")),  # Air core
        (ComponentType.INDUCTOR, re.compile(r"AIML-?[0-9].*")),  # Multilayer
        (ComponentType.INDUCTOR, re.compile(r"AIRP-?[0-9].*")),  # Power
    ]
    SUPPORTED_TYPES = frozenset({
        ComponentType.CRYSTAL,
        ComponentType.CRYSTAL_ABRACON,
        ComponentType.OSCILLATOR,
        ComponentType.OSCILLATOR_ABRACON,
        ComponentType.OSCILLATOR_TCXO_ABRACON,
        ComponentType.OSCILLATOR_VCXO_ABRACON,
        ComponentType.IC,
        ComponentType.INDUCTOR,
    })
    MANUFACTURER_TYPES = frozenset({
        ComponentType.CRYSTAL_ABRACON,
        ComponentType.OSCILLATOR_ABRACON,
        ComponentType.OSCILLATOR_TCXO_ABRACON,
        ComponentType.OSCILLATOR_VCXO_ABRACON,
    })

    def extract_series(self, mpn: str | None) -> str:
        mpn = normalize_mpn(mpn)
        if not mpn:
            return ""
        if mpn.startswith("AB") and "RTC" in mpn and not mpn.startswith("ABRTS"):
            return "RTC Module"
        return lookup_prefix(mpn, _SERIES)

    def extract_package_code(self, mpn: str | None) -> str:
        """Body size: ABM8 -> '3.2 x 2.5mm', ASCO oscillators by dash letter, AIML-0603 -> '0603'"""
        mpn = normalize_mpn(mpn)
        if not mpn:
            return ""
        if mpn.startswith(("ABM", "ABL")) and not mpn.startswith("ABMM"):
            match = _CRYSTAL_SIZE.match(mpn)
            if match:
                return _CRYSTAL_SIZES.get(match.group(1), match.group(1))
            return ""
        if mpn.startswith(("ASC", "ASE", "AST", "ASV", "ASF", "ASX")):
            tokens = mpn.split("-")
            if len(tokens) > 1 and tokens[1].isalpha() and len(tokens[1]) <= 2:
                return _OSCILLATOR_SIZES.get(tokens[1], tokens[1])
            return ""
        if mpn.startswith("AI"):
            match = _INDUCTOR_SIZE.match(mpn)
            if match:
                code = match.group(1)
                return code if len(code) == 4 else _INDUCTOR_SIZES.get(code, code)
        return ""

    def _option_tokens(self, mpn: str) -> tuple[list[str], str]:
        """Split an MPN into (option tokens after the frequency, frequency token)."""
        tokens = normalize_mpn(mpn).split("-")
        for i, token in enumerate(tokens[1:], start=1):
            if decode_frequency(token) is not None and any(c.isalpha() for c in token):
                options = [t for t in tokens[i + 1:] if t not in _PACKAGING_TOKENS]
                return options, token
        return [], ""

    def get_frequency(self, mpn: str | None) -> str:
        """Frequency token: 'ABM8-25.000MHZ-B2-T' -> '25.000MHZ'"""
        if not mpn:
            return ""
        return self._option_tokens(mpn)[1]

    def get_stability_ppm(self, mpn: str | None) -> int:
        """Frequency stability in ppm when spelled out: 'ABM3-12.000MHZ-20PPM' -> 20, else 0"""
        if not mpn:
            return 0
        for token in self._option_tokens(mpn)[0]:
            match = _PPM.fullmatch(token)
            if match:
                return int(match.group(1))
        return 0

    def extract_attributes(self, mpn: str | None) -> dict[str, object]:
        return {
            "frequency": self.get_frequency(mpn),
            "stability_ppm": self.get_stability_ppm(mpn),
        }

    def is_official_replacement(self, replacement: str | None, original: str | None) -> bool:
        """Same series, package and frequency; a tighter stability may replace a looser one."""
        if not replacement or not original:
            return False
        if same_part(replacement, original):
            return True
        series = self.extract_series(replacement)
        if not series or series != self.extract_series(original):
            return False
        if self.extract_package_code(replacement) != self.extract_package_code(original):
            return False

        freq1 = decode_frequency(self.get_frequency(replacement))
        freq2 = decode_frequency(self.get_frequency(original))
        if freq1 != freq2:
            return False

        ppm1 = self.get_stability_ppm(replacement)
        ppm2 = self.get_stability_ppm(original)
        if ppm1 and ppm2:
            return ppm1 <= ppm2
        return self._option_tokens(replacement)[0] == self._option_tokens(original)[0]
