"""KDS (Daishinku) crystals, oscillators and SAW devices."""

import re

from ..component_types import ComponentType
from .base import ManufacturerHandler, normalize_mpn, same_part

_DIGIT = re.compile(r".*\d.*")

AEC_Q200 = "AEC-Q200"
HIGH_STABILITY = "High Stability"

# DSX size code -> dimensions
_DSX_SIZES = {
    "211": "2.0 x 1.2mm",
    "221": "2.0 x 1.2mm",
    "321": "3.2 x 1.3mm",
    "320": "3.2 x 2.0mm",
    "530": "5.0 x 3.2mm",
    "531": "5.0 x 3.2mm",
    "750": "7.0 x 5.0mm",
    "840": "8.0 x 4.5mm",
    "860": "8.6 x 3.7mm",
}

_DST_SIZES = {
    "210": "2.0 x 1.2mm",
    "310": "3.1 x 1.5mm",
    "410": "4.1 x 1.5mm",
    "520": "5.0 x 2.0mm",
}

_DSO_SIZES = {
    "211": "2.0 x 1.6mm",
    "221": "2.0 x 1.6mm",
    "321": "3.2 x 2.5mm",
    "531": "5.0 x 3.2mm",
    "750": "7.0 x 5.0mm",
}

_DSB_SIZES = {
    "211": "2.0 x 1.2mm",
    "321": "3.2 x 1.3mm",
    "531": "5.0 x 3.0mm",
}

# Letters after the DSX size code
_SUFFIX_DESCRIPTIONS = {
    "G": "(SMD ceramic)",
    "GA": "(SMD ceramic AEC-Q200)",
    "S": "(SMD)",
    "SR": "(SMD tape reel)",
    "R": "(tape reel)",
    "SDH": "(SMD high stability)",
    "SDA": "(SMD automotive)",
}


class KDSHandler(ManufacturerHandler):
    """KDS crystal units (DSX/DST/1N/DX/SM), clock oscillators (DSO) and SAW parts (DSB).

    Replacement follows grade ordering: an AEC-Q200 DSX may replace the
    standard part of the same size and frequency, and a high-stability DSO may
    replace a standard DSO. Never the reverse.
    """

    name = "KDS"
    PATTERNS = [
        (ComponentType.CRYSTAL, re.compile(r"DSX[0-9].*")),  # SMD crystals
        (ComponentType.CRYSTAL, re.compile(r"DSX[0-9]{3}G.*")),  # SMD ceramic crystals
        (ComponentType.CRYSTAL, re.compile(r"DST[0-9].*")),  # Tuning fork crystals
        (ComponentType.OSCILLATOR, re.compile(r"DSO[0-9].*")),  # Clock oscillators
        (ComponentType.OSCILLATOR, re.compile(r"DSO[0-9]{3}S.*")),  # SMD oscillators
        (ComponentType.IC, re.compile(r"DSB[0-9].*")),  # SAW filters/resonators
        (ComponentType.CRYSTAL, re.compile(r"1N-?[0-9].*")),  # Crystal units (1N-26.000)
        (ComponentType.CRYSTAL, re.compile(r"DX[0-9].*")),  # DX crystals
        (ComponentType.CRYSTAL, re.compile(r"SM[0-9].*")),  # SM crystals
    ]
    SUPPORTED_TYPES = frozenset({
        ComponentType.CRYSTAL,
        ComponentType.OSCILLATOR,
        ComponentType.IC,
    })

    def extract_package_code(self, mpn: str | None) -> str:
        """Size code at chars 3-6 mapped to dimensions, plus the DSX suffix description.

        'DSX321GA' -> '3.2 x 1.3mm (SMD ceramic AEC-Q200)', '1N-26.000' -> 'HC-49U'
        """
        mpn = normalize_mpn(mpn)
        if not mpn:
            return ""
        if mpn.startswith("1N"):
            return "HC-49U"  # Through-hole crystal can
        if len(mpn) < 6:
            return ""
        size_code = mpn[3:6]
        if mpn.startswith("DSX"):
            base = _DSX_SIZES.get(size_code, size_code)
            suffix = ""
            for c in mpn[6:]:
                if not c.isalpha():
                    break
                suffix += c
            if suffix:
                return f"{base} {_SUFFIX_DESCRIPTIONS.get(suffix, f'({suffix})')}"
            return base
        if mpn.startswith("DST"):
            return _DST_SIZES.get(size_code, size_code)
        if mpn.startswith("DSO"):
            return _DSO_SIZES.get(size_code, size_code)
        if mpn.startswith("DSB"):
            return _DSB_SIZES.get(size_code, size_code)
        return ""

    def extract_series(self, mpn: str | None) -> str:
        mpn = normalize_mpn(mpn)
        if not mpn:
            return ""
        if mpn.startswith("DSX"):
            if "GA" in mpn:
                return f"DSX (SMD Crystal {AEC_Q200})"
            return "DSX (SMD Crystal)"
        if mpn.startswith("DST"):
            return "DST (Tuning Fork Crystal)"
        if mpn.startswith("DSO"):
            if "SDH" in mpn:
                return f"DSO ({HIGH_STABILITY} Oscillator)"
            return "DSO (Clock Oscillator)"
        if mpn.startswith("DSB"):
            if "SDA" in mpn:
                return f"DSB (SAW Filter/Resonator {AEC_Q200})"
            return "DSB (SAW Filter/Resonator)"
        if mpn.startswith("1N"):
            return "1N (Crystal Unit)"
        if mpn.startswith("DX"):
            return "DX (Standard Crystal)"
        if mpn.startswith("SM"):
            return "SM (Surface Mount Crystal)"
        return ""

    def get_frequency(self, mpn: str | None) -> str:
        """Frequency token after the last dash: 'DSX321G-24.000M' -> '24.000M'"""
        mpn = normalize_mpn(mpn)
        if "-" not in mpn:
            return ""
        token = mpn.rsplit("-", 1)[1]
        return token if _DIGIT.fullmatch(token) else ""

    def is_automotive(self, mpn: str | None) -> bool:
        return AEC_Q200 in self.extract_series(mpn)

    def extract_attributes(self, mpn: str | None) -> dict[str, object]:
        return {
            "frequency": self.get_frequency(mpn),
            "automotive": self.is_automotive(mpn),
        }

    def is_official_replacement(self, replacement: str | None, original: str | None) -> bool:
        if not replacement or not original:
            return False
        if same_part(replacement, original):
            return True
        series1 = self.extract_series(replacement)
        series2 = self.extract_series(original)
        if not series1 or series1.split(" ")[0] != series2.split(" ")[0]:
            return False

        # Dimensions only; the suffix description carries the grade
        dim1 = self.extract_package_code(replacement).split(" (")[0]
        dim2 = self.extract_package_code(original).split(" (")[0]
        if dim1 != dim2:
            return False

        freq1 = self.get_frequency(replacement)
        freq2 = self.get_frequency(original)
        if freq1 and freq2 and freq1 != freq2:
            return False

        if series1 == series2:
            return True
        # Grade upgrades only run one way
        for grade in (AEC_Q200, HIGH_STABILITY):
            if grade in series1 and grade not in series2:
                return True
        return False
