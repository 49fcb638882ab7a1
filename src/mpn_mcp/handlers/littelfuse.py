"""Littelfuse TVS diodes, fuses and varistors."""

import re

from ..component_types import ComponentType
from .base import ManufacturerHandler, lookup_prefix, normalize_mpn, same_part

# TVS families share the <series><standoff voltage>[C]A shape; C marks bidirectional
_TVS_SERIES = r"(?:SM[ABCD]J|5\.0SMDJ|P[46]KE|P4SMA|P6SMB|1\.?5KE|1\.?5SMC|1KSMB|3KP|SAC?)"
_TVS_RATING = re.compile(_TVS_SERIES + r"([0-9]+\.?[0-9]*)(C?)A")
_VARISTOR_VOLTAGE = re.compile(r"V[0-9]{2}[EPD]([0-9]+)")  # V07E130P: 07mm disc, 130V
_MLE_VOLTAGE = re.compile(r"V([0-9]{2})MLE")
_FUSE_CURRENT = re.compile(r"045[1-4]([0-9.]+)\.")
_NANO_SMF_CURRENT = re.compile(r"0448\.?([0-9]+)")
_MLE_SIZE = re.compile(r"V[0-9]{2}MLE(0402|0603|0805|1206)")
_DISC_SIZE = re.compile(r"V([0-9]{2})[EP]")


def _tvs(prefix: str) -> re.Pattern[str]:
    return re.compile(prefix + r"[0-9]+\.?[0-9]*C?A.*")


# Longer/more specific prefixes first
_SERIES = [
    ("SMAJ", "SMAJ"),
    ("SMBJ", "SMBJ"),
    ("SMCJ", "SMCJ"),
    ("5.0SMDJ", "5.0SMDJ"),
    ("SMDJ", "SMDJ"),
    ("P4KE", "P4KE"),
    ("P6KE", "P6KE"),
    ("P4SMA", "P4SMA"),
    ("P6SMB", "P6SMB"),
    ("1.5KE", "1.5KE"),
    ("15KE", "1.5KE"),
    ("1.5SMC", "1.5SMC"),
    ("15SMC", "1.5SMC"),
    ("1KSMB", "1KSMB"),
    ("3KP", "3KP"),
    ("SAC", "SAC"),
    ("0451", "0451"),
    ("0452", "0452"),
    ("0453", "0453"),
    ("0454", "0454"),
    ("0448", "0448"),
    ("154", "154"),
    ("155", "155"),
    ("215", "215"),
    ("216", "216"),
    ("217", "217"),
    ("218", "218"),
    ("AGC", "AGC"),
    ("3AG", "3AG"),
    ("TMOV", "TMOV"),
    ("AUMOV", "AUMOV"),
    ("ZA", "ZA"),
    ("MLV", "MLV"),
]

# Series -> package
_PACKAGES = {
    "SMAJ": "SMA",  # DO-214AC
    "P4SMA": "SMA",
    "SMBJ": "SMB",  # DO-214AA
    "P6SMB": "SMB",
    "1KSMB": "SMB",
    "SMCJ": "SMC",  # DO-214AB
    "1.5SMC": "SMC",
    "SMDJ": "SMD",
    "5.0SMDJ": "SMD",
    "P4KE": "DO-41",
    "P6KE": "DO-15",
    "1.5KE": "DO-15",
    "SA": "DO-15",
    "SAC": "DO-15",
    "3KP": "P600",
    "0451": "NANO2",
    "0452": "NANO2",
    "0453": "NANO2",
    "0454": "NANO2",
    "0448": "NANO2-SMF",
    "154": "5x20mm",
    "155": "5x20mm",
    "215": "5x20mm",
    "216": "5x20mm",
    "217": "5x20mm",
    "218": "5x20mm",
    "AGC": "6.3x32mm",
    "3AG": "6.3x32mm",
}

# Peak pulse power in watts
_POWER_RATINGS = {
    "SMAJ": 400,
    "P4KE": 400,
    "P4SMA": 400,
    "SA": 500,
    "SAC": 500,
    "SMBJ": 600,
    "P6KE": 600,
    "P6SMB": 600,
    "1KSMB": 1000,
    "SMCJ": 1500,
    "1.5KE": 1500,
    "1.5SMC": 1500,
    "SMDJ": 3000,
    "3KP": 3000,
    "5.0SMDJ": 5000,
}


class LittelfuseHandler(ManufacturerHandler):
    """Littelfuse circuit protection.

    Replacement needs the same series, the same voltage or fuse current code and
    the same directionality (unidirectional 'A' vs bidirectional 'CA').
    """

    name = "Littelfuse"
    PATTERNS = [
        # TVS diodes, under both the generic and qualified tag
        *[
            (component_type, _tvs(prefix))
            for prefix in (
                "SMAJ", "SMBJ", "SMCJ", "SMDJ", r"5\.0SMDJ", "P4KE", "P6KE",
                "P4SMA", "P6SMB", r"1\.?5KE", r"1\.?5SMC", "1KSMB", "3KP", "SAC?",
            )
            for component_type in (ComponentType.DIODE, ComponentType.TVS_DIODE_LITTELFUSE)
        ],
        # Fuses
        *[
            (component_type, re.compile(pattern))
            for pattern in (
                r"045[1-4][0-9.]+.*",  # NANO2
                r"0448[0-9.]+.*",  # NANO2 SMF
                r"15[45][0-9.]+.*",
                r"21[5-8][0-9.]+.*",  # 5x20mm cartridge
                r"AGC[0-9.]+.*",
                r"3AG[0-9.]+.*",
            )
            for component_type in (ComponentType.FUSE, ComponentType.FUSE_LITTELFUSE)
        ],
        # Varistors
        *[
            (component_type, re.compile(pattern))
            for pattern in (
                r"V[0-9]{2,3}[EPD][0-9]+.*",  # Radial MOV
                r"V[0-9]{2}MLE[0-9]+.*",  # Multilayer
                r"V[0-9]{4}MHS[0-9]+.*",
                r"V[0-9]+[BCEMP]A[0-9]+.*",
                r"TMOV[0-9]+.*",
                r"AUMOV[0-9]+.*",
                r"ZA[0-9]+.*",
                r"MLV[0-9]+.*",
            )
            for component_type in (ComponentType.VARISTOR, ComponentType.VARISTOR_LITTELFUSE)
        ],
    ]
    SUPPORTED_TYPES = frozenset({
        ComponentType.DIODE,
        ComponentType.FUSE,
        ComponentType.VARISTOR,
        ComponentType.TVS_DIODE_LITTELFUSE,
        ComponentType.FUSE_LITTELFUSE,
        ComponentType.VARISTOR_LITTELFUSE,
    })
    MANUFACTURER_TYPES = frozenset({
        ComponentType.TVS_DIODE_LITTELFUSE,
        ComponentType.FUSE_LITTELFUSE,
        ComponentType.VARISTOR_LITTELFUSE,
    })

    def extract_series(self, mpn: str | None) -> str:
        mpn = normalize_mpn(mpn)
        if not mpn:
            return ""
        series = lookup_prefix(mpn, _SERIES)
        if series:
            return series
        if re.match(r"SA[0-9]", mpn):
            return "SA"
        if re.match(r"V[0-9]{2}MLE", mpn):
            return "MLE"
        if re.match(r"V[0-9]{4}MHS", mpn):
            return "MHS"
        if re.match(r"V[0-9]", mpn):
            return "V"
        return ""

    def extract_package_code(self, mpn: str | None) -> str:
        """Package by series: 'SMAJ5.0A' -> 'SMA', 'V07E130P' -> '07mm', 'V18MLE0603' -> '0603'"""
        mpn = normalize_mpn(mpn)
        if not mpn:
            return ""
        package = _PACKAGES.get(self.extract_series(mpn))
        if package:
            return package
        match = _MLE_SIZE.match(mpn)
        if match:
            return match.group(1)
        match = _DISC_SIZE.match(mpn)
        if match:
            return f"{match.group(1)}mm"  # Disc diameter
        return ""

    def get_voltage(self, mpn: str | None) -> str:
        """Standoff (TVS) or varistor voltage code: 'SMBJ15CA' -> '15', 'V07E130P' -> '130'"""
        mpn = normalize_mpn(mpn)
        if not mpn:
            return ""
        for pattern in (_TVS_RATING, _VARISTOR_VOLTAGE, _MLE_VOLTAGE):
            match = pattern.match(mpn)
            if match:
                return match.group(1)
        return ""

    def get_current_rating(self, mpn: str | None) -> str:
        """Fuse current code: '0451001.MRL' -> '1', '0448.500' -> '500'"""
        mpn = normalize_mpn(mpn)
        if not mpn:
            return ""
        match = _FUSE_CURRENT.match(mpn)
        if match:
            return match.group(1).lstrip("0") or "0"
        match = _NANO_SMF_CURRENT.match(mpn)
        return match.group(1) if match else ""

    def is_bidirectional(self, mpn: str | None) -> bool:
        """TVS with the 'C' marker before the trailing 'A': 'SMAJ5.0CA' -> True"""
        match = _TVS_RATING.match(normalize_mpn(mpn))
        return bool(match and match.group(2))

    def get_power_rating(self, mpn: str | None) -> int:
        """Peak pulse power in watts, 0 when unknown."""
        return _POWER_RATINGS.get(self.extract_series(mpn), 0)

    def extract_attributes(self, mpn: str | None) -> dict[str, object]:
        return {
            "voltage": self.get_voltage(mpn),
            "current_rating": self.get_current_rating(mpn),
            "bidirectional": self.is_bidirectional(mpn),
            "power_rating_w": self.get_power_rating(mpn),
        }

    def is_official_replacement(self, replacement: str | None, original: str | None) -> bool:
        if not replacement or not original:
            return False
        if same_part(replacement, original):
            return True
        series = self.extract_series(replacement)
        if not series or series != self.extract_series(original):
            return False
        if self.get_voltage(replacement) != self.get_voltage(original):
            return False
        if self.get_current_rating(replacement) != self.get_current_rating(original):
            return False
        return self.is_bidirectional(replacement) == self.is_bidirectional(original)
