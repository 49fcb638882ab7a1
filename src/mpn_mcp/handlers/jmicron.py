"""JMicron storage bridge and controller ICs."""

import re

from ..component_types import ComponentType
from .base import (
    ManufacturerHandler,
    find_last_digit,
    normalize_mpn,
    same_part,
    series_with_prefix,
    strip_packaging_suffix,
)

_SIX_CHAR_SERIES = re.compile(r"JM[SB][345][0-9]{2}.*")
_JM20_SERIES = re.compile(r"JM20[0-9]{3}.*")
_SUFFIX_FAMILY = re.compile(r"JM[SBF][0-9]+[A-Z].*")

_PACKAGE_CODES = {
    "QFN": "QFN",
    "LQFP": "LQFP",
    "BGA": "BGA",
    "Q": "QFN",
    "L": "LQFP",
    "B": "BGA",
    "T": "TQFP",
}

# USB-SATA bridge generations; a higher level replaces any lower one
_USB_SATA_LEVELS = {
    "JMS539": 1,  # USB 3.0 to SATA
    "JMS567": 2,  # + UASP
    "JMS578": 3,  # USB 3.1 Gen 1
    "JMS583": 4,  # USB 3.1 Gen 2, adds NVMe
}

# One-way (replacement, original) upgrades outside the bridge ladder
_UPGRADES = frozenset({
    ("JMB585", "JMB575"),  # PCIe Gen3 port multiplier over Gen2
})

_USB_GENERATIONS = {
    "JMS539": "USB 3.0",
    "JMS567": "USB 3.0",
    "JMS578": "USB 3.1 Gen 1",
    "JMS583": "USB 3.1 Gen 2",
}


def _lookup_package(token: str) -> str:
    """Longest table key that prefixes `token`, trying 3, 2 then 1 characters."""
    if token in _PACKAGE_CODES:
        return _PACKAGE_CODES[token]
    for size in (3, 2, 1):
        if len(token) >= size and token[:size] in _PACKAGE_CODES:
            return _PACKAGE_CODES[token[:size]]
    return ""


class JMicronHandler(ManufacturerHandler):
    name = "JMicron"
    PATTERNS = [
        (ComponentType.IC, re.compile(r"JMS5[0-9]{2}[A-Z]*.*")),  # USB-SATA/NVMe bridges
        (ComponentType.IC, re.compile(r"JMB5[0-9]{2}[A-Z]*.*")),  # PCIe-SATA
        (ComponentType.IC, re.compile(r"JMB3[0-9]{2}[A-Z]*.*")),  # SATA/PATA
        (ComponentType.IC, re.compile(r"JMF[0-9]+[A-Z]*.*")),  # Flash controllers
        (ComponentType.IC, re.compile(r"JMB4[0-9]{2}[A-Z]*.*")),  # USB
        (ComponentType.IC, re.compile(r"JM20[0-9]{3}[A-Z]*.*")),  # IDE/SATA
    ]
    SUPPORTED_TYPES = frozenset({ComponentType.IC})

    def extract_series(self, mpn: str | None) -> str:
        """'JMS583-LGEZ' -> 'JMS583', 'JM20330' -> 'JM20330', 'JMF667H' -> 'JMF667'"""
        mpn = normalize_mpn(mpn)
        if not mpn:
            return ""
        if _SIX_CHAR_SERIES.fullmatch(mpn):
            return mpn[:6]
        if _JM20_SERIES.fullmatch(mpn):
            return mpn[:7]
        if mpn.startswith("JMF"):
            series = series_with_prefix(mpn, "JMF")
            return series if series != "JMF" else ""
        return ""

    def extract_package_code(self, mpn: str | None) -> str:
        """Hyphen token first, then letters after the part number: 'JMS578-QFN' -> 'QFN'"""
        mpn = normalize_mpn(mpn)
        if not mpn:
            return ""
        clean = strip_packaging_suffix(mpn)
        if "-" in clean:
            package = _lookup_package(clean.split("-", 1)[1])
            if package:
                return package
        if _SUFFIX_FAMILY.fullmatch(clean):
            last_digit = find_last_digit(clean)
            if 0 <= last_digit < len(clean) - 1:
                return _lookup_package(clean[last_digit + 1:])
        return ""

    def get_interface_type(self, mpn: str | None) -> str:
        series = self.extract_series(mpn)
        if not series:
            return ""
        if series.startswith("JMS5"):
            return "USB-SATA/NVMe" if series == "JMS583" else "USB-SATA"
        if series.startswith("JMB5"):
            return "PCIe-SATA"
        if series.startswith("JMB3"):
            if series == "JMB363":
                return "SATA/PATA"
            if series == "JMB368":
                return "PATA"
            return "SATA"
        if series.startswith("JMB4"):
            return "USB"
        if series.startswith("JMF"):
            return "Flash"
        if series.startswith("JM20"):
            return "IDE/SATA"
        return ""

    def get_usb_generation(self, mpn: str | None) -> str:
        return _USB_GENERATIONS.get(self.extract_series(mpn), "")

    def get_port_count(self, mpn: str | None) -> int:
        series = self.extract_series(mpn)
        if series.startswith("JMS5"):
            return 1
        if series in ("JMB575", "JMB585"):
            return 5
        if series.startswith("JMB3"):
            return 2
        return 0

    def supports_uasp(self, mpn: str | None) -> bool:
        return _USB_SATA_LEVELS.get(self.extract_series(mpn), 0) >= 2

    def supports_nvme(self, mpn: str | None) -> bool:
        return self.extract_series(mpn) == "JMS583"

    def extract_attributes(self, mpn: str | None) -> dict[str, object]:
        return {
            "interface": self.get_interface_type(mpn),
            "usb_generation": self.get_usb_generation(mpn),
            "port_count": self.get_port_count(mpn),
            "uasp": self.supports_uasp(mpn),
            "nvme": self.supports_nvme(mpn),
        }

    def is_official_replacement(self, replacement: str | None, original: str | None) -> bool:
        """Same series, or a newer generation standing in for an older one.

        Package-agnostic: JMicron ships each series in one package.
        """
        if not replacement or not original:
            return False
        if same_part(replacement, original):
            return True
        series1 = self.extract_series(replacement)
        series2 = self.extract_series(original)
        if not series1 or not series2:
            return False
        if series1 == series2:
            return True
        if series1 in _USB_SATA_LEVELS and series2 in _USB_SATA_LEVELS:
            return _USB_SATA_LEVELS[series1] >= _USB_SATA_LEVELS[series2]
        return (series1, series2) in _UPGRADES
