"""Winbond serial/parallel flash and EEPROM."""

import re

from ..component_types import ComponentType
from .base import ManufacturerHandler, normalize_mpn, strip_packaging_suffix

# W25Q128JVSIQ: W25Q series, 128 Mbit, JV variant, S package, I temp grade
_SERIES = re.compile(r"(W2[459][A-Z]?)(\d+)([A-Z]{2})?")
_LEADING_LETTERS = re.compile(r"[A-Z]+")

_PACKAGES = {
    "SS": "SOIC",  # 208-mil
    "S": "SOIC",
    "F": "QFN",
    "W": "WSON",
    "U": "USON",
    "D": "DIP",
}

# Second letter of the variant code -> supply range
_VOLTAGE_CLASSES = {
    "V": "3V",
    "W": "1.8V",
    "F": "1.8V",
}


class WinbondHandler(ManufacturerHandler):
    """Winbond memory.

    MEMORY is registered under three disjoint prefixes (W25, W29, W24), so only
    an evaluation over every rule classifies all three families.
    """

    name = "Winbond"
    PATTERNS = [
        (ComponentType.MEMORY, re.compile(r"W25[QNX][0-9]+.*")),  # SPI NOR/NAND flash
        (ComponentType.MEMORY, re.compile(r"W29[CNE][0-9]+.*")),  # Parallel flash
        (ComponentType.MEMORY, re.compile(r"W24[0-9]+.*")),  # EEPROM
        (ComponentType.MEMORY_FLASH, re.compile(r"W25[QNX][0-9]+.*")),
        (ComponentType.MEMORY_FLASH, re.compile(r"W29[CNE][0-9]+.*")),
        (ComponentType.MEMORY_FLASH_WINBOND, re.compile(r"W25[QNX][0-9]+.*")),
        (ComponentType.MEMORY_FLASH_WINBOND, re.compile(r"W29[CNE][0-9]+.*")),
        (ComponentType.MEMORY_EEPROM, re.compile(r"W24[0-9]+.*")),
        (ComponentType.MEMORY_EEPROM_WINBOND, re.compile(r"W24[0-9]+.*")),
    ]
    SUPPORTED_TYPES = frozenset({
        ComponentType.MEMORY,
        ComponentType.MEMORY_FLASH,
        ComponentType.MEMORY_EEPROM,
        ComponentType.MEMORY_FLASH_WINBOND,
        ComponentType.MEMORY_EEPROM_WINBOND,
    })
    MANUFACTURER_TYPES = frozenset({
        ComponentType.MEMORY_FLASH_WINBOND,
        ComponentType.MEMORY_EEPROM_WINBOND,
    })

    def extract_series(self, mpn: str | None) -> str:
        """Family, density and variant: 'W25Q128JVSIQ' -> 'W25Q128JV', 'W29C020' -> 'W29C020'"""
        match = _SERIES.match(normalize_mpn(mpn))
        return match.group(0) if match else ""

    def extract_package_code(self, mpn: str | None) -> str:
        mpn = strip_packaging_suffix(normalize_mpn(mpn))
        series = _SERIES.match(mpn)
        if not series:
            return ""
        match = _LEADING_LETTERS.match(mpn, series.end())
        if not match:
            return ""
        letters = match.group(0)
        for size in (2, 1):
            if letters[:size] in _PACKAGES:
                return _PACKAGES[letters[:size]]
        return letters[0]

    def get_density_mbit(self, mpn: str | None) -> int:
        """Density digits for SPI flash, 0 for other families."""
        match = _SERIES.match(normalize_mpn(mpn))
        if not match or not match.group(1).startswith("W25"):
            return 0
        return int(match.group(2))

    def get_voltage_class(self, mpn: str | None) -> str:
        match = _SERIES.match(normalize_mpn(mpn))
        if not match or not match.group(3):
            return ""
        return _VOLTAGE_CLASSES.get(match.group(3)[1], "")

    def extract_attributes(self, mpn: str | None) -> dict[str, object]:
        return {
            "density_mbit": self.get_density_mbit(mpn),
            "voltage_class": self.get_voltage_class(mpn),
        }
