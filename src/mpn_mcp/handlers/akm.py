"""Asahi Kasei Microdevices (AKM) magnetometers, sensors and audio converters."""

import re

from ..component_types import ComponentType
from .base import ManufacturerHandler, normalize_mpn, same_part

_LEADING_ALNUM = re.compile(r"^[A-Z]+\d+")

# Suffix after the part number -> package
_PACKAGES = {
    "TR": "LGA",
    "CS": "CSP",
    "WL": "WLCSP",
    "TS": "TSSOP",
    "QFN": "QFN",
    "BGA": "BGA",
}

# Checked in order so '192' wins over '96'
_SAMPLE_RATES = ("192", "96", "48")


class AKMHandler(ManufacturerHandler):
    name = "AKM"
    PATTERNS = [
        (ComponentType.MAGNETOMETER, re.compile(r"AK89[0-9].*")),  # 3-axis magnetic sensors
        (ComponentType.MAGNETOMETER, re.compile(r"AK099.*")),  # High precision magnetic sensors
        (ComponentType.MAGNETOMETER, re.compile(r"AK8963.*")),  # 3-axis electronic compass
        (ComponentType.MAGNETOMETER, re.compile(r"AK8975.*")),
        (ComponentType.MAGNETOMETER, re.compile(r"AK09918.*")),
        (ComponentType.SENSOR, re.compile(r"AK09[0-9].*")),  # Combo sensors
        (ComponentType.SENSOR, re.compile(r"AK0991[0-9].*")),  # Hall sensors
        (ComponentType.IC, re.compile(r"AK449[0-9].*")),  # Audio DACs
        (ComponentType.IC, re.compile(r"AK479[0-9].*")),
        (ComponentType.IC, re.compile(r"AK4490.*")),  # Premium audio DAC
        (ComponentType.IC, re.compile(r"AK5386.*")),  # Audio ADC
    ]
    SUPPORTED_TYPES = frozenset({
        ComponentType.MAGNETOMETER,
        ComponentType.SENSOR,
        ComponentType.IC,
    })

    def _is_audio(self, mpn: str) -> bool:
        return mpn.startswith(("AK4", "AK5"))

    def extract_series(self, mpn: str | None) -> str:
        """First 6 alphanumerics (5 for audio parts): 'AK8963C' -> 'AK8963', 'AK4490EQ' -> 'AK449'"""
        mpn = normalize_mpn(mpn)
        if not mpn:
            return ""
        limit = 5 if self._is_audio(mpn) else 6
        series = ""
        for c in mpn:
            if len(series) >= limit or not c.isalnum():
                break
            series += c
        return series

    def extract_package_code(self, mpn: str | None) -> str:
        """Letters trailing the part number before any dash: 'AK8963CTR' -> 'LGA'"""
        mpn = normalize_mpn(mpn)
        if not mpn:
            return ""
        main = mpn.split("-")[0]
        base = _LEADING_ALNUM.match(main)
        suffix = main[base.end():] if base else ""
        if not suffix:
            return ""
        for code, package in _PACKAGES.items():
            if suffix.endswith(code):
                return package
        return suffix

    def get_resolution(self, mpn: str | None) -> str:
        mpn = normalize_mpn(mpn)
        if "14BIT" in mpn:
            return "14"
        if "16BIT" in mpn:
            return "16"
        return ""

    def get_interface(self, mpn: str | None) -> str:
        mpn = normalize_mpn(mpn)
        if not mpn:
            return ""
        if "I2C" in mpn:
            return "I2C"
        if "SPI" in mpn:
            return "SPI"
        return ""

    def get_sample_rate(self, mpn: str | None) -> str:
        """Sample rate code in kHz: 'AK4490-192' -> '192'"""
        mpn = normalize_mpn(mpn)
        if not self._is_audio(mpn):
            return ""
        tail = mpn[len(self.extract_series(mpn)):]
        for rate in _SAMPLE_RATES:
            if rate in tail:
                return rate
        return ""

    def extract_attributes(self, mpn: str | None) -> dict[str, object]:
        return {
            "resolution_bits": self.get_resolution(mpn),
            "interface": self.get_interface(mpn),
            "sample_rate_khz": self.get_sample_rate(mpn),
        }

    def is_official_replacement(self, replacement: str | None, original: str | None) -> bool:
        """Same series; sensors need equal resolution and interface, audio parts equal sample rate."""
        if not replacement or not original:
            return False
        if same_part(replacement, original):
            return True
        series = self.extract_series(replacement)
        if not series or series != self.extract_series(original):
            return False

        if self._is_audio(series):
            return self.get_sample_rate(replacement) == self.get_sample_rate(original)

        if self.get_resolution(replacement) != self.get_resolution(original):
            return False
        iface1 = self.get_interface(replacement)
        iface2 = self.get_interface(original)
        # An unspecified interface is compatible with either bus
        return iface1 == iface2 or not iface1 or not iface2
