"""FTDI USB interface bridges."""

import re

from ..component_types import ComponentType
from .base import ManufacturerHandler, normalize_mpn, same_part

_FT232 = re.compile(r"FT232[A-Z]{0,2}.*")
_FT232_SUFFIX = re.compile(r"FT232([A-Z]{1,2})")
_MULTI_CHANNEL_SUFFIX = re.compile(r"FT[24]232([A-Z])")
_X_SERIES = re.compile(r"FT2[0-4][0-9]X([A-Z]{0,2}).*")
_X_SERIES_NAME = re.compile(r"FT2[0-4][0-9]X")  # FT230X, FT201X, FT240X
_FT260_SUFFIX = re.compile(r"FT260([A-Z]).*")
_FT60X_SUFFIX = re.compile(r"FT60[01]([A-Z]{1,2}).*")
# Families named by their first five characters: FT120, FT51B, FT812
_PREFIX_SERIES = re.compile(r"FT(?:12[0-2]|51[A-Z]|8[0-1][0-9])")
_ORDERING_SUFFIX = re.compile(r"-?(REEL|TUBE|TRAY)$")

_PACKAGE_CODES = {
    "R": "SSOP",  # FT232R
    "RL": "SSOP",  # SSOP-28
    "RQ": "QFN",  # QFN-32
    "S": "SSOP",  # X-series SSOP
    "Q": "QFN",
    "H": "LQFP",  # FT2232H, FT4232H
    "D": "LQFP",  # FT2232D
    "X": "TSSOP",
    "T": "TQFP",
    "BL": "LQFP",  # FT600/FT601
    "BQ": "QFN",
    "XS": "TSSOP",
    "XQ": "QFN",
}

# Checked in order; first prefix wins
_SERIES = [
    ("FT2232", "FT2232"),
    ("FT4232", "FT4232"),
    ("FT260", "FT260"),
    ("FT600", "FT600"),
    ("FT601", "FT601"),
    ("FT311D", "FT311D"),
    ("FT312D", "FT312D"),
]

# X-series UARTs by handshake lines: TX/RX < +RTS/CTS < +DTR/DSR/DCD/RI
_X_UART_LEVELS = {
    "FT230X": 0,
    "FT231X": 1,
    "FT234X": 2,
}

_INTERFACES = {
    "FT232": "UART",
    "FT2232": "UART",
    "FT4232": "UART",
    "FT230X": "UART",
    "FT231X": "UART",
    "FT234X": "UART",
    "FT200X": "I2C",
    "FT201X": "I2C",
    "FT220X": "SPI",
    "FT221X": "SPI",
    "FT240X": "FIFO",
    "FT600": "FIFO",
    "FT601": "FIFO",
    "FT260": "I2C/UART",
    "FT51A": "USB MCU",
    "FT311D": "Android AOA",
    "FT312D": "Android AOA",
}

_CHANNELS = {
    "FT2232": 2,
    "FT600": 2,
    "FT4232": 4,
}

_FULL_SPEED = {
    "FT232", "FT230X", "FT231X", "FT234X", "FT200X", "FT201X",
    "FT220X", "FT221X", "FT240X", "FT260", "FT51A",
}


def _resolve(suffix: str) -> str:
    """Exact suffix, then its first two characters, then its first; raw suffix if unknown."""
    if not suffix:
        return ""
    for candidate in (suffix, suffix[:2], suffix[:1]):
        if candidate in _PACKAGE_CODES:
            return _PACKAGE_CODES[candidate]
    return suffix


class FTDIHandler(ManufacturerHandler):
    name = "FTDI"
    PATTERNS = [
        (ComponentType.IC, re.compile(r"FT232[A-Z]{0,2}.*")),  # Single-channel UART
        (ComponentType.IC, re.compile(r"FT2232[A-Z]?.*")),  # Dual-channel
        (ComponentType.IC, re.compile(r"FT4232[A-Z]?.*")),  # Quad-channel
        (ComponentType.IC, re.compile(r"FT23[0-9]X[A-Z]?.*")),  # X-series UART
        (ComponentType.IC, re.compile(r"FT20[0-1]X[A-Z]?.*")),  # X-series I2C
        (ComponentType.IC, re.compile(r"FT22[0-1]X[A-Z]?.*")),  # X-series SPI
        (ComponentType.IC, re.compile(r"FT240X[A-Z]?.*")),  # FIFO
        (ComponentType.IC, re.compile(r"FT260[A-Z]?.*")),  # HID bridge
        (ComponentType.IC, re.compile(r"FT60[0-1][A-Z]?.*")),  # USB 3.0 FIFO
        (ComponentType.IC, re.compile(r"FT51[A-Z].*")),  # USB MCU
        (ComponentType.IC, re.compile(r"FT31[1-2]D.*")),  # Android host
        (ComponentType.IC, re.compile(r"FT12[0-2].*")),  # USB device controllers
        (ComponentType.IC, re.compile(r"FT8[0-1][0-9].*")),  # EVE display controllers
    ]
    SUPPORTED_TYPES = frozenset({ComponentType.IC})

    def extract_series(self, mpn: str | None) -> str:
        mpn = normalize_mpn(mpn)
        if not mpn:
            return ""
        for prefix, series in _SERIES:
            if mpn.startswith(prefix):
                return series
        if _FT232.fullmatch(mpn):
            return "FT232"
        match = _PREFIX_SERIES.match(mpn)
        if match:
            return match.group(0)
        match = _X_SERIES_NAME.match(mpn)
        if match:
            return match.group(0)
        return ""

    def extract_package_code(self, mpn: str | None) -> str:
        """'FT232RL' -> 'SSOP', 'FT232RQ' -> 'QFN', 'FT231XS-R' -> 'SSOP', 'FT2232H' -> 'LQFP'"""
        mpn = normalize_mpn(mpn)
        if not mpn:
            return ""
        clean = _ORDERING_SUFFIX.sub("", mpn)
        main = clean.split("-")[0]

        match = _FT232_SUFFIX.fullmatch(main)
        if match:
            return _resolve(match.group(1))
        match = _MULTI_CHANNEL_SUFFIX.fullmatch(main)
        if match:
            return _resolve(match.group(1))
        match = _X_SERIES.fullmatch(main)
        if match:
            return _resolve(match.group(1))
        match = _FT260_SUFFIX.fullmatch(main)
        if match:
            return _resolve(match.group(1))
        match = _FT60X_SUFFIX.fullmatch(main)
        if match:
            return _resolve(match.group(1))
        return ""

    def get_interface_type(self, mpn: str | None) -> str:
        series = self.extract_series(mpn)
        if series.startswith("FT8"):
            return "EVE"  # Embedded Video Engine
        return _INTERFACES.get(series, "")

    def get_channel_count(self, mpn: str | None) -> int:
        series = self.extract_series(mpn)
        if not series:
            return 0
        if series in _CHANNELS:
            return _CHANNELS[series]
        return 1 if series in _INTERFACES else 0

    def get_usb_version(self, mpn: str | None) -> str:
        series = self.extract_series(mpn)
        if series in _FULL_SPEED:
            return "USB 2.0 Full-Speed"
        if series in ("FT2232", "FT4232"):
            return "USB 2.0 High-Speed"
        if series in ("FT600", "FT601"):
            return "USB 3.0 Super-Speed"
        return ""

    def extract_attributes(self, mpn: str | None) -> dict[str, object]:
        return {
            "interface": self.get_interface_type(mpn),
            "channels": self.get_channel_count(mpn),
            "usb_version": self.get_usb_version(mpn),
        }

    def is_official_replacement(self, replacement: str | None, original: str | None) -> bool:
        """Same series (any package), or an X-series UART with at least the original's handshake lines."""
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
        if series1 in _X_UART_LEVELS and series2 in _X_UART_LEVELS:
            return _X_UART_LEVELS[series1] >= _X_UART_LEVELS[series2]
        return False
