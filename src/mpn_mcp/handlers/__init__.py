"""Per-manufacturer MPN rule sets.

Each handler knows one vendor's part numbering:
- KDS crystals and oscillators ("DSX321G-12.000MHZ")
- Abracon crystals, oscillators, RTCs and inductors ("ABM3-12.000MHZ-B2-T")
- AKM magnetometers and audio converters ("AK8963C")
- Elna electrolytic and Dynacap capacitors ("RFS-25V101MH5#5")
- Littelfuse TVS diodes, fuses and varistors ("SMBJ15CA")
- JMicron storage bridges ("JMS583")
- FTDI USB bridges ("FT232RL")
- Winbond flash and EEPROM ("W25Q128JVSIQ")
"""

from .base import (
    ManufacturerHandler,
    find_first_digit,
    find_last_digit,
    lookup_prefix,
    normalize_mpn,
    same_part,
    series_with_prefix,
    starts_with_any,
    strip_packaging_suffix,
)
from .kds import KDSHandler
from .abracon import AbraconHandler
from .akm import AKMHandler
from .elna import ElnaHandler
from .littelfuse import LittelfuseHandler
from .jmicron import JMicronHandler
from .ftdi import FTDIHandler
from .winbond import WinbondHandler

__all__ = [
    # Contract
    "ManufacturerHandler",
    # Vendors
    "KDSHandler",
    "AbraconHandler",
    "AKMHandler",
    "ElnaHandler",
    "LittelfuseHandler",
    "JMicronHandler",
    "FTDIHandler",
    "WinbondHandler",
    # String helpers
    "normalize_mpn",
    "same_part",
    "find_first_digit",
    "find_last_digit",
    "series_with_prefix",
    "starts_with_any",
    "strip_packaging_suffix",
    "lookup_prefix",
]
