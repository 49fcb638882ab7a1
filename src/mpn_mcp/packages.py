"""Shared package-code table for ordering suffixes.

Vendors reuse a handful of suffix conventions (TI's DBV/PW, Atmel's AU/MU, TO-xxx
power letters). Unknown codes resolve to themselves so callers always get a
string back.
"""

# Ordering-code suffix -> package name
PACKAGE_CODES: dict[str, str] = {
    # DIP family
    "N": "DIP",
    "P": "DIP",
    "PU": "PDIP",
    # Atmel/Microchip style
    "AU": "TQFP",
    "MU": "QFN",
    "SU": "SOIC",
    "XU": "TSSOP",
    "CU": "WLCSP",
    # TI style
    "D": "SOIC",
    "M": "SOIC",
    "R": "SOIC",
    "DW": "SOIC-Wide",
    "PW": "TSSOP",
    "DT": "TSSOP",
    "PT": "TSSOP",
    "DGK": "MSOP",
    "DBV": "SOT-23",
    "MP": "SOT-223",
    "U": "SOT-223",
    "DRL": "SOT-553",
    "DRV": "SON",
    # Power packages
    "T": "TO-220",
    "T3": "TO-220",
    "CT": "TO-220",
    "TA": "TO-220F",
    "FP": "TO-220F",
    "K": "TO-3",
    "H": "TO-39",
    "KC": "TO-252",
    "KV": "TO-252",
    "TU": "TO-251",
    "F": "TO-251",
    "S": "D2PAK",
    "L": "DPAK",
    # Diode packages
    "RL": "DO-41",
    "G": "DO-35",
    # Generic mounting
    "SMD": "SMD",
    "THT": "THT",
}

POWER_PACKAGES = frozenset({
    "TO-220", "TO-220F", "TO-3", "TO-39", "TO-252", "TO-251", "D2PAK", "DPAK",
})

THROUGH_HOLE_PACKAGES = frozenset({
    "DIP", "PDIP", "TO-220", "TO-220F", "TO-3", "TO-39", "TO-251",
    "DO-41", "DO-35", "DO-15", "P600", "HC-49U", "THT",
})

SMD_PACKAGES = frozenset({
    "SOIC", "SOIC-Wide", "TSSOP", "MSOP", "SOT-23", "SOT-223", "SOT-553", "SON",
    "QFN", "TQFP", "LQFP", "WLCSP", "CSP", "LGA", "BGA", "WSON", "USON",
    "TO-252", "D2PAK", "DPAK", "SMA", "SMB", "SMC", "SMD",
})

# Interchangeable small-outline/DIP footprints for pin-compatible variants
_PIN_COMPATIBLE_GROUP = frozenset({"DIP", "SOIC", "TSSOP", "MSOP"})


def resolve(code: str | None) -> str:
    """Resolve an ordering suffix: 'DBV' -> 'SOT-23', unknown 'XYZ' -> 'XYZ'"""
    if not code:
        return ""
    code = code.upper()
    return PACKAGE_CODES.get(code, code)


def is_known_code(code: str | None) -> bool:
    if not code:
        return False
    return code.upper() in PACKAGE_CODES


def are_compatible(package1: str | None, package2: str | None) -> bool:
    """Whether two resolved packages can stand in for each other.

    Args:
        package1: Resolved package name
        package2: Resolved package name

    Returns:
        True for identical packages, two power packages, or two pin-compatible
        small-outline/DIP footprints
    """
    if not package1 or not package2:
        return False
    if package1 == package2:
        return True
    if package1 in POWER_PACKAGES and package2 in POWER_PACKAGES:
        return True
    return package1 in _PIN_COMPATIBLE_GROUP and package2 in _PIN_COMPATIBLE_GROUP


def is_through_hole(package: str | None) -> bool:
    return bool(package) and package in THROUGH_HOLE_PACKAGES


def is_smd(package: str | None) -> bool:
    return bool(package) and package in SMD_PACKAGES
