"""Component type taxonomy.

Two tiers of tags:
- Generic categories (CAPACITOR, CRYSTAL, IC, ...)
- Manufacturer-qualified specializations (CRYSTAL_ABRACON, TVS_DIODE_LITTELFUSE, ...)
  that always roll up to exactly one generic parent via `base_type`.

The set is closed; nothing registers new tags at runtime.
"""

from enum import Enum


class ComponentType(Enum):
    """Closed set of component category tags.

    Each member's value is (name, passive, semiconductor, parent_name). Generic members
    have no parent. The name is part of the value so members never alias.
    """

    # Generic passives
    RESISTOR = ("RESISTOR", True, False, None)
    CAPACITOR = ("CAPACITOR", True, False, None)
    INDUCTOR = ("INDUCTOR", True, False, None)
    CRYSTAL = ("CRYSTAL", True, False, None)
    FUSE = ("FUSE", True, False, None)
    VARISTOR = ("VARISTOR", True, False, None)

    # Generic semiconductors
    DIODE = ("DIODE", False, True, None)
    TRANSISTOR = ("TRANSISTOR", False, True, None)
    MOSFET = ("MOSFET", False, True, None)
    LED = ("LED", False, True, None)
    IC = ("IC", False, True, None)
    MICROCONTROLLER = ("MICROCONTROLLER", False, True, None)
    OPAMP = ("OPAMP", False, True, None)
    VOLTAGE_REGULATOR = ("VOLTAGE_REGULATOR", False, True, None)
    OSCILLATOR = ("OSCILLATOR", False, True, None)
    MEMORY = ("MEMORY", False, True, None)
    MEMORY_FLASH = ("MEMORY_FLASH", False, True, None)
    MEMORY_EEPROM = ("MEMORY_EEPROM", False, True, None)
    SENSOR = ("SENSOR", False, True, None)
    MAGNETOMETER = ("MAGNETOMETER", False, True, None)

    # Electromechanical
    CONNECTOR = ("CONNECTOR", False, False, None)

    # Abracon
    CRYSTAL_ABRACON = ("CRYSTAL_ABRACON", True, False, "CRYSTAL")
    OSCILLATOR_ABRACON = ("OSCILLATOR_ABRACON", False, True, "OSCILLATOR")
    OSCILLATOR_TCXO_ABRACON = ("OSCILLATOR_TCXO_ABRACON", False, True, "OSCILLATOR")
    OSCILLATOR_VCXO_ABRACON = ("OSCILLATOR_VCXO_ABRACON", False, True, "OSCILLATOR")

    # Littelfuse
    TVS_DIODE_LITTELFUSE = ("TVS_DIODE_LITTELFUSE", False, True, "DIODE")
    FUSE_LITTELFUSE = ("FUSE_LITTELFUSE", True, False, "FUSE")
    VARISTOR_LITTELFUSE = ("VARISTOR_LITTELFUSE", True, False, "VARISTOR")

    # Winbond
    MEMORY_FLASH_WINBOND = ("MEMORY_FLASH_WINBOND", False, True, "MEMORY_FLASH")
    MEMORY_EEPROM_WINBOND = ("MEMORY_EEPROM_WINBOND", False, True, "MEMORY_EEPROM")

    # Fallback when nothing matches
    GENERIC = ("GENERIC", False, False, None)

    @property
    def is_passive(self) -> bool:
        return self.value[1]

    @property
    def is_semiconductor(self) -> bool:
        return self.value[2]

    @property
    def base_type(self) -> "ComponentType":
        """Generic parent for qualified tags, the tag itself otherwise."""
        parent = self.value[3]
        return ComponentType[parent] if parent else self

    @property
    def is_manufacturer_specific(self) -> bool:
        return self.value[3] is not None

    def is_same_family(self, other: "ComponentType | None") -> bool:
        """True when both tags share a generic base type."""
        if other is None:
            return False
        return self.base_type is other.base_type


def type_order(component_type: ComponentType) -> int:
    """Declaration index of a tag, for deterministic iteration over type sets."""
    return _DECLARATION_ORDER[component_type]


_DECLARATION_ORDER = {t: i for i, t in enumerate(ComponentType)}
