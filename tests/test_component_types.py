"""Tests for the component type taxonomy."""

import pytest

from mpn_mcp.component_types import ComponentType, type_order


class TestComponentType:
    """Tests for get_component_type and get_matching_types."""

    """Generic and manufacturer-qualified tags."""

    @pytest.mark.parametrize("qualified,generic", [
        (ComponentType.CRYSTAL_ABRACON, ComponentType.CRYSTAL),
        (ComponentType.OSCILLATOR_TCXO_ABRACON, ComponentType.OSCILLATOR),
        (ComponentType.OSCILLATOR_VCXO_ABRACON, ComponentType.OSCILLATOR),
        (ComponentType.TVS_DIODE_LITTELFUSE, ComponentType.DIODE),
        (ComponentType.FUSE_LITTELFUSE, ComponentType.FUSE),
        (ComponentType.VARISTOR_LITTELFUSE, ComponentType.VARISTOR),
        (ComponentType.MEMORY_FLASH_WINBOND, ComponentType.MEMORY_FLASH),
        (ComponentType.MEMORY_EEPROM_WINBOND, ComponentType.MEMORY_EEPROM),
    ])
    def test_qualified_rolls_up_to_generic(self, qualified, generic):
        assert qualified.base_type is generic
        assert qualified.is_manufacturer_specific
        assert not generic.is_manufacturer_specific

    def test_generic_base_type_is_itself(self):
        for t in ComponentType:
            if not t.is_manufacturer_specific:
                assert t.base_type is t

    def test_every_qualified_parent_is_generic(self):
        for t in ComponentType:
            assert not t.base_type.is_manufacturer_specific

    def test_passive_and_semiconductor_flags(self):
        assert ComponentType.CAPACITOR.is_passive
        assert not ComponentType.CAPACITOR.is_semiconductor
        assert ComponentType.IC.is_semiconductor
        assert ComponentType.CRYSTAL_ABRACON.is_passive
        assert ComponentType.TVS_DIODE_LITTELFUSE.is_semiconductor
        assert not ComponentType.GENERIC.is_passive
        assert not ComponentType.GENERIC.is_semiconductor

    def test_same_family(self):
        assert ComponentType.CRYSTAL_ABRACON.is_same_family(ComponentType.CRYSTAL)
        assert ComponentType.OSCILLATOR_ABRACON.is_same_family(ComponentType.OSCILLATOR_TCXO_ABRACON)
        assert not ComponentType.CRYSTAL.is_same_family(ComponentType.OSCILLATOR)
        assert not ComponentType.CRYSTAL.is_same_family(None)

    def test_members_never_alias(self):
        assert len({t.value for t in ComponentType}) == len(list(ComponentType))


class TestTypeOrder:
    """Tests for type_order function."""

    def test_declaration_order(self):
        assert type_order(ComponentType.RESISTOR) < type_order(ComponentType.IC)
        assert type_order(ComponentType.IC) < type_order(ComponentType.CRYSTAL_ABRACON)
        assert type_order(ComponentType.GENERIC) == len(ComponentType) - 1

    def test_sorting_is_deterministic(self):
        types = {ComponentType.MEMORY, ComponentType.CRYSTAL, ComponentType.IC}
        assert sorted(types, key=type_order) == [
            ComponentType.CRYSTAL, ComponentType.IC, ComponentType.MEMORY,
        ]
