"""Tests for the pattern registry."""

import re

import pytest

from mpn_mcp.component_types import ComponentType
from mpn_mcp.registry import PatternRegistry, RegistryFrozenError


@pytest.fixture
def registry():
    reg = PatternRegistry()
    reg.register(ComponentType.MEMORY, r"W25[QNX][0-9]+.*", owner="Winbond")
    reg.register(ComponentType.MEMORY, r"W29[CNE][0-9]+.*", owner="Winbond")
    reg.register(ComponentType.MEMORY, r"W24[0-9]+.*", owner="Winbond")
    reg.register(ComponentType.MEMORY, re.compile(r"AT24C[0-9]+.*"), owner="Microchip")
    reg.register(ComponentType.CRYSTAL, r"DSX([0-9]{3}).*", owner="KDS")
    return reg


class TestRegistration:
    """Tests for pattern registration and freezing."""

    def test_len_counts_every_rule(self, registry):
        assert len(registry) == 5

    def test_duplicates_are_kept(self):
        reg = PatternRegistry()
        reg.register(ComponentType.IC, r"FT232.*")
        reg.register(ComponentType.IC, r"FT232.*")
        assert len(reg.patterns_for(ComponentType.IC)) == 2

    def test_returns_entry(self):
        reg = PatternRegistry()
        entry = reg.register(ComponentType.IC, r"FT232.*", owner="FTDI")
        assert entry.component_type is ComponentType.IC
        assert entry.owner == "FTDI"
        assert entry.order == 0
        assert entry.matches("FT232RL")

    def test_frozen_registry_rejects_registration(self, registry):
        assert not registry.is_frozen
        registry.freeze()
        assert registry.is_frozen
        with pytest.raises(RegistryFrozenError):
            registry.register(ComponentType.IC, r"FT232.*")
        assert len(registry) == 5

    def test_frozen_error_is_runtime_error(self):
        assert issubclass(RegistryFrozenError, RuntimeError)


class TestMatching:
    """Matching ORs over every rule registered for a type."""

    @pytest.mark.parametrize("mpn", ["W25Q128JVSIQ", "W29C020", "W24129A", "AT24C02"])
    def test_all_disjoint_prefixes_match(self, registry, mpn):
        assert registry.matches(mpn, ComponentType.MEMORY)

    def test_case_insensitive(self, registry):
        assert registry.matches("w25q128jvsiq", ComponentType.MEMORY)

    def test_full_match_only(self, registry):
        assert not registry.matches("XW25Q128", ComponentType.MEMORY)

    def test_wrong_type(self, registry):
        assert not registry.matches("W25Q128JVSIQ", ComponentType.CRYSTAL)

    @pytest.mark.parametrize("mpn", [None, ""])
    def test_empty_input(self, registry, mpn):
        assert not registry.matches(mpn, ComponentType.MEMORY)

    def test_none_type(self, registry):
        assert not registry.matches("W25Q128", None)

    def test_unregistered_type(self, registry):
        assert not registry.matches("W25Q128", ComponentType.RESISTOR)

    def test_matches_for_owner(self, registry):
        assert registry.matches_for_owner("W29C020", ComponentType.MEMORY, "Winbond")
        assert not registry.matches_for_owner("AT24C02", ComponentType.MEMORY, "Winbond")
        assert registry.matches_for_owner("AT24C02", ComponentType.MEMORY, "Microchip")

    def test_first_match_capture_groups(self, registry):
        match = registry.first_match("DSX321G", ComponentType.CRYSTAL)
        assert match is not None
        assert match.group(1) == "321"
        assert registry.first_match("ABM3", ComponentType.CRYSTAL) is None
        assert registry.first_match(None, ComponentType.CRYSTAL) is None


class TestFirstPatternShortcut:
    """The single-pattern lookup misses every prefix but the first."""

    def test_first_pattern_under_matches(self, registry):
        first = registry.first_pattern(ComponentType.MEMORY)
        assert first.fullmatch("W25Q128JVSIQ")
        assert first.fullmatch("W29C020") is None
        assert first.fullmatch("W24129A") is None
        # Full evaluation still classifies them
        assert registry.matches("W29C020", ComponentType.MEMORY)
        assert registry.matches("W24129A", ComponentType.MEMORY)

    def test_first_pattern_by_owner(self, registry):
        first = registry.first_pattern(ComponentType.MEMORY, owner="Microchip")
        assert first.fullmatch("AT24C02")

    def test_first_pattern_missing(self, registry):
        assert registry.first_pattern(ComponentType.RESISTOR) is None


class TestIntrospection:
    """Tests for registry lookups."""

    def test_patterns_for(self, registry):
        assert len(registry.patterns_for(ComponentType.MEMORY)) == 4
        assert len(registry.patterns_for(ComponentType.MEMORY, owner="Winbond")) == 3
        assert registry.patterns_for(ComponentType.RESISTOR) == ()

    def test_owners_for(self, registry):
        assert registry.owners_for(ComponentType.MEMORY) == ["Winbond", "Microchip"]
        assert registry.owners_for(ComponentType.RESISTOR) == []

    def test_has_pattern(self, registry):
        assert registry.has_pattern(ComponentType.CRYSTAL)
        assert not registry.has_pattern(ComponentType.RESISTOR)
        assert not registry.has_pattern(None)

    def test_supported_types(self, registry):
        assert registry.supported_types() == frozenset({ComponentType.MEMORY, ComponentType.CRYSTAL})
        assert registry.supported_types(owner="KDS") == frozenset({ComponentType.CRYSTAL})
        assert registry.supported_types(owner="Nobody") == frozenset()
