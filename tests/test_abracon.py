"""Tests for the Abracon timing device handler."""

import pytest

from mpn_mcp.component_types import ComponentType
from mpn_mcp.handlers import AbraconHandler


@pytest.fixture
def abracon():
    return AbraconHandler()


class TestAbraconMatching:
    """Tests for Abracon pattern matching."""

    @pytest.mark.parametrize("mpn,component_type", [
        ("ABM3-12.000MHZ-B2-T", ComponentType.CRYSTAL),
        ("ABM3-12.000MHZ-B2-T", ComponentType.CRYSTAL_ABRACON),
        ("ABT26-32.768KHZ-T", ComponentType.CRYSTAL),
        ("ABS07-32.768KHZ-T", ComponentType.CRYSTAL_ABRACON),
        ("ASCO1-25.000MHZ-EK-T3", ComponentType.OSCILLATOR_ABRACON),
        ("ASTX-H11-26.000MHZ-T", ComponentType.OSCILLATOR_TCXO_ABRACON),
        ("ASV-25.000MHZ-E-T", ComponentType.OSCILLATOR_VCXO_ABRACON),
        ("ASV-25.000MHZ-E-T", ComponentType.OSCILLATOR),
        ("AB1805-RTC-T3", ComponentType.IC),
        ("ABRTS5-32.768KHZ", ComponentType.IC),
        ("AIML-0603-1R0K-T", ComponentType.INDUCTOR),
    ])
    def test_matches(self, abracon, registry_for, mpn, component_type):
        assert abracon.matches(mpn, component_type, registry_for(abracon))

    def test_qualified_implies_generic(self, abracon, registry_for):
        registry = registry_for(abracon)
        for mpn in ("ABM8-25.000MHZ", "ASCO1-25.000MHZ", "ASTX-H11-26.000MHZ"):
            for qualified in abracon.get_manufacturer_types():
                if abracon.matches(mpn, qualified, registry):
                    assert abracon.matches(mpn, qualified.base_type, registry)

    def test_manufacturer_types(self, abracon):
        assert abracon.get_manufacturer_types() == frozenset({
            ComponentType.CRYSTAL_ABRACON,
            ComponentType.OSCILLATOR_ABRACON,
            ComponentType.OSCILLATOR_TCXO_ABRACON,
            ComponentType.OSCILLATOR_VCXO_ABRACON,
        })
        assert abracon.get_manufacturer_types() <= abracon.get_supported_types()


class TestAbraconExtraction:
    """Tests for Abracon series, package and attribute extraction."""

    @pytest.mark.parametrize("mpn,expected", [
        ("ABM3-12.000MHZ-B2-T", "Standard Crystal"),
        ("ABMM2-8.000MHZ", "Ceramic Resonator"),
        ("ABS07-32.768KHZ-T", "Automotive Crystal"),
        ("ASTX-H11-26.000MHZ-T", "TCXO"),
        ("ASVTX-11-26.000MHZ", "VCTCXO"),
        ("ASV-25.000MHZ-E-T", "VCXO"),
        ("AB1805-RTC-T3", "RTC Module"),
        ("ABRTS5-32.768KHZ", "RTC with SuperCap"),
        ("AIML-0603-1R0K-T", "Multilayer Inductor"),
        ("XYZ", ""),
    ])
    def test_series(self, abracon, mpn, expected):
        assert abracon.extract_series(mpn) == expected

    @pytest.mark.parametrize("mpn,expected", [
        ("ABM3-12.000MHZ-B2-T", "5.0 x 3.2mm"),
        ("ABM8-25.000MHZ-B2-T", "3.2 x 2.5mm"),
        ("ABM10-40.000MHZ", "2.5 x 2.0mm"),
        ("ABM99-40.000MHZ", "99"),
        ("ASV-25.000MHZ-E-T", ""),  # First dash token is the frequency
        ("ASCO1-D-25.000MHZ", "3.2 x 2.5mm"),
        ("AIML-0603-1R0K-T", "0603"),
        ("AIML-10-1R0K", "1005"),
        ("ABMM2-8.000MHZ", ""),
    ])
    def test_package(self, abracon, mpn, expected):
        assert abracon.extract_package_code(mpn) == expected

    def test_frequency(self, abracon):
        assert abracon.get_frequency("ABM8-25.000MHZ-B2-T") == "25.000MHZ"
        assert abracon.get_frequency("ABS07-32.768KHZ-T") == "32.768KHZ"
        assert abracon.get_frequency("ABM8") == ""
        assert abracon.get_frequency(None) == ""

    def test_stability(self, abracon):
        assert abracon.get_stability_ppm("ABM3-12.000MHZ-20PPM-T") == 20
        assert abracon.get_stability_ppm("ABM3-12.000MHZ-B2-T") == 0
        assert abracon.extract_attributes("ABM3-12.000MHZ-10PPM") == {
            "frequency": "12.000MHZ",
            "stability_ppm": 10,
        }


class TestAbraconReplacement:
    """Tests for Abracon replacement rules."""

    def test_same_part(self, abracon):
        assert abracon.is_official_replacement("ABM3-12.000MHZ-B2-T", "ABM3-12.000MHZ-B2-T")

    def test_packaging_option_ignored(self, abracon):
        assert abracon.is_official_replacement("ABM3-12.000MHZ-B2", "ABM3-12.000MHZ-B2-T")

    def test_equivalent_frequency_spelling(self, abracon):
        assert abracon.is_official_replacement("ABM3-12MHZ-B2", "ABM3-12.000MHZ-B2")

    def test_tighter_stability_replaces_looser(self, abracon):
        assert abracon.is_official_replacement("ABM3-12.000MHZ-10PPM", "ABM3-12.000MHZ-20PPM")
        assert not abracon.is_official_replacement("ABM3-12.000MHZ-20PPM", "ABM3-12.000MHZ-10PPM")

    def test_different_options(self, abracon):
        assert not abracon.is_official_replacement("ABM3-12.000MHZ-B2", "ABM3-12.000MHZ-D2")

    def test_different_frequency(self, abracon):
        assert not abracon.is_official_replacement("ABM3-12.000MHZ-B2", "ABM3-16.000MHZ-B2")

    def test_different_size(self, abracon):
        assert not abracon.is_official_replacement("ABM8-12.000MHZ-B2", "ABM3-12.000MHZ-B2")

    def test_different_series(self, abracon):
        assert not abracon.is_official_replacement("ABL-12.000MHZ-B2", "ABM3-12.000MHZ-B2")
