"""Tests for the Elna capacitor handler."""

import pytest

from mpn_mcp.component_types import ComponentType
from mpn_mcp.handlers import ElnaHandler


@pytest.fixture
def elna():
    return ElnaHandler()


class TestElnaMatching:
    """Tests for Elna pattern matching."""

    @pytest.mark.parametrize("mpn", [
        "RFS-25V101MH5#5",
        "ROA-50V100MF3",
        "ROB-16V470MH5",
        "RE3-25V101M",
        "RJH-35V221MH7",
        "RBD-50V100MH5",
        "DB-5R5D105T",
        "DZ5R5H104V",
        "LAO1V103MELA",
        "CE-BP 47UF 100V",
    ])
    def test_matches(self, elna, registry_for, mpn):
        assert elna.matches(mpn, ComponentType.CAPACITOR, registry_for(elna))

    def test_capacitor_only(self, elna):
        assert elna.get_supported_types() == frozenset({ComponentType.CAPACITOR})


class TestElnaExtraction:
    """Tests for Elna series, package and rating extraction."""

    @pytest.mark.parametrize("mpn,expected", [
        ("RFS-25V101MH5#5", "Silmic II"),
        ("ROA-50V100MF3", "TONEREX Type A"),
        ("ROB-16V470MH5", "TONEREX Type B"),
        ("RJH-35V221MH7", "RJH High Temp"),
        ("DB-5R5D105T", "Dynacap Standard"),
        ("DZ5R5H104V", "Dynacap Ultra-Low Profile"),
        ("LAS1V472MELA", "STARGET Standard"),
        ("XYZ", ""),
    ])
    def test_series(self, elna, mpn, expected):
        assert elna.extract_series(mpn) == expected

    @pytest.mark.parametrize("mpn,expected", [
        ("RFS-25V101MH5#5", "6.3x11mm"),
        ("ROA-50V100MF3", "5x7mm"),
        ("RJH-35V221ML5", "10x12.5mm"),
        ("RE3-25V101MZ9", "Z9"),  # Unknown case code passes through
        ("RE3-25V101M", ""),
        ("DB-5R5D105T", "Radial THT"),
        ("DZ5R5H104V", "Vertical SMD"),
        ("DB-5R5D105X", "X"),  # Unknown style letter passes through
        ("DZ-2R5D106", ""),
        ("", ""),
    ])
    def test_package(self, elna, mpn, expected):
        assert elna.extract_package_code(mpn) == expected

    def test_ratings(self, elna):
        assert elna.get_voltage("RFS-25V101MH5#5") == "25"
        assert elna.get_capacitance_code("RFS-25V101MH5#5") == "101"
        assert elna.get_capacitance("RFS-25V101MH5#5") == pytest.approx(100e-6)
        assert elna.get_capacitance("ROB-16V470MH5") == pytest.approx(47e-6)
        assert elna.get_voltage("DB-5R5D105T") == "5.5"
        assert elna.get_capacitance_code("DB-5R5D105T") == "105"
        assert elna.get_capacitance("DB-5R5D105T") == pytest.approx(1.0)
        assert elna.get_voltage("DZ-2R5D106") == "2.5"

    @pytest.mark.parametrize("mpn", ["", None, "LAO1V103MELA", "CE-BP 47UF 100V", "RE3-25V"])
    def test_ratings_absent(self, elna, mpn):
        assert elna.get_capacitance(mpn) == 0.0
        assert elna.extract_attributes(mpn)["capacitance_farads"] == 0.0

    def test_attributes(self, elna):
        attrs = elna.extract_attributes("RFS-25V101MH5#5")
        assert attrs["voltage"] == "25"
        assert attrs["capacitance_code"] == "101"
        assert attrs["capacitance_farads"] == pytest.approx(100e-6)


class TestElnaReplacement:
    """Tests for Elna replacement rules."""

    def test_same_part(self, elna):
        assert elna.is_official_replacement("RFS-25V101MH5#5", "RFS-25V101MH5#5")

    def test_silmic_upgrades_tonerex(self, elna):
        assert elna.is_official_replacement("RFS-25V101MH5", "ROA-25V101MH5")
        assert elna.is_official_replacement("RFS-25V101MH5", "ROB-25V101MH5")
        assert not elna.is_official_replacement("ROA-25V101MH5", "RFS-25V101MH5")

    def test_tonerex_types_interchangeable(self, elna):
        assert elna.is_official_replacement("ROA-25V101MH5", "ROB-25V101MH5")
        assert elna.is_official_replacement("ROB-25V101MH5", "ROA-25V101MH5")

    def test_ratings_must_match(self, elna):
        assert not elna.is_official_replacement("RFS-35V101MH5", "RFS-25V101MH5")
        assert not elna.is_official_replacement("RFS-25V221MH5", "RFS-25V101MH5")

    def test_case_size_must_match(self, elna):
        assert not elna.is_official_replacement("RFS-25V101MH7", "RFS-25V101MH5")

    def test_unrelated_series(self, elna):
        assert not elna.is_official_replacement("RE3-25V101MH5", "RFS-25V101MH5")

    @pytest.mark.parametrize("mpn", ["DB-5R5D105T", "DZ-2R5D106", "LAO1234", "CE-BP100"])
    def test_same_part_without_case_code(self, elna, mpn):
        assert elna.is_official_replacement(mpn, mpn)

    def test_dynacap_ratings(self, elna):
        assert elna.is_official_replacement("DB5R5D105T", "DB-5R5D105T")
        assert not elna.is_official_replacement("DB-5R5D105V", "DB-5R5D105T")  # Mounting style
        assert not elna.is_official_replacement("DB-5R5D474T", "DB-5R5D105T")

    def test_missing_ratings(self, elna):
        assert not elna.is_official_replacement("LAO1234", "LAO1235")
        assert not elna.is_official_replacement(None, "RFS-25V101MH5")
