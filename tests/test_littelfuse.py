"""Tests for the Littelfuse circuit protection handler."""

import pytest

from mpn_mcp.component_types import ComponentType
from mpn_mcp.handlers import LittelfuseHandler


@pytest.fixture
def littelfuse():
    return LittelfuseHandler()


class TestLittelfuseMatching:
    """Tests for Littelfuse pattern matching."""

    @pytest.mark.parametrize("mpn,component_type", [
        ("SMAJ5.0A", ComponentType.TVS_DIODE_LITTELFUSE),
        ("SMBJ15CA", ComponentType.TVS_DIODE_LITTELFUSE),
        ("SMBJ15CA", ComponentType.DIODE),
        ("P6KE6.8A", ComponentType.TVS_DIODE_LITTELFUSE),
        ("1.5KE100CA", ComponentType.TVS_DIODE_LITTELFUSE),
        ("SA5.0A", ComponentType.TVS_DIODE_LITTELFUSE),
        ("0451001.MRL", ComponentType.FUSE_LITTELFUSE),
        ("0448.500MR", ComponentType.FUSE_LITTELFUSE),
        ("217002.HXP", ComponentType.FUSE_LITTELFUSE),
        ("21502.5", ComponentType.FUSE_LITTELFUSE),
        ("V07E130P", ComponentType.VARISTOR_LITTELFUSE),
        ("V18MLE0603", ComponentType.VARISTOR_LITTELFUSE),
        ("TMOV14RP140E", ComponentType.VARISTOR_LITTELFUSE),
        ("0451001.MRL", ComponentType.FUSE),
        ("AGC2", ComponentType.FUSE),
        ("V07E130P", ComponentType.VARISTOR),
        ("ZA14", ComponentType.VARISTOR),
    ])
    def test_matches(self, littelfuse, registry_for, mpn, component_type):
        assert littelfuse.matches(mpn, component_type, registry_for(littelfuse))

    def test_tvs_needs_trailing_a(self, littelfuse, registry_for):
        assert not littelfuse.matches("SMBJ15", ComponentType.DIODE, registry_for(littelfuse))


class TestLittelfuseExtraction:
    """Tests for Littelfuse series, package and rating extraction."""

    @pytest.mark.parametrize("mpn,expected", [
        ("SMAJ5.0A", "SMAJ"),
        ("5.0SMDJ24A", "5.0SMDJ"),
        ("1.5KE100CA", "1.5KE"),
        ("15KE100CA", "1.5KE"),
        ("SA5.0A", "SA"),
        ("SAC15", "SAC"),
        ("0451001.MRL", "0451"),
        ("V07E130P", "V"),
        ("V18MLE0603", "MLE"),
        ("V1206MHS12", "MHS"),
        ("XYZ", ""),
    ])
    def test_series(self, littelfuse, mpn, expected):
        assert littelfuse.extract_series(mpn) == expected

    @pytest.mark.parametrize("mpn,expected", [
        ("SMAJ5.0A", "SMA"),
        ("SMBJ15CA", "SMB"),
        ("SMCJ24A", "SMC"),
        ("P6KE6.8A", "DO-15"),
        ("0451001.MRL", "NANO2"),
        ("V18MLE0603", "0603"),
        ("V07E130P", "07mm"),
        ("TMOV14RP140E", ""),
    ])
    def test_package(self, littelfuse, mpn, expected):
        assert littelfuse.extract_package_code(mpn) == expected

    @pytest.mark.parametrize("mpn,expected", [
        ("SMBJ15CA", "15"),
        ("SMAJ5.0A", "5.0"),
        ("1.5KE100CA", "100"),
        ("V07E130P", "130"),
        ("V18MLE0603", "18"),
        ("0451001.MRL", ""),
    ])
    def test_voltage(self, littelfuse, mpn, expected):
        assert littelfuse.get_voltage(mpn) == expected

    def test_current_rating(self, littelfuse):
        assert littelfuse.get_current_rating("0451001.MRL") == "1"
        assert littelfuse.get_current_rating("0448.500MR") == "500"
        assert littelfuse.get_current_rating("SMBJ15CA") == ""

    def test_bidirectional(self, littelfuse):
        assert littelfuse.is_bidirectional("SMBJ15CA")
        assert not littelfuse.is_bidirectional("SMBJ15A")
        assert not littelfuse.is_bidirectional("V07E130P")
        assert not littelfuse.is_bidirectional(None)

    def test_power_rating(self, littelfuse):
        assert littelfuse.get_power_rating("SMAJ5.0A") == 400
        assert littelfuse.get_power_rating("SMBJ15CA") == 600
        assert littelfuse.get_power_rating("1.5KE100CA") == 1500
        assert littelfuse.get_power_rating("0451001.MRL") == 0

    def test_attributes(self, littelfuse):
        assert littelfuse.extract_attributes("SMBJ15CA") == {
            "voltage": "15",
            "current_rating": "",
            "bidirectional": True,
            "power_rating_w": 600,
        }


class TestLittelfuseReplacement:
    """Tests for Littelfuse replacement rules."""

    def test_same_part(self, littelfuse):
        assert littelfuse.is_official_replacement("SMBJ15CA", "SMBJ15CA")
        assert littelfuse.is_official_replacement("0451001.MRL", "0451001.MRL")

    def test_directionality_must_match(self, littelfuse):
        assert not littelfuse.is_official_replacement("SMBJ15CA", "SMBJ15A")
        assert not littelfuse.is_official_replacement("SMBJ15A", "SMBJ15CA")

    def test_voltage_must_match(self, littelfuse):
        assert not littelfuse.is_official_replacement("SMBJ16A", "SMBJ15A")
        assert not littelfuse.is_official_replacement("V07E150P", "V07E130P")

    def test_fuse_current_must_match(self, littelfuse):
        assert not littelfuse.is_official_replacement("0451002.MRL", "0451001.MRL")

    def test_series_must_match(self, littelfuse):
        assert not littelfuse.is_official_replacement("SMAJ15A", "SMBJ15A")
        assert littelfuse.is_official_replacement("15KE100CA", "1.5KE100CA")
