"""Tests for niche tables and loading them from JSON."""

import json

import pytest

from models import RateRange
from niche_table import (
    COARSE_TABLE,
    DETAILED_TABLE,
    load_niche_table,
    resolve_niche_table,
)


class TestBuiltinTables:

    def test_detailed_table_size_and_order(self):
        names = [n.name for n in DETAILED_TABLE.niches]
        assert len(names) == 14
        assert names[0] == "Real Estate"
        assert names[-1] == "Food & Cooking"

    def test_coarse_table_size(self):
        assert len(COARSE_TABLE.niches) == 5

    def test_sponsorship_cpms_include_default(self):
        cpms = DETAILED_TABLE.sponsorship_cpms()
        assert cpms["default"] == RateRange(8, 20)
        assert cpms["Finance & Investing"] == RateRange(20, 50)
        assert "ASMR" not in cpms

    def test_fallbacks(self):
        assert DETAILED_TABLE.sponsorship_cpm_for("ASMR") == RateRange(8, 20)
        assert DETAILED_TABLE.deals_for("Unknown") == RateRange(1, 2)
        assert DETAILED_TABLE.deals_for("Technology") == RateRange(2, 4)

    def test_table_names(self):
        assert (DETAILED_TABLE.name, COARSE_TABLE.name) == ("detailed", "coarse")

    def test_rate_range_rejects_inverted(self):
        with pytest.raises(ValueError):
            RateRange(10, 5)


class TestLoadNicheTable:

    def test_load_from_json(self, tmp_path):
        path = tmp_path / "niches.json"
        path.write_text(json.dumps({
            "niches": [
                {"name": "Cars", "keywords": ["Car", "engine"], "rpm": {"low": 4, "high": 9},
                 "sponsorshipCpm": {"low": 12, "high": 24}, "deals": {"low": 1, "high": 3}},
                {"name": "Garden", "keywords": ["garden"], "rpm": {"low": 3, "high": 6}},
            ],
            "defaultRpm": {"low": 1, "high": 5},
        }))

        table = load_niche_table(path)

        assert [n.name for n in table.niches] == ["Cars", "Garden"]
        assert table.get("Cars").keywords == ("car", "engine")
        assert table.sponsorship_cpm_for("Cars") == RateRange(12, 24)
        assert table.sponsorship_cpm_for("Garden") == RateRange(8, 20)
        assert table.default_rpm == RateRange(1, 5)
        assert table.name == str(path)

    def test_resolve_builtin_by_name(self):
        assert resolve_niche_table("coarse") is COARSE_TABLE
        assert resolve_niche_table("") is DETAILED_TABLE

    def test_resolve_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            resolve_niche_table(str(tmp_path / "missing.json"))
