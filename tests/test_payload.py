"""
Payload extraction tests.
Batch lookup by key alias precedence and the per-event replace flag.
"""

import pytest

from leakage_dashboard.core.payload import extract_list, is_replace_flag, to_list


class TestExtractList:
    """Test batch extraction from params."""

    def test_first_present_alias_wins(self):
        """Test that the first present alias wins."""
        params = {"items": [{"id": "generic"}], "findings": [{"id": "specific"}]}
        assert extract_list(params, ["findings", "items", "data"]) == [{"id": "specific"}]

    def test_falls_back_to_generic_alias(self):
        """Test falling back to a generic alias."""
        params = {"data": [{"id": "d1"}]}
        assert extract_list(params, ["findings", "items", "data"]) == [{"id": "d1"}]

    def test_single_object_becomes_one_item_list(self):
        """Test wrapping a single object."""
        params = {"findings": {"id": "f1"}}
        assert extract_list(params, ["findings"]) == [{"id": "f1"}]

    def test_present_none_yields_empty_without_falling_through(self):
        """Test a present None alias."""
        params = {"findings": None, "items": [{"id": "x"}]}
        assert extract_list(params, ["findings", "items"]) == []

    def test_no_alias_present(self):
        """Test params with no alias present."""
        assert extract_list({"other": [1]}, ["findings", "items"]) == []

    def test_to_list(self):
        """Test list coercion."""
        assert to_list(None) == []
        assert to_list(("a", "b")) == ["a", "b"]
        assert to_list(0) == [0]


class TestReplaceFlag:
    """Test replace flag detection."""

    @pytest.mark.parametrize("params", [
        {"replace": True},
        {"reset": "true"},
        {"overwrite": True},
        {"clear": "true"},
    ])
    def test_truthy_flags(self, params):
        """Test values that request a replace."""
        assert is_replace_flag(params) is True

    @pytest.mark.parametrize("params", [
        {},
        {"replace": False},
        {"replace": "yes"},
        {"replace": 1},
        {"replace": "TRUE"},
        {"clear": None},
    ])
    def test_non_flags(self, params):
        """Test values that do not request a replace."""
        assert is_replace_flag(params) is False

    def test_first_present_flag_decides(self):
        """Test that the first present flag decides."""
        # replace is checked before clear
        assert is_replace_flag({"replace": False, "clear": True}) is False
        assert is_replace_flag({"replace": None, "clear": True}) is True
