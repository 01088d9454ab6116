import pytest

from meridian.tracking.object_codes import code_prefix, compute_next_code


class TestComputeNextCode:
    def test_first_code(self):
        assert compute_next_code([], "demand_planning", "master_data") == "OBJ-DP-MD-001"

    def test_one_above_highest(self):
        names = ["OBJ-DP-MD-003", "OBJ-DP-MD-010", "OBJ-DP-MD-002 (copy)", "Customer Master"]
        assert compute_next_code(names, "demand_planning", "master_data") == "OBJ-DP-MD-011"

    def test_other_prefixes_are_ignored(self):
        names = ["OBJ-SP-MD-020", "OBJ-DP-DR-005"]
        assert compute_next_code(names, "demand_planning", "master_data") == "OBJ-DP-MD-001"
        assert compute_next_code(names, "supply_planning", "master_data") == "OBJ-SP-MD-021"

    def test_counter_grows_past_three_digits(self):
        assert compute_next_code(["OBJ-SP-P1-999"], "supply_planning", "priority_1") == "OBJ-SP-P1-1000"

    def test_unknown_module(self):
        with pytest.raises(ValueError):
            code_prefix("finance", "master_data")
