"""Tests for foundry.framework.filters module."""

import pydantic
import pytest

from foundry.framework.filters import Exclude, Include, NameFilter


class TestNameFilter:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("Width", True),
            ("Widths", False),
            ("Door Height", True),
            ("PE_Voltage", True),
            ("Voltage", False),
        ],
    )
    def test_matches(self, name, expected):
        name_filter = NameFilter(equaling=["Width"], containing=["Height"], starting_with=["PE_"])
        assert name_filter.matches(name) is expected

    def test_empty(self):
        assert Include().is_empty()
        assert not Exclude(containing=["x"]).is_empty()
        assert not Include().matches("anything")

    def test_matching_is_case_sensitive(self):
        assert not NameFilter(equaling=["width"]).matches("Width")

    def test_unknown_field_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            Exclude(ending_with=["x"])
