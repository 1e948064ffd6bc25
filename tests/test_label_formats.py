"""
Tests for print format configuration.
"""

import pytest

from apps.labels.exceptions import InvalidLabelFormat
from apps.labels.formats import DEFAULT_A4_FORMAT, DEFAULT_TAG_FORMAT, LabelFormat


class TestLabelFormat:
    """Test LabelFormat parsing and validation."""

    def test_none_gives_tag_defaults(self):
        assert LabelFormat.from_dict(None) == DEFAULT_TAG_FORMAT

    def test_a4_preset(self):
        fmt = LabelFormat.from_dict({"page_size": "A4"})

        assert fmt == DEFAULT_A4_FORMAT
        assert fmt.labels_per_page == 36

    def test_partial_override(self):
        fmt = LabelFormat.from_dict({"page_size": "A4", "rows": 5, "show_price": True})

        assert fmt.rows == 5
        assert fmt.cols == 4
        assert fmt.show_price is True

    def test_snapshot_is_complete(self):
        """Every field is present in the stored snapshot."""
        data = LabelFormat.from_dict({}).as_dict()

        assert data["version"] == 1
        assert data["page_size"] == "TAG"
        assert set(data) == {
            "version",
            "page_size",
            "rows",
            "cols",
            "margin_top",
            "margin_left",
            "horizontal_gap",
            "vertical_gap",
            "label_width",
            "label_height",
            "show_price",
            "show_encoded_price",
            "qr_size",
            "font_size",
        }

    def test_snapshot_round_trip(self):
        assert LabelFormat.from_dict(DEFAULT_A4_FORMAT.as_dict()) == DEFAULT_A4_FORMAT

    @pytest.mark.parametrize(
        "data",
        [
            {"page_size": "LETTER"},
            {"rows": 0},
            {"label_width": -1},
            {"margin_top": -2},
            {"font_size": 0},
            {"version": 2},
            {"colour": "red"},
            ["A4"],
        ],
    )
    def test_invalid_formats(self, data):
        with pytest.raises(InvalidLabelFormat):
            LabelFormat.from_dict(data)

    @pytest.mark.parametrize(
        "data",
        [
            {"rows": 1.5},
            {"cols": "2"},
            {"rows": True},
            {"version": True},
            {"margin_top": "10"},
            {"font_size": None},
            {"show_price": "yes"},
        ],
    )
    def test_wrong_types_rejected(self, data):
        """Counts must be integers, sizes numbers and toggles booleans."""
        with pytest.raises(InvalidLabelFormat):
            LabelFormat.from_dict(data)

    def test_integral_measurements_accepted(self):
        """Measurements may be given as ints or floats."""
        fmt = LabelFormat.from_dict({"label_width": 60, "label_height": 32.5})

        assert fmt.label_width == 60
        assert fmt.label_height == 32.5
