#!/usr/bin/env python
"""
Dimension Parser and Recognizer Tests

Tests for:
- Imperial, metric and unitless dimension text
- Coercion of loosely typed recognizer values
- RecognizedValue / RoomLabel construction
- StaticRecognizer
"""

import sys
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sketchplan.constants import Confidence, FEET_PER_METER
from sketchplan.text import (
    RecognizedValue,
    Recognizer,
    RoomLabel,
    StaticRecognizer,
    has_length_unit,
    parse_dimension_text,
    parse_dimension_value,
    parse_mixed_number,
)


class TestParseDimensionText:
    """Tests for dimension text parsing."""

    def test_imperial_feet_inches(self):
        test_cases = [
            ("24'", 24.0),
            ("10'-6\"", 10.5),
            ("10' 6\"", 10.5),
            ("10'6\"", 10.5),
            ("12'-3 1/2\"", 12 + 3.5 / 12),
            ("3 1/2 ft", 3.5),
            ("8 feet", 8.0),
            ("10’-6”", 10.5),
        ]
        for text, expected in test_cases:
            assert parse_dimension_text(text) == pytest.approx(expected), text
        print(f"  [PASS] Imperial feet-inches: {len(test_cases)}/{len(test_cases)}")

    def test_imperial_inches_only(self):
        assert parse_dimension_text("126\"") == pytest.approx(10.5)
        assert parse_dimension_text("48 in") == pytest.approx(4.0)
        assert parse_dimension_text("30 inches") == pytest.approx(2.5)
        print("  [PASS] Imperial inches-only")

    def test_metric(self):
        assert parse_dimension_text("3.5m") == pytest.approx(3.5 * FEET_PER_METER)
        assert parse_dimension_text("3000mm") == pytest.approx(3.0 * FEET_PER_METER)
        assert parse_dimension_text("250 cm") == pytest.approx(2.5 * FEET_PER_METER)
        assert parse_dimension_text("2 meters") == pytest.approx(2.0 * FEET_PER_METER)
        print("  [PASS] Metric")

    def test_unitless(self):
        assert parse_dimension_text("24") == 24.0
        assert parse_dimension_text(" 12.5 ") == 12.5
        assert parse_dimension_text("7 1/2") == 7.5
        assert parse_dimension_text("1/2") == 0.5
        print("  [PASS] Unitless numbers")

    def test_non_dimensions(self):
        for text in ("", None, "abc", "KITCHEN", "12 apples", "1/0"):
            assert parse_dimension_text(text) is None, text
        print("  [PASS] Non-dimension text returns None")

    def test_mixed_number(self):
        assert parse_mixed_number("3 1/2") == 3.5
        assert parse_mixed_number("1/4") == 0.25
        with pytest.raises(ValueError):
            parse_mixed_number("1/0")
        print("  [PASS] Mixed numbers")


class TestParseDimensionValue:
    """Tests for recognizer value coercion."""

    def test_numbers(self):
        assert parse_dimension_value(24) == 24.0
        assert parse_dimension_value(2.5) == 2.5
        print("  [PASS] Numbers pass through")

    def test_strings(self):
        assert parse_dimension_value("24'") == 24.0
        assert parse_dimension_value("nope") is None
        print("  [PASS] Strings parsed")

    def test_unusable(self):
        for value in (None, True, 0, -3, float("nan"), float("inf"), [24], {"v": 1}):
            assert parse_dimension_value(value) is None, value
        print("  [PASS] Unusable values rejected")


class TestLengthUnit:
    """Tests for telling unit-bearing text from bare numbers."""

    def test_units_detected(self):
        for text in ("24'", "10'-6\"", "3 1/2 ft", "126\"", "3.5m", "250 cm", "10’-6”"):
            assert has_length_unit(text), text
        print("  [PASS] Units detected")

    def test_bare_and_non_dimension_text(self):
        for text in ("24", "7 1/2", "KITCHEN", "", None):
            assert not has_length_unit(text), text
        print("  [PASS] Bare numbers carry no unit")

    def test_reading_in_feet(self):
        assert RecognizedValue.from_raw(None, "24'").in_feet
        assert not RecognizedValue.from_raw(24).in_feet
        print("  [PASS] Reading reports whether it is in feet")


class TestRecognizer:
    """Tests for recognizer result types."""

    def test_from_raw_prefers_value(self):
        reading = RecognizedValue.from_raw(24, "2 ft")
        assert reading.value == 24.0
        assert reading.text == "2 ft"
        assert reading.confidence == Confidence.HIGH
        print("  [PASS] Numeric value preferred")

    def test_from_raw_falls_back_to_text(self):
        reading = RecognizedValue.from_raw(None, "10'-6\"")
        assert reading.value == pytest.approx(10.5)
        assert reading.is_numeric
        print("  [PASS] Text parsed when value missing")

    def test_from_raw_non_numeric(self):
        reading = RecognizedValue.from_raw("abc")
        assert reading.value is None
        assert reading.text == "abc"
        assert reading.confidence == Confidence.NONE
        assert not reading.is_numeric
        print("  [PASS] Non-numeric reading kept with value None")

    def test_room_label_from_dict(self):
        label = RoomLabel.from_dict({"text_content": "KITCHEN", "center_point": {"x": 10, "y": 20}})
        assert (label.text, label.center_x, label.center_y) == ("KITCHEN", 10.0, 20.0)
        assert label.to_dict() == {"text_content": "KITCHEN", "center_point": {"x": 10.0, "y": 20.0}}

        assert RoomLabel.from_dict({"text_content": "", "center_point": {"x": 1, "y": 1}}) is None
        assert RoomLabel.from_dict({"text_content": "BATH"}) is None
        assert RoomLabel.from_dict({"text_content": "BATH", "center_point": {"x": "a", "y": 1}}) is None
        assert RoomLabel.from_dict("BATH") is None
        print("  [PASS] Room labels parsed")

    def test_static_recognizer(self):
        reading = RecognizedValue.from_raw(24)
        rooms = [RoomLabel("HALL", 1, 2)]
        recognizer = StaticRecognizer(dimension=reading, rooms=rooms)

        assert recognizer.recognize(object()) is reading
        assert recognizer.recognize_rooms(None) == rooms
        assert StaticRecognizer().recognize(None) is None
        print("  [PASS] Static recognizer")

    def test_base_recognizer_is_abstract(self):
        with pytest.raises(NotImplementedError):
            Recognizer().recognize(None)
        assert Recognizer().recognize_rooms(None) == []
        print("  [PASS] Base recognizer")
