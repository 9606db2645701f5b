"""
Tests for style.py — terminal rendering of identification results.

Covers:
  - score_bar(): width and clamping
  - identification_card(): key fields, unknown brand, confidence icon
  - debug section: every confidence factor listed
  - error messages
"""
from __future__ import annotations

import pytest

import style
from image_analyzer import identify


@pytest.fixture
def branded_result(make_annotations):
    return identify(make_annotations(
        logos=["Acme"], text=["XR-4000"], labels=["Gadget"], objects=["Laptop"],
    ))


class TestScoreBar:
    def test_half(self):
        assert style.score_bar(0.5) == "█████░░░░░"

    def test_full_and_empty(self):
        assert style.score_bar(1.0) == "██████████"
        assert style.score_bar(0.0) == "░░░░░░░░░░"

    def test_clamped(self):
        assert style.score_bar(1.7) == style.score_bar(1.0)
        assert style.score_bar(-0.3) == style.score_bar(0.0)


class TestIdentificationCard:
    def test_contains_key_fields(self, branded_result):
        card = style.identification_card(branded_result)
        assert "Acme XR-4000" in card
        assert "🏢 Acme" in card
        assert "XR-4000" in card
        assert "electronics" in card
        assert "Acme electronics" in card
        assert f"{branded_result.confidence:.2f}" in card

    def test_confidence_icon_matches_level(self, branded_result):
        card = style.identification_card(branded_result)
        assert style.CONF[branded_result.confidence_level] in card

    def test_unknown_brand_and_no_queries(self):
        card = style.identification_card(identify({}))
        assert "Unknown Product" in card
        assert "Unknown brand" in card
        assert "no search queries" in card
        assert "🔴" in card

    def test_debug_hidden_by_default(self, branded_result):
        assert "Confidence factors" not in style.identification_card(branded_result)

    def test_debug_lists_every_factor(self, branded_result):
        card = style.identification_card(branded_result, show_debug=True)
        for factor in branded_result.confidence_factors:
            assert factor.name in card
        assert "Candidate brands" in card


class TestErrors:
    def test_analysis_failed_asks_for_retry(self):
        msg = style.error_analysis_failed("Vision API error 503")
        assert "retry" in msg
        assert "503" in msg

    def test_bad_annotations_names_file(self):
        msg = style.error_bad_annotations("resp.json", "Expecting value")
        assert "resp.json" in msg
        assert "Expecting value" in msg
