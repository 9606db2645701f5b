"""
Tests for detection/signals.py — payload normalisation.

Covers:
  - missing / malformed categories degrade to empty tuples
  - aggregate text annotation split, per-word annotations ignored
  - colour and web-entity parsing with provider-omitted fields
  - batch vs single-response payloads
  - rgb_to_color_name() and top_color_names()
"""
from __future__ import annotations

import logging

import pytest

from detection.models import DominantColor, Signals, WebEntity
from detection.signals import (
    extract_signals,
    first_response,
    rgb_to_color_name,
    top_color_names,
)


class TestMalformedPayloads:
    @pytest.mark.parametrize("payload", [None, "not a dict", [], 42])
    def test_non_mapping_gives_empty_signals(self, payload):
        assert extract_signals(payload) == Signals()

    def test_empty_dict_gives_empty_signals(self):
        signals = extract_signals({})
        assert signals.is_empty

    def test_wrong_field_types_are_ignored(self):
        signals = extract_signals({
            "textAnnotations": "oops",
            "labelAnnotations": {"description": "Shoe"},
            "logoAnnotations": [None, 3, "Acme"],
            "webDetection": [],
            "imagePropertiesAnnotation": "red",
        })
        assert signals.is_empty

    def test_non_string_names_are_dropped(self):
        signals = extract_signals({
            "logoAnnotations": [{"description": 5}, {"description": "Acme"}, {"description": ""}],
        })
        assert signals.logos == ("Acme",)

    def test_provider_error_is_logged_and_tolerated(self, caplog):
        with caplog.at_level(logging.WARNING):
            signals = extract_signals({"error": {"code": 3, "message": "Bad image data."}})
        assert signals.is_empty
        assert "Bad image data." in caplog.text


class TestTextLines:
    def test_aggregate_annotation_split_on_newlines(self, make_annotations):
        signals = extract_signals(make_annotations(text=["ACME", "Classic Edition"]))
        # Trailing newline from the provider leaves an empty final line
        assert signals.text_lines == ("ACME", "Classic Edition", "")

    def test_word_annotations_are_not_a_fallback(self):
        payload = {"textAnnotations": [{"locale": "en"}, {"description": "Word"}]}
        assert extract_signals(payload).text_lines == ()

    @pytest.mark.parametrize("annotations", [
        [None, {"description": "Widget"}],
        ["ACME", {"description": "Widget"}],
        [{"description": 7}, {"description": "Widget"}],
    ])
    def test_only_the_first_annotation_counts(self, annotations):
        assert extract_signals({"textAnnotations": annotations}).text_lines == ()

    def test_no_text_annotations(self, make_annotations):
        assert extract_signals(make_annotations(labels=["Shoe"])).text_lines == ()


class TestOrderedNames:
    def test_provider_order_is_kept(self, make_annotations):
        signals = extract_signals(make_annotations(
            logos=["Nike", "Adidas"], labels=["Shoe", "Footwear"], objects=["Shoe", "Person"],
        ))
        assert signals.logos == ("Nike", "Adidas")
        assert signals.labels == ("Shoe", "Footwear")
        assert signals.objects == ("Shoe", "Person")


class TestColorsAndWebEntities:
    def test_missing_channels_default_to_zero(self):
        payload = {"imagePropertiesAnnotation": {"dominantColors": {"colors": [
            {"color": {"red": 200}, "score": 0.5},
        ]}}}
        assert extract_signals(payload).colors == (DominantColor(200, 0, 0, 0.5),)

    @pytest.mark.parametrize("channel", [float("nan"), "1e999", -1e999, "NaN", "inf"])
    def test_non_finite_channels_become_zero(self, channel):
        payload = {"imagePropertiesAnnotation": {"dominantColors": {"colors": [
            {"color": {"red": channel, "green": 120}, "score": channel},
        ]}}}
        assert extract_signals(payload).colors == (DominantColor(0, 120, 0, 0.0),)

    def test_channels_clamped_to_byte_range(self):
        payload = {"imagePropertiesAnnotation": {"dominantColors": {"colors": [
            {"color": {"red": 900, "green": -40, "blue": 255.7}, "score": 0.4},
        ]}}}
        assert extract_signals(payload).colors == (DominantColor(255, 0, 255, 0.4),)

    def test_colors_parsed(self, make_annotations):
        signals = extract_signals(make_annotations(colors=[(10, 20, 30, 0.7)]))
        assert signals.colors == (DominantColor(10, 20, 30, 0.7),)

    def test_web_entities_without_description_dropped(self):
        payload = {"webDetection": {"webEntities": [
            {"entityId": "/m/1", "score": 0.9},
            {"entityId": "/m/2", "description": "Blue Widget"},
        ]}}
        assert extract_signals(payload).web_entities == (WebEntity("Blue Widget", 0.0),)

    def test_web_entities_parsed(self, make_annotations):
        signals = extract_signals(make_annotations(web=[("Blue Widget", 0.6)]))
        assert signals.web_entities == (WebEntity("Blue Widget", 0.6),)


class TestFirstResponse:
    def test_batch_uses_first_image(self):
        batch = {"responses": [{"labelAnnotations": []}, {"other": 1}]}
        assert first_response(batch) == {"labelAnnotations": []}

    def test_empty_batch(self):
        assert first_response({"responses": []}) is None

    def test_single_response_passes_through(self):
        single = {"labelAnnotations": [{"description": "Shoe"}]}
        assert first_response(single) is single

    def test_non_mapping(self):
        assert first_response(["x"]) is None


class TestColorNames:
    @pytest.mark.parametrize("rgb, name", [
        ((10, 10, 10), "black"),
        ((250, 250, 250), "white"),
        ((200, 50, 50), "red"),
        ((50, 200, 50), "green"),
        ((50, 50, 200), "blue"),
        ((120, 120, 30), "red"),
    ])
    def test_rgb_to_color_name(self, rgb, name):
        assert rgb_to_color_name(DominantColor(*rgb, score=1.0)) == name

    def test_top_colors_ranked_by_score(self):
        colors = (
            DominantColor(200, 50, 50, 0.1),
            DominantColor(10, 10, 10, 0.9),
            DominantColor(50, 50, 200, 0.5),
            DominantColor(250, 250, 250, 0.3),
        )
        assert top_color_names(colors) == ("black", "blue", "white")

    def test_no_colors(self):
        assert top_color_names(()) == ()
