"""
Tests for detection/brands.py — candidate brand ranking and model pick.
"""
from __future__ import annotations

from detection.brands import resolve_brands, resolve_model_number
from detection.models import ProcessedText


class TestResolveBrands:
    def test_logos_rank_ahead_of_text(self):
        brands = resolve_brands(["HP"], ["SAMSUNG", "LG Electronics"])
        assert brands == ("HP", "LG Electronics", "SAMSUNG")

    def test_longer_first_within_logos(self):
        assert resolve_brands(["Dell", "Alienware"], []) == ("Alienware", "Dell")

    def test_duplicates_collapse_and_keep_logo_rank(self):
        assert resolve_brands(["Sony"], ["BRAVIA", "Sony"]) == ("Sony", "BRAVIA")

    def test_single_characters_and_stop_words_filtered(self):
        assert resolve_brands(["X", "The"], ["And", "Q"]) == ()

    def test_equal_length_keeps_first_seen_order(self):
        assert resolve_brands([], ["WXYZ", "ABCD"]) == ("WXYZ", "ABCD")

    def test_nothing_found(self):
        assert resolve_brands([], []) == ()


class TestResolveModelNumber:
    def test_first_model_number_wins(self):
        text = ProcessedText(lines=("A100", "ZX-9000"), model_numbers=("A100", "ZX-9000"))
        assert resolve_model_number(text) == "A100"

    def test_absent(self):
        assert resolve_model_number(ProcessedText()) is None
