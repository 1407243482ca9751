"""Tests for the section page-break rule."""

from src.core.services.pagination import SECTION_BREAK_THRESHOLD_MM, needs_page_break

A4_LANDSCAPE_HEIGHT = 210.0


def test_threshold_default():
    assert SECTION_BREAK_THRESHOLD_MM == 40.0


def test_fits_above_reserve():
    assert not needs_page_break(170.0, A4_LANDSCAPE_HEIGHT)


def test_crosses_reserve():
    assert needs_page_break(170.5, A4_LANDSCAPE_HEIGHT)


def test_next_section_height_counts():
    assert not needs_page_break(140.0, A4_LANDSCAPE_HEIGHT, next_section_height=24.0)
    assert needs_page_break(150.0, A4_LANDSCAPE_HEIGHT, next_section_height=24.0)


def test_custom_threshold():
    assert needs_page_break(100.0, A4_LANDSCAPE_HEIGHT, threshold=120.0)
