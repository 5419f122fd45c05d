"""Tests for the pattern taxonomy and its lookup tables."""

import pytest

from philens.engine.catalogue import CATALOGUE, info_for
from philens.engine.patterns import PATTERN_METADATA, PatternClass, exhaustive


def test_default_weights_in_enum_order():
    weights = [p.default_weight for p in PatternClass]
    assert weights == [0.85, 0.80, 0.75, 0.70, 0.90, 0.88, 0.82, 0.95, 0.78]


def test_display_names():
    assert PatternClass.NAUTILUS_SPIRAL.display_name == "Nautilus Spiral"
    assert PatternClass("golden_ratio") is PatternClass.GOLDEN_RATIO


def test_tables_cover_every_class():
    assert set(PATTERN_METADATA) == set(PatternClass)
    assert set(CATALOGUE) == set(PatternClass)


def test_catalogue_entries_filled():
    for pattern in PatternClass:
        info = info_for(pattern)
        assert info.title
        assert info.description
        assert info.mathematical_explanation
        assert info.examples
        assert info.fun_facts


def test_exhaustive_rejects_missing_entries():
    with pytest.raises(ValueError, match="GOLDEN_RATIO"):
        exhaustive({p: 1 for p in PatternClass if p != PatternClass.GOLDEN_RATIO}, "table")


def test_tables_are_read_only():
    with pytest.raises(TypeError):
        PATTERN_METADATA[PatternClass.GOLDEN_RATIO] = None
