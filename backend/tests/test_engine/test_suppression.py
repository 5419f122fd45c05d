"""Tests for non-maximum suppression."""

from philens.engine.detection import Detection, Rectangle
from philens.engine.patterns import PatternClass
from philens.engine.suppression import SuppressionEngine, overlaps, sort_by_confidence, suppress


def _det(x, y, w, h, confidence, pattern=PatternClass.GOLDEN_RATIO):
    return Detection.in_box(pattern, confidence, Rectangle(x, y, w, h), observed_at=0.0)


def test_overlapping_lower_confidence_dropped():
    a = _det(0, 0, 100, 100, 0.9)
    b = _det(10, 10, 100, 100, 0.8)
    c = _det(500, 500, 50, 50, 0.7)
    assert suppress([a, b, c]) == [a, c]


def test_exactly_at_fraction_is_kept():
    a = _det(0, 0, 100, 100, 0.9)
    b = _det(70, 0, 100, 100, 0.8)  # overlap 3000 = 0.3 * 10000
    assert suppress([a, b]) == [a, b]


def test_small_box_inside_large_is_dropped():
    large = _det(0, 0, 100, 100, 0.9)
    small = _det(10, 10, 20, 20, 0.8)
    assert suppress([large, small]) == [large]


def test_ties_resolved_by_input_order():
    a = _det(0, 0, 100, 100, 0.8)
    b = _det(5, 5, 100, 100, 0.8)
    assert suppress(sort_by_confidence([a, b])) == [a]
    assert suppress(sort_by_confidence([b, a])) == [b]


def test_suppression_crosses_classes():
    a = _det(0, 0, 100, 100, 0.9, PatternClass.SPIRAL_FIBONACCI)
    b = _det(0, 0, 100, 100, 0.8, PatternClass.SHELL_SPIRAL)
    assert suppress([a, b]) == [a]


def test_zero_area_never_suppresses():
    a = _det(0, 0, 0, 100, 0.9)
    b = _det(0, 0, 100, 100, 0.8)
    assert suppress([a, b]) == [a, b]
    assert not overlaps(a.bounding_box, b.bounding_box, 0.3)


def test_result_is_pairwise_non_overlapping():
    dets = sort_by_confidence(
        _det(i * 30, (i % 3) * 30, 80, 80, 0.5 + i * 0.04) for i in range(10)
    )
    kept = suppress(dets)
    for i, a in enumerate(kept):
        for b in kept[i + 1 :]:
            assert not overlaps(a.bounding_box, b.bounding_box, 0.3)


def test_engine_uses_its_fraction():
    a = _det(0, 0, 100, 100, 0.9)
    b = _det(50, 0, 100, 100, 0.8)  # half overlapping
    assert SuppressionEngine(0.6).suppress([a, b]) == [a, b]
    assert SuppressionEngine(0.3).suppress([a, b]) == [a]


def test_empty_input():
    assert suppress([]) == []
