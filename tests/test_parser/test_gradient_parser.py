"""Tests for the lark gradient grammar and its transformer."""

import pytest

from stylegraph.model.values import Color
from stylegraph.parser.errors import GradientParseError
from stylegraph.parser.gradient import gradient_transform, parse_gradient, parse_gradients


def _angle(value: str) -> float:
    spec = parse_gradient(value)
    assert spec is not None
    return spec.angle_deg


# ---------------------------------------------------------------------------
# Orientation
# ---------------------------------------------------------------------------


class TestOrientation:
    def test_degrees(self) -> None:
        assert _angle("linear-gradient(90deg, red, blue)") == 90

    def test_zero_degrees_is_honored(self) -> None:
        assert _angle("linear-gradient(0deg, red, blue)") == 0

    def test_turns(self) -> None:
        assert _angle("linear-gradient(0.25turn, red, blue)") == pytest.approx(90)

    def test_grads(self) -> None:
        assert _angle("linear-gradient(100grad, red, blue)") == pytest.approx(90)

    def test_to_right(self) -> None:
        assert _angle("linear-gradient(to right, red, blue)") == 90

    def test_corner_in_either_order(self) -> None:
        assert _angle("linear-gradient(to top right, red, blue)") == 45
        assert _angle("linear-gradient(to right top, red, blue)") == 45
        assert _angle("linear-gradient(to bottom left, red, blue)") == 225

    def test_default_angle(self) -> None:
        assert _angle("linear-gradient(red, blue)") == 180


# ---------------------------------------------------------------------------
# Stops
# ---------------------------------------------------------------------------


class TestStops:
    def test_positions_distributed_evenly(self) -> None:
        spec = parse_gradient("linear-gradient(red, #00ff00, blue)")
        assert spec is not None
        assert [s.position for s in spec.stops] == [0.0, 0.5, 1.0]
        assert spec.stops[1].color == Color(0, 1, 0, 1)

    def test_explicit_percent(self) -> None:
        spec = parse_gradient("linear-gradient(90deg, rgb(255, 0, 0) 0%, #00f 100%)")
        assert spec is not None
        assert [s.position for s in spec.stops] == [0.0, 1.0]
        assert spec.stops[0].color == Color(1, 0, 0, 1)
        assert spec.stops[1].color == Color(0, 0, 1, 1)

    def test_unknown_color_dropped(self) -> None:
        spec = parse_gradient("linear-gradient(red, notacolor, blue)")
        assert spec is not None
        assert len(spec.stops) == 2

    def test_no_usable_stop(self) -> None:
        assert parse_gradient("linear-gradient(foo, bar)") is None


# ---------------------------------------------------------------------------
# Kinds and failures
# ---------------------------------------------------------------------------


class TestKinds:
    def test_radial(self) -> None:
        spec = parse_gradient("radial-gradient(circle at 50% 50%, #fff, transparent 70%)")
        assert spec is not None
        assert spec.kind == "radial"
        assert spec.stops[1].position == pytest.approx(0.7)
        assert spec.stops[1].color.a == 0

    def test_repeating_linear(self) -> None:
        spec = parse_gradient("repeating-linear-gradient(45deg, red, blue 20px)")
        assert spec is not None
        assert spec.kind == "linear"
        assert spec.angle_deg == 45

    def test_first_of_list(self) -> None:
        spec = parse_gradient("linear-gradient(red, blue), radial-gradient(white, black)")
        assert spec is not None
        assert spec.kind == "linear"

    @pytest.mark.parametrize(
        "value",
        ["url(a.png)", "none", "", None, "linear-gradient(90deg red)"],
    )
    def test_not_a_gradient(self, value: str | None) -> None:
        assert parse_gradient(value) is None

    def test_strict_parser_raises(self) -> None:
        with pytest.raises(GradientParseError):
            parse_gradients("linear-gradient(90deg red)")


class TestTransform:
    def test_zero_angle_is_identity_rotation(self) -> None:
        first, second = gradient_transform(0)
        assert first == pytest.approx((1, 0, 0))
        assert second == pytest.approx((0, 1, 0))

    def test_full_turn_wraps(self) -> None:
        assert gradient_transform(360) == gradient_transform(0)
