from __future__ import annotations

import unittest

from gridframe.scales import LinearScale
from gridframe.zero_line import LinePosition, resolve_zero_line


class _StubScale:
    def __init__(self, position: float | None) -> None:
        self._position = position

    def domain(self) -> tuple[float, float]:
        return (-1.0, 1.0)

    def scale(self, value: float) -> float | None:
        return self._position


class ZeroLineTests(unittest.TestCase):
    def test_horizontal_chart_draws_vertical_line(self) -> None:
        line = resolve_zero_line(_StubScale(50.0), True, width=200.0, height=120.0)
        self.assertEqual(line, LinePosition(x1=50.0, y1=0.0, x2=50.0, y2=120.0))
        assert line is not None
        self.assertTrue(line.is_vertical)

    def test_vertical_chart_draws_horizontal_line(self) -> None:
        line = resolve_zero_line(_StubScale(50.0), False, width=200.0, height=120.0)
        self.assertEqual(line, LinePosition(x1=0.0, y1=50.0, x2=200.0, y2=50.0))

    def test_unprojectable_zero_draws_nothing(self) -> None:
        self.assertIsNone(resolve_zero_line(_StubScale(None), True, width=10.0, height=10.0))
        self.assertIsNone(resolve_zero_line(_StubScale(float("nan")), True, width=10.0, height=10.0))
        self.assertIsNone(resolve_zero_line(None, False, width=10.0, height=10.0))

    def test_zero_pixel_position_draws_nothing(self) -> None:
        scale = LinearScale.from_bounds((0.0, 10.0), (0.0, 100.0))
        self.assertIsNone(resolve_zero_line(scale, True, width=100.0, height=50.0))

    def test_linear_scale_and_custom_reference_value(self) -> None:
        scale = LinearScale.from_bounds((-10.0, 10.0), (0.0, 100.0))
        self.assertEqual(resolve_zero_line(scale, True, width=100.0, height=40.0), LinePosition(50.0, 0.0, 50.0, 40.0))
        self.assertEqual(
            resolve_zero_line(scale, False, width=100.0, height=40.0, value=5.0),
            LinePosition(0.0, 75.0, 100.0, 75.0),
        )


if __name__ == "__main__":
    unittest.main()
