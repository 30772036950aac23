from __future__ import annotations

import unittest

from gridframe.ticks import add_guide_to_ticks, get_guide_value, grid_ticks_with_guide, resolve_visibility


class GuideValueTests(unittest.TestCase):
    def test_guide_included_only_when_enabled_and_in_domain(self) -> None:
        self.assertEqual(get_guide_value(show_guide=True, value=0.0, domain=(-10.0, 10.0)), 0.0)
        self.assertIsNone(get_guide_value(show_guide=False, value=0.0, domain=(-10.0, 10.0)))
        self.assertIsNone(get_guide_value(show_guide=None, value=0.0, domain=(-10.0, 10.0)))
        self.assertIsNone(get_guide_value(show_guide=True, value=0.0, domain=(1.0, 10.0)))

    def test_domain_bounds_are_inclusive(self) -> None:
        self.assertEqual(get_guide_value(show_guide=True, value=0.0, domain=(0.0, 1.0)), 0.0)
        self.assertEqual(get_guide_value(show_guide=True, value=0.0, domain=(-3.0, 0.0)), 0.0)

    def test_reversed_domain_is_accepted(self) -> None:
        self.assertEqual(get_guide_value(show_guide=True, value=0.0, domain=(5.0, -5.0)), 0.0)

    def test_non_zero_guide_value(self) -> None:
        self.assertEqual(get_guide_value(show_guide=True, value=100.0, domain=(50.0, 150.0)), 100.0)


class TickSetTests(unittest.TestCase):
    def test_symmetric_domain_gets_zero_injected(self) -> None:
        guide = get_guide_value(show_guide=True, value=0.0, domain=(-10.0, 10.0))
        ticks = add_guide_to_ticks([-10, -5, 5, 10], guide)
        self.assertEqual(ticks, (-10.0, -5.0, 0.0, 5.0, 10.0))

    def test_guide_matching_candidate_appears_once(self) -> None:
        self.assertEqual(add_guide_to_ticks([0.0, 1.0, 2.0], 0.0), (0.0, 1.0, 2.0))

    def test_unsorted_duplicate_candidates_are_normalised(self) -> None:
        ticks = add_guide_to_ticks([3.0, 1.0, 3.0, 2.0, 1.0], None)
        self.assertEqual(ticks, (1.0, 2.0, 3.0))
        self.assertEqual(tuple(sorted(ticks)), ticks)

    def test_non_finite_candidates_are_dropped(self) -> None:
        self.assertEqual(add_guide_to_ticks([1.0, float("nan"), float("inf"), None], None), (1.0,))

    def test_axes_are_resolved_independently(self) -> None:
        x, y = grid_ticks_with_guide(
            x_tick_values=[-1.0, 1.0],
            y_tick_values=[2.0, 4.0],
            x_guide_value=0.0,
            y_guide_value=None,
        )
        self.assertEqual(x, (-1.0, 0.0, 1.0))
        self.assertEqual(y, (2.0, 4.0))


class VisibilityTests(unittest.TestCase):
    def test_grid_flags_drive_labels(self) -> None:
        vis = resolve_visibility(x_show_grid=True, y_show_grid=False, x_ticks=(1.0,), y_ticks=(1.0,))
        self.assertFalse(vis.grids_hidden)
        self.assertTrue(vis.x_show_grid)
        self.assertFalse(vis.y_show_grid)
        self.assertTrue(vis.x_show_labels)
        self.assertFalse(vis.y_show_labels)

    def test_fully_hidden_grids_keep_labels_with_ticks(self) -> None:
        vis = resolve_visibility(x_show_grid=False, y_show_grid=False, x_ticks=(0.0,), y_ticks=())
        self.assertTrue(vis.grids_hidden)
        self.assertTrue(vis.x_show_grid)
        self.assertTrue(vis.y_show_grid)
        self.assertTrue(vis.x_show_labels)
        self.assertFalse(vis.y_show_labels)


if __name__ == "__main__":
    unittest.main()
