from __future__ import annotations

import unittest

from gridframe.measure import BoundingBox, FrameSize, MeasurementFeedbackLoop, SizeObserver, measure_group, text_box
from gridframe.scene import AxisGroup, TickLine, TickText

from _support import FixedMetrics


class MeasureGroupTests(unittest.TestCase):
    def test_missing_or_empty_group_measures_zero(self) -> None:
        metrics = FixedMetrics()
        self.assertEqual(measure_group(None, metrics), BoundingBox(0.0, 0.0, 0.0, 0.0))
        self.assertEqual(measure_group(AxisGroup(name="empty"), metrics).height, 0.0)

    def test_anchor_and_translation_shift_text_box(self) -> None:
        group = AxisGroup(name="x_labels", translate=(10.0, 100.0))
        group.lines.append(TickLine(value=0.0, x1=0.0, y1=0.0, x2=0.0, y2=6.0))
        group.texts.append(TickText(value=0.0, text="abc", x=0.0, y=10.0, anchor="end"))
        box = measure_group(group, FixedMetrics())
        self.assertEqual(box, BoundingBox(x=-8.0, y=100.0, width=18.0, height=20.0))

    def test_hidden_text_still_occupies_space(self) -> None:
        visible = TickText(value=0.0, text="abc", x=0.0, y=0.0)
        hidden = TickText(value=0.0, text="abc", x=0.0, y=0.0, visible=False)
        metrics = FixedMetrics()
        self.assertEqual(text_box(visible, metrics), text_box(hidden, metrics))

    def test_rotation_swaps_text_extent(self) -> None:
        node = TickText(value=0.0, text="abcd", x=0.0, y=0.0, anchor="end", rotate_deg=-90, pivot=(0.0, 0.0))
        box = text_box(node, FixedMetrics())
        assert box is not None
        self.assertEqual((box.width, box.height), (10.0, 24.0))
        self.assertEqual(box.y, 0.0)

    def test_empty_text_has_no_box(self) -> None:
        self.assertIsNone(text_box(TickText(value=0.0, text="", x=0.0, y=0.0), FixedMetrics()))


class SizeObserverTests(unittest.TestCase):
    def setUp(self) -> None:
        self.batches: list[list] = []
        self.observer = SizeObserver(self.batches.append, measure=lambda node: measure_group(node, FixedMetrics()))
        self.group = AxisGroup(name="y_labels")
        self.group.texts.append(TickText(value=1.0, text="1", x=0.0, y=0.0))

    def test_observe_and_unobserve_are_idempotent(self) -> None:
        self.observer.unobserve(self.group)
        self.observer.unobserve(None)
        self.observer.observe(self.group)
        self.observer.observe(self.group)
        self.assertTrue(self.observer.is_observing(self.group))
        self.observer.poll()
        self.assertEqual(len(self.batches), 1)
        self.assertEqual(len(self.batches[0]), 1)
        self.observer.unobserve(self.group)
        self.observer.unobserve(self.group)
        self.assertFalse(self.observer.is_observing(self.group))

    def test_poll_only_delivers_changes(self) -> None:
        self.observer.observe(self.group)
        self.observer.poll()
        self.observer.poll()
        self.assertEqual(len(self.batches), 1)
        self.group.texts[0].text = "1000"
        entries = self.observer.poll()
        self.assertEqual(len(self.batches), 2)
        self.assertEqual(entries[0].width, 24.0)

    def test_unobserved_node_is_not_measured(self) -> None:
        self.observer.observe(self.group)
        self.observer.disconnect()
        self.assertEqual(self.observer.poll(), [])
        self.assertEqual(self.batches, [])


class FeedbackLoopTests(unittest.TestCase):
    def setUp(self) -> None:
        self.reports: list[FrameSize] = []
        self.loop = MeasurementFeedbackLoop(self.reports.append, metrics=FixedMetrics())
        self.x_group = AxisGroup(name="x_labels")
        self.y_group = AxisGroup(name="y_labels")
        self.loop.sync(self.x_group, self.y_group)

    def tearDown(self) -> None:
        self.loop.close()

    def test_repeated_size_reports_fire_once(self) -> None:
        self.assertIsNone(self.loop.last_reported)
        self.loop.report(self.x_group, height=20.0)
        self.loop.report(self.x_group, height=20.0)
        self.assertEqual(self.loop.last_reported, FrameSize(x_axis_height=28.0, y_axis_width=0.0))
        self.assertEqual(self.reports, [FrameSize(x_axis_height=28.0, y_axis_width=0.0)])

    def test_changed_size_fires_with_new_value(self) -> None:
        self.loop.report(self.x_group, height=20.0)
        self.loop.report(self.x_group, height=30.0)
        self.assertEqual(self.reports[-1], FrameSize(x_axis_height=38.0, y_axis_width=0.0))
        self.loop.report(self.y_group, width=42.0)
        self.assertEqual(self.reports[-1], FrameSize(x_axis_height=38.0, y_axis_width=42.0))
        self.assertEqual(len(self.reports), 3)

    def test_stale_notifications_are_ignored(self) -> None:
        self.loop.report(self.x_group, height=20.0)
        self.loop.sync(None, self.y_group)
        self.loop.report(self.x_group, height=99.0)
        stranger = AxisGroup(name="elsewhere")
        self.loop.report(stranger, width=500.0, height=500.0)
        self.assertEqual(self.reports, [FrameSize(x_axis_height=28.0, y_axis_width=0.0)])
        self.assertEqual(self.loop.frame_size, FrameSize(x_axis_height=8.0, y_axis_width=0.0))

    def test_hidden_axis_contributes_nothing_after_poll(self) -> None:
        self.loop.report(self.x_group, height=20.0)
        self.loop.sync(None, self.y_group)
        self.loop.poll()
        self.assertEqual(self.reports[-1], FrameSize(x_axis_height=8.0, y_axis_width=0.0))

    def test_context_manager_releases_on_error(self) -> None:
        loop = MeasurementFeedbackLoop(lambda size: None, metrics=FixedMetrics())
        with self.assertRaises(RuntimeError):
            with loop:
                loop.sync(self.x_group, None)
                raise RuntimeError("teardown")
        self.assertFalse(loop.is_observing(self.x_group))


if __name__ == "__main__":
    unittest.main()
