from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Callable, Mapping, Sequence

from gridframe.axis import AxisDirection, AxisGenerator, axis_bottom, axis_left
from gridframe.config import LABEL_TICK_SIZE, TICK_PADDING, UNIT_Y_MARGIN, X_TICK_OFFSET, FrameProps
from gridframe.formatting import FormatLabel, resolve_label_formatter
from gridframe.measure import FrameSize, MeasurementFeedbackLoop, TextMetrics
from gridframe.scales import Scale
from gridframe.scene import AxisGroup, FrameScene, TickText
from gridframe.ticks import AxisVisibility, TickSet, add_guide_to_ticks, get_guide_value, resolve_visibility

LOGGER = logging.getLogger(__name__)

BLOCK = "Frame"
AXIS_LINE_CLASS = f"{BLOCK}-AxisLine"
GRID_CLASS = f"{BLOCK}-Grid"


def cn_frame(element: str | None = None, modifiers: Mapping[str, bool] | None = None) -> str:
    base = f"{BLOCK}-{element}" if element else BLOCK
    classes = [base]
    for name, enabled in (modifiers or {}).items():
        if enabled:
            classes.append(f"{base}_{name}")
    return " ".join(classes)


@dataclass(frozen=True)
class AxisLabelSpec:
    slot: str
    direction: AxisDirection
    scale: Scale
    ticks: TickSet
    class_name: str
    translate: tuple[float, float]
    format_label: FormatLabel


@dataclass(frozen=True)
class FrameLayout:
    x_ticks: TickSet
    y_ticks: TickSet
    x_guide_value: float | None
    y_guide_value: float | None
    visibility: AxisVisibility
    label_specs: tuple[AxisLabelSpec, ...]
    frame_size: FrameSize


class Frame:
    """Axis/grid overlay of a linear chart.

    Each `layout()` call is one pass: resolve tick sets, decide what is
    visible, rebuild the mounted scene groups and feed the label measurements
    back through `on_frame_size_change`.
    """

    def __init__(
        self,
        on_frame_size_change: Callable[[FrameSize], None],
        *,
        metrics: TextMetrics | None = None,
    ) -> None:
        self.scene = FrameScene()
        self._feedback = MeasurementFeedbackLoop(on_frame_size_change, metrics=metrics, unit_margin=UNIT_Y_MARGIN)
        self._last_layout: FrameLayout | None = None

    def __enter__(self) -> "Frame":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def feedback(self) -> MeasurementFeedbackLoop:
        return self._feedback

    @property
    def last_layout(self) -> FrameLayout | None:
        return self._last_layout

    def close(self) -> None:
        self._feedback.close()

    def layout(self, props: FrameProps) -> FrameLayout:
        x_item = props.grid_config.x
        y_item = props.grid_config.y
        x_guide = _guide_for(props.scale_x, x_item.show_guide, props.guide_value)
        y_guide = _guide_for(props.scale_y, y_item.show_guide, props.guide_value)
        x_ticks = add_guide_to_ticks(props.x_tick_values, x_guide)
        y_ticks = add_guide_to_ticks(props.y_tick_values, y_guide)

        visibility = resolve_visibility(
            x_show_grid=x_item.show_grid,
            y_show_grid=y_item.show_grid,
            x_ticks=x_ticks,
            y_ticks=y_ticks,
        )
        self._mount(props, visibility)

        specs = self._label_specs(props, x_ticks, y_ticks)
        for spec in specs:
            self._draw_labels(spec, props)

        self._draw_grid(
            self.scene.x_grid,
            props.scale_x,
            x_ticks,
            lambda scale, ticks: axis_bottom(scale, ticks, tick_size=props.height),
            show_guide=bool(x_item.show_guide),
            guide_value=props.guide_value,
            grids_hidden=visibility.grids_hidden,
        )
        self._draw_grid(
            self.scene.y_grid,
            props.scale_y,
            y_ticks,
            lambda scale, ticks: axis_left(scale, ticks, tick_size=-props.width),
            show_guide=bool(y_item.show_guide),
            guide_value=props.guide_value,
            grids_hidden=visibility.grids_hidden,
        )
        self._draw_unit(props)

        self._feedback.sync(self.scene.x_labels, self.scene.y_labels)
        frame_size = self._feedback.poll()
        self._last_layout = FrameLayout(
            x_ticks=x_ticks,
            y_ticks=y_ticks,
            x_guide_value=x_guide,
            y_guide_value=y_guide,
            visibility=visibility,
            label_specs=tuple(specs),
            frame_size=frame_size,
        )
        return self._last_layout

    def _mount(self, props: FrameProps, visibility: AxisVisibility) -> None:
        with_x = not props.show_only_y
        hidden_y = {"isYLabelsHidden": props.hide_y_labels}
        self.scene.mount("x_grid", with_x and visibility.x_show_grid, class_name=GRID_CLASS)
        self.scene.mount("y_grid", with_x and visibility.y_show_grid, class_name=GRID_CLASS)
        self.scene.mount(
            "x_labels",
            with_x and visibility.x_show_labels,
            class_name=cn_frame("Labels", {"isAxisX": True}),
        )
        self.scene.mount(
            "y_labels",
            visibility.y_show_labels,
            class_name=f"{cn_frame('Labels', {'isAxisY': True})} {cn_frame(None, hidden_y)}",
        )
        self.scene.mount("y_unit", visibility.y_show_labels, class_name=cn_frame(None, hidden_y))
        for group in (self.scene.x_labels, self.scene.y_labels):
            if group is not None:
                group.clear()

    def _label_specs(self, props: FrameProps, x_ticks: TickSet, y_ticks: TickSet) -> list[AxisLabelSpec]:
        specs: list[AxisLabelSpec] = []
        if self.scene.x_labels is not None and props.scale_x is not None:
            specs.append(
                AxisLabelSpec(
                    slot="x_labels",
                    direction=AxisDirection.BOTTOM,
                    scale=props.scale_x,
                    ticks=x_ticks,
                    class_name=self.scene.x_labels.class_name,
                    translate=(0.0, float(props.height)),
                    format_label=resolve_label_formatter(is_vertical=False, custom=props.format_value_for_label),
                )
            )
        if self.scene.y_labels is not None and props.scale_y is not None:
            specs.append(
                AxisLabelSpec(
                    slot="y_labels",
                    direction=AxisDirection.LEFT,
                    scale=props.scale_y,
                    ticks=y_ticks,
                    class_name=self.scene.y_labels.class_name,
                    translate=(0.0, 0.0),
                    format_label=resolve_label_formatter(
                        is_vertical=True,
                        show_in_percent=props.y_labels_show_in_percent,
                        custom=props.format_y_value_for_label,
                    ),
                )
            )
        return specs

    def _draw_labels(self, spec: AxisLabelSpec, props: FrameProps) -> None:
        group: AxisGroup | None = getattr(self.scene, spec.slot)
        if group is None:
            LOGGER.debug("label group %s is not mounted; skipping", spec.slot)
            return
        if not spec.ticks:
            LOGGER.debug("no ticks for %s; skipping", spec.slot)
            return
        is_bottom = spec.direction is AxisDirection.BOTTOM
        generator = AxisGenerator(
            direction=spec.direction,
            scale=spec.scale,
            tick_values=spec.ticks,
            tick_size=LABEL_TICK_SIZE,
            tick_padding=TICK_PADDING if not is_bottom else TICK_PADDING / 2,
            tick_format=spec.format_label,
        )
        generator(group)
        group.translate = spec.translate
        if not is_bottom:
            return

        texts = group.texts
        last = len(texts) - 1
        for index, text in enumerate(texts):
            if index == 0:
                text.anchor = "start"
            elif index == last:
                text.anchor = "end"
            else:
                text.anchor = "middle"
            if props.x_labels_show_vertical:
                _rotate_vertical(text)
            if props.x_hide_first_label:
                text.visible = index != 0

    def _draw_grid(
        self,
        group: AxisGroup | None,
        scale: Scale | None,
        ticks: TickSet,
        make_axis: Callable[[Scale, Sequence[float]], AxisGenerator],
        *,
        show_guide: bool,
        guide_value: float,
        grids_hidden: bool,
    ) -> None:
        if group is None:
            return
        group.clear()
        if scale is None:
            LOGGER.debug("grid %s has no scale; skipping", group.name)
            return
        make_axis(scale, ticks)(group)
        for index, line in enumerate(group.lines):
            line.class_name = AXIS_LINE_CLASS if show_guide and line.value == guide_value else ""
            # Literal behaviour: with every grid hidden only the first line stays shown,
            # whether or not it is the guide line.
            line.visible = index == 0 if grids_hidden else True

    def _draw_unit(self, props: FrameProps) -> None:
        group = self.scene.y_unit
        if group is None:
            return
        group.clear()
        if not props.y_dimension_unit:
            return
        group.default_anchor = "end"
        group.texts.append(
            TickText(
                value=float("nan"),
                text=props.y_dimension_unit,
                x=-(LABEL_TICK_SIZE + TICK_PADDING),
                y=-UNIT_Y_MARGIN,
                baseline="middle",
            )
        )


def _guide_for(scale: Scale | None, show_guide: bool | None, value: float) -> float | None:
    if scale is None:
        return None
    return get_guide_value(show_guide=show_guide, value=value, domain=scale.domain())


def _rotate_vertical(text: TickText) -> None:
    text.rotate_deg = -90
    text.offset = (-float(TICK_PADDING), -float(X_TICK_OFFSET))
    text.pivot = (text.x, 0.0)
    text.anchor = "end"
