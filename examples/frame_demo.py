from __future__ import annotations

import argparse
from pathlib import Path

from PIL import Image

from gridframe import Frame, FrameProps, GridConfig, LinearScale, fit_frame, render_frame, resolve_zero_line


def build_props(plot_width: float, plot_height: float) -> FrameProps:
    grid = GridConfig.from_mapping({"x": {"showGuide": True, "gridTicks": 9}, "y": {"withPaddings": False}})
    x_domain = grid.x.resolve_domain(-40.0, 40.0)
    y_domain = grid.y.resolve_domain(0.0, 1.0)
    return FrameProps(
        width=plot_width,
        height=plot_height,
        scale_x=LinearScale.from_bounds(x_domain, (0.0, plot_width)),
        scale_y=LinearScale.from_bounds(y_domain, (plot_height, 0.0)),
        grid_config=grid,
        x_tick_values=grid.x.tick_candidates(x_domain),
        y_tick_values=grid.y.tick_candidates(y_domain),
        y_labels_show_in_percent=True,
        y_dimension_unit="share",
    )


def main() -> None:
    parser = argparse.ArgumentParser(description="Render a chart frame to PNG.")
    parser.add_argument("--width", type=int, default=640)
    parser.add_argument("--height", type=int, default=360)
    parser.add_argument("--out", type=Path, default=Path("frame_demo.png"))
    args = parser.parse_args()

    with Frame(lambda size: print(f"frame size -> {size}")) as frame:
        result = fit_frame(frame, args.width, args.height, build_props)
        props = build_props(result.plot_width, result.plot_height)
        zero = resolve_zero_line(props.scale_x, True, width=props.width, height=props.height)
        rendered = render_frame(frame.scene, props.width, props.height, zero_line=zero)
    Image.fromarray(rendered.rgba).save(args.out)
    print(f"wrote {args.out} after {result.passes} passes (converged={result.converged})")


if __name__ == "__main__":
    main()
