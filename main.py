from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
import sys
from typing import Sequence

from airbuddy_plot.adapters import TelemetryArrays, load_arrays_json
from airbuddy_plot.api import hover_chart, plan_chart
from airbuddy_plot.config import PRESETS, ChartConfig, load_chart_config, preset
from airbuddy_plot.errors import ChartConfigError, ChartDataError
from airbuddy_plot.planner import DrawPlan
from airbuddy_plot.render import THEMES, save_png
from airbuddy_plot.window import DEFAULT_RANGES_HOURS


LOGGER = logging.getLogger("airbuddy_plot.cli")


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="airbuddy-plot")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = parser.add_subparsers(dest="command", required=True)

    plan_cmd = sub.add_parser("plan", help="Print the chart draw plan for a telemetry JSON file.")
    _add_chart_args(plan_cmd)

    render_cmd = sub.add_parser("render", help="Render a telemetry JSON file to PNG.")
    _add_chart_args(render_cmd)
    render_cmd.add_argument("output", type=Path)
    render_cmd.add_argument("--theme", choices=sorted(THEMES), default="light")

    hover_cmd = sub.add_parser("hover", help="Print the sample nearest to a pointer x position.")
    _add_chart_args(hover_cmd)
    hover_cmd.add_argument("--x", type=float, required=True, help="Pointer x in chart pixels.")

    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    try:
        config = _resolve_config(args)
        arrays = load_arrays_json(args.input)
    except (ChartConfigError, ChartDataError, FileNotFoundError, json.JSONDecodeError) as exc:
        parser.error(str(exc))

    draw_plan = _plan(arrays, args.range, config)

    if args.command == "plan":
        print(json.dumps(draw_plan.to_dict(), indent=2, ensure_ascii=False))
        return 0

    if args.command == "render":
        out = save_png(draw_plan, args.output, THEMES[args.theme])
        print(f"wrote {out}")
        return 0

    if args.command == "hover":
        hit = hover_chart(draw_plan, args.x, config.hover_max_distance_px)
        print(json.dumps(None if hit is None else {"series": hit.series_name, "t": hit.time, "v": hit.value}))
        return 0

    raise RuntimeError(f"unsupported command: {args.command}")


def _add_chart_args(cmd: argparse.ArgumentParser) -> None:
    cmd.add_argument("input", type=Path, help="JSON with parallel arrays or a `readings` list.")
    cmd.add_argument("--range", default=None, help=f"One of {', '.join(DEFAULT_RANGES_HOURS)} (default 24h).")
    source = cmd.add_mutually_exclusive_group()
    source.add_argument("--preset", choices=sorted(PRESETS), default=None)
    source.add_argument("--config", type=Path, default=None, help="Chart definition TOML file.")
    cmd.add_argument("--width", type=int, default=None)
    cmd.add_argument("--height", type=int, default=None)


def _resolve_config(args: argparse.Namespace) -> ChartConfig:
    if args.config is not None:
        config = load_chart_config(args.config)
    elif args.preset is not None:
        config = preset(args.preset)
    else:
        config = ChartConfig()
    if args.width is not None or args.height is not None:
        config = config.with_size(args.width, args.height)
    return config


def _plan(arrays: TelemetryArrays, range_key: str | None, config: ChartConfig) -> DrawPlan:
    LOGGER.info("planning %d samples across %d metrics", len(arrays), len(arrays.metrics))
    return plan_chart(arrays.timestamps, arrays.metrics, range_key, config)


if __name__ == "__main__":
    sys.exit(main())
