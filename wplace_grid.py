#!/usr/bin/env python3
"""
wplace_grid.py
Turn images into N x N pixel-art grids painted only with wplace palette colours.

Usage:
  python wplace_grid.py INPUT --size N [--free-only] [--limit K] [--recount] [--json] --debug

Input:
  Any Pillow-readable image, or a folder of them. The image is fitted inside the
  grid (aspect ratio kept, centred); uncovered cells are transparent.

Output:
  PNG grid. Writes <stem>_grid.png next to INPUT unless --outdir is given.
  With --json, also writes <stem>_grid.json with colour counts.

Notes:
  Grid building lives in palette_grid.pipeline. Each file is a single
  synchronous pass; folders may be processed in parallel with --jobs.
"""

from __future__ import annotations

import argparse
import json
import sys
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional, Sequence

from PIL import UnidentifiedImageError

from palette_grid.colour_select import select_active
from palette_grid.config import GridConfig, parse_target_size
from palette_grid.constants import (
    DEFAULT_TARGET_SIZE,
    FILTER_ALL,
    FILTER_FREE,
    MAX_TARGET_SIZE,
    MIN_TARGET_SIZE,
    PRESET_SIZES,
)
from palette_grid.image_io import is_image_file, load_image_rgba, save_png_rgba
from palette_grid.palette_lock import count_off_palette_pixels
from palette_grid.pipeline import convert_image
from palette_grid.result import GridResult, recount_used_colours, result_manifest
from palette_grid.utils import (
    capture_output,
    colour_usage_report,
    debug_log,
    enable_line_buffered_stdout,
    error,
    format_percentage,
    format_total_duration_compact,
    key_value_pairs_to_string,
    log,
    print_banner,
    print_config_line,
    warn,
)

OUTPUT_SUFFIX = "_grid"
IMAGE_EXTS = {".png", ".jpg", ".jpeg", ".webp", ".gif", ".bmp"}


def parse_cli_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse CLI arguments.

    Returns:
      argparse.Namespace with:
        src: Path to image or folder
        outdir: optional Path for outputs
        size: grid edge length
        free_only: restrict to free-tier colours
        limit: None or K (keep top-K colours)
        recount: report post-reduction counts
        alpha_threshold: alpha at or below this is transparent
        json: also write a JSON manifest
        jobs: parallel file workers
        debug: bool for verbose details
    """
    parser = argparse.ArgumentParser(
        prog="wplace_grid",
        description="Convert image(s) into a wplace palette pixel grid.",
    )
    parser.add_argument("src", type=Path, help="Input image or folder")
    parser.add_argument(
        "--outdir", type=Path, default=None, help="Output directory (optional)"
    )
    parser.add_argument(
        "--size",
        type=parse_target_size,
        default=DEFAULT_TARGET_SIZE,
        help=(
            f"Grid size N ({MIN_TARGET_SIZE}..{MAX_TARGET_SIZE}). "
            f"Presets: {', '.join(str(s) for s in PRESET_SIZES)}."
        ),
    )
    parser.add_argument(
        "--free-only", action="store_true", help="Use free-tier colours only"
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Keep only the K most used colours. Omit, or K >= used colours, for no reduction.",
    )
    parser.add_argument(
        "--recount",
        action="store_true",
        help="Report colour counts after reduction instead of before.",
    )
    parser.add_argument(
        "--alpha-threshold",
        type=int,
        default=0,
        help="Alpha at or below this value is transparent (0..254).",
    )
    parser.add_argument("--json", action="store_true", help="Write a JSON manifest")
    parser.add_argument(
        "--jobs", type=int, default=1, help="Files processed in parallel"
    )
    parser.add_argument("--debug", action="store_true", help="Verbose details")
    args = parser.parse_args(argv)
    if not 0 <= args.alpha_threshold <= 254:
        parser.error("--alpha-threshold must be in 0..254")
    if args.jobs < 1:
        parser.error("--jobs must be >= 1")
    return args


def _config_from_args(args: argparse.Namespace) -> GridConfig:
    return GridConfig(
        target_size=args.size,
        tier_filter=FILTER_FREE if args.free_only else FILTER_ALL,
        colour_limit=args.limit,
        alpha_threshold=args.alpha_threshold,
    )


def _report(result: GridResult, recount: bool, debug: bool) -> None:
    """Print colour usage and pixel totals."""
    used = list(result.used_colours)
    if recount and result.reduced:
        used = recount_used_colours(result.grid, select_active(result.tier_filter))
    label = "after reduction" if recount and result.reduced else "before reduction"

    log(f"Colours used ({len(used)}, {label}):")
    total = result.paintable_pixels or 1
    for hex_code, name, tier, count in colour_usage_report(used):
        log(f"  {hex_code}  {name} [{tier}]: {count:,}  ({format_percentage(count / total)})")
    log(
        key_value_pairs_to_string(
            [
                ("Paintable", result.paintable_pixels),
                ("Transparent", result.transparent_pixels),
                ("Total", result.total_pixels),
            ]
        )
    )
    if debug:
        off = count_off_palette_pixels(result.grid, select_active(result.tier_filter).colours)
        debug_log(f"off-palette cells: {off}")


def _process_single_image(
    src_path: Path,
    out_path: Optional[Path],
    config: GridConfig,
    recount: bool,
    write_json: bool,
    debug: bool,
) -> None:
    """
    Process a single image path end-to-end:
      load -> convert -> save -> report.
    """
    t_start = time.perf_counter()
    if out_path is None:
        out_path = src_path.with_name(f"{src_path.stem}{OUTPUT_SUFFIX}.png")

    print_banner(src_path.name)

    try:
        source = load_image_rgba(src_path)
    except (UnidentifiedImageError, OSError) as e:
        error(f"cannot read {src_path.name}: {e}")
        return

    if debug:
        debug_log(
            key_value_pairs_to_string(
                [("Loaded", f"{source.shape[1]}x{source.shape[0]}")]
            )
        )

    result = convert_image(source, config, debug=debug)
    t_after_convert = time.perf_counter()

    if result.target_size == 0:
        warn("empty grid; nothing written")
        return

    written = save_png_rgba(out_path, result.grid)
    if write_json:
        manifest_path = written.with_suffix(".json")
        manifest_path.write_text(
            json.dumps(result_manifest(result), indent=2), encoding="utf-8"
        )
    t_after_save = time.perf_counter()

    log(
        f"Wrote {written.name} | size={result.target_size}x{result.target_size} "
        f"| tiers={result.tier_filter} | colours={result.colour_limit}/{result.distinct_colours}"
    )
    _report(result, recount, debug)

    if debug:
        debug_log(
            f"Total {format_total_duration_compact(t_after_save - t_start)}  "
            f"(convert={format_total_duration_compact(t_after_convert - t_start)}, "
            f"save={format_total_duration_compact(t_after_save - t_after_convert)})"
        )
    else:
        log(f"Total time {format_total_duration_compact(t_after_save - t_start)}")


def _process_one_live(
    path: Path,
    config: GridConfig,
    args: argparse.Namespace,
) -> None:
    """Process a single file and stream logs to stdout."""
    if path.stem.endswith(OUTPUT_SUFFIX):
        print_banner(path.name)
        debug_log(f"skipped output artifact ({OUTPUT_SUFFIX})")
        return
    dst = (args.outdir / f"{path.stem}{OUTPUT_SUFFIX}.png") if args.outdir else None
    _process_single_image(path, dst, config, args.recount, args.json, args.debug)


def _process_one_captured(
    path: Path,
    config: GridConfig,
    args: argparse.Namespace,
) -> str:
    """
    Process a single file, collecting its log output instead of printing it.

    Capture is per thread, so concurrent workers can run this and main()
    prints the blocks in file order afterwards.
    """
    with capture_output() as buf:
        _process_one_live(path, config, args)
    return buf.getvalue()


def _collect_files(folder: Path) -> List[Path]:
    files = [
        p
        for p in folder.iterdir()
        if p.is_file()
        and p.suffix.lower() in IMAGE_EXTS
        and not p.stem.endswith(OUTPUT_SUFFIX)
        and is_image_file(p)
    ]
    files.sort(key=lambda p: p.name.lower())
    return files


# Entry point


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    CLI entry point.

    Handles a single file or a folder. In folder mode supports --jobs
    parallelism while keeping output in file order.
    """
    enable_line_buffered_stdout()
    args = parse_cli_args(argv)
    config = _config_from_args(args)

    print_config_line(
        "grid",
        [
            ("Size", config.target_size),
            ("Tiers", config.tier_filter),
            ("Limit", config.colour_limit if config.colour_limit is not None else "-"),
            ("Jobs", args.jobs),
        ],
        debug=False,
    )

    src = args.src
    if not src.exists():
        error(f"not found: {src}")
        return 2
    if args.outdir is not None:
        args.outdir.mkdir(parents=True, exist_ok=True)

    if not src.is_dir():
        _process_one_live(src, config, args)
        return 0

    files = _collect_files(src)
    if args.debug:
        debug_log(key_value_pairs_to_string([("Images", len(files)), ("Jobs", args.jobs)]))

    if args.jobs == 1:
        for p in files:
            _process_one_live(p, config, args)
    else:
        with ThreadPoolExecutor(max_workers=args.jobs) as ex:
            futures = [ex.submit(_process_one_captured, p, config, args) for p in files]
            blocks = [f.result() for f in futures]
        print("".join(blocks), end="", flush=True)
    return 0


if __name__ == "__main__":
    sys.exit(main())
