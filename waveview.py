import os
import sys
import argparse

try:
    from rich.console import Console
    from rich.table import Table
    from rich.panel import Panel
    from rich import box
except ImportError:
    print("Error: The 'rich' library is required for the CLI but not installed.", file=sys.stderr)
    print("Please install it with: pip install waveview[cli]", file=sys.stderr)
    sys.exit(1)

import logging

import numpy as np
import soundfile as sf

from waveviewlib import __version__
from waveviewlib.audio import format_time
from waveviewlib.config import (
    ConfigError, ViewConfig, default_config, load_preset, merge_configs, save_preset,
)
from waveviewlib.engine import ViewEngine
from waveviewlib.events import EventBus, TRACK_LOADED
from waveviewlib.models import ViewMode, WaveformBuffer
from waveviewlib.window import validate_window_params

console = Console()


def positive_int(value):
    ivalue = int(value)
    if ivalue <= 0:
        raise argparse.ArgumentTypeError("must be a positive integer")
    return ivalue


def parse_arguments(argv=None):
    parser = argparse.ArgumentParser(
        description="Simulate the circular waveform view of an audio file frame by frame",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument("--version", action="version",
                        version=f"waveview {__version__}")

    parser.add_argument("file", type=str,
                        help="Audio file to inspect (anything libsndfile can read)")

    # Simulation
    parser.add_argument("--frames", type=positive_int, default=20,
                        help="Number of evenly spaced playhead positions to render")
    parser.add_argument("--paused", action="store_true",
                        help="Simulate a paused player being scrubbed instead of playback")

    # Display configuration
    parser.add_argument("--preset", type=str, default=None,
                        help="JSON preset with display settings")
    parser.add_argument("--num_points", type=positive_int, default=None,
                        help="Display resolution (points per series)")
    parser.add_argument("--window_duration_sec", type=float, default=None,
                        help="Focus window length (s)")
    parser.add_argument("--phantom_padding_sec", type=float, default=None,
                        help="Phantom silence after the track end (s)")
    parser.add_argument("--save_preset", type=str, default=None,
                        help="Write the effective display settings to this JSON file")

    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Show diagnostics logged by the view pipeline")

    return parser.parse_args(argv)


def build_config(args) -> ViewConfig:
    config = default_config()
    if args.preset:
        config = merge_configs(config, load_preset(args.preset))
    cli_overrides = {
        key: getattr(args, key)
        for key in ("num_points", "window_duration_sec", "phantom_padding_sec")
        if getattr(args, key) is not None
    }
    return ViewConfig.from_config(merge_configs(config, cli_overrides))


def load_buffer(path: str) -> WaveformBuffer:
    info = sf.info(path)
    data, samplerate = sf.read(path, dtype="float32")
    buffer = WaveformBuffer.from_array(data, samplerate)
    buffer.duration_sec = info.duration
    return buffer


_MODE_COLORS = {
    ViewMode.FULL: "cyan",
    ViewMode.FOCUS: "green",
    ViewMode.BLEND: "yellow",
    ViewMode.PLACEHOLDER: "dim",
}


def main(argv=None):
    args = parse_arguments(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not os.path.isfile(args.file):
        console.print(f"[bold red]Error:[/] File '{args.file}' not found.")
        return 1

    try:
        view_config = build_config(args)
    except ConfigError as e:
        console.print(f"[bold red]Error:[/] {e}")
        return 1

    if args.save_preset:
        save_preset(view_config.to_config(), args.save_preset,
                    description=f"waveview settings for {os.path.basename(args.file)}")

    try:
        buffer = load_buffer(args.file)
    except RuntimeError as e:
        console.print(f"[bold red]Error:[/] Cannot read '{args.file}': {e}")
        return 1

    report = validate_window_params(
        buffer.samples, 0.0, buffer.duration_sec, buffer.sample_rate,
        view_config.phantom_padding_sec,
        tolerance_sec=view_config.length_tolerance_sec,
    )
    for issue in report.issues:
        console.print(f"  [yellow]⚠ {issue}[/]")

    # --- HEADER PANEL ---
    mode_label = "SCRUB (paused)" if args.paused else "PLAYBACK"
    console.print(Panel.fit(
        f"[bold]waveview[/] {os.path.basename(args.file)}\n"
        f"Mode: [cyan]{mode_label}[/]\n"
        f"Length: [cyan]{format_time(buffer.duration_sec)}[/] | "
        f"[cyan]{buffer.sample_rate / 1000:.1f} kHz[/] | "
        f"[cyan]{buffer.total_samples} samples[/]\n"
        f"Points: [cyan]{view_config.num_points}[/] | "
        f"Window: [cyan]{view_config.window_duration_sec:g} s[/] | "
        f"Phantom: [cyan]{view_config.phantom_padding_sec:g} s[/]",
        title="Configuration"
    ))

    # --- SIMULATE FRAMES ---
    bus = EventBus()
    engine = ViewEngine(view_config, bus=bus)
    bus.emit(TRACK_LOADED, buffer=buffer)

    table = Table(box=box.ROUNDED, title="View Frames")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Playhead", justify="right")
    table.add_column("Time", justify="right")
    table.add_column("Mode", justify="center")
    table.add_column("Peak", justify="right", style="bold")
    table.add_column("Boost", justify="right")
    table.add_column("Non-zero", justify="right")

    steps = max(args.frames - 1, 1)
    for i in range(args.frames):
        playhead = i / steps
        now_ms = playhead * buffer.duration_sec * 1000.0
        frame = engine.tick(now_ms, playhead, not args.paused)
        color = _MODE_COLORS[frame.mode]
        peak = float(np.max(frame.series)) / frame.max_amp if frame.max_amp > 0 else 0.0
        boost_str = f"x{frame.boost:.2f}" if frame.mode is ViewMode.FOCUS else "—"
        table.add_row(
            str(i),
            f"{playhead:.3f}",
            format_time(playhead * buffer.duration_sec),
            f"[{color}]{frame.mode.value}[/]",
            f"{peak:.2f}",
            boost_str,
            f"{int(np.count_nonzero(frame.series))}/{frame.num_points}",
        )

    console.print(table)
    engine.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
