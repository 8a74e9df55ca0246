"""
neuroglow render runner

Backends:
- record: headless run into a RecordingSurface, prints a JSON metrics summary
  and optionally writes the draw ops of every frame as JSONL
- mpl: interactive matplotlib window driven by canvas timers
- manim: renders the animation to video with manim
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List

from neuroglow_core import __version__
from neuroglow_core.compiler import config_from_file
from neuroglow_core.config import AnimationConfig
from neuroglow_core.metrics import summarize

from neuroglow_anim.adapters.jsonl import dump_jsonl
from neuroglow_anim.adapters.recording import ManualScheduler, RecordingSurface
from neuroglow_anim.controller import AnimationController


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Render the neuroglow signal-flow animation",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument("-v", "--verbose", action="count", default=0, help="Increase verbosity (-v, -vv)")

    p.add_argument("--config", type=str, default="", help="YAML configuration file")
    p.add_argument("--palette", type=str, default="", help="Palette preset: cool, warm, green")
    p.add_argument("--backend", choices=["record", "mpl", "manim"], default="record")

    p.add_argument("--frames", type=int, default=300, help="Ticks to run (record/manim)")
    p.add_argument("--seed", type=int, default=None, help="Random seed")
    p.add_argument("--width", type=float, default=1280, help="Surface width in pixels (record)")
    p.add_argument("--height", type=float, default=720, help="Surface height in pixels (record)")
    p.add_argument("--interval", type=int, default=16, help="Timer interval in ms (mpl)")
    p.add_argument("--quality", default="ql", help="manim quality: ql/qh")

    p.add_argument("--out", type=str, default="", help="JSONL draw-op log path (record)")
    p.add_argument("--graphml", type=str, default="", help="Export the built topology to GraphML")
    return p.parse_args(argv)


def setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def build_config(args: argparse.Namespace) -> AnimationConfig:
    cfg = AnimationConfig()
    if args.config:
        logging.info("Loading configuration from %s", args.config)
        cfg = config_from_file(args.config)
    if args.palette:
        cfg = cfg.with_palette(args.palette)
    return cfg


def run_record(args: argparse.Namespace, cfg: AnimationConfig) -> int:
    surface = RecordingSurface(args.width, args.height)
    surface.keep_history = bool(args.out)
    scheduler = ManualScheduler()
    controller = AnimationController(surface, scheduler, config=cfg, seed=args.seed)
    controller.start()
    if not controller.running:
        return 1
    if args.graphml:
        logging.info("Exporting GraphML to %s", args.graphml)
        controller.topology.export_graphml(args.graphml)
    scheduler.advance(max(0, args.frames))
    controller.stop()

    if args.out:
        count = dump_jsonl(surface.ops, args.out)
        logging.info("Wrote %d draw ops to %s", count, args.out)
    print(json.dumps(summarize(controller.engine), indent=2))
    return 0


def run_mpl(args: argparse.Namespace, cfg: AnimationConfig) -> int:
    import matplotlib.pyplot as plt

    from neuroglow_anim.adapters.mpl import FigureResizeNotifier, MatplotlibSurface, TimerScheduler

    fig, ax = plt.subplots(figsize=(args.width / 100.0, args.height / 100.0), dpi=100)
    surface = MatplotlibSurface(ax)
    controller = AnimationController(
        surface,
        TimerScheduler(fig, args.interval),
        FigureResizeNotifier(fig),
        config=cfg,
        seed=args.seed,
    )
    controller.start()
    if not controller.running:
        return 1
    if args.graphml:
        controller.topology.export_graphml(args.graphml)
    try:
        plt.show()
    finally:
        controller.stop()
    return 0


def run_manim(args: argparse.Namespace, cfg: AnimationConfig) -> int:
    from manim import config as manim_config

    from neuroglow_anim.scenes.network_scene import NetworkScene

    if args.quality == "ql":
        manim_config.quality = "low_quality"
    elif args.quality == "qh":
        manim_config.quality = "high_quality"
    else:
        manim_config.quality = args.quality

    scene = NetworkScene()
    setattr(scene, "_anim_config", cfg)
    setattr(scene, "_frames", max(0, args.frames))
    setattr(scene, "_seed", args.seed)
    scene.render()
    return 0


def main(argv=None) -> int:
    args = parse_args(argv)
    if args.version:
        print(__version__)
        return 0
    setup_logging(args.verbose)

    cfg = build_config(args)
    runners = {"record": run_record, "mpl": run_mpl, "manim": run_manim}
    return runners[args.backend](args, cfg)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
