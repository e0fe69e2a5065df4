#!/usr/bin/env python3
# bftool: emit, render and summarise generated battlefields.

import argparse
import logging
import os
import random
from typing import List, Optional

from .config import default_options, load_options
from .export import write_json, write_tsv
from .mapgen.generator import generate
from .render.image import save_png
from .terrain import PRESET_SIZES, normalize_preset

logger = logging.getLogger(__name__)

def _preset(value: str) -> str:
    try:
        return normalize_preset(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None

def _resolve_seed(seed: int) -> int:
    # 0 means "pick one for me", as the in-game instantiator does.
    if seed == 0:
        seed = random.randint(1, 0x7FFFFFFF)
        logger.info("Using seed: %s", seed)
    return seed

def _options(args, parser):
    if not args.options:
        return default_options()
    try:
        return load_options(args.options)
    except (OSError, ValueError) as e:
        parser.error(str(e))

def cmd_emit(args, parser):
    data = generate(_resolve_seed(args.seed), args.preset, _options(args, parser))
    fmt = args.format or ("json" if args.out.endswith(".json") else "tsv")
    if fmt == "json":
        write_json(data, args.out)
    else:
        write_tsv(data, args.out, include_header=args.header)
    logger.info("Wrote %s", args.out)

def cmd_render(args, parser):
    data = generate(_resolve_seed(args.seed), args.preset, _options(args, parser))
    save_png(data, args.out, cell_px=args.tile)
    logger.info("Wrote %s", args.out)

def cmd_summary(args, parser):
    opts = _options(args, parser)
    for seed in range(args.seed, args.seed + args.count):
        generate(seed, args.preset, opts)

def cmd_golden(args, parser):
    opts = _options(args, parser)
    base = os.path.join(args.outdir, args.preset)
    for seed in range(args.seed, args.seed + args.count):
        write_tsv(generate(seed, args.preset, opts), os.path.join(base, f"{seed:04d}.tsv"))
    logger.info("Wrote golden pack to %s", base)

def _positive(value: str) -> int:
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError("must be >= 1")
    return n

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="bftool", description="Deterministic battlefield generator")
    p.add_argument("-v", "--verbose", action="store_true", help="Log every generation stage")
    sub = p.add_subparsers(dest="cmd", required=True)

    def common(sp):
        sp.add_argument("--preset", type=_preset, default="medium",
                        help=f"One of: {', '.join(PRESET_SIZES)}")
        sp.add_argument("--options", type=str, default=None, help="JSON file with generation options")

    p1 = sub.add_parser("emit", help="Write one battlefield as TSV or JSON")
    common(p1)
    p1.add_argument("--seed", type=int, default=0, help="Seed (0 picks a random one)")
    p1.add_argument("--out", type=str, required=True)
    p1.add_argument("--format", choices=["tsv", "json"], default=None)
    p1.add_argument("--header", action="store_true")
    p1.set_defaults(func=cmd_emit)

    p2 = sub.add_parser("render", help="Write one battlefield as a PNG")
    common(p2)
    p2.add_argument("--seed", type=int, default=0, help="Seed (0 picks a random one)")
    p2.add_argument("--out", type=str, required=True)
    p2.add_argument("--tile", type=_positive, default=16, help="Pixels per cell")
    p2.set_defaults(func=cmd_render)

    p3 = sub.add_parser("summary", help="Log one summary line per seed")
    common(p3)
    p3.add_argument("--seed", type=int, default=1, help="First seed")
    p3.add_argument("--count", type=_positive, default=10)
    p3.set_defaults(func=cmd_summary)

    p4 = sub.add_parser("golden", help="Write TSVs for a run of seeds")
    common(p4)
    p4.add_argument("--seed", type=int, default=1, help="First seed")
    p4.add_argument("--count", type=_positive, default=10)
    p4.add_argument("--outdir", type=str, required=True)
    p4.set_defaults(func=cmd_golden)
    return p

def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    args.func(args, parser)
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
