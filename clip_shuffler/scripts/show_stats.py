"""Print grid statistics and, optionally, the balance of a sampled batch."""

from __future__ import annotations

import argparse
import json
import random
import sys

from combos.errors import CombinationError
from combos.formatting import MAX_LETTER_VARIANTS, variant_letter
from combos.grid import chi_square, stats, usage_matrix
from combos.sampler import Sampler
from combos.types import SEGMENTS, VARIANTS


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--segments", type=int, default=SEGMENTS)
    parser.add_argument("--variants", type=int, default=VARIANTS)
    parser.add_argument("--sample", type=int, default=0, help="Sample a batch and report variant usage")
    parser.add_argument("--seed", type=int, default=17)
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        info = stats(args.segments, args.variants)
    except CombinationError as exc:
        print(f"Invalid grid dimensions: {exc}", file=sys.stderr)
        return 2
    print(json.dumps(info.as_dict(), indent=2))
    if args.sample <= 0:
        return 0
    if args.variants > MAX_LETTER_VARIANTS:
        print(f"At most {MAX_LETTER_VARIANTS} variants can be named by letter, got {args.variants}", file=sys.stderr)
        return 2

    sampler = Sampler(rng=random.Random(args.seed))
    try:
        batch = sampler.generate(args.sample, args.segments, args.variants)
    except CombinationError as exc:
        print(f"Combination generation failed: {exc}", file=sys.stderr)
        return 1
    counts = usage_matrix(batch, args.segments, args.variants)
    header = "segment " + " ".join(f"{variant_letter(v):>6}" for v in range(args.variants))
    print(f"\n{len(batch)} combinations sampled ({sampler.strategy_for(args.sample, args.segments, args.variants).value})")
    print(header)
    for seg, row in enumerate(counts):
        print(f"{seg:>7} " + " ".join(f"{int(c):>6}" for c in row) + f"   chi2={chi_square(row):.2f}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
