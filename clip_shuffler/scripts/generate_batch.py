"""CLI for rendering a batch of randomly assembled videos from a clip grid."""

from __future__ import annotations

import argparse
import json
import logging
import random
import sys
from pathlib import Path

import yaml

from assembly.batch import BatchRunner, RenderJob, summary
from assembly.ffmpeg import FFmpegAssembler, FFmpegConfig
from combos.errors import CombinationError
from combos.formatting import MAX_LETTER_VARIANTS, parse_token, to_label
from combos.grid import load_grid, validate
from combos.sampler import Sampler, SamplerConfig
from combos.space import contains_valid
from combos.types import SEGMENTS, VARIANTS


DEFAULT_COUNT = 10


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--clips", type=Path, help="Directory holding seg<N>_<LETTER>.mp4 files")
    parser.add_argument("--count", type=int, default=DEFAULT_COUNT)
    parser.add_argument("--segments", type=int, default=SEGMENTS)
    parser.add_argument("--variants", type=int, default=VARIANTS)
    parser.add_argument("--bgm", type=Path, help="Optional background track")
    parser.add_argument("--output", type=Path, default=Path("output"))
    parser.add_argument("--seed", type=int)
    parser.add_argument("--only", help="Render a single combination token, e.g. ACBEDA")
    parser.add_argument("--dry-run", action="store_true", help="Print the plan without running ffmpeg")
    parser.add_argument("--config", type=Path, help="Optional YAML config overriding CLI flags")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    cfg = load_config(args.config)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose or cfg.get("verbose") else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    clips_dir = cfg.get("clips_dir", args.clips)
    if clips_dir is None:
        print("No clip directory given (--clips or clips_dir in config)", file=sys.stderr)
        return 2
    segments = int(cfg.get("segments", args.segments))
    variants = int(cfg.get("variants", args.variants))
    count = int(cfg.get("count", args.count))
    seed = cfg.get("seed", args.seed)
    bgm = cfg.get("bgm", args.bgm)
    output_dir = Path(cfg.get("output_dir", args.output))
    if variants > MAX_LETTER_VARIANTS:
        print(f"At most {MAX_LETTER_VARIANTS} variants can be named by letter, got {variants}", file=sys.stderr)
        return 2

    try:
        grid = load_grid(clips_dir, segments, variants)
    except (CombinationError, FileNotFoundError) as exc:
        print(f"Cannot load clip grid: {exc}", file=sys.stderr)
        return 2
    result = validate(grid, segments, variants)
    if not result.valid:
        print(f"Clip grid incomplete: {len(result.missing)} empty slot(s)", file=sys.stderr)
        for slot in result.missing:
            print(f"  segment {slot.segment} variant {to_label([slot.variant])}", file=sys.stderr)
        return 1

    rng = random.Random(seed)
    sampler = Sampler(rng=rng, config=build_sampler_config(cfg.get("sampler", {})))
    try:
        if args.only:
            combinations = [parse_token(args.only)]
            if not contains_valid(combinations[0], segments, variants):
                raise CombinationError(f"{args.only} is not a valid combination for this grid")
        else:
            combinations = sampler.generate(count, segments, variants)
    except CombinationError as exc:
        print(f"Combination generation failed: {exc}", file=sys.stderr)
        return 1

    runner = BatchRunner(FFmpegAssembler(build_ffmpeg_config(cfg.get("ffmpeg", {}))), output_dir)
    jobs = runner.plan(combinations)
    if args.dry_run:
        for job in jobs:
            print(f"{job.index + 1:>4}  {to_label(job.combination)}  {job.filename}")
        return 0

    runner.run(jobs, grid, bgm=bgm)
    write_manifest(jobs, output_dir / "manifest.jsonl")
    counts = summary(jobs)
    print(f"Rendered {counts['completed']}/{len(jobs)} videos to {output_dir} ({counts['error']} failed)")
    return 0 if counts["error"] == 0 else 1


def load_config(path: Path | None) -> dict:
    if not path:
        return {}
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError("Config file must define a YAML mapping")
    return data


def build_sampler_config(params: dict) -> SamplerConfig:
    defaults = SamplerConfig()
    return SamplerConfig(
        threshold=float(params.get("threshold", defaults.threshold)),
        enumeration_ceiling=int(params.get("enumeration_ceiling", defaults.enumeration_ceiling)),
        max_draws_factor=int(params.get("max_draws_factor", defaults.max_draws_factor)),
    )


def build_ffmpeg_config(params: dict) -> FFmpegConfig:
    defaults = FFmpegConfig()
    return FFmpegConfig(
        binary=str(params.get("binary", defaults.binary)),
        video_codec=str(params.get("video_codec", defaults.video_codec)),
        preset=str(params.get("preset", defaults.preset)),
        audio_codec=str(params.get("audio_codec", defaults.audio_codec)),
        total_duration=float(params.get("total_duration", defaults.total_duration)),
        timeout=params.get("timeout", defaults.timeout),
    )


def write_manifest(jobs: list[RenderJob], path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        for job in jobs:
            f.write(json.dumps(job.as_dict(), ensure_ascii=False) + "\n")


if __name__ == "__main__":
    sys.exit(main())
