"""Sequential rendering of a generated batch."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Literal, Sequence

from combos.formatting import output_filename, to_label, to_token
from combos.types import Combination

from .ffmpeg import AssemblyError, FFmpegAssembler, clips_for

logger = logging.getLogger(__name__)

Status = Literal["pending", "processing", "completed", "error"]


@dataclass
class RenderJob:
    index: int
    combination: Combination
    filename: str
    status: Status = "pending"
    output_path: Path | None = None
    error: str | None = None

    def as_dict(self) -> dict:
        return {
            "index": self.index,
            "label": to_label(self.combination),
            "token": to_token(self.combination),
            "filename": self.filename,
            "status": self.status,
            "output_path": str(self.output_path) if self.output_path else None,
            "error": self.error,
        }


class BatchRunner:
    """Renders jobs one at a time, in generation order."""

    def __init__(self, assembler: FFmpegAssembler, output_dir: str | Path):
        self.assembler = assembler
        self.output_dir = Path(output_dir)

    def plan(self, combinations: Iterable[Combination]) -> list[RenderJob]:
        return [
            RenderJob(index=idx, combination=tuple(combo), filename=output_filename(combo))
            for idx, combo in enumerate(combinations)
        ]

    def run(
        self,
        jobs: list[RenderJob],
        grid: Sequence[Sequence[Path | None]],
        bgm: str | Path | None = None,
        on_update: Callable[[RenderJob], None] | None = None,
    ) -> list[RenderJob]:
        for job in jobs:
            job.status = "processing"
            if on_update:
                on_update(job)
            try:
                clips = clips_for(job.combination, grid)
                job.output_path = self.assembler.assemble(
                    clips, self.output_dir / job.filename, bgm=bgm
                )
                job.status = "completed"
                logger.info("rendered %d/%d %s", job.index + 1, len(jobs), job.filename)
            except AssemblyError as exc:
                job.status = "error"
                job.error = str(exc)
                logger.warning("failed %d/%d %s: %s", job.index + 1, len(jobs), job.filename, exc)
            if on_update:
                on_update(job)
        return jobs


def summary(jobs: Iterable[RenderJob]) -> dict[str, int]:
    counts = Counter(job.status for job in jobs)
    return {status: counts.get(status, 0) for status in ("pending", "processing", "completed", "error")}
