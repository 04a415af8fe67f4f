"""Concatenate segment clips and mix in a background track with ffmpeg."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from combos.types import TOTAL_DURATION

logger = logging.getLogger(__name__)


class AssemblyError(RuntimeError):
    """The external assembly step could not produce an output video."""


@dataclass
class FFmpegConfig:
    binary: str = "ffmpeg"
    video_codec: str = "libx264"
    preset: str = "fast"
    audio_codec: str = "aac"
    total_duration: float = TOTAL_DURATION
    timeout: float | None = None


def build_command(
    clips: Sequence[str | Path],
    output: str | Path,
    bgm: str | Path | None = None,
    config: FFmpegConfig | None = None,
) -> list[str]:
    """Build the ffmpeg argument list; clips are concatenated in order."""

    cfg = config or FFmpegConfig()
    if not clips:
        raise AssemblyError("no clips to assemble")
    args = [cfg.binary, "-y"]
    for clip in clips:
        args += ["-i", str(clip)]
    if bgm is not None:
        args += ["-i", str(bgm)]

    count = len(clips)
    filters = "".join(f"[{i}:v]" for i in range(count)) + f"concat=n={count}:v=1:a=0[outv]"
    if bgm is not None:
        filters += f";[{count}:a]atrim=0:{cfg.total_duration:g},asetpts=PTS-STARTPTS[outa]"
        args += ["-filter_complex", filters, "-map", "[outv]", "-map", "[outa]"]
        args += ["-c:v", cfg.video_codec, "-preset", cfg.preset, "-c:a", cfg.audio_codec, "-shortest"]
    else:
        args += ["-filter_complex", filters, "-map", "[outv]"]
        args += ["-c:v", cfg.video_codec, "-preset", cfg.preset, "-an"]
    args.append(str(output))
    return args


def clips_for(combination: Sequence[int], grid: Sequence[Sequence[Path | None]]) -> list[Path]:
    """Pick the clip each segment's variant index points at."""

    clips: list[Path] = []
    for seg, var in enumerate(combination):
        try:
            clip = grid[seg][var]
        except IndexError:
            clip = None
        if not clip:
            raise AssemblyError(f"no clip for segment {seg}, variant {var}")
        clips.append(Path(clip))
    return clips


class FFmpegAssembler:
    """Runs one ffmpeg process per output video."""

    def __init__(self, config: FFmpegConfig | None = None):
        self.config = config or FFmpegConfig()

    def assemble(
        self,
        clips: Sequence[str | Path],
        output: str | Path,
        bgm: str | Path | None = None,
    ) -> Path:
        output = Path(output)
        try:
            output.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise AssemblyError(f"cannot create output directory {output.parent}: {exc}") from exc
        cmd = build_command(clips, output, bgm=bgm, config=self.config)
        logger.info("running ffmpeg for %s", output.name)
        logger.debug("ffmpeg command: %s", " ".join(cmd))
        try:
            subprocess.run(cmd, check=True, capture_output=True, text=True, timeout=self.config.timeout)
        except FileNotFoundError as exc:
            raise AssemblyError(f"ffmpeg binary not found: {self.config.binary}") from exc
        except subprocess.CalledProcessError as exc:
            output.unlink(missing_ok=True)
            tail = (exc.stderr or "").strip().splitlines()[-5:]
            raise AssemblyError(
                f"ffmpeg exited with status {exc.returncode}: " + " | ".join(tail)
            ) from exc
        except subprocess.TimeoutExpired as exc:
            output.unlink(missing_ok=True)
            raise AssemblyError(f"ffmpeg timed out after {exc.timeout}s") from exc
        return output
