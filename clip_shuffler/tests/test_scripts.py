"""End-to-end tests for the command line entry points."""

import json
from pathlib import Path
from unittest.mock import patch

from scripts import generate_batch, show_stats


def fake_assemble(self, clips, output, bgm=None):
    Path(output).parent.mkdir(parents=True, exist_ok=True)
    Path(output).write_bytes(b"")
    return Path(output)


def test_dry_run_prints_plan(clip_dir, capsys):
    code = generate_batch.main(["--clips", str(clip_dir), "--count", "4", "--seed", "1", "--dry-run"])
    out = capsys.readouterr().out.strip().splitlines()
    assert code == 0
    assert len(out) == 4
    assert len(set(out)) == 4
    assert all("video_" in line for line in out)


def test_only_renders_single_combination(clip_dir, capsys):
    code = generate_batch.main(["--clips", str(clip_dir), "--only", "ACBEDA", "--dry-run"])
    out = capsys.readouterr().out
    assert code == 0
    assert "A-C-B-E-D-A" in out
    assert "video_ACBEDA.mp4" in out


def test_only_rejects_combination_outside_grid(clip_dir, capsys):
    code = generate_batch.main(["--clips", str(clip_dir), "--only", "ACBEDZ", "--dry-run"])
    assert code == 1
    assert "not a valid combination" in capsys.readouterr().err


def test_incomplete_grid_aborts(clip_dir, capsys):
    (clip_dir / "seg2_E.mp4").unlink()
    code = generate_batch.main(["--clips", str(clip_dir), "--count", "3"])
    err = capsys.readouterr().err
    assert code == 1
    assert "1 empty slot" in err
    assert "segment 2 variant E" in err


def test_missing_clip_dir_argument(capsys):
    assert generate_batch.main(["--count", "3"]) == 2


def test_negative_count_plans_nothing(clip_dir, capsys):
    code = generate_batch.main(["--clips", str(clip_dir), "--count", "-1", "--dry-run"])
    assert code == 0
    assert capsys.readouterr().out == ""


def test_invalid_dimensions_abort_batch(clip_dir, capsys):
    code = generate_batch.main(["--clips", str(clip_dir), "--variants", "0"])
    assert code == 2
    assert "variants must be > 0" in capsys.readouterr().err


def test_missing_clip_directory(tmp_path, capsys):
    assert generate_batch.main(["--clips", str(tmp_path / "nope")]) == 2


def test_render_writes_manifest(clip_dir, tmp_path, capsys):
    out_dir = tmp_path / "out"
    with patch("assembly.ffmpeg.FFmpegAssembler.assemble", fake_assemble):
        code = generate_batch.main(
            ["--clips", str(clip_dir), "--count", "3", "--seed", "8", "--output", str(out_dir)]
        )
    assert code == 0
    rows = [json.loads(line) for line in (out_dir / "manifest.jsonl").read_text().splitlines()]
    assert [r["index"] for r in rows] == [0, 1, 2]
    assert all(r["status"] == "completed" for r in rows)
    assert all((out_dir / r["filename"]).exists() for r in rows)
    assert "Rendered 3/3 videos" in capsys.readouterr().out


def test_yaml_config_overrides_flags(clip_dir, tmp_path, capsys):
    cfg = tmp_path / "batch.yaml"
    cfg.write_text(f"clips_dir: {clip_dir}\ncount: 2\nseed: 3\n", encoding="utf-8")
    code = generate_batch.main(["--count", "9", "--config", str(cfg), "--dry-run"])
    assert code == 0
    assert len(capsys.readouterr().out.strip().splitlines()) == 2


def test_show_stats(capsys):
    show_stats.main(["--sample", "50", "--seed", "4"])
    out = capsys.readouterr().out
    assert '"formula_label": "5^6 = 15,625"' in out
    assert "50 combinations sampled (rejection)" in out
    assert "chi2=" in out


def test_too_many_variants_for_letters(clip_dir, capsys):
    code = generate_batch.main(["--clips", str(clip_dir), "--variants", "27", "--dry-run"])
    assert code == 2
    assert "At most 26 variants" in capsys.readouterr().err


def test_show_stats_too_many_variants_for_letters(capsys):
    assert show_stats.main(["--variants", "27", "--sample", "5"]) == 2
    captured = capsys.readouterr()
    assert '"formula_label": "27^6' in captured.out
    assert "At most 26 variants" in captured.err


def test_show_stats_stats_only_beyond_letters(capsys):
    assert show_stats.main(["--variants", "27"]) == 0
    assert '"total_slots": 162' in capsys.readouterr().out


def test_show_stats_invalid_dimensions(capsys):
    assert show_stats.main(["--variants", "0"]) == 2
    assert "variants must be > 0" in capsys.readouterr().err
