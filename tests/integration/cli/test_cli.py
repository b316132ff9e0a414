from __future__ import annotations

import json
from pathlib import Path

import pytest

from guild_build.cli import main as cli_main


def _run_cli(argv):
    return cli_main(argv)


@pytest.fixture()
def in_project(monkeypatch, project_root):
    monkeypatch.chdir(project_root)
    return project_root


def _write_config(tmp_path: Path, ratings: Path, **extra) -> Path:
    cfg = tmp_path / "config.json"
    cfg.write_text(json.dumps({"paths": {"ratings": str(ratings)}, **extra}), encoding="utf-8")
    return cfg


def test_roles_json_lists_table(in_project, capsys):
    code = _run_cli(["roles", "--json"])

    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["roles"][0] == "Software Engineer"
    assert payload["levels"] == ["level_1", "level_2", "level_3", "level_4"]
    assert "Python" in payload["skills"]


def test_compare_json_scores_two_roles(in_project, capsys):
    code = _run_cli(["compare", "--role-b", "Data Scientist", "--json"])

    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["similarity"] == pytest.approx(90.63)
    assert [s["label"] for s in payload["radar"]] == ["Software Engineer (level_1)", "Data Scientist (level_1)"]
    assert len(payload["trend"][1]["points"]) == 4


def test_compare_csv_to_stdout_with_skill_filter(in_project, capsys):
    code = _run_cli(["compare", "--role-a", "Data Scientist", "--skill", "Python", "--skill", "SQL"])

    assert code == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert lines[0] == "[Similarity]"
    assert lines[1] == "N/A"
    assert "Data Scientist (level_1),Python,50.00" in lines
    assert "Data Scientist,level_4,91.00" in lines


def test_compare_writes_output_file(in_project, tmp_path, capsys):
    out = tmp_path / "compare.csv"

    code = _run_cli(["compare", "--role-b", "Software Engineer", "--output", str(out)])

    assert code == 0
    content = out.read_text(encoding="utf-8").splitlines()
    assert content[1] == "100.00"


def test_compare_invalid_role_exits_2(in_project, capsys):
    code = _run_cli(["compare", "--role-a", "Wizard"])

    assert code == 2
    assert "invalid role_a" in capsys.readouterr().err


def test_validate_reports_issues(tmp_path, capsys):
    ratings = tmp_path / "roles.json"
    ratings.write_text(
        json.dumps(
            {
                "Knight": {"level_1": {"sword": 1}, "level_2": {"sword": 2}, "level_3": {"sword": 3}},
            }
        ),
        encoding="utf-8",
    )
    cfg = _write_config(tmp_path, ratings)

    code = _run_cli(["--config", str(cfg), "validate"])

    assert code == 1
    assert "Knight: missing levels ['level_4']" in capsys.readouterr().out


def test_strict_table_failure_exits_2(tmp_path, capsys):
    ratings = tmp_path / "roles.json"
    ratings.write_text(json.dumps({"Knight": {"entry": {"sword": 1}}}), encoding="utf-8")
    cfg = _write_config(tmp_path, ratings)

    code = _run_cli(["--config", str(cfg), "roles"])

    assert code == 2
    assert "Rating table validation failed" in capsys.readouterr().err


def test_named_scheme_via_config_and_verbose_logging(tmp_path, capsys):
    ratings = tmp_path / "roles.json"
    levels = ["entry", "mid", "senior", "principal"]
    ratings.write_text(
        json.dumps(
            {
                "Knight": {lvl: {"sword": 10 * (i + 1), "shield": 20} for i, lvl in enumerate(levels)},
                "Squire": {lvl: {"sword": 5 * (i + 1), "shield": 20} for i, lvl in enumerate(levels)},
            }
        ),
        encoding="utf-8",
    )
    cfg = _write_config(tmp_path, ratings, level_scheme="NAMED")

    code = _run_cli(["--verbose", "--config", str(cfg), "compare", "--role-b", "Squire", "--level-b", "mid", "--json"])

    captured = capsys.readouterr()
    assert code == 0
    payload = json.loads(captured.out)
    # sword |10 - 10| = 0, shield 0 -> identical profiles
    assert payload["similarity"] == 100.0
    assert [p["level"] for p in payload["trend"][0]["points"]] == levels
    assert "loaded" in captured.err
    assert "comparing Knight (entry) vs Squire (mid)" in captured.err
