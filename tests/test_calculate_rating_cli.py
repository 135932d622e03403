"""Tests for the rating calculator command line."""

from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from calculate_rating import app

runner = CliRunner()


def test_uscf_json_output() -> None:
    result = runner.invoke(
        app,
        ["uscf", "1400", "10", "-g", "1450:win", "-g", "1500:draw", "-g", "1380:loss", "--json"],
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["type"] == "uscf"
    assert payload["new_rating"] == 1406
    assert payload["k_factor"] == 32.0


def test_uscf_no_bonus_flag() -> None:
    args = ["uscf", "1500", "20", "-g", "1500:w", "-g", "1510:w", "-g", "1520:w", "-g", "1530:w"]
    with_bonus = json.loads(runner.invoke(app, [*args, "--json"]).output)
    without_bonus = json.loads(runner.invoke(app, [*args, "--no-bonus", "--json"]).output)

    assert with_bonus["bonus"] > 0.0
    assert without_bonus["bonus"] == 0.0


def test_uscf_life_master_floor() -> None:
    result = runner.invoke(
        app,
        ["uscf", "1500", "20", "-g", "1500:loss", "--highest", "1500", "--life-master", "--json"],
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["rating_floor"] == 2000
    assert payload["new_rating"] == 2000


def test_fide_plain_output() -> None:
    result = runner.invoke(app, ["fide", "1500", "40", "-g", "1600:win"])

    assert result.exit_code == 0, result.output
    assert "federation=fide" in result.output
    assert "new_rating=1513" in result.output
    assert "classification=Beginner to Intermediate" in result.output


def test_fide_provisional_output() -> None:
    result = runner.invoke(app, ["fide", "0", "0", "-g", "1500:win", "--json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["is_provisional"] is True
    assert payload["new_rating"] == 0
    assert payload["performance_rating"] == 0


def test_ecf_chained_games() -> None:
    result = runner.invoke(app, ["ecf", "150", "-g", "100:win", "-g", "100:win", "--json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["new_rating"] == 157
    assert [game["new_rating"] for game in payload["games"]] == [154, 157]


def test_ecf_rejects_unlisted_k_factor() -> None:
    result = runner.invoke(app, ["ecf", "150", "-g", "100:win", "--k-factor", "30"])
    assert result.exit_code != 0


def test_ecf_accepts_reduced_k_factor() -> None:
    result = runner.invoke(app, ["ecf", "150", "-g", "150:win", "--k-factor", "20", "--json"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["rating_change"] == 10


def test_missing_games_is_rejected() -> None:
    result = runner.invoke(app, ["fide", "1500", "40"])
    assert result.exit_code != 0


def test_bad_game_spec_is_rejected() -> None:
    result = runner.invoke(app, ["uscf", "1500", "20", "-g", "1500-win"])
    assert result.exit_code != 0


def test_list_systems_includes_estimator() -> None:
    result = runner.invoke(app, ["list-systems"])

    assert result.exit_code == 0, result.output
    lines = result.output.strip().splitlines()
    assert [line.split()[0] for line in lines] == ["ecf", "fide", "uscf", "estimator"]


def test_list_systems_show_config_prints_parameters() -> None:
    result = runner.invoke(app, ["list-systems", "--show-config"])

    assert result.exit_code == 0, result.output
    assert "  uscf_default file=default.toml parameters=" in result.output
    assert "  estimator_high_rated file=high_rated.toml parameters=" in result.output
    fide_line = next(
        line for line in result.output.splitlines() if line.startswith("  fide_dp_table ")
    )
    parameters = json.loads(fide_line.split("parameters=", 1)[1])
    assert parameters["performance_method"] == "dp_table"


def test_missing_config_directory_is_a_usage_error(tmp_path: Path) -> None:
    result = runner.invoke(
        app,
        ["fide", "1500", "40", "-g", "1600:win", "--config-dir", str(tmp_path / "absent")],
    )

    assert result.exit_code == 2
    assert "Config directory not found" in result.output


def test_config_directory_that_is_a_file_is_a_usage_error(tmp_path: Path) -> None:
    config_file = tmp_path / "default.toml"
    config_file.write_text('[system]\nname = "uscf_file"\n')

    result = runner.invoke(
        app,
        ["uscf", "1500", "20", "-g", "1500:win", "--config-dir", str(config_file)],
    )

    assert result.exit_code == 2
    assert "not a directory" in result.output


def test_unknown_config_name_is_a_usage_error() -> None:
    result = runner.invoke(app, ["ecf", "150", "-g", "100:win", "--config-name", "missing.toml"])
    assert result.exit_code == 2


def test_estimate_rated_player_json() -> None:
    result = runner.invoke(
        app,
        ["estimate", "1600", "30", "--score", "2.5", *(["-o", "1600"] * 4), "--json"],
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["type"] == "estimate"
    assert payload["performance_rating"] == 1689
    assert payload["new_rating"] == 1956
    assert payload["k_factor"] == 16.0


def test_estimate_unrated_player_plain_output() -> None:
    result = runner.invoke(
        app, ["estimate", "0", "0", "-s", "3", "-o", "1500", "-o", "1600", "-o", "1700"]
    )

    assert result.exit_code == 0, result.output
    assert "performance_rating=2100" in result.output
    assert "new_rating=2100" in result.output
    assert "is_unrated=True" in result.output


def test_estimate_high_rated_flag() -> None:
    args = ["estimate", "2200", "30", "-s", "2.5", *(["-o", "2200"] * 4), "--json"]
    standard = json.loads(runner.invoke(app, args).output)
    reduced = json.loads(runner.invoke(app, [*args, "--high-rated"]).output)

    assert standard["new_rating"] == 2556
    assert reduced["new_rating"] == 2467


def test_estimate_rejects_impossible_score() -> None:
    result = runner.invoke(app, ["estimate", "1500", "10", "-s", "3", "-o", "1500", "-o", "1600"])
    assert result.exit_code == 2
    assert "Score must be between 0 and 2" in result.output


def test_estimate_requires_score() -> None:
    result = runner.invoke(app, ["estimate", "1500", "10", "-o", "1500"])
    assert result.exit_code != 0
