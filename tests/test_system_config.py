"""Tests for TOML-based federation config loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from domain.ratings.ecf.config import load_ecf_system_configs
from domain.ratings.fide.config import load_fide_system_configs
from domain.ratings.performance import PerformanceMethod
from domain.ratings.uscf.config import load_uscf_system_configs


def test_load_uscf_system_configs_from_directory(tmp_path: Path) -> None:
    config_path = tmp_path / "default.toml"
    config_path.write_text(
        """
[system]
name = "uscf_a"
description = "A test system"

[uscf]
scale_factor = 400.0
effective_game_cap = 40
provisional_game_limit = 6
master_k_factor = 12.0
apply_bonus = false
bonus_threshold = 14.0
default_initial_rating = 1200
""".strip()
    )

    configs = load_uscf_system_configs(tmp_path)
    assert len(configs) == 1

    system = configs[0]
    assert system.name == "uscf_a"
    assert system.description == "A test system"
    assert system.parameters.effective_game_cap == 40
    assert system.parameters.provisional_game_limit == 6
    assert system.parameters.master_k_factor == pytest.approx(12.0)
    assert system.parameters.apply_bonus is False
    assert system.parameters.bonus_threshold == pytest.approx(14.0)
    assert system.parameters.default_initial_rating == 1200
    assert system.as_config_json()["bonus_threshold"] == pytest.approx(14.0)


def test_all_uscf_parameter_defaults_when_omitted(tmp_path: Path) -> None:
    (tmp_path / "defaulted.toml").write_text(
        """
[system]
name = "uscf_defaulted"

[uscf]
""".strip()
    )

    system = load_uscf_system_configs(tmp_path)[0]
    assert system.description is None
    assert system.parameters.scale_factor == pytest.approx(400.0)
    assert system.parameters.effective_game_cap == 50
    assert system.parameters.provisional_game_limit == 8
    assert system.parameters.standard_k_factor == pytest.approx(32.0)
    assert system.parameters.expert_k_factor == pytest.approx(24.0)
    assert system.parameters.master_k_factor == pytest.approx(16.0)
    assert system.parameters.apply_bonus is True
    assert system.parameters.bonus_threshold == pytest.approx(12.0)


def test_duplicate_names_raise_error(tmp_path: Path) -> None:
    template = """
[system]
name = "dup"

[fide]
standard_k_factor = 20.0
""".strip()
    (tmp_path / "a.toml").write_text(template)
    (tmp_path / "b.toml").write_text(template)

    with pytest.raises(ValueError, match="Duplicate fide system names"):
        load_fide_system_configs(tmp_path)


def test_missing_name_raises_validation_error(tmp_path: Path) -> None:
    (tmp_path / "nameless.toml").write_text("[system]\n\n[ecf]\nk_factor = 40.0\n")

    with pytest.raises(ValueError, match=r"\[system\].name is required"):
        load_ecf_system_configs(tmp_path)


def test_missing_directory_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError, match="Config directory not found"):
        load_uscf_system_configs(tmp_path / "absent")


def test_empty_directory_raises(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="No .toml config files found"):
        load_uscf_system_configs(tmp_path)


def test_invalid_bonus_threshold_raises_validation_error(tmp_path: Path) -> None:
    (tmp_path / "invalid.toml").write_text(
        """
[system]
name = "uscf_invalid"

[uscf]
bonus_threshold = -1.0
""".strip()
    )

    with pytest.raises(ValueError, match=r"bonus_threshold must be >= 0"):
        load_uscf_system_configs(tmp_path)


def test_fide_performance_method_is_parsed(tmp_path: Path) -> None:
    (tmp_path / "dp.toml").write_text(
        """
[system]
name = "fide_dp"

[fide]
performance_method = "dp_table"
""".strip()
    )

    system = load_fide_system_configs(tmp_path)[0]
    assert system.parameters.performance_method is PerformanceMethod.DP_TABLE
    assert system.parameters.standard_k_factor == pytest.approx(20.0)
    assert system.as_config_json()["performance_method"] == "dp_table"


def test_unknown_fide_performance_method_raises(tmp_path: Path) -> None:
    (tmp_path / "bad.toml").write_text(
        """
[system]
name = "fide_bad"

[fide]
performance_method = "guess"
""".strip()
    )

    with pytest.raises(ValueError, match=r"performance_method must be one of"):
        load_fide_system_configs(tmp_path)


def test_ecf_k_factor_must_be_allowed(tmp_path: Path) -> None:
    (tmp_path / "bad.toml").write_text(
        """
[system]
name = "ecf_bad"

[ecf]
k_factor = 30.0
""".strip()
    )

    with pytest.raises(ValueError, match=r"k_factor must be one of allowed_k_factors"):
        load_ecf_system_configs(tmp_path)


def test_ecf_defaults_when_omitted(tmp_path: Path) -> None:
    (tmp_path / "default.toml").write_text('[system]\nname = "ecf_plain"\n')

    system = load_ecf_system_configs(tmp_path)[0]
    assert system.parameters.scale_factor == pytest.approx(50.0)
    assert system.parameters.k_factor == pytest.approx(40.0)
    assert system.parameters.allowed_k_factors == (40.0, 20.0)
