"""Load ECF parameter sets from TOML files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from domain.config_base import BaseSystemConfig, load_system_configs, parse_system_header
from domain.ratings.ecf.calculator import EcfParameters


@dataclass(frozen=True)
class EcfSystemConfig(BaseSystemConfig):
    """Configuration for one ECF parameter set."""

    parameters: EcfParameters

    def as_config_json(self) -> dict[str, Any]:
        return {
            "scale_factor": self.parameters.scale_factor,
            "k_factor": self.parameters.k_factor,
            "allowed_k_factors": list(self.parameters.allowed_k_factors),
        }


def load_ecf_system_configs(config_dir: Path) -> list[EcfSystemConfig]:
    """Load and validate all ECF TOML config files in a directory."""
    return load_system_configs(
        config_dir,
        _parse_ecf_system_config,
        duplicate_name_label="ecf",
    )


def _parse_ecf_system_config(raw: dict[str, Any], file_path: Path) -> EcfSystemConfig:
    name, description = parse_system_header(raw, file_path)
    ecf_raw = raw.get("ecf", {})
    defaults = EcfParameters()

    parameters = EcfParameters(
        scale_factor=float(ecf_raw.get("scale_factor", defaults.scale_factor)),
        k_factor=float(ecf_raw.get("k_factor", defaults.k_factor)),
        allowed_k_factors=tuple(
            float(value) for value in ecf_raw.get("allowed_k_factors", defaults.allowed_k_factors)
        ),
    )
    _validate_parameters(file_path=file_path, parameters=parameters)

    return EcfSystemConfig(
        name=name,
        description=description,
        file_path=file_path,
        parameters=parameters,
    )


def _validate_parameters(*, file_path: Path, parameters: EcfParameters) -> None:
    if parameters.scale_factor <= 0.0:
        raise ValueError(f"{file_path}: [ecf].scale_factor must be > 0")
    if parameters.k_factor <= 0.0:
        raise ValueError(f"{file_path}: [ecf].k_factor must be > 0")
    if not parameters.allowed_k_factors:
        raise ValueError(f"{file_path}: [ecf].allowed_k_factors must not be empty")
    if any(value <= 0.0 for value in parameters.allowed_k_factors):
        raise ValueError(f"{file_path}: [ecf].allowed_k_factors must all be > 0")
    if parameters.k_factor not in parameters.allowed_k_factors:
        raise ValueError(f"{file_path}: [ecf].k_factor must be one of allowed_k_factors")
