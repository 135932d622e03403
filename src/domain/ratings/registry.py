"""Registry of available federation calculators."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Type

from domain.config_base import BaseSystemConfig
from domain.ratings.ecf.calculator import EcfCalculator
from domain.ratings.ecf.config import load_ecf_system_configs
from domain.ratings.fide.calculator import FideCalculator
from domain.ratings.fide.config import load_fide_system_configs
from domain.ratings.protocol import Federation
from domain.ratings.uscf.calculator import UscfCalculator
from domain.ratings.uscf.config import load_uscf_system_configs

ROOT_DIR = Path(__file__).resolve().parents[3]
CONFIG_ROOT = ROOT_DIR / "configs" / "ratings"
ESTIMATOR_CONFIG_DIR = CONFIG_ROOT / "estimator"

LoadConfigsFn = Callable[[Path], list[BaseSystemConfig]]
CreateCalculatorFn = Callable[[BaseSystemConfig], Any]


@dataclass(frozen=True)
class FederationDescriptor:
    """Everything required to run one federation's calculator."""

    federation: Federation
    config_dir: Path
    load_configs: LoadConfigsFn
    create_calculator: CreateCalculatorFn


_REGISTRY: dict[Federation, FederationDescriptor] = {}


def register(descriptor: FederationDescriptor) -> None:
    """Register one federation descriptor."""
    if descriptor.federation in _REGISTRY:
        raise ValueError(
            f"Duplicate federation descriptor registration for {descriptor.federation.value}"
        )
    _REGISTRY[descriptor.federation] = descriptor


def get_all() -> list[FederationDescriptor]:
    """Return all registered descriptors in deterministic order."""
    return [_REGISTRY[key] for key in sorted(_REGISTRY.keys(), key=lambda item: item.value)]


def get(federation: Federation | str) -> FederationDescriptor:
    """Get one registered descriptor by federation key."""
    try:
        key = federation if isinstance(federation, Federation) else Federation(federation.lower())
        return _REGISTRY[key]
    except (KeyError, ValueError) as exc:
        available = ", ".join(item.value for item in sorted(_REGISTRY.keys(), key=lambda item: item.value))
        raise KeyError(
            f"No federation descriptor registered for {federation}. Available: {available}"
        ) from exc


def _make_creator(calculator_class: Type[Any]) -> CreateCalculatorFn:
    def creator(config: BaseSystemConfig) -> Any:
        return calculator_class(params=getattr(config, "parameters"))

    return creator


# (federation, config_subdir, load_configs, calculator_class)
_FEDERATIONS: list[tuple[Federation, str, LoadConfigsFn, Type[Any]]] = [
    (Federation.USCF, "uscf", load_uscf_system_configs, UscfCalculator),
    (Federation.FIDE, "fide", load_fide_system_configs, FideCalculator),
    (Federation.ECF, "ecf", load_ecf_system_configs, EcfCalculator),
]


def _register_defaults() -> None:
    if _REGISTRY:
        return
    for federation, config_subdir, load_configs, calculator_class in _FEDERATIONS:
        register(
            FederationDescriptor(
                federation=federation,
                config_dir=CONFIG_ROOT / config_subdir,
                load_configs=load_configs,
                create_calculator=_make_creator(calculator_class),
            )
        )


_register_defaults()

__all__ = [
    "ESTIMATOR_CONFIG_DIR",
    "FederationDescriptor",
    "get",
    "get_all",
    "register",
]
