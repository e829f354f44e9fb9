"""
Configuration management for vectordist.

Provides dataclasses for configuration and utilities
for loading settings from YAML files and environment variables.

Metric functions never read these settings; they only feed
logging setup and the finite-difference gradient check.
"""

import copy
import os
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Optional
import yaml


@dataclass
class GradientCheckConfig:
    """Finite-difference gradient check configuration."""
    eps: float = 1e-6
    atol: float = 1e-4
    rtol: float = 1e-4


@dataclass
class Settings:
    """
    Main settings container for vectordist.

    Attributes:
        log_level: Logging level for the "vectordist" logger
        log_file: Optional file to mirror log output to
        gradient_check: Finite-difference check settings
    """
    log_level: str = "INFO"
    log_file: Optional[str] = None

    gradient_check: GradientCheckConfig = field(default_factory=GradientCheckConfig)

    @classmethod
    def from_dict(cls, data: dict) -> "Settings":
        """Create Settings from dictionary."""
        data = dict(data)
        check_data = data.pop("gradient_check", None) or {}

        return cls(
            gradient_check=GradientCheckConfig(**check_data),
            **data
        )

    @classmethod
    def from_env(cls, base: Optional["Settings"] = None) -> "Settings":
        """
        Apply VECTORDIST_* environment overrides on top of `base`.

        `base` is left untouched; the overrides go into a copy.
        """
        settings = copy.deepcopy(base) if base is not None else cls()
        settings.log_level = os.getenv("VECTORDIST_LOG_LEVEL", settings.log_level)
        settings.log_file = os.getenv("VECTORDIST_LOG_FILE", settings.log_file)

        if "VECTORDIST_GRADIENT_ATOL" in os.environ:
            settings.gradient_check.atol = float(os.environ["VECTORDIST_GRADIENT_ATOL"])
        if "VECTORDIST_GRADIENT_RTOL" in os.environ:
            settings.gradient_check.rtol = float(os.environ["VECTORDIST_GRADIENT_RTOL"])
        if "VECTORDIST_GRADIENT_EPS" in os.environ:
            settings.gradient_check.eps = float(os.environ["VECTORDIST_GRADIENT_EPS"])

        return settings

    def to_dict(self) -> dict:
        """Convert Settings to dictionary."""
        return asdict(self)


def get_default_config_path() -> Path:
    """
    Locate the configuration file.

    Order: $VECTORDIST_CONFIG, ./config/default_config.yaml, then the
    file shipped next to this module.
    """
    override = os.environ.get("VECTORDIST_CONFIG")
    if override:
        return Path(override)

    cwd_config = Path.cwd() / "config" / "default_config.yaml"
    if cwd_config.is_file():
        return cwd_config

    return Path(__file__).resolve().parent / "default_config.yaml"


def load_config(config_path: Optional[str] = None) -> Settings:
    """
    Build Settings from a YAML file plus VECTORDIST_* environment overrides.

    A missing or empty file yields the defaults (still subject to the
    environment).

    Args:
        config_path: YAML file to read (default: get_default_config_path())

    Example:
        >>> settings = load_config()
        >>> settings.gradient_check.atol
        0.0001
    """
    path = Path(config_path) if config_path is not None else get_default_config_path()

    data = None
    if path.is_file():
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

    base = Settings.from_dict(data) if data else None
    return Settings.from_env(base)
