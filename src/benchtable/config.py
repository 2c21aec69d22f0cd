"""Configuration management for benchtable."""

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import List, Optional, Union

import yaml
from dotenv import load_dotenv

from benchtable.report.formatters import validate_metric
from benchtable.units import normalize_time_unit

load_dotenv()

MODE_KEYS = {"time": "median"}


def translate_mode(mode: str) -> str:
    """Map a table mode ("time", "memory") to its metric key."""
    return MODE_KEYS.get(mode, mode)


def split_list(value: str) -> List[str]:
    """Split a comma-delimited option, dropping empty entries."""
    return [item.strip() for item in value.split(",") if item.strip()]


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass
class AppConfig:
    """Table options with environment-based defaults."""

    input_dir: Path = field(default_factory=lambda: Path(os.getenv("BENCHTABLE_INPUT_DIR", ".")))
    revs: str = field(default_factory=lambda: os.getenv("BENCHTABLE_REVS", "dirty,{DEFAULT}"))
    mode: str = field(default_factory=lambda: os.getenv("BENCHTABLE_MODE", "time"))
    time_unit: Optional[str] = field(default_factory=lambda: os.getenv("BENCHTABLE_TIME_UNIT") or None)
    ratio: bool = field(default_factory=lambda: _env_bool("BENCHTABLE_RATIO"))

    def __post_init__(self):
        """Validate configuration after initialization."""
        self.input_dir = Path(self.input_dir)
        # YAML files may list these instead of comma-joining them
        if isinstance(self.revs, (list, tuple)):
            self.revs = ",".join(self.revs)
        if isinstance(self.mode, (list, tuple)):
            self.mode = ",".join(self.mode)
        if self.time_unit == "":
            self.time_unit = None
        self._validate()

    def _validate(self):
        """Validate configuration values."""
        if self.time_unit is not None:
            self.time_unit = normalize_time_unit(self.time_unit)

        if not self.modes:
            raise ValueError("At least one table mode is required")

        # Checked up front so a bad mode fails before any table is printed
        for key in self.metric_keys:
            validate_metric(key)

    @property
    def rev_list(self) -> List[str]:
        return split_list(self.revs)

    @property
    def modes(self) -> List[str]:
        return split_list(self.mode)

    @property
    def metric_keys(self) -> List[str]:
        return [translate_mode(m) for m in self.modes]


def load_config_from_yaml(config_path: Union[str, Path], **overrides) -> AppConfig:
    """Load an AppConfig from a YAML file.

    Keys in the file override environment defaults; keyword arguments that
    are not None override the file.
    """
    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    known = {f.name for f in fields(AppConfig)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"Unknown config keys in {config_path}: {', '.join(sorted(unknown))}")

    data.update({k: v for k, v in overrides.items() if v is not None})
    return AppConfig(**data)
