"""
Option loading.

Options (the names usable in conditions) come from a YAML file and from
``-D NAME=VALUE`` definitions on the command line; the latter win.

    # condann.yaml
    defines:
      DEBUG: false
      MODE: production
    exclude:
      - "vendor/**"
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import ConfigError

DEFAULT_CONFIG_FILE = "condann.yaml"

_yaml = YAML(typ="safe")

_NAME_RE = re.compile(r"^[A-Za-z_$][\w$]*$")
_INT_RE = re.compile(r"^[+-]?\d+$")
_FLOAT_RE = re.compile(r"^[+-]?(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?$")


@dataclass
class Config:
    defines: Dict[str, Any] = field(default_factory=dict)
    exclude: List[str] = field(default_factory=list)

    @staticmethod
    def from_dict(d: Optional[Dict[str, Any]]) -> Config:
        if not d:
            return Config()

        unknown = sorted(set(d) - {"defines", "exclude"})
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")

        defines = d.get("defines") or {}
        if not isinstance(defines, dict):
            raise ConfigError("'defines' must be a mapping of option names to values")
        for name, value in defines.items():
            _check_name(str(name))
            if value is not None and not isinstance(value, (bool, int, float, str)):
                raise ConfigError(f"Option '{name}' must be a boolean, number or string")

        exclude = d.get("exclude") or []
        if isinstance(exclude, str):
            exclude = [exclude]
        if not isinstance(exclude, list):
            raise ConfigError("'exclude' must be a list of patterns")

        return Config(
            defines={str(k): v for k, v in defines.items()},
            exclude=[str(p) for p in exclude],
        )


def _check_name(name: str) -> None:
    if not _NAME_RE.match(name):
        raise ConfigError(f"Invalid option name '{name}'")


def _read_yaml_map(path: Path) -> dict:
    """Read a YAML file that must contain a mapping."""
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise ConfigError(f"Cannot parse {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"YAML must be a mapping: {path}")
    return raw


def load_config(path: Optional[Path] = None, *, cwd: Optional[Path] = None) -> Config:
    """
    Load the config file.

    Without an explicit path, ``condann.yaml`` of the working directory is
    used when it exists; otherwise an empty config is returned.
    """
    if path is None:
        candidate = (cwd or Path.cwd()) / DEFAULT_CONFIG_FILE
        if not candidate.is_file():
            return Config()
        path = candidate
    elif not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    return Config.from_dict(_read_yaml_map(path))


def parse_value(raw: str) -> Any:
    """Parse the value part of a ``-D`` definition."""
    value = raw.strip()
    if value == "true":
        return True
    if value == "false":
        return False
    if value == "null":
        return None
    if _INT_RE.match(value):
        return int(value)
    if _FLOAT_RE.match(value):
        return float(value)
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def parse_define(spec: str) -> Tuple[str, Any]:
    """``NAME=VALUE`` → (name, value); a bare ``NAME`` means true."""
    if "=" in spec:
        name, raw = spec.split("=", 1)
        name = name.strip()
        value = parse_value(raw)
    else:
        name, value = spec.strip(), True
    _check_name(name)
    return name, value


def merge_defines(config: Config, specs: Optional[Iterable[str]]) -> Dict[str, Any]:
    """Options of the config file overridden by command line definitions."""
    options = dict(config.defines)
    for spec in specs or ():
        name, value = parse_define(spec)
        options[name] = value
    return options


__all__ = [
    "Config",
    "DEFAULT_CONFIG_FILE",
    "load_config",
    "merge_defines",
    "parse_define",
    "parse_value",
]
