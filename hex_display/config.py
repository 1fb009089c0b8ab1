"""
Configuration dataclass for a dump run.
"""

import dataclasses
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .exceptions import ConfigError
from .models import NumericClass


@dataclass(frozen=True)
class DumpConfig:
    """
    Configuration of one forward or reverse run.

    Validated once on construction and read-only afterwards.

    Limits:
    -------
    - width: 2..4096 bytes per row
    - group: 1..width bytes per hex group
    - skip: non-negative byte count
    - length: None (unbounded) or a non-negative byte count
    - numeric: None (off) or a NumericClass; names such as 'hex' are accepted
    """
    width: int = 16
    group: int = 2
    color: bool = False
    skip: int = 0
    length: Optional[int] = None
    reverse: bool = False
    uppercase: bool = False
    numeric: Optional[NumericClass] = NumericClass.DECIMAL

    MIN_WIDTH = 2
    MAX_WIDTH = 4096

    def __post_init__(self):
        """Validate field values."""
        for name in ('width', 'group', 'skip'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f"{name} must be an integer, got {value!r}")

        if not self.MIN_WIDTH <= self.width <= self.MAX_WIDTH:
            raise ConfigError(
                f"Width must be in range {self.MIN_WIDTH} <= width <= {self.MAX_WIDTH}, got {self.width}"
            )
        if not 1 <= self.group <= self.width:
            raise ConfigError(f"Grouping must be between 1 and width ({self.width}), got {self.group}")
        if self.skip < 0:
            raise ConfigError(f"Skip must not be negative, got {self.skip}")
        if self.length is not None:
            if isinstance(self.length, bool) or not isinstance(self.length, int):
                raise ConfigError(f"length must be an integer or null, got {self.length!r}")
            if self.length < 0:
                raise ConfigError(f"Length must not be negative, got {self.length}")

        for name in ('color', 'reverse', 'uppercase'):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ConfigError(f"{name} must be true or false, got {value!r}")

        if isinstance(self.numeric, str):
            if self.numeric.lower() == 'none':
                numeric = None
            else:
                try:
                    numeric = NumericClass.parse(self.numeric)
                except ValueError as e:
                    raise ConfigError(str(e)) from e
            object.__setattr__(self, 'numeric', numeric)
        elif self.numeric is not None and not isinstance(self.numeric, NumericClass):
            raise ConfigError(f"numeric must be a numeric class name or null, got {self.numeric!r}")

    def replace(self, **changes) -> 'DumpConfig':
        """Return a copy with the given fields changed (None values are ignored)."""
        return dataclasses.replace(self, **{k: v for k, v in changes.items() if v is not None})

    @classmethod
    def from_dict(cls, data: dict) -> 'DumpConfig':
        """Build a DumpConfig from a dict, ignoring '_comment' style keys."""
        known = {f.name for f in dataclasses.fields(cls)}
        values = {k: v for k, v in data.items() if not k.startswith('_')}
        unknown = set(values) - known
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(sorted(unknown))}")
        return cls(**values)

    @classmethod
    def from_json(cls, path: str | Path) -> 'DumpConfig':
        """Load DumpConfig from JSON file."""
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise ConfigError(f"Config file not found: {path}") from e
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a JSON object")
        return cls.from_dict(data)


def create_default_config(path: str | Path = "hd_config.json") -> Optional[Path]:
    """
    Create a default configuration file if it doesn't exist.

    Returns:
        Path of the created file, or None if it already existed
    """
    config = {
        "width": 16,
        "_width_comment": "Bytes per row (2-4096)",
        "group": 2,
        "_group_comment": "Bytes per hex group, must not exceed width",
        "color": False,
        "skip": 0,
        "length": None,
        "_length_comment": "Maximum number of bytes to dump, null for unbounded",
        "uppercase": False,
        "numeric": "decimal",
        "_numeric_comment": "Digits to highlight: octal, decimal, hexadecimal or null",
    }

    path_obj = Path(path)
    if path_obj.exists():
        return None

    with open(path_obj, 'w', encoding='utf-8') as f:
        json.dump(config, f, indent=2)
    return path_obj
