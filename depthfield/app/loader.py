from __future__ import annotations
import dataclasses
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from depthfield.api.config import FieldConfig


def load_settings(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Reads a YAML settings file (see config/default.yaml) and returns its mapping.
    An empty file is an empty mapping.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Missing settings file {path}")
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a mapping, got {type(data).__name__}")
    return data


def config_from_settings(settings: Dict[str, Any], **overrides: Any) -> FieldConfig:
    """
    Builds a FieldConfig from defaults < settings < overrides.
    Overrides that are None (CLI flags left unset) are ignored.
    """
    known = {f.name for f in dataclasses.fields(FieldConfig)}
    values = dict(settings)
    values.update({k: v for k, v in overrides.items() if v is not None})

    unknown = sorted(set(values) - known)
    if unknown:
        raise ValueError(f"Unknown setting(s): {', '.join(unknown)}")

    if "screen_size" in values:
        w, h = values["screen_size"]
        values["screen_size"] = (int(w), int(h))
    return FieldConfig(**values)
