"""Writing a service's 'service.toml' definitions file."""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from typing import Any

import tomli_w

_FILENAME = "service.toml"


def _clean(value: Any) -> Any:
    """Drop None values, which TOML cannot hold."""
    if isinstance(value, Mapping):
        return {str(k): _clean(v) for k, v in value.items() if v is not None}
    if isinstance(value, (list, tuple)):
        return [_clean(v) for v in value if v is not None]
    return value


def _as_table(defs: Any, message: str) -> dict[str, Any]:
    if defs is None:
        raise ValueError(message)
    if not isinstance(defs, Mapping):
        raise TypeError("definitions must be a mapping")
    return _clean(defs)


def write(path: str, defs: Mapping[str, Any]) -> str:
    """Write defs as the 'service.toml' file inside path and return its name."""
    table = _as_table(defs, "cannot handle nil options")
    filename = os.path.join(path, _FILENAME)
    with open(filename, "wb") as fp:
        tomli_w.dump(table, fp)
    return filename


def append_service(path: str, service_type: str, service_defs: Mapping[str, Any]) -> None:
    """Append a [services.<type>] section to an existing 'service.toml'."""
    table = _as_table(service_defs, "cannot handle nil definitions")
    filename = os.path.join(path, _FILENAME)

    fd = os.open(filename, os.O_APPEND | os.O_WRONLY)
    with os.fdopen(fd, "a", encoding="utf-8") as fp:
        fp.write(f"\n[services.{service_type}]\n")
        fp.write(tomli_w.dumps(table))


def append_feature(path: str, feature_name: str, feature_defs: Mapping[str, Any]) -> None:
    """Add a feature's settings under [features] in an existing 'service.toml'."""
    table = _as_table(feature_defs, "cannot handle nil definitions")
    filename = os.path.join(path, _FILENAME)

    with open(filename, "rb") as fp:
        current = tomllib.load(fp)

    new_defs = tomllib.loads(tomli_w.dumps(table))
    features = current.setdefault("features", {})
    if not isinstance(features, dict):
        raise ValueError("'features' in service.toml is not a table")
    features[feature_name] = new_defs

    with open(filename, "wb") as fp:
        tomli_w.dump(current, fp)