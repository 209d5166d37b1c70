# ========================
# file: lattice_hash/core/config.py
# ========================
from __future__ import annotations
import copy
import dataclasses
import json
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Tuple, Union

from ..numerics.space_trs import SpaceTRS
from .errors import ValidationError
from .validators import validate_dict


class SampleMode(str, Enum):
    """Источник координат клетки."""

    INDEX_CENTERED = "index_centered"  # целые клетки вокруг нуля, без трансформации
    INDEX_PLANE = "index_plane"        # непрерывная плоскость -> домен -> floor
    POSITIONS = "positions"            # внешние позиции -> объект -> домен -> floor
    POSITIONS_RAW = "positions_raw"    # внешние позиции -> объект -> floor

    @property
    def uses_positions(self) -> bool:
        return self in (SampleMode.POSITIONS, SampleMode.POSITIONS_RAW)

    @property
    def uses_domain(self) -> bool:
        return self in (SampleMode.INDEX_PLANE, SampleMode.POSITIONS)


DEFAULT_CONFIG: Dict[str, Any] = {
    "seed": 0,
    "resolution": 16,
    "mode": SampleMode.POSITIONS.value,
    "shape": "plane",
    "vertical_offset": 1.0,
    "domain": {
        "translation": [0.0, 0.0, 0.0],
        "rotation": [0.0, 0.0, 0.0],
        "scale": 8.0,
    },
}


@dataclass(frozen=True)
class HashConfig:
    seed: int = 0
    resolution: int = 16
    mode: SampleMode = SampleMode.POSITIONS
    shape: str = "plane"
    domain: SpaceTRS = field(default_factory=SpaceTRS)
    vertical_offset: float = 1.0

    @property
    def cell_count(self) -> int:
        return self.resolution * self.resolution

    @property
    def display_config(self) -> Tuple[float, float, float]:
        """(R, 1/R, vertical_offset/R): вектор настроек для рендера."""
        r = float(self.resolution)
        return r, 1.0 / r, float(self.vertical_offset) / r

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seed": self.seed,
            "resolution": self.resolution,
            "mode": self.mode.value if isinstance(self.mode, SampleMode) else self.mode,
            "shape": self.shape,
            "vertical_offset": self.vertical_offset,
            "domain": self.domain.to_dict(),
        }

    def replace(self, **changes: Any) -> "HashConfig":
        """Новый провалидированный конфиг с изменёнными полями."""
        unknown = set(changes) - {f.name for f in dataclasses.fields(self)}
        if unknown:
            raise ValidationError(f"unknown config fields: {sorted(unknown)}")
        if isinstance(changes.get("domain"), SpaceTRS):
            changes["domain"] = changes["domain"].to_dict()
        if isinstance(changes.get("mode"), SampleMode):
            changes["mode"] = changes["mode"].value
        return config_from_dict(deep_merge(self.to_dict(), changes))


def deep_merge(base: Dict[str, Any], overrides: Mapping[str, Any]) -> Dict[str, Any]:
    """Recursive dict merge. Lists/tuples are replaced, not merged element-wise."""
    out = copy.deepcopy(base)
    for k, v in overrides.items():
        if isinstance(v, Mapping) and isinstance(out.get(k), dict):
            out[k] = deep_merge(out[k], v)
        else:
            out[k] = copy.deepcopy(v)
    return out


def validate_config(cfg: HashConfig) -> None:
    try:
        data = cfg.to_dict()
    except ValueError as e:
        raise ValidationError(f"domain: {e}") from e
    validate_dict(data)


def config_from_dict(data: Mapping[str, Any]) -> HashConfig:
    merged = deep_merge(DEFAULT_CONFIG, data)
    if isinstance(merged.get("mode"), SampleMode):
        merged["mode"] = merged["mode"].value
    validate_dict(merged)
    return HashConfig(
        seed=int(merged["seed"]),
        resolution=int(merged["resolution"]),
        mode=SampleMode(merged["mode"]),
        shape=str(merged["shape"]),
        domain=SpaceTRS.from_dict(merged["domain"]),
        vertical_offset=float(merged["vertical_offset"]),
    )


def _load_json_file(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def load_config(
    source: Union[str, Mapping[str, Any], None] = None,
    overrides: Mapping[str, Any] | None = None,
) -> HashConfig:
    """Load a config from a JSON path or dict, merge over defaults and apply overrides.

    Args:
        source: path to a JSON file, a raw dict, or None for defaults
        overrides: mapping of ad-hoc overrides (last layer)
    Returns:
        HashConfig (immutable dataclass), already validated
    """
    if source is None:
        data: Dict[str, Any] = {}
    elif isinstance(source, str):
        if not os.path.isfile(source):
            raise FileNotFoundError(f"config file not found: {source}")
        data = _load_json_file(source)
    elif isinstance(source, Mapping):
        data = dict(source)
    else:
        raise TypeError("source must be str path, dict or None")

    if overrides:
        data = deep_merge(data, overrides)
    return config_from_dict(data)
