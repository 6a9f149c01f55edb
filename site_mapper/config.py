# === FILE: site_mapper/config.py ===
"""
Loading and validation of the SiteMapper crawl configuration.
The schema is described with Pydantic; files may be YAML or JSON.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Literal, Union
from urllib.parse import urlparse

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator


class MapperConfig(BaseModel):
    """Configuration of a single crawl run."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    base_url: str = Field(..., description="Root URL of the site to map.")
    idle_timeout: float = Field(5.0, gt=0, description="Seconds without a new edge before the crawl is considered done.")
    workers: int = Field(20, ge=1, description="Number of concurrent fetch workers.")
    queue_size: int = Field(1000, ge=1, description="Capacity of the work queue.")
    completion: Literal["idle", "tracked"] = Field(
        "idle", description="idle: stop on idle timeout only; tracked: stop when no work item is pending."
    )
    extractor: Literal["regex", "soup"] = Field("regex", description="Link extraction strategy.")
    user_agent: str = Field("SiteMapperBot/1.0", min_length=1, description="User-Agent header.")

    @field_validator("base_url", mode="before")
    def _strip_trailing_slash(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().rstrip("/")
        return v

    @field_validator("base_url")
    def _check_scheme(cls, v: str) -> str:
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"base_url must be an absolute http(s) URL, got {v!r}")
        return v


DEFAULT_CFG = Path("configs/site_mapper.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def read_config_file(path: Union[str, Path, None]) -> dict[str, Any]:
    """
    Return the raw mapping stored in *path*.

    Without a path the default ``configs/site_mapper.yaml`` is used when it
    exists, otherwise an empty mapping.
    """
    if path is None:
        if not DEFAULT_CFG.is_file():
            return {}
        path_obj = DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path_obj)
    if suffix == ".json":
        return _read_json(path_obj)
    raise ValueError(f"Unsupported config format: {suffix}")


def load_config(path: Union[str, Path, None] = None, **overrides: Any) -> MapperConfig:
    """
    Read the config file and return a validated MapperConfig.

    Keyword overrides (typically CLI options) win over file values;
    overrides equal to ``None`` are ignored.
    """
    data = read_config_file(path)
    data.update({k: v for k, v in overrides.items() if v is not None})
    return MapperConfig(**data)


__all__ = ["MapperConfig", "load_config", "read_config_file", "DEFAULT_CFG"]
