# === FILE: follower_scout/config.py ===
"""
Loading and validation of the FollowerScout configuration.
The schema is described with Pydantic; every field has a default, so the
config file is optional.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

_BROWSER_UA = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class ServerConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    host: str = "127.0.0.1"
    port: int = Field(8080, ge=1, le=65535)
    cors_origin: str = "*"


class ScoutConfig(BaseModel):
    """Settings for profile fetching, caching and the HTTP endpoint."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    profile_url_template: str = Field(
        "https://www.tiktok.com/@{username}",
        description="Profile page URL; {username} is replaced with the quoted identifier.",
    )
    default_username: str = Field("boy.throb", min_length=1, description="Used when no identifier is given.")
    cache_ttl: float = Field(60.0, gt=0, description="Cache TTL in seconds.")
    timeout: float = Field(10.0, gt=0, description="Total timeout of one profile fetch (seconds).")
    user_agent: str = Field(_BROWSER_UA, min_length=1, description="User-Agent header.")
    accept_language: str = Field("en-US,en;q=0.9", description="Accept-Language header.")
    retry_times: int = Field(0, ge=0, description="Retries on 5xx/429 responses.")
    retry_backoff: float = Field(1.0, ge=0, description="Base delay of the exponential backoff.")
    snippet_chars: int = Field(1200, ge=0, description="Size of the HTML snippet in debug output.")
    server: ServerConfig = Field(default_factory=ServerConfig)

    @field_validator("profile_url_template")
    @classmethod
    def _check_placeholder(cls, v: str) -> str:
        if "{username}" not in v:
            raise ValueError("profile_url_template must contain '{username}'")
        return v

    @field_validator("default_username", mode="before")
    @classmethod
    def _strip_at(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().removeprefix("@").strip()
        return v


_DEFAULT_CFG = Path("configs/default.yaml")


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


def load_config(path: Union[str, Path, None]) -> ScoutConfig:
    """
    Read YAML or JSON and return a validated ScoutConfig.

    With *path* None the default file is used if it exists, otherwise the
    built-in defaults. An explicit path that does not exist raises
    FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            return ScoutConfig()
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Unsupported config format: {suffix}")

    return ScoutConfig(**data)
