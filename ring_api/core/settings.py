"""Configuration management for the RING web service client."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from ring_api.core.errors import ConfigurationError

PROJECT_ROOT = Path(__file__).resolve().parents[2]
CONFIG_DIR = PROJECT_ROOT / "config"
SETTINGS_FILE = CONFIG_DIR / "settings.yaml"
SETTINGS_FILE_ENV = "RING_SETTINGS_FILE"

DEFAULT_BASE_URL = "http://protein.bio.unipd.it/ringws"


class RingServiceSettings(BaseModel):
    base_url: str = Field(default=DEFAULT_BASE_URL)
    timeout_seconds: float = Field(default=30.0, gt=0)


class ServiceSettings(BaseModel):
    ring: RingServiceSettings = RingServiceSettings()


class WorkflowSettings(BaseModel):
    poll_interval_seconds: float = Field(default=5.0, ge=0)
    max_polls: int = Field(default=120, gt=0)


class AppSettings(BaseModel):
    name: str = Field(default="ring-api")
    log_level: str = Field(default="INFO")
    log_json: bool = Field(default=True)


class Settings(BaseModel):
    app: AppSettings = AppSettings()
    services: ServiceSettings = ServiceSettings()
    workflows: WorkflowSettings = WorkflowSettings()

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Settings":
        """Load settings from YAML, falling back to defaults when no file exists.

        An explicitly requested file (argument or ``RING_SETTINGS_FILE``) must
        exist; only the bundled default location is optional.
        """
        load_dotenv()
        explicit = path or os.getenv(SETTINGS_FILE_ENV)
        if explicit:
            data = _load_yaml(Path(explicit))
        elif SETTINGS_FILE.exists():
            data = _load_yaml(SETTINGS_FILE)
        else:
            data = {}
        merged = _interpolate_env(data)
        try:
            return cls.model_validate(
                {
                    "app": merged.get("app") or {},
                    "services": merged.get("services") or {},
                    "workflows": merged.get("workflows") or {},
                }
            )
        except ValidationError as exc:
            error = exc.errors()[0]
            setting = ".".join(str(part) for part in error["loc"])
            raise ConfigurationError(setting, error["msg"]) from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.load()


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")
    try:
        return yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(str(path), f"not valid YAML: {exc}") from exc


def _interpolate_env(data: Dict[str, Any]) -> Dict[str, Any]:
    def resolve(value: Any) -> Any:
        if isinstance(value, str) and value.startswith("${") and value.endswith("}"):
            expression = value[2:-1]
            env_key = expression
            default = ""
            if ":-" in expression:
                env_key, default = expression.split(":-", 1)
            elif "-" in expression:
                env_key, default = expression.split("-", 1)
            env_key = env_key.strip()
            return os.getenv(env_key, default)
        if isinstance(value, dict):
            return {k: resolve(v) for k, v in value.items()}
        if isinstance(value, list):
            return [resolve(v) for v in value]
        return value

    return {key: resolve(val) for key, val in data.items()}


__all__ = ["DEFAULT_BASE_URL", "Settings", "get_settings"]
