"""YAML config loader with environment key overrides and runtime get/set."""

import hashlib
import json
import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from sunrise.config.defaults import DEFAULT_NEWS_QUERIES
from sunrise.config.schema import NavigatorConfig

# Environment variable -> keys.<field>
ENV_KEYS: dict[str, str] = {
    "GOOGLE_MAPS_API_KEY": "google_maps_api_key",
    "OPENWEATHER_API_KEY": "openweather_api_key",
    "NEWS_API_KEY": "news_api_key",
    "GEMINI_API_KEY": "gemini_api_key",
    "LASTFM_API_KEY": "lastfm_api_key",
}


def load_config(path: str | Path | None = None, use_env: bool = True) -> NavigatorConfig:
    """Load and validate config from a YAML file.

    A missing or empty file yields the defaults. If no news queries are
    specified, injects DEFAULT_NEWS_QUERIES. API keys set in the
    environment (or a .env file) override the YAML values.
    """
    raw: dict[str, Any] = {}
    if path is not None and Path(path).exists():
        with open(path) as f:
            raw = yaml.safe_load(f) or {}

    news = raw.setdefault("news", {}) or {}
    raw["news"] = news
    if not news.get("queries"):
        news["queries"] = [q.model_dump() for q in DEFAULT_NEWS_QUERIES]

    if use_env:
        load_dotenv()
        keys = raw.setdefault("keys", {}) or {}
        raw["keys"] = keys
        for env_name, field in ENV_KEYS.items():
            value = os.environ.get(env_name)
            if value:
                keys[field] = value

    return NavigatorConfig(**raw)


def save_config(config: NavigatorConfig, path: str | Path) -> None:
    """Write config to a YAML file. Empty API keys are left out."""
    data = config.model_dump(mode="json")
    keys = {k: v for k, v in data.pop("keys").items() if v}
    if keys:
        data["keys"] = keys
    with open(path, "w") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)


def config_hash(config: NavigatorConfig) -> str:
    """Deterministic SHA256 digest of the settings, API keys excluded."""
    data = config.model_dump_json(indent=None, exclude={"keys"})
    return hashlib.sha256(data.encode()).hexdigest()[:16]


def redacted(config: NavigatorConfig) -> dict[str, Any]:
    """Config as a dict with API keys masked, for display."""
    data = json.loads(config.model_dump_json())
    for field, value in data["keys"].items():
        data["keys"][field] = f"...{value[-4:]}" if len(value) > 8 else ("***" if value else "")
    return data


def get_config_value(config: NavigatorConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'traffic.suggestion_threshold_minutes'."""
    parts = dotted_key.split(".")
    obj: Any = config
    for part in parts:
        if isinstance(obj, list):
            obj = obj[int(part)]
        elif hasattr(obj, part):
            obj = getattr(obj, part)
        elif isinstance(obj, dict):
            obj = obj[part]
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj


def set_config_value(config: NavigatorConfig, dotted_key: str, value: Any) -> NavigatorConfig:
    """Set a config value by dotted key path and re-validate.

    Returns a new NavigatorConfig instance.
    """
    data = json.loads(config.model_dump_json())
    parts = dotted_key.split(".")
    target = data
    for part in parts[:-1]:
        target = target[part]
    if parts[-1] not in target:
        raise KeyError(f"Config key not found: {dotted_key}")
    # Attempt type coercion for common cases
    old_value = target.get(parts[-1])
    if isinstance(old_value, bool) and isinstance(value, str):
        value = value.lower() in ("1", "true", "yes", "on")
    elif isinstance(old_value, int) and isinstance(value, str):
        value = int(value)
    elif isinstance(old_value, float) and isinstance(value, str):
        value = float(value)
    target[parts[-1]] = value
    return NavigatorConfig(**data)
