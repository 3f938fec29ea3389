"""Render configuration and config-file loading."""

from pathlib import Path

import yaml
from pydantic import BaseModel, ValidationError

from route_docgen.errors import ConfigError


class Server(BaseModel):
    url: str
    description: str | None = None


class RenderConfig(BaseModel):
    """Document-level settings shared by every renderer."""

    title: str = "API Documentation"
    version: str = "1.0.0"
    description: str = "Auto-generated API documentation"
    servers: list[Server] = []
    generated_at: str | None = None  # only place a timestamp may appear


def load_config(config_path: Path | None) -> dict:
    """Read a JSON or YAML config file. A missing file yields {}."""
    if config_path is None or not config_path.exists():
        return {}

    text = config_path.read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"{config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{config_path}: expected a mapping, got {type(data).__name__}")
    return data


def build_config(
    file_values: dict,
    title: str | None = None,
    version: str | None = None,
    server: str | None = None,
    generated_at: str | None = None,
) -> RenderConfig:
    """Apply command line overrides on top of config file values."""
    values = dict(file_values)
    if title:
        values["title"] = title
    if version:
        values["version"] = version
    if server:
        values["servers"] = [{"url": server}]
    if generated_at:
        values["generated_at"] = generated_at

    try:
        return RenderConfig(**values)
    except ValidationError as e:
        raise ConfigError(f"invalid configuration: {e}") from e
