"""Loader for parsed API specification documents.

Reads JSON or YAML holding either the bare specification tree
({info, service, types}) or the plugin envelope goctl hands to its plugins
({Api, ApiFilePath, Dir, Style}).
"""

import json
from pathlib import Path

import yaml
from pydantic import BaseModel, ValidationError

from api2swagger.errors import SpecLoadError
from api2swagger.parser.base import ApiSpec


class Plugin(BaseModel):
    """A parsed specification plus the context it was delivered with."""

    api: ApiSpec
    api_file_path: str = ""
    dir: str = ""  # default output directory
    style: str = ""  # naming style for tag formatting


def load_plugin(file_path: Path) -> Plugin:
    """Load a specification document from disk."""
    return parse_plugin(file_path.read_text(encoding="utf-8"))


def parse_plugin(text: str) -> Plugin:
    """Parse a specification document given as JSON or YAML text."""
    data = _load_mapping(text)

    try:
        if "Api" in data:
            return Plugin(
                api=ApiSpec.model_validate(data["Api"]),
                api_file_path=data.get("ApiFilePath") or "",
                dir=data.get("Dir") or "",
                style=data.get("Style") or "",
            )
        return Plugin(api=ApiSpec.model_validate(data))
    except ValidationError as e:
        raise SpecLoadError(f"not a parsed API specification: {e}") from e


def _load_mapping(text: str) -> dict:
    # JSON first: PyYAML rejects tab-indented JSON.
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, ValueError):
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise SpecLoadError(f"cannot parse specification document: {e}") from e

    if not isinstance(data, dict):
        raise SpecLoadError("specification document must be a mapping")
    return data
