r"""YAML loader + schema validation for run configuration files.

A configuration file holds the same fields as ``RunConfig``::

    patterns:
      - '^\s*(?P<v>[0-9]+)\s+.+(?P<k>\.[A-Za-z0-9]{1,4})$'
    factor: 1024
    top: 10
    sort_field: sum
"""

from __future__ import annotations

import json
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Union

import jsonschema
import yaml

from summitt.config import RunConfig
from summitt.errors import ConfigError
from summitt.logging import get_logger

logger = get_logger(__name__)


def _load_schema() -> Dict[str, Any]:
    with (
        resources.files("summitt.schemas")
        .joinpath("config.json")
        .open("r", encoding="utf-8")
    ) as f:
        return json.load(f)


def load_config_yaml(yaml_str: str) -> Dict[str, Any]:
    """Parse and validate a configuration YAML string.

    Returns:
        The validated mapping, suitable for ``RunConfig.from_dict``.

    Raises:
        ConfigError: On YAML syntax errors, a non-mapping document, or schema
            violations (including unrecognized keys).
    """
    try:
        data = yaml.safe_load(yaml_str)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML: {exc}") from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("The provided YAML must map to a dictionary at top-level.")

    recognized_keys = set(_load_schema()["properties"])
    extra = {str(k) for k in data} - recognized_keys
    if extra:
        raise ConfigError(
            f"Unrecognized top-level key(s) in configuration: {', '.join(sorted(extra))}. "
            f"Allowed keys are {sorted(recognized_keys)}"
        )

    try:
        jsonschema.validate(data, _load_schema())
    except jsonschema.ValidationError as exc:
        path = ".".join(str(p) for p in exc.absolute_path) or "<root>"
        raise ConfigError(f"Invalid configuration at {path}: {exc.message}") from exc

    return data


def load_config_file(path: Union[str, Path]) -> RunConfig:
    """Load a ``RunConfig`` from a YAML file.

    Raises:
        ConfigError: If the file cannot be read or is invalid.
    """
    path = Path(path)
    logger.debug("loading configuration from %s", path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read configuration file {path}: {exc}") from exc
    return RunConfig.from_dict(load_config_yaml(text))
