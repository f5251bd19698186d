"""Loading of Kong declarative configuration files."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from kong_route_tester.discovery.base import KongConfig
from kong_route_tester.discovery.templating import resolve_templates
from kong_route_tester.errors import ConfigError, ConfigErrorKind

logger = logging.getLogger(__name__)


def load_kong_config(path: str | Path) -> KongConfig:
    """Read, template and parse a Kong declarative configuration.

    Environment placeholders are resolved on the raw text before parsing.

    Args:
        path: Path to a YAML (or JSON) declarative configuration.

    Returns:
        The parsed configuration.

    Raises:
        ConfigError: ``NOT_FOUND`` if the file cannot be read, ``PARSE_ERROR``
            if it is not a structurally valid configuration document.
    """
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(ConfigErrorKind.NOT_FOUND, str(e), path=str(path)) from e
    except UnicodeDecodeError as e:
        raise ConfigError(ConfigErrorKind.PARSE_ERROR, str(e), path=str(path)) from e

    try:
        document = yaml.safe_load(resolve_templates(raw))
    except yaml.YAMLError as e:
        raise ConfigError(ConfigErrorKind.PARSE_ERROR, str(e), path=str(path)) from e

    try:
        config = KongConfig.from_dict(document)
    except ConfigError as e:
        raise ConfigError(e.kind, e.detail, path=str(path)) from e

    logger.debug("Loaded %d services (%d routes) from %s", len(config.services), config.route_count, path)
    return config
