"""Project configuration for Ink.

Settings live in an optional ``ink.yaml`` at the project root and are merged
over ``DEFAULT_CONFIG``. A missing, empty or malformed file yields the
defaults.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "ink.yaml"

DEFAULT_CONFIG: dict[str, Any] = {
    # None means: src/css/tailwind.css when present, else src/css/main.css
    "style_bundle": None,
    "script_bundle": "src/js/main.js",
    # None means the templates bundled with the package
    "component_templates": None,
    "shared_layouts": ["base.njk", "page.njk", "archive.njk", "home.njk"],
}


def load_config(project_root: Path) -> dict[str, Any]:
    """Load project configuration from ink.yaml.

    Args:
        project_root: Root directory of the project.

    Returns:
        Dictionary containing configuration values, with defaults applied.
    """
    config = {key: (list(value) if isinstance(value, list) else value) for key, value in DEFAULT_CONFIG.items()}
    config_path = project_root / CONFIG_FILENAME
    if not config_path.exists():
        return config
    try:
        with open(config_path, encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        logger.warning("Ignoring unparseable %s: %s", config_path, exc)
        return config
    if isinstance(loaded, dict):
        config.update(loaded)
    else:
        logger.warning("Ignoring %s: expected a mapping", config_path)
    return config
