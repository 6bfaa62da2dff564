import os
from dataclasses import dataclass, field
from typing import Any, List, Optional

try:
    import yaml  # type: ignore
except Exception as e:  # pragma: no cover
    raise RuntimeError(
        "PyYAML is required to read entitygen configuration. Please install it: pip install pyyaml"
    ) from e

from .tags import split_tags

CONFIG_FILE = "entitygen.yaml"
DEFAULT_TEMPLATES = "templates"


class ConfigError(Exception):
    """Raised when the configuration file is missing, unreadable or invalid."""


@dataclass
class Settings:
    templates: str = DEFAULT_TEMPLATES
    tags: List[str] = field(default_factory=list)
    out: Optional[str] = None


def _load_yaml(path: str) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def _as_tags(value: Any, path: str) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return split_tags(value)
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return [v.strip() for v in value if v.strip()]
    raise ConfigError(f"{path}: 'tags' must be a list of strings or a comma-separated string")


def _as_path(data: dict, key: str, path: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"{path}: '{key}' must be a non-empty string")
    return value.strip()


def load_settings(config_path: Optional[str] = None, start_dir: Optional[str] = None) -> Settings:
    """
    Load entitygen settings from a YAML file.

    - config_path given: the file must exist.
    - config_path omitted: entitygen.yaml in start_dir (default: cwd) is used if present,
      otherwise defaults are returned.

    Accepted content:
      templates: my-templates
      tags: [entity, service]     # or "entity, service"
      out: src
    """
    explicit = config_path is not None
    path = config_path or os.path.join(start_dir or os.getcwd(), CONFIG_FILE)

    if not os.path.isfile(path):
        if explicit:
            raise ConfigError(f"Config file not found: {path}")
        return Settings()

    try:
        data = _load_yaml(path)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return Settings()
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping at the top level")

    templates = _as_path(data, "templates", path)
    return Settings(
        templates=templates or DEFAULT_TEMPLATES,
        tags=_as_tags(data.get("tags"), path),
        out=_as_path(data, "out", path),
    )
