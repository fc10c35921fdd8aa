"""
Config system - Layered typed configuration with validation.

Sources, later overriding earlier:
1. Config files (YAML or JSON)
2. .env file (QUIRE_* keys only)
3. Environment variables (QUIRE_* prefix, ``__`` nests)
4. Manual overrides
"""

import json
import logging
import os
from dataclasses import MISSING, dataclass, fields
from glob import glob
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import dotenv_values

from .faults import ConfigInvalidFault


logger = logging.getLogger("quire.config")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class QuireConfig:
    """
    Framework settings.

    Attributes:
        default_language: Language used when the host supplies no locale
        views_path: Directory holding view files
        environment: Deployment environment name
        log_level: Logging level name
        autoescape: HTML autoescaping for view files
    """
    default_language: str = "en"
    views_path: str = "views"
    environment: str = "development"
    log_level: str = "INFO"
    autoescape: bool = True


class ConfigLoader:
    """
    Loads and merges configuration from multiple sources.

    Example:
        loader = ConfigLoader.load(paths=["config/*.yaml"], env_file=".env")
        config = loader.quire_config()
        loader.get("seo.default_image")
    """

    def __init__(self, env_prefix: str = "QUIRE_"):
        self.env_prefix = env_prefix
        self.config_data: Dict[str, Any] = {}

    @classmethod
    def load(
        cls,
        paths: Optional[list[str]] = None,
        env_prefix: str = "QUIRE_",
        env_file: Optional[str] = None,
        overrides: Optional[Dict[str, Any]] = None,
    ) -> "ConfigLoader":
        """
        Load configuration from every source.

        Args:
            paths: Config file paths (glob patterns supported)
            env_prefix: Prefix for environment variables
            env_file: Path to .env file
            overrides: Manual overrides (highest precedence)
        """
        loader = cls(env_prefix=env_prefix)

        for pattern in paths or []:
            loader._load_from_files(pattern)

        if env_file:
            loader._load_env_file(env_file)

        loader._load_from_env()

        if overrides:
            loader._merge_dict(loader.config_data, overrides)

        return loader

    def _load_from_files(self, pattern: str):
        """Load config from JSON or YAML files."""
        for path_str in sorted(glob(pattern)):
            path = Path(path_str)

            if path.suffix == ".json":
                self._load_json_file(path)
            elif path.suffix in (".yaml", ".yml"):
                self._load_yaml_file(path)
            else:
                logger.warning("Ignoring config file with unknown format: %s", path)

    def _load_json_file(self, path: Path):
        with open(path) as f:
            self._merge_dict(self.config_data, json.load(f))

    def _load_yaml_file(self, path: Path):
        with open(path) as f:
            data = yaml.safe_load(f)
            if data:
                self._merge_dict(self.config_data, data)

    def _load_env_file(self, path: str):
        """Load prefixed keys from a .env file."""
        if not Path(path).exists():
            logger.debug("No env file at %s", path)
            return

        for key, value in dotenv_values(path).items():
            if key.startswith(self.env_prefix) and value is not None:
                self._set_nested(key, value)

    def _load_from_env(self):
        for key, value in os.environ.items():
            if key.startswith(self.env_prefix):
                self._set_nested(key, value)

    def _set_nested(self, key: str, value: str):
        """Convert QUIRE_SEO__DEFAULT_IMAGE to {"seo": {"default_image": ...}}."""
        parts = key[len(self.env_prefix):].lower().split("__")

        current = self.config_data
        for part in parts[:-1]:
            if not isinstance(current.get(part), dict):
                current[part] = {}
            current = current[part]

        current[parts[-1]] = self._parse_value(value)

    def _parse_value(self, value: str) -> Any:
        """Parse string value to appropriate type."""
        if value.lower() in ("true", "yes"):
            return True
        if value.lower() in ("false", "no"):
            return False

        try:
            if "." in value:
                return float(value)
            return int(value)
        except ValueError:
            pass

        if value.startswith(("{", "[")):
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                pass

        return value

    def _merge_dict(self, target: dict, source: dict):
        """Deep merge source into target."""
        for key, value in source.items():
            if key in target and isinstance(target[key], dict) and isinstance(value, dict):
                self._merge_dict(target[key], value)
            else:
                target[key] = value

    def get(self, path: str, default: Any = None) -> Any:
        """Get config value by dot-separated path."""
        current: Any = self.config_data

        for part in path.split("."):
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default

        return current

    def quire_config(self) -> QuireConfig:
        """
        Build the validated framework settings from the root keys.

        Raises:
            ConfigInvalidFault: If a value has the wrong type
        """
        kwargs = {}

        for field_info in fields(QuireConfig):
            if field_info.name not in self.config_data:
                continue

            value = self.config_data[field_info.name]
            expected = field_info.type if isinstance(field_info.type, type) else type(field_info.default)

            if field_info.default is not MISSING and not isinstance(value, expected):
                raise ConfigInvalidFault(
                    field_info.name,
                    f"expected {expected.__name__}, got {type(value).__name__}",
                )

            kwargs[field_info.name] = value

        return QuireConfig(**kwargs)

    def to_dict(self) -> dict:
        """Export all config as dictionary."""
        return self.config_data.copy()


def configure_logging(level: str = "INFO") -> None:
    """Apply the framework's logging format at ``level``."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )
