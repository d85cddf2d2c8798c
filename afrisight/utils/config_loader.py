import yaml
from pathlib import Path
from typing import Any, Dict, Mapping, Union

from afrisight.errors import ConfigurationError
from afrisight.utils.logger import LoggerManager


class ConfigLoader:
    """
    Read-only view over the optional AfriSight YAML config file.

    Sections mirror the settings groups (``mongodb``, ``auth``, ``genai``,
    ``server``, ``data``, ``logging``, ``chat``); values are addressed with
    dot notation, e.g. ``genai.model``.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self.logger = LoggerManager.get_logger(name="config", use_json=True)
        self.sections = self._read()

    def _read(self) -> Dict[str, Any]:
        if not self.path.is_file():
            self.logger.error("config.missing", extra={"extra_data": {"path": str(self.path)}})
            raise ConfigurationError.from_config_file(str(self.path), "file not found")

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            self.logger.error(
                "config.unreadable",
                extra={"extra_data": {"path": str(self.path), "error": str(e)}},
            )
            raise ConfigurationError.from_config_file(str(self.path), str(e)) from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError.from_config_file(str(self.path), "top level must be a mapping")

        self.logger.info("config.loaded", extra={"extra_data": {"path": str(self.path)}})
        return data

    def get(self, key: str, default: Any = None) -> Any:
        """Value at dotted ``key``, or ``default`` when any part is absent."""
        node: Any = self.sections
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def select(self, keys: Mapping[str, str]) -> Dict[str, Any]:
        """Map setting names to the values present in the file.

        Args:
            keys: setting name -> dotted YAML key

        Returns:
            Only the settings whose key exists and is not null
        """
        found = {}
        for name, dotted in keys.items():
            value = self.get(dotted)
            if value is not None:
                found[name] = value
        return found
