"""
JsValidation Configuration
==========================

Hierarchical configuration with dotted keys.

Configuration Loading Priority (highest to lowest):
1. Runtime overrides (`config.set`)
2. Environment variables (JSVALIDATION_*)
3. Configuration file (`load_from_file`)
4. Package defaults (`DEFAULTS`)

Example:
    # config/jsvalidation.py
    config = {
        "view": "jsvalidation::bootstrap5",
        "disable_remote_validation": False,
    }

    cfg = Config.from_file("config/jsvalidation.py")
    cfg.get("view")                     # "jsvalidation::bootstrap5"
    cfg.get_bool("focus_on_error")      # True (default)
"""

from __future__ import annotations

import importlib.util
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, TypeVar, Union

import orjson

T = TypeVar("T")


DEFAULTS: Dict[str, Any] = {
    # Default view used to render the validation script
    "view": "jsvalidation::bootstrap",
    # CSS selector of the forms to validate
    "form_selector": "form",
    # Scroll to the first invalid element on submit
    "focus_on_error": True,
    # Scroll animation duration in milliseconds
    "duration_animate": 1000,
    # Public path of the client plugin script
    "js_validation_path": "vendor/jsvalidation/js/jsvalidation.min.js",
    # Disable AJAX validation of server-only rules
    "disable_remote_validation": False,
    # Request field carrying the attribute under remote validation
    "remote_validation_field": "_jsvalidation",
    # HTML-escape generated messages
    "escape": False,
    # Elements the client plugin ignores
    "ignore": ":hidden, [contenteditable='true']",
    # Extra template directories searched before the bundled views
    "view_paths": [],
}

ENV_PREFIX = "JSVALIDATION_"


@dataclass
class ConfigSource:
    """Configuration source with priority."""
    name: str
    data: Dict[str, Any]
    priority: int = 0


class Config:
    """
    Configuration container.

    Example:
        config = Config()
        config.set("form_selector", "#register")
        config.get("form_selector")          # "#register"
        config.get("missing", "default")     # "default"
    """

    def __init__(
        self,
        data: Optional[Dict[str, Any]] = None,
        defaults: Optional[Dict[str, Any]] = None,
        load_env: bool = True,
    ) -> None:
        self._sources: List[ConfigSource] = []
        self._merged: Dict[str, Any] = {}
        self._dirty = True

        self.add_source("defaults", dict(DEFAULTS if defaults is None else defaults), priority=0)
        if data:
            self.add_source("app", data, priority=10)
        if load_env:
            self._load_env_overrides()

    @classmethod
    def from_file(cls, path: Union[str, Path], **kwargs: Any) -> "Config":
        """Create configuration from a Python config file."""
        instance = cls(**kwargs)
        instance.load_from_file(path)
        return instance

    def load_from_file(self, path: Union[str, Path]) -> None:
        """
        Load a Python configuration file.

        The file either defines a `config` dict or module-level
        lowercase names.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        spec = importlib.util.spec_from_file_location("jsvalidation_config", path)
        if spec is None or spec.loader is None:
            return

        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)

        if hasattr(module, "config"):
            data = dict(module.config)
        else:
            data = {
                key: value
                for key, value in vars(module).items()
                if not key.startswith("_") and key.islower()
            }

        self.add_source(f"file:{path.name}", data, priority=10)

    def _load_env_overrides(self) -> None:
        """Load overrides from JSVALIDATION_* environment variables."""
        overrides: Dict[str, Any] = {}

        for key, value in os.environ.items():
            if key.startswith(ENV_PREFIX):
                # JSVALIDATION_FORM_SELECTOR -> form_selector
                config_key = key[len(ENV_PREFIX):].lower()
                overrides[config_key] = self._parse_env_value(value)

        if overrides:
            self.add_source("env", overrides, priority=100)

    def _parse_env_value(self, value: str) -> Any:
        """Parse environment variable value to appropriate type."""
        if value.lower() in ("true", "yes"):
            return True
        if value.lower() in ("false", "no"):
            return False

        try:
            return int(value)
        except ValueError:
            pass

        if value.startswith(("{", "[")):
            try:
                return orjson.loads(value)
            except orjson.JSONDecodeError:
                pass

        return value

    def add_source(self, name: str, data: Dict[str, Any], priority: int = 0) -> None:
        """Add a configuration source."""
        self._sources.append(ConfigSource(name=name, data=data, priority=priority))
        self._dirty = True

    def _merge(self) -> None:
        if not self._dirty:
            return

        self._merged = {}
        for source in sorted(self._sources, key=lambda s: s.priority):
            self._deep_merge(self._merged, source.data)

        self._dirty = False

    def _deep_merge(self, base: Dict, override: Dict) -> None:
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def get(self, key: str, default: T = None) -> Union[Any, T]:
        """Get configuration value using dot notation."""
        self._merge()

        current: Any = self._merged
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]

        return current

    def get_bool(self, key: str, default: bool = False) -> bool:
        value = self.get(key, default)
        if isinstance(value, str):
            return value.lower() in ("true", "yes", "1")
        return bool(value)

    def get_int(self, key: str, default: int = 0) -> int:
        try:
            return int(self.get(key, default))
        except (TypeError, ValueError):
            return default

    def get_list(self, key: str, default: Optional[List] = None) -> List:
        value = self.get(key, default)
        if value is None:
            return default or []
        if isinstance(value, (list, tuple)):
            return list(value)
        return [value]

    def set(self, key: str, value: Any) -> None:
        """Set a runtime value. Runtime values have the highest priority."""
        runtime = next((s for s in self._sources if s.name == "runtime"), None)
        if runtime is None:
            runtime = ConfigSource(name="runtime", data={}, priority=1000)
            self._sources.append(runtime)

        parts = key.split(".")
        current = runtime.data
        for part in parts[:-1]:
            current = current.setdefault(part, {})
        current[parts[-1]] = value

        self._dirty = True

    def has(self, key: str) -> bool:
        return self.get(key) is not None

    def all(self) -> Dict[str, Any]:
        self._merge()
        return dict(self._merged)

    def __getitem__(self, key: str) -> Any:
        value = self.get(key)
        if value is None:
            raise KeyError(key)
        return value

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)

    def __contains__(self, key: str) -> bool:
        return self.has(key)


# Global configuration instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def set_config(config: Config) -> None:
    """Replace the global configuration instance."""
    global _config
    _config = config


def config(key: str, default: Any = None) -> Any:
    """Shortcut function for configuration access."""
    return get_config().get(key, default)
