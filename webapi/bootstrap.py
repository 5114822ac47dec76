"""
Runtime configuration for serving the users API.

Server and logging options come from ``webapi.yml`` (if present) and are
overridden by ``WEBAPI_*`` environment variables.
"""

import os
import yaml
from typing import Dict, Any, Optional


class BootstrapConfig:
    """Server configuration resolved from file and environment."""

    def __init__(self, config_file: Optional[str] = None):
        self.profile = os.getenv("WEBAPI_PROFILE", "dev")
        self.config_file = config_file or os.getenv("WEBAPI_CONFIG", "webapi.yml")
        self.server = {
            "host": "127.0.0.1",
            "port": 8000,
            "reload": False,
        }
        self.logging = {
            "level": "INFO",
        }

        self.load_config()

    def load_config(self):
        """Load configuration from file and environment."""
        config_data: Dict[str, Any] = {}

        if os.path.exists(self.config_file):
            with open(self.config_file, "r") as f:
                config_data = yaml.safe_load(f) or {}

        self._apply_env_overrides(config_data)
        self._merge_config(config_data)

    def _apply_env_overrides(self, config_data: Dict[str, Any]):
        env_mappings = {
            "WEBAPI_SERVER_HOST": ("server.host", str),
            "WEBAPI_SERVER_PORT": ("server.port", int),
            "WEBAPI_SERVER_RELOAD": ("server.reload", lambda v: v.lower() in ("1", "true", "yes")),
            "WEBAPI_LOG_LEVEL": ("logging.level", str),
        }

        for env_var, (path, converter) in env_mappings.items():
            value = os.getenv(env_var)
            if value:
                self._set_nested(config_data, path, converter(value))

    def _set_nested(self, config: Dict[str, Any], path: str, value: Any):
        keys = path.split(".")
        current = config

        for key in keys[:-1]:
            if key not in current:
                current[key] = {}
            current = current[key]

        current[keys[-1]] = value

    def _merge_config(self, config_data: Dict[str, Any]):
        if "server" in config_data:
            self.server.update(config_data["server"])

        if "logging" in config_data:
            self.logging.update(config_data["logging"])

    def get_server_url(self) -> str:
        return f"http://{self.server['host']}:{self.server['port']}"
