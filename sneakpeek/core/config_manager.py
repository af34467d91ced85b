"""
Configuration management for sneakpeek.

Builds the immutable upload options for a run from, in increasing
precedence: packaged defaults, an optional YAML config file, environment
variables and CLI flags.
"""
import importlib.resources as importlib_resources
import os
from typing import Optional

import yaml

from sneakpeek.upload.exceptions import ConfigurationError
from sneakpeek.upload.models import UploadOptions

CONFIG_FILENAME = "sneakpeek.config.yaml"

ENV_VARS = {
    "api_url": "SNEAKPEEK_API_URL",
    "api_key": "SNEAKPEEK_API_KEY"
}


class ConfigManager:
    """Manages sneakpeek configuration loading and merging operations."""

    def load_config(self, path: str) -> dict:
        """Load configuration from YAML file."""
        try:
            with open(path, "r") as f:
                config = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Could not load config file {path}: {e}")

        if config is None:
            return {}
        if not isinstance(config, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping")
        return config

    def load_package_default_config(self) -> dict:
        """Load default config from package."""
        default_config_path = importlib_resources.files("sneakpeek.config") / "default.yaml"
        with default_config_path.open("r") as f:
            return yaml.safe_load(f)

    def discover_and_load_config(self, config_arg: Optional[str]) -> dict:
        """Discover config file with priority order."""
        config = self.load_package_default_config()

        # Priority 1: --config argument
        if config_arg:
            if not os.path.exists(config_arg):
                raise ConfigurationError(f"Config file not found: {config_arg}")
            config.update(self.load_config(config_arg))

        # Priority 2: sneakpeek.config.yaml in current directory
        elif os.path.exists(CONFIG_FILENAME):
            config.update(self.load_config(CONFIG_FILENAME))

        return config

    def merge_environment(self, config: dict) -> dict:
        """Overlay non-empty environment variables onto config."""
        result = dict(config)
        for key, var in ENV_VARS.items():
            value = os.getenv(var)
            if value:
                result[key] = value
        return result

    def build_upload_options(
        self,
        path: str,
        project: str,
        gitlab_project: str,
        api_url: Optional[str] = None,
        api_key: Optional[str] = None,
        config_path: Optional[str] = None
    ) -> UploadOptions:
        """Merge defaults, config file, environment and CLI flags."""
        config = self.merge_environment(self.discover_and_load_config(config_path))

        if api_url:
            config["api_url"] = api_url
        if api_key:
            config["api_key"] = api_key

        if not config.get("api_url"):
            raise ConfigurationError("No API URL configured. Use --api-url or set SNEAKPEEK_API_URL")

        return UploadOptions(
            path=path,
            project=project,
            gitlab_project=gitlab_project,
            api_url=str(config["api_url"]),
            api_key=str(config["api_key"]) if config.get("api_key") else None
        )
