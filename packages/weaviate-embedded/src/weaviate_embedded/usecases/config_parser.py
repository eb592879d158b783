"""Config parser use case for engine YAML configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from weaviate_embedded.domain.exceptions import ConfigFileError, EmbeddedEngineError
from weaviate_embedded.usecases.config_builder import (
    BuildPipeline,
    ConfigBuilder,
    VersionedConfigBuilder,
)

_KNOWN_KEYS = frozenset(
    {
        "version",
        "verify_release",
        "target_file",
        "target_url",
        "platform",
        "bind_address",
        "grpc_port",
        "binary_directory",
        "data_directory",
        "extras",
        "startup_timeout",
        "shutdown_grace_period",
    }
)


class ConfigParser:
    """Parses engine YAML configuration into a finalizable builder.

    Example document::

        version: v1.21.1      # 'latest', 'from-target' or omitted for the default
        bind_address: 127.0.0.1:8080
        grpc_port: 50061
        data_directory: ~/engine-data
        extras:
          LOG_LEVEL: debug
    """

    def __init__(self, pipeline: BuildPipeline | None = None) -> None:
        self._pipeline = pipeline

    def parse(self, yaml_str: str) -> VersionedConfigBuilder:
        """Parse a YAML document into a VersionedConfigBuilder.

        Args:
            yaml_str: YAML string with engine settings.

        Returns:
            Builder with every setting from the document applied.

        Raises:
            ConfigFileError: If the YAML is invalid, has unknown keys, sets
                both target_file and target_url, or holds an invalid value.
        """
        try:
            config = yaml.safe_load(yaml_str)
        except yaml.YAMLError as e:
            raise ConfigFileError(f"Invalid YAML: {e}", original_error=e) from e

        if config is None:
            config = {}
        if not isinstance(config, dict):
            raise ConfigFileError("Config must be a dictionary")

        unknown = sorted(str(key) for key in config if key not in _KNOWN_KEYS)
        if unknown:
            raise ConfigFileError(f"Unknown config keys: {unknown}", value=unknown)
        if "target_file" in config and "target_url" in config:
            raise ConfigFileError("target_file and target_url are mutually exclusive")

        try:
            return self._apply(config)
        except ConfigFileError:
            raise
        except EmbeddedEngineError as e:
            raise ConfigFileError(
                f"Invalid config value: {e.message}", value=e.value, original_error=e
            ) from e

    def parse_file(self, path: Path | str) -> VersionedConfigBuilder:
        """Read and parse a YAML config file.

        Raises:
            ConfigFileError: If the file cannot be read or parsed.
        """
        try:
            text = Path(path).expanduser().read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigFileError(
                f"Cannot read config file {path}: {e}", value=str(path), original_error=e
            ) from e
        return self.parse(text)

    def _apply(self, config: dict[str, Any]) -> VersionedConfigBuilder:
        builder = ConfigBuilder(self._pipeline)
        if config.get("version") is None:
            versioned = builder.default_version()
        else:
            versioned = builder.version(str(config["version"]))

        if config.get("verify_release"):
            versioned = versioned.verify_release(True)
        if config.get("target_file") is not None:
            versioned = versioned.target_file(str(config["target_file"]))
        if config.get("target_url") is not None:
            versioned = versioned.target_url(str(config["target_url"]))
        if config.get("platform") is not None:
            versioned = versioned.system_type(str(config["platform"]))
        if config.get("bind_address") is not None:
            versioned = versioned.bind_address(str(config["bind_address"]))
        if config.get("grpc_port") is not None:
            versioned = versioned.grpc_port(config["grpc_port"])
        if config.get("binary_directory") is not None:
            versioned = versioned.binary_directory(str(config["binary_directory"]))
        if config.get("data_directory") is not None:
            versioned = versioned.data_directory(str(config["data_directory"]))
        if config.get("startup_timeout") is not None:
            versioned = versioned.startup_timeout(self._number(config, "startup_timeout"))
        if config.get("shutdown_grace_period") is not None:
            versioned = versioned.shutdown_grace_period(
                self._number(config, "shutdown_grace_period")
            )

        extras = config.get("extras")
        if extras is not None:
            if not isinstance(extras, dict):
                raise ConfigFileError("extras must be a mapping", value=extras)
            versioned = versioned.extras(extras)
        return versioned

    @staticmethod
    def _number(config: dict[str, Any], key: str) -> float:
        value = config[key]
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigFileError(f"{key} must be a number, got: {value!r}", value=value)
        return float(value)
