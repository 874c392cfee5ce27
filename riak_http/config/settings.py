"""
Configuration management for Riak HTTP.

Loads YAML configuration from file with sensible defaults and validation.
Supports environment variable substitution using ${ENV_VAR} syntax.
"""

import os
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import yaml

from riak_http.exceptions import InvalidConfigurationError
from riak_http.logging_config import get_logger

logger = get_logger(__name__)

CONFIG_PATH_ENV_VAR = "RIAK_HTTP_CONFIG"


def _expand_env_vars(value: Any) -> Any:
    """
    Recursively expand environment variables in configuration values.

    Supports ${ENV_VAR} syntax with optional default values: ${ENV_VAR:default}

    Args:
        value: Configuration value (string, dict, list, or other)

    Returns:
        Value with environment variables expanded

    Examples:
        "${RIAK_HOST}" -> value of RIAK_HOST env var
        "${RIAK_PORT:8098}" -> value of RIAK_PORT or "8098" if not set
    """
    if isinstance(value, str):
        # Pattern matches ${VAR} or ${VAR:default}
        pattern = r'\$\{([^}:]+)(?::([^}]*))?\}'

        def replace_env_var(match):
            var_name = match.group(1)
            default_value = match.group(2) if match.group(2) is not None else ""
            return os.environ.get(var_name, default_value)

        return re.sub(pattern, replace_env_var, value)
    elif isinstance(value, dict):
        return {k: _expand_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [_expand_env_vars(item) for item in value]
    else:
        return value


def _as_bool(value: Any) -> bool:
    """Interpret YAML or env-expanded string values as booleans."""
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


@dataclass
class NodeConfig:
    """Riak node address configuration."""

    host: str = "127.0.0.1"
    port: int = 8098
    ssl: bool = False


@dataclass
class TransportConfig:
    """HTTP session configuration."""

    timeout: float = 30.0  # seconds, None disables
    pool_connections: int = 10
    pool_maxsize: int = 10
    chunk_size: int = 8192
    user_agent: str = "riak-http"


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    file: str = ""
    json_format: bool = True


@dataclass
class RiakHttpConfig:
    """Main Riak HTTP configuration."""

    node: NodeConfig = field(default_factory=NodeConfig)
    transport: TransportConfig = field(default_factory=TransportConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def get_default_config_path() -> str:
    """Get the configuration file path, honouring RIAK_HTTP_CONFIG."""
    return os.environ.get(CONFIG_PATH_ENV_VAR) or os.path.expanduser("~/.riak_http/config.yaml")


def get_default_config() -> RiakHttpConfig:
    """
    Get default configuration with sensible defaults.

    Returns:
        RiakHttpConfig: Default configuration object
    """
    return RiakHttpConfig()


def load_config(config_path: Optional[str] = None) -> RiakHttpConfig:
    """
    Load configuration from YAML file with validation.

    If config file is not found, returns default configuration.
    If config file is malformed or invalid, raises InvalidConfigurationError.

    Args:
        config_path: Path to configuration file. If None, uses default path.

    Returns:
        RiakHttpConfig: Loaded and validated configuration

    Raises:
        InvalidConfigurationError: If configuration is invalid or malformed
    """
    if config_path is None:
        config_path = get_default_config_path()

    config_path = os.path.expanduser(config_path)

    if not os.path.exists(config_path):
        logger.info(f"Configuration file not found at {config_path}, using defaults")
        return get_default_config()

    try:
        with open(config_path, 'r') as f:
            config_data = yaml.safe_load(f)
        logger.debug(f"Loaded configuration from {config_path}")
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse YAML configuration file '{config_path}': {e}", exc_info=True)
        raise InvalidConfigurationError(
            f"Failed to parse YAML configuration file '{config_path}': {e}"
        ) from e
    except OSError as e:
        logger.error(f"Failed to read configuration file '{config_path}': {e}", exc_info=True)
        raise InvalidConfigurationError(
            f"Failed to read configuration file '{config_path}': {e}"
        ) from e

    if config_data is None:
        logger.info(f"Configuration file {config_path} is empty, using defaults")
        return get_default_config()

    if not isinstance(config_data, dict):
        raise InvalidConfigurationError(
            f"Configuration file '{config_path}' must contain a mapping at the top level"
        )

    config_data = _expand_env_vars(config_data)

    try:
        config = _build_config_from_dict(config_data)
        _validate_config(config)
    except (TypeError, ValueError, InvalidConfigurationError) as e:
        logger.error(f"Invalid configuration in '{config_path}': {e}", exc_info=True)
        raise InvalidConfigurationError(
            f"Invalid configuration in '{config_path}': {e}"
        ) from e

    logger.info(f"Successfully loaded and validated configuration from {config_path}")
    return config


def _build_config_from_dict(config_data: Dict[str, Any]) -> RiakHttpConfig:
    """
    Build RiakHttpConfig from dictionary loaded from YAML.

    Merges user configuration with defaults. Values coming from environment
    expansion are strings, so numeric and boolean fields are coerced.

    Args:
        config_data: Dictionary loaded from YAML file

    Returns:
        RiakHttpConfig: Configuration object
    """
    defaults = get_default_config()

    node_data = config_data.get('node') or {}
    node = NodeConfig(
        host=str(node_data.get('host', defaults.node.host)),
        port=int(node_data.get('port', defaults.node.port)),
        ssl=_as_bool(node_data.get('ssl', defaults.node.ssl)),
    )

    transport_data = config_data.get('transport') or {}
    timeout = transport_data.get('timeout', defaults.transport.timeout)
    transport = TransportConfig(
        timeout=float(timeout) if timeout not in (None, "") else None,
        pool_connections=int(
            transport_data.get('pool_connections', defaults.transport.pool_connections)
        ),
        pool_maxsize=int(transport_data.get('pool_maxsize', defaults.transport.pool_maxsize)),
        chunk_size=int(transport_data.get('chunk_size', defaults.transport.chunk_size)),
        user_agent=str(transport_data.get('user_agent', defaults.transport.user_agent)),
    )

    logging_data = config_data.get('logging') or {}
    logging = LoggingConfig(
        level=str(logging_data.get('level', defaults.logging.level)),
        file=os.path.expanduser(str(logging_data.get('file', defaults.logging.file))),
        json_format=_as_bool(logging_data.get('json_format', defaults.logging.json_format)),
    )

    return RiakHttpConfig(node=node, transport=transport, logging=logging)


def _validate_config(config: RiakHttpConfig) -> None:
    """
    Validate configuration values.

    Args:
        config: Configuration to validate

    Raises:
        InvalidConfigurationError: If configuration is invalid
    """
    if not config.node.host:
        logger.error("Configuration validation failed: node host cannot be empty")
        raise InvalidConfigurationError("node host cannot be empty")

    if not 0 < config.node.port < 65536:
        raise InvalidConfigurationError(
            f"node port must be between 1 and 65535, got {config.node.port}"
        )

    if config.transport.timeout is not None and config.transport.timeout <= 0:
        raise InvalidConfigurationError(
            f"transport timeout must be positive, got {config.transport.timeout}"
        )

    if config.transport.pool_connections < 1:
        raise InvalidConfigurationError(
            f"pool_connections must be at least 1, got {config.transport.pool_connections}"
        )
    if config.transport.pool_maxsize < 1:
        raise InvalidConfigurationError(
            f"pool_maxsize must be at least 1, got {config.transport.pool_maxsize}"
        )
    if config.transport.chunk_size < 1:
        raise InvalidConfigurationError(
            f"chunk_size must be at least 1, got {config.transport.chunk_size}"
        )

    valid_log_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    if config.logging.level.upper() not in valid_log_levels:
        raise InvalidConfigurationError(
            f"logging level must be one of {valid_log_levels}, "
            f"got '{config.logging.level}'"
        )
