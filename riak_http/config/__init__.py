"""
Configuration management for Riak HTTP.

Handles loading and validation of configuration files.
"""

from riak_http.config.settings import (
    LoggingConfig,
    NodeConfig,
    RiakHttpConfig,
    TransportConfig,
    get_default_config,
    get_default_config_path,
    load_config,
)

__all__ = [
    "LoggingConfig",
    "NodeConfig",
    "RiakHttpConfig",
    "TransportConfig",
    "get_default_config",
    "get_default_config_path",
    "load_config",
]
