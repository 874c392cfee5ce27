"""
Unit tests for configuration management.

Tests configuration loading, environment expansion and validation.
"""

import pytest
import yaml

from riak_http.config.settings import (
    LoggingConfig,
    NodeConfig,
    RiakHttpConfig,
    TransportConfig,
    _validate_config,
    get_default_config,
    get_default_config_path,
    load_config,
)
from riak_http.exceptions import InvalidConfigurationError
from riak_http.node import Node


class TestConfigurationDataclasses:
    """Test configuration dataclass structures."""

    def test_node_config_defaults(self):
        """Test NodeConfig has correct defaults."""
        config = NodeConfig()
        assert config.host == "127.0.0.1"
        assert config.port == 8098
        assert config.ssl is False

    def test_transport_config_defaults(self):
        """Test TransportConfig has correct defaults."""
        config = TransportConfig()
        assert config.timeout == 30.0
        assert config.pool_connections == 10
        assert config.pool_maxsize == 10
        assert config.chunk_size == 8192

    def test_logging_config_defaults(self):
        """Test LoggingConfig has correct defaults."""
        config = LoggingConfig()
        assert config.level == "INFO"
        assert config.json_format is True


class TestLoadConfig:
    """Test loading configuration files."""

    def test_missing_file_returns_defaults(self, temp_dir):
        """Test a missing file yields the default configuration."""
        config = load_config(str(temp_dir / "missing.yaml"))
        assert config == get_default_config()

    def test_empty_file_returns_defaults(self, temp_dir):
        """Test an empty file yields the default configuration."""
        path = temp_dir / "config.yaml"
        path.write_text("")
        assert load_config(str(path)) == get_default_config()

    def test_load_values(self, temp_dir):
        """Test values from every section are loaded."""
        path = temp_dir / "config.yaml"
        path.write_text(yaml.safe_dump({
            "node": {"host": "riak.example.com", "port": 8443, "ssl": True},
            "transport": {"timeout": 5, "chunk_size": 1024, "user_agent": "app/2"},
            "logging": {"level": "DEBUG", "json_format": False},
        }))

        config = load_config(str(path))

        assert config.node == NodeConfig(host="riak.example.com", port=8443, ssl=True)
        assert config.transport.timeout == 5.0
        assert config.transport.chunk_size == 1024
        assert config.transport.user_agent == "app/2"
        assert config.transport.pool_maxsize == 10
        assert config.logging.level == "DEBUG"
        assert config.logging.json_format is False

    def test_null_timeout_disables_timeout(self, temp_dir):
        """Test a null timeout is kept as None."""
        path = temp_dir / "config.yaml"
        path.write_text("transport:\n  timeout: null\n")
        assert load_config(str(path)).transport.timeout is None

    def test_env_var_expansion(self, temp_dir, monkeypatch):
        """Test ${VAR} and ${VAR:default} expansion with type coercion."""
        monkeypatch.setenv("RIAK_HOST", "10.1.2.3")
        monkeypatch.delenv("RIAK_PORT", raising=False)
        monkeypatch.setenv("RIAK_SSL", "true")
        path = temp_dir / "config.yaml"
        path.write_text(
            "node:\n"
            "  host: ${RIAK_HOST}\n"
            "  port: ${RIAK_PORT:18098}\n"
            "  ssl: ${RIAK_SSL}\n"
        )

        config = load_config(str(path))

        assert config.node.host == "10.1.2.3"
        assert config.node.port == 18098
        assert config.node.ssl is True

    def test_default_path_from_env(self, temp_dir, monkeypatch):
        """Test RIAK_HTTP_CONFIG selects the configuration file."""
        path = temp_dir / "custom.yaml"
        path.write_text("node:\n  port: 9000\n")
        monkeypatch.setenv("RIAK_HTTP_CONFIG", str(path))

        assert get_default_config_path() == str(path)
        assert load_config().node.port == 9000

    def test_malformed_yaml(self, temp_dir):
        """Test unparseable YAML raises InvalidConfigurationError."""
        path = temp_dir / "config.yaml"
        path.write_text("node: [unclosed\n")
        with pytest.raises(InvalidConfigurationError):
            load_config(str(path))

    def test_non_mapping_document(self, temp_dir):
        """Test a top-level list is rejected."""
        path = temp_dir / "config.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(InvalidConfigurationError):
            load_config(str(path))

    def test_non_numeric_port(self, temp_dir):
        """Test type errors surface as InvalidConfigurationError."""
        path = temp_dir / "config.yaml"
        path.write_text("node:\n  port: eighty\n")
        with pytest.raises(InvalidConfigurationError):
            load_config(str(path))


class TestValidateConfig:
    """Test configuration validation."""

    def test_defaults_are_valid(self):
        """Test the default configuration passes validation."""
        _validate_config(get_default_config())

    @pytest.mark.parametrize(
        "config",
        [
            RiakHttpConfig(node=NodeConfig(host="")),
            RiakHttpConfig(node=NodeConfig(port=0)),
            RiakHttpConfig(node=NodeConfig(port=70000)),
            RiakHttpConfig(transport=TransportConfig(timeout=0)),
            RiakHttpConfig(transport=TransportConfig(pool_connections=0)),
            RiakHttpConfig(transport=TransportConfig(pool_maxsize=0)),
            RiakHttpConfig(transport=TransportConfig(chunk_size=0)),
            RiakHttpConfig(logging=LoggingConfig(level="VERBOSE")),
        ],
    )
    def test_invalid_values(self, config):
        """Test out-of-range values are rejected."""
        with pytest.raises(InvalidConfigurationError):
            _validate_config(config)


class TestNodeFromConfig:
    """Test building a Node from configuration."""

    def test_node_from_config(self):
        """Test node settings map onto Node."""
        config = RiakHttpConfig(node=NodeConfig(host="riak.example.com", port=8443, ssl=True))
        node = Node.from_config(config)
        assert node == Node(host="riak.example.com", port=8443, use_ssl=True)
        assert node.scheme == "https"
