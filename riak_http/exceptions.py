"""
Exception hierarchy for Riak HTTP.

All custom exceptions inherit from RiakHttpError base class.
"""


class RiakHttpError(Exception):
    """Base exception for all Riak HTTP errors."""
    pass


# Configuration Errors
class ConfigurationError(RiakHttpError):
    """Base exception for configuration-related errors."""
    pass


class InvalidConfigurationError(ConfigurationError):
    """Raised when configuration is invalid or malformed."""
    pass


# Command Errors
class CommandError(RiakHttpError):
    """Base exception for command-related errors."""
    pass


class InvalidCommandError(CommandError):
    """Raised when a command is constructed with invalid fields."""
    pass


# Transport Errors
class TransportError(RiakHttpError):
    """Base exception for transport-related errors."""
    pass


class TransportInitializationError(TransportError):
    """Raised when the underlying HTTP session cannot be created."""
    pass


class MalformedResponseError(TransportError):
    """Raised when a response header line cannot be parsed."""
    pass
