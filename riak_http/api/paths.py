"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Riak HTTP, a product of Garudex Labs

REST path resolution for Riak commands.
"""

from __future__ import annotations

from typing import Callable, Dict

from riak_http.command import Command, CommandKind
from riak_http.logging_config import get_logger

logger = get_logger(__name__)


def bucket_type_segment(command: Command) -> str:
    """``/types/{type}`` when the command's bucket has a type, else empty."""
    bucket = command.bucket
    if bucket is not None and bucket.type:
        return f"/types/{bucket.type}"
    return ""


def bucket_segment(command: Command) -> str:
    return f"{bucket_type_segment(command)}/buckets/{command.bucket.name}"


def _list_buckets(command: Command) -> str:
    return f"{bucket_type_segment(command)}/buckets"


def _bucket_properties(command: Command) -> str:
    return f"{bucket_segment(command)}/props"


def _list_keys(command: Command) -> str:
    return f"{bucket_segment(command)}/keys"


def _object(command: Command) -> str:
    return f"{bucket_segment(command)}/keys/{command.key}"


def _data_type(command: Command) -> str:
    data_type = command.data_type
    return f"{bucket_segment(command)}/{data_type.kind}s/{data_type}"


PATH_BUILDERS: Dict[CommandKind, Callable[[Command], str]] = {
    CommandKind.LIST_BUCKETS: _list_buckets,
    CommandKind.FETCH_BUCKET_PROPERTIES: _bucket_properties,
    CommandKind.STORE_BUCKET_PROPERTIES: _bucket_properties,
    CommandKind.RESET_BUCKET_PROPERTIES: _bucket_properties,
    CommandKind.LIST_KEYS: _list_keys,
    CommandKind.FETCH_OBJECT: _object,
    CommandKind.STORE_OBJECT: _object,
    CommandKind.DELETE_OBJECT: _object,
    CommandKind.FETCH_DATA_TYPE: _data_type,
    CommandKind.STORE_DATA_TYPE: _data_type,
}


def resolve_path(command: Command) -> str:
    """
    Map a command to its REST path.

    Commands whose kind has no registered builder resolve to an empty path
    instead of raising.

    Args:
        command: Command to resolve

    Returns:
        Path string starting with ``/``, or ``""`` for unrecognized commands
    """
    builder = PATH_BUILDERS.get(command.kind)
    if builder is None:
        logger.warning(
            "unrecognized_command",
            command=type(command).__name__,
            kind=getattr(command.kind, "value", command.kind),
        )
        return ""
    return builder(command)
