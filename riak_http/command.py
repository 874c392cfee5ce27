"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Riak HTTP, a product of Garudex Labs

Command model consumed by the HTTP transport adapter.

Each command variant is tagged with a ``CommandKind`` so that the adapter can
map it to a REST path without inspecting class names. Commands only carry
identifying fields, the HTTP method and request parameters; encoding values
and decoding responses is left to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, Optional, Union

from riak_http.exceptions import InvalidCommandError


class Method(str, Enum):
    """HTTP methods understood by the adapter."""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    HEAD = "HEAD"


class CommandKind(str, Enum):
    """Closed set of command variants with a known REST path."""
    LIST_BUCKETS = "list_buckets"
    FETCH_BUCKET_PROPERTIES = "fetch_bucket_properties"
    STORE_BUCKET_PROPERTIES = "store_bucket_properties"
    RESET_BUCKET_PROPERTIES = "reset_bucket_properties"
    LIST_KEYS = "list_keys"
    FETCH_OBJECT = "fetch_object"
    STORE_OBJECT = "store_object"
    DELETE_OBJECT = "delete_object"
    FETCH_DATA_TYPE = "fetch_data_type"
    STORE_DATA_TYPE = "store_data_type"


@dataclass(frozen=True)
class Bucket:
    """A named bucket, optionally inside a bucket type."""
    name: str
    type: Optional[str] = None


@dataclass(frozen=True)
class DataType:
    """A CRDT stored under ``key``; ``kind`` is counter, set, map, ..."""
    kind: str
    key: str

    def __str__(self) -> str:
        return self.key


@dataclass
class Command:
    """Base command.

    A bare ``Command`` (or any subclass without a ``kind``) is accepted by the
    adapter but resolves to an empty path.

    Args:
        bucket: Target bucket; its ``type`` adds a ``/types/{type}`` prefix.
        method: HTTP method; defaults to the variant's method.
        parameters: Request parameters, sent as query string or form body.
        headers: Extra request headers (``Content-Type``, ``X-Riak-Vclock``...).
        body: Raw request payload used when no body parameters are sent.
    """

    kind: ClassVar[Optional[CommandKind]] = None
    default_method: ClassVar[Optional[Method]] = None
    default_parameters: ClassVar[Dict[str, str]] = {}
    requires_bucket: ClassVar[bool] = False

    bucket: Optional[Bucket] = None
    method: Optional[str] = None
    parameters: Dict[str, Any] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[Union[str, bytes]] = None

    def __post_init__(self) -> None:
        if self.method is None and self.default_method is not None:
            self.method = self.default_method.value
        elif isinstance(self.method, Method):
            self.method = self.method.value
        elif isinstance(self.method, str):
            self.method = self.method.upper()

        self.parameters = {**self.default_parameters, **self.parameters}
        self._validate()

    def _validate(self) -> None:
        if self.requires_bucket and (self.bucket is None or not self.bucket.name):
            raise InvalidCommandError(f"{type(self).__name__} requires a bucket name")

    def has_parameters(self) -> bool:
        return bool(self.parameters)


# Bucket commands

class ListBuckets(Command):
    kind = CommandKind.LIST_BUCKETS
    default_method = Method.GET
    default_parameters = {"buckets": "true"}


class FetchBucketProperties(Command):
    kind = CommandKind.FETCH_BUCKET_PROPERTIES
    default_method = Method.GET
    requires_bucket = True


class StoreBucketProperties(Command):
    kind = CommandKind.STORE_BUCKET_PROPERTIES
    default_method = Method.PUT
    requires_bucket = True


class ResetBucketProperties(Command):
    kind = CommandKind.RESET_BUCKET_PROPERTIES
    default_method = Method.DELETE
    requires_bucket = True


class ListKeys(Command):
    kind = CommandKind.LIST_KEYS
    default_method = Method.GET
    default_parameters = {"keys": "true"}
    requires_bucket = True


# Object commands

@dataclass
class ObjectCommand(Command):
    """Command addressing a single object by key."""

    requires_bucket: ClassVar[bool] = True

    key: str = ""

    def _validate(self) -> None:
        super()._validate()
        if not self.key:
            raise InvalidCommandError(f"{type(self).__name__} requires an object key")


class FetchObject(ObjectCommand):
    kind = CommandKind.FETCH_OBJECT
    default_method = Method.GET


class StoreObject(ObjectCommand):
    kind = CommandKind.STORE_OBJECT
    default_method = Method.PUT


class DeleteObject(ObjectCommand):
    kind = CommandKind.DELETE_OBJECT
    default_method = Method.DELETE


# Data type commands

@dataclass
class DataTypeCommand(Command):
    """Command addressing a CRDT."""

    requires_bucket: ClassVar[bool] = True

    data_type: Optional[DataType] = None

    def _validate(self) -> None:
        super()._validate()
        if self.data_type is None:
            raise InvalidCommandError(f"{type(self).__name__} requires a data type")


class FetchDataType(DataTypeCommand):
    kind = CommandKind.FETCH_DATA_TYPE
    default_method = Method.GET


class StoreDataType(DataTypeCommand):
    kind = CommandKind.STORE_DATA_TYPE
    default_method = Method.POST
