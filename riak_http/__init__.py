"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Riak HTTP, a product of Garudex Labs

Riak HTTP - request transport adapter for the Riak key/value store REST API.

Translates commands into HTTP requests, executes them over a reusable
connection and captures the raw response for higher layers to decode.
"""

from riak_http._version import __version__
from riak_http.api import ConnectionManager, HttpApi, HttpRequest, HttpResponse
from riak_http.command import (
    Bucket,
    Command,
    CommandKind,
    DataType,
    DeleteObject,
    FetchBucketProperties,
    FetchDataType,
    FetchObject,
    ListBuckets,
    ListKeys,
    Method,
    ResetBucketProperties,
    StoreBucketProperties,
    StoreDataType,
    StoreObject,
)
from riak_http.node import Node

__all__ = [
    "__version__",
    "Bucket",
    "Command",
    "CommandKind",
    "ConnectionManager",
    "DataType",
    "DeleteObject",
    "FetchBucketProperties",
    "FetchDataType",
    "FetchObject",
    "HttpApi",
    "HttpRequest",
    "HttpResponse",
    "ListBuckets",
    "ListKeys",
    "Method",
    "Node",
    "ResetBucketProperties",
    "StoreBucketProperties",
    "StoreDataType",
    "StoreObject",
]
