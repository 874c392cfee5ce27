"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Riak HTTP, a product of Garudex Labs

Transport adapters.
"""

from riak_http.api.base import Api
from riak_http.api.connection import ConnectionManager
from riak_http.api.http import HttpApi
from riak_http.api.paths import resolve_path
from riak_http.api.request import HttpRequest, build_url, encode_query
from riak_http.api.response import HttpResponse, ResponseBuilder

__all__ = [
    "Api",
    "ConnectionManager",
    "HttpApi",
    "HttpRequest",
    "HttpResponse",
    "ResponseBuilder",
    "build_url",
    "encode_query",
    "resolve_path",
]
