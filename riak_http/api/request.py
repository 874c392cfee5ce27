"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Riak HTTP, a product of Garudex Labs

Outbound request descriptor and the pure helpers used to build it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple, Union
from urllib.parse import quote, urlencode

from riak_http.command import Method
from riak_http.node import Node

BODY_METHODS = (Method.POST.value, Method.PUT.value)


@dataclass(frozen=True)
class HttpRequest:
    """Fully prepared request, ready to hand to the session."""
    method: str
    url: str
    path: str = ""
    query: str = ""
    data: Optional[Union[Dict[str, str], str, bytes]] = None
    headers: Dict[str, str] = field(default_factory=dict)
    fetch_body: bool = True


def resolve_method(method: Optional[str]) -> Tuple[str, bool]:
    """
    Map a command method onto the verb to send.

    Returns:
        ``(verb, fetch_body)``; unknown or missing methods fall back to GET,
        HEAD disables body retrieval.
    """
    if method == Method.POST.value:
        return Method.POST.value, True
    if method == Method.PUT.value:
        return Method.PUT.value, True
    if method == Method.DELETE.value:
        return Method.DELETE.value, True
    if method == Method.HEAD.value:
        return Method.HEAD.value, False
    return Method.GET.value, True


def _parameter_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def normalize_parameters(parameters: Mapping[str, Any]) -> Dict[str, str]:
    return {str(key): _parameter_value(value) for key, value in parameters.items()}


def encode_query(parameters: Mapping[str, Any]) -> str:
    """RFC 3986 query encoding: spaces become ``%20``, never ``+``."""
    return urlencode(normalize_parameters(parameters), quote_via=quote)


def build_url(node: Node, path: str, query: str = "") -> str:
    """
    Compose ``scheme://host:port/path?query``.

    The ``?`` separator is always present, even for an empty query.
    """
    return f"{node.scheme}://{node.host}:{node.port}/{path.lstrip('/')}?{query}"
