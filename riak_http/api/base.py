"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Riak HTTP, a product of Garudex Labs

Transport adapter base class.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from requests.structures import CaseInsensitiveDict

from riak_http.api.response import ResponseBuilder
from riak_http.command import Command
from riak_http.node import Node


class Api(ABC):
    """
    Abstract base for all transport adapters.

    Holds the command and node of the current request and the response state
    filled in while it is sent. One adapter instance serves one request at a
    time; ``prepare`` clears whatever a previous request left behind.
    """

    def __init__(self) -> None:
        self._command: Optional[Command] = None
        self._node: Optional[Node] = None
        self._response_builder = ResponseBuilder()
        self.request = ""
        self.http_code: Optional[int] = None

    @property
    def command(self) -> Optional[Command]:
        return self._command

    @property
    def node(self) -> Optional[Node]:
        return self._node

    @property
    def response_headers(self) -> CaseInsensitiveDict:
        """Headers captured so far; the status line is under ``"status"``."""
        return self._response_builder.headers

    @property
    def response_body(self) -> bytes:
        return self._response_builder.body

    def prepare(self, command: Command, node: Node) -> "Api":
        """Bind the adapter to a command and the node it is sent to."""
        self._command = command
        self._node = node
        self._response_builder = ResponseBuilder()
        self.request = ""
        self.http_code = None
        return self

    @abstractmethod
    def send(self) -> int:
        """Send the prepared request and return the HTTP status code."""
        ...

    @abstractmethod
    def close_connection(self) -> None:
        """Release transport resources."""
        ...
