"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Riak HTTP, a product of Garudex Labs

HTTP transport adapter for the Riak REST API (default).

Usage::

    api = HttpApi()
    status = api.prepare(FetchObject(bucket=Bucket("users"), key="u1"), node).send()
    body = api.response_body
"""

from __future__ import annotations

import time
from typing import Any, Callable, Dict, Iterator, Optional, Tuple, Union

import requests

from riak_http.api.base import Api
from riak_http.api.connection import ConnectionManager
from riak_http.api.paths import resolve_path
from riak_http.api.request import (
    BODY_METHODS,
    HttpRequest,
    build_url,
    encode_query,
    normalize_parameters,
    resolve_method,
)
from riak_http.api.response import HttpResponse, ResponseBuilder
from riak_http.command import Command, Method
from riak_http.exceptions import TransportError
from riak_http.logging_config import get_logger, log_http_request
from riak_http.node import Node

logger = get_logger(__name__)

_HTTP_VERSIONS = {10: "1.0", 11: "1.1", 20: "2"}


class HttpApi(Api):
    """
    Sends commands to a Riak node over HTTP using ``requests``.

    Args:
        connection_manager: Manager owning the HTTP session. Defaults to the
            process-wide ``ConnectionManager.shared()``.
    """

    def __init__(self, connection_manager: Optional[ConnectionManager] = None) -> None:
        super().__init__()
        self._connection_manager = connection_manager
        self._reset_request_state()

    def _reset_request_state(self) -> None:
        self.path = ""
        self.query = ""
        self.http_request: Optional[HttpRequest] = None
        self.response: Optional[HttpResponse] = None
        self.last_error: Optional[Exception] = None
        self.aborted = False
        self._method = Method.GET.value
        self._fetch_body = True
        self._data: Optional[Union[Dict[str, str], str, bytes]] = None
        self._headers: Dict[str, str] = {}
        self._url = ""
        self._send_options: Dict[str, Any] = {}
        self._prepared: Optional[requests.PreparedRequest] = None

    # ---- connection ----

    @property
    def connection_manager(self) -> ConnectionManager:
        if self._connection_manager is not None:
            return self._connection_manager
        return ConnectionManager.shared()

    def get_connection(self) -> requests.Session:
        return self.connection_manager.get_connection()

    def open_connection(self) -> requests.Session:
        return self.connection_manager.open_connection()

    def reset_connection(self) -> None:
        self.connection_manager.reset_connection()

    def close_connection(self) -> None:
        self.connection_manager.close_connection()

    # ---- preparation ----

    def prepare(self, command: Command, node: Node) -> "HttpApi":
        """
        Prepare request to be sent.

        Args:
            command: Command to translate
            node: Node the request is sent to

        Returns:
            self, for chaining into ``send()``
        """
        super().prepare(command, node)
        self._reset_request_state()

        self.set_path()
        self._prepare_connection()
        self.prepare_request()

        # Snapshot of the outgoing request for debugging
        self.request = self._describe_request()

        return self

    def set_path(self) -> "HttpApi":
        self.path = resolve_path(self.command)
        return self

    def _prepare_connection(self) -> "HttpApi":
        """Options shared by every request: stream the response, no redirects."""
        self._send_options = {
            "stream": True,
            "allow_redirects": False,
            "timeout": self.connection_manager.timeout,
        }
        self._headers = dict(self.command.headers)
        return self

    def prepare_request(self) -> "HttpApi":
        """Configure method, parameters and URL, then freeze the descriptor."""
        self._prepare_request_method() \
            ._prepare_request_parameters() \
            ._prepare_request_url()

        self.http_request = HttpRequest(
            method=self._method,
            url=self._url,
            path=self.path,
            query=self.query,
            data=self._data,
            headers=dict(self._headers),
            fetch_body=self._fetch_body,
        )
        return self

    def _prepare_request_method(self) -> "HttpApi":
        # Unknown methods fall back to GET, overriding any earlier request
        self._method, self._fetch_body = resolve_method(self.command.method)
        return self

    def _prepare_request_parameters(self) -> "HttpApi":
        command = self.command
        if command.has_parameters():
            # POST and PUT send parameters as form data, everything else in the URI
            if command.method in BODY_METHODS:
                self._data = normalize_parameters(command.parameters)
            else:
                self.query = encode_query(command.parameters)

        if self._data is None and command.body is not None and self._method in BODY_METHODS:
            self._data = command.body

        return self

    def _prepare_request_url(self) -> "HttpApi":
        self._url = build_url(self.node, self.path, self.query)
        return self

    def _describe_request(self) -> str:
        """Render the request line and headers as they will be sent."""
        request = self.http_request
        self._prepared = self.get_connection().prepare_request(
            requests.Request(
                method=request.method,
                url=request.url,
                headers=request.headers,
                data=request.data,
            )
        )

        lines = [
            f"{self._prepared.method} {self._prepared.path_url} HTTP/1.1",
            f"Host: {self.node.host}:{self.node.port}",
        ]
        lines.extend(f"{name}: {value}" for name, value in self._prepared.headers.items())
        return "\r\n".join(lines) + "\r\n\r\n"

    # ---- dispatch ----

    def send(self) -> int:
        """
        Send the request.

        Transport failures (refused connection, timeout, TLS errors) are not
        raised: they are logged, kept on ``last_error`` and reported as
        status 0 with whatever headers and body arrived.

        Returns:
            HTTP status code

        Raises:
            TransportError: If called before ``prepare``
            MalformedResponseError: If a response header line cannot be parsed
        """
        if self._prepared is None:
            raise TransportError("send() called before prepare()")

        # set the response header and body callback functions
        on_header = self.response_header_callback
        on_body = self.response_body_callback

        # each send captures into a fresh builder
        self._response_builder = ResponseBuilder()
        self.http_code = None

        request = self.http_request
        self.last_error = None
        self.aborted = False
        status_code = 0
        start = time.monotonic()

        try:
            response = self.get_connection().send(self._prepared, **self._send_options)
        except requests.exceptions.RequestException as e:
            logger.error(f"Request failed: {request.method} {request.url}: {e}", exc_info=True)
            self.last_error = e
        else:
            try:
                self._stream_response(response, on_header, on_body)
            except requests.exceptions.RequestException as e:
                logger.error(
                    f"Response interrupted: {request.method} {request.url}: {e}",
                    exc_info=True,
                )
                self.last_error = e
            finally:
                response.close()
            status_code = response.status_code

        self.http_code = status_code
        self.response = self._response_builder.build(status_code)

        log_http_request(
            logger,
            method=request.method,
            url=request.url,
            status_code=status_code,
            duration_ms=round((time.monotonic() - start) * 1000, 2),
        )

        return self.http_code

    def execute(self, command: Command, node: Node) -> HttpResponse:
        """Prepare and send ``command``, returning the captured response."""
        self.prepare(command, node).send()
        return self.response

    def _stream_response(
        self,
        response: requests.Response,
        on_header: Callable[[str], int],
        on_body: Callable[[bytes], int],
    ) -> None:
        for line in self._header_lines(response):
            if on_header(line) != len(line):
                self._abort("header")
                return

        if not self.http_request.fetch_body:
            return

        for chunk in response.iter_content(chunk_size=self.connection_manager.chunk_size):
            if chunk and on_body(chunk) != len(chunk):
                self._abort("body")
                return

    def _header_lines(self, response: requests.Response) -> Iterator[str]:
        """
        Re-serialize the received status line and headers as raw lines.

        ``requests`` has already parsed the header block, so the lines are
        rebuilt from urllib3's header store, which keeps one entry per
        received line. Repeated headers therefore reach the header callback
        one line each; folded lines arrive already unfolded.
        """
        version = _HTTP_VERSIONS.get(getattr(response.raw, "version", 11), "1.1")
        status = f"HTTP/{version} {response.status_code} {response.reason or ''}".rstrip()
        yield status + "\r\n"
        for name, value in self._raw_header_items(response):
            yield f"{name}: {value}\r\n"
        yield "\r\n"

    @staticmethod
    def _raw_header_items(response: requests.Response) -> Iterator[Tuple[str, str]]:
        raw_headers = getattr(response.raw, "headers", None)
        iteritems = getattr(raw_headers, "iteritems", None)
        if callable(iteritems):
            return iter(iteritems())
        return iter(response.headers.items())

    def _abort(self, stage: str) -> None:
        self.aborted = True
        logger.warning(
            "response_aborted",
            stage=stage,
            method=self.http_request.method,
            url=self.http_request.url,
        )

    # ---- capture callbacks ----

    def response_header_callback(self, header: Union[str, bytes]) -> int:
        """
        Response header callback.

        Parses one raw header line into ``response_headers``. Must stay public
        so the transport can call it.

        Returns:
            Number of bytes consumed; anything else aborts the transfer
        """
        return self._response_builder.on_header(header)

    def response_body_callback(self, body: Union[str, bytes]) -> int:
        """
        Response body callback.

        Appends one chunk to ``response_body``. Must stay public so the
        transport can call it.

        Returns:
            Number of bytes consumed; anything else aborts the transfer
        """
        return self._response_builder.on_body(body)
