"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Riak HTTP, a product of Garudex Labs

Incremental response capture.

The session streams a response into a ``ResponseBuilder`` one raw header line
and one body chunk at a time. Each callback returns the number of bytes it
consumed; anything other than the full input length tells the dispatcher to
abort the transfer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional, Union

from requests.structures import CaseInsensitiveDict

from riak_http.exceptions import MalformedResponseError

# Header mapping key holding the raw status line
STATUS_KEY = "status"


@dataclass(frozen=True)
class HttpResponse:
    """Raw response captured from one request."""
    status_code: int
    status_line: str = ""
    headers: Mapping[str, str] = field(default_factory=CaseInsensitiveDict)
    body: bytes = b""

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


class ResponseBuilder:
    """Accumulates header lines and body chunks into an ``HttpResponse``."""

    def __init__(self) -> None:
        self.status_line = ""
        self.headers: CaseInsensitiveDict = CaseInsensitiveDict()
        self._body = bytearray()
        self._last_header: Optional[str] = None

    def on_header(self, line: Union[str, bytes]) -> int:
        """
        Parse one raw header line.

        Handles the status line, ``Name: value`` pairs, folded continuation
        lines and the blank line ending the header block. A second status
        line (after ``100 Continue``) starts a fresh header mapping. Repeated
        header names are joined with ``", "``.

        Args:
            line: Raw header line, with or without the trailing CRLF

        Returns:
            ``len(line)``

        Raises:
            MalformedResponseError: If the line is neither a status line, a
                continuation nor a ``Name: value`` pair
        """
        length = len(line)
        text = line.decode("iso-8859-1") if isinstance(line, bytes) else line
        text = text.rstrip("\r\n")

        if not text.strip():
            return length

        if text.startswith("HTTP/"):
            self.status_line = text.strip()
            self.headers = CaseInsensitiveDict({STATUS_KEY: self.status_line})
            self._last_header = None
            return length

        if text[0] in " \t":
            if self._last_header is None:
                raise MalformedResponseError(f"Continuation line without a header: {text!r}")
            self.headers[self._last_header] = f"{self.headers[self._last_header]} {text.strip()}"
            return length

        name, sep, value = text.partition(":")
        name = name.strip()
        if not sep or not name:
            raise MalformedResponseError(f"Malformed response header line: {text!r}")

        value = value.strip()
        if name in self.headers:
            self.headers[name] = f"{self.headers[name]}, {value}"
        else:
            self.headers[name] = value
        self._last_header = name
        return length

    def on_body(self, chunk: Union[str, bytes]) -> int:
        """Append a body chunk and return its length."""
        length = len(chunk)
        if isinstance(chunk, str):
            chunk = chunk.encode("utf-8")
        self._body.extend(chunk)
        return length

    @property
    def body(self) -> bytes:
        return bytes(self._body)

    def build(self, status_code: int) -> HttpResponse:
        return HttpResponse(
            status_code=status_code,
            status_line=self.status_line,
            headers=CaseInsensitiveDict(self.headers),
            body=self.body,
        )
