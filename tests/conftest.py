"""
Pytest configuration and shared fixtures for Riak HTTP tests.
"""

import tempfile
from pathlib import Path
from typing import Dict, Generator, List, Optional, Sequence, Tuple, Union
from unittest.mock import MagicMock

import pytest
from requests.structures import CaseInsensitiveDict
from urllib3._collections import HTTPHeaderDict

from riak_http.api.connection import ConnectionManager
from riak_http.node import Node


def _make_response(
    status_code: int = 200,
    reason: str = "OK",
    headers: Optional[Union[Dict[str, str], Sequence[Tuple[str, str]]]] = None,
    chunks: Optional[List[bytes]] = None,
) -> MagicMock:
    """
    Build a stand-in for a streamed ``requests.Response``.

    Args:
        status_code: Status code reported by the response.
        reason: Reason phrase of the status line.
        headers: Response headers; a sequence of pairs may repeat names.
        chunks: Body chunks yielded by every ``iter_content`` call.

    Returns:
        Mock response object.
    """
    response = MagicMock()
    response.status_code = status_code
    response.reason = reason
    response.raw.version = 11
    pairs = headers.items() if isinstance(headers, dict) else (headers or [])
    raw_headers = HTTPHeaderDict()
    for name, value in pairs:
        raw_headers.add(name, value)
    response.raw.headers = raw_headers
    response.headers = CaseInsensitiveDict(raw_headers)
    response.iter_content.side_effect = lambda chunk_size: iter(list(chunks or []))
    return response


@pytest.fixture
def make_response():
    """Factory fixture building mock streamed responses."""
    return _make_response


@pytest.fixture(autouse=True)
def isolated_shared_manager() -> Generator[None, None, None]:
    """Give every test a fresh process-wide connection manager."""
    ConnectionManager.set_shared(None)
    yield
    ConnectionManager.set_shared(None)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """
    Create a temporary directory for test files.
    
    Yields:
        Path to temporary directory that is cleaned up after test.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def node() -> Node:
    """Plain HTTP node on the default Riak port."""
    return Node(host="127.0.0.1", port=8098)


@pytest.fixture
def ssl_node() -> Node:
    """TLS-enabled node."""
    return Node(host="riak.example.com", port=8098, use_ssl=True)


@pytest.fixture
def manager() -> Generator[ConnectionManager, None, None]:
    """Connection manager isolated from the shared one."""
    manager = ConnectionManager(timeout=5.0, chunk_size=4)
    yield manager
    manager.close_connection()
