"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Riak HTTP, a product of Garudex Labs

Connection lifecycle for the HTTP transport.

A ``ConnectionManager`` owns one lazily created ``requests.Session``. Adapters
share the process-wide manager returned by ``ConnectionManager.shared()``
unless they are given their own, so by default every request in the process
reuses the same pooled session.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, ClassVar, Optional

import requests
from requests.adapters import HTTPAdapter
from requests.utils import default_headers

from riak_http.exceptions import TransportInitializationError
from riak_http.logging_config import get_logger

if TYPE_CHECKING:
    from riak_http.config.settings import RiakHttpConfig

logger = get_logger(__name__)


class ConnectionManager:
    """
    Owner of a single reusable HTTP session.

    Lifecycle operations are serialized by an internal lock. The session
    itself is not locked while a request is in flight; callers sharing one
    manager across threads must not interleave ``prepare``/``send`` on the
    same adapter.

    Args:
        timeout: Per-request timeout in seconds (None waits forever)
        pool_connections: Number of connection pools to cache
        pool_maxsize: Maximum connections kept per pool
        chunk_size: Body chunk size handed to the body callback
        user_agent: ``User-Agent`` header sent with every request
    """

    _shared: ClassVar[Optional["ConnectionManager"]] = None
    _shared_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(
        self,
        timeout: Optional[float] = 30.0,
        pool_connections: int = 10,
        pool_maxsize: int = 10,
        chunk_size: int = 8192,
        user_agent: str = "riak-http",
    ) -> None:
        self.timeout = timeout
        self.pool_connections = pool_connections
        self.pool_maxsize = pool_maxsize
        self.chunk_size = chunk_size
        self.user_agent = user_agent
        self._session: Optional[requests.Session] = None
        self._lock = threading.RLock()

    @classmethod
    def from_config(cls, config: "RiakHttpConfig") -> "ConnectionManager":
        transport = config.transport
        return cls(
            timeout=transport.timeout,
            pool_connections=transport.pool_connections,
            pool_maxsize=transport.pool_maxsize,
            chunk_size=transport.chunk_size,
            user_agent=transport.user_agent,
        )

    @classmethod
    def shared(cls) -> "ConnectionManager":
        """Process-wide manager, created with defaults on first use."""
        with cls._shared_lock:
            if cls._shared is None:
                cls._shared = cls()
            return cls._shared

    @classmethod
    def set_shared(cls, manager: Optional["ConnectionManager"]) -> None:
        """
        Replace the process-wide manager.

        The previous manager's session is closed. Passing None makes the next
        ``shared()`` call build a fresh default manager.
        """
        with cls._shared_lock:
            previous, cls._shared = cls._shared, manager
        if previous is not None and previous is not manager:
            previous.close_connection()

    @property
    def is_connected(self) -> bool:
        return self._session is not None

    def get_connection(self) -> requests.Session:
        """Return the session, opening one if none exists."""
        with self._lock:
            if self._session is None:
                self.open_connection()
            return self._session

    def open_connection(self) -> requests.Session:
        """
        Create a fresh session, replacing any existing reference.

        The replaced session is not closed; use ``close_connection`` first
        when the old one should release its sockets.

        Raises:
            TransportInitializationError: If the session cannot be created
        """
        with self._lock:
            try:
                session = requests.Session()

                # Retries belong to the caller, never to the transport
                adapter = HTTPAdapter(
                    max_retries=0,
                    pool_connections=self.pool_connections,
                    pool_maxsize=self.pool_maxsize,
                )
                session.mount("http://", adapter)
                session.mount("https://", adapter)
                self._apply_defaults(session)
            except Exception as e:
                logger.error(f"Failed to initialize HTTP session: {e}", exc_info=True)
                raise TransportInitializationError(
                    f"Failed to initialize HTTP session: {e}"
                ) from e

            self._session = session
            logger.debug("Opened HTTP session")
            return session

    def reset_connection(self) -> None:
        """
        Discard options configured on the session but keep it open.

        Every session attribute except the mounted adapters is restored to
        the value a new ``requests.Session`` starts with, so TLS, proxy,
        redirect and cookie settings never leak into the next request.
        """
        with self._lock:
            session = self.get_connection()
            pristine = requests.Session()
            try:
                for attr in requests.Session.__attrs__:
                    if attr != "adapters":
                        setattr(session, attr, getattr(pristine, attr))
            finally:
                pristine.close()
            self._apply_defaults(session)
            logger.debug("Reset HTTP session")

    def close_connection(self) -> None:
        """Close the session; the next ``get_connection`` opens a new one."""
        with self._lock:
            if self._session is not None:
                self._session.close()
                self._session = None
                logger.debug("Closed HTTP session")

    def _apply_defaults(self, session: requests.Session) -> None:
        session.headers = default_headers()
        session.headers["User-Agent"] = self.user_agent
