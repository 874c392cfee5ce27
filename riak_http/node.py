"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Riak HTTP, a product of Garudex Labs

Riak node address.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from riak_http.config.settings import RiakHttpConfig


@dataclass(frozen=True)
class Node:
    """A Riak node reachable over HTTP.

    Args:
        host: Hostname or IP address.
        port: HTTP listener port (8098 by default).
        use_ssl: Use ``https`` instead of ``http``.
    """

    host: str
    port: int = 8098
    use_ssl: bool = False

    @property
    def scheme(self) -> str:
        return "https" if self.use_ssl else "http"

    @classmethod
    def from_config(cls, config: "RiakHttpConfig") -> "Node":
        return cls(
            host=config.node.host,
            port=config.node.port,
            use_ssl=config.node.ssl,
        )
