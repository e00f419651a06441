from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


DEFAULT_TEST_URL = "https://www.cloudflare.com/cdn-cgi/trace"
DEFAULT_ATTEMPT_COUNT = 10
DEFAULT_REQUEST_TIMEOUT = 10.0
DEFAULT_CONNECT_TIMEOUT = 5.0
DEFAULT_PROXY_HOST = "127.0.0.1"


@dataclass(frozen=True)
class ProbeSettings:
    test_url: str = DEFAULT_TEST_URL
    attempt_count: int = DEFAULT_ATTEMPT_COUNT
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    proxy_host: str = DEFAULT_PROXY_HOST

    def proxy_url(self, port: int) -> str:
        # socks5h: hostnames are resolved on the proxy side
        return f"socks5h://{self.proxy_host}:{port}"


@dataclass(frozen=True)
class RouterConfigDocument:
    path: Path
    text: str
    content_type: Optional[str] = None


@dataclass(frozen=True)
class InboundEntry:
    type: str
    tag: str
    port: int
    listen: Optional[str] = None
