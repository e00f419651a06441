from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as DeadlineExceeded
from dataclasses import dataclass, field
from typing import Callable, Tuple

import requests
from requests.adapters import HTTPAdapter

from features.latency_probe.application.ports import ProbeRunner, ProgressReporter
from features.latency_probe.domain.errors import SessionSetupError
from features.latency_probe.domain.models import AttemptOutcome, Failed, ProbeSession, Timed
from features.latency_probe.domain.probing import ProbeSettings

from .progress import SilentProgressReporter


ERROR_SNIPPET_LENGTH = 20


@dataclass
class RequestsSocksProbeRunner(ProbeRunner):
    """Measures HEAD round trips through a local SOCKS5 proxy, stopping at the first failure."""

    settings: ProbeSettings = field(default_factory=ProbeSettings)
    reporter: ProgressReporter = field(default_factory=SilentProgressReporter)
    session_factory: Callable[[], requests.Session] = requests.Session
    clock: Callable[[], float] = time.perf_counter

    def run_session(self, port: int, attempt_count: int, *, index: int = 0) -> ProbeSession:
        client = self._build_client(port)
        session = ProbeSession(port=port)
        try:
            client = self._warmup(client, port, index)
            for attempt in range(1, attempt_count + 1):
                outcome = self._attempt(client, attempt)
                session.record(outcome)
                self.reporter.attempt(index, outcome)
                if isinstance(outcome, Failed):
                    break
        finally:
            client.close()
        return session

    def _build_client(self, port: int) -> requests.Session:
        if not 0 <= port <= 65535:
            raise SessionSetupError(f"Failed to create proxy: invalid port {port}")
        proxy_url = self.settings.proxy_url(port)
        adapter = HTTPAdapter(max_retries=0)
        try:
            # builds the SOCKS pool manager now so a bad endpoint fails here, not per attempt
            adapter.proxy_manager_for(proxy_url)
        except (requests.exceptions.InvalidSchema, ValueError) as exc:
            raise SessionSetupError(f"Failed to create proxy: {exc}") from exc

        try:
            client = self.session_factory()
        except Exception as exc:  # pylint: disable=broad-except
            raise SessionSetupError(f"Failed to create client: {exc}") from exc
        client.trust_env = False
        client.proxies = {"http": proxy_url, "https": proxy_url}
        client.mount("http://", adapter)
        client.mount("https://", adapter)
        return client

    def _warmup(self, client: requests.Session, port: int, index: int) -> requests.Session:
        self.reporter.warmup(index)
        try:
            self._send(client)
        except DeadlineExceeded:
            # the timed-out client was closed; measure on a fresh one
            return self._build_client(port)
        except Exception:  # pylint: disable=broad-except
            # warmup outcome never counts
            pass
        return client

    def _attempt(self, client: requests.Session, attempt: int) -> AttemptOutcome:
        try:
            status_code, elapsed_ms = self._send(client)
        except requests.exceptions.ConnectionError as exc:
            return Failed(attempt, f"Connect Error: {exc}", kind="connect")
        except requests.exceptions.Timeout as exc:
            return Failed(attempt, f"Request Timeout: {exc}", kind="timeout")
        except DeadlineExceeded:
            return Failed(attempt, "Timeout", kind="deadline")
        except Exception as exc:  # pylint: disable=broad-except
            return Failed(attempt, f"Error ({str(exc)[:ERROR_SNIPPET_LENGTH]})", kind="error")

        if not 200 <= status_code < 300:
            return Failed(attempt, f"HTTP Error {status_code}", kind="http-status")
        return Timed(attempt, elapsed_ms)

    def _send(self, client: requests.Session) -> Tuple[int, float]:
        executor = ThreadPoolExecutor(max_workers=1)
        future = executor.submit(self._head, client)
        try:
            return future.result(timeout=self.settings.request_timeout)
        except DeadlineExceeded:
            # drop pooled sockets so the pending request unwinds before anything else is sent
            client.close()
            raise
        finally:
            executor.shutdown(wait=True)

    def _head(self, client: requests.Session) -> Tuple[int, float]:
        start = self.clock()
        response = client.head(
            self.settings.test_url,
            timeout=(self.settings.connect_timeout, self.settings.request_timeout),
            allow_redirects=True,
        )
        elapsed_ms = (self.clock() - start) * 1000.0
        response.close()
        return response.status_code, elapsed_ms
