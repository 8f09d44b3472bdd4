"""Periodic self-ping that keeps an idle-sleeping host awake."""

from __future__ import annotations

import logging
import threading

import httpx

from ..config import Settings, settings

logger = logging.getLogger(__name__)


def normalize_base_url(url: str) -> str:
    return url.strip().rstrip("/")


def resolve_target(config: Settings | None = None) -> str | None:
    """Return the URL to ping, or None when no target can be derived."""
    config = config or settings
    if config.wakeup_url and config.wakeup_url.strip():
        return config.wakeup_url.strip()
    if config.backend_url and config.backend_url.strip():
        return f"{normalize_base_url(config.backend_url)}/health"
    return None


def ping(url: str, timeout: float | None = None) -> bool:
    """GET ``url`` once; failures are logged and reported as False."""
    try:
        with httpx.Client(timeout=timeout or settings.request_timeout_seconds) as client:
            response = client.get(url)
        logger.debug("Keep-alive ping %s -> %s", url, response.status_code)
        return True
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        logger.debug("Keep-alive ping %s failed: %s", url, exc)
        return False


class KeepAlivePinger:
    """Background thread that pings ``target`` every ``interval`` seconds."""

    def __init__(self, target: str, interval: float, initial_delay: float = 5.0) -> None:
        self.target = target
        self.interval = interval
        self.initial_delay = initial_delay
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="keepalive-pinger", daemon=True)
        self._thread.start()
        logger.info("Keep-alive enabled. Pinging %s every %.0fs", self.target, self.interval)

    def stop(self, timeout: float | None = 5.0) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    def _run(self) -> None:
        if self._stop.wait(self.initial_delay):
            return
        while True:
            ping(self.target)
            if self._stop.wait(self.interval):
                return


def build_pinger(config: Settings | None = None) -> KeepAlivePinger | None:
    """Create a pinger from settings, or None when the keep-alive is disabled or has no target."""
    config = config or settings
    if not config.wakeup_enabled:
        return None
    target = resolve_target(config)
    if not target:
        logger.warning(
            "Keep-alive is enabled but neither ROUTEDESK_WAKEUP_URL nor ROUTEDESK_BACKEND_URL is set"
        )
        return None
    try:
        httpx.URL(target)
    except httpx.InvalidURL as exc:
        logger.warning("Keep-alive target %r is not a valid URL: %s", target, exc)
        return None
    return KeepAlivePinger(
        target,
        interval=config.wakeup_interval_seconds,
        initial_delay=config.wakeup_initial_delay_seconds,
    )
