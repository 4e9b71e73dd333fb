# connectivity.py
import socket
import time
from abc import ABC, abstractmethod
from typing import Callable, List

from logging_utils import get_logger

LOGGER = get_logger(__name__)

Listener = Callable[[bool], None]


class ConnectivitySource(ABC):
    """Something that knows whether we are online and announces changes."""

    def __init__(self):
        self._listeners: List[Listener] = []

    @abstractmethod
    def is_online(self) -> bool:
        ...

    def subscribe(self, listener: Listener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, online: bool):
        for listener in list(self._listeners):
            listener(online)


class ManualConnectivitySource(ConnectivitySource):
    def __init__(self, online: bool = True):
        super().__init__()
        self._online = online

    def is_online(self) -> bool:
        return self._online

    def set_online(self, online: bool) -> None:
        if online != self._online:
            self._online = online
            self._notify(online)


class ProbeConnectivitySource(ConnectivitySource):
    """
    Online means a TCP connection to ``host:port`` opens within ``timeout``.
    ``poll`` re-probes at most once per ``min_interval`` seconds and otherwise
    returns the last answer.
    """

    def __init__(self, host: str = "1.1.1.1", port: int = 53, timeout: float = 1.5, min_interval: float = 0.0):
        super().__init__()
        self.host = host
        self.port = port
        self.timeout = timeout
        self.min_interval = min_interval
        self._last = None
        self._checked_at = None

    def probe(self) -> bool:
        self._checked_at = time.monotonic()
        try:
            with socket.create_connection((self.host, self.port), timeout=self.timeout):
                return True
        except OSError:
            return False

    def is_online(self) -> bool:
        if self._last is None:
            self._last = self.probe()
        return self._last

    def poll(self) -> bool:
        if (
            self._last is not None
            and self._checked_at is not None
            and time.monotonic() - self._checked_at < self.min_interval
        ):
            return self._last
        online = self.probe()
        changed = self._last is not None and online != self._last
        self._last = online
        if changed:
            LOGGER.info("Connectivity changed: %s", "online" if online else "offline")
            self._notify(online)
        return online

    @classmethod
    def from_settings(cls, settings) -> "ProbeConnectivitySource":
        return cls(settings.probe_host, settings.probe_port, settings.probe_timeout, settings.probe_interval)


class ConnectivityMonitor:
    """Display-only online/offline flag; nothing else depends on it."""

    def __init__(self, source: ConnectivitySource):
        self.source = source
        self.online = False
        self._started = False

    def start(self) -> "ConnectivityMonitor":
        if not self._started:
            self.online = self.source.is_online()
            self.source.subscribe(self._on_change)
            self._started = True
        return self

    def stop(self) -> None:
        if self._started:
            self.source.unsubscribe(self._on_change)
            self._started = False

    @property
    def status(self) -> str:
        return "online" if self.online else "offline"

    def _on_change(self, online: bool):
        self.online = online

    def __enter__(self):
        return self.start()

    def __exit__(self, *exc):
        self.stop()
        return False
