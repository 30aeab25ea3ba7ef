"""Per-test timeouts: a policy with named overrides and a registry of configs."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5.0
DEFAULT_OVERRIDES: Mapping[str, float] = {
    "TestLongRunning": 10.0,
    "TestFast": 1.0,
}


def _format_seconds(seconds: float) -> str:
    return f"{seconds:g}s"


def _run_with_timeout(func: Callable[[], object], seconds: float) -> bool:
    """Run ``func`` on a daemon thread; return whether it finished in time.

    An exception raised by ``func`` before the deadline is re-raised here.
    """
    outcome: dict[str, BaseException] = {}

    def target() -> None:
        try:
            func()
        except BaseException as exc:  # handed back to the caller
            outcome["error"] = exc

    worker = threading.Thread(target=target, daemon=True)
    worker.start()
    worker.join(seconds)
    if worker.is_alive():
        return False
    if "error" in outcome:
        raise outcome["error"]
    return True


class TimeoutPolicy:
    """A default timeout with fixed overrides for particular names."""

    def __init__(
        self,
        default: float = DEFAULT_TIMEOUT,
        overrides: Mapping[str, float] | None = None,
    ) -> None:
        self._default = default
        self._overrides = dict(DEFAULT_OVERRIDES if overrides is None else overrides)
        self._lock = threading.Lock()

    def set_default(self, seconds: float) -> None:
        """Change the timeout used for names without an override."""
        if seconds <= 0:
            raise ValueError(f"timeout must be positive, got {seconds}")
        with self._lock:
            self._default = seconds

    def get(self, name: str) -> float:
        """Return the timeout, in seconds, for ``name``."""
        with self._lock:
            return self._overrides.get(name, self._default)

    def apply(self, name: str, func: Callable[[], object]) -> bool:
        """Run ``func`` under the timeout for ``name``.

        Returns True if it finished in time and False if the timeout expired.
        """
        seconds = self.get(name)
        finished = _run_with_timeout(func, seconds)
        if not finished:
            logger.warning("Test %s timed out after %s", name, _format_seconds(seconds))
        return finished


@dataclass(frozen=True)
class TimeoutConfig:
    """A named timeout, in seconds."""

    name: str
    timeout: float


class TimeoutNotRegisteredError(LookupError):
    """Raised when no timeout is registered under a name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"timeout not registered for {name!r}")
        self.name = name


class TimeoutManager:
    """A registry of named timeout configurations."""

    def __init__(self) -> None:
        self._configs: dict[str, TimeoutConfig] = {}
        self._lock = threading.Lock()

    def register(self, config: TimeoutConfig) -> None:
        """Register ``config``, replacing any config of the same name."""
        with self._lock:
            self._configs[config.name] = config

    def get(self, name: str) -> TimeoutConfig:
        """Return the config registered under ``name``."""
        with self._lock:
            try:
                return self._configs[name]
            except KeyError:
                raise TimeoutNotRegisteredError(name) from None

    def execute(self, name: str, func: Callable[[], object]) -> bool:
        """Run ``func`` under the registered timeout; return whether it finished."""
        config = self.get(name)
        finished = _run_with_timeout(func, config.timeout)
        if not finished:
            logger.warning(
                "Test %r timed out after %s", name, _format_seconds(config.timeout)
            )
        return finished