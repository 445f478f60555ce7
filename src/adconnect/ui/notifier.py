#!/usr/bin/env python
"""UI notification interface used by the dispatcher.

The core only ever sends two one-way signals: "the network is offline" and
"show/hide the loading indicator". How they are rendered is up to a
``UIPresenter``. ``QueuedNotifier`` runs presenter calls on a single worker
thread in submission order, so show/hide pairs never interleave and the caller
never waits on the UI.
"""

from __future__ import annotations

from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Protocol

from adconnect.utils.config import OFFLINE_ALERT_MESSAGE, OFFLINE_ALERT_OK_BUTTON, OFFLINE_ALERT_TITLE
from adconnect.utils.loguru_setup import logger

__all__ = [
    "LoggingPresenter",
    "NullNotifier",
    "QueuedNotifier",
    "UINotifier",
    "UIPresenter",
]


class UINotifier(Protocol):
    """One-way notifications the core may send. Must not block."""

    def notify_offline(self) -> None: ...

    def notify_indicator(self, show: bool) -> None: ...


class UIPresenter(Protocol):
    """Renders alerts and the loading indicator."""

    def show_alert(self, title: str, message: str, ok_button: str | None) -> None: ...

    def show_indicator(self) -> None: ...

    def hide_indicator(self) -> None: ...


class NullNotifier:
    """Notifier that ignores every signal."""

    def notify_offline(self) -> None:
        pass

    def notify_indicator(self, show: bool) -> None:
        pass


class LoggingPresenter:
    """Presenter for headless use: renders everything as log lines."""

    def show_alert(self, title: str, message: str, ok_button: str | None) -> None:
        logger.warning(f"{title}: {message}")

    def show_indicator(self) -> None:
        logger.debug("Loading indicator shown")

    def hide_indicator(self) -> None:
        logger.debug("Loading indicator hidden")


class QueuedNotifier:
    """Serializes presenter calls through a single-threaded command queue."""

    def __init__(self, presenter: UIPresenter | None = None) -> None:
        self.presenter = presenter if presenter is not None else LoggingPresenter()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="adconnect-ui")

    def __enter__(self) -> QueuedNotifier:
        return self

    def __exit__(self, _exc_type: type | None, _exc_val: BaseException | None, _exc_tb: Any) -> None:
        self.close()

    def submit(self, command: Callable[[], None]) -> Future:
        """Queue ``command`` to run on the UI worker after everything queued before it."""
        future = self._executor.submit(command)
        future.add_done_callback(_log_command_failure)
        return future

    def notify_offline(self) -> None:
        self.submit(lambda: self.presenter.show_alert(OFFLINE_ALERT_TITLE, OFFLINE_ALERT_MESSAGE, OFFLINE_ALERT_OK_BUTTON))

    def notify_indicator(self, show: bool) -> None:
        self.submit(self.presenter.show_indicator if show else self.presenter.hide_indicator)

    def close(self, wait: bool = True) -> None:
        """Stop accepting commands; with ``wait`` run everything already queued first."""
        self._executor.shutdown(wait=wait)


def _log_command_failure(future: Future) -> None:
    if future.cancelled():
        return
    error = future.exception()
    if error is not None:
        logger.warning(f"UI command failed: {error!r}")
