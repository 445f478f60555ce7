"""UI notification interfaces consumed by the dispatcher."""

from adconnect.ui.notifier import LoggingPresenter, NullNotifier, QueuedNotifier, UINotifier, UIPresenter

__all__ = ["LoggingPresenter", "NullNotifier", "QueuedNotifier", "UINotifier", "UIPresenter"]
