"""
Toast notification manager
Queues leveled notifications in a storage backend and renders them once
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from toast_config import build_config, merge_options, normalize_options
from toast_models import Notification, NotificationLevel
from toast_renderer import ToastRenderer
from toast_storage import ArrayStorage, BaseStorage

logger = logging.getLogger(__name__)


class ToastManager:
    """
    Public entry point for queueing and rendering toasts.

    ``config`` may be flat or carry a ``defaults`` section; it is resolved
    once, over the built-in defaults. Each queued notification keeps its own
    snapshot of the effective options, so per-call overrides survive until
    render time.
    """

    def __init__(self, storage: Optional[BaseStorage] = None, config: Optional[Mapping[str, Any]] = None,
                 renderer: Optional[ToastRenderer] = None):
        self.storage = storage if storage is not None else ArrayStorage()
        self.renderer = renderer if renderer is not None else ToastRenderer()
        self._config = build_config(config)

    @property
    def config(self) -> Dict[str, Any]:
        return dict(self._config)

    def success(self, title: str, body: str = '', options: Optional[Mapping[str, Any]] = None) -> 'ToastManager':
        return self.add(NotificationLevel.SUCCESS, title, body, options)

    def error(self, title: str, body: str = '', options: Optional[Mapping[str, Any]] = None) -> 'ToastManager':
        return self.add(NotificationLevel.ERROR, title, body, options)

    def warning(self, title: str, body: str = '', options: Optional[Mapping[str, Any]] = None) -> 'ToastManager':
        return self.add(NotificationLevel.WARNING, title, body, options)

    def info(self, title: str, body: str = '', options: Optional[Mapping[str, Any]] = None) -> 'ToastManager':
        return self.add(NotificationLevel.INFO, title, body, options)

    def add(self, level, title: str, body: str = '', options: Optional[Mapping[str, Any]] = None) -> 'ToastManager':
        """Queue one notification; ``level`` outside the four levels raises ValueError"""
        level = NotificationLevel.coerce(level)
        effective = merge_options(self._config, normalize_options(options))
        notification = Notification(level, title, body, effective)
        self.storage.add(notification)
        logger.debug(f"Queued {level.value} toast {notification.id}")
        return self

    def get_notifications(self) -> List[Notification]:
        return self.storage.get()

    def clear(self) -> 'ToastManager':
        self.storage.clear()
        logger.debug("Cleared toast queue")
        return self

    def remove(self, toast_id: str) -> bool:
        return self.storage.remove(toast_id)

    def has_notifications(self) -> bool:
        return len(self.get_notifications()) > 0

    def count(self) -> int:
        return len(self.get_notifications())

    def render(self) -> str:
        """Render every queued toast and empty the queue; '' when nothing is queued"""
        notifications = self.get_notifications()
        if not notifications:
            return ''

        html = self.renderer.render(notifications, self._config)
        self.clear()
        logger.debug(f"Rendered {len(notifications)} toast(s)")
        return html
