"""
Toast storage backends
Keeps queued notifications between the request that adds them and the
response that renders them
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, MutableMapping, Optional

from flask import has_request_context, session as flask_session

from toast_models import Notification

logger = logging.getLogger(__name__)

DEFAULT_SESSION_KEY = '_toast_notifications'


class BaseStorage(ABC):
    """Interface every toast storage backend implements"""

    @abstractmethod
    def add(self, notification: Notification) -> None:
        """Store a notification, replacing any stored one with the same id"""

    @abstractmethod
    def get(self) -> List[Notification]:
        """Return all stored notifications in insertion order"""

    @abstractmethod
    def clear(self) -> None:
        """Remove every stored notification"""

    @abstractmethod
    def has(self, toast_id: str) -> bool:
        """True if a notification with this id is stored"""

    @abstractmethod
    def remove(self, toast_id: str) -> bool:
        """Remove one notification; False if the id is unknown"""

    def count(self) -> int:
        return len(self.get())

    def is_empty(self) -> bool:
        return self.count() == 0


class ArrayStorage(BaseStorage):
    """In-memory storage living as long as its owner (usually one request)"""

    def __init__(self):
        self._notifications: Dict[str, Notification] = {}

    def add(self, notification: Notification) -> None:
        self._notifications[notification.id] = notification

    def get(self) -> List[Notification]:
        return list(self._notifications.values())

    def clear(self) -> None:
        self._notifications = {}

    def has(self, toast_id: str) -> bool:
        return toast_id in self._notifications

    def remove(self, toast_id: str) -> bool:
        if toast_id in self._notifications:
            del self._notifications[toast_id]
            return True
        return False

    def count(self) -> int:
        return len(self._notifications)


class SessionStorage(BaseStorage):
    """
    Storage kept in the user's session under one key.

    The key holds a mapping of id -> serialized notification. Inside a Flask
    request the Flask session is used; a mapping passed as ``session`` takes
    precedence. Outside a request, with nothing injected, a private dict is
    started on first use so callers never have to set one up.

    Concurrent requests from the same session are not coordinated: whichever
    response saves the session last wins.
    """

    def __init__(self, session: Optional[MutableMapping] = None, key: str = DEFAULT_SESSION_KEY):
        self.key = key
        self._session = session
        self._local_session = None

    def _get_session(self) -> MutableMapping:
        if self._session is not None:
            return self._session
        if has_request_context():
            return flask_session
        if self._local_session is None:
            logger.debug("No request context, starting a local toast session")
            self._local_session = {}
        return self._local_session

    def _load(self) -> Dict[str, dict]:
        stored = self._get_session().get(self.key)
        return dict(stored) if stored else {}

    def _save(self, payloads: Dict[str, dict]) -> None:
        session = self._get_session()
        session[self.key] = payloads
        # Nested dicts are not change-tracked by Flask
        if hasattr(session, 'modified'):
            session.modified = True

    def add(self, notification: Notification) -> None:
        payloads = self._load()
        payloads[notification.id] = notification.to_dict()
        self._save(payloads)

    def get(self) -> List[Notification]:
        return [Notification.from_dict(data) for data in self._load().values()]

    def clear(self) -> None:
        session = self._get_session()
        session.pop(self.key, None)
        if hasattr(session, 'modified'):
            session.modified = True

    def has(self, toast_id: str) -> bool:
        return toast_id in self._load()

    def remove(self, toast_id: str) -> bool:
        payloads = self._load()
        if toast_id not in payloads:
            return False
        del payloads[toast_id]
        self._save(payloads)
        return True

    def count(self) -> int:
        return len(self._load())
