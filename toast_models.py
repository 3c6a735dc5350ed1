"""
Toast notification models
Level and position enums plus the queued notification record
"""

import threading
import time
import uuid
from enum import Enum
from typing import Any, Dict, Optional

_id_lock = threading.Lock()
_last_stamp = 0


def generate_toast_id() -> str:
    """
    Generate a unique id, also used as the DOM anchor of the toast.

    Ids sort in creation order: Flask serializes the session with sorted
    keys, so the stored mapping comes back ordered by id.
    """
    global _last_stamp
    with _id_lock:
        stamp = max(time.time_ns(), _last_stamp + 1)
        _last_stamp = stamp
    return f"toast-{stamp:016x}-{uuid.uuid4().hex[:12]}"


class NotificationLevel(Enum):
    SUCCESS = 'success'
    ERROR = 'error'
    WARNING = 'warning'
    INFO = 'info'

    @classmethod
    def coerce(cls, value) -> 'NotificationLevel':
        """Accept a member or its string tag; anything else is a ValueError"""
        if isinstance(value, cls):
            return value
        return cls(value)


class NotificationPosition(str, Enum):
    TOP_RIGHT = 'top-right'
    TOP_LEFT = 'top-left'
    TOP_CENTER = 'top-center'
    BOTTOM_RIGHT = 'bottom-right'
    BOTTOM_LEFT = 'bottom-left'
    BOTTOM_CENTER = 'bottom-center'

    def __str__(self):
        return self.value

    @classmethod
    def coerce(cls, value) -> 'NotificationPosition':
        """Return the matching position, falling back to top-right"""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.TOP_RIGHT

    @property
    def is_top(self) -> bool:
        return self.value.startswith('top-')

    @property
    def is_bottom(self) -> bool:
        return self.value.startswith('bottom-')

    @property
    def is_center(self) -> bool:
        return self.value.endswith('-center')

    @property
    def is_left(self) -> bool:
        return self.value.endswith('-left')

    @property
    def is_right(self) -> bool:
        return self.value.endswith('-right')


def _to_primitive(value):
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {str(k): _to_primitive(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_primitive(v) for v in value]
    return value


class Notification:
    """
    One queued toast.

    ``level``, ``title``, ``id`` and ``created_at`` are fixed once the record
    exists. ``body`` and individual ``options`` entries may still be changed
    before the record is handed to a storage backend.
    """

    def __init__(self, level, title: str, body: str = '', options: Optional[Dict[str, Any]] = None,
                 toast_id: Optional[str] = None, created_at: Optional[int] = None):
        self._level = NotificationLevel.coerce(level)
        self._title = title
        self.body = body
        self.options = dict(options or {})
        self._id = toast_id or generate_toast_id()
        self._created_at = int(created_at if created_at is not None else time.time())

    @property
    def id(self) -> str:
        return self._id

    @property
    def level(self) -> NotificationLevel:
        return self._level

    @property
    def title(self) -> str:
        return self._title

    @property
    def created_at(self) -> int:
        return self._created_at

    def get_option(self, key: str, default: Any = None) -> Any:
        return self.options.get(key, default)

    def set_option(self, key: str, value: Any) -> 'Notification':
        self.options[key] = value
        return self

    def has_option(self, key: str) -> bool:
        return key in self.options

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to primitives only, the shape kept in the session"""
        return {
            'id': self._id,
            'level': self._level.value,
            'title': self._title,
            'body': self.body,
            'options': _to_primitive(self.options),
            'created_at': self._created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Notification':
        options = dict(data.get('options') or {})
        if 'position' in options:
            options['position'] = NotificationPosition.coerce(options['position'])
        return cls(
            data['level'],
            data.get('title', ''),
            data.get('body', ''),
            options,
            toast_id=data['id'],
            created_at=data['created_at'],
        )

    def __eq__(self, other):
        if not isinstance(other, Notification):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return f"<Notification {self._id} {self._level.value}: {self._title!r}>"
