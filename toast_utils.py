"""
Toast notification utilities for Flask applications
Wires the toast manager into an app: storage driver selection, template
helpers and flash message conversion
"""

import os
import logging

from flask import current_app, g, get_flashed_messages
from markupsafe import Markup

from toast_config import config_from_env, merge_options
from toast_manager import ToastManager
from toast_models import NotificationLevel
from toast_storage import DEFAULT_SESSION_KEY, ArrayStorage, SessionStorage

logger = logging.getLogger(__name__)

STORAGE_DRIVERS = ('session', 'array')

FLASH_CATEGORY_LEVELS = {
    'success': NotificationLevel.SUCCESS,
    'error': NotificationLevel.ERROR,
    'danger': NotificationLevel.ERROR,
    'warning': NotificationLevel.WARNING,
    'info': NotificationLevel.INFO,
    'message': NotificationLevel.INFO,
}


class Toasts:
    """Flask extension owning the app's toast manager"""

    def __init__(self, app=None):
        self.app = app
        self.driver = None
        self.config = None
        self.session_key = DEFAULT_SESSION_KEY
        self.import_flashes = False
        self._session_manager = None

        if app:
            self.init_app(app)

    def init_app(self, app):
        """Read TOAST_* settings from app.config (falling back to the environment)"""
        self.app = app

        driver = app.config.get('TOAST_STORAGE') or os.getenv('TOAST_STORAGE', 'session')
        if driver not in STORAGE_DRIVERS:
            raise ValueError(f"Unknown toast storage driver: {driver!r}")
        self.driver = driver
        self.session_key = app.config.get('TOAST_SESSION_KEY', DEFAULT_SESSION_KEY)
        self.import_flashes = bool(app.config.get('TOAST_IMPORT_FLASHES', False))

        env_config = config_from_env()
        self.config = {
            'defaults': merge_options(env_config['defaults'], app.config.get('TOAST_DEFAULTS')),
        }

        if driver == 'session':
            self._session_manager = ToastManager(SessionStorage(key=self.session_key), self.config)

        app.extensions['toasts'] = self
        app.context_processor(toast_context_processor)
        logger.info(f"Toasts initialised with {driver} storage")

    @property
    def manager(self) -> ToastManager:
        """
        Manager for the current request.

        Session storage keeps its state in the user's session, so one manager
        serves the whole app. Array storage is per request and lives on g.
        """
        if self._session_manager is not None:
            return self._session_manager
        if 'toast_manager' not in g:
            g.toast_manager = ToastManager(ArrayStorage(), self.config)
        return g.toast_manager


def get_toast_manager() -> ToastManager:
    """Toast manager of the current app"""
    extension = current_app.extensions.get('toasts')
    if extension is None:
        raise RuntimeError("Toasts extension is not registered on this app")
    return extension.manager


# Convenience functions
def toast_success(title, body='', options=None):
    """Queue a success toast on the current app's manager"""
    return get_toast_manager().success(title, body, options)


def toast_error(title, body='', options=None):
    """Queue an error toast on the current app's manager"""
    return get_toast_manager().error(title, body, options)


def toast_warning(title, body='', options=None):
    """Queue a warning toast on the current app's manager"""
    return get_toast_manager().warning(title, body, options)


def toast_info(title, body='', options=None):
    """Queue an info toast on the current app's manager"""
    return get_toast_manager().info(title, body, options)


def toasts_from_flashes(manager=None):
    """Move pending flash() messages into the toast queue; returns how many moved"""
    manager = manager or get_toast_manager()
    messages = get_flashed_messages(with_categories=True)
    for category, message in messages:
        level = FLASH_CATEGORY_LEVELS.get(category, NotificationLevel.INFO)
        manager.add(level, str(message))
    return len(messages)


def render_toasts():
    """Render and drain the queue; safe to drop into a template as-is"""
    extension = current_app.extensions['toasts']
    if extension.import_flashes:
        toasts_from_flashes(extension.manager)
    return Markup(extension.manager.render())


def toast_context_processor():
    """Context processor to make toast utilities available in templates"""
    return {
        'render_toasts': render_toasts,
        'toast_manager': get_toast_manager(),
    }
