"""
Tests for the markup produced by the toast renderer
"""

from datetime import datetime

from toast_config import build_config
from toast_models import Notification, NotificationLevel
from toast_renderer import LEVEL_ICONS, ToastRenderer, format_time


def render(notifications, **config):
    return str(ToastRenderer().render(notifications, build_config(config)))


def make(level, title, body='', **options):
    return Notification(level, title, body, build_config(options))


def test_container_reflects_position_and_direction():
    html = render([make(NotificationLevel.INFO, 'Hi')], position='bottom-left', rtl=True)
    assert 'id="toast-container"' in html
    assert 'toast-position-bottom-left' in html
    assert 'direction: rtl;' in html


def test_each_notification_has_id_level_and_icon():
    note = make(NotificationLevel.ERROR, 'Broken')
    html = render([note])

    assert f'id="{note.id}"' in html
    assert 'data-level="error"' in html
    assert 'toast-notification toast-error' in html
    assert LEVEL_ICONS[NotificationLevel.ERROR] in html


def test_title_and_body_are_escaped():
    html = render([make(NotificationLevel.INFO, '<b>bold</b>', '<script>alert(1)</script>')])
    assert '&lt;b&gt;bold&lt;/b&gt;' in html
    assert '<script>alert(1)</script>' not in html


def test_body_block_only_when_present():
    assert 'toast-message' not in render([make(NotificationLevel.INFO, 'Title only')]).split('<style')[0]
    assert 'toast-message' in render([make(NotificationLevel.INFO, 'Title', 'Body')]).split('<style')[0]


def test_close_button_and_time_follow_record_options():
    hidden = make(NotificationLevel.INFO, 'Quiet', show_close_button=False, show_time=False)
    markup = render([hidden]).split('<style')[0]
    assert '<button' not in markup
    assert 'toast-time' not in markup

    shown = make(NotificationLevel.INFO, 'Loud')
    markup = render([shown]).split('<style')[0]
    assert '<button class="toast-close' in markup
    assert 'toast-time' in markup


def test_per_record_duration_and_sticky_toasts():
    timed = make(NotificationLevel.INFO, 'Timed', duration=3000)
    sticky = make(NotificationLevel.INFO, 'Sticky', auto_dismiss=False)
    html = render([timed, sticky])

    assert 'data-duration="3000"' in html
    assert 'data-duration="0"' in html


def test_styles_use_layout_config():
    html = render([make(NotificationLevel.INFO, 'x')], min_width=200, max_width=600,
                  border_radius=8, background_blur=12, background_opacity=0.5, theme='dark')
    assert 'min-width: 200px' in html
    assert 'max-width: 600px' in html
    assert 'border-radius: 8px' in html
    assert 'blur(12px)' in html
    assert 'rgba(30, 30, 30, 0.5)' in html
    assert 'prefers-color-scheme' not in html


def test_auto_theme_adds_dark_media_query():
    assert 'prefers-color-scheme: dark' in render([make(NotificationLevel.INFO, 'x')])


def test_script_carries_behaviour_settings():
    html = render([make(NotificationLevel.INFO, 'x')], sound=False, max_notifications=3, animation_duration=150)
    assert '<script id="toast-script">' in html
    assert '"sound": false' in html
    assert '"maxNotifications": 3' in html
    assert '"animationDuration": 150' in html


def test_format_time():
    stamp = int(datetime(2024, 5, 1, 15, 7).timestamp())
    assert format_time(stamp, '24') == '15:07'
    assert format_time(stamp, '12') == '3:07 PM'

    midnight = int(datetime(2024, 5, 1, 0, 5).timestamp())
    assert format_time(midnight, '12') == '12:05 AM'
