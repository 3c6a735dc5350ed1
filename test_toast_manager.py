"""
Tests for the toast manager: queueing, configuration layering and render-drain
"""

import pytest

from toast_manager import ToastManager
from toast_models import Notification, NotificationLevel, NotificationPosition
from toast_storage import ArrayStorage, SessionStorage


class RecordingRenderer:
    def __init__(self):
        self.calls = []

    def render(self, notifications, config):
        self.calls.append((list(notifications), dict(config)))
        return '|'.join(n.title for n in notifications)


@pytest.fixture
def manager():
    return ToastManager(ArrayStorage())


def test_defaults_to_in_memory_storage():
    assert isinstance(ToastManager().storage, ArrayStorage)


def test_sugar_methods_set_levels_and_chain(manager):
    result = (manager
              .success('Success Title', 'Success body')
              .error('Error Title')
              .warning('Warning Title')
              .info('Info Title'))

    assert result is manager
    levels = [n.level for n in manager.get_notifications()]
    assert levels == [NotificationLevel.SUCCESS, NotificationLevel.ERROR,
                      NotificationLevel.WARNING, NotificationLevel.INFO]
    first = manager.get_notifications()[0]
    assert first.title == 'Success Title'
    assert first.body == 'Success body'
    assert manager.get_notifications()[1].body == ''


def test_add_accepts_level_tag(manager):
    manager.add('warning', 'Tagged')
    assert manager.get_notifications()[0].level is NotificationLevel.WARNING


def test_invalid_level_raises_before_anything_is_stored(manager):
    with pytest.raises(ValueError):
        manager.add('fatal', 'Nope')
    assert manager.count() == 0


def test_count_and_has_notifications(manager):
    assert manager.count() == 0
    assert not manager.has_notifications()

    manager.success('One').info('Two')
    assert manager.count() == 2
    assert manager.has_notifications()

    assert manager.clear() is manager
    assert manager.count() == 0
    assert not manager.has_notifications()


def test_get_notifications_does_not_mutate(manager):
    manager.info('Still here')
    manager.get_notifications()
    manager.get_notifications()
    assert manager.count() == 1


def test_insertion_order_and_length_since_last_clear(manager):
    manager.info('dropped')
    manager.clear()
    titles = [f"toast {i}" for i in range(7)]
    for title in titles:
        manager.info(title)

    assert [n.title for n in manager.get_notifications()] == titles


def test_remove_single_notification(manager):
    manager.info('keep').info('drop')
    drop_id = manager.get_notifications()[1].id

    assert manager.remove(drop_id) is True
    assert manager.remove(drop_id) is False
    assert [n.title for n in manager.get_notifications()] == ['keep']


def test_saved_failed_scenario(manager):
    manager.success('Saved', 'Your changes were saved')
    manager.error('Failed', '')
    assert manager.count() == 2

    html = manager.render()
    assert html
    assert 'Saved' in html
    assert 'Failed' in html
    assert manager.count() == 0


def test_render_drains_and_second_render_is_empty(manager):
    manager.info('Once')
    assert manager.render() != ''
    assert manager.get_notifications() == []
    assert manager.render() == ''


def test_render_on_empty_queue_is_a_noop():
    renderer = RecordingRenderer()
    manager = ToastManager(ArrayStorage(), renderer=renderer)

    assert manager.render() == ''
    assert renderer.calls == []


def test_render_passes_records_and_instance_config():
    renderer = RecordingRenderer()
    manager = ToastManager(ArrayStorage(), {'duration': 1234}, renderer)
    manager.info('A').info('B', options={'duration': 1})

    assert manager.render() == 'A|B'
    records, config = renderer.calls[0]
    assert [n.title for n in records] == ['A', 'B']
    assert config['duration'] == 1234


def test_duration_override_keeps_default_position(manager):
    manager.add(NotificationLevel.WARNING, 'Low disk', '', {'duration': 3000})
    options = manager.get_notifications()[0].options

    assert options['duration'] == 3000
    assert options['position'] == 'top-right'
    assert options['position'] is NotificationPosition.TOP_RIGHT


def test_override_beats_instance_config_beats_defaults():
    manager = ToastManager(ArrayStorage(), {'duration': 2000, 'theme': 'dark'})
    manager.info('Layered', options={'duration': 100})
    options = manager.get_notifications()[0].options

    assert options['duration'] == 100
    assert options['theme'] == 'dark'
    assert options['max_notifications'] == 5


def test_closable_alias_reaches_records():
    manager = ToastManager(ArrayStorage(), {'defaults': {'closable': False}})
    manager.info('No close button')
    assert manager.get_notifications()[0].options['show_close_button'] is False


def test_unknown_instance_position_falls_back():
    manager = ToastManager(ArrayStorage(), {'position': 'northwest'})
    assert manager.config['position'] is NotificationPosition.TOP_RIGHT


def test_override_position_is_validated(manager):
    manager.info('Moved', options={'position': 'bottom-center'})
    manager.info('Lost', options={'position': 'sideways'})
    first, second = manager.get_notifications()

    assert first.options['position'] is NotificationPosition.BOTTOM_CENTER
    assert second.options['position'] is NotificationPosition.TOP_RIGHT


def test_unknown_override_keys_pass_through(manager):
    manager.info('Extra', options={'icon_url': '/static/bell.svg', 'meta': {'a': [1, 2]}})
    options = manager.get_notifications()[0].options

    assert options['icon_url'] == '/static/bell.svg'
    assert options['meta'] == {'a': [1, 2]}


def test_config_property_is_a_copy(manager):
    manager.config['duration'] = 1
    assert manager.config['duration'] == 5000


def test_session_backed_manager_round_trips():
    backing = {}
    manager = ToastManager(SessionStorage(session=backing))
    manager.success('Saved', options={'tags': ['a', 'b']})

    reloaded = ToastManager(SessionStorage(session=backing))
    notification = reloaded.get_notifications()[0]
    assert isinstance(notification, Notification)
    assert notification.title == 'Saved'
    assert notification.options['tags'] == ['a', 'b']

    assert 'Saved' in reloaded.render()
    assert manager.count() == 0
