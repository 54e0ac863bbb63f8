"""Tests for the synchronous event manager."""

import pytest

from pluginhost.core.exceptions import EventException
from pluginhost.events import Event, EventListener, EventManager, SingletonEventListener
from tests.listeners import FailingListener, RecordingListener


class OrderListener(EventListener):
    def __init__(self, label, log, event_type='ordered'):
        self.label = label
        self.log = log
        self._event_type = event_type

    @property
    def event_type(self):
        return self._event_type

    def action(self, event):
        self.log.append(self.label)


class SecondOrderListener(OrderListener):
    pass


class CountingSingleton(SingletonEventListener):
    def __init__(self):
        self.count = 0

    @property
    def event_type(self):
        return 'counted'

    def action(self, event):
        self.count += 1


class OtherSingleton(CountingSingleton):
    pass


class TestEventManager:
    def test_delivers_in_registration_order(self):
        log = []
        manager = EventManager()
        manager.register_listener(OrderListener('first', log))
        manager.register_listener(SecondOrderListener('second', log))

        manager.fire_event_synchronously(Event('ordered', None))

        assert log == ['first', 'second']

    def test_only_matching_type(self):
        manager = EventManager()
        recorder = RecordingListener('a')
        manager.register_listener(recorder)

        manager.fire_event_synchronously(Event('b', 1))
        manager.fire_event_synchronously(Event('a', 2))

        assert [e.data for e in recorder.events] == [2]

    def test_no_listeners(self):
        EventManager().fire_event_synchronously(Event('nobody', None))

    def test_same_class_replaces_previous_instance(self):
        log = []
        manager = EventManager()
        manager.register_listener(OrderListener('old', log))
        manager.register_listener(OrderListener('new', log))

        manager.fire_event_synchronously(Event('ordered', None))

        assert log == ['new']

    def test_same_class_moves_between_types(self):
        log = []
        manager = EventManager()
        manager.register_listener(OrderListener('old', log, event_type='one'))
        manager.register_listener(OrderListener('new', log, event_type='two'))

        assert manager.listeners('one') == []
        assert len(manager.listeners('two')) == 1

    def test_failure_raises_event_exception(self):
        manager = EventManager()
        after = RecordingListener()
        manager.register_listener(FailingListener())
        manager.register_listener(after)

        with pytest.raises(EventException) as exc_info:
            manager.fire_event_synchronously(Event(after.event_type, []))

        assert exc_info.value.event_type == after.event_type
        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert after.events == []

    def test_event_exception_propagates_unchanged(self):
        original = EventException('custom', 'boom')

        class Raiser(RecordingListener):
            def action(self, event):
                raise original

        manager = EventManager()
        manager.register_listener(Raiser('custom'))

        with pytest.raises(EventException) as exc_info:
            manager.fire_event_synchronously(Event('custom', None))
        assert exc_info.value is original

    def test_empty_event_type_rejected(self):
        with pytest.raises(ValueError):
            EventManager().register_listener(RecordingListener(''))

    def test_unregister(self):
        manager = EventManager()
        recorder = RecordingListener('a')
        manager.register_listener(recorder)

        manager.unregister_listener(recorder)

        assert manager.listeners('a') == []


class TestSingletonEventListener:
    def test_one_instance_per_class(self):
        assert CountingSingleton.get_instance() is CountingSingleton.get_instance()
        assert OtherSingleton.get_instance() is not CountingSingleton.get_instance()
        assert type(OtherSingleton.get_instance()) is OtherSingleton

    def test_state_survives_lookups(self):
        manager = EventManager()
        manager.register_listener(CountingSingleton.get_instance())

        manager.fire_event_synchronously(Event('counted', None))
        manager.fire_event_synchronously(Event('counted', None))

        assert CountingSingleton.get_instance().count >= 2
