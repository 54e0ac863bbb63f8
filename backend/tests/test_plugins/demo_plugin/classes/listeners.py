"""Listener recording every plugins-loaded event it sees."""

from pluginhost.events import SingletonEventListener


class DemoLoadedListener(SingletonEventListener):
    def __init__(self):
        self.received = []

    @property
    def event_type(self):
        return 'pluginLoadedEvt'

    def action(self, event):
        self.received.append(list(event.data))
