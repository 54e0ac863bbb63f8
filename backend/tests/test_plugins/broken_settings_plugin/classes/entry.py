from pluginhost.models.plugin import Plugin


class BrokenSettingsPlugin(Plugin):
    pass
