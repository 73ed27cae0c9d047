from typing import Any

from .channel import Channel
from .settings import Settings

KERF_SECTION = "kerf"


class Kernel(Settings):
    """
    The kernel holds what every part of the application shares: the persistent
    settings, the named channels messages are sent over, and the translation
    function.

    Name: The application name, also the settings directory.
    Version: The version number of the application.
    Profile: The name to save our data under (this is often the same as app name).
    """

    def __init__(
        self,
        name: str,
        version: str,
        profile: str,
        ansi: bool = True,
        ignore_settings: bool = False,
    ):
        self.name = name
        self.profile = profile
        self.version = version
        self.ansi = ansi

        Settings.__init__(
            self, self.name, f"{profile}.cfg", ignore_settings=ignore_settings
        )
        self.settings = self

        self.channels = {}
        self.translation = lambda e: e
        self._shutdown = False

    def __repr__(self):
        return f"Kernel({repr(self.name)}, {repr(self.version)}, {repr(self.profile)})"

    def __call__(self):
        self.shutdown()

    def channel(self, channel: str, *args, **kwargs) -> Channel:
        if channel not in self.channels:
            chan = Channel(channel, *args, ansi=self.ansi, **kwargs)
            chan._ = self.translation
            self.channels[channel] = chan
        elif "timestamp" in kwargs and isinstance(kwargs["timestamp"], bool):
            self.channels[channel].timestamp = kwargs["timestamp"]
        return self.channels[channel]

    def setting(self, setting_type, key, default=None) -> Any:
        """
        Registers a kerf setting.

        If the setting is already an attribute, its value remains unchanged.
        If the setting exists in the persistent storage that value is used.
        If there is no settings value, the default will be used.

        @param setting_type: int, float, str, bool, list or tuple value
        @param key: name of the setting
        @param default: default value for the setting to have.
        @return: load_value
        """
        if hasattr(self, key) and getattr(self, key) is not None:
            return getattr(self, key)
        load_value = self.read_persistent(setting_type, KERF_SECTION, key, default)
        if load_value is not None and not isinstance(load_value, setting_type):
            load_value = setting_type(load_value)
        setattr(self, key, load_value)
        return load_value

    def flush(self, *keys):
        """
        Commit the named setting attributes to persistent storage.
        """
        for key in keys:
            value = getattr(self, key, None)
            if value is not None:
                self.write_persistent(KERF_SECTION, key, value)

    def shutdown(self):
        if self._shutdown:
            return
        self._shutdown = True
        channel = self.channel("shutdown")
        if channel:
            channel(f"Shutting down {self.name}.")
        for chan in self.channels.values():
            chan.watchers.clear()
