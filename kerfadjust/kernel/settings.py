import ast
import os
import platform
from configparser import ConfigParser, MissingSectionHeaderError, NoSectionError
from pathlib import Path
from typing import Any, Generator, Optional, Union


def get_safe_path(
    name: str, create: Optional[bool] = False, system: Optional[str] = None
) -> str:
    """
    Get a path which should have valid user permissions in an OS dependent method.

    @param name: directory name within the safe OS dependent userdirectory
    @param create: Should this directory be created if needed.
    @param system: Override the system value determination
    @return:
    """
    if not system:
        system = platform.system()

    if system == "Darwin":
        directory = os.path.join(
            os.path.expanduser("~"), "Library", "Application Support", name
        )
    elif system == "Windows":
        directory = os.path.join(os.path.expandvars("%LOCALAPPDATA%"), name)
    else:
        directory = os.path.join(os.path.expanduser("~"), ".config", name)
    if create:
        os.makedirs(directory, exist_ok=True)
    return directory


class Settings:
    """
    Settings are a thin interface over configparser. Conceptually it's a dictionary of
    dictionaries: the first key is the section, the second the attribute. Values are
    kept as strings and typed on the way out by `read_persistent`.

    Values are loaded during `read_configuration` and committed to disk when
    `write_configuration` is called. With `ignore_settings` nothing is read and the
    settings directory is not created until something is written.
    """

    def __init__(self, directory, filename, ignore_settings=False):
        self._directory = directory
        self._config_file = Path(get_safe_path(directory)).joinpath(filename)
        self._config_dict = {}
        if not ignore_settings:
            self.read_configuration()

    def read_configuration(self, targetfile=None):
        """
        Read the config file into the settings dictionary. Missing or unreadable
        files leave the settings as they are.
        """
        if targetfile is None:
            targetfile = self._config_file
        try:
            parser = ConfigParser()
            parser.read(targetfile, encoding="utf-8")
            for section in parser.sections():
                config_section = self._config_dict.setdefault(section, dict())
                for option in parser.options(section):
                    config_section[option] = parser.get(section, option)
        except (
            PermissionError,
            NoSectionError,
            MissingSectionHeaderError,
            FileNotFoundError,
        ):
            return

    def write_configuration(self, targetfile=None):
        """
        Write the settings dictionary to disk.
        """
        if targetfile is None:
            get_safe_path(self._directory, create=True)
            targetfile = self._config_file
        try:
            parser = ConfigParser()
            for section_key, section in self._config_dict.items():
                parser.add_section(section_key)
                for key, value in section.items():
                    parser.set(section_key, key, value.replace("%", "%%"))
            with open(targetfile, "w", encoding="utf-8") as fp:
                parser.write(fp)
        except (PermissionError, FileNotFoundError):
            return

    def read_persistent(
        self,
        t: type,
        section: str,
        key: str,
        default: Union[str, int, float, bool, list, tuple] = None,
    ) -> Any:
        """
        Directly read from persistent storage the value of an item.

        @param t: datatype.
        @param section: storing section
        @param key: reference item
        @param default: default value if item does not exist.
        @return: value
        """
        try:
            value = self._config_dict[section][key]
            if t == bool:
                return value == "True"
            elif t in (list, tuple):
                try:
                    return t(ast.literal_eval(value))
                except (ValueError, SyntaxError):
                    return default
            return t(value)
        except (KeyError, ValueError):
            return default

    def write_persistent(
        self, section: str, key: str, value: Union[str, int, float, bool, list, tuple]
    ):
        """
        Directly write the value to persistent storage.

        @param section: section to write key value
        @param key: The item key being written
        @param value: the value of the item.
        """
        config_section = self._config_dict.setdefault(section, dict())
        if isinstance(value, (str, int, float, bool, list, tuple)):
            config_section[str(key)] = str(value)

    def delete_persistent(self, section: str, key: str):
        try:
            del self._config_dict[section][key]
        except KeyError:
            pass

    def clear_persistent(self, section: str):
        self._config_dict.pop(section, None)

    def keylist(self, section: str) -> Generator[str, None, None]:
        """
        Get all keys located in the given section.
        """
        try:
            yield from self._config_dict[section]
        except KeyError:
            return
