import collections.abc
import configparser
import json
import logging
import os
import pathlib

from unitschema.core import iotools


# read version from installed package
from importlib.metadata import version
__version__ = version("unitschema")


logger = logging.getLogger(__name__)


class Environment(collections.abc.Mapping):
    """A collection of environmental settings."""

    def __init__(self, name: str) -> None:
        self.name = name
        """The name of the configuration section to select."""
        home = pathlib.Path('~').expanduser()
        paths = [
            pathlib.Path.cwd(), # The current working directory
            home, # The user's home directory
            home / '.config', # Linux standard (local)
            '/etc/unitschema', # Linux standard (global)
            os.environ.get('UNITSCHEMA_INI'), # A known environment variable
            pathlib.Path(__file__).parent, # The package top
        ]
        config = configparser.ConfigParser()
        path = iotools.search(paths, 'unitschema.ini')
        logger.debug("Reading %r settings from %s", self.name, path)
        config.read(iotools.ReadOnlyPath(path))
        if not config.has_section(self.name):
            raise KeyError(
                f"{path} has no section named {self.name!r}"
            ) from None
        self._config = config[self.name]
        self.path = path

    def __len__(self) -> int:
        """The number of available parameter values."""
        return len(self._config)

    def __iter__(self):
        """Iterate over available parameter values."""
        yield from self._config

    def __getitem__(self, key: str):
        """Access parameter values by mapping key."""
        if key in self._config:
            return self._config[key]
        raise KeyError(
            f"{__package__}.{self.name} has no value for {key!r}"
        ) from None

    def getboolean(self, key: str, fallback: bool=False) -> bool:
        """Interpret the named value as a boolean."""
        return self._config.getboolean(key, fallback=fallback)

    def __str__(self) -> str:
        return json.dumps(
            dict(self._config),
            indent=4,
            sort_keys=True,
        )

    def __repr__(self) -> str:
        return f"{__package__}.{self.name}({self.path}):\n{self}"
