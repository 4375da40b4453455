"""
Persistent store for default user and repository values.

The store is a small INI file with a single GERRIT_CONFIG section. It
is created empty on first use and rewritten in full on every change.
Concurrent writers from separate processes are not coordinated: the
last one to replace the file wins.
"""

from __future__ import annotations

import configparser
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .errors import ConfigIOError

LOG = logging.getLogger(__name__)

SECTION = "GERRIT_CONFIG"
FIELDS = ("user", "repo")


@dataclass
class Config:
    """Persisted defaults. Either field may be unset."""

    user: Optional[str] = None
    repo: Optional[str] = None


def _check_field(field: str) -> None:
    if field not in FIELDS:
        raise ValueError(f"unknown config field {field!r}; expected one of {FIELDS}")


class ConfigStore:
    """
    Load and persist Config at a fixed path.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def load(self) -> Config:
        """
        Read the store, creating an empty one first if it does not exist.
        """

        self._ensure_exists()
        parser = self._read_parser()
        if not parser.has_section(SECTION):
            return Config()
        return Config(
            user=parser.get(SECTION, "user", fallback=None),
            repo=parser.get(SECTION, "repo", fallback=None),
        )

    @staticmethod
    def get(config: Config, field: str) -> Optional[str]:
        _check_field(field)
        return getattr(config, field)

    def set_and_persist(self, field: str, value: str) -> Config:
        """
        Set one field and write the whole store back.

        Other sections and keys already present in the file are kept.
        The new content is written to a temporary file in the same
        directory and moved into place, so readers see either the old
        or the new file.
        """

        _check_field(field)
        self._ensure_exists()
        parser = self._read_parser()
        if not parser.has_section(SECTION):
            parser.add_section(SECTION)
        parser.set(SECTION, field, value)
        self._write_parser(parser)
        LOG.info("Saved %s=%s to %s", field, value, self.path)
        return self.load()

    def _ensure_exists(self) -> None:
        if self.path.exists():
            return
        LOG.debug("Creating empty config store at %s", self.path)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.touch()
        except OSError as exc:
            raise ConfigIOError(f"cannot create config file {self.path}: {exc}") from exc

    def _read_parser(self) -> configparser.ConfigParser:
        parser = configparser.ConfigParser(interpolation=None)
        try:
            with self.path.open(encoding="utf-8") as handle:
                parser.read_file(handle)
        except OSError as exc:
            raise ConfigIOError(f"cannot read config file {self.path}: {exc}") from exc
        except configparser.Error as exc:
            raise ConfigIOError(f"malformed config file {self.path}: {exc}") from exc
        return parser

    def _write_parser(self, parser: configparser.ConfigParser) -> None:
        tmp_name = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=str(self.path.parent),
                prefix=f".{self.path.name}.",
                delete=False,
            ) as handle:
                tmp_name = handle.name
                parser.write(handle, space_around_delimiters=False)
            os.replace(tmp_name, self.path)
        except OSError as exc:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise ConfigIOError(f"cannot write config file {self.path}: {exc}") from exc
