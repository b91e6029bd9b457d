# -*- encoding: utf-8 -*-
# @File   : manager.py
# @Time   : 2024/10/12 22:41:08
# @Author : Kariko Lin

"""`IniClass` bound with the file it was loaded from (or saved to)."""

from io import TextIOBase
from typing import Self

from ..errors import IniUsageError
from .model import IniClass
from .parser import IniParser


class IniManager(IniClass):
    """An `IniClass` which remembers its file.

    - `load_*()` replace all data, `add_from_*()` overlay onto it.
    - `write_file()` without a path writes back to the remembered one.

    Stream methods never touch the remembered path,
    except `load_stream()`, which forgets it.
    """

    def __init__(self, encoding: str | None = None) -> None:
        super().__init__()
        self.filename: str | None = None
        self.encoding = encoding

    @classmethod
    def from_stream(cls, buf: TextIOBase) -> Self:
        ret = cls()
        ret.add_from_stream(buf)
        return ret

    @classmethod
    def from_file(cls, path: str, encoding: str | None = None) -> Self:
        ret = cls(encoding)
        ret.load_file(path)
        return ret

    def _parser(self, path: str) -> IniParser:
        return IniParser(path, self.encoding)

    def load_stream(self, buf: TextIOBase) -> None:
        self.clear()
        self.filename = None
        IniParser.readstream(buf, self)

    def load_file(self, path: str) -> None:
        self.clear()
        self.filename = path
        self._parser(path).read(self)

    def add_from_stream(self, buf: TextIOBase) -> None:
        IniParser.readstream(buf, self)

    def add_from_file(self, path: str) -> None:
        self._parser(path).read(self)

    def write_stream(self, buf: TextIOBase) -> None:
        IniParser.writestream(self, buf)

    def write_file(self, path: str | None = None) -> None:
        """Save to `path`, or to the remembered file if not given.

        Raises:
            IniUsageError: no `path`, and nothing remembered either.
            IniIOError: failed to write.
        """
        if path is None:
            if not self.filename:
                raise IniUsageError('No file associated to write back.')
            path = self.filename
        self._parser(path).write(self)
        self.filename = path

    # stream "operators", i.e. `ins >> buf` and `ins << buf`.
    read_into = add_from_stream
    write_from = write_stream

    def dumps(self) -> str:
        return IniParser.dumps(self)

    def __str__(self) -> str:
        return self.dumps()
