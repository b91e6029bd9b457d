# -*- encoding: utf-8 -*-
# @File   : abstract.py
# @Time   : 2024/09/08 20:22:30
# @Author : Kariko Lin

from abc import ABCMeta, abstractmethod
from io import TextIOBase
from typing import Generic, TypeVar

T = TypeVar('T')


class FileHandler(Generic[T], metaclass=ABCMeta):
    """Binds a file name to a document type `T`.

    Subclasses do the actual work on *streams*,
    and `read()`/`write()` just open the file and forward it.
    """

    def __init__(self, filename: str, encoding: str | None = None) -> None:
        self._fn = filename
        self._codec = encoding

    @staticmethod
    @abstractmethod
    def readstream(buf: TextIOBase, ins: T | None = None) -> T:
        raise NotImplementedError

    @staticmethod
    @abstractmethod
    def writestream(ins: T, buf: TextIOBase) -> None:
        raise NotImplementedError

    @abstractmethod
    def read(self, ins: T | None = None) -> T:
        raise NotImplementedError

    @abstractmethod
    def write(self, instance: T) -> None:
        raise NotImplementedError

    def __str__(self) -> str:
        return self._fn
