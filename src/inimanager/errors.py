# -*- encoding: utf-8 -*-
# @File   : errors.py
# @Time   : 2024/10/12 21:05:17
# @Author : Kariko Lin

"""Errors raised when reading or writing INI documents.

Note that malformed INI lines are NOT errors at all,
the parser just skips them.
"""

from errno import EINVAL


class IniError(Exception):
    """Base of all errors raised by `inimanager`."""
    pass


class IniIOError(IniError, OSError):
    """Failed to open, read, decode or write an INI stream.

    If caused by an `OSError`, its `errno`, `strerror` and `filename`
    are copied over, so callers may treat it as the original one.
    """

    @classmethod
    def wrap(cls, e: BaseException, filename: str | None = None) -> 'IniIOError':
        if isinstance(e, OSError) and e.errno is not None:
            return cls(e.errno, e.strerror, filename or e.filename)
        ret = cls(str(e))
        ret.filename = filename
        return ret


class IniUsageError(IniError, ValueError):
    """The API got called in a way it can't serve,
    like `write_file()` without any file ever associated."""

    errno = EINVAL
