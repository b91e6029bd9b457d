# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2024/10/10 01:04:45
# @Author : Kariko Lin

"""Reads and writes plain INI text.

The reader is *permissive*: anything it can't understand gets skipped,
rather than raising. In detail, per (trimmed) line:

- blank, or starts with `;`/`#`: a comment.
- `[name]`: opens section `name` (trimmed, may be empty).
  The section is recorded even if no key follows.
- `key = value`: split on the *first* `=`, both sides trimmed.
  Dropped if no section opened yet, or if `key` is empty.
- anything else: dropped.

Only a failing stream (or undecodable file) makes it raise `IniIOError`.
"""

import logging
from io import StringIO, TextIOBase

import chardet

from ..abstract import FileHandler
from ..errors import IniIOError
from .model import IniClass, trim

CONFIDENCE_THRESHOLD = 0.8
FALLBACK_ENCODING = 'gbk'


class IniParser(FileHandler[IniClass]):
    @staticmethod
    def readstream(buf: TextIOBase, ins: IniClass | None = None) -> IniClass:
        """读取解码好的字符串流。

        With `ins` given, pairs are merged into it (overwriting collisions),
        otherwise a new `IniClass` is returned.

        Raises:
            IniIOError: `buf` failed to read (closed, bad bytes, etc.).
        """
        if ins is None:
            ins = IniClass()
        this_sect: str | None = None
        lineno = 0
        while True:
            try:
                i = buf.readline()
            except (OSError, ValueError) as e:
                raise IniIOError.wrap(e) from e
            if not i:
                break
            lineno += 1
            line = trim(i)
            if not line or line[0] in ';#':
                continue
            if line[0] == '[' and line[-1] == ']':
                this_sect = trim(line[1:-1])
                ins.set_section(this_sect)
                continue
            key, sep, val = line.partition('=')
            if not sep:
                logging.debug(f'line {lineno}: not a pair, skipped: {line!r}')
            elif this_sect is None:
                logging.debug(f'line {lineno}: pair outside any section.')
            elif not (key := trim(key)):
                logging.debug(f'line {lineno}: pair without key, skipped.')
            else:
                ins.set_value(this_sect, key, trim(val))
        return ins

    @staticmethod
    def writestream(ins: IniClass, buf: TextIOBase) -> None:
        """Output `ins` in the canonical layout:

            ```ini
            [section]
            key = value

            ```

        i.e. a blank line after *every* section, even an empty one.

        Raises:
            IniIOError: `buf` failed to write or flush.
        """
        try:
            for sect in ins:
                buf.write(f'[{sect}]\n')
                for k, v in ins[sect].items():
                    buf.write(f'{k} = {v}\n')
                buf.write('\n')
            buf.flush()
        except (OSError, ValueError) as e:
            raise IniIOError.wrap(e) from e

    @classmethod
    def dumps(cls, ins: IniClass) -> str:
        with StringIO() as buf:
            cls.writestream(ins, buf)
            return buf.getvalue()

    @staticmethod
    def _decode_file(filename: str) -> StringIO:
        with open(filename, 'rb') as fp:
            raw = fp.read()

        codec = chardet.detect(raw)
        if codec['encoding'] is None \
                or codec['confidence'] < CONFIDENCE_THRESHOLD:
            codec = {'encoding': 'utf-8'}
        logging.warning(
            f'{filename}: decode failed, retry with {codec["encoding"]}.')

        # fallbacks
        try:
            buf = raw.decode(codec['encoding'])
        except (UnicodeDecodeError, LookupError):
            buf = raw.decode(FALLBACK_ENCODING)
        return StringIO(buf)

    def read(self, ins: IniClass | None = None) -> IniClass:
        """读取`IniParser`实例指定的文件。

        With `ins` given, it's only touched once the whole file is read,
        so a failed (or retried) decoding leaves nothing half merged.

        Raises:
            IniIOError: the file can't be opened, or decoded in any way.
        """
        try:
            try:
                # when encoding is None, `open()` would fallback to system default.
                # and when encoding got wrong,
                # just `UnicodeDecodeError` and fallback to `chardet`.
                with open(self._fn, 'r', encoding=self._codec) as fp:
                    ret = self.readstream(fp)
            except IniIOError as e:
                if not isinstance(e.__cause__, UnicodeDecodeError):
                    raise
                ret = self.readstream(self._decode_file(self._fn))
        except IniIOError as e:
            e.filename = e.filename or self._fn
            raise
        except (OSError, UnicodeDecodeError, LookupError) as e:
            raise IniIOError.wrap(e, self._fn) from e
        logging.info(f'Loaded INI file: {self._fn}')
        if ins is None:
            return ret
        ins.merge(ret)
        return ins

    def write(self, instance: IniClass) -> None:
        """保存到*一个* INI 文件。

        The whole text is rendered before opening the file,
        so it won't be truncated by a failing serialization.
        """
        text = self.dumps(instance)
        try:
            with open(self._fn, 'w', encoding=self._codec or 'utf-8') as fp:
                fp.write(text)
        except (OSError, UnicodeEncodeError, LookupError) as e:
            raise IniIOError.wrap(e, self._fn) from e
        logging.info(f'Saved INI file: {self._fn}')

    def __str__(self) -> str:
        return "INI file: " + super().__str__() + f"({self._codec})"
