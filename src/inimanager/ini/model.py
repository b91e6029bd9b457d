# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2024/10/10 00:57:10
# @Author : Kariko Lin

"""
Basically INI Structure: a dict of sections, each a dict of `str: str`.

Values are always stored as strings.
Typed interpretation only happens when reading (see `coerce()`).

Note that `IniClass` keeps *insertion order*, for both sections and keys.
Overwriting a key keeps its place, while re-adding a removed one appends.
"""

from collections.abc import Callable, Iterator, Mapping, MutableMapping
from re import ASCII
from re import compile as regex
from typing import Any, TypeVar, overload

T = TypeVar('T')

__all__ = [
    'trim', 'to_bool', 'to_str', 'coerce',
    'IniSectionProxy', 'IniSectionView', 'IniClass'
]

_BLANKS = ' \t\r\n'
_MISSING = object()

# plain decimal literals only: no `_`, no `nan`/`inf`, no hex.
_NUMERALS = {
    int: regex(r'[+-]?\d+', ASCII),
    float: regex(r'[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?', ASCII),
}


def trim(text: str) -> str:
    """Strip spaces, tabs, CRs and LFs (and only these) from both ends."""
    return text.strip(_BLANKS)


def to_bool(value: str) -> bool | None:
    match trim(value).lower():
        case 'true' | '1':
            return True
        case 'false' | '0':
            return False
        case _:
            return None


def coerce(value: str, type_: Callable[[str], T]) -> T | None:
    """Interpret a stored string as `type_`.

    `bool` is handled specially (`true/false/1/0`, case insensitive),
    since `bool('false')` would be `True`.
    `int` and `float` only take plain decimal literals (`+5`, `-1.5e3`),
    so Python-only forms like `1_000` or `nan` give `None`.
    Any other type is called with the trimmed value,
    and a failure of that call gives `None`.
    """
    if type_ is str:
        return value  # type: ignore[return-value]
    if type_ is bool:
        return to_bool(value)  # type: ignore[return-value]
    text = trim(value)
    if (pattern := _NUMERALS.get(type_)) and not pattern.fullmatch(text):
        return None
    try:
        return type_(text)
    except (ValueError, TypeError, ArithmeticError):
        return None


def to_str(value: object) -> str:
    """Canonical text of a value to store.

    Raises:
        TypeError: `value` has no string conversion other than `object`'s.
    """
    match value:
        case str():
            return value
        case bool():
            return 'true' if value else 'false'
        case int():
            return str(int(value))
        case float():
            return repr(float(value))
    cls = type(value)
    if cls.__str__ is object.__str__ and cls.__format__ is object.__format__:
        raise TypeError(
            f'{cls.__name__!r} object has no string form to store in INI.')
    return str(value)


class IniSectionView:
    """Read only accessor of one section.

    Unlike `IniSectionProxy`, `view[key]` gives `None` for a missing key
    rather than raising `KeyError`. A missing section looks empty.
    """

    def __init__(self, section_name: str, ins: 'IniClass') -> None:
        self._name = section_name
        self._ins = ins

    @property
    def name(self) -> str:
        return self._name

    def __getitem__(self, key: str) -> str | None:
        return self._ins.get_value(self._name, key)

    def get_value(
        self, key: str, type_: Callable[[str], T] = str
    ) -> T | None:
        return self._ins.get_value(self._name, key, type_)

    def keys(self) -> list[str]:
        return self._ins.get_keys(self._name)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._ins.has_value(self._name, key)

    def __len__(self) -> int:
        return len(self.keys())

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __repr__(self) -> str:
        return '<view [%s] { .cnt = %d }>' % (self._name, len(self))


class IniSectionProxy(MutableMapping[str, str]):
    """R/W accessor of one section, bound by name to its `IniClass`.

    It's a *live* view: changes made through it show up in the document,
    and vice versa. Getting a proxy never creates the section,
    but assigning a key through it does.
    """

    def __init__(self, section_name: str, ins: 'IniClass') -> None:
        self._name = section_name
        self._ins = ins

    @property
    def name(self) -> str:
        return self._name

    def _pairs(self) -> dict[str, str]:
        return self._ins._raw_dicts.get(self._name, {})

    def __getitem__(self, key: str) -> str:
        return self._pairs()[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._ins.set_value(self._name, key, value)

    def __delitem__(self, key: str) -> None:
        if not self._ins.remove_value(self._name, key):
            raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        return key in self._pairs()

    def __len__(self) -> int:
        return len(self._pairs())

    def __iter__(self) -> Iterator[str]:
        # snapshot, so deleting while iterating won't blow up.
        return iter(list(self._pairs()))

    def __str__(self) -> str:
        return f"[{self._name}]"

    def __repr__(self) -> str:
        return '[%s] { .cnt = %d }' % (self._name, len(self))

    def get_value(
        self, key: str, type_: Callable[[str], T] = str
    ) -> T | None:
        return self._ins.get_value(self._name, key, type_)

    def to_dict(self) -> dict[str, str]:
        return self._pairs().copy()


class IniClass(MutableMapping[str, IniSectionProxy]):
    """INI 文件表示。Holds sections in the following form (comments dropped):

        ```ini
        [section]
        key233 = val666
        [another]  ; a section without any key still counts.
        ```

    `ini[section]` gives a live `IniSectionProxy`,
    and `ini.view(section)` a read only `IniSectionView`.
    """

    def __init__(
        self, sections: Mapping[str, Mapping[str, Any]] | None = None
    ) -> None:
        self._raw_dicts: dict[str, dict[str, str]] = {}
        if sections:
            for sect, pairs in sections.items():
                self.set_section(sect)
                for k, v in pairs.items():
                    self.set_value(sect, k, v)

    # --- mapping protocol, over sections ---

    def __getitem__(self, key: str) -> IniSectionProxy:
        return IniSectionProxy(key, self)

    def __setitem__(
        self,
        key: str,
        value: IniSectionProxy | Mapping[str, Any]
    ) -> None:
        # shouldn't keep ptr to external dict in key setting operation.
        pairs = (
            value.to_dict()
            if isinstance(value, IniSectionProxy)
            else {k: to_str(v) for k, v in value.items()}
        )
        self._raw_dicts[key] = pairs

    def __delitem__(self, key: str) -> None:
        del self._raw_dicts[key]

    def __contains__(self, key: object) -> bool:
        return key in self._raw_dicts

    def __len__(self) -> int:
        return len(self._raw_dicts)

    def __iter__(self) -> Iterator[str]:
        return iter(self._raw_dicts)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, IniClass):
            return self._raw_dicts == other._raw_dicts
        return NotImplemented

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self._raw_dicts!r})'

    # `self[key]` never raises, so mixin `get()`/`setdefault()`/`pop()`
    # won't do. Popped sections get a detached copy, not a dangling proxy.
    def _detach(self, key: str, pairs: dict[str, str]) -> IniSectionProxy:
        holder = IniClass()
        holder._raw_dicts[key] = pairs
        return IniSectionProxy(key, holder)

    def pop(self, key: str, default: Any = _MISSING) -> Any:
        if key not in self._raw_dicts:
            if default is _MISSING:
                raise KeyError(key)
            return default
        return self._detach(key, self._raw_dicts.pop(key))

    def popitem(self) -> tuple[str, IniSectionProxy]:
        if not self._raw_dicts:
            raise KeyError('popitem(): INI document is empty')
        key, pairs = self._raw_dicts.popitem()
        return key, self._detach(key, pairs)

    def get(self, key: str, default=None):
        return self[key] if key in self._raw_dicts else default

    def setdefault(
        self, key: str, default: Mapping[str, Any] | None = None
    ) -> IniSectionProxy:
        if key not in self._raw_dicts:
            self[key] = default or {}
        return self[key]

    def view(self, section: str) -> IniSectionView:
        return IniSectionView(section, self)

    # --- accessors ---

    @overload
    def get_value(self, section: str, key: str) -> str | None: ...

    @overload
    def get_value(
        self, section: str, key: str, type_: Callable[[str], T]
    ) -> T | None: ...

    def get_value(self, section, key, type_=str):
        """Get the value of `[section] key`, interpreted as `type_`.

        Returns `None` if either the section or the key is missing,
        or if the value doesn't parse as `type_`.
        Those two cases are NOT distinguishable here,
        check with `has_value()` if that matters.
        """
        pairs = self._raw_dicts.get(section)
        if pairs is None or key not in pairs:
            return None
        return coerce(pairs[key], type_)

    def get_value_or_default(
        self, section: str, key: str, default: T,
        type_: Callable[[str], T] | None = None
    ) -> T:
        """Like `get_value()`, but falls back to `default`.

        Without `type_`, the type of `default` is used (`str` for `None`).
        """
        if type_ is None:
            type_ = str if default is None else type(default)
        ret = self.get_value(section, key, type_)
        return default if ret is None else ret

    def has_section(self, section: str) -> bool:
        return section in self._raw_dicts

    def has_value(self, section: str, key: str) -> bool:
        return key in self._raw_dicts.get(section, {})

    def get_sections(self) -> list[str]:
        return list(self._raw_dicts)

    def get_keys(self, section: str) -> list[str]:
        return list(self._raw_dicts.get(section, {}))

    # --- mutators ---

    def set_value(self, section: str, key: str, value: Any) -> None:
        """Store `value` as text, creating the section if needed.

        See `to_str()` for how non-string values get written.
        """
        text = to_str(value)
        self._raw_dicts.setdefault(section, {})[key] = text

    def set_section(self, section: str) -> None:
        """Add an empty section, if not exists yet.
        Keys of an existing section are kept."""
        self._raw_dicts.setdefault(section, {})

    def remove_value(self, section: str, key: str) -> bool:
        pairs = self._raw_dicts.get(section)
        if pairs is None or key not in pairs:
            return False
        del pairs[key]
        return True

    def remove_section(self, section: str) -> bool:
        return self._raw_dicts.pop(section, None) is not None

    def merge(self, another: 'IniClass') -> None:
        """To merge `another` into self, section by section.

        Unlike `update()`, keys absent from `another` are kept.
        """
        for sect, pairs in another._raw_dicts.items():
            self._raw_dicts.setdefault(sect, {}).update(pairs)

    def clear(self) -> None:
        self._raw_dicts.clear()

    def rename(self, old: str, new: str) -> bool:
        """Rename a section, keeping its position.

        Returns:
            `True` if succeed, otherwise `False`.
            May not success if `old` is not found or `new` already exists.
        """
        if old not in self._raw_dicts or new in self._raw_dicts:
            return False
        self._raw_dicts = {
            (new if sect == old else sect): pairs
            for sect, pairs in self._raw_dicts.items()
        }
        return True

    def to_dict(self) -> dict[str, dict[str, str]]:
        return {sect: pairs.copy() for sect, pairs in self._raw_dicts.items()}

    def copy(self):
        """An independent copy. Nothing is shared with `self` afterwards."""
        ret = object.__new__(type(self))
        ret.__dict__.update(self.__dict__)
        ret._raw_dicts = self.to_dict()
        return ret

    __copy__ = copy
