"""Typed configuration entries evaluated with python-decouple.

A config class declares its entries as class attributes (``confi.str(...)``,
``confi.int(...)``, ...). Instantiating the class evaluates every entry, in
declaration order, into a plain value on the instance.

Values come from the environment first, then from a ``.env`` or
``settings.ini`` file found in the working directory or one of its parents
(i.e: the project running the tests, not the installed package).
"""

import inspect
import json
import os
import string
from collections import OrderedDict
from functools import wraps
from typing import Any, Callable, Dict, Optional, Tuple

from decouple import AutoConfig, Csv, UndefinedValueError, text_type, undefined


def cast_boolean(value):
    """Parse an entry as a boolean.

    - all variations of "true" and 1 are treated as True
    - all variations of "false" and 0 are treated as False
    """
    if isinstance(value, bool):
        return value
    elif isinstance(value, str):
        value = value.lower()
        if value == "true" or value == "1":
            return True
        elif value == "false" or value == "0":
            return False
        else:
            raise UndefinedValueError(f"{value} - is not a valid boolean")
    else:
        raise UndefinedValueError(f"{value} - is not a valid boolean")


def no_cast(value):
    return value


def cast_strings_only(cast_func):
    """decouple passes python defaults (i.e: a list default of a list entry)
    through the cast as well, only values read from the environment need
    parsing."""

    @wraps(cast_func)
    def wrapped_cast(value, *args, **kwargs):
        if value is not None and not isinstance(value, str):
            return value
        return cast_func(value, *args, **kwargs)

    return wrapped_cast


class ConfiEntry:
    key: str
    type: type
    default: Any
    description: str
    cast: Callable
    value: Any

    def __init__(
        self,
        key,
        default=undefined,
        description=None,
        cast=no_cast,
        type=str,
        index=-1,
    ) -> None:
        self.key = key
        # sorting index
        self.index = index
        self.default = default
        self.description = description
        self.cast = cast
        self.type = type
        self.value = undefined

    def __repr__(self) -> str:
        return f"ConfiEntry({self.key!r}, default={self.default!r})"


class Confi:
    """Interface to create typed configuration entries."""

    def __init__(self, prefix: Optional[str] = None, search_path: Optional[str] = None) -> None:
        """

        Args:
            prefix (str, optional): Prefix to add to all env-var keys.
            search_path (str, optional): Directory to look for a .env / settings.ini file from.
                Defaults to the working directory at the time the config is loaded.
        """
        self._prefix = prefix
        # counter of created entries (to track order)
        self._counter = 0
        self._entries: Dict[str, ConfiEntry] = OrderedDict()
        self._config = AutoConfig(search_path=search_path or os.getcwd())

        # get members by creation order
        members = sorted(
            inspect.getmembers(type(self), self._is_entry), key=self._get_entry_index
        )
        for name, entry in members:
            self._entries[name] = entry
            setattr(self, name, self._eval_entry(entry))

    def _is_entry(self, entry):
        return isinstance(entry, ConfiEntry)

    def _get_entry_index(self, member: Tuple[str, ConfiEntry]):
        name, entry = member
        return entry.index

    @property
    def entries(self) -> Dict[str, ConfiEntry]:
        return self._entries

    def _prefix_key(self, key):
        prefix = self._prefix
        return f"{prefix}{key}" if prefix is not None else key

    def _eval_entry(self, entry: ConfiEntry):
        # a malformed value raises, a missing value without a default raises UndefinedValueError
        return self._config(
            self._prefix_key(entry.key),
            default=entry.default,
            cast=cast_strings_only(entry.cast),
        )

    def _process(
        self,
        key,
        default=undefined,
        description=None,
        cast=no_cast,
        type=str,
    ) -> ConfiEntry:
        entry = ConfiEntry(key, default, description, cast, type, index=self._counter)
        # track count for indexing
        self._counter += 1
        return entry

    def __repr__(self) -> str:
        return json.dumps(
            {k: str(getattr(self, k)) for k in self.entries}, indent=2, sort_keys=True
        )

    def __setattr__(self, name: str, value: Any) -> None:
        """Make sure value updates are saved in internal entries as well."""
        super().__setattr__(name, value)
        if not name.startswith("_") and name in self._entries:
            self._entries[name].value = value

    # -- parser setters --

    def str(self, key, default=undefined, description=None) -> ConfiEntry:
        return self._process(key, description=description, default=default, type=str)

    def int(self, key, default=undefined, description=None) -> ConfiEntry:
        return self._process(
            key, description=description, default=default, cast=int, type=int
        )

    def float(self, key, default=undefined, description=None) -> ConfiEntry:
        return self._process(
            key, description=description, default=default, cast=float, type=float
        )

    def bool(self, key, default=undefined, description=None) -> ConfiEntry:
        return self._process(
            key,
            description=description,
            default=default,
            cast=cast_boolean,
            type=bool,
        )

    def list(
        self,
        key,
        default=undefined,
        sub_cast=text_type,
        delimiter=",",
        strip=string.whitespace,
        description=None,
    ) -> ConfiEntry:
        return self._process(
            key,
            default=default,
            description=description,
            cast=Csv(cast=sub_cast, delimiter=delimiter, strip=strip),
            type=list,
        )


# default parser
confi = Confi()
