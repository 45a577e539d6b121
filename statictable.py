#
#
# statictable.py
#
# statictable is an immutable in-memory table of named columns, stored as a
# single flat row-major list of cells, with a companion Query class for
# building column indexes and searching rows by predicate
#
#
# Copyright (c) 2026  The statictable authors
#
# Permission is hereby granted, free of charge, to any person obtaining
# a copy of this software and associated documentation files (the
# "Software"), to deal in the Software without restriction, including
# without limitation the rights to use, copy, modify, merge, publish,
# distribute, sublicense, and/or sell copies of the Software, and to
# permit persons to whom the Software is furnished to do so, subject to
# the following conditions:
#
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT.
# IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY
# CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN ACTION OF CONTRACT,
# TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN CONNECTION WITH THE
# SOFTWARE OR THE USE OR OTHER DEALINGS IN THE SOFTWARE.
#
from __future__ import annotations

__doc__ = r"""

C{statictable} - an immutable, spreadsheet-like table of named columns

A C{statictable} Table is built once, from one of several input shapes, and never
changes afterward. All cells are kept in a single flat list, row by row, so that
rows are contiguous slices and columns are strided slices of the same list.

Tables can be created from:
 - a header and a flat list of values (short final rows are padded with a filler value)
 - a column count and a flat list of values (columns are named A, B, C, ... like a
   spreadsheet)
 - a "rowset", a list of rows given either as lists of values or as dicts

Rows are numbered starting at 1. C{table[0]} returns the header, and C{table[n]}
returns row n as a dict of header name to cell value.

A Query gives indexed and predicate-based searching over one column at a time;
the resulting row numbers can be passed to C{take} to create a new Table.

Here is a simple C{statictable} example::

    import statictable as st

    countries = st.Table(
        ["Name", "Countries"],
        ["Alice", "US PE CL",
         "Bob", "US RU",
         "Carol", "IL UK",
         "Dave", "UK",
         "Eve", "JP CN",
         "Frank", "US RU CN"],
    )

    q = st.Query(countries)
    q.add_index("Countries")

    # find rows mentioning both US and RU
    us_and_ru = st.Predicate.all_of(st.Predicate.contains("US"), st.Predicate.contains("RU"))
    row_numbers = q.grep(us_and_ru, "Countries", mode=st.GrepMode.ROW_NUMBERS)
    print(row_numbers)    # [2, 6]

    # extract those rows into a new Table
    print(countries.take(row_numbers))
"""

import enum
import itertools
import math
import operator
import re
import sys
import warnings
from collections import defaultdict, namedtuple, Counter
from collections.abc import Mapping
from types import MappingProxyType
from typing import (
    Callable, Any, TextIO, Optional, Iterable, Iterator, Union,
)

try:
    import rich
    from rich import box
except ImportError:
    rich = None
    box = None

version_info = namedtuple("version_info", "major minor micro release_level serial")
__version_info__ = version_info(1, 0, 0, "final", 0)
__version__ = (
    "{}.{}.{}".format(*__version_info__[:3])
    + (f"{__version_info__.release_level[0]}{__version_info__.serial}", "")[
        __version_info__.release_level == "final"
    ]
)
__version_time__ = "17 Oct 2026 12:00 UTC"


# custom Exception classes
class StaticTableError(Exception):
    """
    Base class for all exceptions raised by statictable.
    """


class EmptyHeaderError(StaticTableError, ValueError):
    """
    Exception raised when creating a Table with no column names.
    """


class EmptyDataError(StaticTableError, ValueError):
    """
    Exception raised when creating a Table with no data values, or from a rowset
    with no usable rows.
    """


class DuplicateHeaderError(StaticTableError, ValueError):
    """
    Exception raised when the same column name appears more than once in a header.
    """
    def __init__(self, column: str):
        super().__init__(column)
        self.column = column

    def __str__(self) -> str:
        return f"duplicate column name {self.column!r} in header"


class ContradictoryConstructorFlagsError(StaticTableError, ValueError):
    """
    Exception raised when a rowset is given as both dicts and lists-with-header.
    """


class UnknownColumnError(StaticTableError, KeyError):
    """
    Exception raised when referencing a column name that is not in the header.
    """
    def __init__(self, column: str):
        super().__init__(column)
        self.column = column

    def __str__(self) -> str:
        return f"no such column {self.column!r}"


class OutOfBoundsError(StaticTableError, IndexError):
    """
    Exception raised when a row or cell reference falls outside the Table.
    """


class EmptyRowListError(StaticTableError, ValueError):
    """
    Exception raised when calling take() with no row numbers.
    """


class RowOutOfRangeError(StaticTableError, IndexError):
    """
    Exception raised when calling take() with a row number not in the Table.
    """


class MultipleModesSpecifiedError(StaticTableError, ValueError):
    """
    Exception raised when grep() is called with more than one output mode.
    """


class NoSuchIndexError(StaticTableError, KeyError):
    """
    Exception raised when trying to access an index that does not exist.
    """
    def __init__(self, column: str):
        super().__init__(column)

    def __str__(self) -> str:
        index_name = super().__str__()
        return f"no such index {index_name!r}"


class ReadonlyIndexAccessError(StaticTableError):
    """
    Exception raised when trying to write to a readonly index.
    """


class RejectedDataWarning(Warning):
    """
    Warning emitted when rowset rows or cells are discarded, and no rejected data
    collector was given to receive them.
    """


def _emit_warning_with_user_frame(warning: Warning) -> None:
    try:
        cur = sys._getframe()
    except AttributeError:
        user_stack_level = 2
    else:
        # walk stack trace until outside of this module
        user_stack_level = 0
        while cur:
            user_stack_level += 1
            if cur.f_code.co_filename != __file__:
                break
            cur = cur.f_back
        else:
            user_stack_level = 2

    warnings.warn(message=str(warning), category=type(warning), stacklevel=user_stack_level)


default_filler = None

right_justify_types: tuple[type, ...] = (int, float)

PredicateFunction = Callable[[Any], bool]

__all__ = [
    "ContradictoryConstructorFlagsError",
    "DuplicateHeaderError",
    "EmptyDataError",
    "EmptyHeaderError",
    "EmptyRowListError",
    "GrepMode",
    "IngestionMode",
    "MultipleModesSpecifiedError",
    "NoSuchIndexError",
    "OutOfBoundsError",
    "Predicate",
    "Query",
    "ReadonlyIndexAccessError",
    "RejectedDataWarning",
    "RowOutOfRangeError",
    "StaticTableError",
    "Table",
    "UnknownColumnError",
    "column_names",
]


def column_names(count: int) -> list[str]:
    """
    Generate spreadsheet-style column names for the given number of columns:
    "A", "B", ..., "Z", "AA", "AB", ..., "AZ", "BA", ...
    """
    ret = []
    for n in range(1, count + 1):
        name = ""
        while n:
            n, rem = divmod(n - 1, 26)
            name = chr(ord("A") + rem) + name
        ret.append(name)
    return ret


def _flatten(seq: Iterable) -> Iterator[Any]:
    for item in seq:
        if isinstance(item, (list, tuple)):
            yield from _flatten(item)
        else:
            yield item


def _as_position(n: Any) -> int:
    # bools are ints too, but never row numbers
    if isinstance(n, bool):
        raise TypeError(f"row number must be an int, not {type(n).__name__}")
    return operator.index(n)


class IngestionMode(enum.Enum):
    FLAT_WITH_HEADER = 0
    FLAT_WITH_COUNT = 1
    ROWSET_MAPS = 2
    ROWSET_LISTS = 3


class GrepMode(enum.Flag):
    """
    Output modes for Query.grep. Exactly one mode may be given:
     - ROW_NUMBERS - list of matching row numbers
     - RAW_ROWS - list of matching rows, each as a tuple of cell values
     - HASH_ROWS - list of matching rows, each as a dict of column name to value (default)
     - ROW_TO_RAW_ROW - dict of row number to tuple of cell values
     - ROW_TO_HASH_ROW - dict of row number to dict of column name to value
    """
    ROW_NUMBERS = enum.auto()
    RAW_ROWS = enum.auto()
    HASH_ROWS = enum.auto()
    ROW_TO_RAW_ROW = enum.auto()
    ROW_TO_HASH_ROW = enum.auto()


class _UnhashableKey:
    """
    Hashable stand-in for index keys that are lists, dicts, or other unhashable values.
    """
    __slots__ = ("value", "_repr")

    def __init__(self, value: Any):
        self.value = value
        self._repr = f"{type(value).__qualname__}:{value!r}"

    def __hash__(self) -> int:
        return hash(self._repr)

    def __eq__(self, other) -> bool:
        return isinstance(other, _UnhashableKey) and self._repr == other._repr

    def __repr__(self) -> str:
        return repr(self.value)


def _index_key(value: Any) -> Any:
    # 1, 1.0 and True hash alike, but are distinct values to a predicate
    try:
        hash(value)
    except TypeError:
        return _UnhashableKey(value)
    return type(value), value


class _PositionIndex:
    """
    Mapping of the defined values in one Table column to the list of row numbers
    where each value occurs. Row number lists are in ascending order.
    """
    def __init__(self, column: str):
        self.column = column
        self._obs_lookup: defaultdict[Any, list[int]] = defaultdict(list)
        self._values: dict[Any, Any] = {}

    def _add(self, value: Any, position: int) -> None:
        key = _index_key(value)
        if key not in self._values:
            self._values[key] = value
        self._obs_lookup[key].append(position)

    def __getitem__(self, value: Any) -> list[int]:
        key = _index_key(value)
        if key not in self._obs_lookup:
            raise KeyError(value)
        return list(self._obs_lookup[key])

    def __len__(self) -> int:
        return len(self._obs_lookup)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._values.values())

    def __contains__(self, value: Any) -> bool:
        return _index_key(value) in self._obs_lookup

    def keys(self) -> list[Any]:
        return list(self._values.values())

    def values(self) -> list[list[int]]:
        return [list(v) for v in self._obs_lookup.values()]

    def items(self) -> Iterable[tuple[Any, list[int]]]:
        return ((self._values[k], list(v)) for k, v in self._obs_lookup.items())

    def get(self, value, default=None):
        if value in self:
            return self[value]
        else:
            return default

    def __repr__(self) -> str:
        return f"<index on {self.column!r}: {len(self)} distinct values>"


Mapping.register(_PositionIndex)


class _ReadonlyIndexWrapper:
    def __init__(self, ind: _PositionIndex):
        self._index = ind

    @property
    def column(self) -> str:
        return self._index.column

    def keys(self) -> list[Any]:
        return self._index.keys()

    def values(self) -> list[list[int]]:
        return self._index.values()

    def items(self) -> Iterable[tuple[Any, list[int]]]:
        return self._index.items()

    def get(self, key, default=None):
        return self._index.get(key, default)

    def __getitem__(self, k):
        return self._index[k]

    def __setitem__(self, k, value):
        raise ReadonlyIndexAccessError(f"no update access to index {self._index.column!r}")

    def __len__(self):
        return len(self._index)

    def __iter__(self):
        return iter(self._index)

    def __contains__(self, k):
        return k in self._index

    def __repr__(self):
        return repr(self._index)


Mapping.register(_ReadonlyIndexWrapper)


class Predicate:
    """
    A test applied to a single cell value, for use with Query.grep.

    A Predicate wraps any function taking one value and returning a bool. Predicates
    can be combined using C{Predicate.all_of} and C{Predicate.any_of}, or with the
    C{&}, C{|} and C{~} operators::

        has_us_and_ru = Predicate.all_of(Predicate.contains("US"), Predicate.contains("RU"))
        has_us_or_ru = Predicate.contains("US") | Predicate.contains("RU")

    Comparison predicates (C{Predicate.eq}, C{Predicate.lt}, etc.) return False
    instead of raising TypeError when a cell value cannot be compared to the
    given value.
    """
    __slots__ = ("_fn", "_name")

    def __init__(self, fn: PredicateFunction, name: Optional[str] = None):
        if isinstance(fn, Predicate):
            fn, name = fn._fn, name or fn._name
        if not callable(fn):
            raise TypeError(f"predicate must be callable, not {type(fn).__name__}")
        self._fn = fn
        self._name = name or getattr(fn, "__name__", repr(fn))

    def __call__(self, value: Any) -> bool:
        return bool(self._fn(value))

    def __and__(self, other: PredicateFunction) -> Predicate:
        return Predicate.all_of(self, other)

    def __or__(self, other: PredicateFunction) -> Predicate:
        return Predicate.any_of(self, other)

    def __invert__(self) -> Predicate:
        fn = self._fn
        return Predicate(lambda v: not fn(v), f"not {self._name}")

    def __repr__(self) -> str:
        return f"Predicate({self._name})"

    @staticmethod
    def all_of(*preds: PredicateFunction) -> Predicate:
        """Predicate that matches values that match every one of the given predicates."""
        if not preds:
            raise ValueError("all_of requires at least one predicate")
        preds = tuple(Predicate(p) for p in preds)
        return Predicate(
            lambda v: all(p(v) for p in preds),
            f"all_of({', '.join(p._name for p in preds)})",
        )

    @staticmethod
    def any_of(*preds: PredicateFunction) -> Predicate:
        """Predicate that matches values that match at least one of the given predicates."""
        if not preds:
            raise ValueError("any_of requires at least one predicate")
        preds = tuple(Predicate(p) for p in preds)
        return Predicate(
            lambda v: any(p(v) for p in preds),
            f"any_of({', '.join(p._name for p in preds)})",
        )

    @staticmethod
    def matches(pattern: Union[str, re.Pattern], flags: int = 0) -> Predicate:
        """
        Predicate that matches values whose str() contains a match for the given
        regular expression (using C{re.search}).
        """
        regex = re.compile(pattern, flags) if isinstance(pattern, str) else pattern

        def _inner(v: Any) -> bool:
            return regex.search(str(v)) is not None

        return Predicate(_inner, f"matches({regex.pattern!r})")


def _make_comparator(cmp_fn: Callable[[Any, Any], bool], name: str) -> Callable[[Any], Predicate]:
    """
    Internal function to help define Predicate.lt, Predicate.eq, etc.
    """

    def comparator_with_value(value: Any) -> Predicate:
        def _inner(v: Any) -> bool:
            try:
                return cmp_fn(v, value)
            except TypeError:
                return False

        return Predicate(_inner, f"{name}({value!r})")

    return comparator_with_value


def _make_comparator2(cmp_fn: Callable[[Any, Any, Any], bool], name: str) -> Callable[[Any, Any], Predicate]:
    """
    Internal function to help define Predicate.within and Predicate.between
    """

    def comparator_with_value(lower: Any, upper: Any) -> Predicate:
        def _inner(v: Any) -> bool:
            try:
                return cmp_fn(lower, upper, v)
            except TypeError:
                return False

        return Predicate(_inner, f"{name}({lower!r}, {upper!r})")

    return comparator_with_value


Predicate.lt = staticmethod(_make_comparator(operator.lt, "lt"))
Predicate.le = staticmethod(_make_comparator(operator.le, "le"))
Predicate.gt = staticmethod(_make_comparator(operator.gt, "gt"))
Predicate.ge = staticmethod(_make_comparator(operator.ge, "ge"))
Predicate.ne = staticmethod(_make_comparator(operator.ne, "ne"))
Predicate.eq = staticmethod(_make_comparator(operator.eq, "eq"))
Predicate.is_in = staticmethod(_make_comparator(lambda x, seq: x in seq, "is_in"))
Predicate.not_in = staticmethod(_make_comparator(lambda x, seq: x not in seq, "not_in"))
Predicate.contains = staticmethod(
    _make_comparator(lambda x, s: x is not None and s in str(x), "contains")
)
Predicate.startswith = staticmethod(
    _make_comparator(lambda x, s: x is not None and str(x).startswith(s), "startswith")
)
Predicate.endswith = staticmethod(
    _make_comparator(lambda x, s: x is not None and str(x).endswith(s), "endswith")
)
Predicate.between = staticmethod(
    _make_comparator2(lambda lower, upper, x: x is not None and lower < x < upper, "between")
)
Predicate.within = staticmethod(
    _make_comparator2(lambda lower, upper, x: x is not None and lower <= x <= upper, "within")
)


class Table:
    """
    Table is the main class in C{statictable}, holding a fixed set of named columns
    and a fixed number of rows. Tables can be:
     - created from a header and flat list of values, using the standard Python
       L{C{Table() constructor}<__init__>}
     - created from a column count and flat list of values, see L{from_column_count}
     - created from a list of rows given as lists or dicts, see L{from_rowset}
     - accessed by cell, row, or column, see L{cell}, L{row}, L{column}
     - indexed by row number, C{table[n]}, with C{table[0]} returning the header
     - sub-selected into new Tables by row number, see L{take}
     - searched using a L{Query}

    A Table is never modified after it is created; methods that select rows return
    new Table objects, which do not share any storage with the original Table.
    """

    def __init__(self, header: Iterable[str], data: Iterable[Any], *, filler: Any = default_filler):
        """
        Create a new Table from a list of column names and a flat list of cell values,
        given in row order. If the number of values is not an exact multiple of the
        number of columns, the last row is padded with C{filler}.
        @param header: names for the Table's columns
        @type header: sequence of strings
        @param data: cell values, row by row
        @type data: sequence
        @param filler: value used to pad an incomplete last row (default=None)
        """
        header = tuple(str(h) for h in header)
        if not header:
            raise EmptyHeaderError("header must contain at least one column name")

        data = list(data)
        if not data:
            raise EmptyDataError("data must contain at least one value")

        column_index: dict[str, int] = {}
        for colnum, name in enumerate(header, start=1):
            if name in column_index:
                raise DuplicateHeaderError(name)
            column_index[name] = colnum

        ncols = len(header)
        nrows = math.ceil(len(data) / ncols)
        data.extend([filler] * (ncols * nrows - len(data)))

        self._header = header
        self._column_index = MappingProxyType(column_index)
        self._columns = ncols
        self._rows = nrows
        self._data = tuple(data)
        self._filler = filler
        self._ingestion_mode = IngestionMode.FLAT_WITH_HEADER

    @classmethod
    def from_column_count(cls, columns: int, data: Iterable[Any], *, filler: Any = default_filler) -> Table:
        """
        Create a new Table with the given number of columns, named "A", "B", "C", etc.
        """
        ret = cls(column_names(columns), data, filler=filler)
        ret._ingestion_mode = IngestionMode.FLAT_WITH_COUNT
        return ret

    @classmethod
    def from_rowset(
            cls,
            rows: Iterable[Any],
            *,
            set_of_maps: bool = False,
            data_has_header: bool = False,
            rejected: Optional[Union[list, dict]] = None,
            filler: Any = default_filler,
    ) -> Table:
        """
        Create a new Table from a sequence of rows.

        If C{set_of_maps} is True, each row is a dict of column name to value. Column
        names are ordered by the number of rows that contain them, most common first,
        with ties ordered alphabetically. Values for names missing from a row are set to
        C{filler}. Rows that are not dicts are skipped, and appended to C{rejected}
        if a list is given.

        Otherwise, each row is a list of values. If C{data_has_header} is True, the
        first row gives the column names; if not, columns are named "A", "B", etc.,
        enough to hold the longest row. Short rows are padded with C{filler}; long rows
        are truncated, and the truncated values are saved in C{rejected[i]} if a dict
        is given, where C{i} is the row's 0-based position in C{rows}.

        C{set_of_maps} and C{data_has_header} may not both be given.
        """
        if set_of_maps and data_has_header:
            raise ContradictoryConstructorFlagsError(
                "set_of_maps and data_has_header cannot both be specified"
            )

        if set_of_maps:
            return cls._maps_rowset(rows, rejected, filler)
        return cls._lists_rowset(rows, bool(data_has_header), rejected, filler)

    @classmethod
    def ingest(cls, mode: IngestionMode, source: Any, **options: Any) -> Table:
        """
        Create a new Table using one of the ingestion strategies named by
        C{IngestionMode}. C{source} is the flat data list for the FLAT_* modes, and
        the list of rows for the ROWSET_* modes; C{options} are passed on as keyword
        arguments:
         - FLAT_WITH_HEADER - C{header} (required), C{filler}
         - FLAT_WITH_COUNT - C{columns} (required), C{filler}
         - ROWSET_MAPS - C{rejected}, C{filler}
         - ROWSET_LISTS - C{data_has_header}, C{rejected}, C{filler}
        """
        if mode is IngestionMode.FLAT_WITH_HEADER:
            header = options.pop("header")
            return cls(header, source, **options)
        if mode is IngestionMode.FLAT_WITH_COUNT:
            columns = options.pop("columns")
            return cls.from_column_count(columns, source, **options)
        if mode is IngestionMode.ROWSET_MAPS:
            return cls.from_rowset(source, set_of_maps=True, **options)
        if mode is IngestionMode.ROWSET_LISTS:
            return cls.from_rowset(source, set_of_maps=False, **options)
        raise TypeError(f"unknown ingestion mode {mode!r}")

    @classmethod
    def _maps_rowset(cls, rows: Iterable[Any], rejected: Optional[list], filler: Any) -> Table:
        kept = []
        num_rejected = 0
        for row in rows:
            if isinstance(row, Mapping):
                kept.append(row)
            else:
                num_rejected += 1
                if rejected is not None:
                    rejected.append(row)

        if num_rejected and rejected is None:
            _emit_warning_with_user_frame(
                RejectedDataWarning(f"{num_rejected} non-dict row(s) skipped")
            )
        if not kept:
            raise EmptyDataError("rowset contains no dict rows")

        key_counts = Counter(itertools.chain.from_iterable(row.keys() for row in kept))
        keys = sorted(key_counts, key=lambda k: (-key_counts[k], str(k)))

        data = [row.get(k, filler) for row in kept for k in keys]
        ret = cls(keys, data, filler=filler)
        ret._ingestion_mode = IngestionMode.ROWSET_MAPS
        return ret

    @classmethod
    def _lists_rowset(
            cls, rows: Iterable[Any], data_has_header: bool, rejected: Optional[dict], filler: Any
    ) -> Table:
        rows = [list(row) if isinstance(row, (list, tuple)) else [row] for row in rows]
        if data_has_header:
            if not rows:
                raise EmptyHeaderError("rowset contains no header row")
            header = list(_flatten(rows[0]))
            first_data_row = 1
        else:
            header = column_names(max(map(len, rows), default=0))
            first_data_row = 0

        if len(rows) <= first_data_row:
            raise EmptyDataError("rowset contains no data rows")
        if not header:
            raise EmptyHeaderError("rowset header contains no column names")

        ncols = len(header)
        data = []
        num_truncated = 0
        for i, row in enumerate(rows[first_data_row:], start=first_data_row):
            if len(row) > ncols:
                num_truncated += 1
                if rejected is not None:
                    rejected[i] = row[ncols:]
                del row[ncols:]
            else:
                row.extend([filler] * (ncols - len(row)))
            data.extend(row)

        if num_truncated and rejected is None:
            _emit_warning_with_user_frame(
                RejectedDataWarning(f"{num_truncated} row(s) truncated to {ncols} columns")
            )

        ret = cls(header, data, filler=filler)
        ret._ingestion_mode = IngestionMode.ROWSET_LISTS
        return ret

    @property
    def header(self) -> tuple[str, ...]:
        return self._header

    @property
    def column_index(self) -> Mapping[str, int]:
        """Read-only mapping of column name to 1-based column number."""
        return self._column_index

    @property
    def columns(self) -> int:
        return self._columns

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def data(self) -> tuple[Any, ...]:
        """All cell values, row by row."""
        return self._data

    @property
    def filler(self) -> Any:
        return self._filler

    @property
    def ingestion_mode(self) -> IngestionMode:
        return self._ingestion_mode

    def elems(self) -> int:
        """Return the number of cells in the Table."""
        return self._rows * self._columns

    def __len__(self) -> int:
        """Return the number of rows in the Table."""
        return self._rows

    def __iter__(self) -> Iterator[dict[str, Any]]:
        """Iterate over the rows of the Table, as dicts of column name to value."""
        for n in range(1, self._rows + 1):
            yield self[n]

    def _column_number(self, column: str) -> int:
        colnum = self._column_index.get(column)
        if colnum is None:
            raise UnknownColumnError(column)
        return colnum

    def _check_row(self, position: Any) -> int:
        position = _as_position(position)
        if not 1 <= position <= self._rows:
            raise OutOfBoundsError(f"row {position} out of range 1-{self._rows}")
        return position

    def cell(self, column: str, row: int) -> Any:
        """Return the value of a single cell, given column name and row number."""
        colnum = self._column_number(column)
        row = self._check_row(row)
        offset = self._columns * (row - 1) + (colnum - 1)
        if offset >= len(self._data):
            raise OutOfBoundsError(f"cell ({column!r}, {row}) is outside the table data")
        return self._data[offset]

    def row(self, position: int) -> tuple[Any, ...]:
        """Return the values in the given row, in column order."""
        position = self._check_row(position)
        return self._data[(position - 1) * self._columns: position * self._columns]

    def column(self, column: str) -> tuple[Any, ...]:
        """Return the values in the given column, in row order."""
        colnum = self._column_number(column)
        return self._data[colnum - 1::self._columns]

    def __getitem__(self, n: int) -> Union[tuple[str, ...], dict[str, Any]]:
        """
        C{table[0]} returns the header; C{table[n]} for n in 1 through rows returns
        row n as a dict of column name to value.
        """
        n = _as_position(n)
        if n == 0:
            return self._header
        if not 1 <= n <= self._rows:
            raise OutOfBoundsError(f"index {n} out of range 0-{self._rows}")
        return dict(zip(self._header, self.row(n)))

    def shaped_array(self) -> list[list[Any]]:
        """Return the Table data (without header) as a list of lists, one per row."""
        return [
            [self.cell(name, r) for name in self._header]
            for r in range(1, self._rows + 1)
        ]

    def generate_index(self, column: str) -> _PositionIndex:
        """
        Build a mapping of each value in the given column to the list of row numbers
        containing that value. Empty cells (None, or the Table's filler) are omitted.
        """
        ind = _PositionIndex(column)
        for position, value in enumerate(self.column(column), start=1):
            if not self._is_empty_cell(value):
                ind._add(value, position)
        return ind

    def _is_empty_cell(self, value: Any) -> bool:
        if value is None or value is self._filler:
            return True
        if self._filler is None:
            return False
        try:
            return bool(value == self._filler)
        except (TypeError, ValueError):
            return False

    @staticmethod
    def _row_runs(positions: list[int]) -> Iterator[tuple[int, int]]:
        """
        Group positions into runs of consecutive ascending row numbers, returned as
        (first, last) pairs in the order given.
        """
        run_start = prev = positions[0]
        for p in positions[1:]:
            if p == prev + 1:
                prev = p
                continue
            yield run_start, prev
            run_start = prev = p
        yield run_start, prev

    def take(self, positions: Iterable[int]) -> Table:
        """
        Create a new Table from the given rows, in the order given. Row numbers may
        be repeated, and need not be in order.
        @param positions: row numbers to copy to the new Table
        @type positions: sequence of ints
        """
        positions = [_as_position(p) for p in positions]
        if not positions:
            raise EmptyRowListError("take() requires at least one row number")
        for p in positions:
            if not 1 <= p <= self._rows:
                raise RowOutOfRangeError(f"row {p} out of range 1-{self._rows}")

        ncols = self._columns
        data: list[Any] = []
        for first, last in self._row_runs(positions):
            data.extend(self._data[(first - 1) * ncols: last * ncols])

        return type(self)(self._header, data, filler=self._filler)

    def clone(self) -> Table:
        """
        Create a full copy of the current table.
        """
        return self.take(range(1, self._rows + 1))

    def head(self, n: int = 10) -> Table:
        """
        Return a Table of the first n rows.
        """
        return self.take(range(1, min(n, self._rows) + 1))

    def tail(self, n: int = 10) -> Table:
        """
        Return a Table of the last n rows.
        """
        return self.take(range(max(self._rows - n, 0) + 1, self._rows + 1))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Table):
            return NotImplemented
        if self._header != other._header:
            return False
        return all(self.column(name) == other.column(name) for name in self._header)

    __hash__ = None

    def info(self) -> dict[str, Any]:
        """
        Quick method to list informative table statistics
        :return: dict listing table information and statistics
        """
        return {
            "columns": self._columns,
            "rows": self._rows,
            "header": list(self._header),
            "ingestion_mode": self._ingestion_mode.name,
        }

    def __repr__(self) -> str:
        filler = f", filler={self._filler!r}" if self._filler is not None else ""
        return (
            f"{self.__class__.__module__}.{self.__class__.__name__}"
            f"(header={list(self._header)!r}, data={list(self._data)!r}{filler})"
        )

    def __str__(self) -> str:
        lines = [
            "\t".join(self._header),
            "\t".join("-" * len(name) for name in self._header),
        ]
        for r in range(1, self._rows + 1):
            lines.append("\t".join(f"[{v!r}]" for v in self.row(r)))
        return "\n".join(lines)

    def _rich_table(self, empty: Any = "", **kwargs):
        if rich is None:
            raise Exception("rich module not installed")

        from rich.table import Table as RichTable

        table_defaults = dict(show_header=True, header_style="bold", box=box.ASCII)
        if getattr(sys.stdout, "isatty", lambda: False)():
            table_defaults["box"] = box.SIMPLE
        table_kwargs = table_defaults
        table_kwargs.update(kwargs)

        rt = RichTable(**table_kwargs)

        for name in self._header:
            field_spec = {}
            # find a value for this column, and if numeric, make column right-justified
            next_v = next(
                (v for v in self.column(name) if not self._is_empty_cell(v)), None
            )
            if isinstance(next_v, right_justify_types) and not isinstance(next_v, bool):
                field_spec["justify"] = "right"
            rt.add_column(name, **field_spec)

        for r in range(1, self._rows + 1):
            rt.add_row(
                *[empty if self._is_empty_cell(v) else str(v) for v in self.row(r)]
            )

        return rt

    def present(self, file: Optional[TextIO] = None, **kwargs: Any) -> None:
        """
        Print a nicely-formatted table of the rows in the Table, using the `rich`
        Python module.

        :param file: (optional) output file for tabular output (defaults to sys.stdout)
        :param kwargs: (optional) additional keyword args to customize the `rich` output,
                       as might be passed to the `rich.Table` class (such as `title`)
        :return: None

        Note: the `rich` Python module must be installed to use this method.
        """
        try:
            from rich.console import Console
        except ImportError:
            raise Exception("rich module not installed")

        console = Console(file=file)
        table_kwargs = {"header_style": "bold yellow"}
        table_kwargs.update(kwargs)
        table = self._rich_table(empty="", **table_kwargs)
        print(file=file)
        console.print(table)

    def as_markdown(self, formats: Optional[dict[Union[str, type], Any]] = None) -> str:
        """
        Output the table as a Markdown table.
        @param formats: optional dict of str formats to use when converting cell values
                        to strings, keyed by column name or by value type
        @type formats: mapping of column names or types to either str formats as used by
                       the str.format method, or a callable that takes a value and returns
                       a str
        @return: string of generated Markdown representing the table
        """
        if formats is None:
            formats = {}

        center_vals = (True, False, 'Y', 'N', 'X', 'YES', 'NO', 'y', 'n', 'x', 'yes', 'no', 0, 1, None)
        field_align_map = {}
        for name in self._header:
            align = "---"
            align_center = True
            align_right = True
            for v in self.column(name):
                if align_center and v in center_vals:
                    continue
                align_center = False
                if not (v is None or isinstance(v, right_justify_types)):
                    align_right = False
                if not align_right and not align_center:
                    break
            if align_center:
                align = ":---:"
            elif align_right:
                align = "---:"
            field_align_map[name] = align

        def format_cell(name: str, v: Any) -> str:
            if self._is_empty_cell(v):
                return ""
            v_format = formats.get(name, formats.get(type(v), "{}"))
            return v_format.format(v) if isinstance(v_format, str) else v_format(v)

        rows = [
            f"| {' | '.join(format_cell(name, v) for name, v in zip(self._header, self.row(r)))} |\n"
            for r in range(1, self._rows + 1)
        ]
        return (
            f"| {' | '.join(self._header)} |\n"
            f"|{'|'.join(field_align_map[name] for name in self._header)}|\n"
            f"{''.join(rows)}"
        )


class Query:
    """
    Query provides predicate searching over the columns of a Table, optionally
    accelerated by column indexes.

    A Query holds a reference to its Table, but never modifies it; any number of
    Query objects may share the same Table. Indexes are added to a Query using
    L{add_index}; once added, an index is used automatically by L{grep} for searches
    on that column.

    Query objects are not thread-safe: calls to C{add_index} must not run concurrently
    with other calls on the same Query.
    """

    def __init__(self, table: Table):
        if not isinstance(table, Table):
            raise TypeError(f"Query requires a Table, not {type(table).__name__}")
        self._table = table
        self._indexes: dict[str, _PositionIndex] = {}

    @property
    def table(self) -> Table:
        return self._table

    def add_index(self, column: str) -> float:
        """
        Create an index on the given column, replacing any existing index on that column.

        Returns the index selectivity score: the number of distinct values in the
        column divided by the number of rows. A score of 1.0 means every row has
        a different value.
        @param column: name of the column to index
        @type column: string
        """
        ind = self._table.generate_index(column)
        self._indexes[column] = ind
        return len(ind) / self._table.rows

    def get_index(self, column: str) -> _ReadonlyIndexWrapper:
        """Return a read-only view of the index on the given column."""
        self._table._column_number(column)
        ind = self._indexes.get(column)
        if ind is None:
            raise NoSuchIndexError(column)
        return _ReadonlyIndexWrapper(ind)

    __getitem__ = get_index

    def keys(self) -> list[str]:
        """Return the names of the indexed columns."""
        return list(self._indexes)

    def values(self) -> list[_ReadonlyIndexWrapper]:
        return [_ReadonlyIndexWrapper(ind) for ind in self._indexes.values()]

    def items(self) -> list[tuple[str, _ReadonlyIndexWrapper]]:
        return [(k, _ReadonlyIndexWrapper(ind)) for k, ind in self._indexes.items()]

    def __contains__(self, column: str) -> bool:
        return column in self._indexes

    def __len__(self) -> int:
        return len(self._indexes)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._indexes))

    def _matching_rows(self, predicate: Predicate, column: str) -> list[int]:
        ind = self._indexes.get(column)
        if ind is not None:
            matched = set()
            for value, positions in ind.items():
                if predicate(value):
                    matched.update(positions)
            return sorted(matched)

        table = self._table
        return [
            position
            for position, value in enumerate(table.column(column), start=1)
            if not table._is_empty_cell(value) and predicate(value)
        ]

    def grep(
            self,
            predicate: PredicateFunction,
            column: str,
            mode: GrepMode = GrepMode.HASH_ROWS,
    ) -> Union[list, dict]:
        """
        Find rows whose value in the given column matches a predicate. Empty cells
        (None, or the Table's filler) never match.

        If the column has been indexed with L{add_index}, the predicate is evaluated
        once for each distinct value in the column, instead of once for each row.

        Results are always returned in ascending row order, shaped according to
        C{mode}:
         - GrepMode.ROW_NUMBERS - list of row numbers
         - GrepMode.RAW_ROWS - list of row value tuples
         - GrepMode.HASH_ROWS - list of row dicts (default)
         - GrepMode.ROW_TO_RAW_ROW - dict of row number to row value tuple
         - GrepMode.ROW_TO_HASH_ROW - dict of row number to row dict

        @param predicate: a Predicate, or any function taking a value and returning
            a bool
        @param column: name of the column to search
        @param mode: a single GrepMode value
        """
        selected = [m for m in GrepMode if m in mode]
        if len(selected) > 1:
            raise MultipleModesSpecifiedError(
                f"only one output mode may be specified, got {' '.join(m.name for m in selected)}"
            )
        if not selected:
            mode = GrepMode.HASH_ROWS

        if not isinstance(predicate, Predicate):
            predicate = Predicate(predicate)

        # validate column name before looking for an index
        self._table._column_number(column)
        positions = self._matching_rows(predicate, column)

        table = self._table
        return {
            GrepMode.ROW_NUMBERS: lambda: positions,
            GrepMode.RAW_ROWS: lambda: [table.row(p) for p in positions],
            GrepMode.HASH_ROWS: lambda: [table[p] for p in positions],
            GrepMode.ROW_TO_RAW_ROW: lambda: {p: table.row(p) for p in positions},
            GrepMode.ROW_TO_HASH_ROW: lambda: {p: table[p] for p in positions},
        }[mode]()

    def __repr__(self) -> str:
        return f"<Query on {self._table.rows}-row table, indexes={self.keys()}>"


if __name__ == "__main__":

    fruits = Table.from_rowset(
        [
            {"name": "Eggplant", "color": "aubergine"},
            {"name": "Egg", "color": ["white", "beige"]},
            {"name": "Banana", "color": "yellow", "shape": "curved"},
        ],
        set_of_maps=True,
    )
    print(fruits)
    print()
    print(repr(fruits))
    print()

    travel = Table(
        ["Traveler", "Countries"],
        [
            "Alice", "US PE CL",
            "Bob", "US RU",
            "Carol", "IL UK",
            "Dave", "UK",
            "Eve", "JP CN",
            "Frank", "US RU CN",
        ],
    )
    q = Query(travel)
    print("selectivity:", q.add_index("Countries"))

    us_and_ru = Predicate.all_of(Predicate.contains("US"), Predicate.contains("RU"))
    found = q.grep(us_and_ru, "Countries", mode=GrepMode.ROW_NUMBERS)
    print(found)
    print(travel.take(found))
