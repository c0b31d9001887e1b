"""Column-aware views over tables, plus helpers for common table layouts."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Union

from d2tables.tables import Table, TableCell, TableId, TableRow

Column = Union[int, str]
IntTransform = Callable[[int], int]

_TABLE_KEYS: dict[TableId, tuple[str, ...]] = {
    TableId.gamble: ("code",),
    TableId.misc: ("code",),
    TableId.gems: ("code",),
    TableId.uniqueitems: ("index",),
    TableId.setitems: ("index",),
    TableId.sets: ("index",),
    TableId.runes: ("Name",),
    TableId.skills: ("skill",),
    TableId.monstats: ("Id",),
    TableId.monstats2: ("Id",),
    TableId.difficultylevels: ("Name",),
    TableId.levels: ("Name",),
    TableId.monlvl: ("Level",),
    TableId.charstats: ("class",),
    TableId.weapons: ("code",),
    TableId.armor: ("code",),
}

_COLUMN_ALIASES: dict[TableId, dict[str, tuple[str, ...]]] = {
    TableId.itemtypes: {
        "MaxSockets3": ("MaxSock40",),
        "MaxSock40": ("MaxSockets3",),
    },
    TableId.levels: {
        "MonLvlEx(N)": ("MonLvl2Ex",),
        "MonLvlEx(H)": ("MonLvl3Ex",),
        "MonLvl2Ex": ("MonLvlEx(N)",),
        "MonLvl3Ex": ("MonLvlEx(H)",),
    },
}

_KEY_SEPARATOR = "###"


def arg_compat(template: str, arg: object) -> str:
    """Replace the first ``%1`` in ``template`` with ``arg``."""
    return template.replace("%1", str(arg), 1)


class RowView:
    """One row of a :class:`TableView`, addressable by column name or index."""

    __slots__ = ("_index", "_parent")

    def __init__(self, index: int, parent: TableView) -> None:
        self._index = index
        self._parent = parent

    def __repr__(self) -> str:
        return f"RowView({self._index}, {self.to_values()!r})"

    @property
    def index(self) -> int:
        return self._index

    def _cells(self) -> list[TableCell]:
        return self._parent.table.rows[self._index].data

    def __getitem__(self, key: Column) -> TableCell:
        if isinstance(key, str):
            position = self._parent.ind(key)
            if position is None:
                raise KeyError(key)
            key = position
        return self._cells()[key]

    def has_column(self, col_name: str) -> bool:
        return self._parent.ind(col_name) is not None

    def to_values(self) -> dict[str, str]:
        """Return the row as a mapping of column name to text."""
        return {col: cell.text for col, cell in zip(self._parent.table.columns, self._cells())}

    def set_values(self, values: Mapping[str, str]) -> None:
        """Assign texts by column name; unknown columns raise KeyError."""
        self._parent._ensure_writable()
        for name, value in values.items():
            self[name].text = value

    def make_key(self) -> str:
        """Build the primary key string for this row."""
        cells = self._cells()
        return _KEY_SEPARATOR.join(cells[col].text for col in self._parent._primary_key)

    def apply_int_transform(self, column: Column, transform: IntTransform) -> None:
        """Replace a non-empty integer cell with ``transform(value)``."""
        self._parent._ensure_writable()
        if isinstance(column, str):
            position = self._parent.ind(column)
            if position is None:
                return
            column = position
        cell = self[column]
        if cell.is_empty():
            return
        cell.set_int(transform(cell.to_int()))


class TableView:
    """A view over a table with column lookup, aliases and primary keys."""

    def __init__(self, table: Table, mark_modified: bool = False, read_only: bool = False) -> None:
        self.table = table
        self.writable = not read_only

        aliases = _COLUMN_ALIASES.get(table.id, {})
        self._column_index: dict[str, int] = {}
        for position, col in enumerate(table.columns):
            self._column_index[col] = position
            for alias in aliases.get(col, ()):
                self._column_index[alias] = position

        self._rows = [RowView(i, self) for i in range(len(table.rows))]
        if mark_modified:
            self.mark_modified()

        self._primary_key = [
            self._column_index[col]
            for col in _TABLE_KEYS.get(table.id, ())
            if col in self._column_index
        ]
        self._pk_index: dict[str, int] = {}

    def _ensure_writable(self) -> None:
        if not self.writable:
            raise RuntimeError("table view is read-only")

    def mark_modified(self) -> None:
        self._ensure_writable()
        self.table.modified = True

    def create_row_index(self) -> bool:
        """Index rows by primary key; False if the table has no key."""
        if not self._primary_key:
            return False
        for row in self._rows:
            self._pk_index[row.make_key()] = row.index
        return True

    def append_row(self, values: Mapping[str, str]) -> None:
        self._ensure_writable()
        self.table.rows.append(TableRow.sized(len(self.table.columns)))
        row = RowView(len(self._rows), self)
        self._rows.append(row)
        row.set_values(values)

    def merge(self, source: TableView, append_new: bool, update_existing: bool) -> None:
        """Merge rows of ``source`` by primary key (needs :meth:`create_row_index`)."""
        new_values: list[dict[str, str]] = []
        for source_row in source:
            row_index = self.ind_pk(source_row.make_key())
            if row_index is None:
                if append_new:
                    new_values.append(source_row.to_values())
            elif update_existing:
                self._rows[row_index].set_values(source_row.to_values())
        for values in new_values:
            self.append_row(values)

    def concat(self, source: TableView) -> None:
        for source_row in source:
            self.append_row(source_row.to_values())

    def clear(self) -> None:
        self._ensure_writable()
        self._rows.clear()
        self.table.rows.clear()
        self.table.modified = True

    def row_count(self) -> int:
        return len(self.table.rows)

    def has_column(self, name: str) -> bool:
        return name in self._column_index

    def ind(self, col_name: str) -> int | None:
        """Column position for a name or alias, or None."""
        return self._column_index.get(col_name)

    def ind_pk(self, key: str) -> int | None:
        """Row position for a primary key, or None."""
        return self._pk_index.get(key)

    def apply_int_transform(
        self, columns: Column | Iterable[Column], transform: IntTransform
    ) -> None:
        """Apply ``transform`` to the given columns of every row; unknown names are skipped."""
        if isinstance(columns, (int, str)):
            columns = [columns]
        positions: list[int] = []
        for col in columns:
            if isinstance(col, str):
                position = self.ind(col)
                if position is None:
                    continue
                col = position
            positions.append(col)
        for row in self._rows:
            for position in positions:
                row.apply_int_transform(position, transform)

    def __iter__(self) -> Iterator[RowView]:
        return iter(self._rows)

    def __getitem__(self, index: int) -> RowView:
        return self._rows[index]

    def __len__(self) -> int:
        return len(self._rows)


@dataclass(frozen=True)
class ColumnSet:
    """Names of one code/param/min/max column group."""

    code: str
    par: str
    min: str
    max: str


class ColumnsDesc:
    """A numbered series of property column groups."""

    def __init__(
        self,
        code_tpl: str,
        par_tpl: str,
        min_tpl: str,
        max_tpl: str,
        end: int,
        start: int = 1,
    ) -> None:
        self.start = start
        self.cols = [
            ColumnSet(
                arg_compat(code_tpl, i),
                arg_compat(par_tpl, i),
                arg_compat(min_tpl, i),
                arg_compat(max_tpl, i),
            )
            for i in range(start, end + 1)
        ]


DESC_UNIQUES = [ColumnsDesc("prop%1", "par%1", "min%1", "max%1", 12)]
DESC_RUNEWORDS = [ColumnsDesc("T1Code%1", "T1Param%1", "T1Min%1", "T1Max%1", 7)]
DESC_SET_ITEMS = [
    ColumnsDesc("prop%1", "par%1", "min%1", "max%1", 9),
    ColumnsDesc("aprop%1a", "apar%1a", "amin%1a", "amax%1a", 5),
    ColumnsDesc("aprop%1b", "apar%1b", "amin%1b", "amax%1b", 5),
]
DESC_GEMS = [
    ColumnsDesc("weaponMod%1Code", "weaponMod%1Param", "weaponMod%1Min", "weaponMod%1Max", 3),
    ColumnsDesc("helmMod%1Code", "helmMod%1Param", "helmMod%1Min", "helmMod%1Max", 3),
    ColumnsDesc("shieldMod%1Code", "shieldMod%1Param", "shieldMod%1Min", "shieldMod%1Max", 3),
]
DESC_AFFIX = [ColumnsDesc("mod%1code", "mod%1param", "mod%1min", "mod%1max", 3)]
DESC_SETS = [
    ColumnsDesc("PCode%1a", "PParam%1a", "PMin%1a", "PMax%1a", 5, 2),
    ColumnsDesc("PCode%1b", "PParam%1b", "PMin%1b", "PMax%1b", 5, 2),
    ColumnsDesc("FCode%1", "FParam%1", "FMin%1", "FMax%1", 8),
]


@dataclass
class DropItem:
    """One entry of a treasure class: what drops and its weight."""

    tc: TableCell
    prob: int


_MAX_DROP_ITEMS = 10


@dataclass
class DropSet:
    """The NoDrop weight and item entries of a treasure class row."""

    no_drop: int = 0
    items: list[DropItem] = field(default_factory=list)

    def read_row(self, row: RowView) -> None:
        self.no_drop = row["NoDrop"].to_int()
        self.items = []
        for i in range(1, _MAX_DROP_ITEMS + 1):
            prob = row[arg_compat("Prob%1", i)]
            if prob.is_empty():
                break
            tc_name = row[arg_compat("Item%1", i)]
            self.items.append(DropItem(TableCell(tc_name.text), prob.to_int()))

    def write_row(self, row: RowView) -> None:
        row["NoDrop"].text = str(self.no_drop) if self.no_drop else ""
        for i in range(1, _MAX_DROP_ITEMS + 1):
            prob = row[arg_compat("Prob%1", i)]
            tc_name = row[arg_compat("Item%1", i)]
            prob.clear()
            tc_name.clear()
            if i - 1 >= len(self.items):
                continue
            item = self.items[i - 1]
            prob.set_int(item.prob)
            tc_name.text = item.tc.text

    def drop_something_prob(self) -> int:
        """Total weight of all non-empty drops."""
        return sum(item.prob for item in self.items)