"""Game data tables: identifiers, cells, rows and whole tables."""

from __future__ import annotations

import re
from collections import deque
from dataclasses import dataclass, field
from enum import Enum


class TableId(Enum):
    """Known data tables, in their canonical order."""

    weapons = 0
    actinfo = 1
    armor = 2
    armtype = 3
    automagic = 4
    automap = 5
    belts = 6
    bodylocs = 7
    books = 8
    charstats = 9
    colors = 10
    compcode = 11
    composit = 12
    cubemain = 13
    cubemod = 14
    difficultylevels = 15
    elemtypes = 16
    events = 17
    experience = 18
    gamble = 19
    gems = 20
    hireling = 21
    hitclass = 22
    inventory = 23
    itemratio = 24
    itemstatcost = 25
    itemtypes = 26
    levels = 27
    lowqualityitems = 28
    lvlmaze = 29
    lvlprest = 30
    lvlsub = 31
    lvltypes = 32
    lvlwarp = 33
    magicprefix = 34
    magicsuffix = 35
    misc = 36
    misscalc = 37
    missiles = 38
    monai = 39
    monequip = 40
    monlvl = 41
    monmode = 42
    monplace = 43
    monpreset = 44
    monprop = 45
    monseq = 46
    monsounds = 47
    monstats = 48
    monstats2 = 49
    montype = 50
    monumod = 51
    npc = 52
    objects = 53
    objgroup = 54
    objmode = 55
    objpreset = 56
    objtype = 57
    overlay = 58
    pettype = 59
    playerclass = 60
    plrmode = 61
    plrtype = 62
    properties = 63
    qualityitems = 64
    rareprefix = 65
    raresuffix = 66
    runes = 67
    setitems = 68
    sets = 69
    shrines = 70
    skillcalc = 71
    skilldesc = 72
    skills = 73
    soundenviron = 74
    sounds = 75
    states = 76
    storepage = 77
    superuniques = 78
    treasureclassex = 79
    uniqueappellation = 80
    uniqueitems = 81
    uniqueprefix = 82
    uniquesuffix = 83
    wanderingmon = 84


_TABLE_NAMES: tuple[str, ...] = tuple(member.name for member in TableId)


def table_names() -> list[str]:
    """Return the names of all known tables in canonical order."""
    return list(_TABLE_NAMES)


def table_id_string(table_id: TableId) -> str:
    """Return the file name stem of a table."""
    return table_id.name


def find_table_id(name: str) -> TableId | None:
    """Look up a table by its exact name; None if it is unknown."""
    return TableId.__members__.get(name)


_LEADING_INT = re.compile(r"[ \t\n\v\f\r]*([+-]?\d+)")


class TableCell:
    """A single text cell of a table."""

    __slots__ = ("text",)

    def __init__(self, text: str = "") -> None:
        self.text = text

    def __repr__(self) -> str:
        return f"TableCell({self.text!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TableCell):
            return self.text == other.text
        if isinstance(other, str):
            return self.text == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def to_int(self) -> int:
        """Parse a leading integer the way atoi does; 0 when there is none."""
        match = _LEADING_INT.match(self.text)
        return int(match.group(1)) if match else 0

    def set_int(self, value: int) -> None:
        self.text = str(value)

    def is_empty(self) -> bool:
        return not self.text

    def clear(self) -> None:
        self.text = ""

    def to_lower(self) -> str:
        return self.text.lower()

    def starts_with(self, s: str) -> bool:
        return self.text.startswith(s)

    def ends_with(self, s: str) -> bool:
        return self.text.endswith(s)

    def contains(self, s: str) -> bool:
        return s in self.text


@dataclass
class TableRow:
    """A row of cells."""

    data: list[TableCell] = field(default_factory=list)

    @classmethod
    def sized(cls, size: int) -> TableRow:
        """Create a row of ``size`` empty cells."""
        return cls([TableCell() for _ in range(size)])


@dataclass
class Table:
    """A whole table: its id, column names and rows."""

    id: TableId
    rows: deque[TableRow] = field(default_factory=deque)
    columns: list[str] = field(default_factory=list)
    modified: bool = False
    force_output: bool = False

    def index_of(self, col: str) -> int | None:
        """Return the position of a column, or None if it is absent."""
        try:
            return self.columns.index(col)
        except ValueError:
            return None