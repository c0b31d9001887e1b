from collections import deque

import pytest

from d2tables.table_view import (
    DESC_SETS,
    DESC_UNIQUES,
    ColumnsDesc,
    DropItem,
    DropSet,
    TableView,
    arg_compat,
)
from d2tables.tables import Table, TableCell, TableId, TableRow

TC_COLUMNS = ["Treasure Class", "NoDrop"] + [f"Prob{i}" for i in range(1, 11)] + [
    f"Item{i}" for i in range(1, 11)
]


def make_table(table_id, columns, rows):
    return Table(
        table_id,
        rows=deque(TableRow([TableCell(v) for v in row]) for row in rows),
        columns=list(columns),
    )


def weapons(rows):
    return make_table(TableId.weapons, ["code", "name"], rows)


def test_arg_compat():
    assert arg_compat("Prob%1", 3) == "Prob3"
    assert arg_compat("plain", 3) == "plain"
    assert arg_compat("%1-%1", "x") == "x-%1"


def test_column_aliases():
    table = make_table(TableId.itemtypes, ["Code", "MaxSockets3"], [])
    view = TableView(table)
    assert view.ind("MaxSock40") == view.ind("MaxSockets3") == 1
    assert view.has_column("MaxSock40")
    assert view.ind("Missing") is None


def test_aliases_only_for_their_table():
    table = make_table(TableId.armor, ["code", "MaxSockets3"], [])
    view = TableView(table)
    assert not view.has_column("MaxSock40")


def test_row_access_by_name_and_index():
    view = TableView(weapons([["axe", "Axe"]]))
    row = view[0]
    assert row["name"] == "Axe"
    assert row[0] == "axe"
    assert row.has_column("code")
    assert not row.has_column("price")
    with pytest.raises(KeyError):
        row["price"]


def test_to_values_and_set_values_round_trip():
    view = TableView(weapons([["axe", "Axe"]]))
    values = view[0].to_values()
    assert values == {"code": "axe", "name": "Axe"}
    view[0].set_values({"name": "Great Axe"})
    assert view[0].to_values() == {"code": "axe", "name": "Great Axe"}


def test_create_row_index_and_keys():
    view = TableView(weapons([["axe", "Axe"], ["bow", "Bow"]]))
    assert view.create_row_index()
    assert view[1].make_key() == "bow"
    assert view.ind_pk("bow") == 1
    assert view.ind_pk("none") is None


def test_create_row_index_without_key():
    view = TableView(make_table(TableId.actinfo, ["act"], [["1"]]))
    assert not view.create_row_index()


def test_merge_updates_and_appends():
    target = TableView(weapons([["axe", "Axe"], ["bow", "Bow"]]))
    source = TableView(weapons([["bow", "Long Bow"], ["cbw", "Crossbow"]]), read_only=True)
    target.create_row_index()
    target.merge(source, True, True)
    assert [row.to_values() for row in target] == [
        {"code": "axe", "name": "Axe"},
        {"code": "bow", "name": "Long Bow"},
        {"code": "cbw", "name": "Crossbow"},
    ]
    assert target.row_count() == len(target.table.rows) == len(target)


def test_merge_without_actions_keeps_target():
    target = TableView(weapons([["axe", "Axe"], ["bow", "Bow"]]))
    source = TableView(weapons([["bow", "Long Bow"], ["cbw", "Crossbow"]]))
    target.create_row_index()
    before = [row.to_values() for row in target]
    target.merge(source, False, False)
    assert [row.to_values() for row in target] == before


def test_concat_appends_all_rows():
    target = TableView(weapons([["axe", "Axe"]]))
    source = TableView(weapons([["axe", "Axe"], ["bow", "Bow"]]))
    target.concat(source)
    assert target.row_count() == 1 + source.row_count()
    assert [row["code"].text for row in target] == ["axe", "axe", "bow"]


def test_mark_modified_flag():
    table = weapons([])
    TableView(table)
    assert not table.modified
    TableView(table, mark_modified=True)
    assert table.modified


def test_clear_marks_modified():
    table = weapons([["axe", "Axe"]])
    view = TableView(table)
    view.clear()
    assert view.row_count() == 0
    assert len(view) == 0
    assert table.modified


def test_read_only_view_rejects_writes():
    table = weapons([["axe", "Axe"]])
    view = TableView(table, read_only=True)
    with pytest.raises(RuntimeError):
        view.append_row({"code": "bow"})
    with pytest.raises(RuntimeError):
        view.clear()
    with pytest.raises(RuntimeError):
        view.mark_modified()
    assert view.row_count() == 1
    assert not table.modified


def test_append_row_unknown_column():
    view = TableView(weapons([]))
    with pytest.raises(KeyError):
        view.append_row({"price": "10"})


def test_apply_int_transform_skips_empty_and_missing():
    table = make_table(TableId.misc, ["code", "level", "cost"], [["a", "10", "4"], ["b", "", "7"]])
    view = TableView(table)
    view.apply_int_transform(["level", "missing"], lambda v: v * 2)
    assert view[0]["level"] == "20"
    assert view[1]["level"] == ""
    assert view[0]["cost"] == "4"
    view.apply_int_transform("cost", lambda v: v + 1)
    assert [row["cost"].text for row in view] == ["5", "8"]


def test_row_apply_int_transform_by_index():
    view = TableView(make_table(TableId.misc, ["code", "level"], [["a", "3"]]))
    view[0].apply_int_transform(1, lambda v: -v)
    view[0].apply_int_transform("nothing", lambda v: 0)
    assert view[0]["level"].to_int() == -3


def test_columns_desc_ranges():
    desc = ColumnsDesc("PCode%1a", "PParam%1a", "PMin%1a", "PMax%1a", 5, 2)
    assert desc.start == 2
    assert len(desc.cols) == 4
    assert desc.cols[0].code == "PCode2a"
    assert desc.cols[-1].max == "PMax5a"
    assert len(DESC_UNIQUES[0].cols) == 12
    assert DESC_SETS[2].cols[0].par == "FParam1"


def make_tc_view(values):
    row = [values.get(col, "") for col in TC_COLUMNS]
    return TableView(make_table(TableId.treasureclassex, TC_COLUMNS, [row]))


def test_drop_set_read():
    view = make_tc_view(
        {"NoDrop": "100", "Prob1": "5", "Item1": "gld", "Prob2": "3", "Item2": "hp1", "Item3": "x"}
    )
    drops = DropSet()
    drops.read_row(view[0])
    assert drops.no_drop == 100
    assert [(item.tc.text, item.prob) for item in drops.items] == [("gld", 5), ("hp1", 3)]
    assert drops.drop_something_prob() == 5 + 3


def test_drop_set_write_round_trip():
    view = make_tc_view({"NoDrop": "9", "Prob1": "1", "Item1": "old", "Prob4": "2", "Item4": "z"})
    drops = DropSet(0, [DropItem(TableCell("gld"), 7), DropItem(TableCell("rin"), 2)])
    drops.write_row(view[0])
    row = view[0]
    assert row["NoDrop"] == ""
    assert row["Item4"] == ""
    assert row["Prob4"] == ""
    reread = DropSet()
    reread.read_row(row)
    assert reread == drops


def test_drop_set_empty_probability():
    assert DropSet().drop_something_prob() == 0
    view = make_tc_view({"NoDrop": "15"})
    drops = DropSet()
    drops.read_row(view[0])
    assert drops.items == []
    drops.write_row(view[0])
    assert view[0]["NoDrop"] == "15"