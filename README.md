# d2tables

Helpers for building Diablo II mods from the game's `.txt` data tables.
The package has no dependencies beyond the standard library.

## What is inside

- `d2tables.tables` – `Table`, `TableRow`, `TableCell` and the `TableId`
  enumeration of every known table, with `table_names()`,
  `table_id_string()` and `find_table_id()` (which returns `None` for an
  unknown name). A cell keeps its text in `TableCell.text`; `to_int()`
  parses a leading integer and yields 0 when there is none.
- `d2tables.table_view` – `TableView` and `RowView` for addressing cells by
  column name or position (with the built-in column aliases of `itemtypes`
  and `levels`), primary-key indexing via `create_row_index()`, `merge()`
  and `concat()` of tables, and `apply_int_transform()` over columns. A view
  created with `read_only=True` raises `RuntimeError` on any change.
  `ColumnsDesc` describes numbered code/param/min/max column groups (the
  `DESC_*` lists cover uniques, runewords, set items, gems, affixes and
  sets), and `DropSet` reads and writes the `NoDrop`, `Prob1..10` and
  `Item1..10` columns of a treasure-class row. `arg_compat()` fills the
  first `%1` in a template.
- `d2tables.storage` – `FolderStorage` reads and writes a plain folder of
  tables (`StorageType.CSV_FOLDER`) or a D2R mod folder
  (`StorageType.D2_RESURRECTED_MOD_FOLDER`, which also writes
  `modinfo.json`). `StoredData` is the exchange format; failures raise
  `StorageError`. `StorageCache` reuses the last result when the same
  storage type, root and in-memory file list are requested again; it opens
  storages through the opener functions you give it per `StorageType`.
- `d2tables.log_backends` – `LoggerBackend` formats messages with a
  five-character level label (`level_label()`), a timestamp and
  microsecond offsets from start and from the previous message;
  `ConsoleBackend` prints them to standard output or standard error.
- `d2tables.start_keys` – `add_start_keys()` puts a key into the first free
  starting item slot of every class in a `charstats` view; `generate()` does
  so only when the settings have `addKeys` set.
- `d2tables.slider` – `SliderScale` maps slider positions 0..1000 to
  percentages, linear below 100% and exponential above, with
  `exp_growth()` / `exp_growth_rev()`.
- `d2tables.page_info` – `parse_page_info()` turns a plugin description
  mapping into a `PageInfo`: localized title and help (falling back to
  `en_US`), `Preset` entries and per-control `ControlParams`.
- `d2tables.history` – `UndoHistory`, a bounded stack of configuration
  snapshots (50 by default), and the `load_app_settings()` /
  `save_app_setting()` helpers for the `langId` and `themeId` INI settings.

## Example

```python
from d2tables.tables import Table, TableId, TableRow, TableCell
from d2tables.table_view import TableView
from d2tables.start_keys import add_start_keys

table = Table(TableId.charstats, columns=["class", "item1", "item1count"])
table.rows.append(TableRow([TableCell("Amazon"), TableCell("jav"), TableCell("0")]))

view = TableView(table)
add_start_keys(view)
for row in view:
    print(row["class"].text, row["item1"].text, row["item1count"].text)
# Amazon key 1
```

Writing tables to a mod folder:

```python
from d2tables.storage import FolderStorage, StorageType, StoredData, StoredTable

out = FolderStorage("/path/to/game", StorageType.D2_RESURRECTED_MOD_FOLDER, "rando")
out.prepare_for_write()
out.write_data(StoredData(tables=[StoredTable(b"class\titem1\n", "charstats")]))
```

## What it does not do

- It does not read the game's own archives; `StorageCache` only works with
  opener functions you supply, and `FolderStorage` handles plain folders.
- It does not parse or serialize the tab-separated text of a table into a
  `Table`; `StoredTable.data` holds raw bytes.
- It has no command-line program and no graphical interface, and no log
  backend that writes to files.

## Installing

```
pip install .
```

Run the tests with `pip install .[test]` followed by `pytest`.