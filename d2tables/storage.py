"""Reading and writing game data from folders, with a cache for input storages."""

from __future__ import annotations

import json
import shutil
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

_TABLE_SUBFOLDER = "data/global/excel/"
_TABLE_SUBFOLDER_BACK = "data\\global\\excel\\"


class StorageType(Enum):
    """Kinds of data storage."""

    D2_LEGACY_INTERNAL = "d2legacy_internal"
    D2_RESURRECTED_INTERNAL = "d2resurrected_internal"
    D2_RESURRECTED_MOD_FOLDER = "d2resurrected_mod_folder"
    CSV_FOLDER = "csv_folder"


class StorageError(Exception):
    """Raised when data cannot be read from or written to a storage."""


def table_relative_path(table_id: str, backslash: bool) -> str:
    """Return the path of a table file inside game data."""
    base = _TABLE_SUBFOLDER_BACK if backslash else _TABLE_SUBFOLDER
    return f"{base}{table_id}.txt"


@dataclass
class StoredTable:
    data: bytes
    id: str


@dataclass
class StoredMemoryFile:
    data: bytes
    rel_path: str


@dataclass
class StoredFileRef:
    abs_src: Path
    rel_path: str


@dataclass
class StoredData:
    """Tables, in-memory files and files referenced by path."""

    tables: list[StoredTable] = field(default_factory=list)
    in_memory_files: list[StoredMemoryFile] = field(default_factory=list)
    ref_files: list[StoredFileRef] = field(default_factory=list)


class InputStorage(ABC):
    @abstractmethod
    def read_data(self, filenames: Iterable[str]) -> StoredData:
        """Read all tables, loading ``filenames`` into memory."""


class OutputStorage(ABC):
    @abstractmethod
    def prepare_for_write(self) -> None:
        """Clean up and create the output layout."""

    @abstractmethod
    def write_data(self, data: StoredData) -> None:
        """Write everything in ``data``."""


def _read_bytes(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as exc:
        raise StorageError(f"failed to read: {path}") from exc


def _write_bytes(path: Path, data: bytes) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
    except OSError as exc:
        raise StorageError(f"failed to write to: {path}") from exc


class FolderStorage(InputStorage, OutputStorage):
    """A plain folder of table files, or a mod folder inside a game installation."""

    def __init__(self, root: str | Path, storage_type: StorageType, mod_name: str) -> None:
        self.storage_type = storage_type
        self.mod_name = mod_name
        root = Path(root)
        if storage_type is StorageType.D2_RESURRECTED_MOD_FOLDER:
            root = root / "mods" / mod_name / f"{mod_name}.mpq"
        self.root = root

    def read_data(self, filenames: Iterable[str]) -> StoredData:
        if not self.root.is_dir():
            raise StorageError(f"not a directory: {self.root}")
        wanted = set(filenames)
        result = StoredData()
        for path in sorted(self.root.rglob("*")):
            if not path.is_file():
                continue
            rel_path = path.relative_to(self.root).as_posix()
            is_table_dir = path.parent.name == "excel" or path.parent == self.root
            if path.suffix == ".txt" and is_table_dir:
                result.tables.append(StoredTable(_read_bytes(path), path.stem.lower()))
            elif rel_path in wanted:
                result.in_memory_files.append(StoredMemoryFile(_read_bytes(path), rel_path))
            else:
                result.ref_files.append(StoredFileRef(path, rel_path))
        return result

    def prepare_for_write(self) -> None:
        data_dir = self.root / "data"
        if data_dir.exists():
            shutil.rmtree(data_dir, ignore_errors=True)
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(f"failed to create: {self.root}") from exc

        if self.storage_type is StorageType.D2_RESURRECTED_MOD_FOLDER:
            json_path = self.root / "modinfo.json"
            if json_path.exists():
                json_path.unlink()
            modinfo = {"name": self.mod_name, "savepath": f"{self.mod_name}/"}
            _write_bytes(json_path, json.dumps(modinfo, indent=4).encode("utf-8"))

        if self.storage_type is not StorageType.CSV_FOLDER:
            excel_root = self.root / _TABLE_SUBFOLDER
            try:
                excel_root.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise StorageError(f"failed to create: {excel_root}") from exc

    def write_data(self, data: StoredData) -> None:
        for table in data.tables:
            if self.storage_type is StorageType.CSV_FOLDER:
                rel_path = f"{table.id}.txt"
            else:
                rel_path = table_relative_path(table.id, False)
            _write_bytes(self.root / rel_path, table.data)
        for memory_file in data.in_memory_files:
            _write_bytes(self.root / memory_file.rel_path, memory_file.data)
        for ref in data.ref_files:
            dest = self.root / ref.rel_path
            try:
                dest.parent.mkdir(parents=True, exist_ok=True)
                shutil.copyfile(ref.abs_src, dest)
            except OSError as exc:
                raise StorageError(f"failed to copy file: {ref.abs_src} -> {dest}") from exc


StorageOpener = Callable[[str], InputStorage]


class StorageCache:
    """Loads from an input storage, reusing the last result for identical requests."""

    def __init__(self, openers: Mapping[StorageType, StorageOpener] | None = None) -> None:
        self._openers = dict(openers or {})
        self._prev: tuple[StorageType, str, frozenset[str]] | None = None
        self._cache = StoredData()

    def load(
        self, storage_type: StorageType, root: str, in_memory_files: Iterable[str] = ()
    ) -> StoredData:
        context = (storage_type, root, frozenset(in_memory_files))
        if context == self._prev:
            return self._cache
        opener = self._openers.get(storage_type)
        if opener is None:
            raise StorageError(f"no input storage for {storage_type.name}")
        self._cache = opener(root).read_data(context[2])
        self._prev = context
        return self._cache