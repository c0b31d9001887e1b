"""Game data tables, mod folder storage, logging and configuration helpers for Diablo II mods."""

__version__ = "0.1.0"
__all__ = [
    "tables",
    "table_view",
    "log_backends",
    "storage",
    "start_keys",
    "slider",
    "page_info",
    "history",
]