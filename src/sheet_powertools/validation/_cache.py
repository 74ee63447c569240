"""Per-spreadsheet memoized load of the config tab.

Loading is two-phase: the parsed entry is stored in ``loading`` state, the
``on_load`` hook (self-validation) runs against it, and only then is the entry
marked ``confirmed``. A failing hook discards the entry, so the next lookup
loads again from scratch.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional

from ..sheets import Row, Spreadsheet, Tab
from ..utils.log import get_logger
from ._schema import CONFIG_FIELDS, is_blank
from .parse import parse_rows

logger = get_logger("validation.cache")


class EntryState(str, Enum):
    """Lifecycle of a cache entry."""

    loading = "loading"
    confirmed = "confirmed"


@dataclass
class CacheEntry:
    """Config tab contents of one spreadsheet.

    Attributes:
        config_tab: Handle of the config tab, ``None`` when the spreadsheet has none
        raw_rows: Rows as read from the config tab
        records: Parsed schema records (``sheetName``, ``columnName``, ...)
        state: ``loading`` while self-validation runs, ``confirmed`` afterwards
    """

    config_tab: Optional[Tab]
    raw_rows: list[Row] = field(default_factory=list)
    records: list[dict[str, Any]] = field(default_factory=list)
    state: EntryState = EntryState.confirmed

    @property
    def has_config(self) -> bool:
        return self.config_tab is not None


OnLoad = Callable[[Spreadsheet, CacheEntry], None]


class SchemaCache:
    """Load and self-validate each spreadsheet's config tab at most once.

    Entries are keyed by ``Spreadsheet.id`` and never evicted; build one cache
    per run. ``get`` is safe to call from several threads: loading happens
    under a per-spreadsheet re-entrant lock, so a nested ``get`` from the
    ``on_load`` hook sees the entry being loaded instead of looping.
    """

    def __init__(self, config_tab_name: str = "config", on_load: OnLoad | None = None) -> None:
        self.config_tab_name = config_tab_name
        self.on_load = on_load
        self._entries: dict[str, CacheEntry] = {}
        self._locks: dict[str, threading.RLock] = {}
        self._guard = threading.Lock()

    def __contains__(self, spreadsheet_id: object) -> bool:
        return spreadsheet_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        """Forget every entry."""
        with self._guard:
            self._entries.clear()
            self._locks.clear()

    def _lock_for(self, key: str) -> threading.RLock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.RLock()
            return lock

    def get(self, spreadsheet: Spreadsheet) -> CacheEntry:
        key = spreadsheet.id
        entry = self._entries.get(key)
        if entry is not None and entry.state is EntryState.confirmed:
            return entry

        with self._lock_for(key):
            # Either another thread finished the load, or we are re-entering
            # from on_load and must see the loading entry.
            entry = self._entries.get(key)
            if entry is not None:
                return entry
            return self._load(spreadsheet, key)

    def _load(self, spreadsheet: Spreadsheet, key: str) -> CacheEntry:
        config_tab = spreadsheet.get_tab(self.config_tab_name)
        if config_tab is None:
            logger.info(
                'Skipping data type validation of "%s" because it does not contain a "%s" tab',
                spreadsheet.name,
                self.config_tab_name,
            )
            entry = CacheEntry(config_tab=None)
            self._entries[key] = entry
            return entry

        raw_rows = config_tab.read_rows(config_tab.max_rows, len(CONFIG_FIELDS))
        records = parse_rows(CONFIG_FIELDS, raw_rows)
        # Schema records end where the data does: at the first blank "Sheet name".
        for index, record in enumerate(records):
            if is_blank(record["sheetName"]):
                del records[index:]
                break
        entry = CacheEntry(
            config_tab=config_tab,
            raw_rows=raw_rows,
            records=records,
            state=EntryState.loading,
        )
        self._entries[key] = entry
        logger.debug(
            'Loaded %d schema records from "%s" of "%s"',
            len(records),
            self.config_tab_name,
            spreadsheet.name,
        )

        if self.on_load is not None:
            try:
                self.on_load(spreadsheet, entry)
            except Exception:
                del self._entries[key]
                raise

        entry.state = EntryState.confirmed
        return entry
