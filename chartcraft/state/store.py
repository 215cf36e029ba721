"""
Application State Store - the single owner of chart data and chart options.

Consumers receive the store explicitly (no module-level singleton) and read
immutable snapshots; every change goes through the mutation methods below,
which persist the new state and then notify subscribers.

Persistence is best-effort: storage failures are logged and counted, never
raised. On load, each of the two keys is restored independently and a
corrupt value falls back to that field's built-in default.
"""

from __future__ import annotations

import json
import uuid
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from chartcraft.charts.constants import default_chart_options, seed_data_items
from chartcraft.charts.models import (
    ChartOptions,
    ChartOptionsPatch,
    DataItem,
    check_numeric_value,
)
from chartcraft.config import STORAGE_KEY_DATA, STORAGE_KEY_OPTIONS
from chartcraft.errors import INVALID_ITEM_MESSAGE, PersistenceError, ValidationError
from chartcraft.infrastructure.storage import KeyValueStorage
from chartcraft.observability.logging import get_logger
from chartcraft.observability.telemetry import counter

logger = get_logger(__name__)

_ITEMS_ADAPTER = TypeAdapter(list[DataItem])

Listener = Callable[["ChartStateStore"], None]


def _check_unique_ids(items: Iterable[DataItem]) -> None:
    seen: set[str] = set()
    for item in items:
        if item.id in seen:
            raise ValueError(f"duplicate DataItem id: {item.id!r}")
        seen.add(item.id)


def _decode_items(raw: str) -> tuple[DataItem, ...]:
    items = tuple(_ITEMS_ADAPTER.validate_json(raw))
    _check_unique_ids(items)
    return items


def _decode_options(raw: str) -> ChartOptions:
    return ChartOptions.model_validate_json(raw)


class ChartStateStore:
    """Owns ``(data_items, chart_options)`` and their durable copy."""

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        seed_items: Iterable[DataItem] | None = None,
        default_options: ChartOptions | None = None,
    ) -> None:
        self._storage = storage
        self._default_items: tuple[DataItem, ...] = tuple(
            seed_items if seed_items is not None else seed_data_items()
        )
        _check_unique_ids(self._default_items)
        self._default_options = default_options or default_chart_options()

        self._items = self._default_items
        self._options = self._default_options
        self._listeners: list[Listener] = []

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def data_items(self) -> tuple[DataItem, ...]:
        return self._items

    @property
    def chart_options(self) -> ChartOptions:
        return self._options

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def replace_data(self, items: Iterable[DataItem]) -> None:
        """
        Replace the whole data sequence, keeping the given order.

        Raises:
            ValueError: If two items share an id (state is left unchanged).
        """
        new_items = tuple(items)
        _check_unique_ids(new_items)
        self._items = new_items
        self._changed()

    def replace_options(self, patch: ChartOptionsPatch | Mapping[str, Any]) -> None:
        """Merge ``patch`` over the current options, field by field.

        A mapping is validated into a ChartOptionsPatch first, so unknown
        chart types or malformed colors are rejected before any change.
        """
        if not isinstance(patch, ChartOptionsPatch):
            patch = ChartOptionsPatch.model_validate(patch)
        self._options = patch.apply_to(self._options)
        self._changed()

    def add_item(self, name: str, value: int | float | str) -> DataItem:
        """
        Append a manually entered data point with a generated id.

        ``value`` may be the raw text of a form field.

        Raises:
            ValidationError: If the trimmed name is empty or the value is not
                a finite number within the magnitude limit. Nothing is changed
                in that case.
        """
        clean_name = name.strip() if isinstance(name, str) else ""
        number = self._coerce_manual_value(value)
        if not clean_name or number is None:
            raise ValidationError(
                f"Invalid manual item name={name!r} value={value!r}",
                user_message=INVALID_ITEM_MESSAGE,
            )

        item = DataItem(id=str(uuid.uuid4()), name=clean_name, value=number)
        self._items = (*self._items, item)
        self._changed()
        return item

    def remove_item(self, item_id: str) -> bool:
        """Remove the item with ``item_id``. Returns False if there was none."""
        remaining = tuple(item for item in self._items if item.id != item_id)
        if len(remaining) == len(self._items):
            return False
        self._items = remaining
        self._changed()
        return True

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener(store)`` after every change. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def load(self) -> None:
        """
        Restore state from storage; never raises.

        Each key is optional and independent: a missing key keeps the current
        value, a corrupt one resets that field to its default.
        """
        items = self._load_key(STORAGE_KEY_DATA, _decode_items, self._items, self._default_items)
        options = self._load_key(
            STORAGE_KEY_OPTIONS, _decode_options, self._options, self._default_options
        )

        self._items = items
        self._options = options
        self._notify()

    def persist(self) -> None:
        """Write both keys independently; failures are logged, never raised."""
        payloads = {
            STORAGE_KEY_DATA: _ITEMS_ADAPTER.dump_json(list(self._items)).decode("utf-8"),
            STORAGE_KEY_OPTIONS: self._options.model_dump_json(),
        }
        for key, payload in payloads.items():
            try:
                self._storage.set(key, payload)
            except PersistenceError as e:
                counter("store.persist_error")
                logger.error("Failed to save %s to storage: %s", key, e)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _load_key(
        self, key: str, decode: Callable[[str], Any], current: Any, default: Any
    ) -> Any:
        try:
            raw = self._storage.get(key)
        except PersistenceError as e:
            counter("store.load_error")
            logger.error("Failed to read %s from storage, using default: %s", key, e)
            return default

        if raw is None:
            return current

        try:
            return decode(raw)
        except (json.JSONDecodeError, PydanticValidationError, ValueError) as e:
            counter("store.load_corrupt")
            logger.error("Stored %s is corrupt, using default: %s", key, e)
            return default

    @staticmethod
    def _coerce_manual_value(value: int | float | str) -> int | float | None:
        if isinstance(value, bool):
            return None
        if isinstance(value, str):
            try:
                value = float(value.strip())
            except ValueError:
                return None
        try:
            return check_numeric_value(value)
        except ValueError:
            return None

    def _changed(self) -> None:
        self.persist()
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
