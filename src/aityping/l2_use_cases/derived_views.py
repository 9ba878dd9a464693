"""Read-only projections of the ConfigStore for presentation layers."""

from __future__ import annotations

from collections.abc import Callable
from typing import Generic, TypeVar

from aityping.l1_entities.config import AppConfig
from aityping.l2_use_cases.config_store import ConfigStore, StoreSnapshot

T = TypeVar('T')


class DerivedView(Generic[T]):
    """A selector over store snapshots that notifies only when its value changes."""

    def __init__(self, store: ConfigStore, selector: Callable[[StoreSnapshot], T]) -> None:
        self._store = store
        self._selector = selector

    @property
    def value(self) -> T:
        return self._selector(self._store.snapshot)

    def subscribe(self, listener: Callable[[T], None]) -> Callable[[], None]:
        """Call *listener* now with the current value, then on every change."""
        last = self.value
        listener(last)

        def on_snapshot(snapshot: StoreSnapshot) -> None:
            nonlocal last
            value = self._selector(snapshot)
            if value != last:
                last = value
                listener(value)

        return self._store.subscribe(on_snapshot)


def config_view(store: ConfigStore) -> DerivedView[AppConfig | None]:
    return DerivedView(store, lambda s: s.config)


def loading_view(store: ConfigStore) -> DerivedView[bool]:
    return DerivedView(store, lambda s: s.is_loading)


def error_view(store: ConfigStore) -> DerivedView[str | None]:
    return DerivedView(store, lambda s: s.error)


def enabled_view(store: ConfigStore) -> DerivedView[bool]:
    return DerivedView(store, lambda s: s.is_enabled)
