"""ConfigStore — single writable owner of the application configuration.

Mediates load / validate / save against the backend and publishes immutable
snapshots to subscribers. Every backend round-trip takes a sequence number;
a completion only changes shared state if no later request has landed first.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace

from aityping.l1_entities.config import AppConfig
from aityping.l1_entities.hotkey import Hotkey, Slot
from aityping.l2_use_cases.ports.config_backend import ConfigBackend

log = logging.getLogger('ait.store')

_UNSET = object()


@dataclass(frozen=True)
class StoreSnapshot:
    """What presentation layers may see of the store at one instant."""

    config: AppConfig | None = None
    is_loading: bool = False
    error: str | None = None
    is_enabled: bool = True


@dataclass(frozen=True)
class SaveResult:
    error: str = ''

    @property
    def ok(self) -> bool:
        return not self.error


SnapshotListener = Callable[[StoreSnapshot], None]


class ConfigStore:
    def __init__(self, backend: ConfigBackend, default_config: AppConfig) -> None:
        self._backend = backend
        self._default = default_config
        self._snapshot = StoreSnapshot()
        self._known_good: AppConfig | None = None
        self._listeners: list[SnapshotListener] = []
        self._seq = 0
        self._landed_seq = 0
        self._in_flight = 0

    # --- read side ---

    @property
    def snapshot(self) -> StoreSnapshot:
        return self._snapshot

    @property
    def config(self) -> AppConfig | None:
        return self._snapshot.config

    @property
    def last_known_good(self) -> AppConfig | None:
        return self._known_good

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register *listener* for every snapshot change. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # --- backend round-trips ---

    async def load(self) -> AppConfig:
        """Fetch the persisted config; fall back to the built-in default on any failure."""
        seq = self._begin()
        try:
            config = await self._backend.get_config()
        except Exception as e:
            log.warning('Failed to load config, using defaults: %s: %s', type(e).__name__, e)
            config = self._default
        finally:
            self._in_flight -= 1

        if self._lands(seq):
            self._known_good = config
            self._publish(config=config, error=None)
        else:
            self._publish()
        log.info('Config loaded (request #%d)', seq)
        return config

    async def save(self, candidate: AppConfig) -> SaveResult:
        """Persist *candidate* in full; adopt it in memory only once the backend confirms."""
        seq = self._begin()
        err = ''
        try:
            await self._backend.save_config(candidate)
        except Exception as e:
            err = str(e) or type(e).__name__
            log.error('Failed to save config (request #%d): %s', seq, err, exc_info=True)
        finally:
            self._in_flight -= 1

        if err:
            if self._lands(seq):
                self._publish(error=err)
            else:
                self._publish()
            return SaveResult(error=err)

        if self._lands(seq):
            self._known_good = candidate
            self._publish(config=candidate, error=None)
        else:
            log.info('Save #%d superseded by #%d; in-memory config left as is', seq, self._landed_seq)
            self._publish()
        return SaveResult()

    async def switch_language(self, code: str) -> SaveResult:
        """Make *code* the translation target and persist it."""
        current = self._require_config()
        language = current.language.with_target(code)
        return await self.save(current.model_copy(update={'language': language}))

    async def set_enabled(self, enabled: bool) -> bool:
        try:
            await self._backend.set_enabled(enabled)
        except Exception as e:
            log.warning('Failed to set enabled=%s: %s: %s', enabled, type(e).__name__, e)
            return self._snapshot.is_enabled
        self._publish(is_enabled=enabled)
        return enabled

    async def refresh_enabled(self) -> bool:
        try:
            enabled = await self._backend.get_enabled()
        except Exception as e:
            log.warning('Failed to read enabled flag: %s: %s', type(e).__name__, e)
            return self._snapshot.is_enabled
        self._publish(is_enabled=enabled)
        return enabled

    # --- local, non-persisted edits ---

    def update_local(self, **fields) -> AppConfig | None:
        """Merge top-level AppConfig fields in memory for optimistic UI feedback.

        The merged result is validated as a whole. No-op before the first load.
        Raises ValueError for names that are not AppConfig fields.
        """
        unknown = sorted(set(fields) - set(AppConfig.model_fields))
        if unknown:
            raise ValueError(f'Unknown config field(s): {", ".join(unknown)}')
        current = self._snapshot.config
        if current is None:
            log.warning('update_local(%s) before config was loaded; ignored', ', '.join(fields))
            return None
        merged = AppConfig.model_validate({**dict(current), **fields})
        self._publish(config=merged)
        return merged

    def update_hotkey(self, slot: Slot, hotkey: Hotkey) -> AppConfig | None:
        current = self._snapshot.config
        if current is None:
            log.warning('update_hotkey(%s) before config was loaded; ignored', slot.value)
            return None
        return self.update_local(hotkey=current.hotkey.with_slot(slot, hotkey))

    def revert_local(self) -> AppConfig | None:
        """Drop optimistic edits and return to the last configuration the backend confirmed."""
        if self._known_good is not None:
            self._publish(config=self._known_good)
        return self._known_good

    def set_error(self, error: str | None) -> None:
        self._publish(error=error)

    # --- internals ---

    def _require_config(self) -> AppConfig:
        if self._snapshot.config is None:
            raise RuntimeError('Config has not been loaded yet')
        return self._snapshot.config

    def _begin(self) -> int:
        self._seq += 1
        self._in_flight += 1
        self._publish()
        return self._seq

    def _lands(self, seq: int) -> bool:
        if seq <= self._landed_seq:
            return False
        self._landed_seq = seq
        return True

    def _publish(self, *, config=_UNSET, error=_UNSET, is_enabled=_UNSET) -> None:
        changes: dict = {'is_loading': self._in_flight > 0}
        if config is not _UNSET:
            changes['config'] = config
        if error is not _UNSET:
            changes['error'] = error
        if is_enabled is not _UNSET:
            changes['is_enabled'] = is_enabled
        self._snapshot = replace(self._snapshot, **changes)
        for listener in list(self._listeners):
            listener(self._snapshot)
