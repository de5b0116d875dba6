"""Session-scoped flash state.

The flash passes messages from one request to the very next one. Anything
written with ``store[key] = value`` is visible for the rest of the current
request and the whole of the next one, then it is gone:

    store['notice'] = "Post created"      # survives one sweep
    store.now['alert'] = "Invalid form"   # gone at the next sweep
    store.keep('notice')                  # one more cycle for 'notice'
    store.discard()                       # drop everything at the next sweep

Each key carries a ``used`` marker next to its value. ``sweep`` runs once at the
end of every request: used keys are deleted, unused keys become used.
"""
import logging
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional

logger = logging.getLogger(__name__)


class KeyState(str, Enum):
    """Retention state of a single flash key, derived from entries/used."""
    FRESH = 'fresh'
    PENDING_DELETE = 'pending_delete'
    ABSENT = 'absent'


class FlashNow:
    """Current-request view of a FlashStore.

    Values written here are readable through the parent store for the rest of
    the request and are removed by its next sweep.
    """

    def __init__(self, flash: 'FlashStore'):
        self._flash = flash

    def __setitem__(self, key: str, value: Any):
        self._flash.set(key, value)
        self._flash.discard(key)
        self._flash._now_keys.add(key)

    def __getitem__(self, key: str) -> Any:
        return self._flash.get(key)

    def get(self, key: str, default: Any = None) -> Any:
        return self._flash.get(key, default)


class FlashStore:
    """Flash entries plus a per-key "used" marker.

    A store instance represents one request cycle. It is loaded from the
    session when the request starts and persisted after ``sweep`` when it
    ends; see ``flashstate.services.flash_lifecycle``.
    """

    def __init__(self, mapping: Optional[Dict[str, Any]] = None):
        self._entries: Dict[str, Any] = {}
        self._used: Dict[str, bool] = {}
        # Keys written through `now` this cycle; keep() of everything skips them
        self._now_keys = set()
        self._swept = False
        if mapping:
            for key, value in mapping.items():
                self.set(key, value)

    # Reads

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value for ``key`` or ``default``; never marks usage."""
        return self._entries.get(key, default)

    def __getitem__(self, key: str) -> Any:
        # Missing keys read as None, like an unset notice in a template
        return self._entries.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    def __bool__(self) -> bool:
        return bool(self._entries)

    def keys(self) -> List[str]:
        return list(self._entries)

    def items(self) -> List[tuple]:
        return list(self._entries.items())

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._entries)

    def state(self, key: str) -> KeyState:
        """Retention state of ``key`` as of now."""
        if key not in self._entries:
            return KeyState.ABSENT
        if self._used.get(key, False):
            return KeyState.PENDING_DELETE
        return KeyState.FRESH

    # Writes

    def set(self, key: str, value: Any):
        """Store ``value`` so it survives the next sweep."""
        if key is None:
            raise TypeError("Flash keys cannot be None")
        self._entries[key] = value
        self._used[key] = False
        self._now_keys.discard(key)

    def __setitem__(self, key: str, value: Any):
        self.set(key, value)

    def update(self, mapping: Optional[Dict[str, Any]] = None, **kwargs):
        """Merge a mapping into the flash.

        Merged keys are marked used first, so a wholesale merge never extends
        the life of what was there before: the merged values are visible for
        the current request only.
        """
        incoming = dict(mapping or {}, **kwargs)
        for key, value in incoming.items():
            if key is None:
                raise TypeError("Flash keys cannot be None")
            self._entries[key] = value
            self._used[key] = True

    @property
    def now(self) -> FlashNow:
        """Writes through this view are not carried to the next request."""
        return FlashNow(self)

    def pop(self, key: str, default: Any = None) -> Any:
        self._used.pop(key, None)
        self._now_keys.discard(key)
        return self._entries.pop(key, default)

    def __delitem__(self, key: str):
        self.pop(key)

    def clear(self):
        self._entries.clear()
        self._used.clear()
        self._now_keys.clear()

    def replace(self, mapping: Optional[Dict[str, Any]] = None):
        """Drop all entries and usage markers and start over from ``mapping``."""
        self.clear()
        for key, value in (mapping or {}).items():
            self.set(key, value)

    # Retention

    def keep(self, key: Optional[str] = None):
        """Keep one entry, or the entire flash, for one more request.

            store.keep()            # keep everything
            store.keep('notice')    # keep only the notice

        Keeping everything leaves values written through ``now`` alone; name
        such a key explicitly to keep it.
        """
        self._use(key, False)

    def discard(self, key: Optional[str] = None):
        """Drop one entry, or the entire flash, at the end of this request.

        The value stays readable until then.
        """
        self._use(key, True)

    def sweep(self):
        """Delete used entries and mark the rest as used.

        Called once by the request lifecycle; further calls on the same
        instance do nothing.
        """
        if self._swept:
            logger.debug("Flash already swept for this request, skipping")
            return
        self._swept = True

        removed = []
        for key in list(self._entries):
            if self._used.get(key, False):
                del self._entries[key]
                self._used.pop(key, None)
                removed.append(key)
            else:
                self._used[key] = True

        self._now_keys.clear()
        if removed:
            logger.debug(f"Swept flash keys: {removed}")

    @property
    def swept(self) -> bool:
        return self._swept

    def _use(self, key: Optional[str], used: bool):
        if key is None:
            for existing in self._entries:
                if not used and existing in self._now_keys:
                    continue
                self._used[existing] = used
        elif key in self._entries:
            self._used[key] = used

    # Persistence

    def to_session(self) -> List[list]:
        """Serializable form: ``[key, value, used]`` triples in order."""
        return [[key, value, self._used.get(key, False)] for key, value in self._entries.items()]

    @classmethod
    def from_session(cls, data: Any) -> 'FlashStore':
        """Rebuild a store persisted with ``to_session``.

        Anything unreadable yields an empty store; a broken flash must not
        break the request that loads it.
        """
        store = cls()
        if not data:
            return store

        if not isinstance(data, (list, tuple)):
            logger.warning(f"Ignoring malformed flash data of type {type(data).__name__}")
            return store

        for record in data:
            if not isinstance(record, (list, tuple)) or len(record) != 3:
                logger.warning(f"Ignoring malformed flash data: unexpected record {record!r}")
                return cls()
            key, value, used = record
            if not isinstance(key, str):
                logger.warning(f"Ignoring malformed flash data: invalid key {key!r}")
                return cls()
            store._entries[key] = value
            store._used[key] = bool(used)
        return store

    def __repr__(self):
        states = {key: self.state(key).value for key in self._entries}
        return f"FlashStore({self._entries!r}, states={states!r})"
