# json_hash.py
# Open-addressing hash table backing JSON objects.
#
# =============================================================================
#  HASH TABLE: FIXED-STRIDE OPEN ADDRESSING
# =============================================================================
#
# Every entry lives directly in one slot list. A collision moves the probe
# forward by a fixed stride of 17 slots, wrapping around the end. Capacity
# starts at 32 and only ever doubles, so it stays a power of two; an odd
# stride is coprime with any power of two, which means a probe walks through
# every slot exactly once before it repeats.
#
# The table grows before an insert that would take it past half full, so a
# probe always reaches an empty slot quickly.
#
# Entries are never removed one at a time, so empty slots are always
# "never used" and no tombstones are needed. `drain` empties the whole table
# at once.
# =============================================================================

from typing import Callable, Generic, Hashable, Iterator, List, NamedTuple, Optional, TypeVar

# ---------------------------------------------------------------------------
# TUNABLES
# ---------------------------------------------------------------------------
INITIAL_CAPACITY = 32
PROBE_STRIDE     = 17
LOAD_FACTOR      = 0.5

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class KeyNotFound(KeyError):
    """Lookup of a key the table does not hold."""


class Entry(NamedTuple):
    """Immutable key/value pair stored in one slot."""
    key: Hashable
    value: object


class HashTable(Generic[K, V]):
    """
    Associative store with fixed-stride probing and load-factor resizing.

    `hash_function` defaults to the built-in `hash`; tests pass their own to
    pin keys to particular slots.
    """
    def __init__(self, hash_function: Callable[[K], int] = hash):
        self._hash = hash_function
        self._capacity = INITIAL_CAPACITY
        self._slots: List[Optional[Entry]] = [None] * self._capacity
        self._count = 0

    # -----------------------------------------------------------------------
    # SIZE
    # -----------------------------------------------------------------------
    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return self._count

    # -----------------------------------------------------------------------
    # PROBING
    # -----------------------------------------------------------------------
    def home_slot(self, key: K) -> int:
        return abs(self._hash(key)) % self._capacity

    def probe_sequence(self, key: K) -> Iterator[int]:
        """Slot indices visited for `key`, one full cycle of the table."""
        index = self.home_slot(key)
        for _ in range(self._capacity):
            yield index
            index = (index + PROBE_STRIDE) % self._capacity

    def find(self, key: K) -> int:
        """
        Index of the slot holding `key`, or of the empty slot where it would
        go. The load factor keeps at least half the slots empty, so the probe
        stops well before it would cycle.
        """
        for index in self.probe_sequence(key):
            entry = self._slots[index]
            if entry is None or entry.key == key:
                return index
        raise RuntimeError(f"hash table full at capacity {self._capacity}")

    # -----------------------------------------------------------------------
    # MUTATION
    # -----------------------------------------------------------------------
    def set(self, key: K, value: V) -> None:
        """Store `value` under `key`; an existing key is overwritten."""
        index = self.find(key)
        if self._slots[index] is None:
            if self._count + 1 > self._capacity * LOAD_FACTOR:
                self._expand()
                index = self.find(key)
            self._count += 1
        self._slots[index] = Entry(key, value)

    def _expand(self) -> None:
        old = self._slots
        self._capacity *= 2
        self._slots = [None] * self._capacity
        # Rehash straight into the new slots: the doubled table is at most a
        # quarter full, so placing entries must not re-enter the resize check.
        for entry in old:
            if entry is not None:
                self._slots[self.find(entry.key)] = entry

    # -----------------------------------------------------------------------
    # LOOKUP
    # -----------------------------------------------------------------------
    def get(self, key: K) -> V:
        entry = self._slots[self.find(key)]
        if entry is None:
            raise KeyNotFound(key)
        return entry.value

    def __contains__(self, key: object) -> bool:
        return self._slots[self.find(key)] is not None

    # -----------------------------------------------------------------------
    # ITERATION
    # -----------------------------------------------------------------------
    def iterate(self) -> List[Entry]:
        """Snapshot of every entry in increasing slot order; the table is untouched."""
        return [entry for entry in self._slots if entry is not None]

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.iterate())

    def drain(self) -> Iterator[Entry]:
        """Yield every entry and leave the table empty at its current capacity."""
        entries = self.iterate()
        self._slots = [None] * self._capacity
        self._count = 0
        return iter(entries)

    def __repr__(self) -> str:
        return f"HashTable(size={self._count}, capacity={self._capacity})"
