from dataclasses import dataclass
from functools import partial
from typing import Any, Callable, Generic, Iterator, TypeVar

from .shared import printf, printf_err, show


K = TypeVar("K")
V = TypeVar("V")

HashFunction = Callable[[Any], int]

TABLE_MAX_LOAD = 0.75
TABLE_MIN_CAPACITY = 64

FNV_OFFSET_BASIS = 2166136261
FNV_PRIME = 16777619


_debug_trace_probing = False


def set_debug_trace_probing(b: bool):
    global _debug_trace_probing
    _debug_trace_probing = b


@dataclass(frozen=True)
class Empty:
    pass


@dataclass(frozen=True)
class Tombstone:
    pass


@dataclass
class Occupied(Generic[K, V]):
    key: K
    value: V


Slot = Empty | Tombstone | Occupied


def format_slot(entry: Slot) -> str:
    match entry:
        case Empty():
            return "<empty>"
        case Tombstone():
            return "<tombstone>"
        case Occupied(key=key, value=value):
            return "{0} => {1}".format(show(key), show(value))


# unreachable unless the slot bookkeeping is corrupted
class ProbeExhaustedError(RuntimeError):
    def __init__(self, key: Any, capacity: int) -> None:
        super().__init__(
            "probe for {0} visited all {1} slots".format(show(key), capacity)
        )
        self.key = key
        self.capacity = capacity


class ValueRef(Generic[V]):
    # writes go to the stored entry; the key is not reachable from here
    __slots__ = ("_entry",)

    def __init__(self, entry: Occupied) -> None:
        self._entry = entry

    @property
    def value(self) -> V:
        return self._entry.value

    @value.setter
    def value(self, value: V):
        self._entry.value = value


def hash_string(key: str, seed: int = 0) -> int:
    hash = (FNV_OFFSET_BASIS ^ seed) & 0xFFFFFFFF
    for i in range(len(key)):
        hash ^= ord(key[i])
        hash = (hash * FNV_PRIME) & 0xFFFFFFFF
    return hash


def hash_bytes(key: bytes, seed: int = 0) -> int:
    hash = (FNV_OFFSET_BASIS ^ seed) & 0xFFFFFFFF
    for byte in key:
        hash ^= byte
        hash = (hash * FNV_PRIME) & 0xFFFFFFFF
    return hash


def default_hash(key: Any, seed: int = 0) -> int:
    # str and bytes must not depend on PYTHONHASHSEED
    match key:
        case str():
            return hash_string(key, seed)
        case bytes():
            return hash_bytes(key, seed)
        case _:
            return hash(key) if seed == 0 else hash((seed, key))


def seeded_hash(seed: int) -> HashFunction:
    return partial(default_hash, seed=seed)


@dataclass(eq=False)
class Table(Generic[K, V]):
    """Open addressing hash table with linear probing and tombstones."""

    count: int
    vacant: int
    tombstones: int
    entries: list[Slot]
    hash_function: HashFunction

    def __init__(self, hash_function: HashFunction = default_hash) -> None:
        self.hash_function = hash_function
        self.clear()

    def __len__(self) -> int:
        return self.count

    def __contains__(self, key: K) -> bool:
        return self.contains_key(key)

    def __iter__(self) -> Iterator[tuple[K, V]]:
        return self.iter()

    @property
    def capacity(self) -> int:
        return len(self.entries)

    def load_factor(self) -> float:
        if not self.entries:
            return 1.0
        return (self.count + self.tombstones) / len(self.entries)

    def insert(self, key: K, value: V) -> V | None:
        if self.load_factor() >= TABLE_MAX_LOAD:
            self._grow()

        index = self._find_slot(self.entries, key)
        match self.entries[index]:
            case Occupied() as entry:
                previous = entry.value
                entry.value = value
                return previous
            case Tombstone():
                self.tombstones -= 1
            case Empty():
                self.vacant -= 1

        self.entries[index] = Occupied(key, value)
        self.count += 1
        return None

    def get(self, key: K) -> V | None:
        entry = self._lookup(key)
        if entry is None:
            return None
        return entry.value

    def get_mut(self, key: K) -> "ValueRef[V] | None":
        entry = self._lookup(key)
        if entry is None:
            return None
        return ValueRef(entry)

    def contains_key(self, key: K) -> bool:
        return self._lookup(key) is not None

    def remove(self, key: K) -> V | None:
        if self.count == 0:
            return None

        index = self._find_slot(self.entries, key)
        entry = self.entries[index]
        if not isinstance(entry, Occupied):
            return None

        self.entries[index] = Tombstone()
        self.count -= 1
        self.tombstones += 1
        return entry.value

    def iter(self) -> Iterator[tuple[K, V]]:
        for entry in self.entries:
            if isinstance(entry, Occupied):
                yield entry.key, entry.value

    def add_all(self, from_t: "Table[K, V]"):
        for key, value in from_t.iter():
            self.insert(key, value)

    def clear(self):
        self.count = 0
        self.vacant = 0
        self.tombstones = 0
        self.entries = []

    def _lookup(self, key: K) -> Occupied[K, V] | None:
        if self.count == 0:
            return None

        entry = self.entries[self._find_slot(self.entries, key)]
        if isinstance(entry, Occupied):
            return entry
        return None

    def _grow(self):
        capacity = max(TABLE_MIN_CAPACITY, len(self.entries) * 2)
        if _debug_trace_probing:
            printf("grow {0} -> {1}\n", len(self.entries), capacity)

        # the old storage stays in place until every entry has a new home
        new_entries: list[Slot] = [Empty() for _ in range(capacity)]
        for entry in self.entries:
            if isinstance(entry, Occupied):
                new_entries[self._find_slot(new_entries, entry.key)] = entry

        self.entries = new_entries
        self.vacant = capacity - self.count
        self.tombstones = 0

    # index of the slot holding `key`, or of the slot an insert should use
    def _find_slot(self, entries: list[Slot], key: K) -> int:
        capacity = len(entries)
        index = self.hash_function(key) % capacity
        tombstone: int | None = None

        for _ in range(capacity):
            entry = entries[index]
            if _debug_trace_probing:
                printf("probe {0} [{1:4d}] {2}\n", show(key), index, format_slot(entry))

            match entry:
                case Empty():
                    return index if tombstone is None else tombstone
                case Tombstone():
                    if tombstone is None:
                        tombstone = index
                case Occupied(key=k) if k == key:
                    return index

            index = (index + 1) % capacity

        if tombstone is not None:
            return tombstone

        error = ProbeExhaustedError(key, capacity)
        if _debug_trace_probing:
            printf_err("{0}\n", error)
        raise error
