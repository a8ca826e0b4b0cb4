"""A chained hash table with pluggable hash and equality functions."""

from __future__ import annotations

import operator
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Optional

from .hashing import mix_hash

HashFn = Callable[[Any], int]
EqFn = Callable[[Any, Any], Any]
FreeFn = Callable[[Any], None]

_MASK32 = 0xFFFFFFFF

_PRIMES = (
    53, 97, 193, 389, 769, 1543, 3079,
    6151, 12289, 24593, 49157, 98317, 196613, 393241,
    786433, 1572869, 3145739, 6291469, 12582917, 25165843, 50331653,
    100663319, 201326611, 402653189, 805306457, 1610612741,
)

# Entry limits for each table size, for a maximum load factor of about 0.65.
_LOAD_LIMITS = (
    35, 64, 126, 253, 500, 1003, 2002, 3999, 7988,
    15986, 31953, 63907, 127799, 255607, 511182, 1022365, 2044731, 4089455,
    8178897, 16357798, 32715575, 65431158, 130862298, 261724573, 523449198, 1046898282,
)

_MAX_MIN_SIZE = 1 << 30


def _default_hash(key: Any) -> int:
    return hash(key) & _MASK32


@dataclass(slots=True)
class _Entry:
    key: Any
    value: Any
    hash: int


class HashTable:
    """Hash table with separate chaining and prime-sized bucket arrays.

    Duplicate keys are allowed on insert; lookups then find the most recently
    inserted entry in a chain, though that order flips when the table grows.
    """

    def __init__(
        self,
        hash_fn: Optional[HashFn] = None,
        eq_fn: Optional[EqFn] = None,
        min_size: int = 0,
        val_free_fn: Optional[FreeFn] = None,
        key_free_fn: Optional[FreeFn] = None,
    ) -> None:
        if min_size > _MAX_MIN_SIZE:
            raise ValueError(f"requested table size {min_size} is too large")

        prime_index = next(
            (i for i, prime in enumerate(_PRIMES) if prime > min_size),
            len(_PRIMES),
        )
        size = _PRIMES[prime_index] if prime_index < len(_PRIMES) else _PRIMES[0]
        # A request beyond every prime keeps the smallest table, as the
        # load-limit index then points past the end of the table list.
        self._prime_index = min(prime_index, len(_PRIMES) - 1)
        self._load_limit = _LOAD_LIMITS[self._prime_index]

        self._hash_fn: HashFn = hash_fn if hash_fn is not None else _default_hash
        self._eq_fn: EqFn = eq_fn if eq_fn is not None else operator.eq
        self._val_free_fn = val_free_fn
        self._key_free_fn = key_free_fn

        self._buckets: list[list[_Entry]] = [[] for _ in range(size)]
        self._count = 0

    @property
    def capacity(self) -> int:
        """Number of buckets in the table."""
        return len(self._buckets)

    def _hash(self, key: Any) -> int:
        return mix_hash(self._hash_fn(key) & _MASK32)

    def _expand(self) -> None:
        if self._prime_index == len(_PRIMES) - 1:
            return

        self._prime_index += 1
        new_size = _PRIMES[self._prime_index]
        new_buckets: list[list[_Entry]] = [[] for _ in range(new_size)]

        # Entries are moved head first onto the front of the new chains,
        # which reverses their relative order.
        for bucket in self._buckets:
            for entry in bucket:
                new_buckets[entry.hash % new_size].insert(0, entry)

        self._buckets = new_buckets
        self._load_limit = _LOAD_LIMITS[self._prime_index]

    def _find(self, key: Any) -> Optional[_Entry]:
        hash_value = self._hash(key)
        for entry in self._buckets[hash_value % len(self._buckets)]:
            if entry.hash == hash_value and self._eq_fn(key, entry.key):
                return entry
        return None

    def insert(self, key: Any, value: Any) -> None:
        """Add an entry; an existing entry with an equal key is not replaced."""
        self._count += 1
        if self._count > self._load_limit:
            self._expand()

        hash_value = self._hash(key)
        self._buckets[hash_value % len(self._buckets)].insert(
            0, _Entry(key, value, hash_value)
        )

    def change(self, key: Any, value: Any) -> None:
        """Replace the value stored for ``key``; raise KeyError if absent."""
        entry = self._find(key)
        if entry is None:
            raise KeyError(key)
        if self._val_free_fn is not None:
            self._val_free_fn(entry.value)
        entry.value = value

    def search(self, key: Any) -> Any:
        """Return the value stored for ``key``, or None if there is none."""
        entry = self._find(key)
        return entry.value if entry is not None else None

    def remove(self, key: Any, cond: Optional[Callable[[Any], bool]] = None) -> Any:
        """Remove the entry for ``key`` and return its value.

        If ``cond`` is given it is called with the value and the entry is only
        removed when it returns True. None is returned when nothing is removed.
        """
        hash_value = self._hash(key)
        bucket = self._buckets[hash_value % len(self._buckets)]

        for position, entry in enumerate(bucket):
            if entry.hash == hash_value and self._eq_fn(key, entry.key):
                if cond is not None and cond(entry.value) is not True:
                    return None
                del bucket[position]
                self._count -= 1
                if self._key_free_fn is not None:
                    self._key_free_fn(entry.key)
                return entry.value

        return None

    def inc(self, key: Any, value: Any) -> None:
        """Add ``value`` to the count stored for ``key``; raise KeyError if absent."""
        entry = self._find(key)
        if entry is None:
            raise KeyError(key)
        entry.value += value

    def dec(self, key: Any, value: Any) -> None:
        """Subtract ``value`` from the count stored for ``key``; raise KeyError if absent."""
        entry = self._find(key)
        if entry is None:
            raise KeyError(key)
        entry.value -= value

    def remove_where(self, predicate: Callable[[Any, Any], bool]) -> int:
        """Remove every entry for which ``predicate(key, value)`` is true.

        Only the key free function is called for removed entries; the caller
        is responsible for the values. Returns the number of entries removed.
        """
        removed = 0
        for index, bucket in enumerate(self._buckets):
            kept: list[_Entry] = []
            for entry in bucket:
                if predicate(entry.key, entry.value):
                    removed += 1
                    if self._key_free_fn is not None:
                        self._key_free_fn(entry.key)
                else:
                    kept.append(entry)
            if len(kept) != len(bucket):
                self._buckets[index] = kept
        self._count -= removed
        return removed

    def items(self) -> list[tuple[Any, Any]]:
        """Return all (key, value) pairs in bucket order."""
        return [(entry.key, entry.value) for bucket in self._buckets for entry in bucket]

    def clear(self) -> None:
        """Remove every entry, calling the key and value free functions."""
        for bucket in self._buckets:
            for entry in bucket:
                if self._key_free_fn is not None:
                    self._key_free_fn(entry.key)
                if self._val_free_fn is not None:
                    self._val_free_fn(entry.value)
            bucket.clear()
        self._count = 0

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[Any]:
        for key, _ in self.items():
            yield key

    def __contains__(self, key: Any) -> bool:
        return self._find(key) is not None