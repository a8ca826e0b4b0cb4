"""Registry of bound UDP endpoints, searchable by socket or local address."""

from __future__ import annotations

import ipaddress
import logging
import struct
import threading
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from .hashing import hash_buffer, hash_ptr
from .hashtable import HashTable

log = logging.getLogger(__name__)

AddressLike = Union[str, int, bytes, ipaddress.IPv4Address]


class UdpEndpointError(Exception):
    """Raised when the endpoint map cannot carry out a request."""


def _tuple_hash(key: tuple[ipaddress.IPv4Address, int]) -> int:
    local_ip, local_port = key
    return hash_buffer(local_ip.packed + struct.pack("<H", local_port))


def _tuple_eq(key1: Any, key2: Any) -> bool:
    return key1 == key2


def _sock_hash(sock: Any) -> int:
    return hash_ptr(id(sock))


def _sock_eq(sock1: Any, sock2: Any) -> bool:
    return sock1 is sock2


def _normalize(local_ip: AddressLike, local_port: int) -> tuple[ipaddress.IPv4Address, int]:
    address = ipaddress.IPv4Address(local_ip)
    port = int(local_port)
    if not 0 <= port <= 0xFFFF:
        raise ValueError(f"port {port} is out of range")
    return address, port


@dataclass(eq=False)
class UdpEndpoint:
    """A socket bound to a local IPv4 address and port.

    Use the endpoint as a context manager to hold its lock.
    """

    local_ip: ipaddress.IPv4Address
    local_port: int
    sock: Any
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    @property
    def ipv4_tuple(self) -> tuple[ipaddress.IPv4Address, int]:
        return (self.local_ip, self.local_port)

    @property
    def locked(self) -> bool:
        return self._lock.locked()

    def __enter__(self) -> "UdpEndpoint":
        self._lock.acquire()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._lock.release()


class UdpEndpointMap:
    """Thread-safe tables of UDP endpoints keyed by address and by socket."""

    def __init__(self) -> None:
        self._ipv4 = HashTable(_tuple_hash, _tuple_eq)
        self._socks = HashTable(_sock_hash, _sock_eq)
        self._lock = threading.Lock()
        self._closed = False

    def create(self, sock: Any, local_ip: AddressLike, local_port: int) -> UdpEndpoint:
        """Register a new endpoint for ``sock`` bound to ``local_ip:local_port``."""
        address, port = _normalize(local_ip, local_port)
        endpoint = UdpEndpoint(address, port, sock)

        with self._lock:
            if self._closed:
                raise UdpEndpointError("Could not create new UDP endpoint: map is closed")
            self._ipv4.insert(endpoint.ipv4_tuple, endpoint)
            self._socks.insert(sock, endpoint)

        return endpoint

    def lookup_sock(self, sock: Any) -> Optional[UdpEndpoint]:
        """Return the endpoint registered for ``sock``, or None."""
        with self._lock:
            return self._socks.search(sock)

    def lookup_ipv4(self, local_ip: AddressLike, local_port: int) -> Optional[UdpEndpoint]:
        """Return the endpoint bound to ``local_ip:local_port``, or None."""
        key = _normalize(local_ip, local_port)
        with self._lock:
            return self._ipv4.search(key)

    def remove(self, endpoint: UdpEndpoint) -> None:
        """Unregister ``endpoint`` so that lookups no longer find it."""
        def is_endpoint(value: Any) -> bool:
            return value is endpoint

        with self._lock:
            self._ipv4.remove(endpoint.ipv4_tuple, is_endpoint)
            self._socks.remove(endpoint.sock, is_endpoint)

    def close(self) -> None:
        """Drop every registration and refuse new endpoints."""
        with self._lock:
            if len(self._ipv4) or len(self._socks):
                log.error("Freeing non-empty UDP endpoint map")
            self._ipv4.clear()
            self._socks.clear()
            self._closed = True

    def __len__(self) -> int:
        with self._lock:
            return len(self._ipv4)