"""UUID generation for versions 1 to 5: time-based, DCE security,
MD5 name-based, random and SHA-1 name-based identifiers."""

from __future__ import annotations

import hashlib
import os
import threading
import time
import uuid as _stdlib_uuid
from typing import Callable

from nacoskit.uuids import V1, V2, V3, V4, V5, Domain, UUID, UUIDError, Variant

# Difference in 100-nanosecond intervals between the UUID epoch
# (October 15, 1582) and the Unix epoch (January 1, 1970).
EPOCH_START = 122192928000000000

_MULTICAST_BIT = 1 << 40


def _posix_uid() -> int:
    try:
        value = os.getuid()
    except AttributeError:
        value = -1
    return value & 0xFFFFFFFF


def _posix_gid() -> int:
    try:
        value = os.getgid()
    except AttributeError:
        value = -1
    return value & 0xFFFFFFFF


POSIX_UID = _posix_uid()
POSIX_GID = _posix_gid()


def default_hw_addr_func() -> bytes:
    """Return the 6-byte hardware address of a network interface.

    Raises UUIDError when no real hardware address can be found.
    """
    node = _stdlib_uuid.getnode()
    if node & _MULTICAST_BIT:
        # The node is a random stand-in, not a real interface address.
        raise UUIDError("uuid: no HW address found")
    return node.to_bytes(6, "big")


class Generator:
    """RFC 4122 generator with pluggable clock, hardware address and randomness.

    ``epoch_func`` returns nanoseconds since the Unix epoch, ``hw_addr_func``
    returns a hardware address or raises, and ``rand`` takes a byte count and
    returns up to that many random bytes.
    """

    def __init__(
        self,
        epoch_func: Callable[[], int] = time.time_ns,
        hw_addr_func: Callable[[], bytes] = default_hw_addr_func,
        rand: Callable[[int], bytes] = os.urandom,
    ) -> None:
        self._epoch_func = epoch_func
        self._hw_addr_func = hw_addr_func
        self._rand = rand
        self._storage_lock = threading.Lock()
        self._clock_once_lock = threading.Lock()
        self._hw_once_lock = threading.Lock()
        self._clock_initialised = False
        self._hw_initialised = False
        self._last_time = 0
        self._clock_sequence = 0
        self._hardware_addr = bytes(6)

    def _read_full(self, size: int) -> bytes:
        buf = bytearray()
        while len(buf) < size:
            chunk = self._rand(size - len(buf))
            if not chunk:
                raise EOFError("uuid: unexpected EOF while reading random bytes")
            buf += chunk
        return bytes(buf[:size])

    def _epoch(self) -> int:
        return (EPOCH_START + self._epoch_func() // 100) & 0xFFFFFFFFFFFFFFFF

    def _get_clock_sequence(self) -> tuple[int, int]:
        with self._clock_once_lock:
            if not self._clock_initialised:
                self._clock_initialised = True
                self._clock_sequence = int.from_bytes(self._read_full(2), "big")

        with self._storage_lock:
            time_now = self._epoch()
            # Clock did not move since the last call: bump the sequence.
            if time_now <= self._last_time:
                self._clock_sequence = (self._clock_sequence + 1) & 0xFFFF
            self._last_time = time_now
            return time_now, self._clock_sequence

    def _get_hardware_addr(self) -> bytes:
        with self._hw_once_lock:
            if not self._hw_initialised:
                self._hw_initialised = True
                try:
                    addr = bytes(self._hw_addr_func())
                except (OSError, ValueError, UUIDError):
                    # No usable interface: random address with the multicast bit set.
                    random_addr = bytearray(self._read_full(6))
                    random_addr[0] |= 0x01
                    self._hardware_addr = bytes(random_addr)
                else:
                    self._hardware_addr = addr[:6].ljust(6, b"\x00")
        return self._hardware_addr

    def new_v1(self) -> UUID:
        """Return a UUID built from the current time and hardware address."""
        time_now, clock_seq = self._get_clock_sequence()
        data = bytearray(16)
        data[0:4] = (time_now & 0xFFFFFFFF).to_bytes(4, "big")
        data[4:6] = ((time_now >> 32) & 0xFFFF).to_bytes(2, "big")
        data[6:8] = ((time_now >> 48) & 0xFFFF).to_bytes(2, "big")
        data[8:10] = clock_seq.to_bytes(2, "big")
        data[10:16] = self._get_hardware_addr()
        return UUID(data).with_version(V1).with_variant(Variant.RFC4122)

    def new_v2(self, domain: int) -> UUID:
        """Return a DCE security UUID carrying the POSIX UID or GID."""
        data = bytearray(bytes(self.new_v1()))
        if domain == Domain.PERSON:
            data[0:4] = POSIX_UID.to_bytes(4, "big")
        elif domain == Domain.GROUP:
            data[0:4] = POSIX_GID.to_bytes(4, "big")
        data[9] = int(domain) & 0xFF
        return UUID(data).with_version(V2).with_variant(Variant.RFC4122)

    def new_v3(self, ns: UUID, name: str) -> UUID:
        """Return a UUID from the MD5 hash of a namespace and a name."""
        digest = hashlib.md5(bytes(ns) + name.encode("utf-8")).digest()
        return UUID(digest[:16]).with_version(V3).with_variant(Variant.RFC4122)

    def new_v4(self) -> UUID:
        """Return a randomly generated UUID."""
        return UUID(self._read_full(16)).with_version(V4).with_variant(Variant.RFC4122)

    def new_v5(self, ns: UUID, name: str) -> UUID:
        """Return a UUID from the SHA-1 hash of a namespace and a name."""
        digest = hashlib.sha1(bytes(ns) + name.encode("utf-8")).digest()
        return UUID(digest[:16]).with_version(V5).with_variant(Variant.RFC4122)


_global = Generator()


def new_v1() -> UUID:
    """Return a time-based UUID from the shared generator."""
    return _global.new_v1()


def new_v2(domain: int) -> UUID:
    """Return a DCE security UUID from the shared generator."""
    return _global.new_v2(domain)


def new_v3(ns: UUID, name: str) -> UUID:
    """Return an MD5 name-based UUID."""
    return _global.new_v3(ns, name)


def new_v4() -> UUID:
    """Return a random UUID from the shared generator."""
    return _global.new_v4()


def new_v5(ns: UUID, name: str) -> UUID:
    """Return a SHA-1 name-based UUID."""
    return _global.new_v5(ns, name)