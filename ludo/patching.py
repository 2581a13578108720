"""Soft-patching of ROM images with IPS and UPS patch files."""

from __future__ import annotations

import os
import zlib

_IPS_EOF = 0x454F46


class PatchError(ValueError):
    """Raised when a patch cannot be applied."""


def _parse_ips(patch: bytes) -> tuple[list[tuple[int, bytes]], int | None]:
    """Return the IPS records and the optional truncation size."""
    records: list[tuple[int, bytes]] = []
    size = len(patch)
    offset = 5
    while offset <= size - 3:
        address = int.from_bytes(patch[offset:offset + 3], "big")
        offset += 3

        if address == _IPS_EOF:
            if offset == size:
                return records, None
            if offset == size - 3:
                return records, int.from_bytes(patch[offset:size], "big")

        if offset > size - 2:
            break
        length = int.from_bytes(patch[offset:offset + 2], "big")
        offset += 2

        if length > 0:
            if offset > size - length:
                break
            records.append((address, bytes(patch[offset:offset + length])))
            offset += length
        else:
            if offset > size - 3:
                break
            length = int.from_bytes(patch[offset:offset + 2], "big")
            offset += 2
            if length == 0:
                break
            records.append((address, bytes([patch[offset]]) * length))
            offset += 1

    raise PatchError("invalid patch")


def apply_ips(patch: bytes, source: bytes) -> bytes:
    """Apply an IPS patch to source and return the patched data."""
    if len(patch) < 8:
        raise PatchError("patch too small")
    if bytes(patch[:5]) != b"PATCH":
        raise PatchError("invalid patch header")

    records, truncate = _parse_ips(patch)
    if truncate is not None:
        target_length = truncate
    else:
        target_length = max(
            [len(source)] + [address + len(data) for address, data in records]
        )

    target = bytearray(target_length)
    keep = min(len(source), target_length)
    target[:keep] = source[:keep]

    for address, data in records:
        if address + len(data) > target_length:
            raise PatchError("invalid patch")
        target[address:address + len(data)] = data
    return bytes(target)


class _Stream:
    """A byte buffer with a cursor and a running CRC32 of bytes moved."""

    def __init__(self, data: bytes | bytearray) -> None:
        self.data = data
        self.offset = 0
        self.checksum = 0

    def read(self) -> int:
        if self.offset < len(self.data):
            value = self.data[self.offset]
            self.offset += 1
            self.checksum = zlib.crc32(bytes([value]), self.checksum)
            return value
        return 0

    def write(self, value: int) -> None:
        if self.offset < len(self.data):
            self.data[self.offset] = value
            self.checksum = zlib.crc32(bytes([value]), self.checksum)
        self.offset += 1

    def decode(self) -> int:
        value = 0
        shift = 1
        while True:
            if self.offset >= len(self.data):
                raise PatchError("invalid patch")
            byte = self.read()
            value += (byte & 0x7F) * shift
            if byte & 0x80:
                return value
            shift <<= 7
            value += shift

    def read_u32(self) -> int:
        return sum(self.read() << (8 * i) for i in range(4))


def apply_ups(patch: bytes, source: bytes) -> bytes:
    """Apply a UPS patch to source and return the patched data."""
    if len(patch) < 18:
        raise PatchError("patch too small")

    pstream = _Stream(patch)
    sstream = _Stream(source)

    if any(pstream.read() != ord(c) for c in "UPS1"):
        raise PatchError("invalid patch header")

    source_read_length = pstream.decode()
    target_read_length = pstream.decode()

    if len(source) not in (source_read_length, target_read_length):
        raise PatchError("invalid source")

    target_length = (
        target_read_length if len(source) == source_read_length else source_read_length
    )
    tstream = _Stream(bytearray(target_length))

    while pstream.offset < len(patch) - 12:
        for _ in range(pstream.decode()):
            tstream.write(sstream.read())
        while True:
            xor = pstream.read()
            tstream.write(xor ^ sstream.read())
            if xor == 0:
                break

    while sstream.offset < len(source):
        tstream.write(sstream.read())
    while tstream.offset < len(tstream.data):
        tstream.write(sstream.read())

    source_read_checksum = pstream.read_u32()
    target_read_checksum = pstream.read_u32()
    patch_result_checksum = pstream.checksum
    patch_read_checksum = pstream.read_u32()

    if patch_result_checksum != patch_read_checksum:
        raise PatchError("invalid patch")

    target = tstream.data
    if sstream.checksum == source_read_checksum and len(source) == source_read_length:
        if tstream.checksum == target_read_checksum and len(target) == target_read_length:
            return bytes(target)
        raise PatchError("invalid target")
    if sstream.checksum == target_read_checksum and len(source) == target_read_length:
        if tstream.checksum == source_read_checksum and len(target) == source_read_length:
            return bytes(target)
        raise PatchError("invalid target")
    raise PatchError("invalid source")


def try_patch(game_path: str, data: bytes) -> bytes | None:
    """Patch data with a .ups or .ips file lying next to the game, if any.

    Returns None when no patch file exists.
    """
    stem = os.path.splitext(game_path)[0]
    for extension, apply in ((".ups", apply_ups), (".ips", apply_ips)):
        patch_path = stem + extension
        if os.path.exists(patch_path):
            with open(patch_path, "rb") as handle:
                return apply(handle.read(), data)
    return None