"""GHASH universal hash over GF(2^128), as used by Galois/Counter Mode."""

from __future__ import annotations

BLOCK_SIZE = 16

# Reduction constant for x^128 + x^7 + x^2 + x + 1 in GCM's reflected bit order.
_R = 0xE1 << 120


def _build_table(h: int) -> tuple[tuple[int, ...], ...]:
    """Precompute H * b for every byte value b at each of the 16 byte positions."""
    powers = []
    v = h
    for _ in range(128):
        powers.append(v)
        v = (v >> 1) ^ _R if v & 1 else v >> 1

    table = []
    for position in range(BLOCK_SIZE):
        row = [0] * 256
        for value in range(1, 256):
            lowest = value & -value
            bit_from_msb = 7 - (lowest.bit_length() - 1)
            row[value] = row[value ^ lowest] ^ powers[8 * position + bit_from_msb]
        table.append(tuple(row))
    return tuple(table)


class GHash:
    """Incremental GHASH keyed with a 16-byte hash subkey."""

    def __init__(self, key: bytes) -> None:
        key = bytes(key)
        if len(key) != BLOCK_SIZE:
            raise ValueError(f"GHASH key must be {BLOCK_SIZE} bytes, got {len(key)}")
        self._table = _build_table(int.from_bytes(key, "big"))
        self._state = 0

    def _multiply(self, x: int) -> int:
        result = 0
        for row, byte in zip(self._table, x.to_bytes(BLOCK_SIZE, "big")):
            result ^= row[byte]
        return result

    def update(self, data: bytes) -> None:
        """Absorb whole blocks; the length of data must be a multiple of 16."""
        data = bytes(data)
        if len(data) % BLOCK_SIZE:
            raise ValueError("GHASH input must be a whole number of 16-byte blocks")
        state = self._state
        for offset in range(0, len(data), BLOCK_SIZE):
            block = int.from_bytes(data[offset : offset + BLOCK_SIZE], "big")
            state = self._multiply(state ^ block)
        self._state = state

    def update_padded(self, data: bytes) -> None:
        """Absorb data, zero-padding the final partial block."""
        data = bytes(data)
        whole = len(data) - len(data) % BLOCK_SIZE
        self.update(data[:whole])
        rest = data[whole:]
        if rest:
            self.update(rest.ljust(BLOCK_SIZE, b"\x00"))

    def finalize(self) -> bytes:
        """Return the current 16-byte hash value."""
        return self._state.to_bytes(BLOCK_SIZE, "big")

    def copy(self) -> GHash:
        """Return an independent hasher with the same key and state."""
        clone = type(self).__new__(type(self))
        clone._table = self._table
        clone._state = self._state
        return clone