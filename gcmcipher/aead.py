"""AES-GCM authenticated encryption with associated data."""

from __future__ import annotations

import hmac

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from .ghash import BLOCK_SIZE, GHash

A_MAX = 1 << 36
"""Maximum length of associated data."""

P_MAX = 1 << 36
"""Maximum length of plaintext."""

C_MAX = (1 << 36) + 16
"""Maximum length of ciphertext."""

TAG_SIZE = 16


class AeadError(Exception):
    """Raised when encryption limits are exceeded or authentication fails."""


def _xor(data: bytes, keystream: bytes) -> bytes:
    return (int.from_bytes(data, "big") ^ int.from_bytes(keystream, "big")).to_bytes(
        len(data), "big"
    )


class AesGcm:
    """AES-GCM over any AES key size, with a configurable nonce size."""

    def __init__(self, key: bytes, nonce_size: int = 12) -> None:
        key = bytes(key)
        if len(key) not in (16, 24, 32):
            raise ValueError(f"AES key must be 16, 24 or 32 bytes, got {len(key)}")
        if nonce_size < 1:
            raise ValueError("nonce size must be at least one byte")
        self.nonce_size = nonce_size
        self._encryptor = Cipher(algorithms.AES(key), modes.ECB()).encryptor()
        self._ghash = GHash(self._encrypt_blocks(bytes(BLOCK_SIZE)))

    def _encrypt_blocks(self, blocks: bytes) -> bytes:
        return self._encryptor.update(blocks)

    def _initial_counter(self, nonce: bytes) -> bytes:
        nonce = bytes(nonce)
        if len(nonce) != self.nonce_size:
            raise ValueError(f"nonce must be {self.nonce_size} bytes, got {len(nonce)}")
        if self.nonce_size == 12:
            return nonce + b"\x00\x00\x00\x01"
        ghash = self._ghash.copy()
        ghash.update_padded(nonce)
        ghash.update(bytes(8) + (len(nonce) * 8).to_bytes(8, "big"))
        return ghash.finalize()

    def _keystream(self, j0: bytes, start_block: int, length: int) -> bytes:
        if length == 0:
            return b""
        prefix = j0[:12]
        counter = int.from_bytes(j0[12:], "big")
        count = -(-length // BLOCK_SIZE)
        blocks = b"".join(
            prefix + ((counter + start_block + i) & 0xFFFFFFFF).to_bytes(4, "big")
            for i in range(count)
        )
        return self._encrypt_blocks(blocks)[:length]

    def _compute_tag(self, associated_data: bytes, ciphertext: bytes) -> bytes:
        ghash = self._ghash.copy()
        ghash.update_padded(associated_data)
        ghash.update_padded(ciphertext)
        ghash.update(
            (len(associated_data) * 8).to_bytes(8, "big")
            + (len(ciphertext) * 8).to_bytes(8, "big")
        )
        return ghash.finalize()

    def encrypt_detached(
        self, nonce: bytes, associated_data: bytes, buffer: bytes
    ) -> tuple[bytes, bytes]:
        """Encrypt buffer, returning the ciphertext and the 16-byte tag."""
        associated_data = bytes(associated_data)
        buffer = bytes(buffer)
        if len(buffer) > P_MAX or len(associated_data) > A_MAX:
            raise AeadError("input exceeds AES-GCM length limits")
        j0 = self._initial_counter(nonce)
        ciphertext = _xor(buffer, self._keystream(j0, 1, len(buffer)))
        tag = _xor(self._compute_tag(associated_data, ciphertext), self._keystream(j0, 0, TAG_SIZE))
        return ciphertext, tag

    def decrypt_detached(
        self, nonce: bytes, associated_data: bytes, buffer: bytes, tag: bytes
    ) -> bytes:
        """Verify the tag and decrypt buffer, raising AeadError on failure."""
        associated_data = bytes(associated_data)
        buffer = bytes(buffer)
        if len(buffer) > C_MAX or len(associated_data) > A_MAX:
            raise AeadError("input exceeds AES-GCM length limits")
        j0 = self._initial_counter(nonce)
        expected = _xor(
            self._compute_tag(associated_data, buffer), self._keystream(j0, 0, TAG_SIZE)
        )
        if not hmac.compare_digest(expected, bytes(tag)):
            raise AeadError("authentication failed")
        return _xor(buffer, self._keystream(j0, 1, len(buffer)))

    def encrypt(self, nonce: bytes, plaintext: bytes, associated_data: bytes = b"") -> bytes:
        """Encrypt plaintext and append the tag."""
        ciphertext, tag = self.encrypt_detached(nonce, associated_data, plaintext)
        return ciphertext + tag

    def decrypt(self, nonce: bytes, ciphertext: bytes, associated_data: bytes = b"") -> bytes:
        """Split off the trailing tag, verify it and return the plaintext."""
        ciphertext = bytes(ciphertext)
        if len(ciphertext) < TAG_SIZE:
            raise AeadError("ciphertext is shorter than the tag")
        body, tag = ciphertext[:-TAG_SIZE], ciphertext[-TAG_SIZE:]
        return self.decrypt_detached(nonce, associated_data, body, tag)


class Aes128Gcm(AesGcm):
    """AES-GCM with a 128-bit key and 96-bit nonce."""

    def __init__(self, key: bytes) -> None:
        if len(bytes(key)) != 16:
            raise ValueError("AES-128-GCM key must be 16 bytes")
        super().__init__(key, 12)


class Aes256Gcm(AesGcm):
    """AES-GCM with a 256-bit key and 96-bit nonce."""

    def __init__(self, key: bytes) -> None:
        if len(bytes(key)) != 32:
            raise ValueError("AES-256-GCM key must be 32 bytes")
        super().__init__(key, 12)