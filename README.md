# gcmcipher

AES-GCM authenticated encryption with associated data (AEAD), following
NIST SP 800-38D. The AES block encryption comes from the `cryptography`
package. The GHASH universal hash and the counter mode are written in Python.

## Installation

```
pip install gcmcipher
```

## Usage

```python
import os

from gcmcipher.aead import Aes256Gcm, AeadError

key = os.urandom(32)                 # 32 bytes for AES-256
cipher = Aes256Gcm(key)

nonce = os.urandom(12)               # 96 bits; unique per message
ciphertext = cipher.encrypt(nonce, b"plaintext message", b"header")

plaintext = cipher.decrypt(nonce, ciphertext, b"header")
assert plaintext == b"plaintext message"

try:
    cipher.decrypt(nonce, ciphertext, b"another header")
except AeadError:
    print("authentication failed")
```

`encrypt(nonce, plaintext, associated_data=b"")` returns the ciphertext with
the 16-byte tag appended. `decrypt(nonce, ciphertext, associated_data=b"")`
expects the same layout and returns the plaintext.

### Detached tags

To keep the tag apart from the ciphertext, use the detached methods. Note that
their argument order puts the associated data before the data:

```python
from gcmcipher.aead import Aes128Gcm

cipher = Aes128Gcm(bytes(16))
ciphertext, tag = cipher.encrypt_detached(bytes(12), b"", b"data")
assert cipher.decrypt_detached(bytes(12), b"", ciphertext, tag) == b"data"
```

### Key and nonce sizes

- `Aes128Gcm(key)` takes a 16-byte key and `Aes256Gcm(key)` a 32-byte key;
  both use a 12-byte nonce.
- `AesGcm(key, nonce_size=12)` takes a 16-, 24- or 32-byte key and a nonce of
  any length of at least one byte. A 12-byte nonce is used directly as the
  counter prefix; a nonce of any other length is first run through GHASH, as
  the standard describes. The recommended size is 12 bytes.

A key of the wrong length, a `nonce_size` below one, or a nonce whose length
differs from the cipher's `nonce_size` raises `ValueError`.

### Errors and limits

`AeadError` is raised when:

- the tag does not verify;
- plaintext or associated data is longer than 2**36 bytes, or ciphertext is
  longer than 2**36 + 16 bytes (the limits are `A_MAX`, `P_MAX` and `C_MAX` in
  `gcmcipher.aead`);
- `decrypt` is given fewer than 16 bytes, too short to hold a tag.

### GHASH

`gcmcipher.ghash.GHash(key)` exposes the universal hash on its own, keyed with
a 16-byte subkey:

- `update(data)` absorbs whole 16-byte blocks and raises `ValueError` if the
  length is not a multiple of 16;
- `update_padded(data)` absorbs any length, zero-padding the last block;
- `finalize()` returns the current 16-byte hash value;
- `copy()` returns an independent hasher with the same key and state.

## What it does not do

This is a library only: it has no command-line tool, and it does not read or
write files or manage keys. There is no in-place or streaming encryption;
each call takes and returns whole `bytes` values. The pure-Python GHASH is not
written to run in constant time and is much slower than a native
implementation.