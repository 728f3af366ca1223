"""AES-GCM authenticated encryption (aead) built on a Python GHASH (ghash)."""

__version__ = "0.1.0"
__all__ = ["aead", "ghash"]