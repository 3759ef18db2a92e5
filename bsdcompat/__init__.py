"""BSD-style utilities: vis encoding, bounded wide-string copy and concatenation, ChaCha20."""

__version__ = "0.1.0"
__all__ = ["chacha", "vis", "wstring"]