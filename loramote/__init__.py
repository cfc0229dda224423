"""LoRaWAN AES crypto, radio parameter encoding, debug formatting and LoRaMote sensor helpers."""

__version__ = "0.1.0"
__all__ = ["aes", "lorabase", "debugfmt", "blipper"]