from .base64 import from_base64, to_base64

__all__ = ["from_base64", "to_base64"]
