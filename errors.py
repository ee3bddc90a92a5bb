# errors.py
from __future__ import annotations


class EnigmaError(ValueError):
    """Raised for any bad configuration or runtime misuse of the machine."""
