"""
Locale - selects the active language partition for settings and metadata.
"""


class Locale:
    """Active language holder."""

    __slots__ = ("_language",)

    def __init__(self, language: str = "en"):
        self._language = language

    def get_language(self) -> str:
        return self._language

    def set_language(self, language: str) -> None:
        self._language = language

    def __repr__(self) -> str:
        return f"Locale({self._language!r})"
