"""
DI-specific error types with diagnostics.
"""

from typing import List, Optional


class DIError(Exception):
    """Base exception for DI errors."""
    pass


class ProviderNotFoundError(DIError):
    """Provider not found for requested token."""

    def __init__(
        self,
        token: str,
        candidates: Optional[List[str]] = None,
    ):
        self.token = token
        self.candidates = candidates or []

        msg = f"No provider found for token={token}"

        if self.candidates:
            msg += "\n\nCandidates found:"
            for candidate in self.candidates:
                msg += f"\n  - {candidate}"

        msg += "\n\nSuggested fixes:"
        msg += f"\n  - Register an instance or provider for {token}"

        super().__init__(msg)
