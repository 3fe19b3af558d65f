"""Exception hierarchy for the DFNS blueprint SDK.

Address derivation itself never raises. Everything around it (config,
operator-set resolution, the local keystore) reports failures through a
subclass of :class:`BlueprintError`.

Hierarchy
---------
BlueprintError
├── ConfigError
├── ContextError
├── KeyFormatError
└── StoreError
"""

from __future__ import annotations


class BlueprintError(Exception):
    """Base exception for all blueprint SDK errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance for the operator."""


class ConfigError(BlueprintError):
    """Raised when a required environment value is missing or malformed."""


class ContextError(BlueprintError):
    """Raised when the service context cannot answer a query (party, call id)."""


class KeyFormatError(BlueprintError):
    """Raised when an operator key from the registry has an unsupported encoding."""


class StoreError(BlueprintError):
    """Raised when the local keystore file cannot be read or parsed."""
