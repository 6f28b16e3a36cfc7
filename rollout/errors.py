from __future__ import annotations


class InvalidInput(ValueError):
    """Raised when an identifier or rollout fraction cannot be decided on."""
