"""
Validation result type shared by every validation path.

A validation call returns a list of ``ValidationResult``; an empty list is
the only success signal.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ValidationResult(BaseModel):
    """
    One rule violation.

    Attributes:
        message: Human-readable description of the violation
        member_names: Names of the settings keys, message fields or schema
            members the violation refers to (may be empty)
    """

    message: str
    member_names: tuple[str, ...] = ()

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.message

    def refers_to(self, member_name: str) -> bool:
        """Check whether the result is tagged with a member (case-insensitive)."""
        folded = member_name.casefold()
        return any(name.casefold() == folded for name in self.member_names)


def validation_error(message: str, *member_names: str) -> ValidationResult:
    """Build a ``ValidationResult`` tagged with the given member names."""
    return ValidationResult(message=message, member_names=member_names)
