"""Centralized error handling for the deltaenv CLI.

This module provides:
- Standard error codes
- Error envelope format for --json output
- Helper functions for consistent error reporting

The library itself never raises these; snapshot and pager resolution are
total. Only the CLI turns bad user input into an error envelope.
"""

import json
import sys
from dataclasses import dataclass, field
from typing import Optional


# =============================================================================
# Error Codes
# =============================================================================

UNKNOWN_FIELD = "UNKNOWN_FIELD"
FIELD_UNSET = "FIELD_UNSET"


# =============================================================================
# Error Envelope
# =============================================================================


@dataclass
class DeltaEnvError:
    """Structured error for CLI output.

    Attributes:
        code: Machine-readable error code.
        message: Human-readable error message.
        hints: Actionable suggestions for resolving the error.
        details: Context-specific error details.
    """

    code: str
    message: str
    hints: list[str] = field(default_factory=list)
    details: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert to error envelope dict."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "hints": self.hints,
                "details": self.details,
            }
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    def print_json(self, file=None) -> None:
        """Print error as JSON to file (default: stderr)."""
        if file is None:
            file = sys.stderr
        print(self.to_json(), file=file)

    def print_text(self, file=None) -> None:
        """Print error as human-readable text to file (default: stderr)."""
        if file is None:
            file = sys.stderr
        print(f"Error: {self.message}", file=file)
        for hint in self.hints:
            print(f"  Hint: {hint}", file=file)


# =============================================================================
# Factory Functions
# =============================================================================


def unknown_field(name: str, known: list[str]) -> DeltaEnvError:
    """Create error for a snapshot field that does not exist."""
    return DeltaEnvError(
        code=UNKNOWN_FIELD,
        message=f"Unknown field: {name}",
        hints=[
            "Run: deltaenv show",
            f"Known fields: {', '.join(known)}",
        ],
        details={"field": name},
    )


def field_unset(name: str, variable: Optional[str] = None) -> DeltaEnvError:
    """Create error for a snapshot field that has no value."""
    hints = []
    if variable:
        hints.append(f"Set {variable} in the environment")
    return DeltaEnvError(
        code=FIELD_UNSET,
        message=f"Field is not set: {name}",
        hints=hints,
        details={"field": name, "variable": variable}
        if variable
        else {"field": name},
    )


# =============================================================================
# Output Helper
# =============================================================================


def print_error(
    error: DeltaEnvError,
    json_mode: bool = False,
    file=None,
) -> None:
    """Print error in appropriate format.

    Args:
        error: The error to print.
        json_mode: If True, print as JSON envelope. If False, print as text.
        file: Output file (default: stderr).
    """
    if json_mode:
        error.print_json(file)
    else:
        error.print_text(file)
