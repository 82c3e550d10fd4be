"""Pager resolution for deltaenv.

Decides which pager command the host program should use, following bat's
pager selection rules while keeping the full command string intact.

Key design principles:
- BAT_PAGER wins over PAGER; with neither set the default is "less"
- The command is tokenized only to inspect the executable, never rebuilt
- "more" and "most" from PAGER are replaced by "less"
- A pager that is the running program itself is always replaced
- Never raises; every failure path yields the default pager
"""

import logging
import os
import shlex
import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import PurePath
from typing import Optional, Sequence

from .common import BAT_PAGER, DEFAULT_PAGER, PAGER, PROBLEMATIC_PAGERS

logger = logging.getLogger(__name__)


class PagerSource(Enum):
    """Where the candidate pager command came from."""

    BAT_PAGER = "BAT_PAGER"
    PAGER = "PAGER"
    DEFAULT = "default"


class PagerIssue(Enum):
    """Why a candidate was replaced by the default pager."""

    MALFORMED = "malformed"  # Unbalanced quotes or trailing escape
    EMPTY = "empty"  # No tokens at all
    SELF_RECURSION = "self-recursion"  # Pager is the running program
    PROBLEMATIC = "problematic"  # Known-bad pager from PAGER


@dataclass(frozen=True)
class PagerResolution:
    """Outcome of a single pager decision.

    Attributes:
        command: Pager command to use (candidate verbatim, or the default).
        candidate: Raw command string taken from the selected source.
        source: Source the candidate was taken from.
        reason: Why the candidate was replaced, None if it was kept.
    """

    command: str
    candidate: str
    source: PagerSource
    reason: Optional[PagerIssue] = None

    @property
    def substituted(self) -> bool:
        return self.reason is not None

    def to_dict(self) -> dict:
        """Convert to JSON-ready dict."""
        return {
            "command": self.command,
            "candidate": self.candidate,
            "source": self.source.value,
            "substituted": self.substituted,
            "reason": self.reason.value if self.reason else None,
        }


def split_command(cmd: str) -> Optional[list[str]]:
    """Split a command line the way a POSIX shell would.

    A word starting with "#" begins a comment that runs to the end of the
    line, so "#x" has no tokens.

    Args:
        cmd: Command string, e.g. '/bin/sh -c "head -10000 | cat"'.

    Returns:
        List of tokens, or None if the quoting is malformed.
    """
    try:
        return shlex.split(cmd, comments=True)
    except ValueError:
        return None


def command_stem(path: str) -> str:
    """Return the file stem of an executable path ("/usr/bin/less" -> "less")."""
    return PurePath(path).stem


def select_candidate(
    override: Optional[str],
    general: Optional[str],
) -> tuple[str, PagerSource]:
    """Pick the candidate command by precedence.

    An empty override is treated as unset; an empty general value is kept
    and later resolves to the default.
    """
    if override:
        return override, PagerSource.BAT_PAGER
    if general is not None:
        return general, PagerSource.PAGER
    return DEFAULT_PAGER, PagerSource.DEFAULT


def _inspect(
    candidate: str,
    source: PagerSource,
    program_path: Optional[str],
) -> Optional[PagerIssue]:
    """Return the issue that disqualifies candidate, if any."""
    tokens = split_command(candidate)
    if tokens is None:
        return PagerIssue.MALFORMED
    if not tokens:
        return PagerIssue.EMPTY

    pager_stem = command_stem(tokens[0])

    if program_path is not None and command_stem(program_path) == pager_stem:
        return PagerIssue.SELF_RECURSION

    if source is PagerSource.PAGER and pager_stem in PROBLEMATIC_PAGERS:
        return PagerIssue.PROBLEMATIC

    return None


def resolve_pager_details(
    override: Optional[str],
    general: Optional[str],
    program_path: Optional[str],
) -> PagerResolution:
    """Resolve the pager command and report how it was decided.

    Args:
        override: Value of BAT_PAGER (None if unset).
        general: Value of PAGER (None if unset).
        program_path: Path the running program was invoked as (argv[0]).

    Returns:
        PagerResolution whose command is either the selected candidate,
        byte-for-byte, or the default pager.
    """
    candidate, source = select_candidate(override, general)
    reason = _inspect(candidate, source, program_path)

    if reason is not None:
        logger.debug(
            "Replacing pager %r from %s with %r (%s)",
            candidate,
            source.value,
            DEFAULT_PAGER,
            reason.value,
        )
        return PagerResolution(
            command=DEFAULT_PAGER,
            candidate=candidate,
            source=source,
            reason=reason,
        )

    logger.debug("Using pager %r from %s", candidate, source.value)
    return PagerResolution(command=candidate, candidate=candidate, source=source)


def resolve_pager(
    override: Optional[str],
    general: Optional[str],
    program_path: Optional[str],
) -> str:
    """Resolve the pager command string. See resolve_pager_details."""
    return resolve_pager_details(override, general, program_path).command


def get_pager_from_env(argv: Optional[Sequence[str]] = None) -> str:
    """Resolve the pager from BAT_PAGER and PAGER in the live environment.

    Args:
        argv: Process arguments (default: sys.argv). Only argv[0] is used,
            to keep the program from choosing itself as its pager.

    Returns:
        Pager command string, never empty.
    """
    return get_pager_resolution_from_env(argv).command


def get_pager_resolution_from_env(
    argv: Optional[Sequence[str]] = None,
) -> PagerResolution:
    """Like get_pager_from_env, but return the full PagerResolution."""
    if argv is None:
        argv = sys.argv
    program_path = argv[0] if argv else None

    return resolve_pager_details(
        os.environ.get(BAT_PAGER),
        os.environ.get(PAGER),
        program_path,
    )
