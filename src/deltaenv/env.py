"""Environment snapshot for deltaenv.

Every environment variable the host program cares about is read once, at
startup, into an immutable DeltaEnv. Later stages consume the snapshot and
never touch os.environ themselves.

Absence is never an error: unset variables, an unreadable working directory
and an unknown hostname all become None.
"""

import logging
import os
import platform
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import NamedTuple, Optional, Sequence, Tuple

from .common import (
    BAT_THEME,
    COLORTERM,
    DELTA_EXPERIMENTAL_MAX_LINE_DISTANCE_FOR_NAIVELY_PAIRED_LINES,
    DELTA_FEATURES,
    DELTA_NAVIGATE,
    DEFAULT_PAGER,
    DELTA_PAGER,
    GIT_CONFIG_PARAMETERS,
    GIT_PREFIX,
    PRODUCER,
    SCHEMA_VERSION,
)
from .pager import PagerResolution, get_pager_resolution_from_env

logger = logging.getLogger(__name__)

SCHEMA_NAME = "deltaenv.env"

# Snapshot field -> environment variable it is read from
FIELD_VARIABLES = {
    "bat_theme": BAT_THEME,
    "colorterm": COLORTERM,
    "experimental_max_line_distance_for_naively_paired_lines": (
        DELTA_EXPERIMENTAL_MAX_LINE_DISTANCE_FOR_NAIVELY_PAIRED_LINES
    ),
    "features": DELTA_FEATURES,
    "git_config_parameters": GIT_CONFIG_PARAMETERS,
    "git_prefix": GIT_PREFIX,
    "navigate": DELTA_NAVIGATE,
}


class Pagers(NamedTuple):
    """Pager commands: DELTA_PAGER verbatim, and the resolved fallback."""

    primary: Optional[str]
    fallback: str = DEFAULT_PAGER


@dataclass(frozen=True)
class DeltaEnv:
    """Immutable snapshot of the process environment.

    Attributes:
        bat_theme: BAT_THEME.
        colorterm: COLORTERM.
        current_dir: Working directory at snapshot time.
        experimental_max_line_distance_for_naively_paired_lines: Raw value,
            parsed by the consumer.
        features: DELTA_FEATURES, raw space-delimited list.
        git_config_parameters: GIT_CONFIG_PARAMETERS, passed through.
        git_prefix: GIT_PREFIX.
        hostname: Local hostname.
        navigate: DELTA_NAVIGATE.
        pagers: (DELTA_PAGER as set, pager resolved from BAT_PAGER/PAGER).
    """

    bat_theme: Optional[str] = None
    colorterm: Optional[str] = None
    current_dir: Optional[Path] = None
    experimental_max_line_distance_for_naively_paired_lines: Optional[str] = None
    features: Optional[str] = None
    git_config_parameters: Optional[str] = None
    git_prefix: Optional[str] = None
    hostname: Optional[str] = None
    navigate: Optional[str] = None
    pagers: Pagers = field(default_factory=lambda: Pagers(None))

    @classmethod
    def init(cls, argv: Optional[Sequence[str]] = None) -> "DeltaEnv":
        """Create a snapshot of the current environment.

        Args:
            argv: Process arguments used for pager self-recursion detection
                (default: sys.argv).

        Returns:
            A new DeltaEnv. pagers.fallback is always set.
        """
        return cls.init_with_resolution(argv)[0]

    @classmethod
    def init_with_resolution(
        cls, argv: Optional[Sequence[str]] = None
    ) -> Tuple["DeltaEnv", PagerResolution]:
        """Like init, but also return how pagers.fallback was decided.

        The environment is read once; the resolution is the one the
        snapshot's fallback came from.
        """
        resolution = get_pager_resolution_from_env(argv)
        env = cls(
            **{name: os.environ.get(var) for name, var in FIELD_VARIABLES.items()},
            current_dir=current_dir(),
            hostname=hostname(),
            pagers=Pagers(
                primary=os.environ.get(DELTA_PAGER),
                # Resolved here rather than taken from bat's executable-only
                # lookup, which drops the arguments of commands like
                # '/bin/sh -c "head -10000 | cat"'.
                fallback=resolution.command,
            ),
        )
        logger.debug("Captured environment snapshot: %r", env)
        return env, resolution

    @classmethod
    def field_names(cls) -> list[str]:
        """Return snapshot field names in declaration order."""
        return [f.name for f in fields(cls)]

    def to_dict(self) -> dict:
        """Convert to JSON-ready dict (see schemas/env.schema.json)."""
        record = {
            "schema_name": SCHEMA_NAME,
            "schema_version": SCHEMA_VERSION,
            "producer": dict(PRODUCER),
        }
        for name in self.field_names():
            value = getattr(self, name)
            if name == "pagers":
                value = value._asdict()
            elif isinstance(value, Path):
                value = str(value)
            record[name] = value
        return record


def hostname() -> Optional[str]:
    """Return the local hostname, or None if it cannot be determined."""
    try:
        name = platform.node()
    except OSError:
        return None
    return name or None


def current_dir() -> Optional[Path]:
    """Return the working directory, or None if it is gone or unreadable."""
    try:
        return Path.cwd()
    except OSError:
        return None
