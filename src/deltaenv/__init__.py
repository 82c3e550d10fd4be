"""deltaenv: environment snapshot and pager resolution.

The snapshot is taken once at startup and passed around as a read-only
value; the pager resolver decides which pager command to use.

Submodules:
- env: DeltaEnv snapshot of environment variables and process context
- pager: Pager resolution from BAT_PAGER, PAGER and the default
- errors: Error envelope for the CLI
- format: Table and JSON rendering for the CLI

Usage:
    from deltaenv import DeltaEnv
    env = DeltaEnv.init()
    pager = env.pagers.primary or env.pagers.fallback
"""

from .env import DeltaEnv, Pagers
from .pager import (
    PagerIssue,
    PagerResolution,
    PagerSource,
    get_pager_from_env,
    resolve_pager,
    resolve_pager_details,
    split_command,
)

__all__ = [
    # Snapshot
    "DeltaEnv",
    "Pagers",
    # Pager
    "get_pager_from_env",
    "resolve_pager",
    "resolve_pager_details",
    "split_command",
    "PagerIssue",
    "PagerResolution",
    "PagerSource",
]
