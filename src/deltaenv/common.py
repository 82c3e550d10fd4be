"""Common constants for deltaenv.

This module defines the environment variable names and the contract-level
constants shared by the snapshot, the pager resolver and the CLI.
"""

# Schema version as integer per contract
SCHEMA_VERSION = 1

# Producer info - identifies the implementation that created records
PRODUCER = {
    "name": "deltaenv",
    "version": "0.1.0",
}

# =============================================================================
# Environment Variables
# =============================================================================

BAT_THEME = "BAT_THEME"
COLORTERM = "COLORTERM"
GIT_CONFIG_PARAMETERS = "GIT_CONFIG_PARAMETERS"
GIT_PREFIX = "GIT_PREFIX"
DELTA_FEATURES = "DELTA_FEATURES"
DELTA_NAVIGATE = "DELTA_NAVIGATE"
DELTA_EXPERIMENTAL_MAX_LINE_DISTANCE_FOR_NAIVELY_PAIRED_LINES = (
    "DELTA_EXPERIMENTAL_MAX_LINE_DISTANCE_FOR_NAIVELY_PAIRED_LINES"
)

# Stored verbatim in pagers.primary
DELTA_PAGER = "DELTA_PAGER"

# Pager resolution sources, highest precedence first
BAT_PAGER = "BAT_PAGER"
PAGER = "PAGER"

# =============================================================================
# Pager Policy
# =============================================================================

DEFAULT_PAGER = "less"

# Pagers that mangle colored output; only replaced when they come from PAGER
PROBLEMATIC_PAGERS = frozenset(["more", "most"])
