"""
Transport defaults for talking to a catalog agent over HTTP.
"""

from __future__ import annotations

from consulcat.datastructures.type_aliases import DurationSeconds

# Request timeout for non-blocking queries
DEFAULT_REQUEST_TIMEOUT: DurationSeconds = 10.0

# Servers add up to wait/16 of random jitter to a blocking query
BLOCKING_JITTER_FRACTION = 1 / 16

DEFAULT_USER_AGENT = "consulcat"
