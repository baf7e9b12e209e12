"""Visit id generation.

The range expander never invents ids itself; it calls an injected
:data:`IdFactory`. Production code uses :func:`generate_visit_id` (UUID4,
collision resistant); tests pass :func:`sequential_ids` for reproducible ids.

INVARIANT: IDs are permanent. Once assigned, a visit id never changes
and is never reused.
"""

from __future__ import annotations

import itertools
import uuid
from collections.abc import Callable

VISIT_PREFIX = "vst_"

IdFactory = Callable[[], str]


def generate_visit_id() -> str:
    """Return ``vst_`` followed by the 32 hex chars of a random UUID4."""
    return f"{VISIT_PREFIX}{uuid.uuid4().hex}"


def sequential_ids(prefix: str = VISIT_PREFIX, *, start: int = 1) -> IdFactory:
    """Build a deterministic factory yielding ``{prefix}0001``, ``{prefix}0002``, ...

    Minimum 4 digits, grows naturally past 9999.
    """
    counter = itertools.count(start)

    def _next() -> str:
        return f"{prefix}{next(counter):04d}"

    return _next
