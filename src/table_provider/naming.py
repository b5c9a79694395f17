from __future__ import annotations

import os
from collections.abc import Callable

MAX_TABLE_NAME_LENGTH = 255
UNIQUE_SUFFIX_BYTES = 20  # sha1 digest size


def new_unique_name(
    prefix: str,
    *,
    max_length: int = MAX_TABLE_NAME_LENGTH,
    random_bytes: int = UNIQUE_SUFFIX_BYTES,
    rand_bytes: Callable[[int], bytes] | None = None,
) -> str:
    """Append a random hex suffix to ``prefix``, truncated to ``max_length``.

    The prefix always survives intact when it fits; the suffix is what gets
    shortened.
    """
    if max_length <= 0:
        raise ValueError("max_length must be > 0")
    if random_bytes <= 0:
        raise ValueError("random_bytes must be > 0")
    if len(prefix) >= max_length:
        raise ValueError(f"prefix {prefix!r} leaves no room for a unique suffix (max_length={max_length})")

    suffix = (rand_bytes or os.urandom)(random_bytes).hex()
    return (prefix + suffix)[:max_length]
