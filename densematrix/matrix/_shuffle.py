"""
In-place row permutation.

The generator is always explicit: either supplied by the caller or
built from a seed. With no seed, numpy.random.default_rng draws fresh
OS entropy once for this call.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from densematrix.core.exceptions import ValidationError


def resolve_rng(
    seed: int | None = None,
    rng: np.random.Generator | None = None,
) -> np.random.Generator:
    """Generator from either an explicit rng or a seed, never both."""
    if rng is not None:
        if seed is not None:
            raise ValidationError("shuffle_rows: pass either seed or rng, not both")
        if not isinstance(rng, np.random.Generator):
            raise ValidationError(
                f"rng: expected numpy.random.Generator, got {type(rng).__name__}"
            )
        return rng
    try:
        return np.random.default_rng(seed)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"seed: invalid seed {seed!r}: {e}") from e


def shuffle_rows(data: NDArray[np.float64], rng: np.random.Generator) -> None:
    """Permute the rows of data in place; row contents are untouched."""
    order = rng.permutation(data.shape[0])
    data[:] = data[order]
