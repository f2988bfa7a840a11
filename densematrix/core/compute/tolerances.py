"""
Tolerances and thresholds for matrix computation.

Single home for every numeric constant that changes algorithm behavior:
- Pivot tolerance: below it a pivot is treated as zero (singular)
- Equality tolerance: default per-element slack for Matrix.equals
- Parallel threshold: element count above which 'auto' goes threaded

Used by the elimination kernels, the equality check, and backend dispatch.
"""

# Pivot magnitude below which elimination treats a column as singular.
PIVOT_TOLERANCE: float = 1e-12

# Default per-element absolute difference allowed by Matrix.equals.
EQUALITY_TOLERANCE: float = 1e-12

# Elementwise work above this many output cells is split across threads
# when backend='auto'.
PARALLEL_THRESHOLD: int = 10_000
