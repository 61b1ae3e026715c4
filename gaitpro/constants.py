"""Constants used across the gaitpro package.

Pure configuration constants (polynomial layout, tolerances, defaults) are
stored as raw values.
"""

from __future__ import annotations

# =============================================================================
# Polynomial layout
# =============================================================================

# Coefficients per axis; coefficient k multiplies t**k (quintic polynomial).
COEFF_COUNT = 6
POLYNOMIAL_DEGREE = COEFF_COUNT - 1

# Spatial axes per segment (x, y).
DIM2D = 2

# Position, velocity, acceleration.
DERIV_COUNT = 3

# =============================================================================
# Numerical tolerances
# =============================================================================

# Floating-point overrun absorbed at segment and horizon boundaries (seconds).
TIME_TOLERANCE = 1e-9

# Largest difference accepted between per-limb horizons (seconds).
HORIZON_TOLERANCE = 1e-9

# Central-difference step used by the Jacobian checker.
FINITE_DIFFERENCE_STEP = 1e-6

# Acceptance threshold for analytic vs. numeric Jacobian rows.
JACOBIAN_CHECK_TOLERANCE = 1e-6

# =============================================================================
# Parametrization defaults
# =============================================================================

# Coefficient indices exposed to the optimizer while a limb is airborne.
DEFAULT_SWING_FREE_COEFFICIENTS = (0, 1, 2, 3)

# Default phase durations for generated step sequences (seconds).
DEFAULT_INITIAL_STANCE_TIME = 0.4
DEFAULT_SWING_TIME = 0.6
DEFAULT_INTERMEDIATE_STANCE_TIME = 0.2
DEFAULT_FINAL_STANCE_TIME = 0.4

# Default sampling step for trajectory output (seconds).
DEFAULT_TRAJECTORY_DT = 0.01

# Iterates kept in memory by the iteration history.
DEFAULT_MAX_HISTORY_ENTRIES = 1000
