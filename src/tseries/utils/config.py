# Numba compilation
FASTMATH = False  # Global flag for Numba's fastmath option
CACHE = True      # Cache compiled kernels on disk

# Precision control
MPMATH_DPS = 50  # Decimal places for mpmath leading-coefficient evaluation

# Index table limits (6 bits per packed exponent, 64-bit keys)
MAX_VARS = 11
MAX_ORDER = 63

# Defaults for set_variables()
DEFAULT_NUM_VARS = 6
DEFAULT_ORDER = 6

TOL = 1e-14
