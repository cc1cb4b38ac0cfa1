import math
from dataclasses import dataclass

import numpy as np
from numba import njit, types
from numba.typed import Dict, List

from tseries.utils.config import (CACHE, DEFAULT_NUM_VARS, DEFAULT_ORDER,
                                  FASTMATH, MAX_ORDER, MAX_VARS)
from tseries.utils.exceptions import TableError
from tseries.utils.log_config import logger

_BITS = 6
_MASK = 0x3F


def _monomials(num_vars: int, degree: int):
    """Yield exponent tuples of total `degree`, x_0 exponent descending first."""
    if num_vars == 1:
        yield (degree,)
        return
    for k0 in range(degree, -1, -1):
        for rest in _monomials(num_vars - 1, degree - k0):
            yield (k0,) + rest


def _pack(k) -> int:
    packed = 0
    for v in range(1, len(k)):
        packed |= (int(k[v]) & _MASK) << (_BITS * (v - 1))
    return packed


def init_index_tables(num_vars: int, max_degree: int):
    """
    Initialize lookup tables for polynomial multi-index encoding and decoding.

    Parameters
    ----------
    num_vars : int
        Number of variables of the homogeneous polynomials.
    max_degree : int
        Maximum polynomial degree to initialize tables for

    Returns
    -------
    psi : numpy.ndarray
        2D array where psi[i, d] contains the number of monomials of degree d
        in i variables. Shape is (num_vars+1, max_degree+1)

    clmo : numba.typed.List
        List of arrays where clmo[d] contains packed representations of all
        multi-indices for monomials of degree d.

    Notes
    -----
    The packing scheme allocates 6 bits for each variable x_1 through
    x_{n-1}, with x_0's exponent implicitly determined by the total degree.
    Packed keys add like exponents: the key of a product of two monomials
    is the sum of their keys, as long as every exponent stays below 64.
    """
    if not 1 <= num_vars <= MAX_VARS:
        raise ValueError(f"num_vars must be in [1, {MAX_VARS}], got {num_vars}")
    if not 0 <= max_degree <= MAX_ORDER:
        raise ValueError(f"max_degree must be in [0, {MAX_ORDER}], got {max_degree}")

    psi = np.zeros((num_vars+1, max_degree+1), dtype=np.int64)
    for i in range(1, num_vars+1):
        for d in range(max_degree+1):
            psi[i, d] = math.comb(d + i - 1, i - 1)
    psi[0, 0] = 1

    clmo = List()
    for d in range(max_degree+1):
        arr = np.empty(psi[num_vars, d], dtype=np.int64)
        for idx, k in enumerate(_monomials(num_vars, d)):
            arr[idx] = _pack(k)
        clmo.append(arr)
    return psi, clmo


@njit(fastmath=FASTMATH, cache=CACHE)
def _create_encode_dict_from_clmo(clmo):
    """Create a list of dictionaries mapping packed index -> position for each degree."""
    encode_list = List()
    for arr in clmo:
        d_map = Dict.empty(key_type=types.int64, value_type=types.int64)
        for pos in range(arr.shape[0]):
            d_map[arr[pos]] = pos
        encode_list.append(d_map)
    return encode_list


def decode_multiindex(pos: int, degree: int, num_vars: int, clmo) -> np.ndarray:
    """
    Decode a packed multi-index from its position in the lookup table.

    Returns
    -------
    k : numpy.ndarray
        Exponents [k_0, ..., k_{n-1}] with sum equal to `degree`.
    """
    packed = int(clmo[degree][pos])
    k = np.empty(num_vars, dtype=np.int64)
    s = 0
    for v in range(1, num_vars):
        k[v] = (packed >> (_BITS * (v - 1))) & _MASK
        s += k[v]
    k[0] = degree - s
    return k


def encode_multiindex(k, degree: int, encode_dict_list) -> int:
    """
    Encode a multi-index to find its position in the coefficient array.

    Returns
    -------
    int
        The position of the multi-index, or -1 if it is not a valid monomial
        of the given degree.
    """
    if degree < 0 or degree >= len(encode_dict_list):
        return -1
    if any(e < 0 or e > _MASK for e in k) or sum(int(e) for e in k) != degree:
        return -1
    d_map = encode_dict_list[degree]
    key = _pack(k)
    if key in d_map:
        return int(d_map[key])
    return -1


@dataclass(frozen=True)
class IndexTables:
    """Read-only bundle of the combinatorial tables for one configuration."""
    num_vars: int
    order: int
    psi: np.ndarray
    clmo: List
    encode: List

    def size(self, degree: int) -> int:
        """Number of monomials of the given degree."""
        return int(self.psi[self.num_vars, degree])


# -----------------------------------------------------------------------------
#  GLOBAL tables, written once per set_variables() call and read-only after
# -----------------------------------------------------------------------------
_TABLES = None


def set_variables(num_vars: int = DEFAULT_NUM_VARS, order: int = DEFAULT_ORDER) -> IndexTables:
    """
    Build the process-wide index tables used by every homogeneous polynomial.

    Must be called once before any multivariate arithmetic. Calling it
    again installs a new table object; polynomials created earlier keep a
    reference to the tables they were built with.

    Parameters
    ----------
    num_vars : int
        Number of variables.
    order : int
        Maximum total degree.

    Returns
    -------
    IndexTables
        The installed tables.
    """
    global _TABLES
    psi, clmo = init_index_tables(num_vars, order)
    psi.setflags(write=False)
    encode = _create_encode_dict_from_clmo(clmo)
    _TABLES = IndexTables(num_vars, order, psi, clmo, encode)
    logger.info(f"Index tables initialised: {num_vars} variables, order {order}, "
                f"{int(psi[num_vars, :].sum())} monomials")
    return _TABLES


def get_tables() -> IndexTables:
    if _TABLES is None:
        raise TableError("Index tables are not initialised; call set_variables() first")
    return _TABLES


def get_order() -> int:
    """Maximum total degree of the installed tables."""
    return get_tables().order


def get_num_vars() -> int:
    return get_tables().num_vars


def make_poly(degree: int, tables: IndexTables, dtype=np.float64) -> np.ndarray:
    """
    Create a new homogeneous coefficient array of specified degree.

    Parameters
    ----------
    degree : int
        Degree of the polynomial
    tables : IndexTables
        Tables from :func:`set_variables`
    dtype : numpy dtype, optional
        Coefficient dtype; ``object`` for exact or mpmath coefficients.

    Returns
    -------
    numpy.ndarray
        Array of zeros of size psi[num_vars, degree].
    """
    if degree < 0 or degree > tables.order:
        raise TableError(f"Degree {degree} outside the tables' range [0, {tables.order}]")
    return np.zeros(tables.size(degree), dtype=dtype)
