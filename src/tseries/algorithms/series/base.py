class AbstractSeries:
    """
    Common base of every truncated-series shape.

    Subclasses store their coefficients in ``self.coeffs`` and their
    truncation order (or degree) in ``self.order``. numpy is told to defer
    to the series operators so that ``np.float64(2) * series`` stays a
    series instead of being broadcast over the coefficients.
    """

    __slots__ = ()
    __array_ufunc__ = None
    __hash__ = None

    def __pow__(self, exponent):
        from tseries.algorithms.power.dispatch import power
        return power(self, exponent)

    def iszero(self) -> bool:
        raise NotImplementedError
