"""
Custom exceptions for the tseries package.
"""

class TSeriesError(Exception):
    """Base exception for tseries errors.
    
    Parameters
    ----------
    message : str
        The error message.
    """

    def __init__(self, message: str):
        super().__init__(message)


class DomainError(TSeriesError, ValueError):
    """Raised when an operation is mathematically undefined for its input.

    Examples are a negative power of a homogeneous polynomial, a square
    root whose first non-vanishing coefficient sits at an odd power, or a
    non-integer power of a series with a vanishing basepoint.

    Parameters
    ----------
    message : str
        The error message.
    """

    def __init__(self, message: str):
        super().__init__(message)


class TableError(TSeriesError, RuntimeError):
    """Raised when the homogeneous-polynomial index tables are missing or
    too small for the requested degree.
    
    Parameters
    ----------
    message : str
        The error message.
    """
    
    def __init__(self, message: str):
        super().__init__(message)
