"""
Utility functions for the Gravwell package.
"""

import warnings
from typing import Type
from .config import config


def validation_error(message: str, error_class: Type[Exception] = ValueError):
    """
    Raise error or warn based on config.STRICT_VALIDATION.

    This function provides consistent validation behavior across the package.
    When STRICT_VALIDATION is True (default), raises the specified exception.
    When False, issues a UserWarning instead and returns, leaving the caller
    to continue with a sanitized value.

    Parameters
    ----------
    message : str
        Validation error message
    error_class : Type[Exception], optional
        Exception class to raise if STRICT_VALIDATION is True.
        Default: ValueError

    Raises
    ------
    Exception (of type error_class)
        If config.STRICT_VALIDATION is True

    Warns
    -----
    UserWarning
        If config.STRICT_VALIDATION is False

    Examples
    --------
    >>> from gravwell.utils import validation_error
    >>> from gravwell import config
    >>> config.STRICT_VALIDATION = True
    >>> validation_error("dt must be non-negative")  # Raises ValueError

    >>> config.STRICT_VALIDATION = False
    >>> validation_error("dt must be non-negative")  # Issues warning
    """
    if config.STRICT_VALIDATION:
        raise error_class(message)
    else:
        warnings.warn(message, UserWarning, stacklevel=3)
