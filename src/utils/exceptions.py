"""
Custom exceptions for the waste generation forecasting core.
"""


class WastePredictError(Exception):
    """Base exception for the waste forecasting core."""
    pass


class InvalidInputError(WastePredictError):
    """Exception raised when a computation receives unusable input."""
    pass


class ModelNotFoundError(WastePredictError):
    """Exception raised when an unknown model variant is requested."""
    pass


class ConfigurationError(WastePredictError):
    """Exception raised for malformed configuration values."""
    pass
