"""
Error definitions for the Fixed Ratio Trading client
"""

from .exceptions import (
    ErrorCode,
    FixedRatioError,
    RpcError,
    SimulationFailed,
    DerivationFailure,
    RatioMathError,
    ParameterError,
    ConfigurationError,
)
from .program_errors import (
    ProgramError,
    PROGRAM_ERROR_MESSAGES,
    format_error,
    parse_error_code,
)

__all__ = [
    "ErrorCode",
    "FixedRatioError",
    "RpcError",
    "SimulationFailed",
    "DerivationFailure",
    "RatioMathError",
    "ParameterError",
    "ConfigurationError",
    # Program error codes
    "ProgramError",
    "PROGRAM_ERROR_MESSAGES",
    "format_error",
    "parse_error_code",
]
