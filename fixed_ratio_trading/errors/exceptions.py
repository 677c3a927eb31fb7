"""
Exception definitions for the Fixed Ratio Trading client
"""

from enum import Enum
from typing import List, Optional


class ErrorCode(Enum):
    """
    Unified error codes for client-side failures

    1xxx - RPC errors
    2xxx - Simulation errors
    3xxx - Derivation errors
    4xxx - Arithmetic errors
    5xxx - Parameter errors
    9xxx - Configuration errors
    """
    # RPC errors (recoverable)
    RPC_CONNECTION_FAILED = "1001"
    RPC_TIMEOUT = "1002"
    RPC_RATE_LIMITED = "1003"
    RPC_INVALID_RESPONSE = "1004"

    # Simulation errors
    SIMULATION_FAILED = "2001"

    # Address derivation errors
    DERIVATION_EXHAUSTED = "3001"
    DERIVATION_INVALID_SEEDS = "3002"

    # Ratio math errors
    DIVISION_BY_ZERO = "4001"

    # Parameter errors
    PARAMETER_OUT_OF_RANGE = "5001"
    PARAMETER_INVALID = "5002"

    # Configuration errors
    CONFIG_INVALID = "9001"
    CONFIG_MISSING = "9002"


class FixedRatioError(Exception):
    """
    Base exception for all Fixed Ratio Trading client errors

    Attributes:
        message: Human-readable error message
        code: Error code for programmatic handling
        recoverable: Whether the error might succeed on retry
        original_error: The underlying exception if any
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        recoverable: bool = False,
        original_error: Optional[Exception] = None,
        details: Optional[dict] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.recoverable = recoverable
        self.original_error = original_error
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"

    @property
    def should_retry(self) -> bool:
        """Indicate if the caller may retry the operation"""
        return self.recoverable


class RpcError(FixedRatioError):
    """
    RPC transport errors - surfaced to the caller on the first failure

    Raised when:
    - Connection to the RPC endpoint fails
    - Request times out
    - Rate limit is hit
    - The endpoint answers with an HTTP or JSON-RPC error
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.RPC_CONNECTION_FAILED,
        original_error: Optional[Exception] = None,
        endpoint: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        merged = {"endpoint": endpoint} if endpoint else {}
        merged.update(details or {})
        super().__init__(
            message,
            code,
            recoverable=True,
            original_error=original_error,
            details=merged,
        )
        self.endpoint = endpoint

    @classmethod
    def connection_failed(cls, endpoint: str, error: Exception = None) -> "RpcError":
        return cls(
            f"Failed to connect to RPC endpoint: {endpoint}",
            ErrorCode.RPC_CONNECTION_FAILED,
            original_error=error,
            endpoint=endpoint,
        )

    @classmethod
    def timeout(cls, endpoint: str, timeout_seconds: float) -> "RpcError":
        return cls(
            f"RPC request timed out after {timeout_seconds}s",
            ErrorCode.RPC_TIMEOUT,
            endpoint=endpoint,
        )

    @classmethod
    def rate_limited(cls, endpoint: str) -> "RpcError":
        return cls(
            "RPC rate limit exceeded",
            ErrorCode.RPC_RATE_LIMITED,
            endpoint=endpoint,
        )

    @classmethod
    def http_status(cls, endpoint: str, status_code: int, error: Exception = None) -> "RpcError":
        return cls(
            f"HTTP error {status_code}",
            ErrorCode.RPC_INVALID_RESPONSE,
            original_error=error,
            endpoint=endpoint,
            details={"status_code": status_code},
        )

    @classmethod
    def rpc_error(cls, endpoint: str, error: dict) -> "RpcError":
        return cls(
            f"RPC error: {error.get('message', str(error))}",
            ErrorCode.RPC_INVALID_RESPONSE,
            endpoint=endpoint,
            details={
                "rpc_error_code": error.get("code"),
                "rpc_error_data": error.get("data"),
            },
        )


class SimulationFailed(FixedRatioError):
    """
    A dry-run of a read-only instruction reported an error

    The program logs collected before the failure are kept on the exception
    so callers can still inspect them (or format a program error code).
    """

    def __init__(
        self,
        message: str,
        err: object = None,
        logs: Optional[List[str]] = None,
    ):
        super().__init__(
            message,
            ErrorCode.SIMULATION_FAILED,
            recoverable=False,
            details={"err": err, "logs": logs},
        )
        self.err = err
        self.logs = logs or []

    @classmethod
    def from_result(cls, operation: str, err: object, logs: Optional[List[str]] = None) -> "SimulationFailed":
        return cls(
            f"{operation} simulation failed: {err}",
            err=err,
            logs=logs,
        )


class DerivationFailure(FixedRatioError):
    """
    Program address derivation failed

    Raised when:
    - No bump in [0, 255] yields an off-curve address
    - Seeds break the runtime limits (count or length)
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.DERIVATION_EXHAUSTED):
        super().__init__(message, code, recoverable=False)

    @classmethod
    def exhausted(cls, program_id: str) -> "DerivationFailure":
        return cls(
            f"Unable to find a viable program address bump seed for program {program_id}",
            ErrorCode.DERIVATION_EXHAUSTED,
        )

    @classmethod
    def invalid_seeds(cls, reason: str) -> "DerivationFailure":
        return cls(f"Invalid seeds: {reason}", ErrorCode.DERIVATION_INVALID_SEEDS)


class RatioMathError(FixedRatioError, ArithmeticError):
    """
    Ratio arithmetic cannot produce a meaningful result

    Subclasses ArithmeticError so callers can catch it with the builtin.
    """

    def __init__(self, message: str, operation: Optional[str] = None):
        super().__init__(
            message,
            ErrorCode.DIVISION_BY_ZERO,
            recoverable=False,
            details={"operation": operation},
        )
        self.operation = operation

    @classmethod
    def division_by_zero(cls, operation: str, divisor_name: str) -> "RatioMathError":
        return cls(
            f"Division by zero in {operation}: {divisor_name} is 0",
            operation=operation,
        )


class ParameterError(FixedRatioError, ValueError):
    """
    An argument passed to an encoder or math helper cannot be used

    Validators report problems as ValidationResult data; this exception is
    raised only where a computation cannot proceed with the given value.
    """

    def __init__(
        self,
        message: str,
        param: Optional[str] = None,
        code: ErrorCode = ErrorCode.PARAMETER_INVALID,
    ):
        super().__init__(
            message,
            code,
            recoverable=False,
            details={"param": param},
        )
        self.param = param

    @classmethod
    def out_of_range(cls, param: str, value: object, low: int, high: int) -> "ParameterError":
        return cls(
            f"'{param}' must be in [{low}, {high}], got {value}",
            param=param,
            code=ErrorCode.PARAMETER_OUT_OF_RANGE,
        )

    @classmethod
    def invalid(cls, param: str, reason: str) -> "ParameterError":
        return cls(f"Invalid '{param}': {reason}", param=param)


class ConfigurationError(FixedRatioError):
    """
    Configuration-related errors

    Raised when:
    - Required configuration is missing
    - Configuration values are invalid
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CONFIG_INVALID,
    ):
        super().__init__(message, code, recoverable=False)

    @classmethod
    def missing(cls, param: str) -> "ConfigurationError":
        return cls(f"Missing required configuration: {param}", ErrorCode.CONFIG_MISSING)

    @classmethod
    def invalid(cls, param: str, reason: str) -> "ConfigurationError":
        return cls(f"Invalid configuration '{param}': {reason}", ErrorCode.CONFIG_INVALID)
