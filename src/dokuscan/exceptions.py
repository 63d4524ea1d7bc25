#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the dokuscan library.

Malformed DokuWiki markup never raises: the scanner degrades to literal text
and synthetic closes instead. The exceptions below cover the conditions that
are real failures of a scan call, such as an unreadable character source,
wrong configuration, or a consumer handed an unbalanced event stream.

Exception Hierarchy
-------------------
- DokuScanError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (wrong options class for the scanner)

  - InputError (character source could not be read or decoded)

  - ParsingError (unexpected failure while scanning)
    - NestingError (event stream is not well-nested)

  - DependencyError (optional package missing)

"""

from typing import Any


class DokuScanError(Exception):
    """Base exception class for all dokuscan-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(DokuScanError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """Exception raised when the scanner receives options of the wrong class.

    Parameters
    ----------
    component_name : str
        Name of the component that received invalid options
    expected_type : type
        The expected options class type
    received_type : type
        The actual options class type that was received
    message : str, optional
        Custom error message. If not provided, generates a helpful message

    """

    def __init__(
        self,
        component_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
    ):
        """Initialize the invalid options error."""
        if message is None:
            message = (
                f"{component_name} expected options of type '{expected_type.__name__}' "
                f"but received '{received_type.__name__}'."
            )
        super().__init__(message, parameter_name="options", parameter_value=received_type)
        self.component_name = component_name
        self.expected_type = expected_type
        self.received_type = received_type


class InputError(DokuScanError):
    """Exception raised when the character source cannot be read.

    This is the only way an I/O failure leaves a scan call. The scanner does
    not retry.

    Parameters
    ----------
    message : str
        Description of the failure
    source_name : str, optional
        Path or other name of the source that failed
    original_error : Exception, optional
        The underlying ``OSError`` or decoding error

    """

    def __init__(self, message: str, source_name: str | None = None, original_error: Exception | None = None):
        """Initialize the input error with the failing source."""
        super().__init__(message, original_error=original_error)
        self.source_name = source_name


class ParsingError(DokuScanError):
    """Exception raised when a scan call fails unexpectedly.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    parsing_stage : str, optional
        The stage of scanning where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the failure

    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error."""
        super().__init__(message, original_error)
        self.parsing_stage = parsing_stage


class NestingError(ParsingError):
    """Exception raised when an event stream is not well-nested.

    Parameters
    ----------
    message : str
        Description of the mismatch
    event : object, optional
        The event that could not be matched

    """

    def __init__(self, message: str, event: Any = None):
        """Initialize the nesting error."""
        super().__init__(message, parsing_stage="nesting")
        self.event = event


class DependencyError(DokuScanError):
    """Exception raised when an optional dependency is not available.

    Parameters
    ----------
    feature_name : str
        Name of the feature requiring the dependency
    missing_packages : list[tuple[str, str]]
        List of (package_name, version_spec) tuples for missing packages
    message : str, optional
        Custom error message. If not provided, generates a helpful message

    """

    def __init__(self, feature_name: str, missing_packages: list[tuple[str, str]], message: str | None = None):
        """Initialize the dependency error with package details."""
        if message is None:
            pkg_list = ", ".join(f"'{name}{spec}'" if spec else f"'{name}'" for name, spec in missing_packages)
            install = " ".join(name for name, _ in missing_packages)
            message = f"{feature_name} requires the following packages: {pkg_list}. Install with: pip install {install}"
        super().__init__(message)
        self.feature_name = feature_name
        self.missing_packages = missing_packages
