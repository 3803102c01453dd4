"""
Core Exceptions
================

Custom exceptions for the SLA checker.

These exceptions define domain-specific errors that can be caught and handled
appropriately at the application boundaries.
"""

from typing import Optional


class ApplicationException(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ValidationException(ApplicationException):
    """Exception for inputs that are well-formed but cannot be evaluated together."""


class ConfigurationException(ApplicationException):
    """Exception for configuration errors (e.g. an unknown duration unit)."""


class ExternalServiceException(ApplicationException):
    """Base exception for external service failures."""

    def __init__(
        self,
        service_name: str,
        message: str,
        details: Optional[dict] = None
    ):
        self.service_name = service_name
        super().__init__(f"{service_name}: {message}", details)


class HolidaySourceException(ExternalServiceException):
    """Exception for holiday API failures (network, status or parse errors)."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__("Holiday Source", message, details)
