"""Structured exception classes for the Twitter Ads SDK."""

import json
from typing import Any, Dict, Optional


class TwitterAdsError(Exception):
    """Base exception for all Twitter Ads SDK errors.

    This exception serves as the parent class for all SDK specific
    exceptions, providing a consistent interface for error handling
    across resources, path resolution and request execution.

    :param message: Human-readable error message
    :param code: Optional error code for programmatic handling
    :param details: Optional dictionary containing additional error context
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        """Initialize the exception with message, code, and details."""
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format.

        :return: Dictionary containing error code, message, and details
        """
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }

    def to_json(self) -> str:
        """Convert exception to JSON string.

        :return: JSON-encoded string representation of the exception
        """
        return json.dumps(self.to_dict(), default=str)


class DeclarationError(TwitterAdsError):
    """Raised when a resource schema or path template is declared incorrectly.

    :param message: Description of the declaration problem
    :param name: Optional name of the offending property or template
    """

    def __init__(self, message: str, name: Optional[str] = None):
        """Initialize declaration error with message and optional name."""
        details = {}
        if name:
            details["name"] = name
        super().__init__(message=message, code="DECLARATION_ERROR", details=details)


class AttributeContractError(TwitterAdsError):
    """Base class for attribute access errors on a resource instance.

    :param message: Description of the error
    :param resource: Name of the resource type
    :param attribute: Name of the attribute involved
    """

    def __init__(self, message: str, code: str, resource: str, attribute: str):
        super().__init__(
            message=message,
            code=code,
            details={"resource": resource, "attribute": attribute},
        )
        self.resource = resource
        self.attribute = attribute


class UnknownAttributeError(AttributeContractError, AttributeError):
    """Raised when an undeclared attribute is read or assigned."""

    def __init__(self, resource: str, attribute: str):
        super().__init__(
            f"{resource} has no attribute '{attribute}'",
            "UNKNOWN_ATTRIBUTE_ERROR",
            resource,
            attribute,
        )


class ReadOnlyAttributeError(AttributeContractError):
    """Raised when assigning to a read-only attribute."""

    def __init__(self, resource: str, attribute: str):
        super().__init__(
            f"{resource}.{attribute} is read-only",
            "READ_ONLY_ATTRIBUTE_ERROR",
            resource,
            attribute,
        )


class CoercionError(TwitterAdsError, ValueError):
    """Raised when a value cannot be coerced to an attribute's declared type.

    The attribute name and the offending raw value are kept so the
    failure can be diagnosed without re-running the assignment.

    :param attribute: Name of the attribute being assigned
    :param value: The raw value that failed coercion
    :param expected: Name of the declared semantic type
    :param reason: Optional detail from the underlying parser
    """

    def __init__(
        self,
        attribute: str,
        value: Any,
        expected: str,
        reason: Optional[str] = None,
    ):
        """Initialize coercion error with attribute, value, and type."""
        message = f"cannot coerce {value!r} to {expected} for attribute '{attribute}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(
            message=message,
            code="COERCION_ERROR",
            details={"attribute": attribute, "value": repr(value), "expected": expected},
        )
        self.attribute = attribute
        self.value = value
        self.expected = expected


class MissingIdentifierError(TwitterAdsError):
    """Raised when a path needs an identifier that is absent.

    Raised during path resolution, before any request is issued.

    :param template: The path template being resolved
    :param placeholder: Name of the placeholder lacking a value
    """

    def __init__(self, template: str, placeholder: str = "id"):
        """Initialize missing identifier error with template and placeholder."""
        super().__init__(
            message=f"'{placeholder}' is required to resolve {template}",
            code="MISSING_IDENTIFIER_ERROR",
            details={"template": template, "placeholder": placeholder},
        )
        self.template = template
        self.placeholder = placeholder


class MalformedResponseError(TwitterAdsError):
    """Raised when a response body does not have the expected structure.

    :param message: Description of the structural problem
    :param path: Optional request path that produced the response
    :param data_path: Optional location inside the body that was missing
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        data_path: Optional[str] = None,
    ):
        """Initialize malformed response error with message and context."""
        details = {}
        if path:
            details["path"] = path
        if data_path:
            details["data_path"] = data_path
        super().__init__(message=message, code="MALFORMED_RESPONSE_ERROR", details=details)
        self.path = path
        self.data_path = data_path


class APIError(TwitterAdsError):
    """Raised for API-related errors.

    This exception is raised when an Ads API request fails with a
    non-successful HTTP status after retries are exhausted.

    :param message: Description of the API error
    :param status_code: Optional HTTP status code from the API response
    :param response_body: Optional response body from the failed request
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_body: Optional[Any] = None,
    ):
        """Initialize API error with message and optional response details."""
        details: Dict[str, Any] = {}
        if status_code:
            details["status_code"] = status_code
        if response_body:
            details["response_body"] = response_body
        super().__init__(message=message, code="API_ERROR", details=details)
        self.status_code = status_code
        self.response_body = response_body


class NotFoundError(APIError):
    """Raised when the requested resource does not exist (HTTP 404)."""

    def __init__(self, message: str, response_body: Optional[Any] = None):
        super().__init__(message=message, status_code=404, response_body=response_body)
        self.code = "NOT_FOUND_ERROR"


class RateLimitError(APIError):
    """Raised when API rate limits are exceeded.

    :param message: Description of the rate limit error
    :param retry_after: Optional seconds to wait before retrying
    :param response_body: Optional response body from the failed request
    """

    def __init__(
        self,
        message: str,
        retry_after: Optional[int] = None,
        response_body: Optional[Any] = None,
    ):
        """Initialize rate limit error with message and optional retry hint."""
        super().__init__(message=message, status_code=429, response_body=response_body)
        self.code = "RATE_LIMIT_ERROR"
        self.retry_after = retry_after
        if retry_after is not None:
            self.details["retry_after"] = retry_after


class ConfigurationError(TwitterAdsError):
    """Raised for configuration-related errors.

    :param message: Description of the configuration error
    :param setting: Optional name of the problematic setting
    """

    def __init__(self, message: str, setting: Optional[str] = None):
        """Initialize configuration error with message and optional setting."""
        details = {}
        if setting:
            details["setting"] = setting
        super().__init__(message=message, code="CONFIGURATION_ERROR", details=details)
