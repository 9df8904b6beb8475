"""
Core Exception Hierarchy for BoardCache

Absence of a cached value is never an exception. These types cover
configuration mistakes, invalid input handed to the article cache and
failures reported by the article repository.
"""

import time
import uuid
from enum import Enum
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field


class ErrorCode(Enum):
    """Error codes, grouped by family."""

    # Configuration errors (3000-3999)
    CONFIG_INVALID_FORMAT = 3001
    CONFIG_INVALID_VALUE = 3003
    CONFIG_FILE_NOT_FOUND = 3004
    CONFIG_SCHEMA_VALIDATION = 3006

    # Validation errors (5000-5999)
    VALIDATION_INVALID_INPUT = 5001
    VALIDATION_MISSING_FIELD = 5002
    VALIDATION_TYPE_MISMATCH = 5003

    # Repository errors (8000-8999), raised by ArticleRepository implementations
    REPOSITORY_QUERY_FAILED = 8001
    REPOSITORY_UNAVAILABLE = 8002
    REPOSITORY_TIMEOUT = 8003

    UNKNOWN_ERROR = 9000


@dataclass
class ErrorContext:
    """Where an error happened."""

    operation: str = ""
    article_id: Optional[str] = None
    correlation_id: Optional[str] = None
    timestamp: float = field(default_factory=time.time)
    user_context: Dict[str, Any] = field(default_factory=dict)


@dataclass
class RecoverySuggestion:
    """Something the user can do about an error."""

    action: str
    description: str
    command: Optional[str] = None  # CLI command to resolve
    priority: int = 1  # 1 is shown first


CHECK_CONFIG = RecoverySuggestion(
    action="Check configuration values",
    description="Cache sizes and side list counts must be positive integers.",
    command="boardcache config validate",
)

CREATE_CONFIG = RecoverySuggestion(
    action="Create configuration file",
    description="Write a configuration file from one of the built-in profiles.",
    command="boardcache config init boardcache.yaml",
)

FIX_CONFIG_SYNTAX = RecoverySuggestion(
    action="Fix configuration syntax",
    description="The file must hold a YAML or JSON mapping of configuration sections.",
    command="boardcache config schema",
)


class BoardCacheError(Exception):
    """
    Base exception for all BoardCache errors.

    Carries an error code, the context it was raised in and recovery
    suggestions ordered by priority. Every instance gets a short
    correlation id that is logged and shown by the CLI.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        context: Optional[ErrorContext] = None,
        cause: Optional[Exception] = None,
        suggestions: Optional[List[RecoverySuggestion]] = None
    ):
        super().__init__(message)

        self.message = message
        self.error_code = error_code
        self.context = context or ErrorContext()
        self.cause = cause
        self.suggestions: List[RecoverySuggestion] = []

        for suggestion in suggestions or []:
            self.add_suggestion(suggestion)

        if not self.context.correlation_id:
            self.context.correlation_id = str(uuid.uuid4())[:8]

    def add_suggestion(self, suggestion: RecoverySuggestion) -> None:
        """Add a recovery suggestion, keeping the list ordered by priority."""
        self.suggestions.append(suggestion)
        self.suggestions.sort(key=lambda s: s.priority)

    def __str__(self) -> str:
        return f"[{self.error_code.name}] {self.message}"


class ConfigurationError(BoardCacheError):
    """
    Exception for configuration-related errors.

    Gets a default suggestion matching its error code unless the caller
    passes its own.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.CONFIG_INVALID_VALUE,
        config_key: Optional[str] = None,
        config_value: Optional[Any] = None,
        **kwargs
    ):
        context = kwargs.pop('context', None) or ErrorContext()
        if config_key:
            context.user_context['config_key'] = config_key
            context.user_context['config_value'] = config_value

        if not kwargs.get('suggestions'):
            default = _CONFIG_SUGGESTIONS.get(error_code)
            kwargs['suggestions'] = [default] if default else []

        super().__init__(message, error_code=error_code, context=context, **kwargs)


_CONFIG_SUGGESTIONS = {
    ErrorCode.CONFIG_FILE_NOT_FOUND: CREATE_CONFIG,
    ErrorCode.CONFIG_INVALID_FORMAT: FIX_CONFIG_SYNTAX,
    ErrorCode.CONFIG_INVALID_VALUE: CHECK_CONFIG,
    ErrorCode.CONFIG_SCHEMA_VALIDATION: CHECK_CONFIG,
}


class ValidationError(BoardCacheError):
    """Exception for invalid input handed to a cache operation."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.VALIDATION_INVALID_INPUT,
        field_name: Optional[str] = None,
        field_value: Optional[Any] = None,
        **kwargs
    ):
        context = kwargs.pop('context', None) or ErrorContext()
        if field_name:
            context.user_context['field_name'] = field_name
            context.user_context['field_value'] = field_value

        super().__init__(message, error_code=error_code, context=context, **kwargs)


class RepositoryError(BoardCacheError):
    """
    Exception raised by article repositories when a call fails.

    The article cache treats it as a skipped side list refresh.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.REPOSITORY_QUERY_FAILED,
        operation: Optional[str] = None,
        **kwargs
    ):
        context = kwargs.pop('context', None) or ErrorContext()
        if operation:
            context.operation = operation

        super().__init__(message, error_code=error_code, context=context, **kwargs)
