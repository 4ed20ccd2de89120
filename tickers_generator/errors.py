"""
Error Types for Tickers Generator

Every failure that aborts a generation run is a TickersGeneratorError tagged
with an ErrorKind. Boundaries branch on ``error.kind`` rather than on the
concrete class, and ``to_dict()`` gives the structured form used in logs.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(Enum):
    """Error kinds for classification"""
    PARSE = "parse"
    VALIDATION = "validation"
    EMPTY_RESULT = "empty_result"
    FEED = "feed"
    PUBLISH = "publish"


class ErrorContext:
    """Context information for errors"""

    def __init__(self, **kwargs):
        self.timestamp = datetime.now(timezone.utc)
        self.operation = kwargs.get('operation')
        self.component = kwargs.get('component')
        self.run_id = kwargs.get('run_id')
        self.additional_data = kwargs.get('additional_data', {})

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging"""
        return {
            'timestamp': self.timestamp.isoformat(),
            'operation': self.operation,
            'component': self.component,
            'run_id': self.run_id,
            'additional_data': self.additional_data
        }


class TickersGeneratorError(Exception):
    """Base error carrying its kind and the offending value, if any"""

    kind: ErrorKind = ErrorKind.VALIDATION

    def __init__(
        self,
        message: str,
        invalid_element: Any = None,
        context: Optional[ErrorContext] = None,
    ):
        super().__init__(message)
        self.message = message
        self.invalid_element = invalid_element
        self.context = context

    def __str__(self) -> str:
        return f"{self.__class__.__name__}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging"""
        cause = self.__cause__
        return {
            'error_type': self.__class__.__name__,
            'kind': self.kind.value,
            'message': self.message,
            'invalid_element': self.invalid_element,
            'context': self.context.to_dict() if self.context else None,
            'original_error': {
                'type': type(cause).__name__ if cause else None,
                'message': str(cause) if cause else None
            }
        }


class ParseError(TickersGeneratorError):
    """Feed body is not a decodable JSON object"""
    kind = ErrorKind.PARSE


class InstrumentError(TickersGeneratorError):
    """Structural or field-level violation in the feed data"""
    kind = ErrorKind.VALIDATION


class EmptyResultError(TickersGeneratorError):
    """No instruments reached the renderer"""
    kind = ErrorKind.EMPTY_RESULT


class FeedError(TickersGeneratorError):
    """Feed could not be retrieved"""
    kind = ErrorKind.FEED


class PublishError(TickersGeneratorError):
    """Rendered page could not be uploaded"""
    kind = ErrorKind.PUBLISH
