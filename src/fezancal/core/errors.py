# src/fezancal/core/errors.py
from __future__ import annotations

from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    DATE_VALIDATION = "date_validation"
    CALCULATION = "calculation"
    CACHE_CONFIG = "cache_config"


class LunarError(Exception):
    """
    Base of the engine's error taxonomy.

    - kind: which failure family this is
    - date: the offending input (date/datetime or the raw value), if any
    - cause: the underlying exception, if any (also set as __cause__ by callers)
    """
    kind: ErrorKind = ErrorKind.CALCULATION

    def __init__(self, message: str, date: Any = None, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.message = message
        self.date = date
        self.cause = cause

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "date": None if self.date is None else str(self.date),
            "cause": None if self.cause is None else repr(self.cause),
        }


class LunarCalculationError(LunarError):
    kind = ErrorKind.CALCULATION


class DateValidationError(LunarCalculationError):
    kind = ErrorKind.DATE_VALIDATION

    def __init__(self, message: str, date: Any) -> None:
        super().__init__(message, date=date)


class CacheConfigError(LunarError):
    kind = ErrorKind.CACHE_CONFIG

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message, cause=cause)
