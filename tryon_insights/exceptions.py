"""
Module: exceptions

Purpose: Domain-specific exception hierarchy for the survey insights engine.

The aggregation engine itself never raises: unknown or missing answers degrade
to neutral values. These exceptions are raised only at the boundaries, when a
submission is written, when a response snapshot is loaded, or when a report is
exported. All exceptions carry a context dict for logging.
"""

from typing import Any


class SurveyInsightsError(Exception):
    """Base exception for all survey insights errors."""

    def __init__(self, message: str, *, context: dict[str, Any] | None = None) -> None:
        self.message = message
        self.context = context or {}
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, context={self.context!r})"


class DataValidationError(SurveyInsightsError):
    """Raised when a single value fails validation at a boundary."""

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        if field is not None:
            ctx["field"] = field
        if value is not None:
            ctx["value"] = value
        super().__init__(message, context=ctx)
        self.field = field
        self.value = value


class SubmissionValidationError(DataValidationError):
    """Raised when a survey submission is rejected by the question bank."""

    def __init__(
        self,
        message: str,
        *,
        missing_fields: list[str] | None = None,
        invalid_fields: dict[str, Any] | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        ctx["missing_fields"] = missing_fields or []
        ctx["invalid_fields"] = invalid_fields or {}
        super().__init__(message, context=ctx)
        self.missing_fields = missing_fields or []
        self.invalid_fields = invalid_fields or {}


class ResponseLoadError(SurveyInsightsError):
    """Raised when a response snapshot cannot be read or parsed."""

    def __init__(
        self,
        message: str,
        *,
        source: str,
        line_number: int | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        ctx["source"] = source
        if line_number is not None:
            ctx["line_number"] = line_number
        super().__init__(message, context=ctx)
        self.source = source
        self.line_number = line_number


class ReportGenerationError(SurveyInsightsError):
    """Raised when report generation or export fails."""

    def __init__(
        self,
        message: str,
        *,
        report_type: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        if report_type is not None:
            ctx["report_type"] = report_type
        super().__init__(message, context=ctx)
        self.report_type = report_type
