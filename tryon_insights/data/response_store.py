"""
Response storage and snapshot loading.

The metrics engine pulls a snapshot of every stored response on demand; it
never subscribes to changes. Stores here are append-only: submissions are
validated against the question bank, stamped with an id and timestamps, and
never mutated or deleted afterwards.

Snapshot files may be a JSON array of response documents or JSON lines
(one document per line), as exported from the document store.
"""

import csv
import io
import json
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Mapping, Protocol, Sequence

from pydantic import ValidationError

from tryon_insights.data.question_bank import validate_submission
from tryon_insights.data.schemas import (
    LIST_VALUE_FIELDS,
    SURVEY_FIELDS,
    ResponseRecord,
)
from tryon_insights.exceptions import (
    ReportGenerationError,
    ResponseLoadError,
    SubmissionValidationError,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


# =============================================================================
# REPOSITORY PROTOCOL
# =============================================================================


class ResponseRepository(Protocol):
    """Persistence collaborator for survey responses."""

    def fetch_all(self) -> list[ResponseRecord]:
        """Every stored response, in insertion order."""
        ...

    def submit(self, answers: Mapping[str, Any]) -> ResponseRecord:
        """Validate and store a new response."""
        ...


def build_submission(
    answers: Mapping[str, Any],
    *,
    clock: Clock = utc_now,
) -> ResponseRecord:
    """
    Turn raw answers into a stamped, validated ResponseRecord.

    Identity and timestamps in `answers` are ignored; they are assigned here.

    Raises:
        SubmissionValidationError: If an answer has the wrong type, or the
            question bank rejects the answers
    """
    now = clock()
    payload = {
        key: value
        for key, value in answers.items()
        if key not in {"_id", "response_id", "_creationTime", "created_at", "completedAt", "completed_at"}
    }
    try:
        draft = ResponseRecord.model_validate(payload)
    except ValidationError as e:
        invalid = {
            ".".join(str(part) for part in error["loc"]): error.get("input")
            for error in e.errors()
        }
        raise SubmissionValidationError(
            f"Submission rejected (invalid answers: {', '.join(sorted(invalid))})",
            invalid_fields=invalid,
        ) from e
    validate_submission(draft)
    return draft.model_copy(
        update={
            "response_id": uuid.uuid4().hex,
            "created_at": now,
            "completed_at": now,
        }
    )


class InMemoryResponseStore:
    """Append-only in-process response store."""

    def __init__(
        self,
        records: Sequence[ResponseRecord] | None = None,
        *,
        clock: Clock = utc_now,
    ) -> None:
        self._records: list[ResponseRecord] = list(records or [])
        self._clock = clock

    def fetch_all(self) -> list[ResponseRecord]:
        return list(self._records)

    def submit(self, answers: Mapping[str, Any]) -> ResponseRecord:
        record = build_submission(answers, clock=self._clock)
        self._records.append(record)
        logger.info("Survey response saved with id: %s", record.response_id)
        return record

    def __len__(self) -> int:
        return len(self._records)


class JsonLinesResponseStore:
    """
    Append-only response store backed by a JSON lines file.

    Each submission is appended as one camelCase document; fetch_all reads
    the file afresh on every call.
    """

    def __init__(self, path: str | Path, *, clock: Clock = utc_now) -> None:
        self.path = Path(path)
        self._clock = clock

    def fetch_all(self) -> list[ResponseRecord]:
        if not self.path.exists():
            return []
        return load_responses(self.path, strict=True).records

    def submit(self, answers: Mapping[str, Any]) -> ResponseRecord:
        record = build_submission(answers, clock=self._clock)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(serialize_record(record) + "\n")
        logger.info("Survey response saved with id: %s", record.response_id)
        return record


def serialize_record(record: ResponseRecord) -> str:
    """One stored document, camelCase keys, timestamps in epoch milliseconds."""
    document = record.model_dump(mode="json", by_alias=True, exclude_none=True)
    for key, value in (("_creationTime", record.created_at), ("completedAt", record.completed_at)):
        if value is not None:
            document[key] = round(value.timestamp() * 1000)
    return json.dumps(document, sort_keys=True)


# =============================================================================
# SNAPSHOT LOADING
# =============================================================================


@dataclass
class LoadResult:
    """Result of loading a response snapshot."""

    records: list[ResponseRecord] = field(default_factory=list)
    source: str = ""
    total_rows: int = 0
    skipped_rows: int = 0
    errors: list[str] = field(default_factory=list)


def _iter_documents(path: Path, text: str) -> list[tuple[int, Any]]:
    stripped = text.lstrip()
    if stripped.startswith("["):
        try:
            documents = json.loads(text)
        except json.JSONDecodeError as e:
            raise ResponseLoadError(
                f"Invalid JSON array in {path}: {e}",
                source=str(path),
                line_number=e.lineno,
            ) from e
        return list(enumerate(documents, start=1))

    rows: list[tuple[int, Any]] = []
    for line_number, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        try:
            rows.append((line_number, json.loads(line)))
        except json.JSONDecodeError as e:
            rows.append((line_number, e))
    return rows


def load_responses(path: str | Path, *, strict: bool = False) -> LoadResult:
    """
    Load a response snapshot from a JSON array or JSON lines file.

    Args:
        path: Snapshot file
        strict: Raise on the first malformed row instead of skipping it

    Returns:
        LoadResult with parsed records in file order

    Raises:
        ResponseLoadError: If the file cannot be read, or a row is malformed
            in strict mode
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ResponseLoadError(f"Cannot read responses from {path}: {e}", source=str(path)) from e

    result = LoadResult(source=str(path))
    for row_number, document in _iter_documents(path, text):
        result.total_rows += 1
        try:
            if isinstance(document, Exception):
                raise document
            if not isinstance(document, dict):
                raise ValueError(f"expected an object, got {type(document).__name__}")
            result.records.append(ResponseRecord.model_validate(document))
        except (ValueError, ValidationError) as e:
            message = f"Row {row_number}: {e}"
            if strict:
                raise ResponseLoadError(
                    f"Malformed response in {path}: {message}",
                    source=str(path),
                    line_number=row_number,
                ) from e
            logger.warning("Skipping malformed response in %s: %s", path, message)
            result.skipped_rows += 1
            result.errors.append(message)

    logger.debug("Loaded %d responses from %s", len(result.records), path)
    return result


# =============================================================================
# CSV EXPORT
# =============================================================================

CSV_COLUMNS: tuple[str, ...] = ("response_id", "completed_at") + SURVEY_FIELDS + ("user_agent",)


def export_responses_csv(
    records: Sequence[ResponseRecord],
    filepath: str | Path | None = None,
    *,
    list_separator: str = ";",
) -> str:
    """
    Export raw responses as CSV with camelCase headers.

    List answers are joined with `list_separator`; timestamps are ISO 8601.

    Raises:
        ReportGenerationError: If the file cannot be written
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow([ResponseRecord.model_fields[name].alias or name for name in CSV_COLUMNS])

    for record in records:
        row = []
        for name in CSV_COLUMNS:
            value = getattr(record, name)
            if name in LIST_VALUE_FIELDS:
                value = list_separator.join(value)
            elif isinstance(value, datetime):
                value = value.isoformat()
            row.append("" if value is None else value)
        writer.writerow(row)

    content = buffer.getvalue()
    if filepath:
        try:
            path = Path(filepath)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8", newline="")
        except OSError as e:
            raise ReportGenerationError(
                f"Failed to export responses to CSV: {e}",
                report_type="csv",
            ) from e
    return content
