"""
Translate raw errors into HTTP-facing error kinds.

``classify`` is a pure function: it inspects an exception raised while
handling a request and returns a ``ClassifiedError`` describing the status
code, message and implicated fields of the response. Rules, in order:

1. ``AppException`` subclasses carry their own classification.
2. Unique constraint violations become 409 conflicts.
3. Schema validation failures and NOT NULL violations become 422.
4. Path parameters that cannot address a record, and unknown routes,
   become 404. Other HTTP errors raised by the framework (405) keep their
   status.
5. Everything else is a 500.

Constraint violations are resolved to field names through a registry built
from the ORM metadata (constraint name -> columns). Parsing the driver's
error text is only a fallback for drivers that do not expose the
constraint or column name.
"""

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel
from sqlalchemy import MetaData, UniqueConstraint
from sqlalchemy.exc import IntegrityError
from sqlmodel import SQLModel
from starlette.exceptions import HTTPException as StarletteHTTPException

import novels_api.models  # noqa: F401  (registers tables on the metadata)
from novels_api.constants import (
    CONFLICT_MESSAGE,
    INTERNAL_ERROR_MESSAGE,
    NOT_FOUND_MESSAGE,
    VALIDATION_MESSAGE,
)
from novels_api.exceptions import AppException

# SQLSTATE codes (PostgreSQL, also reported by asyncpg and psycopg)
UNIQUE_VIOLATION = "23505"
NOT_NULL_VIOLATION = "23502"

# Driver message shims
_PG_UNIQUE_DETAIL = re.compile(r"Key \((?P<columns>[^)]+)\)=")
_PG_NOT_NULL = re.compile(r'null value in column "(?P<column>[^"]+)"')
_SQLITE_UNIQUE = re.compile(r"UNIQUE constraint failed: (?P<columns>[^\n]+)")
_SQLITE_NOT_NULL = re.compile(r"NOT NULL constraint failed: (?P<column>[\w.]+)")


@dataclass(frozen=True)
class ClassifiedError:
    """Normalized description of an error response."""

    kind: str
    status_code: int
    message: str
    fields: list[str] | None = field(default=None)


class ConstraintRegistry:
    """
    Map database constraint names to the fields they cover.

    The registry is filled from SQLAlchemy table metadata, so every named
    unique constraint and unique index declared on a model is known.
    Single-column ``unique=True`` columns are registered under PostgreSQL's
    default ``<table>_<column>_key`` name as well.
    """

    def __init__(self) -> None:
        self._constraints: dict[str, list[str]] = {}

    def register(self, name: str, columns: Iterable[str]) -> None:
        self._constraints[name] = [to_camel(column) for column in columns]

    def register_metadata(self, metadata: MetaData) -> None:
        for table in metadata.tables.values():
            for constraint in table.constraints:
                if isinstance(constraint, UniqueConstraint) and isinstance(
                    constraint.name, str
                ):
                    self.register(
                        constraint.name, [c.name for c in constraint.columns]
                    )
            for index in table.indexes:
                if index.unique and isinstance(index.name, str):
                    self.register(index.name, [c.name for c in index.columns])
            for column in table.columns:
                if column.unique:
                    self.register(
                        f"{table.name}_{column.name}_key", [column.name]
                    )

    def fields_for(self, constraint_name: str | None) -> list[str] | None:
        if constraint_name is None:
            return None
        return self._constraints.get(constraint_name)


constraint_registry = ConstraintRegistry()
constraint_registry.register_metadata(SQLModel.metadata)


def _driver_error(exc: IntegrityError) -> Any:
    """
    Return the most specific driver exception behind ``exc``.

    SQLAlchemy's asyncpg adapter wraps the asyncpg exception, which is kept
    as the cause of ``exc.orig``.
    """
    orig = exc.orig
    cause = getattr(orig, "__cause__", None)
    return cause if cause is not None else orig


def _diagnostic(exc: IntegrityError, attribute: str) -> str | None:
    """Read a structured diagnostic (asyncpg attribute or psycopg ``diag``)."""
    driver = _driver_error(exc)
    value = getattr(driver, attribute, None)
    if value is None:
        diag = getattr(exc.orig, "diag", None)
        value = getattr(diag, attribute, None)
    return value if isinstance(value, str) else None


def _sqlstate(exc: IntegrityError) -> str | None:
    driver = _driver_error(exc)
    for source, attribute in (
        (driver, "sqlstate"),
        (exc.orig, "sqlstate"),
        (exc.orig, "pgcode"),
    ):
        value = getattr(source, attribute, None)
        if isinstance(value, str):
            return value
    return None


def _column_names(raw: str) -> list[str]:
    """Turn ``author.name, author.nationality`` or ``name`` into wire names."""
    columns = [part.strip().split(".")[-1] for part in raw.split(",")]
    return [to_camel(column) for column in columns if column]


def _unique_violation_fields(exc: IntegrityError) -> list[str] | None:
    """
    Field names covered by a unique violation, or None if ``exc`` is not one.
    """
    message = str(exc.orig)

    if _sqlstate(exc) == UNIQUE_VIOLATION or "duplicate key" in message:
        fields = constraint_registry.fields_for(
            _diagnostic(exc, "constraint_name")
        )
        if fields is not None:
            return fields
        match = _PG_UNIQUE_DETAIL.search(
            _diagnostic(exc, "detail") or message
        )
        return _column_names(match.group("columns")) if match else []

    match = _SQLITE_UNIQUE.search(message)
    if match:
        return _column_names(match.group("columns"))

    return None


def _not_null_violation_fields(exc: IntegrityError) -> list[str] | None:
    """
    Field names covered by a NOT NULL violation, or None if ``exc`` is not one.
    """
    message = str(exc.orig)

    if _sqlstate(exc) == NOT_NULL_VIOLATION or "not-null constraint" in message:
        column = _diagnostic(exc, "column_name")
        if column is None:
            match = _PG_NOT_NULL.search(message)
            column = match.group("column") if match else None
        return [to_camel(column)] if column else []

    match = _SQLITE_NOT_NULL.search(message)
    if match:
        return _column_names(match.group("column"))

    return None


def _validation_fields(errors: Sequence[Any]) -> list[str]:
    """
    Extract field names from pydantic error ``loc`` tuples.

    The request section prefix (``body``, ``query``) is skipped and each
    field is reported once, in the order errors were raised.
    """
    fields: list[str] = []
    for error in errors:
        loc = [
            part
            for part in error.get("loc", ())
            if isinstance(part, str) and part not in ("body", "query")
        ]
        if loc and loc[0] not in fields:
            fields.append(loc[0])
    return fields


def _is_path_error(exc: RequestValidationError) -> bool:
    return any(
        (error.get("loc") or ("",))[0] == "path" for error in exc.errors()
    )


def classify(exc: BaseException) -> ClassifiedError:
    """
    Classify an exception raised while handling a request.

    Args:
        exc: The raw exception (application, validation or datastore error).

    Returns:
        ClassifiedError with the kind, HTTP status, message and, for
        conflict and validation kinds, the implicated fields.
    """
    if isinstance(exc, AppException):
        return ClassifiedError(
            kind=exc.kind,
            status_code=exc.http_status,
            message=exc.message,
            fields=exc.fields,
        )

    if isinstance(exc, StarletteHTTPException):
        if exc.status_code == 404:
            return ClassifiedError(
                kind="not_found", status_code=404, message=NOT_FOUND_MESSAGE
            )
        return ClassifiedError(
            kind="http_error",
            status_code=exc.status_code,
            message=str(exc.detail),
        )

    if isinstance(exc, IntegrityError):
        fields = _unique_violation_fields(exc)
        if fields is not None:
            return ClassifiedError(
                kind="conflict",
                status_code=409,
                message=CONFLICT_MESSAGE,
                fields=fields,
            )

        fields = _not_null_violation_fields(exc)
        if fields is not None:
            return ClassifiedError(
                kind="validation_error",
                status_code=422,
                message=VALIDATION_MESSAGE,
                fields=fields,
            )

    if isinstance(exc, RequestValidationError):
        if _is_path_error(exc):
            return ClassifiedError(
                kind="not_found", status_code=404, message=NOT_FOUND_MESSAGE
            )
        return ClassifiedError(
            kind="validation_error",
            status_code=422,
            message=VALIDATION_MESSAGE,
            fields=_validation_fields(exc.errors()),
        )

    if isinstance(exc, PydanticValidationError):
        return ClassifiedError(
            kind="validation_error",
            status_code=422,
            message=VALIDATION_MESSAGE,
            fields=_validation_fields(exc.errors()),
        )

    return ClassifiedError(
        kind="internal", status_code=500, message=INTERNAL_ERROR_MESSAGE
    )
