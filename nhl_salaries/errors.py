"""Exceptions raised by the salary analysis pipeline."""

from __future__ import annotations

from typing import Iterable


class SalaryAnalysisError(Exception):
    """Base class for pipeline failures."""


class DataAccessError(SalaryAnalysisError):
    """The input table could not be read."""


class SchemaMismatchError(SalaryAnalysisError, KeyError):
    """Columns a stage depends on are missing or have the wrong type."""

    def __init__(self, message: str, columns: Iterable[str] = ()) -> None:
        super().__init__(message)
        self.message = message
        self.columns = tuple(columns)

    def __str__(self) -> str:
        return self.message
