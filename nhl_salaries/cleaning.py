"""Turn the raw player-season table into the analysis-ready table.

Every row is transformed on its own by :func:`clean_record`; the only
cross-row effect is that aggregated multi-team rows are filtered out.
:func:`clean_players` validates the raw header first so that a missing or
mistyped column fails loudly instead of surfacing as a ``KeyError`` deep in
the per-row code.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Mapping, Optional

import pandas as pd
from pandas.api.types import is_numeric_dtype

from .config import DEFAULT_MEMBERSHIP, TeamMembership
from .errors import SchemaMismatchError


logger = logging.getLogger(__name__)

STRENGTH_SPLIT_COLUMNS = ("EVG", "PPG", "SHG", "EVA", "PPA", "SHA")
REDUNDANT_COLUMNS = ("S%", "ATOI", "FO%")
POSITION_COLUMNS = ("C", "LW", "RW", "D", "W")

# Columns the per-row arithmetic or the models rely on being numbers.
NUMERIC_COLUMNS = (
    "Age", "GP", "G", "A", "PTS", "+/-", "PIM", "GWG", "S", "TOI",
    "BLK", "HIT", "FOW", "FOL", "Salary",
) + POSITION_COLUMNS

RAW_COLUMNS = (
    "Rk", "Player", "Age", "Tm", "Pos", "GP", "G", "A", "PTS", "+/-", "PIM",
    "EVG", "PPG", "SHG", "GWG", "EVA", "PPA", "SHA", "S", "S%", "TOI", "ATOI",
    "BLK", "HIT", "FOW", "FOL", "FO%", "Salary", "Handed",
) + POSITION_COLUMNS

CLEANED_COLUMNS = (
    "Age", "GP", "G", "A", "PTS", "plus_minus", "PIM", "GWG",
    "shots_per_game", "toi_per_game", "BLK", "HIT", "FOW", "FOL",
    "Salary", "Handed", "C", "LW", "RW", "canada", "west",
)


def validate_raw_schema(table: pd.DataFrame) -> None:
    """Raise :class:`SchemaMismatchError` unless ``table`` has the raw player header."""

    missing = [col for col in RAW_COLUMNS if col not in table.columns]
    if missing:
        raise SchemaMismatchError(
            f"Player table is missing columns: {', '.join(missing)}", missing
        )

    # a header-only table reads back as all-object columns with nothing to check
    mistyped = [
        col for col in NUMERIC_COLUMNS
        if table[col].notna().any() and not is_numeric_dtype(table[col])
    ]
    if mistyped:
        raise SchemaMismatchError(
            f"Columns expected to be numeric hold other values: {', '.join(mistyped)}",
            mistyped,
        )


def _per_game(total, games):
    if games == 0:
        return math.nan
    return float(total) / games


def clean_record(
    record: Mapping[str, Any],
    membership: TeamMembership = DEFAULT_MEMBERSHIP,
) -> Optional[Dict[str, Any]]:
    """Clean a single raw row; returns ``None`` for multi-team rows."""

    team = record["Tm"]
    if team == membership.multi_team_marker:
        return None

    games = record["GP"]
    if games == 0:
        logger.warning(
            "%s has 0 games played; per-game rates set to NaN", record.get("Player")
        )

    cleaned: Dict[str, Any] = {}
    for col in CLEANED_COLUMNS:
        if col == "shots_per_game":
            cleaned[col] = _per_game(record["S"], games)
        elif col == "toi_per_game":
            cleaned[col] = _per_game(record["TOI"], games)
        elif col == "canada":
            cleaned[col] = int(membership.is_canadian(team))
        elif col == "west":
            cleaned[col] = int(membership.is_western(team))
        elif col == "plus_minus":
            cleaned[col] = record["+/-"]
        else:
            cleaned[col] = record[col]

    # unknown extra columns ride along untouched
    for col, value in record.items():
        if col not in RAW_COLUMNS and col not in cleaned:
            cleaned[col] = value
    return cleaned


def clean_players(
    table: pd.DataFrame,
    membership: TeamMembership = DEFAULT_MEMBERSHIP,
) -> pd.DataFrame:
    """Return a new, cleaned copy of ``table``; the input is left untouched."""

    validate_raw_schema(table)

    extra = [col for col in table.columns if col not in RAW_COLUMNS and col not in CLEANED_COLUMNS]
    rows: List[Dict[str, Any]] = []
    dropped = 0
    for record in table.to_dict(orient="records"):
        cleaned = clean_record(record, membership)
        if cleaned is None:
            dropped += 1
            continue
        rows.append(cleaned)

    df_clean = pd.DataFrame(rows, columns=list(CLEANED_COLUMNS) + extra)
    logger.info(
        "Cleaned %d rows into %d (%d multi-team rows dropped)",
        len(table), len(df_clean), dropped,
    )
    return df_clean
