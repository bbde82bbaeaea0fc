"""Read the raw player-season table."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

import pandas as pd

from .errors import DataAccessError


logger = logging.getLogger(__name__)


def load_players(path: Union[str, Path]) -> pd.DataFrame:
    """Load a comma-separated player table, keeping the header names and row order."""

    path = Path(path)
    if not path.is_file():
        raise DataAccessError(f"Player table {str(path)!r} does not exist or is not a file")

    try:
        df = pd.read_csv(path)
    except (OSError, UnicodeDecodeError, pd.errors.EmptyDataError, pd.errors.ParserError) as exc:
        raise DataAccessError(f"Could not read player table {str(path)!r}: {exc}") from exc

    logger.info("Loaded %d rows with %d columns from %s", len(df), len(df.columns), path)
    return df
