"""Distribution plots for the cleaned table."""

from __future__ import annotations

from typing import Iterable

import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns

from .errors import SchemaMismatchError


FIELD_ALIASES = {
    "salary": "Salary",
    "age": "Age",
    "points": "PTS",
    "toi_per_game": "toi_per_game",
}

PLOT_KINDS = ("hist", "density")


def resolve_field(table: pd.DataFrame, field: str) -> str:
    column = FIELD_ALIASES.get(field, field)
    if column not in table.columns:
        raise SchemaMismatchError(f"No column {column!r} to describe", [column])
    return column


def plot_distribution(table: pd.DataFrame, field: str, kind: str = "hist"):
    """Draw a histogram or density curve of one field and return the figure."""

    if kind not in PLOT_KINDS:
        raise ValueError(f"kind must be one of {PLOT_KINDS}, got {kind!r}")
    column = resolve_field(table, field)
    data = table[column].dropna()

    fig, ax = plt.subplots(figsize=(8, 5))
    if kind == "hist":
        sns.histplot(data, bins=30, color="steelblue", ax=ax)
    else:
        sns.kdeplot(data, fill=True, color="steelblue", ax=ax)
    ax.set_title(f"Distribution of {column}")
    ax.set_xlabel(column)
    fig.tight_layout()
    return fig


def summarize(table: pd.DataFrame, fields: Iterable[str]) -> pd.DataFrame:
    columns = [resolve_field(table, field) for field in fields]
    return table[columns].describe()
