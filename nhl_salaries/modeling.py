"""Model fitting over the cleaned table.

Least squares goes through statsmodels' formula interface so the printed
summary carries the usual coefficient table; trees are scikit-learn CART
estimators wrapped in :class:`TreeModel` for printing and rendering.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Sequence, Tuple

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import statsmodels.formula.api as smf
from sklearn.base import is_classifier
from sklearn.tree import DecisionTreeClassifier, DecisionTreeRegressor, plot_tree

from .config import ModelSettings
from .errors import SchemaMismatchError


logger = logging.getLogger(__name__)

SALARY_PREDICTORS = (
    "Age", "GP", "G", "A", "PIM", "GWG", "shots_per_game", "toi_per_game",
    "BLK", "HIT", "FOW", "FOL", "Handed", "C", "LW", "RW", "canada", "west",
)

OLS_SPECS: Dict[str, Tuple[str, ...]] = {
    "full": SALARY_PREDICTORS,
    "scoring": ("PTS", "Age", "toi_per_game"),
    "physical": ("PIM", "HIT", "BLK", "Age", "toi_per_game"),
    "market": ("PTS", "Age", "canada", "west"),
}

REGRESSION_TREE_SPECS: Dict[str, Tuple[str, ...]] = {
    "full": SALARY_PREDICTORS,
    "scoring": ("PTS", "Age", "toi_per_game", "shots_per_game"),
}

CONFERENCE_PREDICTORS = (
    "Age", "G", "A", "PIM", "BLK", "HIT", "FOW", "FOL",
    "shots_per_game", "toi_per_game", "Salary",
)

# names patsy would otherwise read as its own helpers
_PATSY_RESERVED = {"C", "I", "Q"}


def _require_columns(table, columns):
    missing = [col for col in columns if col not in table.columns]
    if missing:
        raise SchemaMismatchError(
            f"Columns needed by the model are missing: {', '.join(missing)}", missing
        )


def _complete_rows(table, target, predictors):
    columns = [target, *predictors]
    _require_columns(table, columns)
    subset = table[columns].dropna()
    if len(subset) < len(table):
        logger.info("Dropped %d rows with missing values before fitting %s", len(table) - len(subset), target)
    return subset


def _term(column):
    if column in _PATSY_RESERVED or not column.isidentifier():
        return f'Q("{column}")'
    return column


def ols_formula(target: str, predictors: Sequence[str]) -> str:
    return f"{_term(target)} ~ " + " + ".join(_term(col) for col in predictors)


def fit_ols(table: pd.DataFrame, target: str, predictors: Sequence[str]):
    """Fit ordinary least squares; the statsmodels result supports ``summary()``."""

    data = _complete_rows(table, target, predictors)
    formula = ols_formula(target, predictors)
    logger.info("Fitting OLS %s on %d rows", formula, len(data))
    return smf.ols(formula, data=data).fit()


def design_matrix(table: pd.DataFrame, predictors: Sequence[str], drop_first: bool = True) -> pd.DataFrame:
    X = pd.get_dummies(table[list(predictors)], drop_first=drop_first)
    # bool dummies as ints keep the printed thresholds readable
    return X.astype({col: int for col in X.columns[X.dtypes == bool]})


@dataclass
class TreeModel:
    estimator: Any
    target: str
    predictors: Tuple[str, ...]
    feature_names: Tuple[str, ...]

    def features(self, table: pd.DataFrame) -> pd.DataFrame:
        _require_columns(table, self.predictors)
        # every level gets a dummy here; the reference level is then dropped by the reindex
        X = design_matrix(table, self.predictors, drop_first=False)
        return X.reindex(columns=list(self.feature_names), fill_value=0)

    def predict(self, table: pd.DataFrame) -> np.ndarray:
        return self.estimator.predict(self.features(table))

    def summary(self) -> str:
        return describe_tree(self.estimator, self.feature_names)

    def render(self):
        fig, ax = plt.subplots(figsize=(16, 9))
        class_names = None
        if is_classifier(self.estimator):
            class_names = [str(c) for c in self.estimator.classes_]
        plot_tree(
            self.estimator,
            feature_names=list(self.feature_names),
            class_names=class_names,
            filled=True,
            ax=ax,
        )
        ax.set_title(f"{self.target} ~ {', '.join(self.predictors)}")
        return fig


def _fit_tree(estimator, table, target, predictors) -> TreeModel:
    data = _complete_rows(table, target, predictors)
    X = design_matrix(data, predictors)
    estimator.fit(X, data[target])
    return TreeModel(
        estimator=estimator,
        target=target,
        predictors=tuple(predictors),
        feature_names=tuple(X.columns),
    )


def fit_regression_tree(
    table: pd.DataFrame,
    target: str,
    predictors: Sequence[str],
    settings: ModelSettings = ModelSettings(),
) -> TreeModel:
    estimator = DecisionTreeRegressor(
        criterion="squared_error",
        min_samples_split=settings.min_split,
        max_depth=settings.max_depth,
        random_state=settings.random_state,
    )
    return _fit_tree(estimator, table, target, predictors)


def fit_classification_tree(
    table: pd.DataFrame,
    target: str,
    predictors: Sequence[str],
    settings: ModelSettings = ModelSettings(),
) -> TreeModel:
    estimator = DecisionTreeClassifier(
        criterion="gini",
        min_samples_split=settings.min_split,
        max_depth=settings.max_depth,
        random_state=settings.random_state,
    )
    return _fit_tree(estimator, table, target, predictors)


def describe_tree(estimator, feature_names: Sequence[str]) -> str:
    """Walk a fitted tree and describe every node on its own line."""

    tree = estimator.tree_
    n_nodes = tree.node_count
    children_left = tree.children_left
    children_right = tree.children_right
    feature = tree.feature
    threshold = tree.threshold
    values = tree.value
    classify = is_classifier(estimator)

    def node_value(i):
        if classify:
            return f"class={estimator.classes_[np.argmax(values[i][0])]}"
        return f"value={values[i][0][0]:.1f}"

    node_depth = np.zeros(shape=n_nodes, dtype=np.int64)
    is_leaves = np.zeros(shape=n_nodes, dtype=bool)
    stack = [(0, 0)]
    while stack:
        node_id, depth = stack.pop()
        node_depth[node_id] = depth
        if children_left[node_id] != children_right[node_id]:
            stack.append((children_left[node_id], depth + 1))
            stack.append((children_right[node_id], depth + 1))
        else:
            is_leaves[node_id] = True

    lines = [f"The binary tree structure has {n_nodes} nodes:"]
    for i in range(n_nodes):
        indent = node_depth[i] * "\t"
        if is_leaves[i]:
            lines.append(f"{indent}{i} leaf with {node_value(i)}, n={tree.n_node_samples[i]}")
        else:
            lines.append(
                f"{indent}{i} split ({node_value(i)}): "
                f"{children_left[i]} if {feature_names[feature[i]]} <= {threshold[i]:.3f} "
                f"else {children_right[i]}"
            )
    return "\n".join(lines)
