import logging
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from sklearn.metrics import accuracy_score, mean_absolute_error
from sklearn.model_selection import train_test_split

from .cleaning import clean_players, clean_record
from .config import DEFAULT_MEMBERSHIP, ModelSettings, TeamMembership
from .describe import plot_distribution, summarize
from .errors import DataAccessError, SalaryAnalysisError, SchemaMismatchError
from .loading import load_players
from .modeling import (
    CONFERENCE_PREDICTORS,
    OLS_SPECS,
    REGRESSION_TREE_SPECS,
    TreeModel,
    fit_classification_tree,
    fit_ols,
    fit_regression_tree,
)

__all__ = [
    "Analysis",
    "DataAccessError",
    "ModelSettings",
    "SalaryAnalysisError",
    "SchemaMismatchError",
    "TeamMembership",
    "TreeModel",
    "clean_players",
    "clean_record",
    "fit_classification_tree",
    "fit_ols",
    "fit_regression_tree",
    "load_players",
    "plot_distribution",
]

logger = logging.getLogger(__name__)

DESCRIBED_FIELDS = (
    ("salary", "hist"),
    ("age", "hist"),
    ("points", "hist"),
    ("toi_per_game", "density"),
)


class Analysis:
    def __init__(self, data_path="nhl_salaries.csv", plots_dir=None,
                 settings: ModelSettings = ModelSettings(),
                 membership: TeamMembership = DEFAULT_MEMBERSHIP) -> None:
        self.data_path = Path(data_path)
        self.plots_dir = Path(plots_dir) if plots_dir is not None else None
        self.settings = settings
        self.membership = membership

        self.df = None

        self.ols = {}
        self.trees = {}
        self.classifier = None

        self.train = None
        self.test = None

    def load_and_clean(self):
        df_raw = load_players(self.data_path)
        self.df = clean_players(df_raw, self.membership)

    def _emit(self, fig, name):
        if self.plots_dir is not None:
            self.plots_dir.mkdir(parents=True, exist_ok=True)
            fig.savefig(self.plots_dir / f"{name}.png", dpi=150, bbox_inches="tight")
        plt.close(fig)

    def describe(self):
        print("Descriptive statistics:")
        print(summarize(self.df, [field for field, _ in DESCRIBED_FIELDS]))
        print("\n")
        for field, kind in DESCRIBED_FIELDS:
            self._emit(plot_distribution(self.df, field, kind), f"{kind}_{field}")

    def train_test_split(self):
        self.train, self.test = train_test_split(
            self.df,
            test_size=self.settings.test_size,
            random_state=self.settings.random_state,
        )

    def train_ols(self):
        for name, predictors in OLS_SPECS.items():
            self.ols[name] = fit_ols(self.train, "Salary", predictors)

    def train_trees(self):
        for name, predictors in REGRESSION_TREE_SPECS.items():
            self.trees[name] = fit_regression_tree(self.train, "Salary", predictors, self.settings)
        self.classifier = fit_classification_tree(self.train, "west", CONFERENCE_PREDICTORS, self.settings)

    def _held_out(self, columns, label):
        test = self.test.dropna(subset=list(columns))
        if test.empty:
            logger.warning("No complete held-out rows for %s; skipping its metric", label)
            return None
        return test

    def eval_ols(self):
        for name, result in self.ols.items():
            print(f"OLS ({name}):")
            print(result.summary())
            test = self._held_out([*OLS_SPECS[name], "Salary"], f"OLS ({name})")
            if test is not None:
                print("Mean absolute error on held-out players:",
                      mean_absolute_error(test["Salary"], result.predict(test)))
            print("\n")

    def eval_trees(self):
        for name, model in self.trees.items():
            print(f"Regression tree ({name}):")
            print(model.summary())
            test = self._held_out([*model.predictors, model.target], f"regression tree ({name})")
            if test is not None:
                print("Mean absolute error on held-out players:",
                      mean_absolute_error(test[model.target], model.predict(test)))
            print("\n")
            self._emit(model.render(), f"tree_{name}")

        model = self.classifier
        print("Classification tree (west vs. east):")
        print(model.summary())
        test = self._held_out([*model.predictors, model.target], "classification tree")
        if test is not None:
            print("Accuracy on held-out players:", accuracy_score(test[model.target], model.predict(test)))
            print("Share of western players:", np.mean(test[model.target]))
        print("\n")
        self._emit(model.render(), "tree_west")
