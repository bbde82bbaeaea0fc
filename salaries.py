"""
Exploratory models of NHL player salaries, run top to bottom.
"""

import argparse
import logging
import sys

from nhl_salaries import Analysis, ModelSettings, SalaryAnalysisError


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("data", nargs="?", default="nhl_salaries.csv", help="player table (CSV)")
    parser.add_argument("--plots-dir", default=None, help="write figures as PNG files here")
    parser.add_argument("--min-split", type=int, default=ModelSettings.min_split,
                        help="minimum rows in a tree node before it is split")
    parser.add_argument("--max-depth", type=int, default=None)
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    settings = ModelSettings(min_split=args.min_split, max_depth=args.max_depth)
    analysis = Analysis(args.data, plots_dir=args.plots_dir, settings=settings)
    try:
        analysis.load_and_clean()
    except SalaryAnalysisError as exc:
        logging.getLogger("salaries").error("%s", exc)
        return 1
    analysis.describe()
    analysis.train_test_split()
    analysis.train_ols()
    analysis.train_trees()
    analysis.eval_ols()
    analysis.eval_trees()
    return 0


if __name__ == "__main__":
    sys.exit(main())
