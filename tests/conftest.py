from __future__ import annotations

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pandas as pd
import pytest


TEAMS = ["EDM", "TOR", "BOS", "NYR", "CHI", "TBL", "VAN", "PIT", "COL", "TOT"]


def _row(**overrides):
    row = {
        "Rk": 1, "Player": "Test Player", "Age": 25, "Tm": "BOS", "Pos": "C",
        "GP": 10, "G": 1, "A": 2, "PTS": 3, "+/-": 0, "PIM": 4,
        "EVG": 1, "PPG": 0, "SHG": 0, "GWG": 0, "EVA": 2, "PPA": 0, "SHA": 0,
        "S": 20, "S%": 5.0, "TOI": 150, "ATOI": "15:00",
        "BLK": 5, "HIT": 10, "FOW": 3, "FOL": 2, "FO%": 60.0,
        "Salary": 1_000_000, "Handed": "L",
        "C": 1, "LW": 0, "RW": 0, "D": 0, "W": 0,
    }
    row.update(overrides)
    return row


@pytest.fixture
def raw_row():
    return _row


@pytest.fixture
def raw_frame():
    def build(*rows):
        return pd.DataFrame([_row(**{"Rk": i + 1, **row}) for i, row in enumerate(rows)])

    return build


@pytest.fixture
def synthetic_raw():
    """A realistic-looking raw table with a known salary signal."""

    rng = np.random.default_rng(7)
    n = 150
    positions = rng.choice(["C", "LW", "RW", "D"], size=n)
    gp = rng.integers(20, 83, size=n)
    goals = rng.integers(0, 40, size=n)
    assists = rng.integers(0, 60, size=n)
    toi = gp * rng.uniform(10, 24, size=n)
    age = rng.integers(19, 38, size=n)
    salary = 750_000 + 40_000 * (goals + assists) + 150_000 * (toi / gp) + rng.normal(0, 300_000, size=n)

    rows = []
    for i in range(n):
        pos = positions[i]
        rows.append(
            _row(
                Rk=i + 1,
                Player=f"Player {i}",
                Age=int(age[i]),
                Tm=TEAMS[i % len(TEAMS)],
                Pos=pos,
                GP=int(gp[i]),
                G=int(goals[i]),
                A=int(assists[i]),
                PTS=int(goals[i] + assists[i]),
                **{"+/-": int(rng.integers(-20, 20))},
                PIM=int(rng.integers(0, 80)),
                S=int(goals[i] * 8 + rng.integers(5, 40)),
                TOI=float(toi[i]),
                BLK=int(rng.integers(0, 120)),
                HIT=int(rng.integers(0, 200)),
                FOW=int(rng.integers(0, 600)) if pos == "C" else 0,
                FOL=int(rng.integers(0, 600)) if pos == "C" else 0,
                Salary=float(max(salary[i], 700_000)),
                Handed="L" if i % 3 else "R",
                C=int(pos == "C"),
                LW=int(pos == "LW"),
                RW=int(pos == "RW"),
                D=int(pos == "D"),
                W=int(pos in ("LW", "RW")),
            )
        )
    return pd.DataFrame(rows)
