from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Optional


@dataclass(frozen=True)
class TeamMembership:
    canadian: FrozenSet[str]
    western: FrozenSet[str]
    multi_team_marker: str = "TOT"

    def is_canadian(self, team: str) -> bool:
        return team in self.canadian

    def is_western(self, team: str) -> bool:
        return team in self.western


DEFAULT_MEMBERSHIP = TeamMembership(
    canadian=frozenset({"EDM", "TOR", "CGY", "WPG", "VAN", "MTL", "OTT"}),
    western=frozenset(
        {
            "EDM", "CHI", "LAK", "DAL", "ANA", "NSH", "MIN", "STL",
            "SJS", "CGY", "VEG", "ARI", "COL", "WPG", "VAN",
        }
    ),
)


@dataclass(frozen=True)
class ModelSettings:
    # minimum number of rows a node needs before it is split
    min_split: int = 20
    max_depth: Optional[int] = None
    test_size: float = 0.2
    random_state: int = 42
