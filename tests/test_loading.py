from pathlib import Path

import pytest

from nhl_salaries import DataAccessError, clean_players, load_players
from nhl_salaries.cleaning import CLEANED_COLUMNS


def test_load_players_keeps_header_and_order(tmp_path: Path, raw_frame):
    path = tmp_path / "players.csv"
    raw_frame({"Player": "First"}, {"Player": "Second"}, {"Player": "Third"}).to_csv(path, index=False)

    df = load_players(path)

    assert list(df["Player"]) == ["First", "Second", "Third"]
    assert "+/-" in df.columns
    assert "S%" in df.columns
    assert len(df.columns) == 34


def test_load_players_missing_file(tmp_path: Path):
    with pytest.raises(DataAccessError):
        load_players(tmp_path / "nope.csv")


def test_load_players_directory(tmp_path: Path):
    with pytest.raises(DataAccessError):
        load_players(tmp_path)


def test_load_players_empty_file(tmp_path: Path):
    path = tmp_path / "empty.csv"
    path.write_text("")

    with pytest.raises(DataAccessError):
        load_players(path)


def test_load_players_malformed_rows(tmp_path: Path):
    path = tmp_path / "broken.csv"
    path.write_text("Rk,Player\n1,A\n2,B,extra,fields\n")

    with pytest.raises(DataAccessError) as excinfo:
        load_players(path)
    assert excinfo.value.__cause__ is not None


def test_load_players_undecodable_bytes(tmp_path: Path):
    path = tmp_path / "latin.csv"
    path.write_bytes(b"Rk,Player\n1,\xff\xfe\n")

    with pytest.raises(DataAccessError) as excinfo:
        load_players(path)
    assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)


def test_header_only_file_cleans_to_empty_table(tmp_path: Path, raw_frame):
    path = tmp_path / "header.csv"
    raw_frame({}).iloc[:0].to_csv(path, index=False)

    df = clean_players(load_players(path))

    assert df.empty
    assert list(df.columns) == list(CLEANED_COLUMNS)
