"""Tests for recipe_picklist.ingestion.code_csv."""

from __future__ import annotations

from pathlib import Path

import pytest

from recipe_picklist.errors import InputError, NoCodesFoundError
from recipe_picklist.ingestion.code_csv import read_recipe_codes


def _write(tmp_path: Path, text: str, name: str = "codes.csv") -> Path:
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


def test_first_column_of_every_row(tmp_path: Path) -> None:
    path = _write(tmp_path, "R1,Soup,extra\nR2,Curry\nR3\n")
    assert read_recipe_codes(path) == ["R1", "R2", "R3"]


def test_header_row_is_treated_as_a_code(tmp_path: Path) -> None:
    path = _write(tmp_path, "code,name\nR1,Soup\n")
    assert read_recipe_codes(path) == ["code", "R1"]


def test_duplicates_and_order_preserved(tmp_path: Path) -> None:
    path = _write(tmp_path, "R2\nR1\nR2\n")
    assert read_recipe_codes(path) == ["R2", "R1", "R2"]


def test_blank_rows_and_whitespace(tmp_path: Path) -> None:
    path = _write(tmp_path, "  R1  \n\n,orphan\nR2\n")
    assert read_recipe_codes(path) == ["R1", "R2"]


def test_quoted_code(tmp_path: Path) -> None:
    path = _write(tmp_path, '"R,1",x\n')
    assert read_recipe_codes(path) == ["R,1"]


def test_custom_delimiter(tmp_path: Path) -> None:
    path = _write(tmp_path, "R1;Soup\nR2;Curry\n")
    assert read_recipe_codes(path, delimiter=";") == ["R1", "R2"]


def test_utf8_bom_stripped(tmp_path: Path) -> None:
    path = tmp_path / "bom.csv"
    path.write_bytes(b"\xef\xbb\xbfR1\nR2\n")
    assert read_recipe_codes(path) == ["R1", "R2"]


def test_empty_file_raises_no_codes(tmp_path: Path) -> None:
    path = _write(tmp_path, "")
    with pytest.raises(NoCodesFoundError, match="No codes found"):
        read_recipe_codes(path)


def test_only_blank_rows_raises_no_codes(tmp_path: Path) -> None:
    path = _write(tmp_path, "\n \n,\n")
    with pytest.raises(NoCodesFoundError):
        read_recipe_codes(path)


def test_missing_file_is_input_error(tmp_path: Path) -> None:
    with pytest.raises(InputError, match="not found"):
        read_recipe_codes(tmp_path / "nope.csv")


def test_undecodable_file_is_input_error(tmp_path: Path) -> None:
    path = tmp_path / "latin1.csv"
    path.write_bytes(b"R\xe9\xff1\n")
    with pytest.raises(InputError):
        read_recipe_codes(path)
