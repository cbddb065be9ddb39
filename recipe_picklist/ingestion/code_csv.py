"""
Recipe code reader.

Format — comma (or configured delimiter) separated. Only the first column
is used. There is no header detection: every row's first cell is treated as
a recipe code, so a header row simply becomes one more code that the
planning service will not match.

Rules:
  - Surrounding whitespace is stripped from each code.
  - Rows whose first cell is blank (or rows with no cells) are skipped.
  - Duplicates are kept and order is preserved.
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path

from recipe_picklist.errors import InputError, NoCodesFoundError

logger = logging.getLogger(__name__)


def read_recipe_codes(path: Path, delimiter: str = ",") -> list[str]:
    """Read the recipe code batch from ``path``.

    Args:
        path: Path to the delimited file.
        delimiter: Single-character field delimiter.

    Returns:
        Non-empty list of recipe codes in file order.

    Raises:
        InputError: If the file cannot be opened, decoded or parsed.
        NoCodesFoundError: If the file yields no codes.
    """
    path = Path(path)
    codes: list[str] = []
    skipped = 0

    try:
        with open(path, encoding="utf-8-sig", newline="") as f:
            for row in csv.reader(f, delimiter=delimiter):
                code = row[0].strip() if row else ""
                if not code:
                    skipped += 1
                    continue
                codes.append(code)
    except FileNotFoundError as exc:
        raise InputError(f"Recipe code file not found: {path}") from exc
    except (OSError, UnicodeDecodeError, csv.Error) as exc:
        raise InputError(f"Failed to read recipe code file {path}: {exc}") from exc

    if skipped:
        logger.debug("Skipped %d blank rows in %s", skipped, path)
    if not codes:
        raise NoCodesFoundError(str(path))

    logger.info("Read %d recipe codes from %s", len(codes), path)
    return codes
