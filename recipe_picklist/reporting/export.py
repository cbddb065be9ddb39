"""
Picklist CSV export.

``write_picklist_csv()`` writes ``PICKLIST_HEADER`` followed by one line per
``PicklistRow`` and returns the written ``Path``.

File names come from ``new_picklist_filename()``: a fresh ULID (globally
unique, lexicographically sortable by creation time) plus
``_picklists.csv``. The file is opened in exclusive-create mode, so an
existing file is never overwritten.

Atomicity
---------
By default rows are streamed straight into the destination, so a failure
mid-write can leave a truncated file behind. With ``atomic=True`` the rows
go to a temporary sibling file that is renamed into place only once fully
written; on failure the temporary file is removed.
"""

from __future__ import annotations

import csv
import logging
import os
import tempfile
from collections.abc import Sequence
from pathlib import Path
from typing import Optional

from ulid import ULID

from recipe_picklist.errors import OutputError
from recipe_picklist.models.picklist import PICKLIST_HEADER, PicklistRow

logger = logging.getLogger(__name__)

PICKLIST_SUFFIX = "_picklists.csv"


def new_run_id() -> str:
    """Return a new 26-character ULID string."""
    return str(ULID())


def new_picklist_filename(run_id: Optional[str] = None) -> str:
    """Return ``{ulid}_picklists.csv``, generating a ULID if none is given."""
    return f"{run_id or new_run_id()}{PICKLIST_SUFFIX}"


def write_picklist_csv(
    rows: Sequence[PicklistRow],
    output_dir: Path,
    file_name: Optional[str] = None,
    atomic: bool = False,
) -> Path:
    """Write picklist rows to a new UTF-8 CSV file.

    Args:
        rows:       Rows in output order.
        output_dir: Destination directory (created if missing).
        file_name:  File name; defaults to ``new_picklist_filename()``.
        atomic:     Write to a temp file and rename on success.

    Returns:
        Path of the written file.

    Raises:
        OutputError: If the directory or file cannot be created or written,
            or the destination already exists.
    """
    output_dir = Path(output_dir)
    path = output_dir / (file_name or new_picklist_filename())

    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise OutputError(f"Cannot create output directory {output_dir}: {exc}") from exc

    try:
        if atomic:
            _write_atomic(rows, path)
        else:
            with path.open("x", newline="", encoding="utf-8") as f:
                _write_rows(f, rows)
    except FileExistsError as exc:
        raise OutputError(f"Refusing to overwrite existing picklist: {path}") from exc
    except OSError as exc:
        raise OutputError(f"Failed to write picklist {path}: {exc}") from exc

    logger.info("Wrote %d picklist rows to %s", len(rows), path)
    return path


def _write_rows(f, rows: Sequence[PicklistRow]) -> None:
    writer = csv.writer(f)
    writer.writerow(PICKLIST_HEADER)
    for row in rows:
        writer.writerow(row.as_record())


def _write_atomic(rows: Sequence[PicklistRow], path: Path) -> None:
    if path.exists():
        raise FileExistsError(path)
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
    )
    try:
        with os.fdopen(fd, "w", newline="", encoding="utf-8") as f:
            _write_rows(f, rows)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
