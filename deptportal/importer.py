"""
Spreadsheet import for marks and attendance.

Uploaded sheets are parsed with pandas, then each row is matched to the
roster by roll number. Only the fields a row actually carries are written;
everything else keeps its previous value. Rows that match nobody are skipped
and only counted.
"""

import io
import math
import logging

import pandas as pd

logger = logging.getLogger(__name__)

ROLL_COLUMNS = ("roll_no", "Roll No", "rollNo", "Roll_No")
MARK_COLUMNS = {
    "test1": ("test1", "Test 1"),
    "test2": ("test2", "Test 2"),
    "assignment": ("assignment", "Assignment"),
}
ATTENDANCE_COLUMNS = ("attendance", "Attendance", "Attendance %", "attendance %")


class ImportFormatError(ValueError):
    pass


def read_rows(content, filename=""):
    """Parse the first sheet of an xlsx (or a csv) into a list of dicts; empty cells become None."""
    try:
        if filename.lower().endswith(".csv"):
            df = pd.read_csv(io.BytesIO(content), dtype={name: str for name in ROLL_COLUMNS})
        else:
            df = pd.read_excel(io.BytesIO(content), engine="openpyxl")
    except Exception as e:
        raise ImportFormatError(f"Could not read spreadsheet: {e}") from e
    df.columns = [str(c).strip() for c in df.columns]
    df = df.astype(object).where(pd.notna(df), None)
    return df.to_dict(orient="records")


def _present(value):
    if value is None:
        return False
    if isinstance(value, float) and math.isnan(value):
        return False
    return not (isinstance(value, str) and not value.strip())


def pick(row, aliases):
    for name in aliases:
        if _present(row.get(name)):
            return row[name]
    return None


def roll_key(value):
    """Roll numbers compare as trimmed strings; a numeric cell 101.0 reads as '101'."""
    if not _present(value):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def to_number(value):
    """Parse a cell as a finite float, tolerating a trailing '%'; anything else is None."""
    if not _present(value):
        return None
    try:
        number = float(str(value).strip().rstrip("%"))
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def _percent_marked(value):
    return isinstance(value, str) and value.strip().endswith("%")


def coerce_attendance(value, fmt="auto"):
    """Turn a sheet value into a whole percentage in [0, 100].

    ``fmt`` declares the column: 'percent' (92), 'fraction' (0.92), or 'auto',
    which treats anything in (0, 1] as a fraction unless the cell says '%'.
    """
    number = to_number(value)
    if number is None:
        return None
    if fmt == "fraction" or (fmt == "auto" and 0 < number <= 1 and not _percent_marked(value)):
        number *= 100
    return int(min(100, max(0, math.floor(number + 0.5))))


def reconcile_marks(rows, marks):
    """Merge sheet rows into subject mark rows. Returns (updated marks, matched count)."""
    updated = [dict(m) for m in marks]
    by_roll = {str(m["roll_no"]).strip(): m for m in updated}
    matched = 0
    for row in rows:
        current = by_roll.get(roll_key(pick(row, ROLL_COLUMNS)))
        if current is None:
            continue
        matched += 1
        for field, aliases in MARK_COLUMNS.items():
            number = to_number(pick(row, aliases))
            if number is not None:
                current[field] = number
        current["total"] = current["test1"] + current["test2"] + current["assignment"]
    logger.info("Marks import matched %d of %d rows", matched, len(rows))
    return updated, matched


def reconcile_attendance(rows, students, fmt="auto"):
    """Merge sheet rows into student attendance. Returns (updated students, matched count)."""
    updated = [dict(s) for s in students]
    by_roll = {str(s["roll_no"]).strip(): s for s in updated}
    matched = 0
    for row in rows:
        student = by_roll.get(roll_key(pick(row, ROLL_COLUMNS)))
        attendance = coerce_attendance(pick(row, ATTENDANCE_COLUMNS), fmt)
        if student is None or attendance is None:
            continue
        matched += 1
        student["attendance"] = attendance
    logger.info("Attendance import matched %d of %d rows", matched, len(rows))
    return updated, matched
