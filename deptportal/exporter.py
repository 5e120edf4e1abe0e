"""Workbook exports for the HOD reports, written with pandas and openpyxl."""

import io

import pandas as pd

from . import analytics
from .store import ALL_YEARS

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _workbook(sheets):
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        for name, df in sheets:
            df.to_excel(writer, sheet_name=name, index=False)
    output.seek(0)
    return output


def year_report(students):
    stats = analytics.yearly_stats(students)
    summary = analytics.year_summary(stats)
    summary_df = pd.DataFrame(
        [
            ["Total Students", summary["total_students"]],
            ["Avg Attendance", f"{summary['attendance_rate']}%"],
            ["Pass Rate", f"{summary['pass_rate']}%"],
        ],
        columns=["Metric", "Value"],
    )
    sheets = [("Summary", summary_df)]
    if students:
        sheets.append(("Student Directory", pd.DataFrame([analytics.directory_row(s) for s in students])))
    return _workbook(sheets)


def leaderboard_report(entries):
    rows = [
        {"Rank": e["rank"], "Student Name": e["student_name"], "Roll No": e["roll_no"],
         "Year": e["year_level"], "Total Points": e["total_points"]}
        for e in entries
    ]
    df = pd.DataFrame(rows, columns=["Rank", "Student Name", "Roll No", "Year", "Total Points"])
    return _workbook([("Leaderboard", df)])


def export_filename(year):
    return "Department_Overview_All_Years.xlsx" if year in ALL_YEARS else f"Department_Overview_Year_{year}.xlsx"
