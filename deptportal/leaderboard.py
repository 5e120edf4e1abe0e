"""Leaderboards: students ranked by marks, achievement points, or a single subject."""

from .store import ALL_YEARS


def rank(entries, key="total_points"):
    """Sort by descending score and number the result 1..n.

    Python's sort is stable, so ties keep their input order.
    """
    ordered = sorted(entries, key=lambda e: e[key], reverse=True)
    return [{**e, "rank": i} for i, e in enumerate(ordered, start=1)]


def _entry(student, points):
    return {
        "rank": 0,
        "student_name": student["name"],
        "roll_no": student["roll_no"],
        "total_points": points,
        "year_level": student.get("year") or "1",
    }


def in_year(students, year):
    if year in ALL_YEARS:
        return list(students)
    return [s for s in students if s.get("year") == str(year)]


def marks_leaderboard(students, marks, year=None):
    totals = {}
    for m in marks:
        totals[m["student_id"]] = totals.get(m["student_id"], 0) + m["total"]
    return rank([_entry(s, totals.get(s["id"], 0)) for s in in_year(students, year)])


def achievement_leaderboard(students, achievements, year=None):
    points = {}
    for a in achievements:
        if a["status"] == "approved":
            points[a["student_id"]] = points.get(a["student_id"], 0) + a["points_awarded"]
    return rank([_entry(s, points.get(s["id"], 0)) for s in in_year(students, year)])


def subject_leaderboard(marks):
    entries = [
        {"rank": 0, "student_name": m["student_name"], "roll_no": m["roll_no"],
         "total_points": m["total"], "year_level": "N/A"}
        for m in marks
    ]
    return rank(entries)


METRICS = {
    "marks": lambda store, year: marks_leaderboard(store.list_students(), store.list_marks(), year),
    "achievements": lambda store, year: achievement_leaderboard(
        store.list_students(), store.list_achievements(), year),
}


def leaderboard(store, year=None, metric="marks"):
    return METRICS[metric](store, year)
