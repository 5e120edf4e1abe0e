import math

PASS_MARK = 50
ATTENDANCE_THRESHOLD = 75
CGPA_BUCKETS = (("a_plus", 9), ("a", 8), ("b_plus", 7), ("b", 6), ("c", 5))


def percent(part, whole):
    """Whole-number percentage, half rounded up; 0 for an empty whole."""
    return math.floor(part * 100 / whole + 0.5) if whole else 0


def clamp_attendance(value):
    return min(100, max(0, value or 0))


def cgpa_bucket(cgpa):
    if cgpa is None:
        return "f"
    for name, floor in CGPA_BUCKETS:
        if cgpa >= floor:
            return name
    return "f"


def yearly_stats(students):
    stats = {
        "total_students": len(students),
        "internal1": {"pass": 0, "fail": 0},
        "internal2": {"pass": 0, "fail": 0},
        "attendance": {"above75": 0, "below75": 0},
        "cgpa": {"a_plus": 0, "a": 0, "b_plus": 0, "b": 0, "c": 0, "f": 0},
    }
    for s in students:
        for exam in ("internal1", "internal2"):
            stats[exam]["pass" if (s.get(exam) or 0) >= PASS_MARK else "fail"] += 1
        stats["attendance"]["above75" if (s.get("attendance") or 0) >= ATTENDANCE_THRESHOLD else "below75"] += 1
        stats["cgpa"][cgpa_bucket(s.get("cgpa"))] += 1
    return stats


def student_status(student):
    at_risk = (student.get("attendance") or 0) < ATTENDANCE_THRESHOLD or (student.get("internal1") or 0) < PASS_MARK
    return "At Risk" if at_risk else "Good"


def mark_status(mark):
    return "Pass" if mark["total"] >= PASS_MARK else "Fail"


def subject_summary(marks):
    count = len(marks)
    return {
        "total_students": count,
        "class_average": math.floor(sum(m["total"] for m in marks) / count + 0.5) if count else 0,
        "pass_rate": percent(sum(1 for m in marks if m["total"] >= PASS_MARK), count),
    }


def year_summary(stats):
    """Headline figures for the year report."""
    total = stats["total_students"]
    return {
        "total_students": total,
        "attendance_rate": percent(stats["attendance"]["above75"], total),
        "pass_rate": percent(stats["internal2"]["pass"], total),
    }


def directory_row(student):
    return {
        "Roll No": student["roll_no"],
        "Name": student["name"],
        "Attendance %": student.get("attendance") or 0,
        "Internal 1": student.get("internal1") or 0,
        "Internal 2": student.get("internal2") or 0,
        "Avg Marks": math.floor(((student.get("internal1") or 0) + (student.get("internal2") or 0)) / 2 + 0.5),
        "Status": student_status(student),
    }
