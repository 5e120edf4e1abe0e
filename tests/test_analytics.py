import pytest

from deptportal import analytics


@pytest.mark.parametrize("cgpa, bucket", [
    (9.5, "a_plus"), (9.0, "a_plus"), (8.99, "a"), (8.0, "a"), (7.5, "b_plus"),
    (6.0, "b"), (5.2, "c"), (4.9, "f"), (None, "f"),
])
def test_cgpa_bucket(cgpa, bucket):
    assert analytics.cgpa_bucket(cgpa) == bucket


def test_yearly_stats_first_year(memory_store):
    stats = analytics.yearly_stats(memory_store.list_students("1"))
    assert stats["total_students"] == 5
    assert stats["internal1"] == {"pass": 5, "fail": 0}
    assert stats["attendance"] == {"above75": 5, "below75": 0}
    assert stats["cgpa"] == {"a_plus": 1, "a": 3, "b_plus": 1, "b": 0, "c": 0, "f": 0}


def test_yearly_stats_pass_fail_split():
    students = [
        {"internal1": 49, "internal2": 50, "attendance": 74.9, "cgpa": 4.0},
        {"internal1": 50, "internal2": 20, "attendance": 75, "cgpa": None},
    ]
    stats = analytics.yearly_stats(students)
    assert stats["internal1"] == {"pass": 1, "fail": 1}
    assert stats["internal2"] == {"pass": 1, "fail": 1}
    assert stats["attendance"] == {"above75": 1, "below75": 1}
    assert stats["cgpa"]["f"] == 2


def test_yearly_stats_empty_year():
    stats = analytics.yearly_stats([])
    assert stats["total_students"] == 0
    assert analytics.year_summary(stats) == {"total_students": 0, "attendance_rate": 0, "pass_rate": 0}


def test_subject_summary():
    marks = [{"total": 93}, {"total": 73}, {"total": 40}]
    assert analytics.subject_summary(marks) == {"total_students": 3, "class_average": 69, "pass_rate": 67}
    assert analytics.subject_summary([]) == {"total_students": 0, "class_average": 0, "pass_rate": 0}


def test_student_status():
    assert analytics.student_status({"attendance": 80, "internal1": 60}) == "Good"
    assert analytics.student_status({"attendance": 70, "internal1": 60}) == "At Risk"
    assert analytics.student_status({"attendance": 90, "internal1": 45}) == "At Risk"


def test_mark_status_boundary():
    assert analytics.mark_status({"total": 50}) == "Pass"
    assert analytics.mark_status({"total": 49.5}) == "Fail"


def test_clamp_attendance():
    assert analytics.clamp_attendance(120) == 100
    assert analytics.clamp_attendance(-3) == 0
    assert analytics.clamp_attendance(None) == 0
