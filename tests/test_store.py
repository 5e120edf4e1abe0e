"""Both stores must behave the same; every test here runs against each of them."""

import pytest

from deptportal.store import MemoryStore, init_store


def test_users_crud(store):
    assert [u["id"] for u in store.list_users()] == [1, 2, 3, 4, 5]
    user = store.create_user({"name": "Head", "email": "hod@college.edu", "role": "HOD", "year": "-", "subject": "-"})
    assert store.get_user_role("hod@college.edu") == "HOD"
    assert store.delete_user(user["id"]) is True
    assert store.delete_user(user["id"]) is False
    assert store.get_user_role("hod@college.edu") is None


def test_list_students_by_year(store):
    assert [s["roll_no"] for s in store.list_students("2")] == ["CS201", "CS202"]
    assert len(store.list_students("All Years")) == 12


def test_update_student_merges_given_fields(store):
    student = store.update_student(3, {"attendance": 61, "bogus": 1})
    assert student["attendance"] == 61
    assert student["internal1"] == 92
    assert "bogus" not in student
    assert store.update_student(999, {"attendance": 50}) is None


def test_student_profile_fallbacks(store):
    assert store.get_student_profile("arun@student.edu")["roll_no"] == "CS101"
    staff = store.get_student_profile("rajesh@college.edu")
    assert staff["roll_no"] == "N/A"
    assert staff["id"] is None
    assert staff["attendance"] == 0
    assert store.get_student_profile("nobody@college.edu") is None


def test_marks_for_subject_fill_placeholders(store):
    marks = store.get_marks_for_subject(101)
    assert len(marks) == 5
    by_roll = {m["roll_no"]: m for m in marks}
    assert by_roll["CS101"]["total"] == 93
    assert by_roll["CS105"]["total"] == 0
    assert by_roll["CS105"]["max_total"] == 100
    assert store.get_marks_for_subject(9999) == []


def test_save_subject_marks_upserts_and_recomputes(store):
    saved = store.save_subject_marks(101, [
        {"student_id": 1, "test1": 50, "test2": 50, "assignment": 20, "total": 1},
        {"student_id": 3, "test1": 20, "test2": 25, "assignment": 5},
    ])
    assert [m["total"] for m in saved] == [120, 50]
    stored = {m["student_id"]: m for m in store.list_marks(subject_id=101)}
    assert stored[1]["total"] == 120
    assert stored[3]["student_name"] == "Rahul Verma"
    assert len(stored) == 3
    assert store.get_subject(101)["last_updated"] != "2025-05-15"
    assert store.save_subject_marks(9999, []) is None


def test_delete_subject_removes_its_marks(store):
    assert store.delete_subject(101) is True
    assert store.list_marks(subject_id=101) == []
    assert store.get_subject(101) is None
    assert store.delete_subject(101) is False
    assert len(store.list_marks(student_id=1)) == 2


def test_create_subject(store):
    subject = store.create_subject({"name": "Compilers", "code": "CS404", "year": "4", "staff_id": 3,
                                    "staff_name": "Dr. Amit Patel", "total_students": 45})
    assert subject["last_updated"]
    assert [s["code"] for s in store.list_subjects("4")] == ["CS401", "CS402", "CS404"]


def test_certificates(store):
    assert [c["id"] for c in store.list_certificates()] == [3, 2, 1]
    assert store.update_certificate_status(1, "Approved")["status"] == "Approved"
    assert store.update_certificate_status(42, "Approved") is None


def test_achievement_workflow(store):
    created = store.create_achievement(2, {"category_id": 7, "title": "Code Sprint", "achievement_date": "2025-02-01"})
    assert created["status"] == "pending"
    assert created["points_awarded"] == 0
    assert created["category_name"] == "Competition Winner"
    assert created["student_year"] == "1"

    approved = store.verify_achievement(created["id"], "approved")
    assert approved["points_awarded"] == 25

    custom = store.verify_achievement(2, "approved", points=12)
    assert custom["points_awarded"] == 12

    rejected = store.verify_achievement(created["id"], "rejected", points=40, reason="Proof unreadable")
    assert rejected["points_awarded"] == 0
    assert rejected["rejection_reason"] == "Proof unreadable"

    assert store.verify_achievement(999, "approved") is None
    assert store.create_achievement(999, {"category_id": 1}) is None


def test_unknown_category_is_general(store):
    created = store.create_achievement(1, {"category_id": 99, "title": "Misc"})
    assert created["category_name"] == "General"


def test_achievement_filters(store):
    assert [a["id"] for a in store.list_achievements(status="pending")] == [2]
    assert [a["id"] for a in store.list_achievements(student_id=1)] == [2, 1]


def test_leave_workflow(store):
    leave = store.create_leave(6, "2025-03-03", "Family function")
    assert leave["status"] == "Pending"
    assert leave["roll_no"] == "CS201"
    assert [l["id"] for l in store.list_leaves(year="2", status="Pending")] == [leave["id"]]
    assert [l["id"] for l in store.list_leaves(year="1", status="Pending")] == [1]
    assert store.update_leave_status(leave["id"], "Approved")["status"] == "Approved"
    assert store.list_leaves(year="2", status="Pending") == []
    assert store.update_leave_status(999, "Approved") is None
    assert store.create_leave(999, "2025-03-03", "x") is None


def test_categories_are_seeded(store):
    assert [c["points"] for c in store.list_categories()] == [20, 25, 10, 15, 5, 20, 25, 10]


def test_empty_memory_store():
    store = MemoryStore(demo=False)
    assert store.list_students() == []
    assert len(store.list_categories()) == 8


def test_init_store_without_url_uses_memory(monkeypatch):
    monkeypatch.delenv("PORTAL_STORE", raising=False)
    assert init_store(mode="auto", url="").kind == "memory"


def test_init_store_falls_back_when_unreachable():
    store = init_store(mode="auto", url="sqlite:////nonexistent-dir/portal.db")
    assert store.kind == "memory"


def test_init_store_sql_mode_fails_loudly():
    with pytest.raises(Exception):
        init_store(mode="sql", url="sqlite:////nonexistent-dir/portal.db")


def test_init_store_sql(tmp_path):
    store = init_store(mode="sql", url=f"sqlite:///{tmp_path / 'portal.db'}")
    assert store.kind == "sql"
    assert len(store.list_categories()) == 8
