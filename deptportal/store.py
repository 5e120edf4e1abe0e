"""
Data access for the department portal.

Two interchangeable stores sit behind ``DataStore``: ``MemoryStore`` keeps
process-local lists seeded with the demo roster, ``SqlStore`` talks to a
relational database through SQLAlchemy. ``init_store`` picks one at startup
and ``get_store`` hands it to the routes.

Records cross this boundary as plain dicts with snake_case keys.
"""

import os
import copy
import logging
from abc import ABC, abstractmethod
from datetime import date, datetime, timezone

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from . import database, models, seed

logger = logging.getLogger(__name__)

STUDENT_FIELDS = ("name", "email", "roll_no", "year", "internal1", "internal2", "attendance", "cgpa")
ALL_YEARS = (None, "", "All", "All Years")

_store = None


def today():
    return date.today().isoformat()


def now():
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def mark_total(mark):
    return (mark.get("test1") or 0) + (mark.get("test2") or 0) + (mark.get("assignment") or 0)


def placeholder_mark(student, subject):
    return {
        "student_id": student["id"], "student_name": student["name"], "roll_no": student["roll_no"],
        "subject_id": subject["id"], "subject_name": subject["name"],
        "test1": 0, "test2": 0, "assignment": 0, "total": 0, "max_total": 100,
    }


def profile_from_user(user):
    """Zero-filled student profile for a user account with no roster entry."""
    year = user.get("year")
    return {
        "id": None, "name": user["name"], "email": user["email"], "roll_no": "N/A",
        "year": year if year not in (None, "", "-") else "1",
        "internal1": 0, "internal2": 0, "attendance": 0, "cgpa": 0,
    }


def awarded_points(status, points, category):
    if status == "rejected":
        return 0
    if points is not None:
        return points
    return category["points"] if category else 0


class DataStore(ABC):
    kind = "abstract"

    # --- users ---
    @abstractmethod
    def list_users(self): ...

    @abstractmethod
    def create_user(self, data): ...

    @abstractmethod
    def delete_user(self, user_id): ...

    @abstractmethod
    def get_user_by_email(self, email): ...

    def get_user_role(self, email):
        user = self.get_user_by_email(email)
        return user["role"] if user else None

    # --- students ---
    @abstractmethod
    def list_students(self, year=None): ...

    @abstractmethod
    def get_student(self, student_id): ...

    @abstractmethod
    def get_student_by_email(self, email): ...

    @abstractmethod
    def update_student(self, student_id, updates): ...

    def get_student_profile(self, email):
        student = self.get_student_by_email(email)
        if student:
            return student
        user = self.get_user_by_email(email)
        return profile_from_user(user) if user else None

    # --- subjects and marks ---
    @abstractmethod
    def list_subjects(self, year=None): ...

    @abstractmethod
    def get_subject(self, subject_id): ...

    @abstractmethod
    def create_subject(self, data): ...

    @abstractmethod
    def delete_subject(self, subject_id): ...

    @abstractmethod
    def list_marks(self, student_id=None, subject_id=None): ...

    @abstractmethod
    def save_subject_marks(self, subject_id, marks): ...

    def get_marks_for_subject(self, subject_id):
        """Every student of the subject's year, with zero placeholders where nothing is stored."""
        subject = self.get_subject(subject_id)
        if not subject:
            return []
        stored = {m["student_id"]: m for m in self.list_marks(subject_id=subject_id)}
        return [stored.get(s["id"]) or placeholder_mark(s, subject) for s in self.list_students(subject["year"])]

    def _complete_marks(self, subject, marks):
        """Fill names from the roster and recompute totals before writing."""
        roster = {s["id"]: s for s in self.list_students()}
        rows = []
        for mark in marks:
            student = roster.get(mark["student_id"], {})
            row = {
                "student_id": mark["student_id"],
                "student_name": mark.get("student_name") or student.get("name", ""),
                "roll_no": mark.get("roll_no") or student.get("roll_no", ""),
                "subject_id": subject["id"],
                "subject_name": subject["name"],
                "test1": mark.get("test1") or 0,
                "test2": mark.get("test2") or 0,
                "assignment": mark.get("assignment") or 0,
                "max_total": mark.get("max_total") or 100,
            }
            row["total"] = mark_total(row)
            rows.append(row)
        return rows

    # --- certificates ---
    @abstractmethod
    def list_certificates(self): ...

    @abstractmethod
    def update_certificate_status(self, certificate_id, status): ...

    # --- achievements ---
    @abstractmethod
    def list_categories(self): ...

    @abstractmethod
    def list_achievements(self, student_id=None, status=None): ...

    @abstractmethod
    def create_achievement(self, student_id, data): ...

    @abstractmethod
    def verify_achievement(self, achievement_id, status, points=None, reason=None): ...

    def _category(self, category_id):
        return next((c for c in self.list_categories() if c["id"] == category_id), None)

    def _with_year(self, achievements):
        years = {s["id"]: s.get("year") for s in self.list_students()}
        for a in achievements:
            a["student_year"] = years.get(a["student_id"]) or "N/A"
        return achievements

    def _new_achievement(self, student, data):
        category = self._category(data.get("category_id"))
        return {
            "student_id": student["id"],
            "student_name": student["name"],
            "roll_no": student["roll_no"],
            "category_id": data.get("category_id") or 0,
            "category_name": category["category_name"] if category else "General",
            "title": data.get("title", ""),
            "description": data.get("description", ""),
            "proof_file": data.get("proof_file", ""),
            "achievement_date": data.get("achievement_date", ""),
            "points_awarded": 0,
            "status": "pending",
            "rejection_reason": None,
            "uploaded_at": now(),
        }

    # --- leave ---
    @abstractmethod
    def list_leaves(self, year=None, status=None, student_id=None): ...

    @abstractmethod
    def create_leave(self, student_id, leave_date, reason): ...

    @abstractmethod
    def update_leave_status(self, leave_id, status): ...


def _next_id(rows):
    return max((r["id"] for r in rows), default=0) + 1


def _year_filter(year):
    return None if year in ALL_YEARS else str(year)


class MemoryStore(DataStore):
    """Process-local lists; everything is lost when the process exits."""

    kind = "memory"

    def __init__(self, demo=True):
        self.categories = copy.deepcopy(seed.ACHIEVEMENT_CATEGORIES)
        self.users, self.students, self.subjects, self.marks = [], [], [], []
        self.certificates, self.achievements, self.leaves = [], [], []
        if demo:
            self.users = copy.deepcopy(seed.USERS)
            self.students = copy.deepcopy(seed.STUDENTS)
            self.subjects = copy.deepcopy(seed.SUBJECTS)
            self.marks = copy.deepcopy(seed.MARKS)
            self.certificates = copy.deepcopy(seed.CERTIFICATES)
            self.achievements = copy.deepcopy(seed.ACHIEVEMENTS)
            self.leaves = copy.deepcopy(seed.LEAVES)

    def list_users(self):
        return [dict(u) for u in sorted(self.users, key=lambda u: u["id"])]

    def create_user(self, data):
        user = {**data, "id": _next_id(self.users)}
        self.users.append(user)
        return dict(user)

    def delete_user(self, user_id):
        before = len(self.users)
        self.users = [u for u in self.users if u["id"] != user_id]
        return len(self.users) < before

    def get_user_by_email(self, email):
        user = next((u for u in self.users if u["email"] == email), None)
        return dict(user) if user else None

    def list_students(self, year=None):
        year = _year_filter(year)
        rows = [s for s in self.students if year is None or s.get("year") == year]
        return [dict(s) for s in sorted(rows, key=lambda s: s["id"])]

    def get_student(self, student_id):
        student = next((s for s in self.students if s["id"] == student_id), None)
        return dict(student) if student else None

    def get_student_by_email(self, email):
        student = next((s for s in self.students if email and s.get("email") == email), None)
        return dict(student) if student else None

    def update_student(self, student_id, updates):
        for student in self.students:
            if student["id"] == student_id:
                student.update({k: v for k, v in updates.items() if k in STUDENT_FIELDS})
                return dict(student)
        return None

    def list_subjects(self, year=None):
        year = _year_filter(year)
        return [dict(s) for s in self.subjects if year is None or s["year"] == year]

    def get_subject(self, subject_id):
        subject = next((s for s in self.subjects if s["id"] == subject_id), None)
        return dict(subject) if subject else None

    def create_subject(self, data):
        subject = {**data, "id": _next_id(self.subjects)}
        subject["last_updated"] = subject.get("last_updated") or today()
        self.subjects.append(subject)
        return dict(subject)

    def delete_subject(self, subject_id):
        before = len(self.subjects)
        self.subjects = [s for s in self.subjects if s["id"] != subject_id]
        self.marks = [m for m in self.marks if m["subject_id"] != subject_id]
        return len(self.subjects) < before

    def list_marks(self, student_id=None, subject_id=None):
        return [
            dict(m) for m in self.marks
            if (student_id is None or m["student_id"] == student_id)
            and (subject_id is None or m["subject_id"] == subject_id)
        ]

    def save_subject_marks(self, subject_id, marks):
        subject = self.get_subject(subject_id)
        if not subject:
            return None
        rows = self._complete_marks(subject, marks)
        for row in rows:
            index = next((i for i, m in enumerate(self.marks)
                          if m["student_id"] == row["student_id"] and m["subject_id"] == subject_id), None)
            if index is None:
                self.marks.append(row)
            else:
                self.marks[index] = row
        for s in self.subjects:
            if s["id"] == subject_id:
                s["last_updated"] = today()
        return [dict(r) for r in rows]

    def list_certificates(self):
        return [dict(c) for c in sorted(self.certificates, key=lambda c: c["id"], reverse=True)]

    def update_certificate_status(self, certificate_id, status):
        for cert in self.certificates:
            if cert["id"] == certificate_id:
                cert["status"] = status
                return dict(cert)
        return None

    def list_categories(self):
        return [dict(c) for c in self.categories]

    def list_achievements(self, student_id=None, status=None):
        rows = [
            dict(a) for a in self.achievements
            if (student_id is None or a["student_id"] == student_id)
            and (status is None or a["status"] == status)
        ]
        rows.sort(key=lambda a: a["id"], reverse=True)
        return self._with_year(rows)

    def create_achievement(self, student_id, data):
        student = self.get_student(student_id)
        if not student:
            return None
        achievement = {**self._new_achievement(student, data), "id": _next_id(self.achievements)}
        self.achievements.insert(0, achievement)
        return self._with_year([dict(achievement)])[0]

    def verify_achievement(self, achievement_id, status, points=None, reason=None):
        for a in self.achievements:
            if a["id"] == achievement_id:
                a["status"] = status
                a["points_awarded"] = awarded_points(status, points, self._category(a["category_id"]))
                a["rejection_reason"] = reason if status == "rejected" else None
                return self._with_year([dict(a)])[0]
        return None

    def list_leaves(self, year=None, status=None, student_id=None):
        year = _year_filter(year)
        years = {s["id"]: s.get("year") for s in self.students}
        rows = [
            dict(l) for l in self.leaves
            if (year is None or years.get(l["student_id"]) == year)
            and (status is None or l["status"] == status)
            and (student_id is None or l["student_id"] == student_id)
        ]
        return sorted(rows, key=lambda l: l["id"], reverse=True)

    def create_leave(self, student_id, leave_date, reason):
        student = self.get_student(student_id)
        if not student:
            return None
        leave = {
            "id": _next_id(self.leaves), "student_id": student_id, "student_name": student["name"],
            "roll_no": student["roll_no"], "leave_date": leave_date, "reason": reason,
            "status": "Pending", "applied_on": today(),
        }
        self.leaves.append(leave)
        return dict(leave)

    def update_leave_status(self, leave_id, status):
        for leave in self.leaves:
            if leave["id"] == leave_id:
                leave["status"] = status
                return dict(leave)
        return None


def _row(obj, drop=()):
    return {c.name: getattr(obj, c.name) for c in obj.__table__.columns if c.name not in drop}


def _mark_row(obj):
    return _row(obj, drop=("id",))


class SqlStore(DataStore):
    """Relational store; every call runs in its own session and commits before returning."""

    kind = "sql"

    def __init__(self, engine):
        self.engine = engine
        self.Session = database.make_session_factory(engine)
        database.create_schema(engine)
        self.seed_categories()

    def seed_categories(self):
        with self.Session() as db:
            if db.query(models.AchievementCategory).count() == 0:
                db.add_all(models.AchievementCategory(**c) for c in seed.ACHIEVEMENT_CATEGORIES)
                db.commit()
                logger.info("Seeded %d achievement categories", len(seed.ACHIEVEMENT_CATEGORIES))

    def seed_demo(self):
        """Load the demo roster into empty tables."""
        with self.Session() as db:
            if db.query(models.Student).count() > 0:
                logger.info("Students table not empty, skipping demo seed")
                return
            db.add_all(models.User(**u) for u in seed.USERS)
            db.add_all(models.Student(**s) for s in seed.STUDENTS)
            db.add_all(models.Subject(**s) for s in seed.SUBJECTS)
            db.add_all(models.Certificate(**c) for c in seed.CERTIFICATES)
            db.add_all(models.Achievement(**a) for a in seed.ACHIEVEMENTS)
            db.add_all(models.LeaveApplication(**l) for l in seed.LEAVES)
            db.flush()
            db.add_all(models.SubjectMark(**m) for m in seed.MARKS)
            db.commit()
            if self.engine.dialect.name == "postgresql":
                # Explicit ids leave the serial sequences behind
                for table in ("users", "students", "subjects", "certificates", "achievements", "leave_applications"):
                    db.execute(text(
                        f"SELECT setval(pg_get_serial_sequence('{table}', 'id'), (SELECT MAX(id) FROM {table}))"
                    ))
                db.commit()
        logger.info("Seeded demo roster into SQL store")

    def list_users(self):
        with self.Session() as db:
            return [_row(u) for u in db.query(models.User).order_by(models.User.id).all()]

    def create_user(self, data):
        with self.Session() as db:
            user = models.User(**data)
            db.add(user)
            db.commit()
            db.refresh(user)
            return _row(user)

    def delete_user(self, user_id):
        with self.Session() as db:
            deleted = db.query(models.User).filter(models.User.id == user_id).delete()
            db.commit()
            return deleted > 0

    def get_user_by_email(self, email):
        with self.Session() as db:
            user = db.query(models.User).filter(models.User.email == email).order_by(models.User.id).first()
            return _row(user) if user else None

    def list_students(self, year=None):
        year = _year_filter(year)
        with self.Session() as db:
            q = db.query(models.Student)
            if year is not None:
                q = q.filter(models.Student.year == year)
            return [_row(s) for s in q.order_by(models.Student.id).all()]

    def get_student(self, student_id):
        with self.Session() as db:
            s = db.get(models.Student, student_id)
            return _row(s) if s else None

    def get_student_by_email(self, email):
        if not email:
            return None
        with self.Session() as db:
            s = db.query(models.Student).filter(models.Student.email == email).order_by(models.Student.id).first()
            return _row(s) if s else None

    def update_student(self, student_id, updates):
        with self.Session() as db:
            s = db.get(models.Student, student_id)
            if not s:
                return None
            for k, v in updates.items():
                if k in STUDENT_FIELDS:
                    setattr(s, k, v)
            db.commit()
            db.refresh(s)
            return _row(s)

    def list_subjects(self, year=None):
        year = _year_filter(year)
        with self.Session() as db:
            q = db.query(models.Subject)
            if year is not None:
                q = q.filter(models.Subject.year == year)
            return [_row(s) for s in q.order_by(models.Subject.id).all()]

    def get_subject(self, subject_id):
        with self.Session() as db:
            s = db.get(models.Subject, subject_id)
            return _row(s) if s else None

    def create_subject(self, data):
        with self.Session() as db:
            subject = models.Subject(**{**data, "last_updated": data.get("last_updated") or today()})
            db.add(subject)
            db.commit()
            db.refresh(subject)
            return _row(subject)

    def delete_subject(self, subject_id):
        with self.Session() as db:
            db.query(models.SubjectMark).filter(models.SubjectMark.subject_id == subject_id).delete()
            deleted = db.query(models.Subject).filter(models.Subject.id == subject_id).delete()
            db.commit()
            return deleted > 0

    def list_marks(self, student_id=None, subject_id=None):
        with self.Session() as db:
            q = db.query(models.SubjectMark)
            if student_id is not None:
                q = q.filter(models.SubjectMark.student_id == student_id)
            if subject_id is not None:
                q = q.filter(models.SubjectMark.subject_id == subject_id)
            return [_mark_row(m) for m in q.order_by(models.SubjectMark.id).all()]

    def save_subject_marks(self, subject_id, marks):
        subject = self.get_subject(subject_id)
        if not subject:
            return None
        rows = self._complete_marks(subject, marks)
        with self.Session() as db:
            for row in rows:
                existing = db.query(models.SubjectMark).filter_by(
                    student_id=row["student_id"], subject_id=subject_id).first()
                if existing:
                    for k, v in row.items():
                        setattr(existing, k, v)
                else:
                    db.add(models.SubjectMark(**row))
            db.get(models.Subject, subject_id).last_updated = today()
            db.commit()
        return rows

    def list_certificates(self):
        with self.Session() as db:
            return [_row(c) for c in db.query(models.Certificate).order_by(models.Certificate.id.desc()).all()]

    def update_certificate_status(self, certificate_id, status):
        with self.Session() as db:
            cert = db.get(models.Certificate, certificate_id)
            if not cert:
                return None
            cert.status = status
            db.commit()
            db.refresh(cert)
            return _row(cert)

    def list_categories(self):
        with self.Session() as db:
            return [_row(c) for c in db.query(models.AchievementCategory).order_by(models.AchievementCategory.id).all()]

    def list_achievements(self, student_id=None, status=None):
        with self.Session() as db:
            q = db.query(models.Achievement)
            if student_id is not None:
                q = q.filter(models.Achievement.student_id == student_id)
            if status is not None:
                q = q.filter(models.Achievement.status == status)
            rows = [_row(a) for a in q.order_by(models.Achievement.id.desc()).all()]
        return self._with_year(rows)

    def create_achievement(self, student_id, data):
        student = self.get_student(student_id)
        if not student:
            return None
        with self.Session() as db:
            achievement = models.Achievement(**self._new_achievement(student, data))
            db.add(achievement)
            db.commit()
            db.refresh(achievement)
            row = _row(achievement)
        return self._with_year([row])[0]

    def verify_achievement(self, achievement_id, status, points=None, reason=None):
        with self.Session() as db:
            a = db.get(models.Achievement, achievement_id)
            if not a:
                return None
            category = db.get(models.AchievementCategory, a.category_id)
            a.status = status
            a.points_awarded = awarded_points(status, points, _row(category) if category else None)
            a.rejection_reason = reason if status == "rejected" else None
            db.commit()
            db.refresh(a)
            row = _row(a)
        return self._with_year([row])[0]

    def list_leaves(self, year=None, status=None, student_id=None):
        year = _year_filter(year)
        with self.Session() as db:
            q = db.query(models.LeaveApplication)
            if year is not None:
                ids = [s.id for s in db.query(models.Student.id).filter(models.Student.year == year)]
                q = q.filter(models.LeaveApplication.student_id.in_(ids))
            if status is not None:
                q = q.filter(models.LeaveApplication.status == status)
            if student_id is not None:
                q = q.filter(models.LeaveApplication.student_id == student_id)
            return [_row(l) for l in q.order_by(models.LeaveApplication.id.desc()).all()]

    def create_leave(self, student_id, leave_date, reason):
        student = self.get_student(student_id)
        if not student:
            return None
        with self.Session() as db:
            leave = models.LeaveApplication(
                student_id=student_id, student_name=student["name"], roll_no=student["roll_no"],
                leave_date=leave_date, reason=reason, status="Pending", applied_on=today(),
            )
            db.add(leave)
            db.commit()
            db.refresh(leave)
            return _row(leave)

    def update_leave_status(self, leave_id, status):
        with self.Session() as db:
            leave = db.get(models.LeaveApplication, leave_id)
            if not leave:
                return None
            leave.status = status
            db.commit()
            db.refresh(leave)
            return _row(leave)


def init_store(mode=None, url=None):
    """Pick the store once at startup: 'memory', 'sql', or 'auto' (SQL when reachable)."""
    global _store
    mode = (mode or os.getenv("PORTAL_STORE", "auto")).lower()
    url = database.SQLALCHEMY_DATABASE_URL if url is None else url

    if mode == "memory" or (mode == "auto" and not url):
        _store = MemoryStore()
        logger.info("Using in-memory store")
        return _store

    if mode not in ("sql", "auto"):
        raise ValueError(f"Unknown PORTAL_STORE mode: {mode}")
    if not url:
        raise ValueError("PORTAL_STORE=sql requires DATABASE_URL")

    try:
        engine = database.make_engine(url)
        database.probe(engine)
        store = SqlStore(engine)
    except (SQLAlchemyError, OSError) as e:
        if mode == "sql":
            raise
        logger.warning("Remote store unreachable (%s), using in-memory store", e)
        _store = MemoryStore()
        return _store

    if os.getenv("PORTAL_SEED_DEMO") == "1":
        store.seed_demo()
    _store = store
    logger.info("Using SQL store")
    return _store


def get_store():
    if _store is None:
        raise RuntimeError("Store not initialized. Call init_store() first.")
    return _store
