"""
Request bodies for the department portal API.

Stored records travel as plain dicts (see store.py); these models only
validate what clients send in.
"""

from typing import List, Literal, Optional
from pydantic import BaseModel, Field

Role = Literal["HOD", "Admin", "Staff", "Student"]
ReviewStatus = Literal["Approved", "Rejected"]
AttendanceFormat = Literal["auto", "percent", "fraction"]
Metric = Literal["marks", "achievements"]


class LoginPayload(BaseModel):
    email: str


class UserIn(BaseModel):
    name: str
    email: str
    role: Role
    year: str = "-"
    subject: str = "-"


class StudentUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    roll_no: Optional[str] = None
    year: Optional[str] = None
    internal1: Optional[float] = None
    internal2: Optional[float] = None
    attendance: Optional[float] = Field(None, ge=0, le=100)
    cgpa: Optional[float] = Field(None, ge=0, le=10)


class AttendanceEntry(BaseModel):
    student_id: int
    attendance: float


class AttendanceBulk(BaseModel):
    updates: List[AttendanceEntry]


class SubjectIn(BaseModel):
    name: str
    code: str
    year: str
    staff_id: int
    staff_name: str
    total_students: int = 0
    last_updated: Optional[str] = None


class MarkIn(BaseModel):
    student_id: int
    student_name: Optional[str] = None
    roll_no: Optional[str] = None
    test1: float = 0
    test2: float = 0
    assignment: float = 0


class MarksPayload(BaseModel):
    marks: List[MarkIn]


class CertificateReview(BaseModel):
    status: ReviewStatus


class AchievementIn(BaseModel):
    category_id: int
    title: str
    description: str = ""
    proof_file: str = ""
    achievement_date: str


class AchievementReview(BaseModel):
    status: Literal["approved", "rejected"]
    points: Optional[int] = Field(None, ge=0)
    rejection_reason: Optional[str] = None


class LeaveIn(BaseModel):
    leave_date: str
    reason: str


class LeaveReview(BaseModel):
    status: ReviewStatus


class SettingsUpdate(BaseModel):
    institution_name: str = Field(None, min_length=1)
    logo_url: Optional[str] = None
