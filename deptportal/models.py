from sqlalchemy import Column, Integer, String, Float, ForeignKey, Text
from .database import Base

class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String)
    email = Column(String, index=True)                    # Not unique: uniqueness is assumed only
    role = Column(String)                                 # 'HOD', 'Admin', 'Staff', 'Student'
    year = Column(String, default="-")
    subject = Column(String, default="-")

class Student(Base):
    __tablename__ = "students"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String)
    email = Column(String, index=True, nullable=True)
    roll_no = Column(String, index=True)
    year = Column(String)                                 # '1' .. '4'
    internal1 = Column(Float, default=0.0)                # Legacy aggregate, HOD views
    internal2 = Column(Float, default=0.0)
    attendance = Column(Float, default=0.0)               # Percentage 0-100
    cgpa = Column(Float, nullable=True)

class Subject(Base):
    __tablename__ = "subjects"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String)
    code = Column(String)
    year = Column(String)
    staff_id = Column(Integer)                            # No FK: staff may not exist
    staff_name = Column(String)
    total_students = Column(Integer, default=0)
    last_updated = Column(String)                         # ISO date

class SubjectMark(Base):
    __tablename__ = "subject_marks"
    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, index=True)
    student_name = Column(String)
    roll_no = Column(String)
    subject_id = Column(Integer, ForeignKey("subjects.id", ondelete="CASCADE"), index=True)
    subject_name = Column(String)
    test1 = Column(Float, default=0.0)                    # Max 50
    test2 = Column(Float, default=0.0)                    # Max 50
    assignment = Column(Float, default=0.0)               # Max 20
    total = Column(Float, default=0.0)
    max_total = Column(Float, default=100.0)

class Certificate(Base):
    __tablename__ = "certificates"
    id = Column(Integer, primary_key=True, index=True)
    student_name = Column(String)
    type = Column(String)                                 # 'Internship', 'Placement'
    company = Column(String)
    status = Column(String, default="Pending")
    upload_date = Column(String)

class AchievementCategory(Base):
    __tablename__ = "achievement_categories"
    id = Column(Integer, primary_key=True, index=True)
    category_name = Column(String)
    points = Column(Integer)
    description = Column(String)

class Achievement(Base):
    __tablename__ = "achievements"
    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, index=True)
    student_name = Column(String)
    roll_no = Column(String)
    category_id = Column(Integer)
    category_name = Column(String)
    title = Column(String)
    description = Column(Text, default="")
    proof_file = Column(String, default="")               # File label, not content
    achievement_date = Column(String)
    points_awarded = Column(Integer, default=0)
    status = Column(String, default="pending")
    rejection_reason = Column(String, nullable=True)
    uploaded_at = Column(String)

class LeaveApplication(Base):
    __tablename__ = "leave_applications"
    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, index=True)
    student_name = Column(String)
    roll_no = Column(String)
    leave_date = Column(String)
    reason = Column(Text)
    status = Column(String, default="Pending")
    applied_on = Column(String)
