"""Demo roster loaded into the in-memory store (and, on request, an empty SQL store)."""

ACHIEVEMENT_CATEGORIES = [
    {"id": 1, "category_name": "Paper Presentation", "points": 20, "description": "Presented research paper at conference"},
    {"id": 2, "category_name": "Hackathon Winner", "points": 25, "description": "Won a hackathon competition"},
    {"id": 3, "category_name": "Hackathon Participation", "points": 10, "description": "Participated in hackathon"},
    {"id": 4, "category_name": "Certification", "points": 15, "description": "Completed NPTEL/Coursera certification"},
    {"id": 5, "category_name": "Workshop/Seminar", "points": 5, "description": "Attended workshop or seminar"},
    {"id": 6, "category_name": "Internship", "points": 20, "description": "Completed internship program"},
    {"id": 7, "category_name": "Competition Winner", "points": 25, "description": "Won competitive event"},
    {"id": 8, "category_name": "Competition Participation", "points": 10, "description": "Participated in competition"},
]

USERS = [
    {"id": 1, "name": "Dr. Rajesh Kumar", "email": "rajesh@college.edu", "role": "Staff", "year": "1", "subject": "Mathematics"},
    {"id": 2, "name": "Prof. Priya Sharma", "email": "priya@college.edu", "role": "Staff", "year": "2", "subject": "Physics"},
    {"id": 3, "name": "Dr. Amit Patel", "email": "amit@college.edu", "role": "Staff", "year": "3", "subject": "Data Structures"},
    {"id": 4, "name": "Arun Kumar", "email": "arun@student.edu", "role": "Student", "year": "1", "subject": "-"},
    {"id": 5, "name": "Sneha Reddy", "email": "sneha@student.edu", "role": "Student", "year": "2", "subject": "-"},
]

STUDENTS = [
    # Year 1
    {"id": 1, "name": "Arun Kumar", "email": "arun@student.edu", "roll_no": "CS101", "year": "1", "internal1": 85, "internal2": 90, "attendance": 92, "cgpa": 8.5},
    {"id": 2, "name": "Sneha Reddy", "email": "sneha@student.edu", "roll_no": "CS102", "year": "1", "internal1": 78, "internal2": 82, "attendance": 88, "cgpa": 8.2},
    {"id": 3, "name": "Rahul Verma", "email": None, "roll_no": "CS103", "year": "1", "internal1": 92, "internal2": 95, "attendance": 95, "cgpa": 9.0},
    {"id": 4, "name": "Priya Singh", "email": None, "roll_no": "CS104", "year": "1", "internal1": 70, "internal2": 75, "attendance": 80, "cgpa": 7.5},
    {"id": 5, "name": "Karthik Raj", "email": None, "roll_no": "CS105", "year": "1", "internal1": 88, "internal2": 85, "attendance": 90, "cgpa": 8.8},
    # Year 2
    {"id": 6, "name": "Emily Davis", "email": None, "roll_no": "CS201", "year": "2", "internal1": 88, "internal2": 91, "attendance": 94, "cgpa": 8.9},
    {"id": 7, "name": "Michael Brown", "email": None, "roll_no": "CS202", "year": "2", "internal1": 65, "internal2": 70, "attendance": 76, "cgpa": 6.8},
    # Year 3
    {"id": 8, "name": "Sarah Jones", "email": None, "roll_no": "CS301", "year": "3", "internal1": 95, "internal2": 96, "attendance": 98, "cgpa": 9.5},
    {"id": 9, "name": "David Wilson", "email": None, "roll_no": "CS302", "year": "3", "internal1": 82, "internal2": 85, "attendance": 89, "cgpa": 8.0},
    # Year 4
    {"id": 10, "name": "James White", "email": None, "roll_no": "CS401", "year": "4", "internal1": 90, "internal2": 92, "attendance": 95, "cgpa": 9.1},
    {"id": 11, "name": "Linda Green", "email": None, "roll_no": "CS402", "year": "4", "internal1": 88, "internal2": 89, "attendance": 91, "cgpa": 8.7},
    {"id": 12, "name": "Robert Black", "email": None, "roll_no": "CS403", "year": "4", "internal1": 75, "internal2": 78, "attendance": 82, "cgpa": 7.8},
]

SUBJECTS = [
    {"id": 101, "name": "Mathematics I", "code": "MAT101", "year": "1", "staff_id": 1, "staff_name": "Dr. Rajesh Kumar", "total_students": 60, "last_updated": "2025-05-15"},
    {"id": 102, "name": "Physics", "code": "PHY101", "year": "1", "staff_id": 2, "staff_name": "Prof. Priya Sharma", "total_students": 60, "last_updated": "2025-05-14"},
    {"id": 103, "name": "Prog. in C", "code": "CS101", "year": "1", "staff_id": 3, "staff_name": "Dr. Amit Patel", "total_students": 60, "last_updated": "2025-05-10"},
    {"id": 201, "name": "Data Structures", "code": "CS201", "year": "2", "staff_id": 3, "staff_name": "Dr. Amit Patel", "total_students": 55, "last_updated": "2025-05-12"},
    {"id": 202, "name": "OOPs", "code": "CS202", "year": "2", "staff_id": 1, "staff_name": "Prof. John Doe", "total_students": 55, "last_updated": "2025-05-11"},
    {"id": 203, "name": "Operating Sys.", "code": "CS203", "year": "2", "staff_id": 2, "staff_name": "Prof. Jane Doe", "total_students": 55, "last_updated": "2025-05-13"},
    {"id": 301, "name": "DBMS", "code": "CS301", "year": "3", "staff_id": 1, "staff_name": "Dr. Rajesh Kumar", "total_students": 50, "last_updated": "2025-05-15"},
    {"id": 302, "name": "Networks", "code": "CS302", "year": "3", "staff_id": 2, "staff_name": "Prof. Priya Sharma", "total_students": 50, "last_updated": "2025-05-14"},
    {"id": 401, "name": "Cloud Computing", "code": "CS401", "year": "4", "staff_id": 3, "staff_name": "Dr. Amit Patel", "total_students": 45, "last_updated": "2025-05-12"},
    {"id": 402, "name": "AI & ML", "code": "CS402", "year": "4", "staff_id": 1, "staff_name": "Prof. John Doe", "total_students": 45, "last_updated": "2025-05-10"},
]


def _mark(student_id, student_name, roll_no, subject_id, subject_name, test1, test2, assignment):
    return {
        "student_id": student_id, "student_name": student_name, "roll_no": roll_no,
        "subject_id": subject_id, "subject_name": subject_name,
        "test1": test1, "test2": test2, "assignment": assignment,
        "total": test1 + test2 + assignment, "max_total": 100,
    }


MARKS = [
    _mark(1, "Arun Kumar", "CS101", 101, "Mathematics I", 40, 43, 10),
    _mark(1, "Arun Kumar", "CS101", 102, "Physics", 35, 37, 9),
    _mark(1, "Arun Kumar", "CS101", 103, "Prog. in C", 38, 39, 10),
    _mark(2, "Sneha Reddy", "CS102", 101, "Mathematics I", 32, 33, 8),
    _mark(2, "Sneha Reddy", "CS102", 102, "Physics", 40, 41, 10),
    _mark(6, "Emily Davis", "CS201", 201, "Data Structures", 39, 40, 10),
    _mark(6, "Emily Davis", "CS201", 202, "OOPs", 35, 37, 9),
]

CERTIFICATES = [
    {"id": 1, "student_name": "Arun Kumar", "type": "Internship", "company": "TCS", "status": "Pending", "upload_date": "2024-12-01"},
    {"id": 2, "student_name": "Sneha Reddy", "type": "Placement", "company": "Infosys", "status": "Pending", "upload_date": "2024-12-02"},
    {"id": 3, "student_name": "Rahul Verma", "type": "Internship", "company": "Wipro", "status": "Approved", "upload_date": "2024-11-28"},
]

ACHIEVEMENTS = [
    {"id": 1, "student_id": 1, "student_name": "Arun Kumar", "roll_no": "CS101", "category_id": 1,
     "category_name": "Paper Presentation", "title": "AI in Healthcare", "description": "Presented at IEEE Conference",
     "proof_file": "cert_ieee_2024.pdf", "achievement_date": "2024-10-15", "points_awarded": 20,
     "status": "approved", "rejection_reason": None, "uploaded_at": "2024-10-16"},
    {"id": 2, "student_id": 1, "student_name": "Arun Kumar", "roll_no": "CS101", "category_id": 2,
     "category_name": "Hackathon Winner", "title": "Smart City Hackathon", "description": "First prize in smart traffic system",
     "proof_file": "hackathon_win.jpg", "achievement_date": "2024-11-20", "points_awarded": 0,
     "status": "pending", "rejection_reason": None, "uploaded_at": "2024-11-21"},
    {"id": 3, "student_id": 2, "student_name": "Sneha Reddy", "roll_no": "CS102", "category_id": 4,
     "category_name": "Certification", "title": "AWS Cloud Practitioner", "description": "Completed AWS certification",
     "proof_file": "aws_cert.pdf", "achievement_date": "2024-09-10", "points_awarded": 15,
     "status": "approved", "rejection_reason": None, "uploaded_at": "2024-09-11"},
]

LEAVES = [
    {"id": 1, "student_id": 1, "student_name": "Arun Kumar", "roll_no": "CS101", "leave_date": "2025-01-20",
     "reason": "Medical appointment", "status": "Pending", "applied_on": "2025-01-15"},
]
