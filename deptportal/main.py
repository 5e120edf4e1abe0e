import os
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Depends, HTTPException, UploadFile, File
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import StreamingResponse

from . import analytics, auth, exporter, importer, leaderboard, schemas
from .settings import institution
from .store import ALL_YEARS, DataStore, get_store, init_store

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))
logger = logging.getLogger(__name__)


def log_branding(settings):
    logger.info("Institution settings changed: %s", settings)


@asynccontextmanager
async def lifespan(app: FastAPI):
    store = init_store()
    unsubscribe = institution.subscribe(log_branding)
    logger.info("Department portal started with %s store", store.kind)
    yield
    unsubscribe()
    logger.info("Department portal stopped")


app = FastAPI(title="Department Portal", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=os.getenv("PORTAL_CORS_ORIGINS", "*").split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def student_or_404(store, email):
    profile = store.get_student_profile(email)
    if not profile or profile.get("id") is None:
        raise HTTPException(status_code=404, detail="Student not found")
    return profile


def subject_or_404(store, subject_id):
    subject = store.get_subject(subject_id)
    if not subject:
        raise HTTPException(status_code=404, detail="Subject not found")
    return subject


async def read_upload(file):
    try:
        return importer.read_rows(await file.read(), file.filename or "")
    except importer.ImportFormatError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.get("/")
async def root(): return {"service": "department-portal", "institution": institution.get()["institution_name"]}

@app.get("/health")
async def health(store: DataStore = Depends(get_store)):
    return {"status": "ok", "store": store.kind}

@app.post("/login")
async def login(payload: schemas.LoginPayload, store: DataStore = Depends(get_store)):
    role = auth.resolve_role(store, payload.email)
    if not role: raise HTTPException(status_code=404, detail="User not found. Try a demo email.")
    return {"role": role, "email": payload.email}

# --- ADMIN ROUTES ---
@app.get("/users")
async def get_users(store: DataStore = Depends(get_store)): return store.list_users()

@app.post("/users", status_code=201)
async def create_user(payload: schemas.UserIn, store: DataStore = Depends(get_store)):
    return store.create_user(payload.model_dump())

@app.delete("/users/{user_id}")
async def delete_user(user_id: int, store: DataStore = Depends(get_store)):
    if not store.delete_user(user_id): raise HTTPException(status_code=404, detail="User not found")
    return {"status": "success"}

@app.get("/settings")
async def get_settings(): return institution.get()

@app.put("/settings")
async def update_settings(payload: schemas.SettingsUpdate):
    return institution.update(**payload.model_dump(exclude_unset=True))

# --- STUDENT ROUTES ---
@app.get("/students")
async def get_students(year: Optional[str] = None, store: DataStore = Depends(get_store)):
    return store.list_students(year)

@app.get("/students/profile")
async def get_profile(email: str, store: DataStore = Depends(get_store)):
    profile = store.get_student_profile(email)
    if not profile: raise HTTPException(status_code=404, detail="User not found")
    return profile

@app.get("/students/performance")
async def get_performance(email: str, store: DataStore = Depends(get_store)):
    profile = store.get_student_profile(email)
    if not profile or profile.get("id") is None: return []
    return store.list_marks(student_id=profile["id"])

@app.patch("/students/{student_id}")
async def update_student(student_id: int, payload: schemas.StudentUpdate, store: DataStore = Depends(get_store)):
    student = store.update_student(student_id, payload.model_dump(exclude_unset=True))
    if not student: raise HTTPException(status_code=404, detail="Student not found")
    return student

# --- ATTENDANCE ROUTES ---
@app.put("/attendance")
async def save_attendance(payload: schemas.AttendanceBulk, store: DataStore = Depends(get_store)):
    updated = 0
    for entry in payload.updates:
        if store.update_student(entry.student_id, {"attendance": analytics.clamp_attendance(entry.attendance)}):
            updated += 1
    return {"updated": updated}

@app.post("/attendance/import")
async def import_attendance(year: str, attendance_format: schemas.AttendanceFormat = "auto", commit: bool = True,
                            file: UploadFile = File(...), store: DataStore = Depends(get_store)):
    rows = await read_upload(file)
    students, matched = importer.reconcile_attendance(rows, store.list_students(year), attendance_format)
    if commit:
        for s in students:
            store.update_student(s["id"], {"attendance": s["attendance"]})
    return {"updated": matched, "committed": commit, "students": students}

# --- SUBJECT & MARKS ROUTES ---
@app.get("/subjects")
async def get_subjects(year: Optional[str] = None, store: DataStore = Depends(get_store)):
    return store.list_subjects(year)

@app.post("/subjects", status_code=201)
async def create_subject(payload: schemas.SubjectIn, store: DataStore = Depends(get_store)):
    return store.create_subject(payload.model_dump())

@app.delete("/subjects/{subject_id}")
async def delete_subject(subject_id: int, store: DataStore = Depends(get_store)):
    if not store.delete_subject(subject_id): raise HTTPException(status_code=404, detail="Subject not found")
    return {"status": "success"}

@app.get("/subjects/{subject_id}/marks")
async def get_marks(subject_id: int, store: DataStore = Depends(get_store)):
    subject = subject_or_404(store, subject_id)
    marks = [{**m, "status": analytics.mark_status(m)} for m in store.get_marks_for_subject(subject_id)]
    return {"subject": subject, "summary": analytics.subject_summary(marks), "marks": marks}

@app.put("/subjects/{subject_id}/marks")
async def save_marks(subject_id: int, payload: schemas.MarksPayload, store: DataStore = Depends(get_store)):
    subject_or_404(store, subject_id)
    saved = store.save_subject_marks(subject_id, [m.model_dump() for m in payload.marks])
    return {"saved": len(saved), "marks": saved}

@app.post("/subjects/{subject_id}/marks/import")
async def import_marks(subject_id: int, commit: bool = True, file: UploadFile = File(...),
                       store: DataStore = Depends(get_store)):
    subject_or_404(store, subject_id)
    rows = await read_upload(file)
    marks, matched = importer.reconcile_marks(rows, store.get_marks_for_subject(subject_id))
    if commit:
        store.save_subject_marks(subject_id, marks)
    return {"updated": matched, "committed": commit, "marks": marks}

# --- CERTIFICATE ROUTES ---
@app.get("/certificates")
async def get_certificates(store: DataStore = Depends(get_store)): return store.list_certificates()

@app.patch("/certificates/{certificate_id}")
async def review_certificate(certificate_id: int, payload: schemas.CertificateReview, store: DataStore = Depends(get_store)):
    cert = store.update_certificate_status(certificate_id, payload.status)
    if not cert: raise HTTPException(status_code=404, detail="Certificate not found")
    return cert

# --- ACHIEVEMENT ROUTES ---
@app.get("/achievements/categories")
async def get_categories(store: DataStore = Depends(get_store)): return store.list_categories()

@app.get("/achievements")
async def get_achievements(email: str, store: DataStore = Depends(get_store)):
    return store.list_achievements(student_id=student_or_404(store, email)["id"])

@app.get("/achievements/pending")
async def get_pending_achievements(year: Optional[str] = None, store: DataStore = Depends(get_store)):
    pending = store.list_achievements(status="pending")
    if year in ALL_YEARS: return pending
    return [a for a in pending if a["student_year"] == year]

@app.post("/achievements", status_code=201)
async def upload_achievement(email: str, payload: schemas.AchievementIn, store: DataStore = Depends(get_store)):
    student = student_or_404(store, email)
    return store.create_achievement(student["id"], payload.model_dump())

@app.post("/achievements/{achievement_id}/verify")
async def verify_achievement(achievement_id: int, payload: schemas.AchievementReview, store: DataStore = Depends(get_store)):
    achievement = store.verify_achievement(achievement_id, payload.status, payload.points, payload.rejection_reason)
    if not achievement: raise HTTPException(status_code=404, detail="Achievement not found")
    logger.info("Achievement %s %s with %s points", achievement_id, payload.status, achievement["points_awarded"])
    return achievement

# --- LEAVE ROUTES ---
@app.post("/leaves", status_code=201)
async def apply_leave(email: str, payload: schemas.LeaveIn, store: DataStore = Depends(get_store)):
    student = student_or_404(store, email)
    return store.create_leave(student["id"], payload.leave_date, payload.reason)

@app.get("/leaves")
async def get_leaves(email: str, store: DataStore = Depends(get_store)):
    return store.list_leaves(student_id=student_or_404(store, email)["id"])

@app.get("/leaves/pending")
async def get_pending_leaves(year: Optional[str] = None, store: DataStore = Depends(get_store)):
    return store.list_leaves(year=year, status="Pending")

@app.patch("/leaves/{leave_id}")
async def review_leave(leave_id: int, payload: schemas.LeaveReview, store: DataStore = Depends(get_store)):
    leave = store.update_leave_status(leave_id, payload.status)
    if not leave: raise HTTPException(status_code=404, detail="Leave application not found")
    return leave

# --- LEADERBOARD & ANALYTICS ROUTES ---
@app.get("/leaderboard")
async def get_leaderboard(year: Optional[str] = None, metric: schemas.Metric = "marks",
                          store: DataStore = Depends(get_store)):
    return leaderboard.leaderboard(store, year, metric)

@app.get("/leaderboard/subject/{subject_id}")
async def get_subject_leaderboard(subject_id: int, store: DataStore = Depends(get_store)):
    subject_or_404(store, subject_id)
    return leaderboard.subject_leaderboard(store.list_marks(subject_id=subject_id))

@app.get("/stats/{year}")
async def get_yearly_stats(year: str, store: DataStore = Depends(get_store)):
    students = store.list_students(year)
    return {
        "year": year,
        "stats": analytics.yearly_stats(students),
        "students": [{**s, "status": analytics.student_status(s)} for s in students],
    }

@app.get("/export/year/{year}")
async def export_year(year: str, store: DataStore = Depends(get_store)):
    workbook = exporter.year_report(store.list_students(year))
    return StreamingResponse(workbook, media_type=exporter.XLSX_MEDIA_TYPE,
                             headers={"Content-Disposition": f'attachment; filename="Year_{year}_Report.xlsx"'})

@app.get("/export/leaderboard")
async def export_leaderboard(year: Optional[str] = None, store: DataStore = Depends(get_store)):
    workbook = exporter.leaderboard_report(leaderboard.leaderboard(store, year))
    return StreamingResponse(workbook, media_type=exporter.XLSX_MEDIA_TYPE,
                             headers={"Content-Disposition": f'attachment; filename="{exporter.export_filename(year)}"'})


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", 8000)))
