from typing import Dict, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from database.db import get_db
from dependencies.security import require_grade_management
from models.courses import Course as CourseModel
from models.grades import Grade as GradeModel
from models.students import Student as StudentModel
from models.subjects import Subject as SubjectModel
from schemas.common import Pagination, make_meta
from schemas.grades import Grade, GradeCreate, StudentGradeSummary, SubjectGradeSummary
from services.grade_engine import normalize_score

router = APIRouter(prefix="/grades", tags=["grades"])


def _not_found(message: str) -> JSONResponse:
    return JSONResponse(status_code=404, content={"success": False, "error": {"code": 404, "message": message}})


def _course_exists(db: Session, course_id: int) -> bool:
    return db.query(CourseModel.id).filter(CourseModel.id == course_id).first() is not None


# ==========================================================
# [1단계] 학생 단위 조회
# ==========================================================

# ✅ [READ] 학생 성적 요약: 과목별 평균(20점 환산) + 전체 평균
@router.get("/student/{student_id}")
def get_student_grades(
    student_id: int,
    trimester: Optional[int] = Query(None, ge=1, le=3),
    db: Session = Depends(get_db),
):
    student = db.query(StudentModel).filter(StudentModel.id == student_id).first()
    if not student:
        return _not_found("Student not found")

    query = (
        db.query(GradeModel, CourseModel, SubjectModel)
        .join(CourseModel, CourseModel.id == GradeModel.course_id)
        .outerjoin(SubjectModel, SubjectModel.id == CourseModel.subject_id)
        .filter(GradeModel.student_id == student_id)
    )
    if trimester is not None:
        query = query.filter(GradeModel.trimester == trimester)
    rows = query.order_by(GradeModel.id).all()

    by_subject: Dict[int, dict] = {}
    normalized_scores = []
    for grade, course, subject in rows:
        normalized = normalize_score(grade.score, grade.max_score)
        normalized_scores.append(normalized)
        bucket = by_subject.setdefault(course.subject_id, {
            "subject_name": subject.name if subject else "Inconnu",
            "coefficient": subject.coefficient if subject else 1.0,
            "total": 0.0,
            "count": 0,
        })
        bucket["total"] += normalized
        bucket["count"] += 1

    summary = StudentGradeSummary(
        student_id=student_id,
        trimester=trimester,
        average=round(sum(normalized_scores) / len(normalized_scores), 2) if normalized_scores else 0.0,
        grade_count=len(rows),
        subjects=[
            SubjectGradeSummary(
                subject_id=subject_id,
                subject_name=b["subject_name"],
                coefficient=b["coefficient"],
                average=round(b["total"] / b["count"], 2),
                count=b["count"],
            )
            for subject_id, b in sorted(by_subject.items(), key=lambda item: item[1]["subject_name"])
        ],
        grades=[Grade.model_validate(grade) for grade, _, _ in rows],
    )
    return {"success": True, "data": summary.model_dump()}


# ==========================================================
# [2단계] CRUD 기본 라우터
# ==========================================================

# ✅ [CREATE] 성적 추가
@router.post("/", dependencies=[Depends(require_grade_management)])
def create_grade(grade: GradeCreate, db: Session = Depends(get_db)):
    if not _course_exists(db, grade.course_id):
        return _not_found("Course not found")

    db_grade = GradeModel(**grade.model_dump())
    db.add(db_grade)
    db.commit()
    db.refresh(db_grade)
    return {
        "success": True,
        "data": Grade.model_validate(db_grade).model_dump(),
        "message": "Grade created successfully"
    }


# ✅ [READ] 성적 목록 (학생/학기 필터 + 페이지네이션)
@router.get("/")
def read_grades(
    student_id: Optional[int] = None,
    trimester: Optional[int] = Query(None, ge=1, le=3),
    page: Pagination = Depends(),
    db: Session = Depends(get_db),
):
    query = db.query(GradeModel)
    if student_id is not None:
        query = query.filter(GradeModel.student_id == student_id)
    if trimester is not None:
        query = query.filter(GradeModel.trimester == trimester)

    total = query.count()
    records = query.order_by(GradeModel.id).offset((page.page - 1) * page.size).limit(page.size).all()
    return {
        "success": True,
        "data": [Grade.model_validate(r).model_dump() for r in records],
        "meta": make_meta(total, page.page, page.size).model_dump(),
    }


# ==========================================================
# [3단계] 완전 동적 라우터
# ==========================================================

# ✅ [READ] 특정 성적 조회
@router.get("/{grade_id}")
def read_grade(grade_id: int, db: Session = Depends(get_db)):
    grade = db.query(GradeModel).filter(GradeModel.id == grade_id).first()
    if grade is None:
        return _not_found("Grade not found")
    return {"success": True, "data": Grade.model_validate(grade).model_dump()}


# ✅ [UPDATE] 성적 수정
@router.put("/{grade_id}", dependencies=[Depends(require_grade_management)])
def update_grade(grade_id: int, updated: GradeCreate, db: Session = Depends(get_db)):
    grade = db.query(GradeModel).filter(GradeModel.id == grade_id).first()
    if grade is None:
        return _not_found("Grade not found")
    if not _course_exists(db, updated.course_id):
        return _not_found("Course not found")

    for key, value in updated.model_dump().items():
        setattr(grade, key, value)

    db.commit()
    db.refresh(grade)
    return {
        "success": True,
        "data": Grade.model_validate(grade).model_dump(),
        "message": "Grade updated successfully"
    }


# ✅ [DELETE] 성적 삭제
@router.delete("/{grade_id}", dependencies=[Depends(require_grade_management)])
def delete_grade(grade_id: int, db: Session = Depends(get_db)):
    grade = db.query(GradeModel).filter(GradeModel.id == grade_id).first()
    if grade is None:
        return _not_found("Grade not found")

    db.delete(grade)
    db.commit()
    return {
        "success": True,
        "data": {"grade_id": grade_id, "message": "Grade deleted successfully"}
    }
