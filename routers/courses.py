from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.db import get_db
from dependencies.security import require_school_data_management
from models.courses import Course as CourseModel
from schemas.courses import Course, CourseCreate

router = APIRouter(prefix="/courses", tags=["courses"])


# ✅ [CREATE] 수업 추가 (반 × 과목 × 담당 교사)
@router.post("/", dependencies=[Depends(require_school_data_management)])
def create_course(course: CourseCreate, db: Session = Depends(get_db)):
    db_course = CourseModel(**course.model_dump())
    db.add(db_course)
    db.commit()
    db.refresh(db_course)
    return {
        "success": True,
        "data": Course.model_validate(db_course).model_dump(),
        "message": "수업이 성공적으로 추가되었습니다"
    }


# ✅ [READ] 수업 목록 (class_id 필터)
@router.get("/")
def read_courses(class_id: Optional[int] = None, db: Session = Depends(get_db)):
    query = db.query(CourseModel)
    if class_id is not None:
        query = query.filter(CourseModel.class_id == class_id)
    return {
        "success": True,
        "data": [Course.model_validate(r).model_dump() for r in query.order_by(CourseModel.id).all()],
        "message": "수업 목록 조회 완료"
    }
