from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.db import get_db
from dependencies.security import require_school_data_management
from models.teachers import Teacher as TeacherModel
from schemas.teachers import Teacher, TeacherCreate

router = APIRouter(prefix="/teachers", tags=["teachers"])


# ✅ [CREATE] 교사 추가
@router.post("/", dependencies=[Depends(require_school_data_management)])
def create_teacher(teacher: TeacherCreate, db: Session = Depends(get_db)):
    db_teacher = TeacherModel(**teacher.model_dump())
    db.add(db_teacher)
    db.commit()
    db.refresh(db_teacher)
    return {
        "success": True,
        "data": Teacher.model_validate(db_teacher).model_dump(),
        "message": "교사 정보가 성공적으로 추가되었습니다"
    }


# ✅ [READ] 전체 교사 조회
@router.get("/")
def read_teachers(db: Session = Depends(get_db)):
    records = db.query(TeacherModel).order_by(TeacherModel.last_name, TeacherModel.first_name).all()
    return {
        "success": True,
        "data": [Teacher.model_validate(r).model_dump() for r in records],
        "message": "전체 교사 조회 완료"
    }
