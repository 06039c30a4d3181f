from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from database.db import get_db
from dependencies.security import require_school_data_management
from models.students import Student as StudentModel
from schemas.students import Student, StudentCreate

router = APIRouter(prefix="/students", tags=["students"])


def _not_found(message: str) -> JSONResponse:
    return JSONResponse(status_code=404, content={"success": False, "error": {"code": 404, "message": message}})


# ✅ [CREATE] 학생 추가
@router.post("/", dependencies=[Depends(require_school_data_management)])
def create_student(student: StudentCreate, db: Session = Depends(get_db)):
    db_student = StudentModel(**student.model_dump())
    db.add(db_student)
    db.commit()
    db.refresh(db_student)
    return {
        "success": True,
        "data": Student.model_validate(db_student).model_dump(),
        "message": "학생 정보가 성공적으로 추가되었습니다"
    }


# ✅ [READ] 학생 목록 (class_id 지정 시 해당 반만, 성 → 이름 순)
@router.get("/")
def read_students(class_id: Optional[int] = None, db: Session = Depends(get_db)):
    query = db.query(StudentModel)
    if class_id is not None:
        query = query.filter(StudentModel.class_id == class_id)
    records = query.order_by(StudentModel.last_name, StudentModel.first_name).all()
    return {
        "success": True,
        "data": [Student.model_validate(r).model_dump() for r in records],
        "message": "학생 목록 조회 완료"
    }


# ✅ [READ] 특정 학생 조회
@router.get("/{student_id}")
def read_student(student_id: int, db: Session = Depends(get_db)):
    student = db.query(StudentModel).filter(StudentModel.id == student_id).first()
    if student is None:
        return _not_found("학생을 찾을 수 없습니다")
    return {"success": True, "data": Student.model_validate(student).model_dump()}
