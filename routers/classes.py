from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from database.db import get_db
from dependencies.security import require_school_data_management
from models.classes import Class as ClassModel
from models.students import Student as StudentModel
from schemas.classes import Class, ClassCreate

router = APIRouter(prefix="/classes", tags=["classes"])


def _not_found(message: str) -> JSONResponse:
    return JSONResponse(status_code=404, content={"success": False, "error": {"code": 404, "message": message}})


# ✅ [CREATE] 학급 추가
@router.post("/", dependencies=[Depends(require_school_data_management)])
def create_class(new_class: ClassCreate, db: Session = Depends(get_db)):
    db_class = ClassModel(**new_class.model_dump())
    db.add(db_class)
    db.commit()
    db.refresh(db_class)
    return {
        "success": True,
        "data": Class.model_validate(db_class).model_dump(),
        "message": "학급이 성공적으로 추가되었습니다"
    }


# ✅ [READ] 전체 학급 조회 (이름순)
@router.get("/")
def read_classes(db: Session = Depends(get_db)):
    records = db.query(ClassModel).order_by(ClassModel.name).all()
    return {
        "success": True,
        "data": [Class.model_validate(r).model_dump() for r in records],
        "message": "전체 학급 조회 완료"
    }


# ✅ [READ] 특정 학급 조회 (학생 수 포함)
@router.get("/{class_id}")
def read_class(class_id: int, db: Session = Depends(get_db)):
    class_obj = db.query(ClassModel).filter(ClassModel.id == class_id).first()
    if class_obj is None:
        return _not_found("학급을 찾을 수 없습니다")
    student_count = db.query(StudentModel).filter(StudentModel.class_id == class_id).count()
    return {
        "success": True,
        "data": {**Class.model_validate(class_obj).model_dump(), "student_count": student_count},
        "message": "학급 상세 조회 성공"
    }
