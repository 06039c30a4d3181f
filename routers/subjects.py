from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from database.db import get_db
from dependencies.security import require_school_data_management
from models.subjects import Subject as SubjectModel
from schemas.subjects import Subject, SubjectCreate

router = APIRouter(prefix="/subjects", tags=["과목 정보"])


def _not_found() -> JSONResponse:
    return JSONResponse(
        status_code=404,
        content={"success": False, "error": {"code": 404, "message": "과목 정보를 찾을 수 없습니다"}}
    )


# ✅ [CREATE] 과목 정보 추가
@router.post("/", dependencies=[Depends(require_school_data_management)])
def create_subject(subject: SubjectCreate, db: Session = Depends(get_db)):
    db_subject = SubjectModel(**subject.model_dump())
    db.add(db_subject)
    db.commit()
    db.refresh(db_subject)
    return {
        "success": True,
        "data": Subject.model_validate(db_subject).model_dump(),
        "message": "과목 정보가 성공적으로 추가되었습니다"
    }


# ✅ [READ] 전체 과목 조회
@router.get("/")
def read_subjects(db: Session = Depends(get_db)):
    records = db.query(SubjectModel).order_by(SubjectModel.name).all()
    return {
        "success": True,
        "data": [Subject.model_validate(r).model_dump() for r in records],
        "message": "전체 과목 조회 완료"
    }


# ✅ [READ] 특정 과목 조회
@router.get("/{subject_id}")
def read_subject(subject_id: int, db: Session = Depends(get_db)):
    subject = db.query(SubjectModel).filter(SubjectModel.id == subject_id).first()
    if subject is None:
        return _not_found()
    return {
        "success": True,
        "data": Subject.model_validate(subject).model_dump(),
        "message": "과목 상세 조회 성공"
    }


# ✅ [UPDATE] 과목 정보 수정 (계수 변경 포함)
@router.put("/{subject_id}", dependencies=[Depends(require_school_data_management)])
def update_subject(subject_id: int, updated: SubjectCreate, db: Session = Depends(get_db)):
    subject = db.query(SubjectModel).filter(SubjectModel.id == subject_id).first()
    if subject is None:
        return _not_found()

    for key, value in updated.model_dump().items():
        setattr(subject, key, value)

    db.commit()
    db.refresh(subject)
    return {
        "success": True,
        "data": Subject.model_validate(subject).model_dump(),
        "message": "과목 정보가 성공적으로 수정되었습니다"
    }


# ✅ [DELETE] 과목 정보 삭제
@router.delete("/{subject_id}", dependencies=[Depends(require_school_data_management)])
def delete_subject(subject_id: int, db: Session = Depends(get_db)):
    subject = db.query(SubjectModel).filter(SubjectModel.id == subject_id).first()
    if subject is None:
        return _not_found()

    db.delete(subject)
    db.commit()
    return {
        "success": True,
        "data": {"subject_id": subject_id},
        "message": "과목 정보가 성공적으로 삭제되었습니다"
    }
