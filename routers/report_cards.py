from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from database.db import get_db
from dependencies.security import RequesterContext, require_report_card_view
from services.academic_calendar import current_trimester
from services.report_card_service import GradeRepository, ReportCardService

router = APIRouter(prefix="/report-cards", tags=["성적표(Bulletins)"])


def get_report_card_service(db: Session = Depends(get_db)) -> ReportCardService:
    return ReportCardService(GradeRepository(db))


# ✅ [READ] 반 전체 성적표 (과목별 점수 · 반 통계 · 학기 평균 · 석차 · 평어)
# - order=alphabetical(기본): 성 기준 정렬 / order=rank: 석차 순
@router.get("/{class_id}")
def get_class_report_cards(
    class_id: int,
    trimester: Optional[int] = Query(None, ge=1, le=3),
    school_year: Optional[str] = None,
    order: Literal["alphabetical", "rank"] = "alphabetical",
    service: ReportCardService = Depends(get_report_card_service),
    requester: RequesterContext = Depends(require_report_card_view),
):
    trimester = trimester or current_trimester()
    cards = service.class_report_cards(class_id, trimester, school_year, order)
    return {
        "success": True,
        "data": cards.model_dump(),
        "message": f"{len(cards.reports)}명 성적표 생성 완료 (Trimestre {trimester})"
    }


# ✅ [READ] 학생 1명 성적표
@router.get("/{class_id}/students/{student_id}")
def get_student_report_card(
    class_id: int,
    student_id: int,
    trimester: Optional[int] = Query(None, ge=1, le=3),
    school_year: Optional[str] = None,
    service: ReportCardService = Depends(get_report_card_service),
    requester: RequesterContext = Depends(require_report_card_view),
):
    trimester = trimester or current_trimester()
    header, card = service.student_report_card(class_id, student_id, trimester, school_year)
    return {
        "success": True,
        "data": {"header": header.model_dump(), "report": card.model_dump()},
        "message": "성적표 조회 성공"
    }
