import logging
from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from dependencies.security import RequesterContext, require_report_card_export
from routers.report_cards import get_report_card_service
from services.academic_calendar import current_trimester
from services.pdf_service import PDFService, class_report_cards_filename, report_card_filename
from services.report_card_service import ReportCardService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/pdf", tags=["PDF 생성"])

pdf_service = PDFService()


def _pdf_response(content: bytes, filename: str) -> Response:
    return Response(
        content=content,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f"attachment; filename=\"{filename}\"; filename*=UTF-8''{quote(filename)}"
        }
    )


# ✅ [PDF] 학생 1명 성적표
@router.post("/report-card/{class_id}/{student_id}")
def generate_report_card_pdf(
    class_id: int,
    student_id: int,
    trimester: Optional[int] = Query(None, ge=1, le=3),
    school_year: Optional[str] = None,
    service: ReportCardService = Depends(get_report_card_service),
    requester: RequesterContext = Depends(require_report_card_export),
):
    trimester = trimester or current_trimester()
    header, card = service.student_report_card(class_id, student_id, trimester, school_year)

    pdf_content = pdf_service.generate_report_card_pdf(header, card)
    logger.info("Report card PDF generated: class=%s student=%s T%s by %s",
                class_id, student_id, trimester, requester.user_id)
    return _pdf_response(pdf_content, report_card_filename(card, trimester))


# ✅ [PDF] 반 전체 성적표 (한 파일, 학생당 1페이지)
@router.post("/report-cards/{class_id}")
def generate_class_report_cards_pdf(
    class_id: int,
    trimester: Optional[int] = Query(None, ge=1, le=3),
    school_year: Optional[str] = None,
    service: ReportCardService = Depends(get_report_card_service),
    requester: RequesterContext = Depends(require_report_card_export),
):
    trimester = trimester or current_trimester()
    cards = service.class_report_cards(class_id, trimester, school_year)

    pdf_content = pdf_service.generate_class_report_cards_pdf(cards.header, cards.reports)
    logger.info("Class report cards PDF generated: class=%s T%s (%d students) by %s",
                class_id, trimester, len(cards.reports), requester.user_id)
    return _pdf_response(pdf_content, class_report_cards_filename(cards.header))
