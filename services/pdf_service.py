import re
import unicodedata
from pathlib import Path
from typing import Any, Dict, List, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from config.settings import settings
from schemas.report_cards import ReportCardHeader, StudentReportCard

DEFAULT_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"


def _safe_filename_part(text: str) -> str:
    """파일명용 문자열 (악센트 제거, 공백 → _)"""
    ascii_text = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    return re.sub(r"[^A-Za-z0-9-]+", "_", ascii_text).strip("_") or "X"


def report_card_filename(card: StudentReportCard, trimester: int) -> str:
    last = _safe_filename_part(card.student.last_name)
    first = _safe_filename_part(card.student.first_name)
    return f"Bulletin_{last}_{first}_T{trimester}.pdf"


def class_report_cards_filename(header: ReportCardHeader) -> str:
    return f"Bulletins_{_safe_filename_part(header.class_name)}_T{header.trimester}.pdf"


class PDFService:
    def __init__(self, template_dir: Optional[str] = None):
        # 템플릿 환경 설정
        template_dir = Path(template_dir or settings.TEMPLATE_DIR or DEFAULT_TEMPLATE_DIR)
        self.env = Environment(
            loader=FileSystemLoader(template_dir),
            autoescape=select_autoescape(["html"]),
        )
        self.env.filters["fmt"] = lambda value, digits=2: f"{value:.{digits}f}"

    def _render_template(self, template_name: str, data: Dict[str, Any]) -> str:
        """템플릿을 렌더링하여 HTML 생성"""
        template = self.env.get_template(template_name)
        return template.render(**data)

    def _html_to_pdf(self, html_content: str) -> bytes:
        """HTML을 PDF로 변환"""
        # pango 등 시스템 라이브러리에 의존 → 실제 변환 시점에 로드
        import weasyprint

        return weasyprint.HTML(string=html_content, base_url=str(DEFAULT_TEMPLATE_DIR)).write_pdf()

    def render_report_card_html(self, header: ReportCardHeader, card: StudentReportCard) -> str:
        return self._render_template("report_card.html", {"header": header, "cards": [card]})

    def render_class_report_cards_html(self, header: ReportCardHeader, cards: List[StudentReportCard]) -> str:
        return self._render_template("report_card.html", {"header": header, "cards": cards})

    def generate_report_card_pdf(self, header: ReportCardHeader, card: StudentReportCard) -> bytes:
        """학생 1명 성적표 PDF 생성"""
        return self._html_to_pdf(self.render_report_card_html(header, card))

    def generate_class_report_cards_pdf(self, header: ReportCardHeader, cards: List[StudentReportCard]) -> bytes:
        """반 전체 성적표 PDF 생성 (학생당 1페이지)"""
        return self._html_to_pdf(self.render_class_report_cards_html(header, cards))
