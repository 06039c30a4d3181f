import logging

from config.settings import settings


def setup_logging(level: str = None) -> None:
    """루트 로거 설정 (LOG_LEVEL 기준)"""
    logging.basicConfig(
        level=getattr(logging, (level or settings.LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    # HTTP 라이브러리 디버그 로그 비활성화
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    # WeasyPrint/fontTools 경고 과다 출력 방지
    logging.getLogger("weasyprint").setLevel(logging.ERROR)
    logging.getLogger("fontTools").setLevel(logging.ERROR)
