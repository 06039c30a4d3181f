from datetime import date
from typing import Optional

from config.settings import settings

TRIMESTER_LABELS = {1: "1er Trimestre", 2: "2ème Trimestre", 3: "3ème Trimestre"}


def current_school_year(today: Optional[date] = None) -> str:
    """
    학년도 문자열 (9월에 새 학년도 시작)
    - 2024-09-01 ~ 2025-08-31 → "2024-2025"
    """
    today = today or date.today()
    start = today.year if today.month >= 9 else today.year - 1
    return f"{start}-{start + 1}"


def current_trimester(today: Optional[date] = None) -> int:
    """
    현재 학기
    - 9~12월 → 1학기 / 1~3월 → 2학기 / 4~8월 → 3학기
    """
    month = (today or date.today()).month
    if month >= 9:
        return 1
    if month <= 3:
        return 2
    return 3


def default_school_year(today: Optional[date] = None) -> str:
    return settings.DEFAULT_SCHOOL_YEAR or current_school_year(today)


def trimester_label(trimester: int) -> str:
    return TRIMESTER_LABELS.get(trimester, f"Trimestre {trimester}")
