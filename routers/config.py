from fastapi import APIRouter

from services.academic_calendar import current_school_year, current_trimester, trimester_label

router = APIRouter(prefix="/config", tags=["설정"])


# ✅ [READ] 현재 학년도 · 학기 반환
@router.get("/academic")
def get_academic_config():
    """현재 학년도(school_year), 학기(trimester) 반환"""
    school_year = current_school_year()
    trimester = current_trimester()
    return {
        "success": True,
        "data": {
            "school_year": school_year,
            "trimester": trimester,
            "trimester_label": trimester_label(trimester)
        },
        "message": f"{school_year} {trimester_label(trimester)} 기준 설정 반환"
    }
