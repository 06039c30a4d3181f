"""
services/errors.py

- 성적 집계 엔진/성적표 서비스 공용 예외
- middlewares/error_handler.py 에서 code/status_code 로 표준 에러 응답 생성
"""

from typing import List, Optional


class GradeEngineError(Exception):
    code = "GRADE_ENGINE_ERROR"
    status_code = 422

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class DataIntegrityError(GradeEngineError):
    """만점(max_score) ≤ 0 등 집계 불가능한 데이터"""
    code = "DATA_INTEGRITY_ERROR"

    def __init__(self, message: str, offending: Optional[List[str]] = None):
        super().__init__(message)
        self.offending = offending or []


class UnknownSubjectError(GradeEngineError, LookupError):
    """존재하지 않는 과목을 참조하는 성적 (엔진 내부에서 제외 처리)"""
    code = "UNKNOWN_SUBJECT"

    def __init__(self, subject_id, entry_ref: str = ""):
        super().__init__(f"Unknown subject {subject_id!r} referenced by grade {entry_ref}".strip())
        self.subject_id = subject_id


class ReportNotFoundError(GradeEngineError):
    code = "NOT_FOUND"
    status_code = 404
