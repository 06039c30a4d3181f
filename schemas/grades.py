from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import List, Optional

# ✅ 입력용: 개별 평가 점수 등록/수정
class GradeCreate(BaseModel):
    student_id: int                                     # 학생 ID
    course_id: int                                      # 수업 ID (→ 과목)
    score: float = Field(..., ge=0)                     # 획득 점수
    max_score: float = Field(20.0, gt=0)                # 만점 (0 초과)
    coefficient: float = Field(1.0, gt=0)               # 평가 가중치
    trimester: int = Field(..., ge=1, le=3)             # 학기 (1~3)
    grade_type: Optional[str] = None                    # 평가 유형
    school_year: Optional[str] = None                   # 학년도 (예: 2024-2025)
    comments: Optional[str] = None

    @model_validator(mode="after")
    def _score_within_max(self):
        if self.score > self.max_score:
            raise ValueError("score must not exceed max_score")
        return self


# ✅ 출력용 (DB 값 그대로, 검증 없이 직렬화)
class Grade(BaseModel):
    id: int                                             # 성적 고유 ID
    student_id: int
    course_id: int
    score: float
    max_score: float
    coefficient: float
    trimester: int
    grade_type: Optional[str] = None
    school_year: Optional[str] = None
    comments: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


# ✅ 학생 성적 요약 (학생 성적 조회 화면)
class SubjectGradeSummary(BaseModel):
    subject_id: int
    subject_name: str
    coefficient: float
    average: float                                      # 20점 환산 단순 평균
    count: int


class StudentGradeSummary(BaseModel):
    student_id: int
    trimester: Optional[int] = None
    average: float                                      # 전체 평가 20점 환산 단순 평균
    grade_count: int
    subjects: List[SubjectGradeSummary]
    grades: List[Grade]
