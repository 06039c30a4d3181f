from pydantic import BaseModel, ConfigDict
from typing import Optional

# ✅ 입력용: 반 × 과목 × 담당 교사
class CourseCreate(BaseModel):
    class_id: int
    subject_id: int
    teacher_id: Optional[int] = None
    title: Optional[str] = None

# ✅ 출력용
class Course(CourseCreate):
    id: int

    model_config = ConfigDict(from_attributes=True)
