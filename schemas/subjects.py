from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

# ✅ 입력용: POST/PUT 요청에서 사용할 스키마
class SubjectCreate(BaseModel):
    name: str                                           # 과목 이름
    code: Optional[str] = None                          # 과목 코드
    coefficient: float = Field(1.0, gt=0)               # 과목 계수 (0 초과)

# ✅ 출력용: GET, POST 응답 등에서 사용할 스키마
class Subject(SubjectCreate):
    id: int                                  # 고유 과목 ID

    model_config = ConfigDict(from_attributes=True)
