from pydantic import BaseModel, ConfigDict
from typing import Optional

# ✅ 입력용 스키마: 교사 정보를 새로 생성할 때 사용
class TeacherCreate(BaseModel):
    first_name: str                          # 이름
    last_name: str                           # 성
    email: Optional[str] = None              # 이메일 주소

# ✅ 출력용 스키마: 교사 정보를 조회할 때 사용
class Teacher(TeacherCreate):
    id: int                                  # 고유 교사 ID

    model_config = ConfigDict(from_attributes=True)
