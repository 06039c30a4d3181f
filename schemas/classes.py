from pydantic import BaseModel, ConfigDict
from typing import Optional

# ✅ 생성(Create) 요청용 스키마
# → id는 DB에서 자동 생성되므로 제외
class ClassCreate(BaseModel):
    name: str                        # 학급명 (예: 6ème A)
    level: Optional[str] = None      # 학년/과정


# ✅ 응답(Response) / 조회(Read) 용 스키마
class Class(ClassCreate):
    id: int                          # 학급 고유 ID (PK)

    model_config = ConfigDict(from_attributes=True)
