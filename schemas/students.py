from pydantic import BaseModel, ConfigDict

# ✅ 입력용 (POST/PUT 등)
class StudentCreate(BaseModel):
    first_name: str                          # 이름
    last_name: str                           # 성
    class_id: int                            # 소속 반 ID

# ✅ 전체 출력용 (GET, 상세조회 등)
class Student(StudentCreate):
    id: int

    model_config = ConfigDict(from_attributes=True)
