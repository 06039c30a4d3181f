from sqlalchemy import Column, Integer, String, Float
from database.db import Base

class Subject(Base):
    __tablename__ = "subjects"  # 과목 정보 테이블

    id = Column(Integer, primary_key=True, index=True)         # 과목 고유 ID (Primary Key)
    name = Column(String(100), nullable=False)                # 과목 이름 (예: Mathématiques)
    code = Column(String(20))                                 # 과목 코드 (예: MATH)
    coefficient = Column(Float, nullable=False, default=1)    # 과목 계수 (학기 평균 가중치)
