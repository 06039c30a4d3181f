from sqlalchemy import Column, Integer, String
from database.db import Base

class Student(Base):
    __tablename__ = "students"  # 학생 기본 정보 테이블

    id = Column(Integer, primary_key=True, index=True)               # 고유 학생 ID (Primary Key)
    first_name = Column(String(100), nullable=False)                # 이름
    last_name = Column(String(100), nullable=False)                 # 성 (성적표 정렬 기준)
    class_id = Column(Integer, nullable=False, index=True)          # 소속 반 ID (classes 테이블과 연동)
