from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from database.db import Base
from models.teachers import Teacher  # noqa: F401  ✅ relationship("Teacher") 해석용 직접 import (중요!)

class Course(Base):
    __tablename__ = "courses"  # 수업(반 × 과목 × 담당 교사)

    id = Column(Integer, primary_key=True, index=True)
    class_id = Column(Integer, nullable=False, index=True)          # 반 ID
    subject_id = Column(Integer, nullable=False)                    # 과목 ID (subjects 테이블과 연동)
    teacher_id = Column(Integer, ForeignKey("teachers.id"))         # 담당 교사 ID (FK)
    title = Column(String(200))                                     # 수업명

    # ✅ 담당 교사 (N:1) - 성적표 과목 행의 교사명 표시에 사용
    teacher = relationship("Teacher", foreign_keys=[teacher_id])
