from sqlalchemy import Column, Integer, Float, String, Text, ForeignKey
from sqlalchemy.orm import relationship
from database.db import Base
from models.courses import Course  # noqa: F401  ✅ relationship("Course") 해석용 직접 import (중요!)

class Grade(Base):
    __tablename__ = "grades"  # 개별 평가 점수 테이블

    id = Column(Integer, primary_key=True, index=True)                      # 성적 고유 ID (Primary Key)
    student_id = Column(Integer, nullable=False, index=True)                # 학생 ID
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False)   # 수업 ID → 과목/교사
    score = Column(Float, nullable=False)                                   # 획득 점수
    max_score = Column(Float, nullable=False, default=20)                   # 만점
    coefficient = Column(Float, nullable=False, default=1)                  # 개별 평가 가중치
    grade_type = Column(String(50))                                         # 평가 유형 (예: devoir, interrogation)
    trimester = Column(Integer, nullable=False, index=True)                 # 학기 (1~3)
    school_year = Column(String(9))                                         # 학년도 (예: 2024-2025)
    comments = Column(Text)                                                 # 코멘트

    course = relationship("Course")
