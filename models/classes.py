from sqlalchemy import Column, Integer, String
from database.db import Base

class Class(Base):
    __tablename__ = "classes"

    id = Column(Integer, primary_key=True, index=True)      # 학급 고유 ID (PK)
    name = Column(String(50), nullable=False)               # 학급명 (예: 6ème A)
    level = Column(String(50))                              # 학년/과정 (예: 6ème, Terminale)
