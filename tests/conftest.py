import os

# 설정 객체가 import 시점에 생성되므로 가장 먼저 환경변수 지정
os.environ["SQLALCHEMY_DATABASE_URI"] = "sqlite://"
os.environ["DEFAULT_SCHOOL_YEAR"] = "2024-2025"
os.environ["GRADE_AGGREGATION_MODE"] = "weighted_mean"

import pytest
from fastapi.testclient import TestClient

from database.db import Base, SessionLocal, create_tables, engine
from models.classes import Class as ClassModel
from models.courses import Course as CourseModel
from models.grades import Grade as GradeModel
from models.students import Student as StudentModel
from models.subjects import Subject as SubjectModel
from models.teachers import Teacher as TeacherModel


@pytest.fixture
def db():
    create_tables()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    from main import app
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def school(db):
    """
    6ème A: Martin Léa / Dubois Hugo / Bernard Chloé
    Mathématiques(coef 3, M. Petit) · Français(coef 2, Mme Roux)
    """
    cls = ClassModel(name="6ème A", level="6ème")
    other = ClassModel(name="5ème B", level="5ème")
    db.add_all([cls, other])
    db.flush()

    petit = TeacherModel(first_name="Jean", last_name="Petit")
    roux = TeacherModel(first_name="Anne", last_name="Roux")
    math = SubjectModel(name="Mathématiques", code="MATH", coefficient=3)
    french = SubjectModel(name="Français", code="FR", coefficient=2)
    db.add_all([petit, roux, math, french])
    db.flush()

    math_course = CourseModel(class_id=cls.id, subject_id=math.id, teacher_id=petit.id, title="Maths 6A")
    french_course = CourseModel(class_id=cls.id, subject_id=french.id, teacher_id=roux.id, title="Français 6A")
    db.add_all([math_course, french_course])
    db.flush()

    lea = StudentModel(first_name="Léa", last_name="Martin", class_id=cls.id)
    hugo = StudentModel(first_name="Hugo", last_name="Dubois", class_id=cls.id)
    chloe = StudentModel(first_name="Chloé", last_name="Bernard", class_id=cls.id)
    outsider = StudentModel(first_name="Paul", last_name="Durand", class_id=other.id)
    db.add_all([lea, hugo, chloe, outsider])
    db.flush()

    def grade(student, course, score, max_score=20, coefficient=1, trimester=1):
        return GradeModel(student_id=student.id, course_id=course.id, score=score,
                          max_score=max_score, coefficient=coefficient, trimester=trimester)

    db.add_all([
        # Léa: Math 18, Français 10 → 14.8
        grade(lea, math_course, 18),
        grade(lea, french_course, 10),
        # Hugo: Math 8, Français 12 → 9.6
        grade(hugo, math_course, 8),
        grade(hugo, french_course, 12),
        # Chloé: Math 16, Français 17 → 16.4
        grade(chloe, math_course, 16),
        grade(chloe, french_course, 17),
        # 2학기 / 다른 반 성적 (1학기 성적표에 포함되면 안 됨)
        grade(lea, math_course, 2, trimester=2),
        grade(outsider, math_course, 0),
    ])
    db.commit()

    return {
        "class": cls, "other_class": other,
        "math": math, "french": french,
        "math_course": math_course, "french_course": french_course,
        "lea": lea, "hugo": hugo, "chloe": chloe, "outsider": outsider,
    }
