"""
services/report_card_service.py

- GradeRepository : DB(SQLAlchemy) → 엔진 입력 타입 변환 (학생/과목/성적 조회)
- ReportCardService: 한 반 · 한 학기 성적표 생성 (조회 → 계산 → 응답 스키마)
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session, joinedload

from config.settings import settings
from models.classes import Class as ClassModel
from models.courses import Course as CourseModel
from models.grades import Grade as GradeModel
from models.students import Student as StudentModel
from models.subjects import Subject as SubjectModel
from schemas.report_cards import ClassReportCards, ReportCardHeader, StudentReportCard
from services.academic_calendar import default_school_year, trimester_label
from services.errors import ReportNotFoundError
from services.grade_engine import (
    AggregationMode,
    ClassReport,
    GradeEntry,
    StudentInfo,
    SubjectInfo,
    build_class_reports,
)

logger = logging.getLogger(__name__)


class GradeRepository:
    """성적표 계산에 필요한 원천 데이터 조회"""

    def __init__(self, db: Session):
        self.db = db

    def fetch_class(self, class_id: int) -> ClassModel:
        class_obj = self.db.query(ClassModel).filter(ClassModel.id == class_id).first()
        if class_obj is None:
            raise ReportNotFoundError(f"Class {class_id} not found")
        return class_obj

    def fetch_students(self, class_id: int) -> List[StudentInfo]:
        rows = self.db.query(StudentModel).filter(StudentModel.class_id == class_id).all()
        return [StudentInfo(id=r.id, first_name=r.first_name, last_name=r.last_name) for r in rows]

    def fetch_subjects(self) -> List[SubjectInfo]:
        rows = self.db.query(SubjectModel).order_by(SubjectModel.name).all()
        return [SubjectInfo(id=r.id, name=r.name, coefficient=r.coefficient) for r in rows]

    def fetch_grade_entries(self, class_id: int, trimester: int) -> List[GradeEntry]:
        student_ids = [sid for (sid,) in self.db.query(StudentModel.id).filter(StudentModel.class_id == class_id)]
        if not student_ids:
            return []

        rows = (
            self.db.query(GradeModel)
            .options(joinedload(GradeModel.course).joinedload(CourseModel.teacher))
            .filter(GradeModel.trimester == trimester)
            .filter(GradeModel.student_id.in_(student_ids))
            .order_by(GradeModel.id)
            .all()
        )

        entries = []
        for g in rows:
            course = g.course
            if course is None:
                logger.warning("Grade #%s references missing course %s; skipped", g.id, g.course_id)
                continue
            entries.append(GradeEntry(
                student_id=g.student_id,
                subject_id=course.subject_id,
                score=g.score,
                max_score=g.max_score,
                grade_weight=g.coefficient or 1.0,    # 가중치 누락/0 → 1
                trimester=g.trimester,
                entry_id=g.id,
                teacher_name=course.teacher.display_name if course.teacher else None,
            ))
        return entries


class ReportCardService:
    def __init__(self, repository: GradeRepository, mode: Optional[AggregationMode] = None):
        self.repository = repository
        self.mode = AggregationMode(mode or settings.GRADE_AGGREGATION_MODE)

    def compute(self, class_id: int, trimester: int) -> ClassReport:
        """조회 → 엔진 계산"""
        students = self.repository.fetch_students(class_id)
        subjects = self.repository.fetch_subjects()
        entries = self.repository.fetch_grade_entries(class_id, trimester)
        return build_class_reports(students, subjects, entries, trimester, self.mode)

    def class_report_cards(
        self,
        class_id: int,
        trimester: int,
        school_year: Optional[str] = None,
        order: str = "alphabetical",
    ) -> ClassReportCards:
        class_obj = self.repository.fetch_class(class_id)
        class_report = self.compute(class_id, trimester)
        header = ReportCardHeader(
            school_name=settings.SCHOOL_NAME,
            school_motto=settings.SCHOOL_MOTTO,
            class_id=class_obj.id,
            class_name=class_obj.name,
            class_level=class_obj.level,
            trimester=trimester,
            trimester_label=trimester_label(trimester),
            school_year=school_year or default_school_year(),
        )
        return ClassReportCards.build(header, class_report, settings.DEFAULT_CONDUCT, order)

    def student_report_card(
        self,
        class_id: int,
        student_id: int,
        trimester: int,
        school_year: Optional[str] = None,
    ) -> Tuple[ReportCardHeader, StudentReportCard]:
        cards = self.class_report_cards(class_id, trimester, school_year)
        for card in cards.reports:
            if card.student.id == student_id:
                return cards.header, card
        raise ReportNotFoundError(f"Student {student_id} not found in class {class_id}")
