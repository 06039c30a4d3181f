"""
schemas/report_cards.py

- 성적표(Bulletin) 응답 스키마
- 렌더러(PDF 템플릿)로 넘기는 값은 모두 소수 둘째 자리 반올림 + 문자열 확정 상태
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict

from services.grade_engine import (
    PASSING_SCORE,
    ClassReport,
    ClassSubjectStats,
    StudentReport,
    SubjectLine,
)


def r2(value: float) -> float:
    return round(float(value), 2)


class ClassStats(BaseModel):
    average: float                # 반 평균
    min: float                    # 반 최저
    max: float                    # 반 최고

    @classmethod
    def from_stats(cls, stats: ClassSubjectStats) -> "ClassStats":
        return cls(average=r2(stats.average), min=r2(stats.min), max=r2(stats.max))


class SubjectLineOut(BaseModel):
    subject_id: int
    subject_name: str
    coefficient: float
    score: float                  # 20점 환산 과목 점수
    entry_count: int              # 집계에 사용된 평가 수
    is_passing: bool              # 10점 이상 여부 (색상 표시용)
    class_stats: ClassStats
    teacher_name: str
    appreciation: str

    @classmethod
    def from_line(cls, line: SubjectLine) -> "SubjectLineOut":
        agg = line.aggregate
        score = r2(agg.normalized_score)
        return cls(
            subject_id=agg.subject.id,
            subject_name=agg.subject.name,
            coefficient=agg.subject.coefficient,
            score=score,
            entry_count=agg.contributing_entry_count,
            is_passing=score >= PASSING_SCORE,
            class_stats=ClassStats.from_stats(line.stats),
            teacher_name=agg.teacher_name,
            appreciation=line.appreciation,
        )


class StudentOut(BaseModel):
    id: int
    first_name: str
    last_name: str


class StudentReportCard(BaseModel):
    student: StudentOut
    subjects: List[SubjectLineOut]
    trimester_average: float
    is_passing: bool
    rank: int
    total_students: int
    general_appreciation: str
    conduct: str

    @classmethod
    def from_report(cls, report: StudentReport, conduct: str) -> "StudentReportCard":
        average = r2(report.trimester_average)
        return cls(
            student=StudentOut(
                id=report.student.id,
                first_name=report.student.first_name,
                last_name=report.student.last_name,
            ),
            subjects=[SubjectLineOut.from_line(line) for line in report.subject_breakdown],
            trimester_average=average,
            is_passing=average >= PASSING_SCORE,
            rank=report.rank,
            total_students=report.total_students,
            general_appreciation=report.general_appreciation,
            conduct=conduct,
        )


class ReportCardHeader(BaseModel):
    """성적표 머리글/바닥글 정보"""
    school_name: str
    school_motto: str
    class_id: int
    class_name: str
    class_level: Optional[str] = None
    trimester: int
    trimester_label: str
    school_year: str


class ClassReportCards(BaseModel):
    header: ReportCardHeader
    order: Literal["alphabetical", "rank"] = "alphabetical"
    reports: List[StudentReportCard]
    excluded_entries: List[str] = []

    model_config = ConfigDict(extra="ignore")

    @classmethod
    def build(
        cls,
        header: ReportCardHeader,
        class_report: ClassReport,
        conduct: str,
        order: str = "alphabetical",
    ) -> "ClassReportCards":
        cards = [StudentReportCard.from_report(r, conduct) for r in class_report.reports]
        if order == "rank":
            cards = sorted(cards, key=lambda c: c.rank)
        return cls(
            header=header,
            order=order,
            reports=cards,
            excluded_entries=[s.reason for s in class_report.skipped_entries],
        )
