"""
services/grade_engine.py

학기 성적표 계산 엔진 (DB/렌더링과 무관한 순수 계산부)

1) 과목 집계   : 학생 × 과목별 개별 점수 → 20점 만점 환산 점수 1개
2) 반 통계     : 과목별 반 평균/최저/최고 (개별 평가 점수 기준)
3) 학기 평균   : 과목 계수 가중 평균
4) 석차        : 학기 평균 내림차순, 동점은 정렬 순서대로 연속 석차
5) 평어        : services/appreciation.py
"""

from __future__ import annotations

import logging
import unicodedata
from collections import OrderedDict
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from services.appreciation import general_appreciation, subject_appreciation
from services.errors import DataIntegrityError, UnknownSubjectError

logger = logging.getLogger(__name__)

SCALE = 20.0
PASSING_SCORE = 10.0


class AggregationMode(str, Enum):
    # 기존 화면과 동일한 누적 방식: running = 0 에서 시작, 직전 결과를 가중치 1로 보고 새 점수와 섞음 (순서 의존)
    SEQUENTIAL = "sequential"
    # 표준 가중 평균: Σ(점수·가중치) / Σ가중치
    WEIGHTED_MEAN = "weighted_mean"


# =========================================================
# 입력/출력 타입
# =========================================================

@dataclass(frozen=True)
class GradeEntry:
    student_id: int
    subject_id: int
    score: float
    max_score: float
    grade_weight: float = 1.0
    trimester: int = 1
    entry_id: Optional[int] = None
    teacher_name: Optional[str] = None

    @property
    def ref(self) -> str:
        return f"#{self.entry_id}" if self.entry_id is not None else f"(student={self.student_id})"


@dataclass(frozen=True)
class SubjectInfo:
    id: int
    name: str
    coefficient: float


@dataclass(frozen=True)
class StudentInfo:
    id: int
    first_name: str
    last_name: str

    @property
    def full_name(self) -> str:
        return f"{self.last_name} {self.first_name}"


@dataclass
class SubjectAggregate:
    subject: SubjectInfo
    normalized_score: float
    contributing_entry_count: int
    teacher_name: str = "N/A"


@dataclass(frozen=True)
class ClassSubjectStats:
    average: float = 0.0
    min: float = 0.0
    max: float = 0.0
    entry_count: int = 0


@dataclass
class SubjectLine:
    aggregate: SubjectAggregate
    stats: ClassSubjectStats
    appreciation: str


@dataclass
class StudentReport:
    student: StudentInfo
    subject_breakdown: List[SubjectLine] = field(default_factory=list)
    trimester_average: float = 0.0
    rank: int = 0
    total_students: int = 0
    general_appreciation: str = ""


@dataclass
class SkippedEntry:
    entry: GradeEntry
    reason: str


@dataclass
class ClassReport:
    trimester: int
    reports: List[StudentReport]
    class_stats: Dict[int, ClassSubjectStats] = field(default_factory=dict)
    skipped_entries: List[SkippedEntry] = field(default_factory=list)


# =========================================================
# 1) 점수 환산 / 검증
# =========================================================

def normalize_score(score: float, max_score: float) -> float:
    """원점수를 20점 만점으로 환산"""
    if max_score is None or max_score <= 0:
        raise DataIntegrityError(f"max_score must be > 0 (got {max_score!r})")
    return (score / max_score) * SCALE


def validate_entries(entries: Iterable[GradeEntry]) -> None:
    """집계 전 검증: 만점 ≤ 0, 가중치 ≤ 0 인 성적이 하나라도 있으면 전체 거부"""
    offending = []
    for entry in entries:
        if entry.max_score is None or entry.max_score <= 0:
            offending.append(f"{entry.ref}: max_score={entry.max_score!r}")
        elif entry.grade_weight is None or entry.grade_weight <= 0:
            offending.append(f"{entry.ref}: grade_weight={entry.grade_weight!r}")
    if offending:
        logger.error("Rejected %d grade entries before aggregation: %s", len(offending), ", ".join(offending))
        raise DataIntegrityError(
            f"{len(offending)} grade entries cannot be aggregated: " + ", ".join(offending),
            offending=offending,
        )


def validate_subjects(subjects: Iterable[SubjectInfo]) -> None:
    offending = [f"{s.name} (id={s.id}): coefficient={s.coefficient!r}"
                 for s in subjects if s.coefficient is None or s.coefficient <= 0]
    if offending:
        raise DataIntegrityError(
            "Subject coefficients must be > 0: " + ", ".join(offending),
            offending=offending,
        )


# =========================================================
# 2) 과목 집계
# =========================================================

def aggregate_subject(
    entries: Sequence[GradeEntry],
    mode: AggregationMode = AggregationMode.WEIGHTED_MEAN,
) -> Optional[float]:
    """
    한 학생 · 한 과목 · 한 학기의 점수들을 20점 만점 점수 하나로 집계
    - 성적이 없으면 None (성적표에서 해당 과목 제외)
    - SEQUENTIAL: running = 0 에서 시작해 매 점수마다 running = (running + s·w) / (1 + w)
      (성적 1개만 있어도 절반으로 줄어듦: 18/20 → 9)
    """
    if not entries:
        return None

    if mode == AggregationMode.WEIGHTED_MEAN:
        total = sum(normalize_score(e.score, e.max_score) * e.grade_weight for e in entries)
        weight = sum(e.grade_weight for e in entries)
        return total / weight

    running = 0.0
    for entry in entries:
        normalized = normalize_score(entry.score, entry.max_score)
        running = (running * 1 + normalized * entry.grade_weight) / (1 + entry.grade_weight)
    return running


# =========================================================
# 3) 반 통계
# =========================================================

def class_subject_stats(entries: Sequence[GradeEntry]) -> ClassSubjectStats:
    """반 전체 개별 평가 점수(학생 집계값 아님) 기준 평균/최저/최고"""
    if not entries:
        # 성적이 하나도 없으면 초기값(최저 20)이 새지 않도록 0으로 고정
        return ClassSubjectStats()

    scores = [normalize_score(e.score, e.max_score) for e in entries]
    return ClassSubjectStats(
        average=sum(scores) / len(scores),
        min=min(scores),
        max=max(scores),
        entry_count=len(scores),
    )


# =========================================================
# 4) 학기 평균 / 석차
# =========================================================

def trimester_average(aggregates: Iterable[SubjectAggregate]) -> float:
    """과목 계수 가중 평균 (성적이 있는 과목만 분모에 포함)"""
    weighted, total_coef = 0.0, 0.0
    for agg in aggregates:
        weighted += agg.normalized_score * agg.subject.coefficient
        total_coef += agg.subject.coefficient
    return weighted / total_coef if total_coef > 0 else 0.0


def collation_key(student: StudentInfo) -> Tuple[str, str]:
    """성(last_name) 기준 알파벳 정렬 키 (악센트/대소문자 무시)"""
    def fold(text: str) -> str:
        decomposed = unicodedata.normalize("NFKD", text or "")
        return "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()
    return fold(student.last_name), fold(student.first_name)


def assign_ranks(reports: List[StudentReport]) -> List[StudentReport]:
    """
    학기 평균 내림차순으로 1부터 석차 부여 후, 성 기준 알파벳 순으로 돌려줌
    - 동점자는 입력 순서를 유지한 채 연속 석차 (공동 석차 없음)
    """
    by_average = sorted(reports, key=lambda r: r.trimester_average, reverse=True)
    for idx, report in enumerate(by_average, start=1):
        report.rank = idx
        report.total_students = len(reports)
    return sorted(reports, key=lambda r: collation_key(r.student))


# =========================================================
# 5) 반 전체 성적표 생성
# =========================================================

def _resolve_subject(entry: GradeEntry, subjects: Dict[int, SubjectInfo]) -> SubjectInfo:
    try:
        return subjects[entry.subject_id]
    except KeyError:
        raise UnknownSubjectError(entry.subject_id, entry.ref) from None


def build_class_reports(
    students: Sequence[StudentInfo],
    subjects: Sequence[SubjectInfo],
    entries: Sequence[GradeEntry],
    trimester: int,
    mode: AggregationMode = AggregationMode.WEIGHTED_MEAN,
) -> ClassReport:
    """
    한 반 · 한 학기 성적표 계산
    - 학생 목록은 알파벳 순으로 정렬 후 처리 (동점 석차의 기준 순서)
    - 모든 학생의 평균이 계산된 뒤에 석차를 매김
    """
    validate_subjects(subjects)
    subject_map = {s.id: s for s in subjects}
    student_ids = {s.id for s in students}

    in_scope = [e for e in entries if e.trimester == trimester and e.student_id in student_ids]
    validate_entries(in_scope)

    skipped: List[SkippedEntry] = []
    by_student: Dict[int, "OrderedDict[int, List[GradeEntry]]"] = {sid: OrderedDict() for sid in student_ids}
    by_subject: Dict[int, List[GradeEntry]] = {}

    for entry in in_scope:
        try:
            _resolve_subject(entry, subject_map)
        except UnknownSubjectError as exc:
            logger.warning("Excluding grade entry: %s", exc)
            skipped.append(SkippedEntry(entry=entry, reason=str(exc)))
            continue
        by_student[entry.student_id].setdefault(entry.subject_id, []).append(entry)
        by_subject.setdefault(entry.subject_id, []).append(entry)

    class_stats = {subject_id: class_subject_stats(group) for subject_id, group in by_subject.items()}

    reports: List[StudentReport] = []
    for student in sorted(students, key=collation_key):
        lines: List[SubjectLine] = []
        groups = by_student[student.id]
        for subject_id in sorted(groups, key=lambda sid: subject_map[sid].name.casefold()):
            group = groups[subject_id]
            score = aggregate_subject(group, mode)
            teacher = next((e.teacher_name for e in group if e.teacher_name), None) or "N/A"
            aggregate = SubjectAggregate(
                subject=subject_map[subject_id],
                normalized_score=score,
                contributing_entry_count=len(group),
                teacher_name=teacher,
            )
            lines.append(SubjectLine(
                aggregate=aggregate,
                stats=class_stats.get(subject_id, ClassSubjectStats()),
                appreciation=subject_appreciation(score),
            ))

        average = round(trimester_average(line.aggregate for line in lines), 2)
        reports.append(StudentReport(
            student=student,
            subject_breakdown=lines,
            trimester_average=average,
            general_appreciation=general_appreciation(average),
        ))

    reports = assign_ranks(reports)
    logger.info(
        "Built %d report cards for trimester %d (%d entries, %d excluded, mode=%s)",
        len(reports), trimester, len(in_scope), len(skipped), AggregationMode(mode).value,
    )
    return ClassReport(trimester=trimester, reports=reports, class_stats=class_stats, skipped_entries=skipped)
