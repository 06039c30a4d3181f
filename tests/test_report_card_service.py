import pytest

from models.courses import Course as CourseModel
from models.grades import Grade as GradeModel
from services.errors import DataIntegrityError, ReportNotFoundError
from services.grade_engine import AggregationMode
from services.report_card_service import GradeRepository, ReportCardService


def test_repository_fetches_entries_for_class_and_trimester(db, school):
    repo = GradeRepository(db)
    entries = repo.fetch_grade_entries(school["class"].id, trimester=1)

    assert len(entries) == 6
    assert {e.student_id for e in entries} == {school["lea"].id, school["hugo"].id, school["chloe"].id}
    math_entry = next(e for e in entries if e.subject_id == school["math"].id)
    assert math_entry.teacher_name == "Jean Petit"


def test_repository_returns_no_entries_for_empty_class(db, school):
    empty = GradeRepository(db)
    assert empty.fetch_grade_entries(class_id=999, trimester=1) == []


def test_class_report_cards(db, school):
    service = ReportCardService(GradeRepository(db))
    cards = service.class_report_cards(school["class"].id, trimester=1)

    assert cards.header.class_name == "6ème A"
    assert cards.header.school_year == "2024-2025"
    assert cards.header.trimester_label == "1er Trimestre"
    assert [c.student.last_name for c in cards.reports] == ["Bernard", "Dubois", "Martin"]
    assert [c.rank for c in cards.reports] == [1, 3, 2]
    assert [c.trimester_average for c in cards.reports] == [16.4, 9.6, 14.8]

    lea = cards.reports[2]
    assert lea.general_appreciation == "Tableau d'honneur"
    assert lea.conduct == "Bonne"
    assert lea.total_students == 3
    assert [s.subject_name for s in lea.subjects] == ["Français", "Mathématiques"]
    math = lea.subjects[1]
    assert math.score == 18
    assert math.is_passing
    assert math.teacher_name == "Jean Petit"
    assert math.appreciation == "Excellent travail"
    assert (math.class_stats.average, math.class_stats.min, math.class_stats.max) == (14, 8, 18)


def test_rank_order(db, school):
    service = ReportCardService(GradeRepository(db))
    cards = service.class_report_cards(school["class"].id, trimester=1, order="rank")
    assert [c.student.last_name for c in cards.reports] == ["Bernard", "Martin", "Dubois"]


def test_numeric_fields_are_rounded_to_two_decimals(db, school):
    db.add(GradeModel(student_id=school["hugo"].id, course_id=school["math_course"].id,
                      score=7, max_score=30, coefficient=1, trimester=1))
    db.commit()

    service = ReportCardService(GradeRepository(db))
    cards = service.class_report_cards(school["class"].id, trimester=1)
    hugo = next(c for c in cards.reports if c.student.id == school["hugo"].id)
    math = next(s for s in hugo.subjects if s.subject_id == school["math"].id)
    # 8 → (8 + 4.6667)/2 = 6.3333
    assert math.score == 6.33
    assert math.class_stats.average == round((18 + 8 + 16 + 140 / 30) / 4, 2)
    assert hugo.trimester_average == round((6.333333 * 3 + 12 * 2) / 5, 2)


def test_weighted_mean_mode(db, school):
    for score in (10, 20):
        db.add(GradeModel(student_id=school["lea"].id, course_id=school["math_course"].id,
                          score=score, max_score=20, coefficient=1, trimester=1))
    db.commit()

    sequential = ReportCardService(GradeRepository(db), AggregationMode.SEQUENTIAL)
    weighted = ReportCardService(GradeRepository(db), AggregationMode.WEIGHTED_MEAN)

    def lea_math(service):
        cards = service.class_report_cards(school["class"].id, trimester=1)
        lea = next(c for c in cards.reports if c.student.id == school["lea"].id)
        return next(s.score for s in lea.subjects if s.subject_id == school["math"].id)

    # 0 → 9 → (9 + 10)/2 = 9.5 → (9.5 + 20)/2 = 14.75
    assert lea_math(sequential) == 14.75
    # (18 + 10 + 20) / 3 = 16
    assert lea_math(weighted) == 16


def test_zero_grade_weight_counts_as_one(db, school):
    db.add(GradeModel(student_id=school["lea"].id, course_id=school["math_course"].id,
                      score=10, max_score=20, coefficient=0, trimester=1))
    db.commit()

    entries = GradeRepository(db).fetch_grade_entries(school["class"].id, trimester=1)
    assert all(e.grade_weight == 1 for e in entries)

    cards = ReportCardService(GradeRepository(db)).class_report_cards(school["class"].id, trimester=1)
    lea = next(c for c in cards.reports if c.student.id == school["lea"].id)
    # (18 + 10) / 2
    assert next(s.score for s in lea.subjects if s.subject_id == school["math"].id) == 14


def test_unknown_subject_course_is_excluded(db, school):
    ghost = CourseModel(class_id=school["class"].id, subject_id=404, title="Matière supprimée")
    db.add(ghost)
    db.flush()
    db.add(GradeModel(student_id=school["lea"].id, course_id=ghost.id, score=0, max_score=20,
                      coefficient=1, trimester=1))
    db.commit()

    service = ReportCardService(GradeRepository(db))
    cards = service.class_report_cards(school["class"].id, trimester=1)
    lea = next(c for c in cards.reports if c.student.id == school["lea"].id)
    assert lea.trimester_average == 14.8
    assert len(cards.excluded_entries) == 1


def test_invalid_max_score_raises(db, school):
    db.add(GradeModel(student_id=school["lea"].id, course_id=school["math_course"].id,
                      score=5, max_score=0, coefficient=1, trimester=1))
    db.commit()

    service = ReportCardService(GradeRepository(db))
    with pytest.raises(DataIntegrityError):
        service.class_report_cards(school["class"].id, trimester=1)


def test_unknown_class_and_student(db, school):
    service = ReportCardService(GradeRepository(db))
    with pytest.raises(ReportNotFoundError):
        service.class_report_cards(999, trimester=1)
    with pytest.raises(ReportNotFoundError):
        service.student_report_card(school["class"].id, school["outsider"].id, trimester=1)


def test_trimester_without_grades(db, school):
    service = ReportCardService(GradeRepository(db))
    cards = service.class_report_cards(school["class"].id, trimester=3)
    assert all(c.subjects == [] and c.trimester_average == 0 for c in cards.reports)
    assert sorted(c.rank for c in cards.reports) == [1, 2, 3]
