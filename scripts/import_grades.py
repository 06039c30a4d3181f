"""
scripts/import_grades.py

- 성적 CSV → DB 마이그레이션
- CSV 컬럼: student_id, course_id, score, max_score, coefficient, trimester, grade_type, school_year
- max_score 누락·≤ 0, score > max_score 등 집계 불가능한 행은 건너뛰고 로그로 남김
"""

import argparse
import csv
import logging
from dataclasses import dataclass, field
from typing import List

from sqlalchemy.orm import Session

from config.logging_config import setup_logging
from database.db import SessionLocal
from models.grades import Grade as GradeModel  # ✅ 모델 import

logger = logging.getLogger(__name__)

CSV_PATH = "data/grades.csv"  # ✅ 기본 파일 경로


@dataclass
class ImportSummary:
    imported: int = 0
    rejected: List[str] = field(default_factory=list)


def _parse_row(row: dict) -> GradeModel:
    raw_max = (row.get("max_score") or "").strip()
    if not raw_max:
        raise ValueError("max_score is missing")
    max_score = float(raw_max)
    if max_score <= 0:
        raise ValueError(f"max_score must be > 0 (got {max_score})")
    score = float(row["score"])
    if score < 0:
        raise ValueError(f"score must be >= 0 (got {score})")
    if score > max_score:
        raise ValueError(f"score must be <= max_score (got {score} > {max_score})")
    trimester = int(row["trimester"])
    if trimester not in (1, 2, 3):
        raise ValueError(f"trimester must be 1, 2 or 3 (got {trimester})")
    coefficient = float(row.get("coefficient") or 1)
    if coefficient <= 0:
        raise ValueError(f"coefficient must be > 0 (got {coefficient})")

    return GradeModel(
        student_id=int(row["student_id"]),              # 학생 ID
        course_id=int(row["course_id"]),                # 수업 ID
        score=score,                                    # 획득 점수
        max_score=max_score,                            # 만점
        coefficient=coefficient,                        # 평가 가중치
        trimester=trimester,                            # 학기
        grade_type=row.get("grade_type") or None,
        school_year=row.get("school_year") or None,
    )


def import_grades(db: Session, csv_path: str = CSV_PATH) -> ImportSummary:
    summary = ImportSummary()

    with open(csv_path, newline="", encoding="utf-8-sig") as csvfile:
        reader = csv.DictReader(csvfile)
        for line_no, row in enumerate(reader, start=2):
            try:
                grade = _parse_row(row)
            except (KeyError, ValueError) as e:
                logger.warning("Line %d rejected: %s", line_no, e)
                summary.rejected.append(f"line {line_no}: {e}")
                continue
            db.add(grade)
            summary.imported += 1

    db.commit()
    logger.info("Imported %d grades, rejected %d rows", summary.imported, len(summary.rejected))
    return summary


if __name__ == "__main__":
    setup_logging()
    parser = argparse.ArgumentParser(description="Import grades from CSV")
    parser.add_argument("csv_path", nargs="?", default=CSV_PATH)
    args = parser.parse_args()

    db: Session = SessionLocal()
    try:
        result = import_grades(db, args.csv_path)
    finally:
        db.close()
    print(f"✅ 성적 CSV → DB 마이그레이션 완료 (imported={result.imported}, rejected={len(result.rejected)})")
