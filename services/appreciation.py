"""
services/appreciation.py

- 0~20 점 평균 → 평어(appréciation) 변환
- 위에서부터 비교하여 처음 만족하는 구간의 문구를 반환
"""

from typing import List, Tuple

SUBJECT_APPRECIATIONS: List[Tuple[float, str]] = [
    (16, "Excellent travail"),
    (14, "Très bien"),
    (12, "Bien"),
    (10, "Assez bien"),
    (8, "Passable"),
]
SUBJECT_FALLBACK = "Insuffisant"

GENERAL_APPRECIATIONS: List[Tuple[float, str]] = [
    (16, "Félicitations du conseil de classe"),
    (14, "Tableau d'honneur"),
    (12, "Encouragements"),
    (10, "Peut mieux faire"),
]
GENERAL_FALLBACK = "Résultats insuffisants - Doit redoubler d'efforts"


def _lookup(average: float, bands: List[Tuple[float, str]], fallback: str) -> str:
    for threshold, label in bands:
        if average >= threshold:
            return label
    return fallback


def subject_appreciation(average: float) -> str:
    """과목별 평어"""
    return _lookup(average, SUBJECT_APPRECIATIONS, SUBJECT_FALLBACK)


def general_appreciation(average: float) -> str:
    """학기 종합 평어"""
    return _lookup(average, GENERAL_APPRECIATIONS, GENERAL_FALLBACK)
