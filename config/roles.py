"""
config/roles.py

- 사용자 역할(Role) 정의와 역할별 권한 테이블
- 역할에 따른 분기는 클래스 상속이 아니라 아래 테이블 조회로 처리합니다.
"""

from enum import Enum
from typing import Dict, FrozenSet


class Role(str, Enum):
    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    TEACHER = "teacher"
    STUDENT = "student"
    PARENT = "parent"
    EDUCATOR = "educator"
    CENSOR = "censor"
    FOUNDER = "founder"
    PRINCIPAL_TEACHER = "principal_teacher"
    DIRECTOR = "director"
    ACCOUNTANT = "accountant"


# 권한 식별자
VIEW_REPORT_CARDS = "report_cards:view"
EXPORT_REPORT_CARDS = "report_cards:export"
MANAGE_GRADES = "grades:manage"
MANAGE_SCHOOL_DATA = "school_data:manage"

_STAFF = frozenset({VIEW_REPORT_CARDS, EXPORT_REPORT_CARDS, MANAGE_GRADES})
_ALL = frozenset({VIEW_REPORT_CARDS, EXPORT_REPORT_CARDS, MANAGE_GRADES, MANAGE_SCHOOL_DATA})

# ✅ 역할 → 권한 조회 테이블
ROLE_PERMISSIONS: Dict[Role, FrozenSet[str]] = {
    Role.SUPER_ADMIN: _ALL,
    Role.ADMIN: _ALL,
    Role.FOUNDER: _ALL,
    Role.DIRECTOR: _ALL,
    Role.CENSOR: frozenset({VIEW_REPORT_CARDS, EXPORT_REPORT_CARDS}),
    Role.PRINCIPAL_TEACHER: _STAFF,
    Role.TEACHER: _STAFF,
    Role.EDUCATOR: frozenset({VIEW_REPORT_CARDS}),
    Role.ACCOUNTANT: frozenset(),
    Role.STUDENT: frozenset(),
    Role.PARENT: frozenset(),
}


def has_permission(role: Role, permission: str) -> bool:
    return permission in ROLE_PERMISSIONS.get(role, frozenset())
