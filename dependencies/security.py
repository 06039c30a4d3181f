from dataclasses import dataclass
from typing import Annotated, Optional

from fastapi import Depends, Header, HTTPException

from config.roles import (
    EXPORT_REPORT_CARDS,
    MANAGE_GRADES,
    MANAGE_SCHOOL_DATA,
    VIEW_REPORT_CARDS,
    Role,
    has_permission,
)

UserIdHeader = Annotated[Optional[str], Header(alias="X-User-Id")]
UserRoleHeader = Annotated[Optional[str], Header(alias="X-User-Role")]


@dataclass(frozen=True)
class RequesterContext:
    """요청자 정보 (인증 게이트웨이가 채워주는 헤더 기반)"""
    user_id: str
    role: Role


def get_requester(x_user_id: UserIdHeader = None, x_user_role: UserRoleHeader = None) -> RequesterContext:
    if not x_user_id or not x_user_role:
        raise HTTPException(status_code=401, detail="Missing X-User-Id / X-User-Role headers")

    try:
        role = Role(x_user_role.strip().lower())
    except ValueError:
        raise HTTPException(status_code=401, detail=f"Unknown role: {x_user_role}")

    return RequesterContext(user_id=x_user_id.strip(), role=role)


def require_permission(permission: str):
    """권한 테이블(ROLE_PERMISSIONS) 기준 접근 제어 의존성"""
    def _check(requester: RequesterContext = Depends(get_requester)) -> RequesterContext:
        if not has_permission(requester.role, permission):
            raise HTTPException(
                status_code=403,
                detail=f"Role '{requester.role.value}' is not allowed to perform '{permission}'",
            )
        return requester
    return _check


require_report_card_view = require_permission(VIEW_REPORT_CARDS)
require_report_card_export = require_permission(EXPORT_REPORT_CARDS)
require_grade_management = require_permission(MANAGE_GRADES)
require_school_data_management = require_permission(MANAGE_SCHOOL_DATA)
