"""
core/reconcile.py - 원격 상태를 로컬 리소스 데이터에 반영

벤더 응답에서 평탄화된 관측 값을 ResourceData에 기록합니다.

규칙:
- 관측된 모든 속성은 무조건 로컬 상태에 기록 (벤더가 computed 값의 기준)
- 사용자 지정 가능 속성은 READ 단계에서만 원하는 값을 관측 값으로 덮어씀
  (CREATE/UPDATE 직후에는 다음 Read 전까지 원하는 값이 옳다고 가정)
- resource_group ID가 있고 이름이 비어 있으면 Resource Manager로 이름 조회
  (조회 실패는 Read 전체 실패 - 끊어진 리소스 그룹 참조는 심각한 불일치)
- READ 응답에 resource_group이 없으면 이전 그룹 ID/이름을 관측 상태에서 제거
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Any

from core.schema import ResourceData
from core.session.client import call_api

if TYPE_CHECKING:
    from core.session import ClientSession

logger = logging.getLogger(__name__)

RESOURCE_GROUP = "resource_group"
RESOURCE_GROUP_NAME = "resource_group_name"


class Phase(Enum):
    """조정 시점"""

    CREATE = "create"
    UPDATE = "update"
    READ = "read"


def resolve_resource_group_name(session: ClientSession, group_id: str) -> str:
    """리소스 그룹 ID로 표시용 이름 조회

    Raises:
        RemoteRejectedError: 조회 실패 (404 포함)
        SessionUnavailableError: Resource Manager 클라이언트 생성 실패
    """
    client = session.resource_manager_client()
    group = call_api(
        "resource_manager",
        "get_resource_group",
        client.get_resource_group,
        identity=group_id,
        translate_not_found=False,
        id=group_id,
    )
    return (group or {}).get("name", "")


def reconcile(
    data: ResourceData,
    observed: dict[str, Any],
    phase: Phase,
    session: ClientSession | None = None,
) -> ResourceData:
    """관측 값을 로컬 상태에 기록

    Args:
        data: 대상 리소스 데이터
        observed: 평탄화된 관측 값 (스키마 속성 이름 기준)
        phase: 조정 시점 (READ에서만 원하는 값 갱신)
        session: 리소스 그룹 이름 조회용 세션

    Returns:
        갱신된 data (같은 객체)
    """
    for name, value in observed.items():
        data.set(name, value)
        attr = data.schema.get(name)
        if phase is Phase.READ and attr is not None and attr.user_settable and name in data.desired:
            data.desired[name] = value

    group_id = observed.get(RESOURCE_GROUP)
    if phase is Phase.READ and not group_id and RESOURCE_GROUP in data.schema:
        data.observed.pop(RESOURCE_GROUP, None)
        data.observed.pop(RESOURCE_GROUP_NAME, None)

    if group_id and RESOURCE_GROUP_NAME in data.schema and not observed.get(RESOURCE_GROUP_NAME):
        if session is None:
            logger.warning(f"세션이 없어 리소스 그룹 이름을 조회하지 않습니다 [{group_id}]")
        else:
            data.set(RESOURCE_GROUP_NAME, resolve_resource_group_name(session, group_id))

    logger.debug(f"상태 조정 완료 ({phase.value}): {sorted(observed)}")
    return data
