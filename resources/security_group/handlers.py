"""
resources/security_group/handlers.py - 세대별 보안 그룹 CRUD 구현

두 세대는 같은 SDK 메서드 이름을 쓰지만 세션이 세대별로 고정된 클라이언트를
제공하므로 요청이 섞이지 않습니다. 차이는 조회 결과를 평탄화하는 방식입니다.

- Classic: 리소스 그룹 이름을 Resource Manager로 조회, 콘솔 경로 /vpc/...
- Current: 응답에 포함된 리소스 그룹 이름 사용, 콘솔 경로 /vpc-ext/...
"""

from __future__ import annotations

import logging
from typing import Any

from core.config import get_base_controller
from core.lifecycle import OperationContext
from core.schema import ResourceData
from core.session import Generation, call_api

from .rules import decode_rules

logger = logging.getLogger(__name__)

SERVICE = "vpc"


class SecurityGroupHandler:
    """보안 그룹 공통 구현 (세대별 서브클래스가 평탄화 방식을 정함)"""

    generation: Generation
    controller_path: str = ""

    def _client(self, ctx: OperationContext) -> Any:
        return ctx.session.vpc_client(self.generation)

    def flatten(self, ctx: OperationContext, group: dict[str, Any]) -> dict[str, Any]:
        """조회/변경 응답을 스키마 속성으로 평탄화"""
        name = group.get("name", "")
        observed: dict[str, Any] = {
            "name": name,
            "vpc": (group.get("vpc") or {}).get("id", ""),
            "rules": decode_rules(group.get("rules")),
            "resource_controller_url": get_base_controller(ctx.session.config) + self.controller_path,
            "resource_name": name,
            "resource_crn": group.get("crn", ""),
        }
        resource_group = group.get("resource_group")
        if resource_group:
            observed["resource_group"] = resource_group.get("id", "")
            observed.update(self.resource_group_fields(resource_group))
        return observed

    def resource_group_fields(self, resource_group: dict[str, Any]) -> dict[str, Any]:
        return {}

    def create(self, ctx: OperationContext, data: ResourceData) -> tuple[str, dict[str, Any]]:
        client = self._client(ctx)
        kwargs: dict[str, Any] = {"vpc": {"id": data.get("vpc")}}

        name, ok = data.get_ok("name")
        if ok:
            kwargs["name"] = name
        group_id, ok = data.get_ok("resource_group")
        if ok:
            kwargs["resource_group"] = {"id": group_id}

        group = call_api(SERVICE, "create_security_group", client.create_security_group, **kwargs)
        return group["id"], self.flatten(ctx, group)

    def read(self, ctx: OperationContext, identity: str) -> dict[str, Any]:
        client = self._client(ctx)
        group = call_api(SERVICE, "get_security_group", client.get_security_group, identity=identity, id=identity)
        return self.flatten(ctx, group)

    def update(self, ctx: OperationContext, identity: str, changes: dict[str, Any]) -> dict[str, Any]:
        client = self._client(ctx)
        group = call_api(
            SERVICE,
            "update_security_group",
            client.update_security_group,
            identity=identity,
            id=identity,
            security_group_patch=changes,
        )
        return self.flatten(ctx, group)

    def delete(self, ctx: OperationContext, identity: str) -> None:
        client = self._client(ctx)
        call_api(SERVICE, "delete_security_group", client.delete_security_group, identity=identity, id=identity)


class ClassicSecurityGroupHandler(SecurityGroupHandler):
    """1세대 API (리소스 그룹 이름은 상태 조정 단계에서 조회)"""

    generation = Generation.CLASSIC
    controller_path = "/vpc/network/securityGroups"


class CurrentSecurityGroupHandler(SecurityGroupHandler):
    """2세대 API"""

    generation = Generation.CURRENT
    controller_path = "/vpc-ext/network/securityGroups"

    def resource_group_fields(self, resource_group: dict[str, Any]) -> dict[str, Any]:
        # 이름이 없으면 상태 조정 단계에서 조회
        name = resource_group.get("name")
        return {"resource_group_name": name} if name else {}
