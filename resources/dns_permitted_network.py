"""
resources/dns_permitted_network.py - Private DNS permitted network (private_dns_permitted_network)

DNS 존에 VPC를 허용 네트워크로 연결합니다.
벤더가 단일 식별자를 제공하지 않으므로 "instance/zone/network" 복합 식별자를 사용하고,
같은 인스턴스 + 존에 대한 생성/삭제는 이름 기반 잠금으로 직렬화합니다.
모든 사용자 속성이 ForceNew이므로 update는 지원하지 않습니다 (변경 = 교체).
"""

from __future__ import annotations

import logging
from typing import Any

from core.config import settings
from core.exceptions import ValidationError
from core.identity import build_composite_id, parse_composite_id
from core.lifecycle import OperationContext, Resource, Timeouts
from core.locks import scope_key
from core.schema import Attribute, ResourceData, Schema, validate_allowed_string_value
from core.session import call_api

logger = logging.getLogger(__name__)

SERVICE = "dns"
KIND = "private_dns_permitted_network"
ALLOWED_NETWORK_TYPES = ("vpc",)

SCHEMA: Schema = {
    "permitted_network_id": Attribute(computed=True, description="Network Id"),
    "instance_id": Attribute(required=True, force_new=True, description="Instance Id"),
    "zone_id": Attribute(required=True, force_new=True, description="Zone Id"),
    "type": Attribute(
        optional=True,
        force_new=True,
        default="vpc",
        validate=validate_allowed_string_value(ALLOWED_NETWORK_TYPES),
        description="Network Type",
    ),
    "vpc_crn": Attribute(required=True, force_new=True, description="VPC CRN id"),
    "created_on": Attribute(computed=True, description="Network creation date"),
    "modified_on": Attribute(computed=True, description="Network Modification date"),
    "state": Attribute(computed=True, description="Network status"),
}


def parse_identity(identity: str) -> tuple[str, str, str]:
    """복합 식별자 → (instance_id, zone_id, permitted_network_id)"""
    instance_id, zone_id, network_id = parse_composite_id(identity, 3)
    return instance_id, zone_id, network_id


def permitted_network_scope(data: ResourceData) -> str:
    """같은 인스턴스 + 존의 permitted network 변경을 직렬화하는 잠금 키"""
    if data.id:
        instance_id, zone_id, _ = parse_identity(data.id)
    else:
        instance_id, zone_id = data.get("instance_id"), data.get("zone_id")
    return scope_key(KIND, instance_id, zone_id)


class PermittedNetworkHandler:
    """세대 구분이 없는 DNS Services API 구현"""

    def flatten(self, instance_id: str, zone_id: str, network: dict[str, Any]) -> dict[str, Any]:
        return {
            "instance_id": instance_id,
            "zone_id": zone_id,
            "permitted_network_id": network.get("id", ""),
            "vpc_crn": (network.get("permitted_network") or {}).get("vpc_crn", ""),
            "type": network.get("type", ""),
            "created_on": network.get("created_on", ""),
            "modified_on": network.get("modified_on", ""),
            "state": network.get("state", ""),
        }

    def create(self, ctx: OperationContext, data: ResourceData) -> tuple[str, dict[str, Any]]:
        client = ctx.session.dns_client()
        instance_id = data.get("instance_id")
        zone_id = data.get("zone_id")

        network = call_api(
            SERVICE,
            "create_permitted_network",
            client.create_permitted_network,
            identity=f"{instance_id}/{zone_id}",
            instance_id=instance_id,
            dnszone_id=zone_id,
            type=data.get("type"),
            permitted_network={"vpc_crn": data.get("vpc_crn")},
        )
        identity = build_composite_id(instance_id, zone_id, network["id"])
        return identity, self.flatten(instance_id, zone_id, network)

    def read(self, ctx: OperationContext, identity: str) -> dict[str, Any]:
        instance_id, zone_id, network_id = parse_identity(identity)
        client = ctx.session.dns_client()
        network = call_api(
            SERVICE,
            "get_permitted_network",
            client.get_permitted_network,
            identity=identity,
            instance_id=instance_id,
            dnszone_id=zone_id,
            permitted_network_id=network_id,
        )
        return self.flatten(instance_id, zone_id, network)

    def update(self, ctx: OperationContext, identity: str, changes: dict[str, Any]) -> dict[str, Any]:
        field = ", ".join(sorted(changes))
        raise ValidationError(field, changes, f"{KIND}는 갱신할 수 없음 (교체 필요)")

    def delete(self, ctx: OperationContext, identity: str) -> None:
        instance_id, zone_id, network_id = parse_identity(identity)
        client = ctx.session.dns_client()
        call_api(
            SERVICE,
            "delete_permitted_network",
            client.delete_permitted_network,
            identity=identity,
            instance_id=instance_id,
            dnszone_id=zone_id,
            permitted_network_id=network_id,
        )


permitted_network = Resource.for_all_generations(
    KIND,
    SCHEMA,
    PermittedNetworkHandler(),
    scope_key=permitted_network_scope,
    timeouts=Timeouts(
        create=settings.DEFAULT_CREATE_TIMEOUT_MINUTES,
        delete=settings.DEFAULT_DELETE_TIMEOUT_MINUTES,
    ),
    importable=True,
    description="Private DNS 존의 허용 네트워크",
)
