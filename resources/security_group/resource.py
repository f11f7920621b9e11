"""
resources/security_group/resource.py - is_security_group 스키마 및 리소스 정의

name만 갱신 가능하며, vpc/resource_group 변경은 교체가 필요합니다.
"""

from __future__ import annotations

from core.lifecycle import Resource
from core.schema import AttrType, Attribute, Schema, validate_is_name
from core.session import Generation

from .handlers import ClassicSecurityGroupHandler, CurrentSecurityGroupHandler

RULE_SCHEMA: Schema = {
    "direction": Attribute(computed=True, description="inbound | outbound"),
    "ip_version": Attribute(computed=True, description="ipv4 | ipv6"),
    "remote": Attribute(computed=True, description="IP 주소, CIDR 또는 보안 그룹 ID"),
    "type": Attribute(type=AttrType.INT, computed=True, description="ICMP type"),
    "code": Attribute(type=AttrType.INT, computed=True, description="ICMP code"),
    "port_min": Attribute(type=AttrType.INT, computed=True, description="TCP/UDP 최소 포트"),
    "port_max": Attribute(type=AttrType.INT, computed=True, description="TCP/UDP 최대 포트"),
    "protocol": Attribute(computed=True, description="icmp | tcp | udp | all"),
}

SCHEMA: Schema = {
    "name": Attribute(optional=True, computed=True, validate=validate_is_name, description="보안 그룹 이름"),
    "vpc": Attribute(required=True, force_new=True, description="보안 그룹이 속한 VPC ID"),
    "rules": Attribute(type=AttrType.LIST, computed=True, elem=RULE_SCHEMA, description="보안 그룹 규칙"),
    "resource_group": Attribute(optional=True, computed=True, force_new=True, description="리소스 그룹 ID"),
    "resource_controller_url": Attribute(computed=True, description="콘솔에서 리소스를 볼 수 있는 URL"),
    "resource_name": Attribute(computed=True, description="리소스 이름"),
    "resource_crn": Attribute(computed=True, description="리소스 CRN"),
    "resource_group_name": Attribute(computed=True, description="리소스 그룹 이름"),
}

security_group = Resource(
    name="is_security_group",
    schema=SCHEMA,
    handlers={
        Generation.CLASSIC: ClassicSecurityGroupHandler(),
        Generation.CURRENT: CurrentSecurityGroupHandler(),
    },
    updatable=frozenset({"name"}),
    importable=True,
    description="VPC 보안 그룹",
)
