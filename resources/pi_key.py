"""
resources/pi_key.py - Power Virtual Server SSH 키 데이터 소스 (pi_key)

Power Virtual Server 클라이언트는 세션에 주입되어야 하며
IBM SDK 규약(DetailedResponse 반환, 실패 시 ApiException)을 따릅니다:

    client.get_key(cloud_instance_id=..., key_name=...)
        → {"name": ..., "sshKey": ..., "creationDate": ...}
"""

from __future__ import annotations

from typing import Any

from core.lifecycle import DataSource, OperationContext
from core.schema import Attribute, ResourceData, Schema, validate_no_zero_value
from core.session import call_api

SCHEMA: Schema = {
    "pi_key_name": Attribute(
        required=True,
        validate=validate_no_zero_value,
        description="SSHKey Name to be used for pvminstances",
    ),
    "pi_cloud_instance_id": Attribute(required=True, validate=validate_no_zero_value),
    "creation_date": Attribute(computed=True),
    "sshkey": Attribute(computed=True),
}


def read_key(ctx: OperationContext, data: ResourceData) -> tuple[str, dict[str, Any]]:
    """SSH 키 조회 (식별자 = 키 이름)"""
    client = ctx.session.power_client()
    key_name = data.get("pi_key_name")
    key = call_api(
        "power",
        "get_key",
        client.get_key,
        identity=key_name,
        cloud_instance_id=data.get("pi_cloud_instance_id"),
        key_name=key_name,
    )
    return key["name"], {
        "sshkey": key.get("sshKey", ""),
        "creation_date": key.get("creationDate", ""),
    }


pi_key = DataSource(
    name="pi_key",
    schema=SCHEMA,
    read=read_key,
    description="Power Virtual Server SSH 키",
)
