"""
core/session - 벤더 세션 및 API 세대 선택

Usage:
    from core.session import build_session, select_generation

    session = build_session()
    generation = select_generation(session)
    vpc = session.vpc_client(generation)
"""

from .client import call_api, get_dns_client, get_resource_manager_client, get_vpc_client
from .session import ClientFactory, ClientSession, build_session, select_generation
from .types import Generation, ServiceKind, UserDetails

__all__: list[str] = [
    # Session
    "ClientSession",
    "ClientFactory",
    "build_session",
    "select_generation",
    # Client
    "call_api",
    "get_vpc_client",
    "get_dns_client",
    "get_resource_manager_client",
    # Types
    "Generation",
    "ServiceKind",
    "UserDetails",
]
