"""
resources/security_group - VPC 보안 그룹 (is_security_group)

Usage:
    from resources.security_group import security_group

    router.create(security_group, ResourceData(schema=security_group.schema, desired={...}))
"""

from .handlers import ClassicSecurityGroupHandler, CurrentSecurityGroupHandler, SecurityGroupHandler
from .resource import SCHEMA, security_group
from .rules import RuleVariant, SecurityGroupRule, decode_remote, decode_rule, decode_rules

__all__: list[str] = [
    # Resource
    "security_group",
    "SCHEMA",
    # Handlers
    "SecurityGroupHandler",
    "ClassicSecurityGroupHandler",
    "CurrentSecurityGroupHandler",
    # Rules
    "RuleVariant",
    "SecurityGroupRule",
    "decode_remote",
    "decode_rule",
    "decode_rules",
]
