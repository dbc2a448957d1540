"""Launch domain exports."""

from .environment import BUILD_TOGGLES, EnvironmentResolution, resolve_environment
from .flags import FLAG_TABLE, KEYWORDS, ParsedCommand, parse_tokens
from .rewriter import rewrite
from .value_objects import (
    AttachMode,
    CallKind,
    LaunchFlags,
    OrchestrationCall,
    RewritePlan,
    ServiceAttachSpec,
    TerminalSessionRequest,
)

__all__ = [
    "AttachMode",
    "BUILD_TOGGLES",
    "CallKind",
    "EnvironmentResolution",
    "FLAG_TABLE",
    "KEYWORDS",
    "LaunchFlags",
    "OrchestrationCall",
    "ParsedCommand",
    "RewritePlan",
    "ServiceAttachSpec",
    "TerminalSessionRequest",
    "parse_tokens",
    "resolve_environment",
    "rewrite",
]
