"""Access gate for API documentation routes."""

from docs_gate.api.routes import attach_docs
from docs_gate.config import (
    Option,
    Policy,
    build_policy,
    with_allowed_ips,
    with_auth_token,
    with_enabled,
    with_path,
    with_protect_doc_json,
    with_strict_allowlist,
    with_trusted_proxies,
)
from docs_gate.core.errors import (
    AccessDeniedError,
    AddressNotAllowedError,
    ConfigurationError,
    DocsGateError,
    GateDisabledError,
    TokenRejectedError,
)
from docs_gate.core.gate import AccessGate, RequestContext

__all__ = [
    "AccessDeniedError",
    "AccessGate",
    "AddressNotAllowedError",
    "ConfigurationError",
    "DocsGateError",
    "GateDisabledError",
    "Option",
    "Policy",
    "RequestContext",
    "TokenRejectedError",
    "attach_docs",
    "build_policy",
    "with_allowed_ips",
    "with_auth_token",
    "with_enabled",
    "with_path",
    "with_protect_doc_json",
    "with_strict_allowlist",
    "with_trusted_proxies",
]
