"""Access gate for the documentation routes.

The gate runs three checks in a fixed order and stops at the first failure:

1. Policy enabled, otherwise 403
2. Caller address in the allow-list (only when one is configured), otherwise 401
3. X-API-TOKEN header equal to the configured token (only when set), otherwise 401

It is framework independent: callers hand it a ``RequestContext`` and
render the returned denial however their framework does.
"""

from __future__ import annotations

from typing import Protocol

from docs_gate.config import Policy
from docs_gate.constants import TOKEN_HEADER
from docs_gate.core.errors import (
    AccessDeniedError,
    AddressNotAllowedError,
    GateDisabledError,
    TokenRejectedError,
)
from docs_gate.core.ip_allowlist import ParsedAllowList, parse_allowlist
from docs_gate.core.logging import get_logger

logger = get_logger(__name__)


class RequestContext(Protocol):
    """Per-request view the gate needs from the hosting framework."""

    def client_address(self) -> str: ...

    def header(self, name: str) -> str | None: ...


class AccessGate:
    """Request predicate built from a policy.

    The allow-list is parsed once here and only read afterwards, so a single
    gate can serve concurrent requests.
    """

    def __init__(self, policy: Policy) -> None:
        self.policy = policy
        self.allowlist: ParsedAllowList = parse_allowlist(
            policy.allowed_ips, strict=policy.strict_allowlist
        )

    def check(self, ctx: RequestContext) -> None:
        """Raise an ``AccessDeniedError`` subclass if the request is refused."""
        policy = self.policy

        if not policy.enabled:
            raise GateDisabledError()

        if policy.allowed_ips:
            client_ip = ctx.client_address()
            if not self.allowlist.contains(client_ip):
                raise AddressNotAllowedError(details={"client_ip": client_ip})

        # Plain equality, no constant-time compare
        if policy.auth_token and ctx.header(TOKEN_HEADER) != policy.auth_token:
            raise TokenRejectedError()

    def evaluate(self, ctx: RequestContext) -> AccessDeniedError | None:
        """Return the denial for this request, or None when it may proceed."""
        try:
            self.check(ctx)
        except AccessDeniedError as exc:
            logger.debug(
                "docs_access_denied",
                extra={
                    "reason": exc.reason,
                    "status_code": exc.status_code,
                    **exc.details,
                },
            )
            return exc
        return None

    def allows(self, ctx: RequestContext) -> bool:
        return self.evaluate(ctx) is None
