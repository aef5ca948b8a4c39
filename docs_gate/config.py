"""Policy model and option setters for the documentation gate.

A policy is built once from the baseline by applying option setters in
order; a later setter for the same field overwrites an earlier one.

Example:
    policy = build_policy(
        with_allowed_ips("127.0.0.1", "::1"),
        with_auth_token("my-secret-token"),
    )
"""

from __future__ import annotations

from collections.abc import Callable

from pydantic import BaseModel, ConfigDict

from docs_gate.constants import DEFAULT_PATH


class Policy(BaseModel):
    """Immutable access policy for the documentation routes.

    Attributes:
        enabled: If False every request is refused with 403
        path: Route pattern for the UI, e.g. "/swagger/*any"
        allowed_ips: Raw addresses or CIDR ranges, as supplied
        auth_token: Static token expected in X-API-TOKEN; empty disables the check
        protect_doc_json: Also gate the machine-readable document route
        trusted_proxies: Peer ranges allowed to set X-Forwarded-For
        strict_allowlist: Fail gate construction on malformed allow-list entries
    """

    model_config = ConfigDict(frozen=True)

    enabled: bool = True
    path: str = DEFAULT_PATH
    allowed_ips: tuple[str, ...] = ()
    auth_token: str = ""
    protect_doc_json: bool = False
    trusted_proxies: tuple[str, ...] = ()
    strict_allowlist: bool = False


Option = Callable[[Policy], Policy]


def with_path(path: str) -> Option:
    """Set the UI route pattern. An empty path keeps the default."""

    def apply(policy: Policy) -> Policy:
        return policy.model_copy(update={"path": path or DEFAULT_PATH})

    return apply


def with_allowed_ips(*entries: str) -> Option:
    """Replace the allow-list with the given addresses and CIDR ranges."""

    def apply(policy: Policy) -> Policy:
        return policy.model_copy(update={"allowed_ips": tuple(entries)})

    return apply


def with_auth_token(token: str) -> Option:
    def apply(policy: Policy) -> Policy:
        return policy.model_copy(update={"auth_token": token})

    return apply


def with_enabled(enabled: bool) -> Option:
    def apply(policy: Policy) -> Policy:
        return policy.model_copy(update={"enabled": enabled})

    return apply


def with_protect_doc_json(protect: bool) -> Option:
    def apply(policy: Policy) -> Policy:
        return policy.model_copy(update={"protect_doc_json": protect})

    return apply


def with_trusted_proxies(*cidrs: str) -> Option:
    """Trust X-Forwarded-For from peers inside these ranges."""

    def apply(policy: Policy) -> Policy:
        return policy.model_copy(update={"trusted_proxies": tuple(cidrs)})

    return apply


def with_strict_allowlist(strict: bool) -> Option:
    def apply(policy: Policy) -> Policy:
        return policy.model_copy(update={"strict_allowlist": strict})

    return apply


def build_policy(*options: Option, base: Policy | None = None) -> Policy:
    """Apply options in order to ``base`` (or the default policy)."""
    policy = base if base is not None else Policy()
    for option in options:
        policy = option(policy)
    return policy
