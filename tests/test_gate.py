from __future__ import annotations

import logging

import pytest

from docs_gate.config import build_policy, with_allowed_ips, with_auth_token, with_enabled
from docs_gate.core.errors import (
    AddressNotAllowedError,
    GateDisabledError,
    TokenRejectedError,
)
from docs_gate.core.gate import AccessGate

from conftest import FakeContext

pytestmark = [pytest.mark.security]


@pytest.mark.parametrize(
    "ctx",
    [
        FakeContext("127.0.0.1", {"X-API-TOKEN": "secret"}),
        FakeContext("10.0.0.5"),
        FakeContext("not-an-ip", {"X-API-TOKEN": "wrong"}),
    ],
)
def test_disabled_denies_everything_with_403(ctx: FakeContext) -> None:
    gate = AccessGate(
        build_policy(with_enabled(False), with_allowed_ips("127.0.0.1"), with_auth_token("secret"))
    )

    denial = gate.evaluate(ctx)

    assert isinstance(denial, GateDisabledError)
    assert denial.status_code == 403
    assert denial.to_dict() == {"error": "feature disabled"}


def test_disabled_skips_later_checks() -> None:
    gate = AccessGate(
        build_policy(with_enabled(False), with_allowed_ips("127.0.0.1"), with_auth_token("secret"))
    )
    ctx = FakeContext()

    gate.evaluate(ctx)

    assert ctx.address_lookups == 0
    assert ctx.header_lookups == []


def test_no_restrictions_allows_any_caller() -> None:
    gate = AccessGate(build_policy())

    assert gate.allows(FakeContext("203.0.113.9"))
    assert gate.allows(FakeContext("not-an-ip"))


def test_empty_allowlist_skips_address_resolution() -> None:
    gate = AccessGate(build_policy(with_auth_token("secret")))
    ctx = FakeContext(headers={"X-API-TOKEN": "secret"})

    assert gate.allows(ctx)
    assert ctx.address_lookups == 0


def test_address_not_allowed_is_401() -> None:
    gate = AccessGate(build_policy(with_allowed_ips("127.0.0.1")))

    assert gate.allows(FakeContext("127.0.0.1"))
    denial = gate.evaluate(FakeContext("10.0.0.5"))

    assert isinstance(denial, AddressNotAllowedError)
    assert denial.status_code == 401
    assert denial.to_dict() == {"error": "address not allowed"}


def test_address_denial_skips_token_check() -> None:
    gate = AccessGate(build_policy(with_allowed_ips("127.0.0.1"), with_auth_token("secret")))
    ctx = FakeContext("10.0.0.5", {"X-API-TOKEN": "secret"})

    assert isinstance(gate.evaluate(ctx), AddressNotAllowedError)
    assert ctx.header_lookups == []


def test_allowlist_of_only_malformed_entries_denies_all() -> None:
    gate = AccessGate(build_policy(with_allowed_ips("bogus")))

    assert isinstance(gate.evaluate(FakeContext("127.0.0.1")), AddressNotAllowedError)


def test_unparsable_caller_address_is_not_allowed() -> None:
    gate = AccessGate(build_policy(with_allowed_ips("0.0.0.0/0")))

    assert isinstance(gate.evaluate(FakeContext("")), AddressNotAllowedError)


@pytest.mark.parametrize("headers", [{"X-API-TOKEN": "wrong"}, {"X-API-TOKEN": "SECRET"}, {}])
def test_token_mismatch_or_missing_is_401(headers: dict[str, str]) -> None:
    gate = AccessGate(build_policy(with_auth_token("secret")))

    denial = gate.evaluate(FakeContext(headers=headers))

    assert isinstance(denial, TokenRejectedError)
    assert denial.status_code == 401
    assert denial.to_dict() == {"error": "unauthorized access"}


def test_matching_token_passes() -> None:
    gate = AccessGate(build_policy(with_auth_token("secret")))
    ctx = FakeContext(headers={"X-API-TOKEN": "secret"})

    assert gate.evaluate(ctx) is None
    assert ctx.header_lookups == ["X-API-TOKEN"]


def test_check_raises_denial() -> None:
    gate = AccessGate(build_policy(with_allowed_ips("192.168.0.0/16")))

    gate.check(FakeContext("192.168.5.5"))
    with pytest.raises(AddressNotAllowedError):
        gate.check(FakeContext("172.16.0.1"))


def test_denials_are_logged_at_debug_only(caplog) -> None:
    gate = AccessGate(build_policy(with_allowed_ips("127.0.0.1")))

    with caplog.at_level(logging.INFO, logger="docs_gate"):
        gate.evaluate(FakeContext("10.0.0.5"))
    assert not [r for r in caplog.records if r.getMessage() == "docs_access_denied"]

    with caplog.at_level(logging.DEBUG, logger="docs_gate"):
        gate.evaluate(FakeContext("10.0.0.5"))
    denied = [r for r in caplog.records if r.getMessage() == "docs_access_denied"]
    assert len(denied) == 1
    assert denied[0].levelno == logging.DEBUG
    assert denied[0].reason == "address not allowed"
    assert denied[0].client_ip == "10.0.0.5"
