from datetime import timedelta

import pytest

from clawmark.credentials import CredentialAnchorStore, CredentialStatus, CredentialVerification
from clawmark.exceptions import ConflictError, NotFoundError, ValidationError


@pytest.fixture
def store(clock) -> CredentialAnchorStore:
    return CredentialAnchorStore(clock=clock)


def test_anchor_records_issue_time(store, clock):
    anchor = store.anchor("0xcred", "0xdid", "KYC")
    assert anchor.issued_at == clock()
    assert anchor.revoked is False
    assert anchor.expires_at is None


def test_anchor_requires_fields(store):
    with pytest.raises(ValidationError):
        store.anchor("0xcred", None, "KYC")
    with pytest.raises(ValidationError):
        store.anchor("", "0xdid", "KYC")


def test_anchor_twice_conflicts_and_keeps_first(store, clock):
    first = store.anchor("0xcred", "0xdid", "KYC")
    store.revoke("0xcred", "compromised")
    clock.advance(minutes=5)

    with pytest.raises(ConflictError):
        store.anchor("0xcred", "0xother", "Other")

    stored = store.store.get("0xcred")
    assert stored.issued_at == first.issued_at
    assert stored.did_hash == "0xdid"
    assert stored.revoked is True


def test_anchor_parses_expiry_formats(store, clock):
    iso = store.anchor("0xa", "0xdid", "KYC", "2026-04-01T00:00:00Z")
    assert iso.expires_at.year == 2026 and iso.expires_at.month == 4
    naive = store.anchor("0xb", "0xdid", "KYC", "2026-04-01T00:00:00")
    assert naive.expires_at == iso.expires_at
    with pytest.raises(ValidationError):
        store.anchor("0xc", "0xdid", "KYC", "not a date")


def test_verify_valid_credential(store, clock):
    expires = clock() + timedelta(days=30)
    store.anchor("0xcred", "0xdid", "KYC", expires)

    result = store.verify("0xcred")
    assert result.valid is True
    assert result.reason == "Valid"
    assert result.did_hash == "0xdid"
    assert result.type == "KYC"
    assert result.expires_at == expires


def test_verify_unknown_credential_is_a_result_not_an_error(store):
    result = store.verify("0xmissing")
    assert result.valid is False
    assert result.reason == CredentialVerification.NOT_FOUND
    assert result.found is False
    assert result.to_response() == {"valid": False, "reason": "Credential not found"}


def test_verify_expired_credential(store, clock):
    store.anchor("0xcred", "0xdid", "KYC", clock() + timedelta(hours=1))
    clock.advance(hours=2)

    result = store.verify("0xcred")
    assert result.valid is False
    assert result.reason == "Credential expired"
    assert result.expired_at is not None


def test_revoked_and_expired_reports_revoked(store, clock):
    store.anchor("0xcred", "0xdid", "KYC", clock() + timedelta(hours=1))
    store.revoke("0xcred")
    clock.advance(days=1)

    result = store.verify("0xcred")
    assert result.valid is False
    assert result.reason == "Credential revoked"
    assert "expiredAt" not in result.to_response()


def test_revoke_is_idempotent_and_overwrites_reason(store, clock):
    store.anchor("0xcred", "0xdid", "KYC")
    first = store.revoke("0xcred")
    assert first.revocation_reason == "No reason provided"

    clock.advance(minutes=1)
    second = store.revoke("0xcred", "key rotated")
    assert second.revoked is True
    assert second.revocation_reason == "key rotated"
    assert second.revoked_at == clock()


def test_revoke_unknown_credential(store):
    with pytest.raises(NotFoundError):
        store.revoke("0xmissing")


def test_list_by_did_computes_status_at_read_time(store, clock):
    store.anchor("0xactive", "0xdid", "KYC")
    store.anchor("0xexpiring", "0xdid", "KYC", clock() + timedelta(hours=1))
    store.anchor("0xrevoked", "0xdid", "KYC", clock() + timedelta(hours=1))
    store.anchor("0xelse", "0xother", "KYC")
    store.revoke("0xrevoked")

    listing = store.list_by_did("0xdid")
    statuses = {c.credential_hash: c.status for c in listing.credentials}
    assert listing.count == 3
    assert statuses == {
        "0xactive": CredentialStatus.ACTIVE,
        "0xexpiring": CredentialStatus.ACTIVE,
        "0xrevoked": CredentialStatus.REVOKED,
    }

    clock.advance(hours=2)
    statuses = {c.credential_hash: c.status for c in store.list_by_did("0xdid").credentials}
    assert statuses["0xexpiring"] == CredentialStatus.EXPIRED
    assert statuses["0xrevoked"] == CredentialStatus.REVOKED
