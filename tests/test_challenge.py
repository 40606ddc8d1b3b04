import pytest

from clawmark.exceptions import ExternalServiceError, ValidationError
from clawmark.identity.codec import epoch_millis
from clawmark.verification import (
    ChallengeExpiredError,
    ChallengeNotFoundError,
    ChallengeProtocol,
)


@pytest.fixture
def protocol(platform_client, id_generator) -> ChallengeProtocol:
    return ChallengeProtocol(platform_client, id_generator=id_generator)


def test_generate_challenge_format(protocol, clock):
    challenge = protocol.generate_challenge("alice")
    timestamp = epoch_millis(clock())

    assert challenge.challenge == f"clawmark-verify:alice:{challenge.nonce}:{timestamp}"
    assert len(challenge.nonce) == 8
    assert challenge.timestamp == timestamp
    assert challenge.expires_at == timestamp + 15 * 60 * 1000
    assert challenge.challenge in challenge.instructions


def test_generate_requires_username(protocol):
    with pytest.raises(ValidationError):
        protocol.generate_challenge("")


def test_new_challenge_replaces_previous(protocol):
    first = protocol.generate_challenge("alice")
    second = protocol.generate_challenge("alice")
    assert first.nonce != second.nonce
    assert protocol.store.get("alice") == second
    assert len(protocol.store) == 1


@pytest.mark.asyncio
async def test_verify_succeeds_and_consumes_challenge(protocol, moltbook):
    challenge = protocol.generate_challenge("alice")
    moltbook.posts["alice"] = {
        "posts": [
            {"content": "hello world"},
            {"content": f"proving it: {challenge.challenge} thanks"},
        ]
    }

    result = await protocol.verify_ownership("alice")

    assert result.verified is True
    assert result.posts_checked == 2
    assert result.challenge == challenge.challenge
    assert "alice" not in protocol.store
    assert moltbook.requests[-1].url.params["limit"] == "5"
    assert moltbook.requests[-1].headers["Authorization"] == "Bearer test-key"


@pytest.mark.asyncio
async def test_challenge_regenerated_during_fetch_survives_verify(protocol, moltbook):
    old = protocol.generate_challenge("alice")
    moltbook.posts["alice"] = [{"content": old.challenge}]
    regenerated = []
    moltbook.on_posts_request = lambda username: regenerated.append(protocol.generate_challenge(username))

    result = await protocol.verify_ownership("alice")

    assert result.verified is True
    assert result.challenge == old.challenge
    assert len(regenerated) == 1
    assert regenerated[0].challenge != old.challenge
    assert protocol.store.get("alice") == regenerated[0]


@pytest.mark.asyncio
async def test_failed_verification_keeps_challenge_for_retry(protocol, moltbook):
    challenge = protocol.generate_challenge("alice")
    moltbook.posts["alice"] = [{"content": "nothing to see"}, {"title": "no content field"}]

    result = await protocol.verify_ownership("alice")
    assert result.verified is False
    assert result.posts_checked == 2
    assert protocol.store.get("alice") == challenge

    moltbook.posts["alice"] = [{"content": challenge.challenge}]
    assert (await protocol.verify_ownership("alice")).verified is True


@pytest.mark.asyncio
async def test_verify_without_challenge(protocol):
    with pytest.raises(ChallengeNotFoundError):
        await protocol.verify_ownership("alice")


@pytest.mark.asyncio
async def test_expired_challenge_is_discarded(protocol, clock, moltbook):
    challenge = protocol.generate_challenge("alice")
    moltbook.posts["alice"] = [{"content": challenge.challenge}]
    clock.advance(minutes=16)

    with pytest.raises(ChallengeExpiredError):
        await protocol.verify_ownership("alice")
    assert "alice" not in protocol.store
    # the platform is never queried for an expired challenge
    assert moltbook.requests == []

    with pytest.raises(ChallengeNotFoundError):
        await protocol.verify_ownership("alice")


@pytest.mark.asyncio
async def test_challenge_still_valid_at_exact_ttl(protocol, clock, moltbook):
    challenge = protocol.generate_challenge("alice")
    moltbook.posts["alice"] = [{"content": challenge.challenge}]
    clock.advance(minutes=15)

    assert (await protocol.verify_ownership("alice")).verified is True


@pytest.mark.asyncio
async def test_platform_failure_surfaces_and_keeps_challenge(protocol, moltbook):
    challenge = protocol.generate_challenge("alice")
    moltbook.fail_status = 503

    with pytest.raises(ExternalServiceError):
        await protocol.verify_ownership("alice")
    assert protocol.store.get("alice") == challenge

    moltbook.fail_status = None
    moltbook.timeout = True
    with pytest.raises(ExternalServiceError):
        await protocol.verify_ownership("alice")
    assert protocol.store.get("alice") == challenge


def test_purge_expired_only_drops_stale_challenges(protocol, clock):
    protocol.generate_challenge("alice")
    clock.advance(minutes=10)
    protocol.generate_challenge("bob")
    clock.advance(minutes=6)

    assert protocol.purge_expired() == 1
    assert "alice" not in protocol.store
    assert "bob" in protocol.store
