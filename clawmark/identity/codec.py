"""
Identifier codec for agent DIDs.

DIDs take the form ``did:agent:<platform>:<slug>-<timestamp36>-<random8>``
and are anchored by the keccak256 digest of their UTF-8 encoding.
"""

import random
import re
import secrets
from datetime import datetime, timezone
from typing import Callable, Optional

from eth_utils import encode_hex, keccak

DID_PREFIX = "did:agent"
BASE36_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
RANDOM_SUFFIX_LENGTH = 8

_UNSAFE_SLUG_CHARS = re.compile(r"[^a-z0-9]")

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def epoch_millis(moment: datetime) -> int:
    """Milliseconds since the Unix epoch for an aware (or UTC-naive) datetime"""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return int(moment.timestamp() * 1000)


def from_epoch_millis(millis: int) -> datetime:
    return datetime.fromtimestamp(millis / 1000, tz=timezone.utc)


def to_base36(value: int) -> str:
    if value < 0:
        raise ValueError("base36 encoding requires a non-negative integer")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(BASE36_ALPHABET[remainder])
    return "".join(reversed(digits))


def sanitize_agent_name(agent_name: str) -> str:
    """Lower-case the name and replace every character outside [a-z0-9] with '-'"""
    return _UNSAFE_SLUG_CHARS.sub("-", agent_name.lower())


def build_did(platform: str, agent_name: str, timestamp36: str, suffix: str) -> str:
    return f"{DID_PREFIX}:{platform}:{sanitize_agent_name(agent_name)}-{timestamp36}-{suffix}"


def calculate_did_hash(did: str) -> str:
    """Calculate keccak256 hash of DID string, 0x-prefixed hex"""
    return encode_hex(keccak(text=did))


class IdentifierGenerator:
    """Clock and randomness source behind every generated identifier.

    Tests pass a fixed ``clock`` and a seeded ``random.Random`` to get
    deterministic DIDs and nonces.
    """

    def __init__(self, clock: Optional[Clock] = None, random_source: Optional[random.Random] = None):
        self.clock: Clock = clock or utcnow
        self._random = random_source or secrets.SystemRandom()

    def now(self) -> datetime:
        return self.clock()

    def random_token(self, length: int = RANDOM_SUFFIX_LENGTH) -> str:
        return "".join(self._random.choice(BASE36_ALPHABET) for _ in range(length))

    def new_did(self, platform: str, agent_name: str, moment: Optional[datetime] = None) -> str:
        moment = moment or self.now()
        return build_did(platform, agent_name, to_base36(epoch_millis(moment)), self.random_token())
