"""Per-request token for the Geo-6 consumer headers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from passlib.hash import sha512_crypt

from geo6.common.constants import CONSUMER_HEADER, TIMESTAMP_HEADER, TOKEN_HEADER
from geo6.common.time_utils import epoch_seconds

# crypt(3) only reads the first 16 salt characters for $6$ hashes.
MAX_SALT_LENGTH = 16
SALT_ALPHABET = frozenset("./0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz")
CRYPT_ROUNDS = 5000


@dataclass(frozen=True)
class AuthToken:
    timestamp: int
    token: str


def token_message(client_id: str, timestamp: int, host: str, method: str, path: str) -> str:
    return "__".join((client_id, str(timestamp), host, method.upper(), path))


def crypt_salt(secret: str) -> str:
    # Characters crypt cannot encode are dropped; the API then rejects the token.
    return "".join(ch for ch in secret if ch in SALT_ALPHABET)[:MAX_SALT_LENGTH]


def sign(
    client_id: str,
    secret: str,
    host: str,
    method: str,
    path: str,
    now: datetime | float | int | None = None,
) -> AuthToken:
    """Derive the token the API re-computes from the timestamp and consumer id.

    The message is hashed with SHA-512-crypt using the shared secret as salt,
    giving ``$6$<salt>$<hash>``.
    """
    timestamp = epoch_seconds(now)
    message = token_message(client_id, timestamp, host, method, path)
    hasher = sha512_crypt.using(salt=crypt_salt(secret), rounds=CRYPT_ROUNDS)
    return AuthToken(timestamp=timestamp, token=hasher.hash(message))


def auth_headers(client_id: str, token: AuthToken) -> dict[str, str]:
    return {
        CONSUMER_HEADER: client_id,
        TIMESTAMP_HEADER: str(token.timestamp),
        TOKEN_HEADER: token.token,
    }
