"""
Session cookie sealing — encrypted + authenticated JWE (dir / A256GCM).
"""

from __future__ import annotations

import hashlib
import json
import logging
from datetime import datetime, timezone

from jose import jwe
from jose.constants import ALGORITHMS
from jose.exceptions import JOSEError

from taskboard.core.config import settings
from taskboard.schemas.session import SessionData

logger = logging.getLogger(__name__)

# A256GCM with direct key agreement needs exactly 32 bytes of key material.
_KEY = hashlib.sha256(settings.SECRET_KEY.encode("utf-8")).digest()


def seal_session(session: SessionData, max_age: int | None = None) -> str:
    """Encrypt *session* into a compact JWE string for the cookie value."""
    ttl = settings.SESSION_MAX_AGE_SECONDS if max_age is None else max_age
    payload = session.model_dump(by_alias=True)
    payload["exp"] = int(datetime.now(timezone.utc).timestamp()) + ttl
    token = jwe.encrypt(
        json.dumps(payload).encode("utf-8"),
        _KEY,
        algorithm=ALGORITHMS.DIR,
        encryption=ALGORITHMS.A256GCM,
    )
    return token.decode("ascii") if isinstance(token, bytes) else token


def unseal_session(token: str | None) -> SessionData:
    """Return the session inside *token*, or the logged-out default.

    Tampered, undecryptable, malformed or expired cookies all decode to the
    default session; the caller never sees why.
    """
    if not token:
        return SessionData()
    try:
        payload = json.loads(jwe.decrypt(token, _KEY))
    except (JOSEError, ValueError, TypeError):
        logger.debug("Discarding unreadable session cookie")
        return SessionData()

    if not isinstance(payload, dict):
        return SessionData()
    exp = payload.pop("exp", None)
    if not isinstance(exp, int) or exp < datetime.now(timezone.utc).timestamp():
        return SessionData()
    try:
        return SessionData.model_validate(payload)
    except ValueError:
        return SessionData()
