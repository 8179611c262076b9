"""One-time tokens handed to the LCP beacon.

A nonce is an HMAC of the current time tick and the action name, so it is
valid for the current tick and the one before it (between half and one full
lifetime).
"""

import hashlib
import hmac
import math
import time


def nonce_tick(lifetime: int, now: float | None = None) -> int:
    now = time.time() if now is None else now
    return math.ceil(now / (lifetime / 2))


def _nonce_for_tick(secret: str, tick: int, action: str) -> str:
    digest = hmac.new(
        secret.encode(),
        f"{tick}|{action}".encode(),
        hashlib.sha256,
    ).hexdigest()
    return digest[-12:-2]


def create_nonce(secret: str, action: str, lifetime: int = 86400, now: float | None = None) -> str:
    """Generate a 10-character nonce for `action`."""
    return _nonce_for_tick(secret, nonce_tick(lifetime, now), action)


def verify_nonce(
    secret: str, nonce: str, action: str, lifetime: int = 86400, now: float | None = None
) -> int:
    """Check a nonce sent back by the beacon.

    The beacon posts its measurements to the ajax endpoint, which owns the
    write path and validates the nonce with this helper.

    Returns 1 if it was generated in the current tick, 2 if it was generated
    in the previous tick, 0 if it is invalid.
    """
    if not nonce:
        return 0
    tick = nonce_tick(lifetime, now)
    if hmac.compare_digest(_nonce_for_tick(secret, tick, action), nonce):
        return 1
    if hmac.compare_digest(_nonce_for_tick(secret, tick - 1, action), nonce):
        return 2
    return 0
