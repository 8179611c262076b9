"""Tests for beacon nonces."""
from atf_optimizer.core.security import create_nonce, verify_nonce

SECRET = "s3cret"
LIFETIME = 86400
NOW = 1_700_000_000.0


class TestNonce:
    def test_format(self):
        nonce = create_nonce(SECRET, "rocket_lcp", LIFETIME, now=NOW)
        assert len(nonce) == 10
        assert all(c in "0123456789abcdef" for c in nonce)

    def test_valid_in_current_tick(self):
        nonce = create_nonce(SECRET, "rocket_lcp", LIFETIME, now=NOW)
        assert verify_nonce(SECRET, nonce, "rocket_lcp", LIFETIME, now=NOW) == 1

    def test_valid_in_previous_tick(self):
        nonce = create_nonce(SECRET, "rocket_lcp", LIFETIME, now=NOW)
        later = NOW + LIFETIME / 2
        assert verify_nonce(SECRET, nonce, "rocket_lcp", LIFETIME, now=later) == 2

    def test_expired(self):
        nonce = create_nonce(SECRET, "rocket_lcp", LIFETIME, now=NOW)
        assert verify_nonce(SECRET, nonce, "rocket_lcp", LIFETIME, now=NOW + LIFETIME * 2) == 0

    def test_bound_to_action_and_secret(self):
        nonce = create_nonce(SECRET, "rocket_lcp", LIFETIME, now=NOW)
        assert verify_nonce(SECRET, nonce, "other_action", LIFETIME, now=NOW) == 0
        assert verify_nonce("another-secret", nonce, "rocket_lcp", LIFETIME, now=NOW) == 0

    def test_empty(self):
        assert verify_nonce(SECRET, "", "rocket_lcp", LIFETIME, now=NOW) == 0
