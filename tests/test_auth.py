"""Tests for admin login helpers."""

import base64
import json

from database import AdminCredentials
from web.auth import decode_token, issue_token, validate_credentials, validate_token

ADMIN = AdminCredentials("REBL", "Corp")


def test_token_encodes_username_and_issue_time():
    token = issue_token("REBL", issued_at=1700000000000)
    assert json.loads(base64.b64decode(token)) == {"username": "REBL", "issuedAt": 1700000000000}
    assert decode_token(token) == {"username": "REBL", "issuedAt": 1700000000000}


def test_token_validation():
    assert validate_token(ADMIN, issue_token("REBL")) is True
    assert validate_token(ADMIN, issue_token("someone")) is False


def test_garbage_tokens_are_invalid():
    for token in (None, "", 42, "not base64!", base64.b64encode(b"[1, 2]").decode(), base64.b64encode(b"\xff").decode()):
        assert validate_token(ADMIN, token) is False


def test_credentials_must_match_exactly():
    assert validate_credentials(ADMIN, "REBL", "Corp") is True
    assert validate_credentials(ADMIN, "rebl", "Corp") is False
    assert validate_credentials(ADMIN, "REBL", "corp") is False
    assert validate_credentials(ADMIN, None, "Corp") is False
