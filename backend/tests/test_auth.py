import base64
import json
import time

from sunatstock.core.security import create_access_token, decode_access_token
from sunatstock.db.init_db import ensure_default_user
from sunatstock.models.user import User
from sunatstock.services.auth_service import login_user


def test_token_round_trip():
    token = create_access_token(3, "dokter")
    payload = decode_access_token(token)

    assert payload["userId"] == 3
    assert payload["username"] == "dokter"
    assert payload["exp"] > int(time.time() * 1000)


def test_token_is_plain_base64_json():
    payload = json.loads(base64.b64decode(create_access_token(1, "admin")))
    assert set(payload) == {"userId", "username", "exp"}


def test_expired_and_malformed_tokens_are_rejected():
    assert decode_access_token(create_access_token(1, "admin", expires_in_days=-1)) is None
    assert decode_access_token("not-base64!!") is None
    assert decode_access_token(base64.b64encode(b"[1, 2]").decode()) is None
    assert decode_access_token(base64.b64encode(b'{"userId": "1", "exp": 1}').decode()) is None


def test_login_user(db_session, user):
    result = login_user(db_session, "dokter", "rahasia")

    assert result["user"].id == user.id
    assert decode_access_token(result["token"])["userId"] == user.id


def test_login_user_rejects_bad_credentials(db_session, user):
    assert login_user(db_session, "dokter", "salah") is None
    assert login_user(db_session, "tidak-ada", "rahasia") is None


def test_default_user_created_once(db_session):
    assert ensure_default_user(db_session) is True
    assert ensure_default_user(db_session) is False
    assert db_session.query(User).count() == 1
