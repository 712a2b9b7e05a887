"""
Placeholder session tokens.

NOT A SECURITY MECHANISM. A token is base64 of a JSON payload
{"userId", "username", "exp"} with exp in epoch milliseconds. It carries no
signature, so anyone can mint one. It exists so the dashboard can remember
who logged in; replace it before exposing the service outside the clinic.
"""
import base64
import binascii
import json
import time
from typing import Optional

from sunatstock.core.config import settings


def create_access_token(user_id: int, username: str, expires_in_days: Optional[int] = None) -> str:
    days = settings.TOKEN_EXPIRE_DAYS if expires_in_days is None else expires_in_days
    payload = {
        "userId": user_id,
        "username": username,
        "exp": int(time.time() * 1000) + days * 24 * 60 * 60 * 1000,
    }
    return base64.b64encode(json.dumps(payload).encode("utf-8")).decode("ascii")


def decode_access_token(token: str) -> Optional[dict]:
    """Return the payload, or None if the token is malformed or expired."""
    try:
        payload = json.loads(base64.b64decode(token.encode("ascii"), validate=True))
    except (binascii.Error, UnicodeError, ValueError):
        return None

    if not isinstance(payload, dict):
        return None
    if not isinstance(payload.get("userId"), int) or not isinstance(payload.get("exp"), int):
        return None
    if payload["exp"] <= int(time.time() * 1000):
        return None
    return payload
