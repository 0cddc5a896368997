"""Session Cookie — extract the access token from the Supabase SSR session cookie.

Invariants:
    - The cookie is the only identity source; headers and bodies are never read
    - Chunked cookies (<name>.0, <name>.1, ...) are joined in index order
    - Any malformed value yields None (the auth guard then fails closed)
"""

import base64
import binascii
import json
from typing import Mapping
from urllib.parse import urlparse

BASE64_PREFIX = "base64-"


def default_cookie_name(supabase_url: str) -> str:
    """sb-<project-ref>-auth-token, the name @supabase/ssr writes."""
    host = urlparse(supabase_url).hostname or ""
    ref = host.split(".")[0] if host else "local"
    return f"sb-{ref}-auth-token"


def read_session_cookie(cookies: Mapping[str, str], name: str) -> str | None:
    """Raw cookie value, reassembling chunks when the session was split."""
    if cookies.get(name):
        return cookies[name]
    chunks = []
    index = 0
    while f"{name}.{index}" in cookies:
        chunks.append(cookies[f"{name}.{index}"])
        index += 1
    return "".join(chunks) or None


def decode_access_token(raw: str) -> str | None:
    """Access token from a session cookie value, or None."""
    if raw.startswith(BASE64_PREFIX):
        encoded = raw[len(BASE64_PREFIX):]
        try:
            raw = base64.urlsafe_b64decode(
                encoded + "=" * (-len(encoded) % 4),
            ).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError):
            return None
    try:
        payload = json.loads(raw)
    except ValueError:
        return None

    if isinstance(payload, dict):
        token = payload.get("access_token")
    elif isinstance(payload, list) and payload:
        token = payload[0]  # legacy [access_token, refresh_token, ...] form
    else:
        token = None
    return token if isinstance(token, str) and token else None


def extract_access_token(cookies: Mapping[str, str], name: str) -> str | None:
    raw = read_session_cookie(cookies, name)
    return decode_access_token(raw) if raw else None
