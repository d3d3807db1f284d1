"""
Base64 transport for the Firebase service-account JSON, so the credential fits
in a single environment variable.
"""
import base64
import binascii
import json
from typing import Any


def encode_service_account(raw_json: bytes) -> str:
    """Base64 form of a service-account file, as expected in FIREBASE_SERVICE_ACCOUNT_KEY."""
    return base64.b64encode(raw_json).decode("ascii")


def decode_service_account(encoded: str) -> dict[str, Any]:
    """Decode a base64 service-account JSON document into a dict."""
    try:
        raw = base64.b64decode(encoded.strip(), validate=True)
        data = json.loads(raw.decode("utf-8"))
    except (binascii.Error, UnicodeDecodeError, ValueError) as e:
        raise ValueError("FIREBASE_SERVICE_ACCOUNT_KEY is not base64-encoded JSON") from e
    if not isinstance(data, dict):
        raise ValueError("FIREBASE_SERVICE_ACCOUNT_KEY must decode to a JSON object")
    return data
