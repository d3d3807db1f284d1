"""Shared utilities for the backend."""
from utils.credentials import decode_service_account, encode_service_account

__all__ = [
    "decode_service_account",
    "encode_service_account",
]
