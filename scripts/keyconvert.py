"""
Print the base64 form of a Firebase service-account file for the .env.
Run: python -m scripts.keyconvert [path]  (default ./firebase-admin-service-key.json)
"""
import os
import sys
from pathlib import Path

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from utils.credentials import decode_service_account, encode_service_account

DEFAULT_KEY_FILE = "firebase-admin-service-key.json"


def main(argv: list[str]) -> int:
    path = Path(argv[1] if len(argv) > 1 else DEFAULT_KEY_FILE)
    try:
        raw = path.read_bytes()
    except FileNotFoundError:
        print(f"Place your {path.name} file in this directory first.")
        print("Then run: python -m scripts.keyconvert")
        return 1
    encoded = encode_service_account(raw)
    try:
        decode_service_account(encoded)
    except ValueError as e:
        print(f"{path} is not a valid service-account JSON file: {e}")
        return 1
    print("Add this to your .env file:")
    print(f"FIREBASE_SERVICE_ACCOUNT_KEY={encoded}")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
