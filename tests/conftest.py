"""
Test environment. Required settings are provided before any app module is
imported; no MongoDB, Stripe or Firebase access happens in tests.
Run from backend dir: python -m pytest -v
"""
import os

os.environ.setdefault("STRIPE_SECRET_KEY", "sk_test_dummy")
os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017")
os.environ.setdefault("PUBLIC_APP_ORIGIN", "http://localhost:5173")
os.environ.pop("FIREBASE_SERVICE_ACCOUNT_KEY", None)
