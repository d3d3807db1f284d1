"""Settings loading, credential decoding and service endpoints."""
import base64
import json
import os
import tempfile
import unittest
from unittest.mock import patch

from fastapi.testclient import TestClient

import config
from main import app
from utils.credentials import decode_service_account, encode_service_account


class TestSettings(unittest.TestCase):
    def setUp(self):
        self._cwd = os.getcwd()
        self._tmp = tempfile.TemporaryDirectory()
        # no .env in the working directory
        os.chdir(self._tmp.name)

    def tearDown(self):
        os.chdir(self._cwd)
        self._tmp.cleanup()

    def test_missing_required_variables_exit(self):
        with patch.dict(os.environ, {}, clear=True):
            with self.assertRaises(SystemExit) as ctx:
                config.load_settings()
        self.assertEqual(ctx.exception.code, 1)

    def test_defaults(self):
        env = {"STRIPE_SECRET_KEY": "sk_test_x", "MONGODB_URI": "mongodb://db:27017"}
        with patch.dict(os.environ, env, clear=True):
            settings = config.load_settings()
        self.assertEqual(settings.port, 4000)
        self.assertEqual(settings.database_name, "loanlink")
        self.assertEqual(settings.application_fee_cents, 1000)
        self.assertEqual(settings.public_app_origin, "http://localhost:5173")
        self.assertFalse(settings.firebase_enabled)

    def test_bad_firebase_key_exits(self):
        env = {
            "STRIPE_SECRET_KEY": "sk_test_x",
            "MONGODB_URI": "mongodb://db:27017",
            "FIREBASE_SERVICE_ACCOUNT_KEY": "not base64!",
        }
        with patch.dict(os.environ, env, clear=True):
            with self.assertRaises(SystemExit):
                config.load_settings()

    def test_firebase_key_enables_identity(self):
        key = encode_service_account(json.dumps({"type": "service_account", "project_id": "p"}).encode())
        env = {"STRIPE_SECRET_KEY": "sk_test_x", "MONGODB_URI": "mongodb://db", "FIREBASE_SERVICE_ACCOUNT_KEY": key}
        with patch.dict(os.environ, env, clear=True):
            settings = config.load_settings()
        self.assertTrue(settings.firebase_enabled)


class TestCredentials(unittest.TestCase):
    def test_round_trip(self):
        raw = json.dumps({"type": "service_account", "client_email": "svc@p.iam"}).encode()
        self.assertEqual(decode_service_account(encode_service_account(raw))["client_email"], "svc@p.iam")

    def test_rejects_non_object(self):
        with self.assertRaises(ValueError):
            decode_service_account(base64.b64encode(b"[1, 2]").decode())


class TestServiceEndpoints(unittest.TestCase):
    def setUp(self):
        self.client = TestClient(app)

    def test_liveness_text(self):
        response = self.client.get("/")
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.text)
        self.assertTrue(response.headers["content-type"].startswith("text/plain"))

    def test_request_id_header(self):
        response = self.client.get("/health")
        self.assertEqual(response.json(), {"status": "ok"})
        self.assertTrue(response.headers.get("X-Request-ID"))

    def test_unknown_route_envelope(self):
        response = self.client.get("/nope")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"error": "Not Found"})


if __name__ == "__main__":
    unittest.main()
