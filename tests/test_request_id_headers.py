from __future__ import annotations

import os
import unittest
import uuid
from unittest.mock import patch

from orient import create_app
from orient.extensions import db
from orient.utils.observability import get_request_id


class RequestIdHeadersTestCase(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls._env = patch.dict(
            os.environ,
            {"SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:", "DATABASE_URL": "sqlite:///:memory:"},
        )
        cls._env.start()
        cls.app = create_app()
        cls.app.config.update(TESTING=True)
        with cls.app.app_context():
            db.create_all()
        cls.client = cls.app.test_client()

    @classmethod
    def tearDownClass(cls):
        cls._env.stop()

    def test_generates_request_id_when_missing(self):
        res = self.client.get("/api/health")
        self.assertEqual(res.status_code, 200)
        rid = (res.headers.get("X-Request-ID") or "").strip()
        self.assertTrue(rid)
        uuid.UUID(rid)

    def test_echoes_request_id_when_provided(self):
        incoming = "rid-test-123"
        res = self.client.get("/api/health", headers={"X-Request-ID": incoming})
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.headers.get("X-Request-ID"), incoming)

    def test_error_payload_includes_trace_id(self):
        res = self.client.post("/api/listings", json={"itemName": "Missing everything else"})
        self.assertEqual(res.status_code, 400)
        body = res.get_json(force=True)
        self.assertIsInstance(body, dict)
        self.assertIn("trace_id", body)
        self.assertEqual((body.get("trace_id") or "").strip(), (res.headers.get("X-Request-ID") or "").strip())

    def test_not_found_payload_echoes_incoming_request_id(self):
        res = self.client.get("/api/listings/does-not-exist", headers={"X-Request-ID": "rid-missing-1"})
        self.assertEqual(res.status_code, 404)
        self.assertEqual((res.get_json() or {}).get("trace_id"), "rid-missing-1")

    def test_get_request_id_is_empty_outside_observed_request(self):
        with self.app.test_request_context("/api/health"):
            self.assertEqual(get_request_id(), "")

    def test_health_reports_db_and_storage(self):
        res = self.client.get("/api/health")
        body = res.get_json() or {}
        self.assertTrue(body.get("ok"))
        self.assertEqual(body.get("db"), "ok")
        self.assertEqual((body.get("storage") or {}).get("provider"), "mock")


if __name__ == "__main__":
    unittest.main()
