from __future__ import annotations

import os
import unittest
from unittest.mock import patch

from flask import Flask

from orient.utils.observability import init_sentry, scrub_event


class SentryOptionalInitTestCase(unittest.TestCase):
    def test_sentry_init_is_noop_without_dsn(self):
        app = Flask(__name__)
        with patch.dict(os.environ, {"SENTRY_DSN": ""}, clear=False):
            init_sentry(app)

    def test_scrub_event_redacts_credentials(self):
        event = {
            "request": {
                "headers": {"Authorization": "Bearer abc", "Accept": "application/json"},
                "data": {"vendorName": "Joe", "password": "secret1"},
            }
        }
        out = scrub_event(event, None)
        self.assertEqual(out["request"]["headers"]["Authorization"], "[REDACTED]")
        self.assertEqual(out["request"]["headers"]["Accept"], "application/json")
        self.assertEqual(out["request"]["data"]["password"], "[REDACTED]")
        self.assertEqual(out["request"]["data"]["vendorName"], "Joe")


if __name__ == "__main__":
    unittest.main()
