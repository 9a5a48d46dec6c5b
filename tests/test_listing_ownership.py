from __future__ import annotations

import os
import unittest
from unittest.mock import patch

from orient import create_app
from orient.errors import ForbiddenError, NotFoundError, ValidationError
from orient.extensions import component, db
from orient.models import Listing
from orient.services.credential_hasher import CredentialHasher
from orient.services.listing_repository import ListingRepository
from orient.services.listing_service import ListingService, sanitize_for_client


def _payload(**overrides):
    payload = {
        "role": "vendor",
        "vendorName": "Joe",
        "itemName": "Yellow maize",
        "description": "Dry, 50kg bags",
        "price": "10.50",
        "cropType": "maize",
        "contactPhone": "0800000000",
        "contactEmail": "joe@example.com",
        "password": "secret1",
    }
    payload.update(overrides)
    return payload


class ListingOwnershipTestCase(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls._env = patch.dict(
            os.environ,
            {
                "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:",
                "DATABASE_URL": "sqlite:///:memory:",
                "LISTING_PASSWORD_HASH_METHOD": "pbkdf2:sha256:1000",
            },
        )
        cls._env.start()
        cls.app = create_app()
        cls.app.config.update(TESTING=True)
        with cls.app.app_context():
            db.create_all()

    @classmethod
    def tearDownClass(cls):
        cls._env.stop()

    def setUp(self):
        self.ctx = self.app.app_context()
        self.ctx.push()
        self.service = component("listing_service")

    def tearDown(self):
        db.session.rollback()
        Listing.query.delete()
        db.session.commit()
        self.ctx.pop()

    def test_factory_wires_one_service_per_app(self):
        self.assertIsInstance(self.service, ListingService)
        self.assertIsInstance(self.service.repository, ListingRepository)
        self.assertIs(component("listing_repository"), self.service.repository)

    def test_create_stores_hash_and_returns_sanitized(self):
        created = self.service.create(_payload())
        self.assertNotIn("password", created)
        self.assertNotIn("passwordHash", created)
        self.assertEqual(created["price"], "10.50")

        row = db.session.get(Listing, created["id"])
        self.assertNotEqual(row.password_hash, "secret1")
        self.assertTrue(self.service.hasher.verify("secret1", row.password_hash))

    def test_delete_requires_both_name_and_password(self):
        created = self.service.create(_payload())
        with self.assertRaises(ValidationError):
            self.service.delete_with_credentials(created["id"], "Joe", "")
        with self.assertRaises(ValidationError):
            self.service.delete_with_credentials(created["id"], None, "secret1")

    def test_single_field_mismatch_is_forbidden_with_same_message(self):
        created = self.service.create(_payload())
        messages = set()
        for name, password in (("Joe", "wrong1"), ("joe", "secret1"), ("Jim", "nope12")):
            with self.assertRaises(ForbiddenError) as ctx:
                self.service.delete_with_credentials(created["id"], name, password)
            messages.add(ctx.exception.message)
        self.assertEqual(messages, {"Invalid vendor name or password"})
        self.assertIsNotNone(db.session.get(Listing, created["id"]))

    def test_delete_then_delete_again_is_not_found(self):
        created = self.service.create(_payload())
        self.service.delete_with_credentials(created["id"], "Joe", "secret1")
        self.assertIsNone(db.session.get(Listing, created["id"]))
        with self.assertRaises(NotFoundError):
            self.service.delete_with_credentials(created["id"], "Joe", "secret1")

    def test_update_rehashes_new_password(self):
        created = self.service.create(_payload())
        updated = self.service.update(created["id"], {"password": "another1", "price": "12"})
        self.assertEqual(updated["price"], "12.00")
        self.assertNotIn("passwordHash", updated)
        with self.assertRaises(ForbiddenError):
            self.service.delete_with_credentials(created["id"], "Joe", "secret1")
        self.service.delete_with_credentials(created["id"], "Joe", "another1")

    def test_update_restamps_updated_at(self):
        created = self.service.create(_payload())
        before = db.session.get(Listing, created["id"]).updated_at
        self.service.update(created["id"], {"description": "Fresh stock"})
        after = db.session.get(Listing, created["id"]).updated_at
        self.assertGreaterEqual(after, before)

    def test_update_unknown_id_is_not_found(self):
        with self.assertRaises(NotFoundError):
            self.service.update("missing-id", {"price": "1"})

    def test_custom_repository_can_be_injected(self):
        service = ListingService(ListingRepository(session=db.session), CredentialHasher(method="pbkdf2:sha256:1000"))
        created = service.create(_payload(vendorName="Ann"))
        self.assertEqual(self.service.get(created["id"])["vendorName"], "Ann")


class SanitizeForClientTestCase(unittest.TestCase):
    def test_strips_credentials_from_dicts_and_lists(self):
        row = {"id": "1", "password": "x", "passwordHash": "y", "itemName": "Beans"}
        self.assertEqual(sanitize_for_client(row), {"id": "1", "itemName": "Beans"})
        self.assertEqual(sanitize_for_client([row, row]), [{"id": "1", "itemName": "Beans"}] * 2)
        self.assertIsNone(sanitize_for_client(None))


if __name__ == "__main__":
    unittest.main()
