from __future__ import annotations

import os
import unittest
from decimal import Decimal
from unittest.mock import patch

from orient import create_app
from orient.extensions import db
from orient.models import ContactClick, Product, ProductView, User, Vendor
from orient.services.analytics_service import get_vendor_analytics
from orient.utils.jwt_utils import create_token


class VendorAnalyticsTestCase(unittest.TestCase):
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
            owner = User(email="owner@orient.dev", role="vendor")
            owner.set_password("password123")
            empty_owner = User(email="empty@orient.dev", role="vendor")
            empty_owner.set_password("password123")
            stranger = User(email="stranger@orient.dev", role="customer")
            stranger.set_password("password123")
            admin = User(email="admin@orient.dev", role="admin")
            admin.set_password("password123")
            db.session.add_all([owner, empty_owner, stranger, admin])
            db.session.flush()

            vendor = Vendor(user_id=owner.id, store_name="Green Acres", status="approved")
            empty_vendor = Vendor(user_id=empty_owner.id, store_name="Empty Shelf", status="approved")
            db.session.add_all([vendor, empty_vendor])
            db.session.flush()

            tomatoes = Product(vendor_id=vendor.id, name="Tomatoes", price=Decimal("4.50"))
            okra = Product(vendor_id=vendor.id, name="Okra", price=Decimal("2.00"))
            db.session.add_all([tomatoes, okra])
            db.session.commit()

            cls.vendor_id = vendor.id
            cls.empty_vendor_id = empty_vendor.id
            cls.tomatoes_id = tomatoes.id
            cls.okra_id = okra.id
            cls.owner_token = create_token(owner.id)
            cls.stranger_token = create_token(stranger.id)
            cls.admin_token = create_token(admin.id)
        cls.client = cls.app.test_client()

    @classmethod
    def tearDownClass(cls):
        cls._env.stop()

    def tearDown(self):
        with self.app.app_context():
            ProductView.query.delete()
            ContactClick.query.delete()
            db.session.commit()

    def _view(self, product_id: str, **kwargs):
        return self.client.post("/api/analytics/product-view", json={"productId": product_id}, **kwargs)

    def _click(self, vendor_id: str, contact_type: str):
        return self.client.post(
            "/api/analytics/contact-click",
            json={"vendorId": vendor_id, "contactType": contact_type},
        )

    def test_counts_per_product_and_contact_type(self):
        for _ in range(3):
            self.assertEqual(self._view(self.tomatoes_id).status_code, 201)
        self.assertEqual(self._click(self.vendor_id, "phone").status_code, 201)
        self._click(self.vendor_id, "phone")
        self._click(self.vendor_id, "whatsapp")

        res = self.client.get(
            f"/api/analytics/vendor/{self.vendor_id}",
            headers={"Authorization": f"Bearer {self.owner_token}"},
        )
        self.assertEqual(res.status_code, 200)
        body = res.get_json()
        views = {row["productId"]: row for row in body["productViews"]}
        self.assertEqual(views[self.tomatoes_id]["viewCount"], 3)
        self.assertEqual(views[self.tomatoes_id]["productName"], "Tomatoes")
        self.assertEqual(views[self.okra_id]["viewCount"], 0)
        clicks = {row["contactType"]: row["clickCount"] for row in body["contactClicks"]}
        self.assertEqual(clicks, {"phone": 2, "whatsapp": 1})

    def test_vendor_with_zero_products(self):
        self._click(self.empty_vendor_id, "email")
        with self.app.app_context():
            result = get_vendor_analytics(self.empty_vendor_id)
        self.assertEqual(result["productViews"], [])
        self.assertEqual(result["contactClicks"], [{"contactType": "email", "clickCount": 1}])

    def test_viewer_context_is_recorded(self):
        self._view(
            self.okra_id,
            headers={"X-Forwarded-For": "203.0.113.9, 10.0.0.1", "User-Agent": "pytest-agent", "Authorization": f"Bearer {self.stranger_token}"},
        )
        with self.app.app_context():
            row = ProductView.query.filter_by(product_id=self.okra_id).one()
            self.assertEqual(row.ip_address, "203.0.113.9")
            self.assertEqual(row.user_agent, "pytest-agent")
            self.assertIsNotNone(row.user_id)

    def test_unknown_targets_are_not_found(self):
        self.assertEqual(self._view("missing").status_code, 404)
        self.assertEqual(self._click("missing", "phone").status_code, 404)

    def test_any_contact_channel_is_recorded(self):
        self.assertEqual(self._click(self.vendor_id, "sms").status_code, 201)
        self.assertEqual(self._click(self.vendor_id, "telegram").status_code, 201)
        self.assertEqual(self._click(self.vendor_id, "   ").status_code, 400)
        with self.app.app_context():
            result = get_vendor_analytics(self.vendor_id)
        self.assertEqual(
            result["contactClicks"],
            [{"contactType": "sms", "clickCount": 1}, {"contactType": "telegram", "clickCount": 1}],
        )

    def test_only_owner_or_admin_reads_analytics(self):
        url = f"/api/analytics/vendor/{self.vendor_id}"
        self.assertEqual(self.client.get(url).status_code, 401)
        self.assertEqual(self.client.get(url, headers={"Authorization": f"Bearer {self.stranger_token}"}).status_code, 403)
        self.assertEqual(self.client.get(url, headers={"Authorization": f"Bearer {self.admin_token}"}).status_code, 200)
        res = self.client.get("/api/analytics/vendor/missing", headers={"Authorization": f"Bearer {self.admin_token}"})
        self.assertEqual(res.status_code, 404)


if __name__ == "__main__":
    unittest.main()
