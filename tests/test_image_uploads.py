from __future__ import annotations

import os
import unittest
from unittest.mock import MagicMock, patch

import requests

from orient import create_app
from orient.errors import ValidationError
from orient.extensions import component
from orient.integrations.common import IntegrationMisconfiguredError, IntegrationRequestError
from orient.integrations.storage import build_storage_provider
from orient.integrations.storage.mock_provider import MockObjectStorageProvider
from orient.integrations.storage.sidecar_provider import SidecarObjectStorageProvider
from orient.services.uploads import split_object_path


class ImageUploadApiTestCase(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls._env = patch.dict(
            os.environ,
            {
                "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:",
                "DATABASE_URL": "sqlite:///:memory:",
                "OBJECT_STORAGE_PROVIDER": "mock",
                "PUBLIC_OBJECT_SEARCH_PATHS": "/orient-media/public",
            },
        )
        cls._env.start()
        cls.app = create_app()
        cls.app.config.update(TESTING=True)
        cls.client = cls.app.test_client()

    @classmethod
    def tearDownClass(cls):
        cls._env.stop()

    def test_upload_returns_presigned_and_proxied_urls(self):
        res = self.client.post("/api/upload-image")
        self.assertEqual(res.status_code, 200)
        body = res.get_json()
        self.assertEqual(body["bucketName"], "orient-media")
        self.assertTrue(body["objectName"].startswith("public/listings/"))
        self.assertTrue(body["objectName"].endswith(".jpg"))
        self.assertTrue(body["uploadUrl"].startswith("https://"))
        self.assertEqual(body["publicUrl"], f"/api/images/orient-media/{body['objectName']}")

    def test_uploads_use_distinct_object_names(self):
        first = self.client.post("/api/upload-image").get_json()
        second = self.client.post("/api/upload-image").get_json()
        self.assertNotEqual(first["objectName"], second["objectName"])

    def test_image_proxy_streams_stored_object(self):
        body = self.client.post("/api/upload-image").get_json()
        with self.app.app_context():
            storage = component("storage")
            storage.put_object(bucket_name=body["bucketName"], object_name=body["objectName"], data=b"\xff\xd8jpeg")
        res = self.client.get(body["publicUrl"])
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data, b"\xff\xd8jpeg")
        self.assertEqual(res.mimetype, "image/jpeg")
        self.assertEqual(res.headers.get("Cache-Control"), "public, max-age=31536000")

    def test_missing_image_is_not_found(self):
        res = self.client.get("/api/images/orient-media/public/listings/missing.jpg")
        self.assertEqual(res.status_code, 404)
        self.assertEqual((res.get_json() or {}).get("message"), "Image not found")

    def test_unreachable_sidecar_is_reported_as_upload_failure(self):
        sidecar = SidecarObjectStorageProvider("http://127.0.0.1:1106", ["/orient-media/public"])
        with patch.dict(self.app.extensions["orient"], {"storage": sidecar}), patch(
            "orient.integrations.storage.sidecar_provider.requests.post",
            side_effect=requests.ConnectionError("connection refused"),
        ):
            res = self.client.post("/api/upload-image")
            image = self.client.get("/api/images/orient-media/public/listings/x.jpg")
        self.assertEqual(res.status_code, 500)
        self.assertEqual((res.get_json() or {}).get("message"), "Failed to get upload URL")
        self.assertEqual(image.status_code, 500)
        self.assertEqual((image.get_json() or {}).get("message"), "Failed to read image")


class StorageProviderTestCase(unittest.TestCase):
    def test_split_object_path(self):
        self.assertEqual(split_object_path("/bucket/a/b.jpg"), ("bucket", "a/b.jpg"))
        self.assertEqual(split_object_path("bucket/a.jpg"), ("bucket", "a.jpg"))
        with self.assertRaises(ValidationError):
            split_object_path("/bucket")

    def test_factory_selects_provider(self):
        with patch.dict(os.environ, {"OBJECT_STORAGE_PROVIDER": "mock", "PUBLIC_OBJECT_SEARCH_PATHS": ""}):
            self.assertIsInstance(build_storage_provider(), MockObjectStorageProvider)
        with patch.dict(
            os.environ,
            {"OBJECT_STORAGE_PROVIDER": "sidecar", "PUBLIC_OBJECT_SEARCH_PATHS": "/b/public, /b/extra"},
        ):
            provider = build_storage_provider()
        self.assertIsInstance(provider, SidecarObjectStorageProvider)
        self.assertEqual(provider.public_search_paths(), ["/b/public", "/b/extra"])
        with patch.dict(os.environ, {"OBJECT_STORAGE_PROVIDER": "ftp"}):
            with self.assertRaises(IntegrationMisconfiguredError):
                build_storage_provider()

    def test_sidecar_signs_put_urls(self):
        provider = SidecarObjectStorageProvider("http://127.0.0.1:1106/", ["/b/public"])
        response = MagicMock(status_code=200, content=b"{}")
        response.json.return_value = {"signed_url": "https://storage.example/put?sig=1"}
        with patch("orient.integrations.storage.sidecar_provider.requests.post", return_value=response) as post:
            presigned = provider.presign_upload(bucket_name="b", object_name="public/listings/x.jpg", ttl_seconds=900)
        self.assertEqual(presigned.upload_url, "https://storage.example/put?sig=1")
        args, kwargs = post.call_args
        self.assertEqual(args[0], "http://127.0.0.1:1106/object-storage/signed-object-url")
        self.assertEqual(kwargs["json"]["method"], "PUT")
        self.assertEqual(kwargs["json"]["bucket_name"], "b")
        self.assertEqual(kwargs["json"]["object_name"], "public/listings/x.jpg")

    def test_sidecar_failure_raises(self):
        provider = SidecarObjectStorageProvider("http://127.0.0.1:1106", ["/b/public"])
        response = MagicMock(status_code=500, content=b"")
        with patch("orient.integrations.storage.sidecar_provider.requests.post", return_value=response):
            with self.assertRaises(IntegrationRequestError):
                provider.presign_upload(bucket_name="b", object_name="o.jpg", ttl_seconds=900)

    def test_sidecar_transport_errors_raise_integration_error(self):
        provider = SidecarObjectStorageProvider("http://127.0.0.1:1106", ["/b/public"])
        with patch(
            "orient.integrations.storage.sidecar_provider.requests.post",
            side_effect=requests.ConnectionError("connection refused"),
        ):
            with self.assertRaises(IntegrationRequestError) as ctx:
                provider.presign_upload(bucket_name="b", object_name="o.jpg", ttl_seconds=900)
        self.assertTrue(str(ctx.exception).startswith("STORAGE_SIGN_FAILED:"))

        sign = MagicMock(status_code=200, content=b"{}")
        sign.json.return_value = {"signed_url": "https://storage.example/get?sig=1"}
        with patch("orient.integrations.storage.sidecar_provider.requests.post", return_value=sign), patch(
            "orient.integrations.storage.sidecar_provider.requests.get",
            side_effect=requests.Timeout("read timed out"),
        ):
            with self.assertRaises(IntegrationRequestError) as ctx:
                provider.open_object(bucket_name="b", object_name="o.jpg")
        self.assertTrue(str(ctx.exception).startswith("STORAGE_READ_FAILED:"))

    def test_sidecar_missing_object_returns_none(self):
        provider = SidecarObjectStorageProvider("http://127.0.0.1:1106", ["/b/public"])
        sign = MagicMock(status_code=200, content=b"{}")
        sign.json.return_value = {"signed_url": "https://storage.example/get?sig=1"}
        missing = MagicMock(status_code=404)
        with patch("orient.integrations.storage.sidecar_provider.requests.post", return_value=sign), patch(
            "orient.integrations.storage.sidecar_provider.requests.get", return_value=missing
        ):
            self.assertIsNone(provider.open_object(bucket_name="b", object_name="o.jpg"))


if __name__ == "__main__":
    unittest.main()
