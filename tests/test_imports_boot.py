from __future__ import annotations

import importlib
import unittest


class ImportsBootTestCase(unittest.TestCase):
    def test_import_create_app(self):
        module = importlib.import_module("orient")
        create_app = getattr(module, "create_app", None)
        self.assertTrue(callable(create_app))

    def test_import_main_app(self):
        module = importlib.import_module("main")
        app = getattr(module, "app", None)
        self.assertIsNotNone(app)

    def test_all_segments_registered(self):
        module = importlib.import_module("main")
        names = set(module.app.blueprints.keys())
        for expected in (
            "listings_bp",
            "crop_info_bp",
            "forum_bp",
            "uploads_bp",
            "auth_bp",
            "categories_bp",
            "vendors_bp",
            "products_bp",
            "analytics_bp",
        ):
            self.assertIn(expected, names)


if __name__ == "__main__":
    unittest.main()
