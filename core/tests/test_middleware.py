"""Tests for the content sync middleware."""

from django.test import RequestFactory, override_settings

from core.frontmatter import dumps
from core.middleware import ContentSyncMiddleware
from core.tests.base import LanternTestCase
from cms.models import Block


class ContentSyncMiddlewareTest(LanternTestCase):
    def setUp(self):
        super().setUp()
        self.factory = RequestFactory()
        self.middleware = ContentSyncMiddleware(lambda request: "response")
        self.write_content_file(
            "blocks/4.md",
            dumps({"id": 4, "type": "hero", "data": {"heading": "From disk"}, "sort": 0}),
        )

    @override_settings(LANTERN_AUTO_SYNC=True)
    def test_hand_edited_files_are_indexed(self):
        response = self.middleware(self.factory.get("/"))

        self.assertEqual(response, "response")
        self.assertEqual(Block.objects.get(pk=4).data, {"heading": "From disk"})

    @override_settings(LANTERN_AUTO_SYNC=False)
    def test_disabled_by_setting(self):
        self.middleware(self.factory.get("/"))
        self.assertFalse(Block.objects.exists())
