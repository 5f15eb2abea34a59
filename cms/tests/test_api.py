"""Tests for the CMS admin API."""

from rest_framework import status

from core.tests.base import LanternAPITestCase
from core.tests.factories import UserFactory
from cms.models import Block, Site
from cms.tests.factories import BlockFactory, SiteFactory


class PermissionTests(LanternAPITestCase):
    """Every CMS endpoint is staff only."""

    def test_anonymous_is_rejected(self):
        for url in ["/api/v1/cms/site/", "/api/v1/cms/blocks/", "/api/v1/cms/blocks/types/"]:
            response = self.client.get(url)
            self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN, url)

    def test_non_staff_is_rejected(self):
        self.authenticate(UserFactory())
        response = self.client.post(
            "/api/v1/cms/blocks/", {"type": "hero", "data": {"heading": "x"}}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(Block.objects.exists())


class SiteAPITests(LanternAPITestCase):
    """Tests for /api/v1/cms/site/"""

    def setUp(self):
        super().setUp()
        self.authenticate()

    def test_get_creates_site(self):
        response = self.client.get("/api/v1/cms/site/")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["id"], 1)
        self.assertEqual(response.data["title"], Site.DEFAULT_TITLE)
        self.assertTrue(self.content_file("sites/1.md").exists())

    def test_patch_updates_fields(self):
        SiteFactory()
        response = self.client.patch(
            "/api/v1/cms/site/", {"subtitle": "Now with blocks"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        site = Site.current()
        self.assertEqual(site.subtitle, "Now with blocks")
        self.assertEqual(site.title, "Lantern test site")
        self.assertIn("Now with blocks", self.content_file("sites/1.md").read_text())

    def test_put_replaces_site(self):
        SiteFactory()
        response = self.client.put(
            "/api/v1/cms/site/",
            {
                "title": "Replaced",
                "subtitle": "",
                "background_mode": "slideshow",
                "background_media": ["a.jpg", "b.jpg"],
                "slideshow_duration": 8,
            },
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["background_media"], ["a.jpg", "b.jpg"])
        self.assertEqual(Site.current().slideshow_duration, 8)

    def test_slideshow_needs_two_images(self):
        SiteFactory()
        response = self.client.patch(
            "/api/v1/cms/site/",
            {"background_mode": "slideshow", "background_media": ["one.jpg"]},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"]["code"], "INVALID_REQUEST")
        self.assertIn("background_media", response.data["error"]["details"])
        self.assertEqual(Site.current().background_mode, Site.BACKGROUND_STATIC)

    def test_id_is_read_only(self):
        SiteFactory()
        response = self.client.patch("/api/v1/cms/site/", {"id": 7}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(Site.objects.get().pk, 1)


class BlockListCreateTests(LanternAPITestCase):
    """Tests for /api/v1/cms/blocks/"""

    def setUp(self):
        super().setUp()
        self.authenticate()

    def test_list_in_display_order(self):
        last = BlockFactory(sort=5)
        first = BlockFactory(sort=1)
        hidden = BlockFactory(sort=3, hidden=True)

        response = self.client.get("/api/v1/cms/blocks/")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([b["id"] for b in response.data], [first.pk, hidden.pk, last.pk])
        self.assertEqual(response.data[0]["handler_label"], "Hero")

    def test_filters(self):
        visible = BlockFactory()
        BlockFactory(hidden=True)
        text = BlockFactory(text=True)

        response = self.client.get("/api/v1/cms/blocks/?visible=true&type=hero")
        self.assertEqual([b["id"] for b in response.data], [visible.pk])

        response = self.client.get("/api/v1/cms/blocks/?type=text")
        self.assertEqual([b["id"] for b in response.data], [text.pk])

        response = self.client.get("/api/v1/cms/blocks/?visible=false")
        self.assertEqual(len(response.data), 1)
        self.assertFalse(response.data[0]["is_visible"])

    def test_create_fills_defaults_and_appends(self):
        BlockFactory(sort=4)
        response = self.client.post(
            "/api/v1/cms/blocks/",
            {"type": "hero", "data": {"heading": "Welcome"}},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["sort"], 5)
        self.assertEqual(response.data["data"]["heading"], "Welcome")
        self.assertEqual(response.data["data"]["alignment"], "center")
        block = Block.objects.get(pk=response.data["id"])
        self.assertTrue(self.content_file(block.flatfile_path).exists())

    def test_create_drops_unknown_payload_keys(self):
        response = self.client.post(
            "/api/v1/cms/blocks/",
            {"type": "text", "data": {"body": "Hi", "colour": "red"}},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertNotIn("colour", response.data["data"])

    def test_unknown_type(self):
        response = self.client.post(
            "/api/v1/cms/blocks/", {"type": "retired-widget", "data": {}}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("type", response.data["error"]["details"])

    def test_malformed_type(self):
        response = self.client.post(
            "/api/v1/cms/blocks/", {"type": "Not A Type", "data": {}}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("type", response.data["error"]["details"])

    def test_invalid_data(self):
        response = self.client.post(
            "/api/v1/cms/blocks/",
            {"type": "hero", "data": {"alignment": "diagonal"}},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        errors = response.data["error"]["details"]["data"]
        self.assertIn("heading", errors)
        self.assertIn("alignment", errors)
        self.assertFalse(Block.objects.exists())

    def test_data_must_be_object(self):
        response = self.client.post(
            "/api/v1/cms/blocks/", {"type": "hero", "data": ["heading"]}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("data", response.data["error"]["details"])


class BlockDetailTests(LanternAPITestCase):
    """Tests for /api/v1/cms/blocks/<id>/"""

    def setUp(self):
        super().setUp()
        self.authenticate()
        self.block = BlockFactory(data={"heading": "Original", "alignment": "left"})

    def url(self, block_id=None):
        return f"/api/v1/cms/blocks/{block_id or self.block.pk}/"

    def test_get(self):
        response = self.client.get(self.url())

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["type"], "hero")
        self.assertFalse(response.data["is_orphaned"])

    def test_missing(self):
        response = self.client.get(self.url(9999))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["error"]["code"], "BLOCK_NOT_FOUND")

    def test_patch_merges_data(self):
        response = self.client.patch(
            self.url(), {"data": {"subheading": "Added"}}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.block.refresh_from_db()
        self.assertEqual(self.block.data["heading"], "Original")
        self.assertEqual(self.block.data["alignment"], "left")
        self.assertEqual(self.block.data["subheading"], "Added")

    def test_patch_visibility_keeps_data(self):
        response = self.client.patch(self.url(), {"is_visible": False}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.block.refresh_from_db()
        self.assertFalse(self.block.is_visible)
        self.assertEqual(self.block.data, {"heading": "Original", "alignment": "left"})

    def test_type_cannot_change(self):
        response = self.client.patch(self.url(), {"type": "text"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("type", response.data["error"]["details"])
        self.block.refresh_from_db()
        self.assertEqual(self.block.type, "hero")

    def test_orphaned_data_is_read_only(self):
        orphan = BlockFactory(orphaned=True)

        response = self.client.patch(
            self.url(orphan.pk), {"data": {"legacy": "new"}}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        response = self.client.patch(self.url(orphan.pk), {"is_visible": False}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        orphan.refresh_from_db()
        self.assertEqual(orphan.data, {"legacy": "value"})

    def test_delete_removes_file(self):
        path = self.content_file(self.block.flatfile_path)
        self.assertTrue(path.exists())

        response = self.client.delete(self.url())

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Block.objects.exists())
        self.assertFalse(path.exists())

    def test_delete_missing(self):
        response = self.client.delete(self.url(9999))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class BlockReorderTests(LanternAPITestCase):
    """Tests for POST /api/v1/cms/blocks/reorder/"""

    def setUp(self):
        super().setUp()
        self.authenticate()
        self.a, self.b, self.c = BlockFactory.create_batch(3)

    def test_reorder(self):
        response = self.client.post(
            "/api/v1/cms/blocks/reorder/", {"order": [self.c.pk, self.a.pk]}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            [b["id"] for b in response.data], [self.c.pk, self.a.pk, self.b.pk]
        )
        self.assertEqual(
            list(Block.objects.values_list("pk", flat=True)),
            [self.c.pk, self.a.pk, self.b.pk],
        )

    def test_unknown_ids(self):
        response = self.client.post(
            "/api/v1/cms/blocks/reorder/", {"order": [self.a.pk, 9999]}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("order", response.data["error"]["details"])
        self.assertEqual(
            list(Block.objects.values_list("pk", flat=True)),
            [self.a.pk, self.b.pk, self.c.pk],
        )

    def test_empty_order(self):
        response = self.client.post("/api/v1/cms/blocks/reorder/", {"order": []}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class BlockTypeAndRenderTests(LanternAPITestCase):
    def setUp(self):
        super().setUp()
        self.authenticate()

    def test_types(self):
        response = self.client.get("/api/v1/cms/blocks/types/")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        keys = [t["key"] for t in response.data]
        self.assertEqual(keys, ["call-to-action", "features", "gallery", "hero", "text"])
        hero = response.data[keys.index("hero")]
        heading = next(f for f in hero["fields"] if f["name"] == "heading")
        self.assertTrue(heading["required"])

    def test_orphaned_list(self):
        BlockFactory()
        orphan = BlockFactory(orphaned=True)

        response = self.client.get("/api/v1/cms/blocks/orphaned/")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([b["id"] for b in response.data], [orphan.pk])
        self.assertTrue(response.data[0]["is_orphaned"])
        self.assertIsNone(response.data[0]["handler_label"])

    def test_render(self):
        block = BlockFactory(data={"heading": "Rendered heading"}, hidden=True)

        response = self.client.post(f"/api/v1/cms/blocks/{block.pk}/render/")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["type"], "hero")
        self.assertIn("Rendered heading", response.data["html"])

    def test_render_orphaned(self):
        orphan = BlockFactory(orphaned=True)

        response = self.client.post(f"/api/v1/cms/blocks/{orphan.pk}/render/")

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["error"]["code"], "BLOCK_ORPHANED")

    def test_render_missing(self):
        response = self.client.post("/api/v1/cms/blocks/9999/render/")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
