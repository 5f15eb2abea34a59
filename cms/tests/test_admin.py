"""Tests for the Django admin of Site and Block."""

from django.urls import reverse

from core.tests.base import LanternTestCase
from core.tests.factories import UserFactory
from cms.models import Block, Site
from cms.tests.factories import BlockFactory, SiteFactory


class AdminTestCase(LanternTestCase):
    def setUp(self):
        super().setUp()
        self.admin = self.create_admin()
        self.client.force_login(self.admin)


class SiteAdminTest(AdminTestCase):
    def test_changelist_creates_and_redirects_to_site(self):
        response = self.client.get(reverse("admin:cms_site_changelist"))

        self.assertRedirects(response, reverse("admin:cms_site_change", args=[1]))
        self.assertEqual(Site.objects.count(), 1)

    def test_changelist_requires_staff(self):
        self.client.force_login(UserFactory())
        response = self.client.get(reverse("admin:cms_site_changelist"))
        self.assertEqual(response.status_code, 302)
        self.assertIn(reverse("admin:login"), response["Location"])
        self.assertFalse(Site.objects.exists())

    def test_add_disabled_once_site_exists(self):
        SiteFactory()
        response = self.client.get(reverse("admin:cms_site_add"))
        self.assertEqual(response.status_code, 403)

    def test_delete_disabled(self):
        SiteFactory()
        response = self.client.get(reverse("admin:cms_site_delete", args=[1]))
        self.assertEqual(response.status_code, 403)

    def test_edit_site(self):
        SiteFactory()
        response = self.client.post(reverse("admin:cms_site_change", args=[1]), {
            "title": "Edited",
            "subtitle": "",
            "logo": "",
            "background_mode": "slideshow",
            "background_media": "a.jpg\nb.jpg\n",
            "slideshow_duration": "4",
            "custom_css": "",
        })

        self.assertEqual(response.status_code, 302)
        site = Site.current()
        self.assertEqual(site.title, "Edited")
        self.assertEqual(site.background_media, ["a.jpg", "b.jpg"])

    def test_slideshow_validation(self):
        SiteFactory()
        response = self.client.post(reverse("admin:cms_site_change", args=[1]), {
            "title": "Edited",
            "background_mode": "slideshow",
            "background_media": "only-one.jpg",
            "slideshow_duration": "4",
        })

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, "A slideshow needs at least two images.")


class BlockAdminAddTest(AdminTestCase):
    def setUp(self):
        super().setUp()
        self.add_url = reverse("admin:cms_block_add")

    def test_type_picker(self):
        response = self.client.get(self.add_url)

        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, "admin/cms/block/select_type.html")
        self.assertContains(response, "?type=call-to-action")
        self.assertContains(response, "Gallery")

    def test_unknown_type_shows_picker(self):
        response = self.client.get(self.add_url + "?type=retired-widget")

        self.assertTemplateUsed(response, "admin/cms/block/select_type.html")
        self.assertContains(response, "Unknown block type")

    def test_picker_requires_add_permission(self):
        self.client.force_login(UserFactory(staff=True))
        self.assertEqual(self.client.get(self.add_url).status_code, 403)

    def test_form_has_handler_fields(self):
        response = self.client.get(self.add_url + "?type=hero")

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'name="data__heading"')
        self.assertContains(response, 'name="data__alignment"')
        self.assertNotContains(response, 'name="data"')

    def test_create_block(self):
        response = self.client.post(self.add_url + "?type=hero", {
            "sort": "",
            "is_visible": "on",
            "data__heading": "From the admin",
            "data__subheading": "",
            "data__image": "",
            "data__button_label": "",
            "data__button_url": "",
            "data__alignment": "left",
            "_save": "Save",
        })

        self.assertEqual(response.status_code, 302)
        block = Block.objects.get()
        self.assertEqual(block.type, "hero")
        self.assertEqual(block.data["heading"], "From the admin")
        self.assertEqual(block.data["alignment"], "left")
        self.assertEqual(block.sort, 0)
        self.assertTrue(self.content_file(block.flatfile_path).exists())

    def test_posted_type_is_ignored(self):
        self.client.post(self.add_url + "?type=text", {
            "type": "hero",
            "is_visible": "on",
            "data__heading": "",
            "data__body": "Hello",
            "_save": "Save",
        })

        self.assertEqual(Block.objects.get().type, "text")

    def test_invalid_payload(self):
        response = self.client.post(self.add_url + "?type=call-to-action", {
            "is_visible": "on",
            "data__heading": "Join",
            "data__style": "primary",
            "_save": "Save",
        })

        self.assertEqual(response.status_code, 200)
        self.assertFalse(Block.objects.exists())
        self.assertContains(response, "This field is required.")

    def test_lines_field(self):
        self.client.post(self.add_url + "?type=features", {
            "is_visible": "on",
            "data__heading": "",
            "data__items": "Fast | Really fast\nCheap",
            "data__columns": "2",
            "_save": "Save",
        })

        block = Block.objects.get()
        self.assertEqual(block.data["items"][1], {"title": "Cheap", "text": ""})
        self.assertEqual(block.data["columns"], 2)


class BlockAdminChangeTest(AdminTestCase):
    def change_url(self, block):
        return reverse("admin:cms_block_change", args=[block.pk])

    def test_change_form_prefills_payload_and_locks_type(self):
        block = BlockFactory(type="text", data={"heading": "Intro", "body": "Existing body"})

        response = self.client.get(self.change_url(block))

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, "Existing body")
        self.assertNotContains(response, 'name="type"')

    def test_update_payload(self):
        block = BlockFactory(type="text", data={"heading": "", "body": "Old"})

        response = self.client.post(self.change_url(block), {
            "sort": "5",
            "is_visible": "on",
            "data__heading": "",
            "data__body": "New",
            "_save": "Save",
        })

        self.assertEqual(response.status_code, 302)
        block.refresh_from_db()
        self.assertEqual(block.data, {"heading": "", "body": "New"})
        self.assertEqual(block.sort, 5)
        self.assertEqual(block.type, "text")

    def test_orphaned_block_shows_warning_and_raw_payload(self):
        block = BlockFactory(orphaned=True)

        response = self.client.get(self.change_url(block))

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, "is not registered")
        self.assertContains(response, "legacy")
        self.assertNotContains(response, 'name="data__')

    def test_orphaned_block_keeps_payload_on_save(self):
        block = BlockFactory(orphaned=True)

        self.client.post(self.change_url(block), {"sort": "3", "_save": "Save"})

        block.refresh_from_db()
        self.assertEqual(block.data, {"legacy": "value"})
        self.assertFalse(block.is_visible)
        self.assertEqual(block.sort, 3)


class BlockAdminChangelistTest(AdminTestCase):
    def setUp(self):
        super().setUp()
        self.changelist_url = reverse("admin:cms_block_changelist")

    def test_list(self):
        BlockFactory(data={"heading": "x"})
        BlockFactory(orphaned=True)

        response = self.client.get(self.changelist_url)

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, "retired-widget")

    def test_orphaned_filter(self):
        BlockFactory()
        orphan = BlockFactory(orphaned=True)

        response = self.client.get(self.changelist_url + "?orphaned=yes")

        self.assertEqual(list(response.context["cl"].queryset), [orphan])

    def test_hide_and_show_actions(self):
        blocks = BlockFactory.create_batch(2)
        selected = [str(block.pk) for block in blocks]

        response = self.client.post(self.changelist_url, {
            "action": "make_hidden",
            "_selected_action": selected,
        })
        self.assertEqual(response.status_code, 302)
        self.assertFalse(Block.objects.visible().exists())

        self.client.post(self.changelist_url, {
            "action": "make_visible",
            "_selected_action": selected,
        })
        self.assertEqual(Block.objects.visible().count(), 2)
