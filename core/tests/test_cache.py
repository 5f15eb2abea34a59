"""Tests for the tag-aware cache helpers."""

from django.core.cache import cache
from django.test import SimpleTestCase, override_settings

from core.cache import TaggedCache


class TaggedCacheTest(SimpleTestCase):
    def setUp(self):
        cache.clear()
        self.cache = TaggedCache(prefix="test", tags_enabled=True)
        self.calls = 0

    def tearDown(self):
        cache.clear()

    def producer(self):
        self.calls += 1
        return f"value {self.calls}"

    def test_remember_caches_value(self):
        self.assertEqual(self.cache.remember("k", self.producer, tags=["a"]), "value 1")
        self.assertEqual(self.cache.remember("k", self.producer, tags=["a"]), "value 1")
        self.assertEqual(self.calls, 1)

    def test_none_is_not_cached(self):
        self.cache.remember("k", lambda: None)
        self.assertEqual(self.cache.remember("k", self.producer), "value 1")

    def test_falsy_values_are_cached(self):
        self.cache.remember("k", lambda: [])
        self.assertEqual(self.cache.remember("k", self.producer), [])

    def test_invalidate_tag_clears_tagged_entries(self):
        self.cache.remember("one", self.producer, tags=["blocks"])
        self.cache.remember("two", self.producer, tags=["blocks", "site"])
        self.cache.remember("three", self.producer, tags=["site"])

        self.cache.invalidate(tags=["blocks"])

        self.assertIsNone(self.cache.get("one", tags=["blocks"]))
        self.assertIsNone(self.cache.get("two", tags=["blocks", "site"]))
        self.assertEqual(self.cache.get("three", tags=["site"]), "value 3")

    def test_invalidate_unread_tag(self):
        self.cache.invalidate(tags=["never-read"])
        self.assertEqual(self.cache.remember("k", self.producer, tags=["never-read"]), "value 1")

    def test_evicted_tag_does_not_revive_old_entries_on_read(self):
        self.cache.remember("k", self.producer, tags=["blocks"])
        self.cache.invalidate(tags=["blocks"])
        self.cache.remember("k", self.producer, tags=["blocks"])
        cache.delete(self.cache._tag_key("blocks"))

        self.assertEqual(self.cache.remember("k", self.producer, tags=["blocks"]), "value 3")

    def test_evicted_tag_does_not_revive_old_entries_on_invalidate(self):
        self.cache.remember("k", self.producer, tags=["blocks"])
        self.cache.invalidate(tags=["blocks"])
        self.cache.remember("k", self.producer, tags=["blocks"])
        cache.delete(self.cache._tag_key("blocks"))

        self.cache.invalidate(tags=["blocks"])

        self.assertEqual(self.cache.remember("k", self.producer, tags=["blocks"]), "value 3")

    def test_invalidate_key(self):
        self.cache.set("plain", "x")
        self.cache.invalidate("plain")
        self.assertIsNone(self.cache.get("plain"))

    def test_tags_disabled_deletes_key(self):
        plain = TaggedCache(prefix="test", tags_enabled=False)
        plain.remember("k", self.producer, tags=["blocks"])
        self.assertEqual(plain.make_key("k", tags=["blocks"]), "test:k")

        plain.invalidate("k", tags=["blocks"])

        self.assertEqual(plain.remember("k", self.producer, tags=["blocks"]), "value 2")

    def test_tag_order_does_not_matter(self):
        self.assertEqual(
            self.cache.make_key("k", tags=["b", "a"]),
            self.cache.make_key("k", tags=["a", "b"]),
        )

    @override_settings(LANTERN_CACHE_TAGS=False, LANTERN_CACHE_TIMEOUT=60)
    def test_settings_defaults(self):
        from_settings = TaggedCache()
        self.assertFalse(from_settings.tags_enabled)
        self.assertEqual(from_settings.timeout, 60)
