"""Tests for settings validation in CoreConfig.ready()."""

import tempfile

from django.apps import apps
from django.core.exceptions import ImproperlyConfigured
from django.test import SimpleTestCase, override_settings


class CoreConfigReadyTest(SimpleTestCase):
    def run_ready(self):
        apps.get_app_config("core").ready()

    def test_valid_settings(self):
        with tempfile.TemporaryDirectory() as root:
            with override_settings(
                LANTERN_CONTENT_ROOT=root,
                LANTERN_CACHE_TIMEOUT=0,
                LANTERN_BLOCK_PACKAGES=["cms.blocks.types"],
            ):
                self.run_ready()

    def test_content_root_must_be_set(self):
        with override_settings(LANTERN_CONTENT_ROOT=""):
            with self.assertRaises(ImproperlyConfigured):
                self.run_ready()

    def test_content_root_cannot_be_a_file(self):
        with tempfile.NamedTemporaryFile() as handle:
            with override_settings(LANTERN_CONTENT_ROOT=handle.name):
                with self.assertRaisesMessage(ImproperlyConfigured, "must be a directory"):
                    self.run_ready()

    def test_cache_timeout_must_not_be_negative(self):
        with override_settings(LANTERN_CACHE_TIMEOUT=-1):
            with self.assertRaisesMessage(ImproperlyConfigured, "LANTERN_CACHE_TIMEOUT"):
                self.run_ready()

    def test_cache_timeout_must_be_an_integer(self):
        with override_settings(LANTERN_CACHE_TIMEOUT="3600"):
            with self.assertRaises(ImproperlyConfigured):
                self.run_ready()

    def test_block_packages_must_be_a_list(self):
        with override_settings(LANTERN_BLOCK_PACKAGES="cms.blocks.types"):
            with self.assertRaisesMessage(ImproperlyConfigured, "LANTERN_BLOCK_PACKAGES"):
                self.run_ready()

    def test_block_packages_must_hold_strings(self):
        with override_settings(LANTERN_BLOCK_PACKAGES=["cms.blocks.types", 3]):
            with self.assertRaises(ImproperlyConfigured):
                self.run_ready()
