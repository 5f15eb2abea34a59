"""
Block type registry.

Built by scanning every module of the packages named in
LANTERN_BLOCK_PACKAGES and keeping the classes that follow the block
conventions. Lookups fail closed: an unknown type tag resolves to None,
which the rest of the app treats as an orphaned block.
"""

import importlib
import inspect
import logging
import pkgutil
from types import ModuleType
from typing import Iterator

from django.conf import settings
from django.core.signals import setting_changed
from django.dispatch import receiver

from core.exceptions import RegistryError
from cms.validators import is_valid_block_type

from .base import BlockType

logger = logging.getLogger(__name__)


class BlockRegistry:
    """Maps type tags to BlockType handler instances."""

    def __init__(self, packages: list[str] | None = None):
        self._packages = list(packages) if packages is not None else None
        self._handlers: dict[str, BlockType] | None = None

    @property
    def packages(self) -> list[str]:
        if self._packages is not None:
            return list(self._packages)
        return list(getattr(settings, "LANTERN_BLOCK_PACKAGES", []))

    # =========================================================================
    # Discovery
    # =========================================================================

    def discover(self) -> dict[str, BlockType]:
        """
        Re-scan the block packages and rebuild the registry.

        A class is registered when it is named `*Block`, subclasses
        BlockType, is defined in the scanned module (not imported into it),
        is not abstract, and its type tag is valid. The first class to claim
        a tag wins.

        Raises:
            RegistryError: If a configured package cannot be imported.
        """
        importlib.invalidate_caches()
        handlers: dict[str, BlockType] = {}

        for package_name in self.packages:
            for module in self._iter_modules(package_name):
                for cls in self._candidates(module):
                    key = cls.get_key()
                    if not is_valid_block_type(key):
                        logger.warning(
                            f"Skipping {cls.__module__}.{cls.__name__}: invalid type tag {key!r}"
                        )
                        continue
                    if key in handlers:
                        existing = type(handlers[key])
                        logger.warning(
                            f"Skipping {cls.__module__}.{cls.__name__}: type tag {key!r} "
                            f"already registered by {existing.__module__}.{existing.__name__}"
                        )
                        continue
                    handlers[key] = cls()

        self._handlers = handlers
        logger.info(
            f"Registered {len(handlers)} block type(s): {', '.join(sorted(handlers)) or '-'}"
        )
        return dict(handlers)

    def _iter_modules(self, package_name: str) -> Iterator[ModuleType]:
        try:
            package = importlib.import_module(package_name)
        except ImportError as e:
            raise RegistryError(f"Cannot import block package {package_name!r}: {e}") from e

        if not hasattr(package, "__path__"):
            # A plain module is scanned as-is
            yield package
            return

        yield package
        for info in sorted(pkgutil.iter_modules(package.__path__), key=lambda i: i.name):
            if info.name.startswith("_") or info.ispkg:
                continue
            module_name = f"{package_name}.{info.name}"
            try:
                yield importlib.import_module(module_name)
            except Exception:
                # Its blocks stay unresolved and show up as orphaned
                logger.exception(f"Cannot import block module {module_name}")

    @staticmethod
    def _candidates(module: ModuleType) -> Iterator[type[BlockType]]:
        for name, obj in inspect.getmembers(module, inspect.isclass):
            if not name.endswith("Block"):
                continue
            if obj.__module__ != module.__name__:
                continue
            if not issubclass(obj, BlockType):
                logger.debug(f"Ignoring {module.__name__}.{name}: not a BlockType subclass")
                continue
            if obj.is_abstract():
                continue
            yield obj

    # =========================================================================
    # Lookup
    # =========================================================================

    @property
    def handlers(self) -> dict[str, BlockType]:
        if self._handlers is None:
            self.discover()
        return self._handlers

    def get(self, key) -> BlockType | None:
        """Handler for a type tag, or None for unknown tags."""
        if not isinstance(key, str):
            return None
        return self.handlers.get(key)

    def __contains__(self, key) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        return len(self.handlers)

    def keys(self) -> list[str]:
        return sorted(self.handlers)

    def all(self) -> list[BlockType]:
        """Handlers sorted by label."""
        return sorted(self.handlers.values(), key=lambda h: (h.get_label().lower(), h.get_key()))

    def choices(self) -> list[tuple[str, str]]:
        return [(handler.get_key(), handler.get_label()) for handler in self.all()]

    def reload(self) -> dict[str, BlockType]:
        return self.discover()

    def reset(self) -> None:
        """Forget discovered handlers; the next lookup re-scans."""
        self._handlers = None


registry = BlockRegistry()


@receiver(setting_changed)
def reset_registry(sender, setting, **kwargs):
    if setting == "LANTERN_BLOCK_PACKAGES":
        registry.reset()
