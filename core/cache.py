"""
Tag-aware helpers over Django's cache framework.

Django cache backends have no native tags. With tags enabled, each tag
owns a version counter stored in the cache and every entry key embeds the
current versions of its tags, so bumping a version orphans all entries
carrying that tag at once. With tags disabled, invalidation deletes the
entry key directly.
"""

import logging
import time
from typing import Any, Callable, Iterable

from django.conf import settings
from django.core.cache import cache as default_cache

logger = logging.getLogger(__name__)

_MISSING = object()


def _new_version() -> int:
    """Starting version for a tag; later than any version handed out before."""
    return time.time_ns()


class TaggedCache:
    """Remember/invalidate read views, optionally grouped by tags."""

    def __init__(
        self,
        prefix: str = "lantern",
        tags_enabled: bool | None = None,
        timeout: int | None = None,
        backend=None,
    ):
        self.prefix = prefix
        self._tags_enabled = tags_enabled
        self._timeout = timeout
        self.backend = backend or default_cache

    @property
    def tags_enabled(self) -> bool:
        if self._tags_enabled is not None:
            return self._tags_enabled
        return getattr(settings, "LANTERN_CACHE_TAGS", True)

    @property
    def timeout(self) -> int:
        if self._timeout is not None:
            return self._timeout
        return getattr(settings, "LANTERN_CACHE_TIMEOUT", 3600)

    def _tag_key(self, tag: str) -> str:
        return f"{self.prefix}:tag:{tag}"

    def _tag_version(self, tag: str) -> int:
        key = self._tag_key(tag)
        version = self.backend.get(key)
        if version is None:
            # add() so two first readers agree on the starting version
            version = _new_version()
            self.backend.add(key, version, None)
            version = self.backend.get(key, version)
        return version

    def make_key(self, key: str, tags: Iterable[str] = ()) -> str:
        tags = sorted(tags)
        if not (self.tags_enabled and tags):
            return f"{self.prefix}:{key}"
        versions = ",".join(f"{tag}={self._tag_version(tag)}" for tag in tags)
        return f"{self.prefix}:{key}[{versions}]"

    def get(self, key: str, tags: Iterable[str] = (), default: Any = None) -> Any:
        return self.backend.get(self.make_key(key, tags), default)

    def set(self, key: str, value: Any, tags: Iterable[str] = ()) -> None:
        self.backend.set(self.make_key(key, tags), value, self.timeout)

    def remember(self, key: str, producer: Callable[[], Any], tags: Iterable[str] = ()) -> Any:
        """
        Return the cached value for key, computing and storing it on a miss.

        A producer returning None is not cached, so absent records are
        looked up again on the next read.
        """
        tags = tuple(tags)
        full_key = self.make_key(key, tags)
        value = self.backend.get(full_key, _MISSING)
        if value is not _MISSING:
            return value

        value = producer()
        if value is not None:
            self.backend.set(full_key, value, self.timeout)
        return value

    def invalidate(self, key: str | None = None, tags: Iterable[str] = ()) -> None:
        """
        Clear a cached view.

        With tags enabled the given tags are bumped (clearing every entry
        that carries them); the untagged key is always deleted.
        """
        tags = tuple(tags)
        if self.tags_enabled:
            for tag in tags:
                tag_key = self._tag_key(tag)
                try:
                    self.backend.incr(tag_key)
                except ValueError:
                    # Unread or evicted: a fresh version beats any earlier one
                    self.backend.set(tag_key, _new_version(), None)
            if tags:
                logger.debug(f"Cache tags bumped: {', '.join(tags)}")
        if key is not None:
            self.backend.delete(self.make_key(key))
            logger.debug(f"Cache key cleared: {key}")
