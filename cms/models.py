"""
Site content models.

Both models are FlatFileModels: every row is mirrored to
content/sites/<pk>.md or content/blocks/<pk>.md, and the table can be
rebuilt from those files with `manage.py rebuild_content_index`.
"""

from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models, transaction
from django.db.models import Max

from core.exceptions import FlatFileError, RegistryError
from core.flatfile import FlatFileModel

from .validators import BLOCK_TYPE_MAX_LENGTH, is_valid_block_type, validate_block_type


class Site(FlatFileModel):
    """
    Site-wide settings. Singleton: the only row has pk=1.

    Created on first admin access (Site.load()). The public page answers
    503 until it exists.
    """

    SINGLETON_PK = 1

    BACKGROUND_STATIC = 'static'
    BACKGROUND_SLIDESHOW = 'slideshow'
    BACKGROUND_VIDEO = 'video'
    BACKGROUND_CHOICES = [
        (BACKGROUND_STATIC, 'Static image'),
        (BACKGROUND_SLIDESHOW, 'Slideshow'),
        (BACKGROUND_VIDEO, 'Video'),
    ]

    DEFAULT_TITLE = 'My site'

    title = models.CharField(max_length=200, default=DEFAULT_TITLE)
    subtitle = models.CharField(max_length=300, blank=True)
    logo = models.CharField(
        max_length=500,
        blank=True,
        help_text="Path or URL of the logo image",
    )
    background_mode = models.CharField(
        max_length=20,
        choices=BACKGROUND_CHOICES,
        default=BACKGROUND_STATIC,
    )
    background_media = models.JSONField(
        default=list,
        blank=True,
        help_text="Image paths (static/slideshow) or video path (video)",
    )
    slideshow_duration = models.PositiveIntegerField(
        default=5,
        validators=[MinValueValidator(1), MaxValueValidator(3600)],
        help_text="Seconds per slide",
    )
    custom_css = models.TextField(blank=True)

    flatfile_directory = 'sites'

    class Meta:
        verbose_name = "Site"
        verbose_name_plural = "Site"

    def __str__(self):
        return self.title

    @classmethod
    def background_error(cls, mode: str, media) -> str | None:
        """Problem with a background mode/media combination, or None."""
        if not isinstance(media, list) or not all(isinstance(item, str) for item in media):
            return "Must be a list of paths."
        if mode == cls.BACKGROUND_SLIDESHOW and len(media) < 2:
            return "A slideshow needs at least two images."
        if mode == cls.BACKGROUND_VIDEO and not media:
            return "Video mode needs a video path."
        return None

    def clean(self):
        super().clean()
        error = self.background_error(self.background_mode, self.background_media)
        if error:
            raise ValidationError({'background_media': error})

    def save(self, *args, **kwargs):
        if self.pk is None:
            self.pk = self.SINGLETON_PK
        elif self.pk != self.SINGLETON_PK:
            raise ValidationError(f"Site is a singleton; pk must be {self.SINGLETON_PK}")
        super().save(*args, **kwargs)

    @classmethod
    def load(cls) -> "Site":
        """Return the site, creating it with defaults if missing."""
        site, _created = cls.objects.get_or_create(
            pk=cls.SINGLETON_PK,
            defaults={'title': cls.DEFAULT_TITLE},
        )
        return site

    @classmethod
    def current(cls) -> "Site | None":
        """Return the site, or None if it was never created."""
        return cls.objects.filter(pk=cls.SINGLETON_PK).first()

    @property
    def active_media(self) -> list[str]:
        """Background media relevant to the current mode."""
        media = list(self.background_media or [])
        if self.background_mode == self.BACKGROUND_SLIDESHOW:
            return media
        return media[:1]


class BlockQuerySet(models.QuerySet):
    def visible(self):
        return self.filter(is_visible=True)

    def registered(self):
        """Blocks whose type resolves to a handler."""
        from .blocks import registry
        return self.filter(type__in=registry.keys())

    def orphaned(self):
        """Blocks whose type no longer resolves to a handler."""
        from .blocks import registry
        return self.exclude(type__in=registry.keys())


class BlockManager(models.Manager.from_queryset(BlockQuerySet)):
    def next_sort(self) -> int:
        current = self.get_queryset().aggregate(max_sort=Max('sort'))['max_sort']
        return 0 if current is None else current + 1

    @transaction.atomic
    def reorder(self, ids) -> list["Block"]:
        """
        Assign sort positions 0..n-1 following `ids`.

        Blocks not listed keep their relative order after the listed ones.
        Each changed block is saved individually so its file and the
        cached views follow.

        Raises:
            ValueError: If an id does not exist.
        """
        ids = list(dict.fromkeys(int(pk) for pk in ids))
        blocks = {block.pk: block for block in self.get_queryset().order_by('sort', 'id')}

        unknown = [pk for pk in ids if pk not in blocks]
        if unknown:
            raise ValueError(f"Unknown block id(s): {', '.join(map(str, unknown))}")

        listed = set(ids)
        ordered = [blocks[pk] for pk in ids]
        ordered += [block for pk, block in blocks.items() if pk not in listed]

        for position, block in enumerate(ordered):
            if block.sort != position:
                block.sort = position
                block.save(update_fields=['sort', 'updated_at'])
        return ordered


class Block(FlatFileModel):
    """
    One content section of the home page.

    `type` selects the handler (see cms.blocks) that validates `data` and
    renders it. The type is fixed at creation; a block whose type no
    longer resolves is orphaned: kept, flagged, never rendered publicly.
    """

    type = models.CharField(
        max_length=BLOCK_TYPE_MAX_LENGTH,
        validators=[validate_block_type],
        db_index=True,
    )
    data = models.JSONField(default=dict, blank=True)
    sort = models.IntegerField(null=True, blank=True, db_index=True)
    is_visible = models.BooleanField(default=True)

    flatfile_directory = 'blocks'

    objects = BlockManager()

    class Meta:
        ordering = ['sort', 'id']
        verbose_name = "Block"
        verbose_name_plural = "Blocks"

    def __str__(self):
        handler = self.handler
        label = handler.get_label() if handler else self.type
        return f"{label} #{self.pk}" if self.pk else label

    @classmethod
    def from_db(cls, db, field_names, values):
        instance = super().from_db(db, field_names, values)
        instance._original_type = instance.__dict__.get('type')
        return instance

    @property
    def original_type(self) -> str | None:
        return getattr(self, '_original_type', None)

    def _check_type(self):
        if not is_valid_block_type(self.type):
            validate_block_type(self.type)
            raise ValidationError(
                {'type': f"Block type may be at most {BLOCK_TYPE_MAX_LENGTH} characters."}
            )
        if self.original_type is not None and self.type != self.original_type:
            raise ValidationError(
                {'type': f"Block type cannot change (was {self.original_type!r})."},
                code='immutable',
            )

    def clean(self):
        super().clean()
        self._check_type()
        if not isinstance(self.data, dict):
            raise ValidationError({'data': "Block data must be an object."})

    def validate_flatfile(self):
        """Reject payloads the block's handler could not render."""
        if not isinstance(self.data, dict):
            raise FlatFileError(f"Block {self.pk}: data must be a mapping, got {type(self.data).__name__}")
        handler = self.handler
        if handler is None:
            # Orphaned blocks are indexed as-is and never rendered
            return
        try:
            handler.clean(self.data)
        except ValidationError as e:
            raise FlatFileError(
                f"Block {self.pk}: invalid {self.type} data: {'; '.join(e.messages)}"
            ) from e

    def save(self, *args, **kwargs):
        self._check_type()
        if self.sort is None:
            self.sort = Block.objects.next_sort()
            update_fields = kwargs.get('update_fields')
            if update_fields is not None:
                kwargs['update_fields'] = {*update_fields, 'sort'}
        super().save(*args, **kwargs)
        self._original_type = self.type

    # =========================================================================
    # Handler
    # =========================================================================

    @property
    def handler(self):
        """The BlockType for this block's type, or None when orphaned."""
        from .blocks import registry
        return registry.get(self.type)

    @property
    def is_orphaned(self) -> bool:
        return self.handler is None

    def render(self, request=None):
        """
        Render this block with its handler's template.

        Raises:
            RegistryError: If the block is orphaned.
        """
        handler = self.handler
        if handler is None:
            raise RegistryError(f"No block type registered for {self.type!r}")
        return handler.render(self, request=request)
