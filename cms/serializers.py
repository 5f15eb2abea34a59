"""Serializers for CMS app."""

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers

from .blocks import registry
from .models import Block, Site


def _django_errors(error: DjangoValidationError):
    if hasattr(error, "error_dict"):
        return error.message_dict
    return error.messages


class SiteSerializer(serializers.ModelSerializer):
    """Serializer for the singleton site."""

    background_media = serializers.ListField(
        child=serializers.CharField(max_length=500),
        required=False,
    )

    class Meta:
        model = Site
        fields = [
            'id',
            'title',
            'subtitle',
            'logo',
            'background_mode',
            'background_media',
            'slideshow_duration',
            'custom_css',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate(self, attrs):
        instance = self.instance
        mode = attrs.get('background_mode', getattr(instance, 'background_mode', Site.BACKGROUND_STATIC))
        media = attrs.get('background_media', getattr(instance, 'background_media', []))
        error = Site.background_error(mode, media)
        if error:
            raise serializers.ValidationError({'background_media': error})
        return attrs


class BlockSerializer(serializers.ModelSerializer):
    """
    Serializer for blocks.

    `data` is validated by the block's handler. On partial updates the
    given keys are merged into the stored payload before validation.
    """

    handler_label = serializers.SerializerMethodField()
    is_orphaned = serializers.BooleanField(read_only=True)
    sort = serializers.IntegerField(required=False, allow_null=True)
    data = serializers.JSONField(required=False)

    class Meta:
        model = Block
        fields = [
            'id',
            'type',
            'handler_label',
            'is_orphaned',
            'data',
            'sort',
            'is_visible',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def get_handler_label(self, obj) -> str | None:
        handler = obj.handler
        return handler.get_label() if handler else None

    def validate_type(self, value):
        if self.instance is not None:
            if value != self.instance.type:
                raise serializers.ValidationError("Block type cannot be changed.")
            return value
        if registry.get(value) is None:
            raise serializers.ValidationError(f"Unknown block type {value!r}.")
        return value

    def validate(self, attrs):
        instance = self.instance
        if instance is not None and 'data' not in attrs:
            return attrs

        type_key = attrs.get('type', getattr(instance, 'type', None))
        handler = registry.get(type_key)
        if handler is None:
            raise serializers.ValidationError(
                {'data': f"Block type {type_key!r} is not registered; its data cannot be edited."}
            )

        data = attrs.get('data', {})
        if not isinstance(data, dict):
            raise serializers.ValidationError({'data': "Block data must be an object."})
        if instance is not None and self.partial:
            data = {**(instance.data or {}), **data}

        try:
            attrs['data'] = handler.clean(data)
        except DjangoValidationError as e:
            raise serializers.ValidationError({'data': _django_errors(e)})
        return attrs


class BlockReorderSerializer(serializers.Serializer):
    order = serializers.ListField(
        child=serializers.IntegerField(min_value=1),
        allow_empty=False,
    )

    def validate_order(self, value):
        existing = set(Block.objects.filter(pk__in=value).values_list('pk', flat=True))
        unknown = [pk for pk in value if pk not in existing]
        if unknown:
            raise serializers.ValidationError(
                f"Unknown block id(s): {', '.join(map(str, unknown))}"
            )
        return value


class BlockTypeSerializer(serializers.Serializer):
    """Schema description of a registered block type (read only)."""

    key = serializers.CharField()
    label = serializers.CharField()
    description = serializers.CharField()
    template = serializers.CharField()
    fields = serializers.ListField(child=serializers.DictField())


class BlockRenderSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    type = serializers.CharField()
    html = serializers.CharField()
