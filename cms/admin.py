import json

from django.contrib import admin, messages
from django.contrib.admin.utils import unquote
from django.core.exceptions import PermissionDenied
from django.shortcuts import redirect
from django.template.response import TemplateResponse
from django.urls import reverse
from django.utils.html import format_html

from .blocks import registry
from .forms import BlockAdminForm, SiteAdminForm, block_form_for
from .models import Block, Site


@admin.register(Site)
class SiteAdmin(admin.ModelAdmin):
    """Admin for the singleton Site: the changelist goes straight to its form."""

    form = SiteAdminForm
    readonly_fields = ['created_at', 'updated_at']
    fieldsets = [
        (None, {'fields': ['title', 'subtitle', 'logo']}),
        ('Background', {'fields': ['background_mode', 'background_media', 'slideshow_duration']}),
        ('Styling', {'fields': ['custom_css'], 'classes': ['collapse']}),
        ('Timestamps', {'fields': ['created_at', 'updated_at'], 'classes': ['collapse']}),
    ]

    def changelist_view(self, request, extra_context=None):
        if not self.has_view_or_change_permission(request):
            raise PermissionDenied
        site = Site.load()
        return redirect(reverse('admin:cms_site_change', args=[site.pk]))

    def has_add_permission(self, request):
        return super().has_add_permission(request) and not Site.objects.exists()

    def has_delete_permission(self, request, obj=None):
        return False


class OrphanedListFilter(admin.SimpleListFilter):
    title = 'orphaned'
    parameter_name = 'orphaned'

    def lookups(self, request, model_admin):
        return [('yes', 'Orphaned'), ('no', 'Registered')]

    def queryset(self, request, queryset):
        if self.value() == 'yes':
            return queryset.orphaned()
        if self.value() == 'no':
            return queryset.registered()
        return queryset


@admin.register(Block)
class BlockAdmin(admin.ModelAdmin):
    """
    Admin for blocks.

    Adding starts with a type picker (?type=<key>); the form is then built
    from that handler's fields. The type is read-only afterwards.
    """

    form = BlockAdminForm
    select_type_template = 'admin/cms/block/select_type.html'

    list_display = ['label', 'type', 'sort', 'is_visible', 'is_registered', 'preview_link', 'updated_at']
    list_display_links = ['label']
    list_editable = ['sort', 'is_visible']
    list_filter = ['is_visible', OrphanedListFilter, 'type']
    search_fields = ['type']
    ordering = ['sort', 'id']
    actions = ['make_visible', 'make_hidden']

    @admin.display(description='Block')
    def label(self, obj):
        return str(obj)

    @admin.display(description='Registered', boolean=True)
    def is_registered(self, obj):
        return not obj.is_orphaned

    @admin.display(description='Preview')
    def preview_link(self, obj):
        if obj.is_orphaned:
            return '-'
        return format_html(
            '<a href="{}" target="_blank">View</a>',
            reverse('cms:block-preview', args=[obj.pk]),
        )

    @admin.display(description='Stored payload')
    def payload_preview(self, obj):
        return format_html(
            '<pre style="white-space: pre-wrap;">{}</pre>',
            json.dumps(obj.data, indent=2, sort_keys=True, ensure_ascii=False),
        )

    def _handler_for(self, request, obj=None):
        if obj is not None:
            return obj.handler
        return registry.get(request.GET.get('type') or request.POST.get('type'))

    def get_form(self, request, obj=None, change=False, **kwargs):
        kwargs['form'] = block_form_for(
            self._handler_for(request, obj),
            base=self.form,
            add=obj is None,
        )
        return super().get_form(request, obj, change=change, **kwargs)

    def get_fields(self, request, obj=None):
        fields = super().get_fields(request, obj)
        head = [name for name in ('type', 'payload_preview') if name in fields]
        return head + [name for name in fields if name not in head]

    def get_readonly_fields(self, request, obj=None):
        if obj is None:
            return ()
        if obj.is_orphaned:
            return ('type', 'payload_preview')
        return ('type',)

    def add_view(self, request, form_url='', extra_context=None):
        type_key = request.GET.get('type')
        if registry.get(type_key) is None:
            return self.select_type_view(request, invalid_type=type_key)
        return super().add_view(request, form_url, extra_context)

    def change_view(self, request, object_id, form_url='', extra_context=None):
        if request.method == 'GET':
            obj = self.get_object(request, unquote(object_id))
            if obj is not None and obj.is_orphaned:
                messages.warning(
                    request,
                    f"Block type {obj.type!r} is not registered. This block is not "
                    f"shown on the site; its payload is read-only.",
                )
        return super().change_view(request, object_id, form_url, extra_context)

    def select_type_view(self, request, invalid_type=None):
        if not self.has_add_permission(request):
            raise PermissionDenied
        if invalid_type:
            messages.error(request, f"Unknown block type {invalid_type!r}.")
        context = {
            **self.admin_site.each_context(request),
            'title': 'Choose a block type',
            'opts': self.model._meta,
            'block_types': [handler.describe() for handler in registry.all()],
            'add_url': reverse('admin:cms_block_add'),
        }
        return TemplateResponse(request, self.select_type_template, context)

    # =========================================================================
    # Actions
    # =========================================================================

    def _set_visibility(self, request, queryset, visible: bool):
        changed = 0
        # Saved one by one so each block's file follows
        for block in queryset:
            if block.is_visible != visible:
                block.is_visible = visible
                block.save(update_fields=['is_visible', 'updated_at'])
                changed += 1
        self.message_user(
            request,
            f"{changed} block(s) {'shown' if visible else 'hidden'}.",
            messages.SUCCESS,
        )

    @admin.action(description='Show selected blocks')
    def make_visible(self, request, queryset):
        self._set_visibility(request, queryset, True)

    @admin.action(description='Hide selected blocks')
    def make_hidden(self, request, queryset):
        self._set_visibility(request, queryset, False)
