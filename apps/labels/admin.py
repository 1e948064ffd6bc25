"""
Admin configuration for label printing models.

Print jobs are an audit record of what was printed at which price, so they
are read-only here.
"""

from django.contrib import admin

from .models import LabelCartItem, PrintJob, PrintJobLine


class PrintJobLineInline(admin.TabularInline):
    model = PrintJobLine
    extra = 0
    can_delete = False
    fields = [
        "position",
        "sku",
        "price_amount",
        "encoded_string",
        "checksum_digit",
        "checksum_method",
        "encoding_version",
    ]
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(PrintJob)
class PrintJobAdmin(admin.ModelAdmin):
    """Read-only admin interface for PrintJob."""

    list_display = ["id", "owner_id", "total_items", "created_at"]
    list_filter = ["created_at"]
    search_fields = ["lines__sku"]
    readonly_fields = ["id", "owner_id", "created_at", "total_items", "print_format"]
    fields = readonly_fields
    inlines = [PrintJobLineInline]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False


@admin.register(LabelCartItem)
class LabelCartItemAdmin(admin.ModelAdmin):
    """Admin interface for LabelCartItem."""

    list_display = ["user", "inventory", "added_at"]
    search_fields = ["user__username", "inventory__sku"]
    raw_id_fields = ["user", "inventory"]
