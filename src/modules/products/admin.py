from django.contrib import admin

from modules.products.models import Product


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("id", "code", "name", "price", "is_active", "deleted_at")
    list_filter = ("is_active",)
    search_fields = ("code", "name")
    ordering = ("id",)
