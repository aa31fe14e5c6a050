"""Product DRF serializers.

Validation and persistence run through the handler and its Pydantic DTOs;
these serializers only describe the request/response shapes for the
OpenAPI schema.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.products.models import (
    CODE_MAX_LENGTH,
    CODE_MIN_LENGTH,
    DESCRIPTION_MAX_LENGTH,
    NAME_MAX_LENGTH,
    NAME_MIN_LENGTH,
)


class ProductSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    code = serializers.CharField(min_length=CODE_MIN_LENGTH, max_length=CODE_MAX_LENGTH)
    name = serializers.CharField(min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)
    price = serializers.FloatField()
    description = serializers.CharField(
        max_length=DESCRIPTION_MAX_LENGTH, required=False, allow_blank=True
    )
    is_active = serializers.BooleanField(required=False, default=False)


class ProductPageSerializer(serializers.Serializer):
    results = ProductSerializer(many=True)
    page = serializers.IntegerField()
    page_size = serializers.IntegerField()
    count = serializers.IntegerField()
    num_pages = serializers.IntegerField()
    has_previous = serializers.BooleanField()
    has_next = serializers.BooleanField()


class ErrorSerializer(serializers.Serializer):
    detail = serializers.CharField(required=False)
    errors = serializers.DictField(
        child=serializers.ListField(child=serializers.CharField()), required=False
    )
