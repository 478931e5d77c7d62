"""
Product Serializers

Serializes ProductRecords and driver listings for API responses.
"""

from rest_framework import serializers


class ProductSerializer(serializers.Serializer):
    """Serializer for one ProductRecord."""
    name = serializers.CharField()
    description = serializers.CharField(allow_blank=True)
    price = serializers.CharField(allow_blank=True)
    url = serializers.CharField(allow_blank=True)
    web_urls = serializers.ListField(child=serializers.CharField())
    image_urls = serializers.ListField(child=serializers.CharField())


class MetaSerializer(serializers.Serializer):
    """Serializer for response metadata."""
    total_results = serializers.IntegerField()
    search_time_ms = serializers.IntegerField()


class ProductsResponseSerializer(serializers.Serializer):
    """Serializer for the complete products response."""
    driver = serializers.CharField()
    products = ProductSerializer(many=True)
    meta = MetaSerializer()


class DriverSerializer(serializers.Serializer):
    """Serializer for a registered driver and its status."""
    id = serializers.CharField()
    name = serializers.CharField()
    description = serializers.CharField(allow_blank=True)
    enabled = serializers.BooleanField()
    configured = serializers.BooleanField()
    supported_options = serializers.ListField(child=serializers.CharField())
