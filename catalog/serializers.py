from rest_framework import serializers

from core.enums import SortOrder, WebsiteSortField, WebsiteStatus, WebsiteType
from core.schemas import WebsiteQuery
from core.serializers import BaseModelSerializer, StoredFileSerializer, UserSummarySerializer

from .models import Category, Website


class CategorySerializer(BaseModelSerializer):
    logo = StoredFileSerializer(read_only=True, allow_null=True)
    logo_file = serializers.FileField(write_only=True, required=False)

    class Meta(BaseModelSerializer.Meta):
        model = Category
        fields = ["id", "name", "slug", "logo", "logo_file", "created_at", "updated_at"]
        extra_kwargs = {
            **getattr(BaseModelSerializer.Meta, "extra_kwargs", {}),
            "slug": {"read_only": True},
            # uniqueness is checked by CategoryService
            "name": {"validators": []},
        }


class CategoryRefSerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ["id", "name", "slug"]


class WebsiteSerializer(BaseModelSerializer):
    """Website as returned to clients, with category and creator joined."""

    category = CategoryRefSerializer(read_only=True)
    created_by = UserSummarySerializer(read_only=True)
    final_price = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    main_image = StoredFileSerializer(read_only=True, allow_null=True)
    gallery = StoredFileSerializer(many=True, read_only=True)
    likes_count = serializers.SerializerMethodField()

    class Meta(BaseModelSerializer.Meta):
        model = Website
        fields = [
            "id",
            "name",
            "slug",
            "description",
            "demo_url",
            "source_code_url",
            "price",
            "original_price",
            "discount_percent",
            "final_price",
            "type",
            "status",
            "technologies",
            "features",
            "pages_count",
            "is_responsive",
            "has_admin_panel",
            "has_database",
            "hosting_info",
            "domain_info",
            "main_image",
            "gallery",
            "category",
            "created_by",
            "views_count",
            "likes_count",
            "sold_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_likes_count(self, obj) -> int:
        return len(obj.likes.all())


class _StringListField(serializers.ListField):
    """List of strings that also accepts a single comma separated value."""

    child = serializers.CharField(max_length=100)

    def to_internal_value(self, data):
        if isinstance(data, str):
            data = data.split(",")
        expanded = []
        for item in data:
            expanded.extend(item.split(",") if isinstance(item, str) else [item])
        values = super().to_internal_value([item for item in expanded if str(item).strip()])
        return [value.strip() for value in values]


class WebsiteWriteSerializer(BaseModelSerializer):
    """Validates create/update payloads (JSON or multipart)."""

    category_id = serializers.IntegerField()
    technologies = _StringListField(required=False)
    features = _StringListField(required=False)
    images = serializers.ListField(
        child=serializers.FileField(),
        write_only=True,
        required=False,
    )

    class Meta(BaseModelSerializer.Meta):
        model = Website
        fields = [
            "name",
            "description",
            "demo_url",
            "source_code_url",
            "price",
            "original_price",
            "discount_percent",
            "type",
            "status",
            "technologies",
            "features",
            "pages_count",
            "is_responsive",
            "has_admin_panel",
            "has_database",
            "hosting_info",
            "domain_info",
            "category_id",
            "images",
        ]
        extra_kwargs = {
            "status": {"required": False},
            "source_code_url": {"required": False, "allow_blank": True},
            "hosting_info": {"required": False, "allow_blank": True},
            "domain_info": {"required": False, "allow_blank": True},
        }

    def validate(self, attrs):
        price = attrs.get("price", getattr(self.instance, "price", None))
        original_price = attrs.get("original_price", getattr(self.instance, "original_price", None))
        if price is not None and original_price is not None and original_price < price:
            raise serializers.ValidationError(
                {"original_price": "Original price cannot be lower than the price."}
            )
        return attrs


class WebsiteImagesSerializer(serializers.Serializer):
    images = serializers.ListField(child=serializers.FileField(), allow_empty=False)


class WebsiteQuerySerializer(serializers.Serializer):
    """Query string accepted by the website listing and CSV export."""

    search = serializers.CharField(required=False, allow_blank=True)
    category_id = serializers.IntegerField(required=False, min_value=1)
    type = serializers.ChoiceField(choices=WebsiteType.values(), required=False)
    status = serializers.ChoiceField(choices=WebsiteStatus.values(), required=False)
    available = serializers.BooleanField(allow_null=True, default=None)
    created_by = serializers.IntegerField(required=False, min_value=1)
    min_price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False)
    max_price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False)
    is_responsive = serializers.BooleanField(allow_null=True, default=None)
    has_admin_panel = serializers.BooleanField(allow_null=True, default=None)
    has_database = serializers.BooleanField(allow_null=True, default=None)
    technologies = _StringListField(required=False)
    features = _StringListField(required=False)
    sort_by = serializers.ChoiceField(
        choices=WebsiteSortField.values(),
        default=WebsiteSortField.CREATED_AT.value,
    )
    sort_order = serializers.ChoiceField(choices=SortOrder.values(), default=SortOrder.DESC.value)
    limit = serializers.IntegerField(required=False, min_value=1)
    skip = serializers.IntegerField(required=False, min_value=0, default=0)

    def validate(self, attrs):
        min_price = attrs.get("min_price")
        max_price = attrs.get("max_price")
        if min_price is not None and max_price is not None and min_price > max_price:
            raise serializers.ValidationError({"min_price": "min_price cannot exceed max_price."})
        return attrs

    def to_query(self) -> WebsiteQuery:
        return WebsiteQuery.from_mapping(self.validated_data)


class LikeResponseSerializer(serializers.Serializer):
    liked = serializers.BooleanField()
    likes_count = serializers.IntegerField()
