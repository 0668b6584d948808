from rest_framework import serializers

from catalog.models import Website
from core.enums import PaymentMethod
from core.schemas import SaleCreateData
from core.serializers import BaseModelSerializer, StoredFileSerializer, UserSummarySerializer

from .models import Sale


class SaleWebsiteSerializer(serializers.ModelSerializer):
    main_image = StoredFileSerializer(read_only=True, allow_null=True)

    class Meta:
        model = Website
        fields = ["id", "name", "slug", "status", "main_image"]


class SaleSerializer(BaseModelSerializer):
    """Sale as returned to clients, with website, buyer and seller joined."""

    website = SaleWebsiteSerializer(read_only=True)
    buyer = UserSummarySerializer(read_only=True)
    seller = UserSummarySerializer(read_only=True)

    class Meta(BaseModelSerializer.Meta):
        model = Sale
        fields = [
            "id",
            "sale_id",
            "website",
            "buyer",
            "seller",
            "amount",
            "discount_amount",
            "final_amount",
            "payment_method",
            "status",
            "transaction_id",
            "notes",
            "paid_at",
            "completed_at",
            "cancelled_at",
            "refund_amount",
            "refund_reason",
            "refunded_at",
            "delivery_method",
            "delivery_details",
            "is_delivered",
            "delivered_at",
            "buyer_confirmed",
            "seller_confirmed",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class SaleCreateSerializer(serializers.Serializer):
    website_id = serializers.IntegerField(min_value=1)
    seller_id = serializers.IntegerField(min_value=1)
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    discount_amount = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=0,
        required=False,
        allow_null=True,
    )
    payment_method = serializers.ChoiceField(choices=PaymentMethod.values())
    notes = serializers.CharField(required=False, allow_blank=True)
    delivery_method = serializers.CharField(required=False, allow_blank=True, max_length=100)
    delivery_details = serializers.CharField(required=False, allow_blank=True)

    def to_data(self) -> SaleCreateData:
        return SaleCreateData.from_mapping(self.validated_data)


class SaleCompleteSerializer(serializers.Serializer):
    transaction_id = serializers.CharField(required=False, allow_blank=True, max_length=100)


class ConfirmDeliverySerializer(serializers.Serializer):
    is_buyer = serializers.BooleanField()


class RefundSerializer(serializers.Serializer):
    refund_amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    refund_reason = serializers.CharField(required=False, allow_blank=True, default="")
