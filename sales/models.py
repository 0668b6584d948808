import secrets
from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from core.enums import SALE_ID_PREFIX, PaymentMethod, SaleStatus
from core.models import TimeStampedModel

SALE_ID_DIGITS = 6
SALE_ID_ATTEMPTS = 20


def generate_sale_id() -> str:
    """Random ``SALE-XXXXXX`` identifier not yet used by any sale."""

    for _ in range(SALE_ID_ATTEMPTS):
        candidate = f"{SALE_ID_PREFIX}{secrets.randbelow(10 ** SALE_ID_DIGITS):0{SALE_ID_DIGITS}d}"
        if not Sale.objects.filter(sale_id=candidate).exists():
            return candidate
    raise RuntimeError("Could not allocate a unique sale id")


class Sale(TimeStampedModel):
    sale_id = models.CharField(max_length=20, unique=True, editable=False)

    website = models.ForeignKey("catalog.Website", on_delete=models.PROTECT, related_name="sales")
    buyer = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name="purchases")
    seller = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name="sales_made")

    amount = models.DecimalField(max_digits=12, decimal_places=2, validators=[MinValueValidator(Decimal("0"))])
    discount_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal("0"))],
    )
    final_amount = models.DecimalField(max_digits=12, decimal_places=2)

    payment_method = models.CharField(max_length=20, choices=PaymentMethod.choices())
    status = models.CharField(
        max_length=20,
        choices=SaleStatus.choices(),
        default=SaleStatus.PENDING.value,
        db_index=True,
    )
    transaction_id = models.CharField(max_length=100, blank=True)
    notes = models.TextField(blank=True)

    paid_at = models.DateTimeField(null=True, blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)

    refund_amount = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    refund_reason = models.TextField(blank=True)
    refunded_at = models.DateTimeField(null=True, blank=True)

    delivery_method = models.CharField(max_length=100, blank=True)
    delivery_details = models.TextField(blank=True)
    is_delivered = models.BooleanField(default=False)
    delivered_at = models.DateTimeField(null=True, blank=True)

    buyer_confirmed = models.BooleanField(default=False)
    seller_confirmed = models.BooleanField(default=False)

    class Meta(TimeStampedModel.Meta):
        db_table = "sales"
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return self.sale_id

    def save(self, *args, **kwargs):
        if not self.sale_id:
            self.sale_id = generate_sale_id()
        super().save(*args, **kwargs)

    @property
    def sale_status(self) -> SaleStatus:
        return SaleStatus(self.status)

    def is_party(self, user_id: int) -> bool:
        return user_id in (self.buyer_id, self.seller_id)
