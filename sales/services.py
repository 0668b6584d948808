from decimal import Decimal
from typing import Any, List, Mapping, Optional

from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from catalog.models import Website
from catalog.services import WebsiteService
from core.enums import SaleStatus
from core.exceptions import BadRequestError, ForbiddenError, NotFoundError
from core.logging import configure_logger
from core.schemas import SaleCreateData

from .filters import SaleFilter
from .models import Sale

logger = configure_logger("sales.services")


class SaleService:
    """Sale lifecycle: pending -> completed -> delivered -> confirmed, plus cancel and refund.

    Every status move is a single conditional ``UPDATE`` keyed on the status
    the caller observed, so two concurrent requests cannot both succeed.
    """

    def __init__(self, website_service: Optional[WebsiteService] = None) -> None:
        self.websites = website_service or WebsiteService()

    def queryset(self) -> QuerySet:
        return Sale.objects.select_related("website", "buyer", "seller")

    # Creation

    def create(self, data: SaleCreateData, buyer_id: int) -> Sale:
        website = Website.objects.filter(pk=data.website_id).first()
        if website is None:
            raise NotFoundError("Website not found")

        if data.discount_amount is not None and data.discount_amount > data.amount:
            raise BadRequestError("Discount amount cannot exceed sale amount")
        if website.created_by_id != data.seller_id:
            raise BadRequestError("Seller does not own this website")
        if buyer_id == data.seller_id:
            raise BadRequestError("You cannot buy your own website")
        if Decimal(data.amount) != website.final_price:
            raise BadRequestError("Sale amount does not match the website price")

        with transaction.atomic():
            if not self.websites.reserve(website.pk):
                logger.warning("Website id=%s is not available, sale rejected", website.pk)
                raise BadRequestError("Website is not available for sale")

            sale = Sale.objects.create(
                website=website,
                buyer_id=buyer_id,
                seller_id=data.seller_id,
                status=SaleStatus.PENDING.value,
                **data.to_model_payload(),
            )

        logger.info("Sale %s opened for website id=%s by user id=%s", sale.sale_id, website.pk, buyer_id)
        return self._get(sale.pk)

    # Retrieval

    def get(self, sale_id: int, requester_id: int) -> Sale:
        sale = self._get(sale_id)
        self._ensure_party(sale, requester_id)
        return sale

    def get_by_sale_id(self, sale_id: str, requester_id: int) -> Sale:
        sale = self.queryset().filter(sale_id=sale_id).first()
        if sale is None:
            raise NotFoundError("Sale not found")
        self._ensure_party(sale, requester_id)
        return sale

    def list_all(self, filters: Optional[Mapping[str, Any]] = None) -> QuerySet:
        filterset = SaleFilter(data=filters or {}, queryset=self.queryset())
        if not filterset.is_valid():
            details = "; ".join(
                f"{field}: {' '.join(str(error) for error in errors)}"
                for field, errors in filterset.errors.items()
            )
            raise BadRequestError(f"Invalid filter. {details}")
        return filterset.qs

    def list_for_buyer(self, user_id: int) -> List[Sale]:
        return list(self.queryset().filter(buyer_id=user_id))

    def list_for_seller(self, user_id: int) -> List[Sale]:
        return list(self.queryset().filter(seller_id=user_id))

    # Lifecycle

    def complete(self, sale_id: int, transaction_id: Optional[str] = None) -> Sale:
        sale = self._get(sale_id)
        if sale.status != SaleStatus.PENDING.value:
            raise BadRequestError("Sale is not in pending status")

        now = timezone.now()
        changes = {
            "status": SaleStatus.COMPLETED.value,
            "completed_at": now,
            "paid_at": now,
            "updated_at": now,
        }
        if transaction_id:
            changes["transaction_id"] = transaction_id

        with transaction.atomic():
            updated = Sale.objects.filter(pk=sale.pk, status=SaleStatus.PENDING.value).update(**changes)
            if not updated:
                raise BadRequestError("Sale is not in pending status")
            self.websites.mark_sold(sale.website_id, sale.buyer_id)

        logger.info("Sale %s completed", sale.sale_id)
        return self._get(sale.pk)

    def mark_delivered(self, sale_id: int, requester_id: int) -> Sale:
        sale = self._get(sale_id)
        if sale.seller_id != requester_id:
            logger.warning("User id=%s tried to deliver sale %s", requester_id, sale.sale_id)
            raise ForbiddenError("Only seller can mark sale as delivered")
        if sale.status != SaleStatus.COMPLETED.value:
            raise BadRequestError("Sale must be completed before delivery")

        now = timezone.now()
        updated = Sale.objects.filter(pk=sale.pk, status=SaleStatus.COMPLETED.value).update(
            is_delivered=True,
            delivered_at=now,
            updated_at=now,
        )
        if not updated:
            raise BadRequestError("Sale must be completed before delivery")

        logger.info("Sale %s delivered", sale.sale_id)
        return self._get(sale.pk)

    def confirm_delivery(self, sale_id: int, requester_id: int, is_buyer: bool) -> Sale:
        sale = self._get(sale_id)
        self._ensure_party(sale, requester_id)
        if not sale.is_delivered:
            raise BadRequestError("Sale must be delivered first")

        if is_buyer and sale.buyer_id == requester_id:
            field = "buyer_confirmed"
        elif not is_buyer and sale.seller_id == requester_id:
            field = "seller_confirmed"
        else:
            raise BadRequestError("Invalid confirmation request")

        Sale.objects.filter(pk=sale.pk).update(**{field: True, "updated_at": timezone.now()})
        logger.info("Sale %s %s", sale.sale_id, field.replace("_", " "))
        return self._get(sale.pk)

    def cancel(self, sale_id: int, requester_id: int, is_admin: bool = False) -> Sale:
        sale = self._get(sale_id)
        if not is_admin and sale.buyer_id != requester_id:
            logger.warning("User id=%s tried to cancel sale %s", requester_id, sale.sale_id)
            raise ForbiddenError("Access denied")
        if sale.status != SaleStatus.PENDING.value:
            raise BadRequestError("Only pending sales can be cancelled")

        now = timezone.now()
        with transaction.atomic():
            updated = Sale.objects.filter(pk=sale.pk, status=SaleStatus.PENDING.value).update(
                status=SaleStatus.CANCELLED.value,
                cancelled_at=now,
                updated_at=now,
            )
            if not updated:
                raise BadRequestError("Only pending sales can be cancelled")
            self.websites.release(sale.website_id)

        logger.info("Sale %s cancelled by user id=%s", sale.sale_id, requester_id)
        return self._get(sale.pk)

    def refund(self, sale_id: int, refund_amount: Decimal, refund_reason: str = "") -> Sale:
        sale = self._get(sale_id)
        if sale.status == SaleStatus.REFUNDED.value:
            raise BadRequestError("Sale is already refunded")
        if Decimal(refund_amount) > sale.final_amount:
            raise BadRequestError("Refund amount cannot exceed sale amount")

        now = timezone.now()
        with transaction.atomic():
            updated = Sale.objects.filter(pk=sale.pk, status=sale.status).update(
                status=SaleStatus.REFUNDED.value,
                refund_amount=refund_amount,
                refund_reason=refund_reason or "",
                refunded_at=now,
                updated_at=now,
            )
            if not updated:
                raise BadRequestError("Sale is already refunded")
            # a completed sale keeps its website sold
            if sale.status == SaleStatus.PENDING.value:
                self.websites.release(sale.website_id)

        logger.info("Sale %s refunded (%s)", sale.sale_id, refund_amount)
        return self._get(sale.pk)

    def _get(self, sale_id: int) -> Sale:
        sale = self.queryset().filter(pk=sale_id).first()
        if sale is None:
            raise NotFoundError("Sale not found")
        return sale

    def _ensure_party(self, sale: Sale, requester_id: int) -> None:
        if not sale.is_party(requester_id):
            logger.warning("User id=%s denied on sale %s", requester_id, sale.sale_id)
            raise ForbiddenError("Access denied")
