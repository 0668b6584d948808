from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List, Mapping, Optional

from core.enums import PaymentMethod, SortOrder, WebsiteSortField, WebsiteStatus, WebsiteType


@dataclass(slots=True)
class WebsiteQuery:
    """Typed filter set accepted by the website listing."""

    search: Optional[str] = None
    category_id: Optional[int] = None
    type: Optional[WebsiteType] = None
    status: Optional[WebsiteStatus] = None
    available: Optional[bool] = None
    created_by: Optional[int] = None
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    is_responsive: Optional[bool] = None
    has_admin_panel: Optional[bool] = None
    has_database: Optional[bool] = None
    technologies: List[str] = field(default_factory=list)
    features: List[str] = field(default_factory=list)
    sort_by: WebsiteSortField = WebsiteSortField.CREATED_AT
    sort_order: SortOrder = SortOrder.DESC
    limit: Optional[int] = None
    skip: int = 0

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "WebsiteQuery":
        """Build a query from already validated values (e.g. serializer output)."""

        sort_by = payload.get("sort_by")
        sort_order = payload.get("sort_order")
        return cls(
            search=payload.get("search") or None,
            category_id=payload.get("category_id"),
            type=WebsiteType(payload["type"]) if payload.get("type") else None,
            status=WebsiteStatus(payload["status"]) if payload.get("status") else None,
            available=payload.get("available"),
            created_by=payload.get("created_by"),
            min_price=_coerce_decimal(payload.get("min_price")),
            max_price=_coerce_decimal(payload.get("max_price")),
            is_responsive=payload.get("is_responsive"),
            has_admin_panel=payload.get("has_admin_panel"),
            has_database=payload.get("has_database"),
            technologies=_clean_strings(payload.get("technologies")),
            features=_clean_strings(payload.get("features")),
            sort_by=WebsiteSortField(sort_by) if sort_by else WebsiteSortField.CREATED_AT,
            sort_order=SortOrder(sort_order) if sort_order else SortOrder.DESC,
            limit=payload.get("limit"),
            skip=int(payload.get("skip") or 0),
        )

    @property
    def effective_status(self) -> Optional[WebsiteStatus]:
        # ``available=True`` wins over an explicit status
        if self.available is True:
            return WebsiteStatus.AVAILABLE
        return self.status


@dataclass(slots=True)
class SaleCreateData:
    """Payload a buyer submits to open a sale."""

    website_id: int
    seller_id: int
    amount: Decimal
    payment_method: PaymentMethod
    discount_amount: Optional[Decimal] = None
    notes: str = ""
    delivery_method: str = ""
    delivery_details: str = ""

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "SaleCreateData":
        return cls(
            website_id=int(payload["website_id"]),
            seller_id=int(payload["seller_id"]),
            amount=_coerce_decimal(payload["amount"]) or Decimal("0"),
            payment_method=PaymentMethod.from_string(payload["payment_method"]),
            discount_amount=_coerce_decimal(payload.get("discount_amount")),
            notes=str(payload.get("notes") or ""),
            delivery_method=str(payload.get("delivery_method") or ""),
            delivery_details=str(payload.get("delivery_details") or ""),
        )

    @property
    def final_amount(self) -> Decimal:
        return self.amount - (self.discount_amount or Decimal("0"))

    def to_model_payload(self) -> Dict[str, Any]:
        return {
            "amount": self.amount,
            "discount_amount": self.discount_amount,
            "final_amount": self.final_amount,
            "payment_method": self.payment_method.value,
            "notes": self.notes,
            "delivery_method": self.delivery_method,
            "delivery_details": self.delivery_details,
        }


def _clean_strings(values: Optional[Iterable[Any]]) -> List[str]:
    if not values:
        return []
    if isinstance(values, str):
        values = values.split(",")
    return [text for text in (str(value).strip() for value in values) if text]


def _coerce_decimal(value: Any) -> Optional[Decimal]:
    if value in (None, ""):
        return None
    try:
        return Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        return None
