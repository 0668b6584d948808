from enum import Enum
from typing import List, Tuple, Type, TypeVar

E = TypeVar("E", bound="ChoiceEnum")

SALE_ID_PREFIX = "SALE-"
SALE_ID_PATTERN = r"^SALE-\d{6}$"


class ChoiceEnum(str, Enum):
    """String enum usable directly as Django ``choices``."""

    @classmethod
    def choices(cls) -> List[Tuple[str, str]]:
        return [(member.value, member.value.replace("_", " ").title()) for member in cls]

    @classmethod
    def values(cls) -> List[str]:
        return [member.value for member in cls]

    @classmethod
    def from_string(cls: Type[E], value: str) -> E:
        try:
            return cls(str(value).lower())
        except ValueError as exc:
            allowed = ", ".join(cls.values())
            raise ValueError(f"Unknown {cls.__name__} '{value}'. Allowed values: {allowed}.") from exc


class UserRole(ChoiceEnum):
    USER = "user"
    ADMIN = "admin"


class WebsiteType(ChoiceEnum):
    ECOMMERCE = "ecommerce"
    BLOG = "blog"
    PORTFOLIO = "portfolio"
    CORPORATE = "corporate"
    LANDING = "landing"
    DASHBOARD = "dashboard"
    OTHER = "other"


class WebsiteStatus(ChoiceEnum):
    AVAILABLE = "available"
    SOLD = "sold"
    RESERVED = "reserved"


class WebsiteTagKind(ChoiceEnum):
    """Which list of a website a tag row mirrors."""

    TECHNOLOGY = "technology"
    FEATURE = "feature"


class SaleStatus(ChoiceEnum):
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"


class PaymentMethod(ChoiceEnum):
    CARD = "card"
    BANK_TRANSFER = "bank_transfer"
    PAYPAL = "paypal"
    CRYPTO = "crypto"


class SortOrder(ChoiceEnum):
    ASC = "asc"
    DESC = "desc"


class WebsiteSortField(ChoiceEnum):
    """Fields the website listing can be ordered by."""

    NAME = "name"
    PRICE = "price"
    CREATED_AT = "created_at"
    VIEWS_COUNT = "views_count"
    TYPE = "type"
    STATUS = "status"
