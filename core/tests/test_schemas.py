from decimal import Decimal

import pytest

from core.enums import PaymentMethod, SortOrder, WebsiteSortField, WebsiteStatus
from core.schemas import SaleCreateData, WebsiteQuery


def test_website_query_defaults():
    query = WebsiteQuery.from_mapping({})

    assert query.sort_by is WebsiteSortField.CREATED_AT
    assert query.sort_order is SortOrder.DESC
    assert query.skip == 0
    assert query.limit is None
    assert query.technologies == []
    assert query.effective_status is None


def test_website_query_from_mapping():
    query = WebsiteQuery.from_mapping(
        {
            "search": "shop",
            "status": "sold",
            "available": True,
            "min_price": "10.5",
            "technologies": "React, Vue,",
            "sort_by": "price",
            "sort_order": "asc",
            "limit": 5,
            "skip": "2",
        }
    )

    assert query.effective_status is WebsiteStatus.AVAILABLE
    assert query.min_price == Decimal("10.5")
    assert query.technologies == ["React", "Vue"]
    assert query.sort_by is WebsiteSortField.PRICE
    assert query.sort_order is SortOrder.ASC
    assert query.skip == 2


def test_sale_create_data_final_amount():
    data = SaleCreateData.from_mapping(
        {
            "website_id": "3",
            "seller_id": 7,
            "amount": "300",
            "discount_amount": "50",
            "payment_method": "PAYPAL",
        }
    )

    assert data.payment_method is PaymentMethod.PAYPAL
    assert data.final_amount == Decimal("250")
    assert data.to_model_payload()["payment_method"] == "paypal"
    assert data.to_model_payload()["final_amount"] == Decimal("250")


def test_sale_create_data_without_discount():
    data = SaleCreateData(website_id=1, seller_id=2, amount=Decimal("99.99"), payment_method=PaymentMethod.CARD)
    assert data.final_amount == Decimal("99.99")


def test_unknown_payment_method():
    with pytest.raises(ValueError, match="Allowed values"):
        PaymentMethod.from_string("cash")
