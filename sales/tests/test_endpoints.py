from decimal import Decimal

import pytest
from django.urls import reverse

from catalog.models import Website
from core.enums import SaleStatus, WebsiteStatus
from sales.models import Sale


@pytest.fixture()
def website(website_factory):
    return website_factory(name="Portfolio pro", price=Decimal("300.00"))


@pytest.fixture()
def sale_payload(website, admin_user):
    return {
        "website_id": website.pk,
        "seller_id": admin_user.pk,
        "amount": "300.00",
        "discount_amount": "50.00",
        "payment_method": "bank_transfer",
        "notes": "Please transfer the domain too.",
    }


@pytest.fixture()
def open_sale(buyer_client, sale_payload):
    resp = buyer_client.post(reverse("sale-list"), data=sale_payload, format="json")
    assert resp.status_code == 201
    return resp.data


@pytest.mark.django_db
def test_create_sale(open_sale, buyer, website):
    assert open_sale["status"] == SaleStatus.PENDING.value
    assert open_sale["final_amount"] == "250.00"
    assert open_sale["payment_method"] == "bank_transfer"
    assert open_sale["buyer"]["id"] == buyer.pk
    assert open_sale["website"]["id"] == website.pk
    assert open_sale["sale_id"].startswith("SALE-")

    website.refresh_from_db()
    assert website.status == WebsiteStatus.RESERVED.value


@pytest.mark.django_db
def test_create_sale_requires_authentication(api_client, sale_payload):
    resp = api_client.post(reverse("sale-list"), data=sale_payload, format="json")
    assert resp.status_code == 401


@pytest.mark.django_db
def test_create_sale_validation(buyer_client, sale_payload):
    resp = buyer_client.post(
        reverse("sale-list"),
        data=dict(sale_payload, payment_method="cash"),
        format="json",
    )
    assert resp.status_code == 400
    assert "payment_method" in resp.data
    assert not Sale.objects.exists()


@pytest.mark.django_db
def test_second_buyer_cannot_buy_reserved_website(open_sale, client_for, user_factory, sale_payload):
    other = client_for(user_factory())
    resp = other.post(reverse("sale-list"), data=sale_payload, format="json")
    assert resp.status_code == 400
    assert resp.data["detail"] == "Website is not available for sale"


@pytest.mark.django_db
def test_full_flow_over_http(open_sale, admin_client, buyer_client, website):
    pk = open_sale["id"]

    completed = admin_client.post(
        reverse("sale-complete", kwargs={"pk": pk}),
        data={"transaction_id": "txn_1"},
        format="json",
    )
    assert completed.status_code == 200
    assert completed.data["status"] == SaleStatus.COMPLETED.value
    assert completed.data["completed_at"] is not None

    again = admin_client.post(reverse("sale-complete", kwargs={"pk": pk}), format="json")
    assert again.status_code == 400
    assert again.data["detail"] == "Sale is not in pending status"

    delivered = admin_client.post(reverse("sale-deliver", kwargs={"pk": pk}))
    assert delivered.status_code == 200
    assert delivered.data["is_delivered"] is True

    confirmed = buyer_client.post(
        reverse("sale-confirm-delivery", kwargs={"pk": pk}),
        data={"is_buyer": True},
        format="json",
    )
    assert confirmed.status_code == 200
    assert confirmed.data["buyer_confirmed"] is True
    assert confirmed.data["seller_confirmed"] is False

    refunded = admin_client.post(
        reverse("sale-refund", kwargs={"pk": pk}),
        data={"refund_amount": "250.00", "refund_reason": "duplicate purchase"},
        format="json",
    )
    assert refunded.status_code == 200
    assert refunded.data["status"] == SaleStatus.REFUNDED.value
    assert refunded.data["refund_amount"] == "250.00"

    twice = admin_client.post(
        reverse("sale-refund", kwargs={"pk": pk}),
        data={"refund_amount": "10.00", "refund_reason": "x"},
        format="json",
    )
    assert twice.status_code == 400
    assert twice.data["detail"] == "Sale is already refunded"

    website.refresh_from_db()
    assert website.status == WebsiteStatus.SOLD.value


@pytest.mark.django_db
def test_complete_and_refund_are_admin_only(open_sale, buyer_client):
    pk = open_sale["id"]

    assert buyer_client.post(reverse("sale-complete", kwargs={"pk": pk})).status_code == 403
    resp = buyer_client.post(
        reverse("sale-refund", kwargs={"pk": pk}),
        data={"refund_amount": "1.00"},
        format="json",
    )
    assert resp.status_code == 403
    assert Sale.objects.get(pk=pk).status == SaleStatus.PENDING.value


@pytest.mark.django_db
def test_refund_exceeding_amount_keeps_sale_pending(open_sale, admin_client):
    pk = open_sale["id"]
    resp = admin_client.post(
        reverse("sale-refund", kwargs={"pk": pk}),
        data={"refund_amount": "9999", "refund_reason": "too much"},
        format="json",
    )
    assert resp.status_code == 400
    assert resp.data["detail"] == "Refund amount cannot exceed sale amount"
    assert Sale.objects.get(pk=pk).status == SaleStatus.PENDING.value


@pytest.mark.django_db
def test_buyer_cannot_mark_delivered(open_sale, admin_client, buyer_client):
    pk = open_sale["id"]
    admin_client.post(reverse("sale-complete", kwargs={"pk": pk}))

    resp = buyer_client.post(reverse("sale-deliver", kwargs={"pk": pk}))
    assert resp.status_code == 403
    assert resp.data["detail"] == "Only seller can mark sale as delivered"


@pytest.mark.django_db
def test_confirm_delivery_requires_is_buyer(open_sale, buyer_client):
    resp = buyer_client.post(reverse("sale-confirm-delivery", kwargs={"pk": open_sale["id"]}), data={}, format="json")
    assert resp.status_code == 400
    assert "is_buyer" in resp.data


@pytest.mark.django_db
def test_buyer_cancels_pending_sale(open_sale, buyer_client, website):
    resp = buyer_client.post(reverse("sale-cancel", kwargs={"pk": open_sale["id"]}))
    assert resp.status_code == 200
    assert resp.data["status"] == SaleStatus.CANCELLED.value

    website.refresh_from_db()
    assert website.status == WebsiteStatus.AVAILABLE.value


@pytest.mark.django_db
def test_sale_visibility(open_sale, buyer_client, admin_client, client_for, user_factory):
    detail_url = reverse("sale-detail", kwargs={"pk": open_sale["id"]})
    by_sale_id_url = reverse("sale-by-sale-id", kwargs={"sale_id": open_sale["sale_id"]})

    assert buyer_client.get(detail_url).status_code == 200
    assert admin_client.get(by_sale_id_url).data["id"] == open_sale["id"]

    stranger = client_for(user_factory())
    resp = stranger.get(detail_url)
    assert resp.status_code == 403
    assert resp.data["detail"] == "Access denied"

    missing = buyer_client.get(reverse("sale-detail", kwargs={"pk": 999}))
    assert missing.status_code == 404
    assert missing.data["detail"] == "Sale not found"


@pytest.mark.django_db
def test_my_purchases_and_my_sales(open_sale, buyer_client, admin_client):
    purchases = buyer_client.get(reverse("sale-my-purchases"))
    assert [item["id"] for item in purchases.data] == [open_sale["id"]]

    sales = admin_client.get(reverse("sale-my-sales"))
    assert [item["id"] for item in sales.data] == [open_sale["id"]]

    assert buyer_client.get(reverse("sale-my-sales")).data == []


@pytest.mark.django_db
def test_admin_sales_listing(open_sale, admin_client, buyer_client, buyer):
    assert buyer_client.get(reverse("sale-list")).status_code == 403

    resp = admin_client.get(reverse("sale-list"), data={"status": "pending", "buyer_id": buyer.pk})
    assert resp.status_code == 200
    assert resp.data["count"] == 1
    assert resp.data["results"][0]["sale_id"] == open_sale["sale_id"]

    empty = admin_client.get(reverse("sale-list"), data={"status": "completed"})
    assert empty.data["count"] == 0

    invalid = admin_client.get(reverse("sale-list"), data={"status": "lost"})
    assert invalid.status_code == 400


@pytest.mark.django_db
def test_website_with_sales_cannot_be_deleted(open_sale, admin_client, website):
    resp = admin_client.delete(reverse("website-detail", kwargs={"pk": website.pk}))
    assert resp.status_code == 400
    assert resp.data["detail"] == "Website has sales and cannot be deleted"
    assert Website.objects.filter(pk=website.pk).exists()
