import csv
import io
from decimal import Decimal

import pytest
from django.core.files.storage import default_storage
from django.urls import reverse

from catalog.models import Category, Website
from core.enums import UserRole, WebsiteStatus


@pytest.fixture()
def website_payload(category):
    return {
        "name": "Shop Starter",
        "description": "Storefront with cart and payments.",
        "demo_url": "https://demo.example.com/shop-starter",
        "price": "250.00",
        "discount_percent": "10",
        "type": "ecommerce",
        "category_id": category.pk,
        "technologies": ["React", "Node"],
        "features": "Cart,Payments",
        "is_responsive": True,
    }


@pytest.mark.django_db
def test_admin_creates_website_with_images(admin_client, admin_user, website_payload, image_factory):
    payload = dict(website_payload, images=[image_factory("home.png"), image_factory("cart.png")])

    resp = admin_client.post(reverse("website-list"), data=payload, format="multipart")

    assert resp.status_code == 201
    assert resp.data["slug"] == "shop-starter"
    assert resp.data["status"] == WebsiteStatus.AVAILABLE.value
    assert resp.data["final_price"] == "225.00"
    assert resp.data["technologies"] == ["React", "Node"]
    assert resp.data["features"] == ["Cart", "Payments"]
    assert resp.data["created_by"]["id"] == admin_user.pk
    assert len(resp.data["gallery"]) == 2
    assert resp.data["main_image"] == resp.data["gallery"][0]
    assert "/Website/" in resp.data["main_image"]["storage_id"]
    assert default_storage.exists(resp.data["main_image"]["storage_id"])


@pytest.mark.django_db
def test_create_website_requires_image(admin_client, website_payload):
    resp = admin_client.post(reverse("website-list"), data=website_payload, format="multipart")
    assert resp.status_code == 400
    assert resp.data["detail"] == "At least one image is required."
    assert Website.objects.count() == 0


@pytest.mark.django_db
def test_create_website_is_admin_only(buyer_client, website_payload, image_factory):
    payload = dict(website_payload, images=[image_factory()])
    resp = buyer_client.post(reverse("website-list"), data=payload, format="multipart")
    assert resp.status_code == 403


@pytest.mark.django_db
def test_create_website_unknown_category(admin_client, website_payload, image_factory):
    payload = dict(website_payload, category_id=999, images=[image_factory()])
    resp = admin_client.post(reverse("website-list"), data=payload, format="multipart")
    assert resp.status_code == 404
    assert resp.data["detail"] == "Category not found"


@pytest.mark.django_db
def test_create_website_rejects_original_price_below_price(admin_client, website_payload, image_factory):
    payload = dict(website_payload, original_price="100.00", images=[image_factory()])
    resp = admin_client.post(reverse("website-list"), data=payload, format="multipart")
    assert resp.status_code == 400
    assert "original_price" in resp.data


@pytest.mark.django_db
def test_creator_updates_website_and_slug_follows_name(admin_client, website_factory):
    website = website_factory(name="Old name")

    resp = admin_client.patch(
        reverse("website-detail", kwargs={"pk": website.pk}),
        data={"name": "New name", "price": "80.00"},
        format="json",
    )

    assert resp.status_code == 200
    assert resp.data["slug"] == "new-name"
    assert resp.data["price"] == "80.00"


@pytest.mark.django_db
def test_only_creator_updates_website(client_for, user_factory, website_factory):
    website = website_factory()
    other_admin = client_for(user_factory(role=UserRole.ADMIN.value))

    resp = other_admin.patch(
        reverse("website-detail", kwargs={"pk": website.pk}),
        data={"price": "1.00"},
        format="json",
    )

    assert resp.status_code == 403
    assert resp.data["detail"] == "You can only update your own websites"
    website.refresh_from_db()
    assert website.price == Decimal("100.00")


@pytest.mark.django_db
def test_sold_website_cannot_return_to_available(admin_client, website_factory):
    website = website_factory(status=WebsiteStatus.SOLD.value)

    resp = admin_client.patch(
        reverse("website-detail", kwargs={"pk": website.pk}),
        data={"status": WebsiteStatus.AVAILABLE.value},
        format="json",
    )

    assert resp.status_code == 400
    website.refresh_from_db()
    assert website.status == WebsiteStatus.SOLD.value


@pytest.mark.django_db
def test_creator_toggles_reservation_without_sale(admin_client, website_factory):
    website = website_factory()
    url = reverse("website-detail", kwargs={"pk": website.pk})

    reserved = admin_client.patch(url, data={"status": WebsiteStatus.RESERVED.value}, format="json")
    assert reserved.status_code == 200
    assert reserved.data["status"] == WebsiteStatus.RESERVED.value

    released = admin_client.patch(url, data={"status": WebsiteStatus.AVAILABLE.value}, format="json")
    assert released.status_code == 200
    assert released.data["status"] == WebsiteStatus.AVAILABLE.value


@pytest.mark.django_db
def test_website_cannot_be_marked_sold_by_hand(admin_client, website_factory):
    website = website_factory()

    resp = admin_client.patch(
        reverse("website-detail", kwargs={"pk": website.pk}),
        data={"status": WebsiteStatus.SOLD.value},
        format="json",
    )

    assert resp.status_code == 400
    assert resp.data["detail"] == "Websites are marked sold by completing a sale"
    website.refresh_from_db()
    assert website.status == WebsiteStatus.AVAILABLE.value
    assert website.sold_at is None


@pytest.mark.django_db
def test_partial_update_checks_original_price_against_stored_price(admin_client, website_factory):
    website = website_factory(price=Decimal("100.00"), original_price=Decimal("120.00"))
    url = reverse("website-detail", kwargs={"pk": website.pk})

    lowered = admin_client.patch(url, data={"original_price": "50.00"}, format="json")
    assert lowered.status_code == 400
    assert lowered.data["detail"] == "Original price cannot be lower than the price."

    raised_price = admin_client.patch(url, data={"price": "150.00"}, format="json")
    assert raised_price.status_code == 400

    website.refresh_from_db()
    assert website.price == Decimal("100.00")
    assert website.original_price == Decimal("120.00")

    ok = admin_client.patch(url, data={"price": "110.00"}, format="json")
    assert ok.status_code == 200
    assert ok.data["price"] == "110.00"


@pytest.mark.django_db
def test_creator_deletes_website_and_its_images(admin_client, website_factory, mocker):
    destroy = mocker.patch("catalog.services.ImageStorage.destroy_files")
    website = website_factory()

    resp = admin_client.delete(reverse("website-detail", kwargs={"pk": website.pk}))

    assert resp.status_code == 204
    assert not Website.objects.filter(pk=website.pk).exists()
    destroy.assert_called_once_with(website.attachments)


@pytest.mark.django_db
def test_only_creator_deletes_website(client_for, user_factory, website_factory):
    website = website_factory()
    other_admin = client_for(user_factory(role=UserRole.ADMIN.value))

    resp = other_admin.delete(reverse("website-detail", kwargs={"pk": website.pk}))

    assert resp.status_code == 403
    assert Website.objects.filter(pk=website.pk).exists()


@pytest.mark.django_db
def test_replace_images_destroys_old_files(admin_client, website_payload, image_factory):
    payload = dict(website_payload, images=[image_factory("old.png")])
    created = admin_client.post(reverse("website-list"), data=payload, format="multipart").data
    old_storage_id = created["main_image"]["storage_id"]

    resp = admin_client.patch(
        reverse("website-images", kwargs={"pk": created["id"]}),
        data={"images": [image_factory("new-1.png"), image_factory("new-2.png")]},
        format="multipart",
    )

    assert resp.status_code == 200
    assert len(resp.data["gallery"]) == 2
    assert resp.data["main_image"]["storage_id"].endswith("new-1.png")
    assert not default_storage.exists(old_storage_id)
    assert default_storage.exists(resp.data["main_image"]["storage_id"])


@pytest.mark.django_db
def test_like_toggles(buyer_client, website_factory):
    website = website_factory()
    url = reverse("website-like", kwargs={"pk": website.pk})

    first = buyer_client.post(url)
    assert first.status_code == 200
    assert first.data == {"liked": True, "likes_count": 1}

    second = buyer_client.post(url)
    assert second.data == {"liked": False, "likes_count": 0}


@pytest.mark.django_db
def test_like_requires_authentication(api_client, website_factory):
    website = website_factory()
    resp = api_client.post(reverse("website-like", kwargs={"pk": website.pk}))
    assert resp.status_code == 401


@pytest.mark.django_db
def test_available_and_my_websites(client_for, user_factory, website_factory):
    seller = user_factory(role=UserRole.ADMIN.value)
    website_factory(name="Mine", created_by=seller)
    website_factory(name="Sold", created_by=seller, status=WebsiteStatus.SOLD.value)
    website_factory(name="Someone else's")

    seller_client = client_for(seller)

    mine = seller_client.get(reverse("website-mine"))
    assert sorted(item["name"] for item in mine.data) == ["Mine", "Sold"]

    available = seller_client.get(reverse("website-available"))
    assert sorted(item["name"] for item in available.data) == ["Mine", "Someone else's"]


@pytest.mark.django_db
def test_categories_crud(admin_client, api_client):
    created = admin_client.post(reverse("category-list"), data={"name": "Landing Pages"}, format="json")
    assert created.status_code == 201
    assert created.data["slug"] == "landing-pages"
    assert created.data["logo"] is None

    duplicate = admin_client.post(reverse("category-list"), data={"name": "landing pages"}, format="json")
    assert duplicate.status_code == 400
    assert duplicate.data["detail"] == "Category already exists"

    listing = api_client.get(reverse("category-list"))
    assert [item["name"] for item in listing.data] == ["Landing Pages"]

    detail_url = reverse("category-detail", kwargs={"pk": created.data["id"]})
    renamed = admin_client.patch(detail_url, data={"name": "Landings"}, format="json")
    assert renamed.status_code == 200
    assert renamed.data["slug"] == "landings"

    deleted = admin_client.delete(detail_url)
    assert deleted.status_code == 204
    assert not Category.objects.exists()


@pytest.mark.django_db
def test_category_with_logo(admin_client, image_factory):
    resp = admin_client.post(
        reverse("category-list"),
        data={"name": "Portfolios", "logo_file": image_factory("logo.png")},
        format="multipart",
    )
    assert resp.status_code == 201
    assert resp.data["logo"]["storage_id"].endswith("logo.png")
    assert "/Category/portfolios/" in resp.data["logo"]["storage_id"]


@pytest.mark.django_db
def test_category_in_use_cannot_be_deleted(admin_client, category, website_factory):
    website_factory()
    resp = admin_client.delete(reverse("category-detail", kwargs={"pk": category.pk}))
    assert resp.status_code == 400
    assert Category.objects.filter(pk=category.pk).exists()


@pytest.mark.django_db
def test_category_writes_are_admin_only(buyer_client):
    resp = buyer_client.post(reverse("category-list"), data={"name": "Blogs"}, format="json")
    assert resp.status_code == 403


@pytest.mark.django_db
def test_export_csv(admin_client, settings, tmp_path, website_factory):
    settings.TEMP_DIR = str(tmp_path)
    website_factory(name="Exported", price=Decimal("200.00"), discount_percent=Decimal("50"))
    website_factory(name="Filtered out", status=WebsiteStatus.SOLD.value)

    resp = admin_client.get(reverse("website-export-csv"), data={"available": "true"})

    assert resp.status_code == 200
    assert "attachment" in resp.get("Content-Disposition", "")
    content = b"".join(resp.streaming_content).decode("utf-8")
    rows = list(csv.DictReader(io.StringIO(content)))
    assert [row["name"] for row in rows] == ["Exported"]
    assert Decimal(rows[0]["final_price"]) == Decimal("100.00")


@pytest.mark.django_db
def test_export_csv_is_admin_only(buyer_client):
    resp = buyer_client.get(reverse("website-export-csv"))
    assert resp.status_code == 403


@pytest.mark.django_db
def test_swagger_ui_available(api_client):
    resp = api_client.get(reverse("schema-swagger-ui"))
    assert resp.status_code == 200
    assert '<div id="swagger-ui"></div>' in resp.content.decode("utf-8")


@pytest.mark.django_db
def test_redoc_available(api_client):
    resp = api_client.get(reverse("schema-redoc"))
    assert resp.status_code == 200
    assert "redoc.min.js" in resp.content.decode("utf-8")


@pytest.mark.django_db
def test_schema_json_available(api_client):
    resp = api_client.get(reverse("schema-json", kwargs={"format": ".json"}))
    assert resp.status_code == 200
    data = resp.json()
    assert data["info"]["title"] == "Website Marketplace API"
    paths = list(data["paths"])
    assert any(path.endswith("/websites/") for path in paths)
    assert any(path.endswith("/sales/{id}/complete/") for path in paths)
