from typing import Any, Dict, List, Optional, Sequence, Tuple

from django.conf import settings
from django.db import transaction
from django.db.models import Exists, F, OuterRef, Q, QuerySet
from django.db.models.deletion import ProtectedError
from django.utils import timezone

from core.enums import SaleStatus, SortOrder, WebsiteStatus, WebsiteTagKind
from core.exceptions import BadRequestError, ForbiddenError, NotFoundError
from core.logging import configure_logger
from core.schemas import WebsiteQuery

from .models import Category, Website, WebsiteTag
from .pricing import final_price
from .slugs import unique_slug
from .storage import ImageStorage, generate_folder_id

logger = configure_logger("catalog.services")


def _has_tag(kind: Optional[WebsiteTagKind] = None, **lookup) -> Q:
    """True when the website owns a tag row matching ``lookup``."""
    tags = WebsiteTag.objects.filter(website=OuterRef("pk"), **lookup)
    if kind is not None:
        tags = tags.filter(kind=kind.value)
    return Q(Exists(tags))


class WebsiteService:
    """Catalog listing and maintenance."""

    def __init__(self, storage: Optional[ImageStorage] = None) -> None:
        self.storage = storage or ImageStorage()

    # Listing

    def queryset(self) -> QuerySet:
        return Website.objects.select_related("category", "created_by").prefetch_related("likes")

    def list(self, query: Optional[WebsiteQuery] = None) -> List[Website]:
        query = query or WebsiteQuery()
        queryset = self.filter_queryset(self.queryset(), query)
        queryset = self.sort_queryset(queryset, query)
        return list(self.paginate_queryset(queryset, query))

    def list_available(self) -> List[Website]:
        return self.list(WebsiteQuery(available=True))

    def list_for_creator(self, user_id: int) -> List[Website]:
        return self.list(WebsiteQuery(created_by=user_id))

    def filter_queryset(self, queryset: QuerySet, query: WebsiteQuery) -> QuerySet:
        return queryset.filter(self.build_filter(query))

    def build_filter(self, query: WebsiteQuery) -> Q:
        """Compose the listing filters; every dimension is ANDed, search ORs across fields."""

        condition = Q()

        if query.search:
            term = query.search
            condition &= (
                Q(name__icontains=term)
                | Q(slug__icontains=term)
                | Q(description__icontains=term)
                | _has_tag(value__icontains=term)
            )

        if query.category_id is not None:
            condition &= Q(category_id=query.category_id)
        if query.type is not None:
            condition &= Q(type=query.type.value)
        if query.effective_status is not None:
            condition &= Q(status=query.effective_status.value)
        if query.created_by is not None:
            condition &= Q(created_by_id=query.created_by)

        if query.min_price is not None:
            condition &= Q(price__gte=query.min_price)
        if query.max_price is not None:
            condition &= Q(price__lte=query.max_price)

        for flag in ("is_responsive", "has_admin_panel", "has_database"):
            value = getattr(query, flag)
            if value is not None:
                condition &= Q(**{flag: value})

        # any-of, exact element match
        if query.technologies:
            condition &= _has_tag(WebsiteTagKind.TECHNOLOGY, value__in=list(query.technologies))
        if query.features:
            condition &= _has_tag(WebsiteTagKind.FEATURE, value__in=list(query.features))

        return condition

    def sort_queryset(self, queryset: QuerySet, query: WebsiteQuery) -> QuerySet:
        prefix = "" if query.sort_order == SortOrder.ASC else "-"
        return queryset.order_by(f"{prefix}{query.sort_by.value}", f"{prefix}id")

    def paginate_queryset(self, queryset: QuerySet, query: WebsiteQuery) -> QuerySet:
        skip = max(query.skip or 0, 0)
        if query.limit:
            return queryset[skip : skip + query.limit]
        return queryset[skip:]

    def final_price(self, website: Website):
        return final_price(website.price, website.discount_percent)

    # Retrieval

    def get_by_id(self, website_id: int) -> Website:
        website = self.queryset().filter(pk=website_id).first()
        if website is None:
            raise NotFoundError("Website not found")
        return website

    def get_by_slug(self, slug: str) -> Website:
        """Fetch by slug; every successful fetch counts one view."""

        website = self.queryset().filter(slug=slug).first()
        if website is None:
            raise NotFoundError("Website not found")

        Website.objects.filter(pk=website.pk).update(views_count=F("views_count") + 1)
        website.refresh_from_db(fields=["views_count"])
        return website

    # Maintenance

    def create(self, data: Dict[str, Any], images: Sequence, requester_id: int) -> Website:
        if not images:
            raise BadRequestError("At least one image is required.")

        payload = dict(data)
        category = self._get_category(payload.pop("category_id"))
        payload.pop("status", None)

        folder_id = generate_folder_id()
        gallery = self.storage.upload_files(images, folder=self._folder(folder_id))
        website = Website(
            **payload,
            category=category,
            created_by_id=requester_id,
            status=WebsiteStatus.AVAILABLE.value,
            folder_id=folder_id,
            main_image=gallery[0],
            gallery=gallery,
        )
        website.slug = unique_slug(Website, website.name)
        try:
            website.save()
        except Exception:
            self.storage.destroy_files(gallery)
            raise

        logger.info("Website id=%s created by user id=%s", website.pk, requester_id)
        return self.get_by_id(website.pk)

    def update(self, website_id: int, data: Dict[str, Any], requester_id: int) -> Website:
        website = self.get_by_id(website_id)
        self._ensure_creator(website, requester_id, "You can only update your own websites")

        payload = dict(data)
        fields = {"updated_at"}
        if "category_id" in payload:
            website.category = self._get_category(payload.pop("category_id"))
            fields.add("category")
        new_status = payload.pop("status", None)

        price = payload.get("price", website.price)
        original_price = payload.get("original_price", website.original_price)
        if price is not None and original_price is not None and original_price < price:
            raise BadRequestError("Original price cannot be lower than the price.")

        name_changed = "name" in payload and payload["name"] != website.name
        for key, value in payload.items():
            setattr(website, key, value)
        fields.update(payload)
        if name_changed:
            website.slug = unique_slug(Website, website.name, exclude_pk=website.pk)
            fields.add("slug")

        with transaction.atomic():
            if new_status is not None and new_status != website.status:
                self._change_status(website, new_status)
            website.save(update_fields=sorted(fields))

        logger.info("Website id=%s updated by user id=%s", website.pk, requester_id)
        return self.get_by_id(website.pk)

    def _change_status(self, website: Website, new_status: str) -> None:
        """Manual status edit; ``sold`` and pending reservations belong to the sale lifecycle."""

        if not website.can_transition_to(new_status):
            raise BadRequestError(f"Website cannot move from '{website.status}' to '{new_status}'")
        if new_status == WebsiteStatus.SOLD.value:
            raise BadRequestError("Websites are marked sold by completing a sale")
        if website.sales.filter(status=SaleStatus.PENDING.value).exists():
            raise BadRequestError("Website status is held by a pending sale")

        updated = Website.objects.filter(pk=website.pk, status=website.status).update(
            status=new_status,
            updated_at=timezone.now(),
        )
        if not updated:
            raise BadRequestError("Website status changed, reload and try again")
        logger.info("Website id=%s moved from %s to %s", website.pk, website.status, new_status)
        website.status = new_status

    def replace_images(self, website_id: int, images: Sequence, requester_id: int) -> Website:
        website = self.get_by_id(website_id)
        self._ensure_creator(website, requester_id, "You can only update your own websites")
        if not images:
            raise BadRequestError("At least one image is required.")

        previous = website.attachments
        folder_id = website.folder_id or generate_folder_id()
        gallery = self.storage.upload_files(images, folder=self._folder(folder_id))

        website.folder_id = folder_id
        website.main_image = gallery[0]
        website.gallery = gallery
        website.save(update_fields=["folder_id", "main_image", "gallery", "updated_at"])

        self.storage.destroy_files(previous)
        return self.get_by_id(website.pk)

    def delete(self, website_id: int, requester_id: int) -> Website:
        website = self.get_by_id(website_id)
        self._ensure_creator(website, requester_id, "You can only delete your own websites")
        if website.sales.exists():
            raise BadRequestError("Website has sales and cannot be deleted")

        self.storage.destroy_files(website.attachments)
        website_pk = website.pk
        try:
            website.delete()
        except ProtectedError as exc:
            raise BadRequestError("Website has sales and cannot be deleted") from exc

        website.pk = website_pk
        logger.info("Website id=%s deleted by user id=%s", website_pk, requester_id)
        return website

    def toggle_like(self, website_id: int, user_id: int) -> Tuple[Website, bool]:
        website = self.get_by_id(website_id)
        if website.likes.filter(pk=user_id).exists():
            website.likes.remove(user_id)
            liked = False
        else:
            website.likes.add(user_id)
            liked = True
        return self.get_by_id(website.pk), liked

    # Status moves driven by the sale lifecycle; each is a single conditional write

    def reserve(self, website_id: int) -> bool:
        updated = Website.objects.filter(pk=website_id, status=WebsiteStatus.AVAILABLE.value).update(
            status=WebsiteStatus.RESERVED.value,
            updated_at=timezone.now(),
        )
        return updated == 1

    def release(self, website_id: int) -> bool:
        updated = Website.objects.filter(pk=website_id, status=WebsiteStatus.RESERVED.value).update(
            status=WebsiteStatus.AVAILABLE.value,
            updated_at=timezone.now(),
        )
        return updated == 1

    def mark_sold(self, website_id: int, buyer_id: int) -> None:
        now = timezone.now()
        updated = Website.objects.filter(
            pk=website_id,
            status__in=[WebsiteStatus.AVAILABLE.value, WebsiteStatus.RESERVED.value],
        ).update(status=WebsiteStatus.SOLD.value, sold_at=now, sold_to_id=buyer_id, updated_at=now)
        if not updated:
            raise BadRequestError("Website is not available for sale")

    def _get_category(self, category_id: int) -> Category:
        category = Category.objects.filter(pk=category_id).first()
        if category is None:
            raise NotFoundError("Category not found")
        return category

    def _ensure_creator(self, website: Website, requester_id: int, message: str) -> None:
        if website.created_by_id != requester_id:
            logger.warning("User id=%s denied on website id=%s", requester_id, website.pk)
            raise ForbiddenError(message)

    def _folder(self, folder_id: str) -> str:
        return f"{settings.APP_NAME}/Website/{folder_id}"


class CategoryService:
    def __init__(self, storage: Optional[ImageStorage] = None) -> None:
        self.storage = storage or ImageStorage()

    def list(self) -> QuerySet:
        return Category.objects.all()

    def get(self, category_id: int) -> Category:
        category = Category.objects.filter(pk=category_id).first()
        if category is None:
            raise NotFoundError("Category not found")
        return category

    def create(self, *, name: str, logo=None) -> Category:
        if Category.objects.filter(name__iexact=name).exists():
            raise BadRequestError("Category already exists")

        category = Category(name=name, slug=unique_slug(Category, name, max_length=120))
        if logo is not None:
            category.logo = self.storage.upload_file(logo, folder=self._folder(category.slug))
        category.save()
        logger.info("Category id=%s created", category.pk)
        return category

    def update(self, category_id: int, *, name: Optional[str] = None, logo=None) -> Category:
        category = self.get(category_id)

        if name and name != category.name:
            if Category.objects.filter(name__iexact=name).exclude(pk=category.pk).exists():
                raise BadRequestError("Category already exists")
            category.name = name
            category.slug = unique_slug(Category, name, exclude_pk=category.pk, max_length=120)

        previous_logo = None
        if logo is not None:
            previous_logo = category.logo
            category.logo = self.storage.upload_file(logo, folder=self._folder(category.slug))

        category.save()
        self.storage.destroy_files([previous_logo])
        return category

    def delete(self, category_id: int) -> None:
        category = self.get(category_id)
        if category.websites.exists():
            raise BadRequestError("Category has websites and cannot be deleted")

        logo = category.logo
        with transaction.atomic():
            category.delete()
        self.storage.destroy_files([logo])
        logger.info("Category id=%s deleted", category_id)

    def _folder(self, slug: str) -> str:
        return f"{settings.APP_NAME}/Category/{slug}"
