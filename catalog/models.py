from decimal import Decimal

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from core.enums import WebsiteStatus, WebsiteTagKind, WebsiteType
from core.models import TimeStampedModel

from .pricing import final_price
from .slugs import unique_slug

# Moves a website may make; ``sold`` is terminal
STATUS_TRANSITIONS = {
    WebsiteStatus.AVAILABLE.value: {WebsiteStatus.RESERVED.value, WebsiteStatus.SOLD.value},
    WebsiteStatus.RESERVED.value: {WebsiteStatus.AVAILABLE.value, WebsiteStatus.SOLD.value},
    WebsiteStatus.SOLD.value: set(),
}


class Category(TimeStampedModel):
    name = models.CharField(max_length=100, unique=True)
    slug = models.SlugField(max_length=120, unique=True)
    logo = models.JSONField(null=True, blank=True)

    class Meta(TimeStampedModel.Meta):
        db_table = "categories"
        ordering = ["name"]
        verbose_name_plural = "categories"

    def __str__(self) -> str:
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = unique_slug(Category, self.name, exclude_pk=self.pk, max_length=120)
        super().save(*args, **kwargs)


class Website(TimeStampedModel):
    name = models.CharField(max_length=100)
    slug = models.SlugField(max_length=150, unique=True)
    description = models.TextField()
    demo_url = models.URLField(max_length=500)
    source_code_url = models.URLField(max_length=500, blank=True)

    price = models.DecimalField(max_digits=12, decimal_places=2, validators=[MinValueValidator(Decimal("0"))])
    original_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal("0"))],
    )
    discount_percent = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal("0")), MaxValueValidator(Decimal("100"))],
    )

    type = models.CharField(max_length=20, choices=WebsiteType.choices())
    status = models.CharField(
        max_length=20,
        choices=WebsiteStatus.choices(),
        default=WebsiteStatus.AVAILABLE.value,
        db_index=True,
    )

    technologies = models.JSONField(default=list, blank=True)
    features = models.JSONField(default=list, blank=True)
    pages_count = models.PositiveIntegerField(null=True, blank=True)

    is_responsive = models.BooleanField(default=False)
    has_admin_panel = models.BooleanField(default=False)
    has_database = models.BooleanField(default=False)

    hosting_info = models.TextField(blank=True)
    domain_info = models.TextField(blank=True)

    main_image = models.JSONField(null=True, blank=True)
    gallery = models.JSONField(default=list, blank=True)
    folder_id = models.CharField(max_length=20, blank=True)

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="websites",
    )
    category = models.ForeignKey(Category, on_delete=models.PROTECT, related_name="websites")

    likes = models.ManyToManyField(settings.AUTH_USER_MODEL, related_name="liked_websites", blank=True)
    views_count = models.PositiveIntegerField(default=0)

    sold_at = models.DateTimeField(null=True, blank=True)
    sold_to = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="bought_websites",
    )

    class Meta(TimeStampedModel.Meta):
        db_table = "websites"
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = unique_slug(Website, self.name, exclude_pk=self.pk)
        super().save(*args, **kwargs)

        update_fields = kwargs.get("update_fields")
        if update_fields is None or {"technologies", "features"} & set(update_fields):
            self.sync_tags()

    def sync_tags(self) -> None:
        """Rewrite the tag rows from the current ``technologies`` and ``features`` lists."""
        self.tags.all().delete()
        WebsiteTag.objects.bulk_create(
            WebsiteTag(website=self, kind=kind.value, value=value)
            for kind, values in (
                (WebsiteTagKind.TECHNOLOGY, self.technologies),
                (WebsiteTagKind.FEATURE, self.features),
            )
            for value in dict.fromkeys(str(item) for item in values or [])
        )

    @property
    def final_price(self) -> Decimal:
        return final_price(self.price, self.discount_percent)

    @property
    def attachments(self) -> list:
        """Every stored image of the website, main image first, without duplicates."""
        seen = set()
        result = []
        for attachment in [self.main_image, *(self.gallery or [])]:
            storage_id = (attachment or {}).get("storage_id")
            if storage_id and storage_id not in seen:
                seen.add(storage_id)
                result.append(attachment)
        return result

    def can_transition_to(self, status: str) -> bool:
        return status == self.status or status in STATUS_TRANSITIONS.get(self.status, set())


class WebsiteTag(models.Model):
    """One element of a website's technologies or features, queried element by element."""

    website = models.ForeignKey(Website, on_delete=models.CASCADE, related_name="tags")
    kind = models.CharField(max_length=20, choices=WebsiteTagKind.choices())
    value = models.CharField(max_length=100)

    class Meta:
        db_table = "website_tags"
        constraints = [
            models.UniqueConstraint(fields=["website", "kind", "value"], name="unique_website_tag"),
        ]
        indexes = [models.Index(fields=["kind", "value"], name="website_tag_kind_value_idx")]

    def __str__(self) -> str:
        return f"{self.kind}:{self.value}"
