import json
import os
from typing import Iterable, Tuple

import pandas as pd
from django.utils import timezone

from .models import Website

EXPORT_FIELDS = [
    "id",
    "name",
    "slug",
    "type",
    "status",
    "category",
    "created_by",
    "price",
    "original_price",
    "discount_percent",
    "final_price",
    "technologies",
    "features",
    "pages_count",
    "is_responsive",
    "has_admin_panel",
    "has_database",
    "views_count",
    "demo_url",
    "created_at",
    "sold_at",
]


def website_record(website: Website) -> dict:
    return {
        "id": website.pk,
        "name": website.name,
        "slug": website.slug,
        "type": website.type,
        "status": website.status,
        "category": website.category.name,
        "created_by": website.created_by.email,
        "price": website.price,
        "original_price": website.original_price,
        "discount_percent": website.discount_percent,
        "final_price": website.final_price,
        "technologies": json.dumps(website.technologies or [], ensure_ascii=False),
        "features": json.dumps(website.features or [], ensure_ascii=False),
        "pages_count": website.pages_count,
        "is_responsive": website.is_responsive,
        "has_admin_panel": website.has_admin_panel,
        "has_database": website.has_database,
        "views_count": website.views_count,
        "demo_url": website.demo_url,
        "created_at": website.created_at.isoformat() if website.created_at else None,
        "sold_at": website.sold_at.isoformat() if website.sold_at else None,
    }


def export_websites_csv(websites: Iterable[Website], directory: str) -> Tuple[str, str]:
    """Write ``websites`` to a timestamped CSV file; return ``(path, file_name)``."""

    df = pd.DataFrame([website_record(website) for website in websites], columns=EXPORT_FIELDS)

    file_name = f"websites_{timezone.now().strftime('%Y%m%d_%H%M%S')}.csv"
    os.makedirs(directory, exist_ok=True)
    path = os.path.join(directory, file_name)
    df.to_csv(path, index=False)
    return path, file_name
