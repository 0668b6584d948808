from typing import Optional, Type

from django.db import models
from django.utils.text import slugify


def unique_slug(
    model: Type[models.Model],
    value: str,
    *,
    exclude_pk: Optional[int] = None,
    max_length: int = 150,
) -> str:
    """Slugify ``value`` and append ``-2``, ``-3``... until no other row uses it."""

    base = slugify(value)[:max_length].strip("-") or "item"
    queryset = model._default_manager.all()
    if exclude_pk is not None:
        queryset = queryset.exclude(pk=exclude_pk)

    candidate = base
    suffix = 2
    while queryset.filter(slug=candidate).exists():
        tail = f"-{suffix}"
        candidate = f"{base[: max_length - len(tail)]}{tail}"
        suffix += 1
    return candidate
