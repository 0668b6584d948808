import django_filters

from core.enums import SaleStatus

from .models import Sale


class SaleFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=SaleStatus.choices())
    buyer_id = django_filters.NumberFilter(field_name="buyer_id")
    seller_id = django_filters.NumberFilter(field_name="seller_id")
    website_id = django_filters.NumberFilter(field_name="website_id")

    class Meta:
        model = Sale
        fields = {
            "created_at": ["gte", "lte"],
        }
