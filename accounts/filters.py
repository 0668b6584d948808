import django_filters
from django.contrib.auth import get_user_model
from django.db.models import Q

from core.enums import UserRole

User = get_user_model()


class UserFilter(django_filters.FilterSet):
    search = django_filters.CharFilter(method="filter_search")
    role = django_filters.ChoiceFilter(choices=UserRole.choices())

    class Meta:
        model = User
        fields = {
            "is_active": ["exact"],
            "created_at": ["gte", "lte"],
        }

    def filter_search(self, queryset, name, value):
        """Search by name or email."""
        return queryset.filter(Q(name__icontains=value) | Q(email__icontains=value))
