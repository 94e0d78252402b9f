import django_filters
from django.db.models import Q

from modules.gifts.models import Gift, GiftCategory, GiftGender

SORTABLE_FIELDS = {
    "createdAt": "created_at",
    "name": "name",
    "price": "price",
    "rating": "rating",
    "discount": "discount",
    "stockCount": "stock_count",
    "estimatedDeliveryTime": "estimated_delivery_time",
}


class GiftFilter(django_filters.FilterSet):
    """Public catalog filters.

    ``gender`` also matches unisex gifts.  ``age``, ``minPrice`` and
    ``maxPrice`` are ignored unless positive.  ``sortBy`` / ``sortOrder``
    default to newest first.
    """

    category = django_filters.ChoiceFilter(field_name="category", choices=GiftCategory.choices)
    gender = django_filters.CharFilter(method="filter_gender")
    age = django_filters.NumberFilter(method="filter_age")
    minPrice = django_filters.NumberFilter(method="filter_min_price")
    maxPrice = django_filters.NumberFilter(method="filter_max_price")

    class Meta:
        model = Gift
        fields = ["category", "gender", "age", "minPrice", "maxPrice"]

    def filter_gender(self, queryset, name, value):
        if value not in GiftGender.values:
            return queryset
        return queryset.filter(Q(gender=value) | Q(gender=GiftGender.UNISEX))

    def filter_age(self, queryset, name, value):
        if value <= 0:
            return queryset
        return queryset.filter(age_min__lte=value, age_max__gte=value)

    def filter_min_price(self, queryset, name, value):
        return queryset.filter(price__gte=value) if value > 0 else queryset

    def filter_max_price(self, queryset, name, value):
        return queryset.filter(price__lte=value) if value > 0 else queryset

    def filter_queryset(self, queryset):
        queryset = super().filter_queryset(queryset)
        field = SORTABLE_FIELDS.get(self.data.get("sortBy"), "created_at")
        prefix = "" if self.data.get("sortOrder") == "asc" else "-"
        return queryset.order_by(f"{prefix}{field}", f"{prefix}id")
