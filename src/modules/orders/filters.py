import django_filters

from modules.orders.constants import OrderStatus
from modules.orders.models import Order


class OrderFilter(django_filters.FilterSet):
    """Filters for the caller's order list."""

    status = django_filters.ChoiceFilter(field_name="status", choices=OrderStatus.choices)

    class Meta:
        model = Order
        fields = ["status"]
