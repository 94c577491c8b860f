# products/filters.py

"""
CATALOG FILTERS

Query params (storefront names):
- search       name, description or tags contain the text
- category     category UUID
- productType  CONSUMER | BUSINESS
- minPrice / maxPrice
- inStockOnly  true -> in_stock and stock_count > 0
- minRating    needs the average_rating annotation (see services.catalog)
"""

import django_filters
from django.db.models import Q

from products.models import Product


class ProductFilter(django_filters.FilterSet):
    search = django_filters.CharFilter(method="filter_search")
    category = django_filters.UUIDFilter(field_name="category_id")
    productType = django_filters.ChoiceFilter(
        field_name="user_type",
        choices=Product.UserType.choices,
    )
    minPrice = django_filters.NumberFilter(field_name="price", lookup_expr="gte")
    maxPrice = django_filters.NumberFilter(field_name="price", lookup_expr="lte")
    inStockOnly = django_filters.BooleanFilter(method="filter_in_stock_only")
    minRating = django_filters.NumberFilter(method="filter_min_rating")

    class Meta:
        model = Product
        fields = []

    def filter_search(self, queryset, name, value):
        value = (value or "").strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(name__icontains=value)
            | Q(description__icontains=value)
            | Q(tags__icontains=value)
        )

    def filter_in_stock_only(self, queryset, name, value):
        if not value:
            return queryset
        return queryset.filter(in_stock=True, stock_count__gt=0)

    def filter_min_rating(self, queryset, name, value):
        # Ratings are shown rounded to one decimal
        return queryset.filter(average_rating__gte=float(value) - 0.05)
