import django_filters

from modules.products.models import Product


class ProductFilter(django_filters.FilterSet):
    name = django_filters.CharFilter(field_name="name", lookup_expr="icontains")
    min_price = django_filters.NumberFilter(field_name="price", lookup_expr="gte")
    max_price = django_filters.NumberFilter(field_name="price", lookup_expr="lte")
    kind = django_filters.ChoiceFilter(
        choices=[("leaf", "Leaf"), ("bundle", "Bundle")],
        method="filter_kind",
    )

    class Meta:
        model = Product
        fields = ["name", "min_price", "max_price", "kind"]

    def filter_kind(self, queryset, name, value):
        is_leaf = value == "leaf"
        return queryset.filter(source_links__isnull=is_leaf).distinct()
