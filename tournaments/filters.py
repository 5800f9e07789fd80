import django_filters

from .models import Tournament


class TournamentFilter(django_filters.FilterSet):
    title = django_filters.CharFilter(lookup_expr="icontains")
    game = django_filters.CharFilter(lookup_expr="iexact")

    class Meta:
        model = Tournament
        fields = {
            "game_type": ["exact"],
            "date": ["gte", "lte"],
        }
