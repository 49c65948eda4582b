import django_filters

from .models import Film


class FilmFilter(django_filters.FilterSet):
    """ ?search=<title fragment>&genre=<genre fragment>&year=<year> """
    search = django_filters.CharFilter(field_name='title', lookup_expr='icontains')
    genre = django_filters.CharFilter(field_name='genre', lookup_expr='icontains')
    year = django_filters.CharFilter(field_name='year', lookup_expr='exact')
    director = django_filters.CharFilter(field_name='director', lookup_expr='icontains')

    class Meta:
        model = Film
        fields = ['search', 'genre', 'year', 'director']
