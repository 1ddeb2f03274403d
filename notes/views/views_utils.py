from django.db.models import Count, Q

from ..models import Topic


def visible_topics(user):
    """
    Published topics, plus the user's own drafts.
    Staff see drafts from everyone.
    """
    queryset = Topic.objects.select_related('author')
    if user.is_authenticated and user.is_staff:
        return queryset
    if user.is_authenticated:
        return queryset.filter(Q(is_published=True) | Q(author=user))
    return queryset.filter(is_published=True)


def search_topics(queryset, query):
    query = (query or '').strip()
    if not query:
        return queryset
    return queryset.filter(
        Q(title__icontains=query) | Q(summary__icontains=query) | Q(body__icontains=query)
    )


def get_category_counts():
    """List of (value, label, count) for every category, in declaration order."""
    counts = dict(
        Topic.published.order_by().values('category').annotate(total=Count('id')).values_list('category', 'total')
    )
    return [(value, label, counts.get(value, 0)) for value, label in Topic.CATEGORIES]
