from django.views.generic import TemplateView

from ..models import Topic
from .views_utils import get_category_counts

__all__ = ['HomeView']


class HomeView(TemplateView):
    template_name = 'notes/home.html'
    latest_count = 5

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context['latest_topics'] = Topic.published.select_related('author').order_by('-updated_at')[:self.latest_count]
        context['category_counts'] = get_category_counts()
        context['topic_total'] = Topic.published.count()
        return context
