from django.http import Http404, HttpResponse
from django.shortcuts import get_object_or_404
from django.views import View

from ..markdown_io import render_topic
from ..models import Topic

__all__ = ['TopicMarkdownView']


class TopicMarkdownView(View):
    """Download a single topic as a markdown file."""

    def get(self, request, slug):
        topic = get_object_or_404(Topic.objects.prefetch_related('snippets', 'references'), slug=slug)
        if not topic.is_published and not topic.can_edit(request.user):
            raise Http404

        response = HttpResponse(render_topic(topic), content_type='text/markdown; charset=utf-8')
        response['Content-Disposition'] = f'attachment; filename="{topic.slug}.md"'
        return response
