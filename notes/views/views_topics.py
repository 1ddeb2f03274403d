import logging

from django.conf import settings
from django.contrib import messages
from django.contrib.auth.mixins import LoginRequiredMixin
from django.core.exceptions import PermissionDenied
from django.db import transaction as db_transaction
from django.http import Http404
from django.shortcuts import redirect
from django.urls import reverse_lazy
from django.utils.translation import gettext as _, gettext_lazy
from django.views.generic import CreateView, DeleteView, DetailView, ListView, UpdateView

from ..forms import ReferenceFormSet, SnippetFormSet, TopicForm
from ..models import Topic
from .views_utils import search_topics, visible_topics

logger = logging.getLogger(__name__)

__all__ = [
    'TopicListView', 'TopicDetailView', 'TopicCreateView',
    'TopicUpdateView', 'TopicDeleteView',
]


class TopicListView(ListView):
    model = Topic
    context_object_name = 'topics'
    template_name = 'notes/topic_list.html'

    def get_paginate_by(self, queryset):
        return getattr(settings, 'NOTES_PAGE_SIZE', 10)

    def get_queryset(self):
        queryset = visible_topics(self.request.user)
        queryset = search_topics(queryset, self.request.GET.get('q'))

        category = self.request.GET.get('category')
        if category:
            queryset = queryset.filter(category=category)
        return queryset

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context['query'] = self.request.GET.get('q', '')
        context['active_category'] = self.request.GET.get('category', '')
        return context


class TopicDetailView(DetailView):
    model = Topic
    context_object_name = 'topic'
    template_name = 'notes/topic_detail.html'

    def get_queryset(self):
        return Topic.objects.select_related('author').prefetch_related('snippets', 'references')

    def get_object(self, queryset=None):
        topic = super().get_object(queryset)
        # Drafts are only visible to people who can edit them
        if not topic.is_published and not topic.can_edit(self.request.user):
            raise Http404(_("No topic found matching the query"))
        return topic

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context['can_edit'] = self.object.can_edit(self.request.user)
        return context


class TopicFormsetMixin:
    """Handles the snippet and reference formsets alongside TopicForm."""
    form_class = TopicForm
    template_name = 'notes/topic_form.html'

    def get_formsets(self):
        kwargs = {'instance': self.object}
        if self.request.method == 'POST':
            kwargs['data'] = self.request.POST
        return (
            SnippetFormSet(prefix='snippets', **kwargs),
            ReferenceFormSet(prefix='references', **kwargs),
        )

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        if 'snippet_formset' not in context:
            context['snippet_formset'], context['reference_formset'] = self.get_formsets()
        return context

    def form_valid(self, form):
        snippet_formset, reference_formset = self.get_formsets()
        if not (snippet_formset.is_valid() and reference_formset.is_valid()):
            return self.render_to_response(self.get_context_data(
                form=form,
                snippet_formset=snippet_formset,
                reference_formset=reference_formset,
            ))

        with db_transaction.atomic():
            self.object = form.save()
            snippet_formset.instance = self.object
            snippet_formset.save()
            reference_formset.instance = self.object
            reference_formset.save()

        messages.success(self.request, self.success_message % {'title': self.object.title})
        return redirect(self.object.get_absolute_url())


class TopicCreateView(LoginRequiredMixin, TopicFormsetMixin, CreateView):
    model = Topic
    success_message = gettext_lazy("Topic '%(title)s' was created.")

    def form_valid(self, form):
        form.instance.author = self.request.user
        logger.info(f"[TOPIC] {self.request.user.username} creating topic '{form.cleaned_data['title']}'")
        return super().form_valid(form)


class TopicEditPermissionMixin:
    """Only staff or the topic's author may change it."""

    def get_object(self, queryset=None):
        topic = super().get_object(queryset)
        if not topic.can_edit(self.request.user):
            logger.warning(
                f"[TOPIC] {self.request.user.username} denied access to topic '{topic.slug}'"
            )
            raise PermissionDenied
        return topic


class TopicUpdateView(LoginRequiredMixin, TopicEditPermissionMixin, TopicFormsetMixin, UpdateView):
    model = Topic
    success_message = gettext_lazy("Topic '%(title)s' was updated.")


class TopicDeleteView(LoginRequiredMixin, TopicEditPermissionMixin, DeleteView):
    model = Topic
    context_object_name = 'topic'
    template_name = 'notes/topic_confirm_delete.html'
    success_url = reverse_lazy('notes:topic_list')

    def form_valid(self, form):
        title = self.object.title
        response = super().form_valid(form)
        logger.info(f"[TOPIC] {self.request.user.username} deleted topic '{title}'")
        messages.success(self.request, _("Topic '%(title)s' was deleted.") % {'title': title})
        return response
