from unittest import mock

import pytest
from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.contrib import admin
from django.urls import reverse

from notes.admin import CustomUserAdmin, ReferenceAdmin, TopicAdmin
from notes.broadcast import topic_group_name
from notes.models import CustomUser, Reference, Snippet, Topic


def test_models_registered():
    assert isinstance(admin.site._registry[CustomUser], CustomUserAdmin)
    assert isinstance(admin.site._registry[Topic], TopicAdmin)
    assert isinstance(admin.site._registry[Reference], ReferenceAdmin)


def test_site_header():
    assert str(admin.site.site_header) == 'DjangoNotes administration'


@pytest.mark.django_db
class TestTopicAdmin:

    def test_changelist(self, admin_client, topic):
        response = admin_client.get(reverse('admin:notes_topic_changelist'))
        assert response.status_code == 200
        assert 'Custom user model' in response.content.decode()

    def test_snippet_count_column(self, admin_client, topic):
        response = admin_client.get(reverse('admin:notes_topic_changelist'))
        result = response.context['cl'].result_list.get(pk=topic.pk)
        assert result._snippet_count == 2

    def test_change_page_has_inlines(self, admin_client, topic):
        response = admin_client.get(reverse('admin:notes_topic_change', args=[topic.pk]))
        assert response.status_code == 200
        inline_models = [formset.opts.model for formset in response.context['inline_admin_formsets']]
        assert inline_models == [Snippet, Reference]

    def test_add_sets_author(self, admin_client, admin_user):
        response = admin_client.post(reverse('admin:notes_topic_add'), {
            'title': 'Admin actions',
            'slug': 'admin-actions',
            'category': 'ADMIN',
            'summary': '',
            'body': '',
            'order': '0',
            'is_published': 'on',
            'snippets-TOTAL_FORMS': '0',
            'snippets-INITIAL_FORMS': '0',
            'references-TOTAL_FORMS': '0',
            'references-INITIAL_FORMS': '0',
        })
        assert response.status_code == 302
        assert Topic.objects.get(slug='admin-actions').author == admin_user

    def test_publish_actions(self, admin_client, topic, draft, django_capture_on_commit_callbacks):
        url = reverse('admin:notes_topic_changelist')
        layer = get_channel_layer()
        channel = async_to_sync(layer.new_channel)()
        async_to_sync(layer.group_add)(topic_group_name(topic.slug), channel)

        with django_capture_on_commit_callbacks(execute=True):
            admin_client.post(url, {'action': 'make_unpublished', '_selected_action': [topic.pk]})
        topic.refresh_from_db()
        assert not topic.is_published

        event = async_to_sync(layer.receive)(channel)
        assert event['message']['type'] == 'topic_updated'
        assert event['message']['data']['is_published'] is False

        admin_client.post(url, {'action': 'make_published', '_selected_action': [topic.pk, draft.pk]})
        assert Topic.published.count() == 2


@pytest.mark.django_db
class TestUserAdmin:

    def test_change_page_shows_preferences(self, admin_client, author):
        response = admin_client.get(reverse('admin:notes_customuser_change', args=[author.pk]))
        assert response.status_code == 200
        content = response.content.decode()
        assert 'name="language"' in content
        assert 'name="bio"' in content

    def test_add_user(self, admin_client, django_user_model):
        response = admin_client.post(reverse('admin:notes_customuser_add'), {
            'username': 'dave',
            'email': 'dave@example.com',
            'password1': 'a-Long-passw0rd',
            'password2': 'a-Long-passw0rd',
            'language': 'pt-br',
        })
        assert response.status_code == 302
        assert django_user_model.objects.get(username='dave').language == 'pt-br'

    def test_language_filter(self, admin_client, author):
        response = admin_client.get(reverse('admin:notes_customuser_changelist'), {'language__exact': 'en'})
        assert response.status_code == 200


@pytest.mark.django_db
def test_reference_check_action(admin_client, topic):
    reference = topic.references.get()
    with mock.patch('notes.link_checker.fetch_status', return_value=200):
        response = admin_client.post(
            reverse('admin:notes_reference_changelist'),
            {'action': 'check_selected', '_selected_action': [reference.pk]},
            follow=True,
        )
    reference.refresh_from_db()
    assert reference.last_status == 200
    assert any('1 ok, 0 broken' in str(m) for m in response.context['messages'])
