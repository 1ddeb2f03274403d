import importlib

import pytest
from django.urls import reverse

from notes.models import Reference, Snippet, Topic


def topic_post_data(**overrides):
    data = {
        'title': 'Generic views',
        'category': 'VIEWS',
        'summary': 'ListView and DetailView',
        'body': 'Use <b>ListView</b> for lists.',
        'order': 3,
        'is_published': 'on',
        'snippets-TOTAL_FORMS': '1',
        'snippets-INITIAL_FORMS': '0',
        'snippets-MIN_NUM_FORMS': '0',
        'snippets-MAX_NUM_FORMS': '1000',
        'snippets-0-order': '0',
        'snippets-0-kind': 'PYTHON',
        'snippets-0-filename': 'blog/views.py',
        'snippets-0-code': 'class PostListView(ListView):\n    model = Post',
        'references-TOTAL_FORMS': '1',
        'references-INITIAL_FORMS': '0',
        'references-MIN_NUM_FORMS': '0',
        'references-MAX_NUM_FORMS': '1000',
        'references-0-title': 'Generic display views',
        'references-0-url': 'https://docs.djangoproject.com/en/5.2/ref/class-based-views/generic-display/',
    }
    data.update(overrides)
    return data


@pytest.mark.django_db
class TestHomeView:

    def test_renders_latest_topics(self, client, topic, draft):
        response = client.get(reverse('notes:home'))
        assert response.status_code == 200
        assert list(response.context['latest_topics']) == [topic]
        assert response.context['topic_total'] == 1
        counts = {value: count for value, _label, count in response.context['category_counts']}
        assert counts['MODELS'] == 1
        assert counts['ADMIN'] == 0

    def test_uses_base_template(self, client):
        response = client.get(reverse('notes:home'))
        assert 'base.html' in [t.name for t in response.templates]
        assert 'partials/_navbar.html' in [t.name for t in response.templates]
        assert response.context['app_version']
        assert response.context['SITE_NAME'] == 'DjangoNotes'


@pytest.mark.django_db
class TestTopicListView:

    def test_anonymous_sees_published_only(self, client, topic, draft):
        response = client.get(reverse('notes:topic_list'))
        assert list(response.context['topics']) == [topic]

    def test_author_sees_own_drafts(self, client, author, topic, draft):
        client.force_login(author)
        response = client.get(reverse('notes:topic_list'))
        assert set(response.context['topics']) == {topic, draft}

    def test_other_user_does_not_see_drafts(self, client, other_user, topic, draft):
        client.force_login(other_user)
        response = client.get(reverse('notes:topic_list'))
        assert list(response.context['topics']) == [topic]

    def test_search(self, client, topic):
        Topic.objects.create(title='Static files', body='collectstatic')
        response = client.get(reverse('notes:topic_list'), {'q': 'collectstatic'})
        assert [t.title for t in response.context['topics']] == ['Static files']
        assert response.context['query'] == 'collectstatic'

    def test_category_filter(self, client, topic):
        Topic.objects.create(title='Admin actions', category='ADMIN')
        response = client.get(reverse('notes:topic_list'), {'category': 'ADMIN'})
        assert [t.title for t in response.context['topics']] == ['Admin actions']

    def test_pagination(self, client, settings):
        settings.NOTES_PAGE_SIZE = 2
        for index in range(5):
            Topic.objects.create(title=f'Topic {index}', order=index)
        response = client.get(reverse('notes:topic_list'), {'page': 3})
        assert response.context['is_paginated']
        assert [t.title for t in response.context['topics']] == ['Topic 4']


@pytest.mark.django_db
class TestTopicDetailView:

    def test_renders_snippets_and_references(self, client, topic):
        response = client.get(topic.get_absolute_url())
        assert response.status_code == 200
        content = response.content.decode()
        assert 'accounts/models.py' in content
        assert '$ python manage.py migrate' in content
        assert 'https://docs.djangoproject.com/en/5.2/topics/auth/customizing/' in content
        assert not response.context['can_edit']

    def test_draft_hidden_from_others(self, client, other_user, draft):
        assert client.get(draft.get_absolute_url()).status_code == 404
        client.force_login(other_user)
        assert client.get(draft.get_absolute_url()).status_code == 404

    def test_draft_visible_to_author(self, client, author, draft):
        client.force_login(author)
        response = client.get(draft.get_absolute_url())
        assert response.status_code == 200
        assert response.context['can_edit']

    def test_missing_topic(self, client, db):
        assert client.get(reverse('notes:topic_detail', args=['nope'])).status_code == 404


@pytest.mark.django_db
class TestTopicCreateView:

    def test_login_required(self, client):
        response = client.get(reverse('notes:topic_create'))
        assert response.status_code == 302
        assert response.url.startswith(reverse('login'))

    def test_form_renders(self, client, author):
        client.force_login(author)
        response = client.get(reverse('notes:topic_create'))
        assert response.status_code == 200
        assert 'snippet_formset' in response.context
        assert 'reference_formset' in response.context

    def test_creates_topic_with_snippets_and_references(self, client, author):
        client.force_login(author)
        response = client.post(reverse('notes:topic_create'), topic_post_data())
        topic = Topic.objects.get(slug='generic-views')
        assert response.status_code == 302
        assert response.url == topic.get_absolute_url()
        assert topic.author == author
        assert topic.body == 'Use ListView for lists.'
        assert topic.snippets.get().filename == 'blog/views.py'
        assert topic.references.get().title == 'Generic display views'

    def test_invalid_formset_rerenders(self, client, author):
        client.force_login(author)
        response = client.post(reverse('notes:topic_create'), topic_post_data(**{'references-0-url': 'not a url'}))
        assert response.status_code == 200
        assert not response.context['reference_formset'].is_valid()
        assert Topic.objects.count() == 0

    def test_blank_title_rejected(self, client, author):
        client.force_login(author)
        response = client.post(reverse('notes:topic_create'), topic_post_data(title='<i></i>'))
        assert response.status_code == 200
        assert 'title' in response.context['form'].errors


@pytest.mark.django_db
class TestTopicUpdateAndDelete:

    def test_author_can_update(self, client, author, topic):
        client.force_login(author)
        snippet_ids = list(topic.snippets.values_list('id', flat=True))
        reference_id = topic.references.get().id
        data = topic_post_data(**{
            'title': 'Custom user model',
            'snippets-TOTAL_FORMS': '2',
            'snippets-INITIAL_FORMS': '2',
            'snippets-0-id': str(snippet_ids[0]),
            'snippets-0-topic': str(topic.id),
            'snippets-0-code': 'class CustomUser(AbstractUser):\n    language = models.CharField(max_length=10)',
            'snippets-0-filename': 'accounts/models.py',
            'snippets-1-id': str(snippet_ids[1]),
            'snippets-1-topic': str(topic.id),
            'snippets-1-order': '1',
            'snippets-1-kind': 'SHELL',
            'snippets-1-code': 'python manage.py migrate',
            'snippets-1-DELETE': 'on',
            'references-INITIAL_FORMS': '1',
            'references-0-id': str(reference_id),
            'references-0-topic': str(topic.id),
        })
        response = client.post(reverse('notes:topic_update', args=[topic.slug]), data)
        assert response.status_code == 302
        topic.refresh_from_db()
        assert topic.category == 'VIEWS'
        assert list(topic.snippets.values_list('id', flat=True)) == [snippet_ids[0]]
        assert 'language' in topic.snippets.get().code
        assert topic.references.get().title == 'Generic display views'

    def test_other_user_forbidden(self, client, other_user, topic):
        client.force_login(other_user)
        assert client.get(reverse('notes:topic_update', args=[topic.slug])).status_code == 403
        assert client.post(reverse('notes:topic_delete', args=[topic.slug])).status_code == 403
        assert Topic.objects.filter(pk=topic.pk).exists()

    def test_staff_can_edit_any_topic(self, client, staff_user, topic):
        client.force_login(staff_user)
        assert client.get(reverse('notes:topic_update', args=[topic.slug])).status_code == 200

    def test_delete(self, client, author, topic):
        client.force_login(author)
        assert client.get(reverse('notes:topic_delete', args=[topic.slug])).status_code == 200
        response = client.post(reverse('notes:topic_delete', args=[topic.slug]), follow=True)
        assert response.redirect_chain[-1][0] == reverse('notes:topic_list')
        assert not Topic.objects.exists()
        assert not Snippet.objects.exists()
        assert not Reference.objects.exists()
        assert any('was deleted' in str(m) for m in response.context['messages'])


@pytest.mark.django_db
class TestTopicMarkdownView:

    def test_download(self, client, topic):
        response = client.get(reverse('notes:topic_markdown', args=[topic.slug]))
        assert response.status_code == 200
        assert response['Content-Type'].startswith('text/markdown')
        assert response['Content-Disposition'] == 'attachment; filename="custom-user-model.md"'
        assert response.content.decode().startswith('## Custom user model')

    def test_draft_not_downloadable_by_anonymous(self, client, draft):
        assert client.get(reverse('notes:topic_markdown', args=[draft.slug])).status_code == 404


@pytest.mark.django_db
class TestAccounts:

    def test_signup_logs_in(self, client, django_user_model):
        response = client.post(reverse('notes:signup'), {
            'username': 'carol',
            'email': 'carol@example.com',
            'language': 'pt-br',
            'password1': 'a-Long-passw0rd',
            'password2': 'a-Long-passw0rd',
        })
        assert response.status_code == 302
        user = django_user_model.objects.get(username='carol')
        assert user.language == 'pt-br'
        assert client.get(reverse('notes:profile')).status_code == 200

    def test_signup_redirects_authenticated(self, client, author):
        client.force_login(author)
        response = client.get(reverse('notes:signup'))
        assert response.status_code == 302

    def test_profile_update(self, client, author):
        client.force_login(author)
        response = client.post(reverse('notes:profile'), {
            'first_name': 'Alice',
            'last_name': 'Liddell',
            'email': 'alice@example.com',
            'language': 'en',
            'bio': '<script>x</script>Writes notes',
        })
        assert response.status_code == 302
        author.refresh_from_db()
        assert author.last_name == 'Liddell'
        assert '<script>' not in author.bio

    def test_profile_requires_login(self, client, db):
        assert client.get(reverse('notes:profile')).status_code == 302

    def test_login_page_extends_base(self, client, db):
        response = client.get(reverse('login'))
        assert response.status_code == 200
        assert 'base.html' in [t.name for t in response.templates]

    def test_user_language_activated(self, client, author):
        author.language = 'pt-br'
        author.save()
        client.force_login(author)
        response = client.get(reverse('notes:home'))
        assert response.wsgi_request.LANGUAGE_CODE == 'pt-br'


def test_root_urls_leave_static_files_to_staticfiles(settings):
    from notes_project import urls

    settings.DEBUG = True
    try:
        importlib.reload(urls)
        assert [str(pattern.pattern) for pattern in urls.urlpatterns] == ['admin/', 'accounts/', '']
    finally:
        settings.DEBUG = False
        importlib.reload(urls)
