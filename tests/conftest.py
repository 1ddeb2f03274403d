import pytest

from notes.models import Reference, Snippet, Topic, KIND_PYTHON, KIND_SHELL, CATEGORY_MODELS


@pytest.fixture
def author(django_user_model):
    return django_user_model.objects.create_user(username='alice', password='s3cret-pass', first_name='Alice')


@pytest.fixture
def other_user(django_user_model):
    return django_user_model.objects.create_user(username='bob', password='s3cret-pass')


@pytest.fixture
def staff_user(django_user_model):
    return django_user_model.objects.create_user(username='staff', password='s3cret-pass', is_staff=True)


@pytest.fixture
def topic(author):
    topic = Topic.objects.create(
        title='Custom user model',
        category=CATEGORY_MODELS,
        summary='Subclass AbstractUser before the first migrate.',
        body='Define it at the start of every project.',
        author=author,
    )
    Snippet.objects.create(topic=topic, kind=KIND_PYTHON, filename='accounts/models.py',
                           code='class CustomUser(AbstractUser):\n    pass', order=0)
    Snippet.objects.create(topic=topic, kind=KIND_SHELL, code='python manage.py migrate', order=1)
    Reference.objects.create(topic=topic, title='Customizing auth',
                             url='https://docs.djangoproject.com/en/5.2/topics/auth/customizing/')
    return topic


@pytest.fixture
def draft(author):
    return Topic.objects.create(title='Unfinished draft', body='todo', author=author, is_published=False)
