# notes/models.py

from django.db import models
from django.conf import settings
from django.contrib.auth.models import AbstractUser
from django.urls import reverse
from django.utils import timezone
from django.utils.text import slugify
from django.utils.translation import gettext_lazy as _

# --- Category Constants ---

CATEGORY_SETUP = 'SETUP'
CATEGORY_APPS = 'APPS'
CATEGORY_MODELS = 'MODELS'
CATEGORY_ADMIN = 'ADMIN'
CATEGORY_VIEWS = 'VIEWS'
CATEGORY_TEMPLATES = 'TEMPLATES'
CATEGORY_STATIC = 'STATIC'
CATEGORY_OTHER = 'OTHER'

# --- Snippet Kind Constants ---

KIND_SHELL = 'SHELL'
KIND_PYTHON = 'PYTHON'
KIND_TEMPLATE = 'TEMPLATE'
KIND_TEXT = 'TEXT'


# --- Custom User Model ---
class CustomUser(AbstractUser):
    language = models.CharField(
        max_length=10,
        default='en',
        choices=[
            ('en', 'English'),
            ('pt-br', 'Português (Brasil)'),
        ],
        help_text=_("User's preferred language")
    )
    bio = models.TextField(blank=True, help_text=_("A few words shown on your topics"))

    def display_name(self):
        return self.get_full_name() or self.username


# --- Notebook Models ---

class PublishedTopicManager(models.Manager):
    def get_queryset(self):
        return super().get_queryset().filter(is_published=True)


class Topic(models.Model):
    """
    One how-to section of the notebook.
    Holds the prose; code listings and documentation links hang off it as
    Snippets and References.
    """
    CATEGORIES = [
        (CATEGORY_SETUP, _('Project setup')),
        (CATEGORY_APPS, _('Apps')),
        (CATEGORY_MODELS, _('Models & users')),
        (CATEGORY_ADMIN, _('Admin site')),
        (CATEGORY_VIEWS, _('Views')),
        (CATEGORY_TEMPLATES, _('Templates')),
        (CATEGORY_STATIC, _('Static files')),
        (CATEGORY_OTHER, _('Other')),
    ]

    title = models.CharField(max_length=200)
    slug = models.SlugField(max_length=220, unique=True, blank=True)
    category = models.CharField(max_length=20, choices=CATEGORIES, default=CATEGORY_OTHER)
    summary = models.CharField(max_length=300, blank=True)
    body = models.TextField(blank=True, help_text=_("Plain text; HTML is stripped"))

    # For ordering topics the way the notes read
    order = models.PositiveIntegerField(default=0, db_index=True)

    is_published = models.BooleanField(default=True)
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='topics'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = models.Manager()
    published = PublishedTopicManager()

    class Meta:
        ordering = ['order', 'title']
        verbose_name = _("Topic")
        verbose_name_plural = _("Topics")

    def __str__(self):
        return self.title

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = self.unique_slug(self.title, exclude_pk=self.pk)
        super().save(*args, **kwargs)

    def get_absolute_url(self):
        return reverse('notes:topic_detail', kwargs={'slug': self.slug})

    @classmethod
    def base_slug(cls, title):
        max_length = cls._meta.get_field('slug').max_length
        return slugify(title)[:max_length - 5] or 'topic'

    @classmethod
    def unique_slug(cls, title, exclude_pk=None):
        """Slugify the title, appending -2, -3, ... until no other topic uses it."""
        base = cls.base_slug(title)
        candidate = base
        suffix = 2
        others = cls.objects.all()
        if exclude_pk is not None:
            others = others.exclude(pk=exclude_pk)
        while others.filter(slug=candidate).exists():
            candidate = f"{base}-{suffix}"
            suffix += 1
        return candidate

    def can_edit(self, user):
        """Staff can edit every topic; authors can edit their own."""
        if not user.is_authenticated:
            return False
        return user.is_staff or (self.author_id is not None and self.author_id == user.pk)


class Snippet(models.Model):
    """An ordered code or command listing inside a Topic."""
    KINDS = [
        (KIND_SHELL, _('Shell commands')),
        (KIND_PYTHON, _('Python')),
        (KIND_TEMPLATE, _('Template')),
        (KIND_TEXT, _('Plain text')),
    ]

    # Fence language used when rendering to markdown
    FENCE_LANGUAGES = {
        KIND_SHELL: 'bash',
        KIND_PYTHON: 'python',
        KIND_TEMPLATE: 'html',
        KIND_TEXT: '',
    }

    topic = models.ForeignKey(Topic, on_delete=models.CASCADE, related_name='snippets')
    kind = models.CharField(max_length=10, choices=KINDS, default=KIND_SHELL)
    filename = models.CharField(
        max_length=255,
        blank=True,
        help_text=_("File this snippet belongs in, e.g. myapp/models.py")
    )
    code = models.TextField()
    order = models.PositiveIntegerField(default=0, db_index=True)

    class Meta:
        ordering = ['order', 'id']

    def __str__(self):
        label = self.filename or self.get_kind_display()
        return f"{self.topic.title}: {label}"

    @property
    def language(self):
        return self.FENCE_LANGUAGES.get(self.kind, '')


class Reference(models.Model):
    """Link to official documentation, checked periodically for rot."""
    topic = models.ForeignKey(Topic, on_delete=models.CASCADE, related_name='references')
    title = models.CharField(max_length=200)
    url = models.URLField(max_length=500)
    last_status = models.PositiveSmallIntegerField(null=True, blank=True)
    last_checked_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ['id']

    def __str__(self):
        return f"{self.title} ({self.url})"

    @property
    def is_broken(self):
        if self.last_checked_at is None:
            return False
        return self.last_status is None or self.last_status >= 400

    def mark_checked(self, status):
        self.last_status = status
        self.last_checked_at = timezone.now()
        self.save(update_fields=['last_status', 'last_checked_at'])
