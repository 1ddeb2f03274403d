from django.conf import settings

from .models import Topic

VERSION = "1.0.0"


def app_version(request):
    """Context processor that provides the application version."""
    return {'app_version': VERSION}


def site_settings(request):
    """Site name and the topic categories, for the navbar and footer."""
    return {
        'SITE_NAME': getattr(settings, 'NOTES_SITE_NAME', 'DjangoNotes'),
        'TOPIC_CATEGORIES': Topic.CATEGORIES,
    }
