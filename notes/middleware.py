# notes/middleware.py

import logging

from django.db.utils import DatabaseError
from django.utils import translation

logger = logging.getLogger(__name__)


class UserLanguageMiddleware:
    """
    Middleware to activate the user's preferred language.
    Must be placed after AuthenticationMiddleware in settings.
    """
    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        try:
            if request.user.is_authenticated:
                user_language = getattr(request.user, 'language', None)
                if user_language:
                    translation.activate(user_language)
                    request.LANGUAGE_CODE = user_language
        except DatabaseError as e:
            # Session or user table missing (e.g. before migrate); serve in the default language
            logger.warning(f"[LANGUAGE] Could not load user language: {e}")

        return self.get_response(request)
