from django.apps import AppConfig
import logging

logger = logging.getLogger(__name__)


class NotesConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'notes'
    verbose_name = 'Notes'

    def ready(self):
        """
        Called once the app registry is populated.

        Connects the Topic signals that push live updates and logs which
        database engine is in use.
        """
        from . import signals  # noqa: F401
        from django.conf import settings

        db_config = settings.DATABASES['default']
        engine = db_config.get('ENGINE', 'unknown').rsplit('.', 1)[-1]
        if engine == 'postgresql':
            logger.debug(
                f"[STARTUP] Using PostgreSQL database: {db_config.get('NAME')}@{db_config.get('HOST')}:{db_config.get('PORT')}"
            )
        else:
            logger.debug(f"[STARTUP] Using {engine} database: {db_config.get('NAME', 'unknown')}")
