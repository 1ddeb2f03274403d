"""
Views package initializer.

Imports every view from its module so urls.py can reference them as
``views.TopicListView`` and so on.
"""

from .views_pages import *  # noqa: F401, F403
from .views_topics import *  # noqa: F401, F403
from .views_accounts import *  # noqa: F401, F403
from .views_export import *  # noqa: F401, F403
