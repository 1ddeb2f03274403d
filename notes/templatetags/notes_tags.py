# notes/templatetags/notes_tags.py

from django import template
from django.utils.html import format_html

from ..models import Snippet, Topic

register = template.Library()

CATEGORY_LABELS = dict(Topic.CATEGORIES)


@register.filter
def shell_prompt(value, prompt='$'):
    """
    Prefixes each non-empty line with a shell prompt.
    Continuation lines (previous line ending in a backslash) are left alone.
    """
    if not value:
        return ''
    lines = []
    continued = False
    for line in str(value).splitlines():
        if line.strip() and not continued:
            lines.append(f"{prompt} {line}")
        else:
            lines.append(line)
        continued = line.rstrip().endswith('\\')
    return '\n'.join(lines)


@register.filter
def fence_language(kind):
    """Maps a snippet kind to the language class used by the highlighter."""
    return Snippet.FENCE_LANGUAGES.get(kind, '') or 'plaintext'


@register.simple_tag
def category_badge(category):
    label = CATEGORY_LABELS.get(category, category)
    return format_html('<span class="badge badge-{}">{}</span>', str(category).lower(), label)
