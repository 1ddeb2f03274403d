# notes/management/commands/export_notes.py
"""
Django management command to export topics as one markdown notebook.

Usage:
    python manage.py export_notes
    python manage.py export_notes --output notes.md --category ADMIN --all
"""

from pathlib import Path

from django.core.management.base import BaseCommand, CommandError

from notes.markdown_io import render_topics
from notes.models import Topic


class Command(BaseCommand):
    help = 'Exports topics to markdown (stdout by default)'

    def add_arguments(self, parser):
        parser.add_argument('--output', '-o', type=str, help='Write to this file instead of stdout')
        parser.add_argument(
            '--category',
            type=str,
            choices=[value for value, _label in Topic.CATEGORIES],
            help='Only export one category'
        )
        parser.add_argument('--all', action='store_true', help='Include unpublished topics')
        parser.add_argument('--title', type=str, default='Django notes', help='Document title')

    def handle(self, *args, **options):
        manager = Topic.objects if options['all'] else Topic.published
        topics = manager.prefetch_related('snippets', 'references')
        if options.get('category'):
            topics = topics.filter(category=options['category'])

        document = render_topics(topics, title=options['title'])

        if not options.get('output'):
            self.stdout.write(document, ending='')
            return

        output = Path(options['output'])
        try:
            output.write_text(document, encoding='utf-8')
        except OSError as e:
            raise CommandError(f"Could not write {output}: {e}") from e

        self.stdout.write(self.style.SUCCESS(f"[OK] Exported {topics.count()} topic(s) to {output}"))
