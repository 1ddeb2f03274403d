# notes/management/commands/import_notes.py
"""
Django management command to import topics from a markdown notebook.

Usage:
    python manage.py import_notes django-notes.md
    python manage.py import_notes django-notes.md --replace --author alice
"""

from pathlib import Path

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError

from notes.exceptions import NotesError
from notes.markdown_io import import_topics, parse_markdown


class Command(BaseCommand):
    help = 'Imports topics, snippets and references from a markdown file'

    def add_arguments(self, parser):
        parser.add_argument('path', type=str, help='Markdown file to import')
        parser.add_argument(
            '--replace',
            action='store_true',
            help='Overwrite topics whose slug matches a heading instead of adding copies'
        )
        parser.add_argument(
            '--author',
            type=str,
            help='Username recorded as author of new topics'
        )
        parser.add_argument(
            '--unpublished',
            action='store_true',
            help='Import topics as drafts'
        )

    def handle(self, *args, **options):
        path = Path(options['path'])
        if not path.is_file():
            raise CommandError(f"File not found: {path}")

        author = None
        if options.get('author'):
            UserModel = get_user_model()
            try:
                author = UserModel.objects.get(username=options['author'])
            except UserModel.DoesNotExist:
                raise CommandError(f"User '{options['author']}' does not exist")

        try:
            parsed = parse_markdown(path.read_text(encoding='utf-8'))
        except NotesError as e:
            raise CommandError(f"{path}: {e}") from e

        if not parsed:
            self.stdout.write(self.style.WARNING(f"No '## ' topics found in {path}"))
            return

        topics = import_topics(
            parsed,
            author=author,
            replace=options['replace'],
            publish=not options['unpublished'],
        )

        for topic in topics:
            self.stdout.write(f"   - {topic.slug}")
        self.stdout.write(self.style.SUCCESS(f"[OK] Imported {len(topics)} topic(s) from {path}"))
