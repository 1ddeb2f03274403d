# notes/markdown_io.py
"""
Markdown import/export for the notebook.

A notebook file looks like the notes it came from:

    # Django notes

    ## Project setup
    <!-- category: SETUP -->

    *Bootstrap a project and run the dev server.*

    Create a virtualenv first, see [the tutorial](https://docs.djangoproject.com/...).

    ```bash
    django-admin startproject mysite
    ```

    ### References

    - [Settings](https://docs.djangoproject.com/en/5.2/topics/settings/)

Each ``## `` heading starts a topic. Fenced blocks become snippets, a
``File: path`` line right before a fence names the snippet's file, and every
``[title](http...)`` link becomes a reference.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional

from django.db import transaction as db_transaction
from django.db.models import Max

from .exceptions import MarkdownImportError
from .models import (
    Topic, Snippet, Reference,
    CATEGORY_SETUP, CATEGORY_APPS, CATEGORY_MODELS, CATEGORY_ADMIN,
    CATEGORY_VIEWS, CATEGORY_TEMPLATES, CATEGORY_STATIC, CATEGORY_OTHER,
    KIND_SHELL, KIND_PYTHON, KIND_TEMPLATE, KIND_TEXT,
)

logger = logging.getLogger(__name__)

FENCE = '```'
LINK_RE = re.compile(r'\[([^\]]+)\]\((https?://[^)\s]+)\)')
FILE_RE = re.compile(r'^File:\s*(\S.*?)\s*$')
CATEGORY_RE = re.compile(r'^<!--\s*category:\s*(\w+)\s*-->$', re.IGNORECASE)
SUMMARY_RE = re.compile(r'^(?:\*([^*].*?)\*|_([^_].*?)_)$')
PATH_COMMENT_RE = re.compile(r'^#\s*([\w./-]+\.\w+)\s*$')

# Body lines starting with these would be read back as structure, so they are
# written with a leading backslash
ESCAPE = '\\'
STRUCTURAL_PREFIXES = (ESCAPE, FENCE, '#', '<!--', 'File:', '*', '_')

FENCE_KINDS = {
    'bash': KIND_SHELL,
    'sh': KIND_SHELL,
    'shell': KIND_SHELL,
    'console': KIND_SHELL,
    'zsh': KIND_SHELL,
    'python': KIND_PYTHON,
    'py': KIND_PYTHON,
    'html': KIND_TEMPLATE,
    'django': KIND_TEMPLATE,
    'jinja': KIND_TEMPLATE,
    'htmldjango': KIND_TEMPLATE,
}

# Checked in order; first keyword found in the lowercased title wins
CATEGORY_KEYWORDS = [
    ('admin', CATEGORY_ADMIN),
    ('template', CATEGORY_TEMPLATES),
    ('static', CATEGORY_STATIC),
    ('view', CATEGORY_VIEWS),
    ('url', CATEGORY_VIEWS),
    ('model', CATEGORY_MODELS),
    ('user', CATEGORY_MODELS),
    ('app', CATEGORY_APPS),
    ('setup', CATEGORY_SETUP),
    ('project', CATEGORY_SETUP),
    ('install', CATEGORY_SETUP),
]

VALID_CATEGORIES = {value for value, _label in Topic.CATEGORIES}

TITLE_MAX_LENGTH = Topic._meta.get_field('title').max_length
SUMMARY_MAX_LENGTH = Topic._meta.get_field('summary').max_length
REFERENCE_TITLE_MAX_LENGTH = Reference._meta.get_field('title').max_length
URL_MAX_LENGTH = Reference._meta.get_field('url').max_length


@dataclass
class ParsedSnippet:
    kind: str
    code: str
    filename: str = ''


@dataclass
class ParsedReference:
    title: str
    url: str


@dataclass
class ParsedTopic:
    title: str
    category: str = CATEGORY_OTHER
    summary: str = ''
    body: str = ''
    snippets: List[ParsedSnippet] = field(default_factory=list)
    references: List[ParsedReference] = field(default_factory=list)

    def add_reference(self, title, url):
        if any(ref.url == url for ref in self.references):
            return
        self.references.append(ParsedReference(title=title.strip(), url=url))


def infer_category(title: str) -> str:
    lowered = title.lower()
    for keyword, category in CATEGORY_KEYWORDS:
        if keyword in lowered:
            return category
    return CATEGORY_OTHER


def snippet_kind(language: str, lines: List[str]) -> str:
    if language:
        return FENCE_KINDS.get(language, KIND_TEXT)
    non_empty = [line for line in lines if line.strip()]
    if non_empty and all(line.lstrip().startswith('$ ') for line in non_empty):
        return KIND_SHELL
    return KIND_TEXT


def _build_snippet(language, lines, filename):
    kind = snippet_kind(language, lines)

    if kind == KIND_SHELL:
        lines = [line.lstrip()[2:] if line.lstrip().startswith('$ ') else line for line in lines]
    elif kind == KIND_PYTHON and not filename and lines:
        # "# myapp/models.py" as first line names the file
        match = PATH_COMMENT_RE.match(lines[0].strip())
        if match:
            filename = match.group(1)
            lines = lines[1:]

    return ParsedSnippet(kind=kind, code='\n'.join(lines).strip('\n'), filename=filename or '')


def _finish_topic(topic: ParsedTopic, body_lines: List[str]) -> ParsedTopic:
    body = '\n'.join(body_lines).strip()
    topic.body = re.sub(r'\n{3,}', '\n\n', body)
    return topic


def parse_markdown(text: str) -> List[ParsedTopic]:
    """
    Parse a markdown notebook into topics.

    Text before the first ``## `` heading is treated as preamble and dropped.
    Raises MarkdownImportError for an unterminated code fence.
    """
    topics: List[ParsedTopic] = []
    current: Optional[ParsedTopic] = None
    body_lines: List[str] = []
    in_references = False

    in_fence = False
    fence_start = 0
    fence_language = ''
    fence_lines: List[str] = []
    pending_filename = ''

    for number, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.rstrip()
        stripped = line.strip()

        if in_fence:
            if stripped.startswith(FENCE):
                in_fence = False
                if current is not None:
                    current.snippets.append(_build_snippet(fence_language, fence_lines, pending_filename))
                pending_filename = ''
            else:
                fence_lines.append(line)
            continue

        if stripped.startswith(FENCE):
            in_fence = True
            fence_start = number
            fence_language = stripped[len(FENCE):].strip().lower()
            fence_lines = []
            continue

        if line == '##' or line.startswith('## '):
            if current is not None:
                topics.append(_finish_topic(current, body_lines))
            title = line[3:].strip()
            if not title:
                raise MarkdownImportError("empty topic heading", line=number)
            current = ParsedTopic(title=title, category=infer_category(title))
            body_lines = []
            in_references = False
            pending_filename = ''
            continue

        if current is None:
            # Preamble, including the "# " document title
            continue

        if line.startswith(ESCAPE):
            body_lines.append(line[len(ESCAPE):])
            continue

        if line.startswith('### '):
            heading = line[4:].strip()
            if heading.lower() == 'references':
                in_references = True
                continue
            in_references = False
            body_lines.append(line)
            continue

        match = CATEGORY_RE.match(stripped)
        if match:
            category = match.group(1).upper()
            if category in VALID_CATEGORIES:
                current.category = category
            else:
                logger.warning(f"[IMPORT] Unknown category '{category}' at line {number}, keeping {current.category}")
            continue

        match = FILE_RE.match(stripped)
        if match:
            pending_filename = match.group(1)
            continue

        for title, url in LINK_RE.findall(line):
            if len(url) > URL_MAX_LENGTH:
                raise MarkdownImportError(f"link longer than {URL_MAX_LENGTH} characters", line=number)
            current.add_reference(title, url)

        if in_references:
            # Only the links matter in a references list
            continue

        if not current.summary and not any(body_line.strip() for body_line in body_lines):
            match = SUMMARY_RE.match(stripped)
            if match:
                current.summary = (match.group(1) or match.group(2)).strip()
                continue

        body_lines.append(LINK_RE.sub(lambda m: m.group(1), line))

    if in_fence:
        raise MarkdownImportError("unterminated code fence", line=fence_start)

    if current is not None:
        topics.append(_finish_topic(current, body_lines))

    return topics


# --- Rendering ---

def escape_body(body: str) -> str:
    """Backslash-escape body lines that parse_markdown would treat as structure."""
    return '\n'.join(
        ESCAPE + line if line.lstrip().startswith(STRUCTURAL_PREFIXES) else line
        for line in body.split('\n')
    )


def render_topic(topic: Topic) -> str:
    """Render one Topic (with its snippets and references) as markdown."""
    parts = [f"## {topic.title}", f"<!-- category: {topic.category} -->"]

    if topic.summary:
        parts.append(f"*{topic.summary}*")

    if topic.body:
        parts.append(escape_body(topic.body.strip()))

    for snippet in topic.snippets.all():
        code = snippet.code.strip('\n')
        block = f"{FENCE}{snippet.language}\n{code}\n{FENCE}"
        if snippet.filename:
            block = f"File: {snippet.filename}\n\n{block}"
        parts.append(block)

    references = list(topic.references.all())
    if references:
        bullets = '\n'.join(f"- [{ref.title}]({ref.url})" for ref in references)
        parts.append(f"### References\n\n{bullets}")

    return '\n\n'.join(parts) + '\n'


def render_topics(topics, title: str = 'Django notes') -> str:
    sections = [f"# {title}\n"]
    sections.extend(render_topic(topic) for topic in topics)
    return '\n'.join(sections)


# --- Import into the database ---

def import_topics(parsed_topics: List[ParsedTopic], author=None, replace=False, publish=True) -> List[Topic]:
    """
    Create Topics (with snippets and references) from parsed markdown.

    With ``replace``, a topic whose slug matches the heading is overwritten in
    place; otherwise imported topics always get a fresh, unique slug.
    All topics are written in one transaction.
    """
    saved = []

    with db_transaction.atomic():
        next_order = (Topic.objects.aggregate(max_order=Max('order'))['max_order'] or 0) + 1

        for parsed in parsed_topics:
            title = parsed.title[:TITLE_MAX_LENGTH]
            topic = None
            if replace:
                topic = Topic.objects.filter(slug=Topic.base_slug(title)).first()

            if topic is not None:
                logger.info(f"[IMPORT] Replacing topic '{topic.slug}'")
                topic.snippets.all().delete()
                topic.references.all().delete()
            else:
                topic = Topic(slug=Topic.unique_slug(title), order=next_order)
                next_order += 1
                if author is not None:
                    topic.author = author

            topic.title = title
            topic.category = parsed.category
            topic.summary = parsed.summary[:SUMMARY_MAX_LENGTH]
            topic.body = parsed.body
            topic.is_published = publish
            topic.save()

            Snippet.objects.bulk_create([
                Snippet(topic=topic, kind=item.kind, filename=item.filename, code=item.code, order=index)
                for index, item in enumerate(parsed.snippets)
            ])
            Reference.objects.bulk_create([
                Reference(topic=topic, title=item.title[:REFERENCE_TITLE_MAX_LENGTH], url=item.url)
                for item in parsed.references
            ])

            logger.info(
                f"[IMPORT] Topic '{topic.slug}': {len(parsed.snippets)} snippets, {len(parsed.references)} references"
            )
            saved.append(topic)

    return saved
