from django.template import Context, Template

from notes.templatetags.notes_tags import category_badge, fence_language, shell_prompt


def test_shell_prompt():
    assert shell_prompt('ls\n\npwd') == '$ ls\n\n$ pwd'


def test_shell_prompt_skips_continuation_lines():
    code = 'pip install \\\n    django'
    assert shell_prompt(code) == '$ pip install \\\n    django'


def test_shell_prompt_empty():
    assert shell_prompt('') == ''
    assert shell_prompt(None) == ''


def test_fence_language():
    assert fence_language('PYTHON') == 'python'
    assert fence_language('TEXT') == 'plaintext'
    assert fence_language('UNKNOWN') == 'plaintext'


def test_category_badge():
    assert category_badge('ADMIN') == '<span class="badge badge-admin">Admin site</span>'


def test_tags_in_template():
    template = Template('{% load notes_tags %}{{ code|shell_prompt }}|{% category_badge "VIEWS" %}')
    rendered = template.render(Context({'code': 'python manage.py runserver'}))
    assert rendered == '$ python manage.py runserver|<span class="badge badge-views">Views</span>'
