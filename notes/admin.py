from django.contrib import admin, messages
from django.contrib.auth.admin import UserAdmin
from django.db.models import Count
from django.utils.translation import gettext_lazy as _, ngettext

from .forms import CustomUserChangeForm, CustomUserCreationForm
from .link_checker import check_references
from .models import CustomUser, Reference, Snippet, Topic

admin.site.site_header = _("DjangoNotes administration")
admin.site.site_title = _("DjangoNotes admin")
admin.site.index_title = _("Notebook")


@admin.register(CustomUser)
class CustomUserAdmin(UserAdmin):
    form = CustomUserChangeForm
    add_form = CustomUserCreationForm

    list_display = ('username', 'email', 'first_name', 'last_name', 'language', 'is_staff')
    list_filter = UserAdmin.list_filter + ('language',)

    fieldsets = UserAdmin.fieldsets + (
        (_('Preferences'), {'fields': ('language', 'bio')}),
    )
    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('username', 'email', 'password1', 'password2'),
        }),
        (_('Preferences'), {'fields': ('language',)}),
    )


class SnippetInline(admin.TabularInline):
    model = Snippet
    extra = 1
    fields = ('order', 'kind', 'filename', 'code')


class ReferenceInline(admin.TabularInline):
    model = Reference
    extra = 1
    fields = ('title', 'url', 'last_status', 'last_checked_at')
    readonly_fields = ('last_status', 'last_checked_at')


@admin.register(Topic)
class TopicAdmin(admin.ModelAdmin):
    list_display = ('title', 'category', 'author', 'order', 'is_published', 'snippet_count', 'updated_at')
    list_display_links = ('title',)
    list_editable = ('order', 'is_published')
    list_filter = ('category', 'is_published', 'author')
    search_fields = ('title', 'summary', 'body', 'snippets__code')
    prepopulated_fields = {'slug': ('title',)}
    readonly_fields = ('created_at', 'updated_at')
    inlines = [SnippetInline, ReferenceInline]
    actions = ['make_published', 'make_unpublished']
    fieldsets = (
        (None, {'fields': ('title', 'slug', 'category', 'summary', 'body')}),
        (_('Publishing'), {'fields': ('order', 'is_published', 'author', 'created_at', 'updated_at')}),
    )

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('author').annotate(_snippet_count=Count('snippets'))

    @admin.display(description=_('Snippets'), ordering='_snippet_count')
    def snippet_count(self, obj):
        return obj._snippet_count

    def save_model(self, request, obj, form, change):
        if obj.author_id is None:
            obj.author = request.user
        super().save_model(request, obj, form, change)

    def _set_published(self, queryset, value):
        # queryset.update() would skip post_save and its broadcast
        topics = list(queryset)
        for topic in topics:
            topic.is_published = value
            topic.save(update_fields=['is_published', 'updated_at'])
        return len(topics)

    @admin.action(description=_('Publish selected topics'))
    def make_published(self, request, queryset):
        updated = self._set_published(queryset, True)
        self.message_user(
            request,
            ngettext('%d topic was published.', '%d topics were published.', updated) % updated,
            messages.SUCCESS,
        )

    @admin.action(description=_('Unpublish selected topics'))
    def make_unpublished(self, request, queryset):
        updated = self._set_published(queryset, False)
        self.message_user(
            request,
            ngettext('%d topic was unpublished.', '%d topics were unpublished.', updated) % updated,
            messages.SUCCESS,
        )


@admin.register(Reference)
class ReferenceAdmin(admin.ModelAdmin):
    list_display = ('title', 'topic', 'url', 'last_status', 'last_checked_at', 'is_broken')
    list_filter = ('topic__category',)
    search_fields = ('title', 'url', 'topic__title')
    list_select_related = ('topic',)
    readonly_fields = ('last_status', 'last_checked_at')
    actions = ['check_selected']

    @admin.display(boolean=True, description=_('Broken'))
    def is_broken(self, obj):
        return obj.is_broken

    @admin.action(description=_('Check selected links'))
    def check_selected(self, request, queryset):
        summary = check_references(queryset)
        level = messages.WARNING if summary['broken'] else messages.SUCCESS
        self.message_user(
            request,
            _('Checked %(checked)d links: %(ok)d ok, %(broken)d broken.') % summary,
            level,
        )
