# notes/forms.py

from django import forms
from django.contrib.auth.forms import UserChangeForm, UserCreationForm
from django.forms import inlineformset_factory
from django.utils.translation import gettext_lazy as _

from .models import CustomUser, Reference, Snippet, Topic
from .sanitizer import Sanitizer

INPUT_CLASS = 'form-input'


class CustomUserCreationForm(UserCreationForm):
    """Sign-up form for the custom user model."""

    class Meta(UserCreationForm.Meta):
        model = CustomUser
        fields = ('username', 'email', 'language')


class CustomUserChangeForm(UserChangeForm):

    class Meta(UserChangeForm.Meta):
        model = CustomUser
        fields = ('username', 'email', 'first_name', 'last_name', 'language', 'bio')


class ProfileForm(forms.ModelForm):
    """Fields a user may change about themselves."""

    class Meta:
        model = CustomUser
        fields = ('first_name', 'last_name', 'email', 'language', 'bio')
        widgets = {
            'first_name': forms.TextInput(attrs={'class': INPUT_CLASS}),
            'last_name': forms.TextInput(attrs={'class': INPUT_CLASS}),
            'email': forms.EmailInput(attrs={'class': INPUT_CLASS}),
            'language': forms.Select(attrs={'class': INPUT_CLASS}),
            'bio': forms.Textarea(attrs={'class': INPUT_CLASS, 'rows': 4}),
        }

    def clean_bio(self):
        return Sanitizer.to_plain_text(self.cleaned_data.get('bio', ''))


class TopicForm(forms.ModelForm):

    class Meta:
        model = Topic
        fields = ('title', 'category', 'summary', 'body', 'order', 'is_published')
        widgets = {
            'title': forms.TextInput(attrs={'class': INPUT_CLASS, 'placeholder': _('e.g. Custom user model')}),
            'category': forms.Select(attrs={'class': INPUT_CLASS}),
            'summary': forms.TextInput(attrs={'class': INPUT_CLASS}),
            'body': forms.Textarea(attrs={'class': INPUT_CLASS, 'rows': 8}),
            'order': forms.NumberInput(attrs={'class': INPUT_CLASS}),
        }

    def clean_title(self):
        title = Sanitizer.to_plain_text(self.cleaned_data['title']).strip()
        if not title:
            raise forms.ValidationError(_("Title cannot be empty."))
        return title

    def clean_summary(self):
        return Sanitizer.to_plain_text(self.cleaned_data.get('summary', '')).strip()

    def clean_body(self):
        return Sanitizer.to_plain_text(self.cleaned_data.get('body', ''))


class SnippetForm(forms.ModelForm):

    class Meta:
        model = Snippet
        fields = ('order', 'kind', 'filename', 'code')
        widgets = {
            'order': forms.NumberInput(attrs={'class': INPUT_CLASS, 'min': 0}),
            'kind': forms.Select(attrs={'class': INPUT_CLASS}),
            'filename': forms.TextInput(attrs={'class': INPUT_CLASS, 'placeholder': 'myapp/models.py'}),
            'code': forms.Textarea(attrs={'class': f'{INPUT_CLASS} code', 'rows': 6}),
        }


class ReferenceForm(forms.ModelForm):

    class Meta:
        model = Reference
        fields = ('title', 'url')
        widgets = {
            'title': forms.TextInput(attrs={'class': INPUT_CLASS}),
            'url': forms.URLInput(attrs={'class': INPUT_CLASS, 'placeholder': 'https://docs.djangoproject.com/'}),
        }


SnippetFormSet = inlineformset_factory(
    Topic, Snippet, form=SnippetForm, extra=1, can_delete=True
)

ReferenceFormSet = inlineformset_factory(
    Topic, Reference, form=ReferenceForm, extra=1, can_delete=True
)
