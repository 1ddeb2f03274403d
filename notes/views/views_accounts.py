import logging

from django.contrib import messages
from django.contrib.auth import login
from django.contrib.auth.mixins import LoginRequiredMixin
from django.shortcuts import redirect
from django.urls import reverse_lazy
from django.utils.translation import gettext as _
from django.views.generic import CreateView, UpdateView

from ..forms import CustomUserCreationForm, ProfileForm

logger = logging.getLogger(__name__)

__all__ = ['SignUpView', 'ProfileView']


class SignUpView(CreateView):
    form_class = CustomUserCreationForm
    template_name = 'notes/signup.html'
    success_url = reverse_lazy('notes:topic_list')

    def dispatch(self, request, *args, **kwargs):
        if request.user.is_authenticated:
            return redirect('notes:topic_list')
        return super().dispatch(request, *args, **kwargs)

    def form_valid(self, form):
        response = super().form_valid(form)
        login(self.request, self.object, backend='django.contrib.auth.backends.ModelBackend')
        logger.info(f"[ACCOUNT] New user signed up: {self.object.username}")
        messages.success(self.request, _("Welcome, %(name)s!") % {'name': self.object.display_name()})
        return response


class ProfileView(LoginRequiredMixin, UpdateView):
    form_class = ProfileForm
    template_name = 'notes/profile.html'
    success_url = reverse_lazy('notes:profile')

    def get_object(self, queryset=None):
        return self.request.user

    def form_valid(self, form):
        messages.success(self.request, _("Your profile was updated."))
        return super().form_valid(form)
