# notes/urls.py

from django.urls import path
from . import views

app_name = 'notes'

urlpatterns = [
    path('', views.HomeView.as_view(), name='home'),

    # Topics
    path('topics/', views.TopicListView.as_view(), name='topic_list'),
    path('topics/new/', views.TopicCreateView.as_view(), name='topic_create'),
    path('topics/<slug:slug>/', views.TopicDetailView.as_view(), name='topic_detail'),
    path('topics/<slug:slug>/edit/', views.TopicUpdateView.as_view(), name='topic_update'),
    path('topics/<slug:slug>/delete/', views.TopicDeleteView.as_view(), name='topic_delete'),
    path('topics/<slug:slug>/markdown/', views.TopicMarkdownView.as_view(), name='topic_markdown'),

    # Accounts
    path('signup/', views.SignUpView.as_view(), name='signup'),
    path('profile/', views.ProfileView.as_view(), name='profile'),
]
