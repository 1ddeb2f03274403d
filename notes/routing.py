from django.urls import path

from . import consumers

websocket_urlpatterns = [
    path('ws/topics/<slug:slug>/', consumers.TopicConsumer.as_asgi()),
]
