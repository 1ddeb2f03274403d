# notes/signals.py

from django.db import transaction
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from .broadcast import TopicBroadcaster
from .models import Topic


# Broadcasts wait for commit so watchers never see rolled-back or half-written topics

@receiver(post_save, sender=Topic)
def topic_saved(sender, instance, created, raw=False, **kwargs):
    # Fixture loading saves raw rows; nobody is watching them yet
    if raw or created:
        return
    transaction.on_commit(lambda: TopicBroadcaster.broadcast_topic_updated(instance))


@receiver(post_delete, sender=Topic)
def topic_deleted(sender, instance, **kwargs):
    transaction.on_commit(lambda: TopicBroadcaster.broadcast_topic_deleted(instance))
