import json
import logging
from datetime import datetime

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer

from .sanitizer import Sanitizer

logger = logging.getLogger(__name__)


# Channel layers cap group names at 100 characters
GROUP_SLUG_LENGTH = 90


def topic_group_name(slug):
    return f'topic_{slug[:GROUP_SLUG_LENGTH]}'


class TopicBroadcaster:
    """Helper class for pushing topic changes to open topic pages."""

    @staticmethod
    def broadcast_to_topic(slug, message_type, data):
        """
        Send a message to every WebSocket client watching a topic.

        Args:
            slug: Slug of the topic (group name suffix)
            message_type: e.g. 'topic_updated' or 'topic_deleted'
            data: Dictionary with message data
        """
        channel_layer = get_channel_layer()

        if not channel_layer:
            # Channel layer not configured
            return

        message = {
            'type': message_type,
            'timestamp': datetime.now().isoformat(),
            'data': Sanitizer.sanitize_data(data),
        }

        # Dates and other non-JSON values become strings
        message = json.loads(json.dumps(message, default=str))

        try:
            async_to_sync(channel_layer.group_send)(
                topic_group_name(slug),
                {
                    'type': 'topic_update',  # Calls topic_update() in consumer
                    'message': message,
                }
            )
        except Exception as e:
            # Log error but don't crash the request
            logger.error(f"[WebSocket] Broadcast error for topic {slug}: {e}", exc_info=True)

    @staticmethod
    def broadcast_topic_updated(topic):
        TopicBroadcaster.broadcast_to_topic(
            topic.slug,
            'topic_updated',
            {
                'id': topic.id,
                'slug': topic.slug,
                'title': topic.title,
                'summary': topic.summary,
                'category': topic.category,
                'is_published': topic.is_published,
                'updated_at': topic.updated_at,
                'url': topic.get_absolute_url(),
            }
        )

    @staticmethod
    def broadcast_topic_deleted(topic):
        TopicBroadcaster.broadcast_to_topic(
            topic.slug,
            'topic_deleted',
            {'slug': topic.slug, 'title': topic.title}
        )
