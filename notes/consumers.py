import json
import logging

from channels.generic.websocket import AsyncWebsocketConsumer

from .broadcast import topic_group_name

logger = logging.getLogger(__name__)


class TopicConsumer(AsyncWebsocketConsumer):
    """
    Async WebSocket consumer for live topic updates.

    Every open topic page joins the group of its slug and is told when the
    topic is edited or deleted. Topics are public, so anonymous readers may
    connect too.
    """

    async def connect(self):
        """Handle new WebSocket connection"""
        self.slug = self.scope['url_route']['kwargs']['slug']
        self.group_name = topic_group_name(self.slug)

        await self.channel_layer.group_add(
            self.group_name,
            self.channel_name
        )
        await self.accept()

        logger.debug(f"[WebSocket] Client connected to topic {self.slug}")

    async def disconnect(self, close_code):
        """Handle WebSocket disconnection"""
        if hasattr(self, 'group_name'):
            await self.channel_layer.group_discard(
                self.group_name,
                self.channel_name
            )
            logger.debug(f"[WebSocket] Client left topic {self.slug} (code: {close_code})")

    async def receive(self, text_data=None, bytes_data=None):
        """
        Handle messages from WebSocket (client -> server)
        Currently used for ping/pong health checks
        """
        try:
            data = json.loads(text_data or '')
        except json.JSONDecodeError:
            # Ignore malformed messages
            return

        if isinstance(data, dict) and data.get('type') == 'ping':
            await self.send(text_data=json.dumps({
                'type': 'pong',
                'timestamp': data.get('timestamp')
            }))

    async def topic_update(self, event):
        """
        Handler called when the group receives a message.
        Triggered by channel_layer.group_send() in TopicBroadcaster.
        """
        await self.send(text_data=json.dumps(event['message']))
