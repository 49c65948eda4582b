"""Socket.IO server for chat presence, typing indicators and live messages.

Nothing is persisted here: messages are stored through the REST API and
this layer only relays events between sockets connected at emit time.
"""
import logging

import socketio
from socketio.exceptions import ConnectionRefusedError
from asgiref.sync import sync_to_async
from django.conf import settings
from django.utils import timezone
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import AccessToken

from users.models import User
from .presence import PresenceRegistry
from .protocol import (
    EVENT_USER_ONLINE, EVENT_USER_OFFLINE, EVENT_ONLINE_USERS, EVENT_MESSAGE, EVENT_TYPING,
    user_room, conversation_room
)


logger = logging.getLogger(__name__)


def _client_manager():
    # Several workers need a shared queue to reach each other's sockets
    if settings.SOCKETIO_MESSAGE_QUEUE:
        return socketio.AsyncRedisManager(settings.SOCKETIO_MESSAGE_QUEUE)
    return None


sio = socketio.AsyncServer(
    async_mode='asgi',
    cors_allowed_origins=settings.CORS_ALLOWED_ORIGINS,
    client_manager=_client_manager(),
)

presence = PresenceRegistry()


def token_from_handshake(environ, auth):
    """ The access token comes in the auth payload or an Authorization: Bearer header """
    if isinstance(auth, dict) and auth.get('token'):
        return auth['token']

    header = environ.get('HTTP_AUTHORIZATION', '')
    parts = header.split()
    if len(parts) == 2 and parts[0] in api_settings.AUTH_HEADER_TYPES:
        return parts[1]
    return None


def user_id_from_token(token):
    """ Validate a SimpleJWT access token, returns the user id or None """
    try:
        access = AccessToken(token)
    except TokenError as exc:
        logger.info("Socket rejected, invalid token: %s", exc)
        return None

    user_id = access.get(api_settings.USER_ID_CLAIM)
    if not user_id or not User.objects.filter(user_id=user_id, is_active=True).exists():
        return None
    return str(user_id)


async def _user_id(sid):
    session = await sio.get_session(sid)
    return session.get('user_id')


@sio.event
async def connect(sid, environ, auth=None):
    token = token_from_handshake(environ, auth)
    if not token:
        raise ConnectionRefusedError('Authentication required')

    user_id = await sync_to_async(user_id_from_token)(token)
    if user_id is None:
        raise ConnectionRefusedError('Invalid token')

    await sio.save_session(sid, {'user_id': user_id})
    await sio.enter_room(sid, user_room(user_id))

    if presence.add(user_id, sid):
        await sio.emit(EVENT_USER_ONLINE, {'user_id': user_id, 'online': True}, skip_sid=sid)
    await sio.emit(EVENT_ONLINE_USERS, presence.online_users(), to=sid)

    logger.info("User %s connected (socket %s)", user_id, sid)


@sio.event
async def disconnect(sid, reason=None):
    user_id = presence.remove(sid)
    if user_id:
        await sio.emit(EVENT_USER_OFFLINE, {'user_id': user_id, 'online': False}, skip_sid=sid)
    logger.info("Socket %s disconnected (%s)", sid, reason)


@sio.event
async def join_room(sid, partner_id):
    user_id = await _user_id(sid)
    if not user_id or not partner_id:
        return None

    room = conversation_room(user_id, partner_id)
    await sio.enter_room(sid, room)
    return room


@sio.event
async def leave_room(sid, partner_id):
    user_id = await _user_id(sid)
    if not user_id or not partner_id:
        return None

    room = conversation_room(user_id, partner_id)
    await sio.leave_room(sid, room)
    return room


@sio.on(EVENT_MESSAGE)
async def relay_message(sid, data):
    user_id = await _user_id(sid)
    if not user_id or not isinstance(data, dict) or not data.get('receiver_id'):
        return

    await sio.emit(
        EVENT_MESSAGE,
        {
            'sender_id': user_id,
            'receiver_id': data['receiver_id'],
            'content': data.get('content', ''),
            'created_at': timezone.now().isoformat(),
        },
        room=conversation_room(user_id, data['receiver_id']),
        skip_sid=sid,
    )


@sio.on(EVENT_TYPING)
async def relay_typing(sid, data):
    user_id = await _user_id(sid)
    if not user_id or not isinstance(data, dict) or not data.get('receiver_id'):
        return

    await sio.emit(
        EVENT_TYPING,
        {'user_id': user_id, 'is_typing': bool(data.get('is_typing'))},
        room=conversation_room(user_id, data['receiver_id']),
        skip_sid=sid,
    )
