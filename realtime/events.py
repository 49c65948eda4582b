import logging

from asgiref.sync import async_to_sync

from .protocol import user_room
from .server import sio


logger = logging.getLogger(__name__)


def push_to_user(user_id, event, data):
    """ Emit an event to every socket of a user from synchronous code such as a DRF view

        Live delivery is best effort: the data is already stored, so a failed
        emit is logged and the request carries on
    """
    try:
        async_to_sync(sio.emit)(event, data, room=user_room(user_id))
    except Exception:
        logger.exception("Could not push %s to user %s", event, user_id)
