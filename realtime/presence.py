from collections import defaultdict


class PresenceRegistry:
    """ Which users have at least one socket connected to this process

        A user may have several tabs open, so a user id maps to a set of
        socket ids and only the first connect and the last disconnect change
        the user's online state
    """

    def __init__(self):
        self._sockets = defaultdict(set)
        self._users = {}

    def add(self, user_id, sid):
        """ Register a socket, returns True when the user just came online """
        user_id = str(user_id)
        first = not self._sockets[user_id]
        self._sockets[user_id].add(sid)
        self._users[sid] = user_id
        return first

    def remove(self, sid):
        """ Forget a socket, returns the user id when it was the user's last one """
        user_id = self._users.pop(sid, None)
        if user_id is None:
            return None

        sockets = self._sockets[user_id]
        sockets.discard(sid)
        if sockets:
            return None
        del self._sockets[user_id]
        return user_id

    def online_users(self):
        return sorted(self._sockets)

    def clear(self):
        self._sockets.clear()
        self._users.clear()
