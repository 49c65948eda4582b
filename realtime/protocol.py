"""Socket.IO event names and room naming shared by the server and the REST views."""

EVENT_USER_ONLINE = 'user_online'
EVENT_USER_OFFLINE = 'user_offline'
EVENT_ONLINE_USERS = 'online_users'
EVENT_JOIN_ROOM = 'join_room'
EVENT_LEAVE_ROOM = 'leave_room'
EVENT_MESSAGE = 'message'
EVENT_TYPING = 'typing'


def user_room(user_id):
    """ Private room every socket of a user joins on connect """
    return f"user:{user_id}"


def conversation_room(user_a, user_b):
    """ Same room name whichever of the two users asks for it """
    first, second = sorted([str(user_a), str(user_b)])
    return f"conversation:{first}:{second}"
