from unittest.mock import AsyncMock, patch

from asgiref.sync import async_to_sync
from socketio.exceptions import ConnectionRefusedError
from django.test import TestCase
from rest_framework_simplejwt.tokens import AccessToken

from realtime import server
from realtime.protocol import conversation_room, user_room
from users.models import User


class SocketServerTest(TestCase):
    def setUp(self):
        server.presence.clear()
        self.ana = User.objects.create_user(email="ana@example.com", username="ana", password="password123")
        self.bob = User.objects.create_user(email="bob@example.com", username="bob", password="password123")
        self.token = str(AccessToken.for_user(self.ana))

        self.sessions = {}
        patches = {
            'emit': AsyncMock(),
            'enter_room': AsyncMock(),
            'leave_room': AsyncMock(),
            'save_session': AsyncMock(side_effect=self._save_session),
            'get_session': AsyncMock(side_effect=self._get_session),
        }
        for name, mock in patches.items():
            patcher = patch.object(server.sio, name, mock)
            setattr(self, name, patcher.start())
            self.addCleanup(patcher.stop)

    async def _save_session(self, sid, session):
        self.sessions[sid] = session

    async def _get_session(self, sid):
        return self.sessions.get(sid, {})

    def connect(self, sid, auth=None, environ=None):
        async_to_sync(server.connect)(sid, environ or {}, auth)

    def test_connect_with_token(self):
        self.connect("sid-1", auth={"token": self.token})

        user_id = str(self.ana.user_id)
        self.assertEqual(self.sessions["sid-1"], {"user_id": user_id})
        self.enter_room.assert_awaited_with("sid-1", user_room(user_id))
        self.assertEqual(server.presence.online_users(), [user_id])
        self.emit.assert_any_await("user_online", {"user_id": user_id, "online": True}, skip_sid="sid-1")
        self.emit.assert_any_await("online_users", [user_id], to="sid-1")

    def test_connect_with_authorization_header(self):
        self.connect("sid-1", environ={"HTTP_AUTHORIZATION": f"Bearer {self.token}"})
        self.assertEqual(server.presence.online_users(), [str(self.ana.user_id)])

    def test_connect_without_token_is_refused(self):
        with self.assertRaises(ConnectionRefusedError) as ctx:
            self.connect("sid-1")
        self.assertEqual(ctx.exception.error_args, {"message": "Authentication required"})

        with self.assertRaises(ConnectionRefusedError) as ctx:
            self.connect("sid-2", auth={"token": "not-a-jwt"})
        self.assertEqual(ctx.exception.error_args, {"message": "Invalid token"})
        self.assertEqual(server.presence.online_users(), [])

    def test_second_tab_does_not_broadcast_online(self):
        self.connect("sid-1", auth={"token": self.token})
        self.emit.reset_mock()
        self.connect("sid-2", auth={"token": self.token})

        events = [call.args[0] for call in self.emit.await_args_list]
        self.assertEqual(events, ["online_users"])

    def test_offline_only_after_last_socket(self):
        self.connect("sid-1", auth={"token": self.token})
        self.connect("sid-2", auth={"token": self.token})
        self.emit.reset_mock()

        async_to_sync(server.disconnect)("sid-1")
        self.emit.assert_not_awaited()

        async_to_sync(server.disconnect)("sid-2", "client disconnect")
        self.emit.assert_awaited_once_with(
            "user_offline", {"user_id": str(self.ana.user_id), "online": False}, skip_sid="sid-2"
        )

    def test_join_room_and_relay_typing(self):
        self.connect("sid-1", auth={"token": self.token})
        self.emit.reset_mock()
        room = conversation_room(self.ana.user_id, self.bob.user_id)

        joined = async_to_sync(server.join_room)("sid-1", str(self.bob.user_id))
        self.assertEqual(joined, room)
        self.enter_room.assert_awaited_with("sid-1", room)

        async_to_sync(server.relay_typing)("sid-1", {"receiver_id": str(self.bob.user_id), "is_typing": True})
        self.emit.assert_awaited_once_with(
            "typing", {"user_id": str(self.ana.user_id), "is_typing": True}, room=room, skip_sid="sid-1"
        )

        async_to_sync(server.leave_room)("sid-1", str(self.bob.user_id))
        self.leave_room.assert_awaited_with("sid-1", room)

    def test_relay_message_to_conversation(self):
        self.connect("sid-1", auth={"token": self.token})
        self.emit.reset_mock()

        async_to_sync(server.relay_message)("sid-1", {"receiver_id": str(self.bob.user_id), "content": "Hi!"})

        args, kwargs = self.emit.await_args
        self.assertEqual(args[0], "message")
        self.assertEqual(args[1]["sender_id"], str(self.ana.user_id))
        self.assertEqual(args[1]["content"], "Hi!")
        self.assertEqual(kwargs["room"], conversation_room(self.ana.user_id, self.bob.user_id))
        self.assertEqual(kwargs["skip_sid"], "sid-1")

    def test_events_from_unauthenticated_socket_are_ignored(self):
        async_to_sync(server.relay_message)("ghost", {"receiver_id": str(self.bob.user_id), "content": "Hi"})
        async_to_sync(server.relay_typing)("ghost", "not a dict")
        self.emit.assert_not_awaited()
