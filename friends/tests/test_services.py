import uuid

from django.test import TestCase

from friends.models import Friendship
from friends.services import (
    FriendshipError, send_friend_request, respond_to_friend_request, remove_friend,
    list_friends, list_pending_requests, list_sent_requests
)
from users.models import User


class FriendshipLifecycleTest(TestCase):
    def setUp(self):
        self.ana = User.objects.create_user(email="ana@example.com", username="ana", password="password123")
        self.bob = User.objects.create_user(email="bob@example.com", username="bob", password="password123")
        self.eve = User.objects.create_user(email="eve@example.com", username="eve", password="password123")

    def assertCode(self, code, func, *args, **kwargs):
        with self.assertRaises(FriendshipError) as ctx:
            func(*args, **kwargs)
        self.assertEqual(ctx.exception.code, code)

    def test_request_then_accept(self):
        request = send_friend_request(self.ana.user_id, receiver_id=self.bob.user_id)
        self.assertEqual(request.status, Friendship.Status.PENDING)

        accepted = respond_to_friend_request(request.friendship_id, self.bob.user_id, accept=True)
        self.assertEqual(accepted.status, Friendship.Status.ACCEPTED)

        friends = list_friends(self.bob.user_id)
        self.assertEqual(len(friends), 1)
        self.assertEqual(friends[0]["user"]["user_id"], str(self.ana.user_id))
        accepted.refresh_from_db()
        self.assertEqual(friends[0]["since"], accepted.updated_at)

        # Symmetric: ana sees bob too
        self.assertEqual(list_friends(self.ana.user_id)[0]["user"]["username"], "bob")

    def test_duplicate_requests_in_both_directions(self):
        request = send_friend_request(self.ana.user_id, receiver_id=self.bob.user_id)
        self.assertCode("REQUEST_PENDING", send_friend_request, self.ana.user_id, receiver_id=self.bob.user_id)
        self.assertCode("REQUEST_PENDING", send_friend_request, self.bob.user_id, receiver_id=self.ana.user_id)

        respond_to_friend_request(request.friendship_id, self.bob.user_id, accept=True)
        self.assertCode("ALREADY_FRIENDS", send_friend_request, self.ana.user_id, receiver_id=self.bob.user_id)
        self.assertCode("ALREADY_FRIENDS", send_friend_request, self.bob.user_id, receiver_id=self.ana.user_id)
        self.assertEqual(Friendship.objects.count(), 1)

    def test_request_by_username(self):
        request = send_friend_request(self.ana.user_id, receiver_username="  bob ")
        self.assertEqual(request.receiver_id, self.bob.user_id)

    def test_unknown_receiver(self):
        self.assertCode("USER_NOT_FOUND", send_friend_request, self.ana.user_id, receiver_id=uuid.uuid4())
        self.assertCode("USER_NOT_FOUND", send_friend_request, self.ana.user_id, receiver_username="nobody")
        self.assertCode("USER_NOT_FOUND", send_friend_request, self.ana.user_id)

    def test_self_request(self):
        self.assertCode("SELF_REQUEST", send_friend_request, self.ana.user_id, receiver_id=self.ana.user_id)
        self.assertCode("SELF_REQUEST", send_friend_request, self.ana.user_id, receiver_username="ana")
        self.assertFalse(Friendship.objects.exists())

    def test_only_receiver_can_respond(self):
        request = send_friend_request(self.ana.user_id, receiver_id=self.bob.user_id)

        self.assertCode("FORBIDDEN", respond_to_friend_request, request.friendship_id, self.ana.user_id, True)
        self.assertCode("FORBIDDEN", respond_to_friend_request, request.friendship_id, self.eve.user_id, True)
        request.refresh_from_db()
        self.assertEqual(request.status, Friendship.Status.PENDING)

    def test_already_responded_is_idempotent(self):
        request = send_friend_request(self.ana.user_id, receiver_id=self.bob.user_id)
        respond_to_friend_request(request.friendship_id, self.bob.user_id, accept=False)

        for accept in (True, False, True):
            self.assertCode(
                "ALREADY_RESPONDED", respond_to_friend_request, request.friendship_id, self.bob.user_id, accept
            )
        request.refresh_from_db()
        self.assertEqual(request.status, Friendship.Status.REJECTED)

    def test_respond_to_unknown_request(self):
        self.assertCode("REQUEST_NOT_FOUND", respond_to_friend_request, uuid.uuid4(), self.bob.user_id, True)

    def test_new_request_after_rejection(self):
        request = send_friend_request(self.ana.user_id, receiver_id=self.bob.user_id)
        respond_to_friend_request(request.friendship_id, self.bob.user_id, accept=False)

        again = send_friend_request(self.ana.user_id, receiver_id=self.bob.user_id)
        self.assertEqual(again.status, Friendship.Status.PENDING)
        self.assertEqual(Friendship.objects.between(self.ana.user_id, self.bob.user_id).count(), 2)

    def test_remove_twice(self):
        request = send_friend_request(self.ana.user_id, receiver_id=self.bob.user_id)
        respond_to_friend_request(request.friendship_id, self.bob.user_id, accept=True)

        self.assertCode("FORBIDDEN", remove_friend, request.friendship_id, self.eve.user_id)
        remove_friend(request.friendship_id, self.ana.user_id)
        self.assertCode("NOT_FOUND", remove_friend, request.friendship_id, self.ana.user_id)
        self.assertEqual(list_friends(self.bob.user_id), [])

    def test_sender_can_cancel_pending_request(self):
        request = send_friend_request(self.ana.user_id, receiver_id=self.bob.user_id)
        remove_friend(request.friendship_id, self.ana.user_id)
        self.assertEqual(list_pending_requests(self.bob.user_id), [])

    def test_pending_and_sent_lists(self):
        send_friend_request(self.ana.user_id, receiver_id=self.bob.user_id)
        send_friend_request(self.eve.user_id, receiver_id=self.bob.user_id)

        pending = list_pending_requests(self.bob.user_id)
        self.assertEqual({item["user"]["username"] for item in pending}, {"ana", "eve"})
        self.assertEqual(list_pending_requests(self.ana.user_id), [])

        sent = list_sent_requests(self.ana.user_id)
        self.assertEqual(len(sent), 1)
        self.assertEqual(sent[0]["user"]["username"], "bob")
