from django.core.cache import cache
from django.test import TestCase
from rest_framework.test import APIClient
from django.contrib.auth import get_user_model


User = get_user_model()


class TestJWT(TestCase):
    def setUp(self):
        cache.clear()
        self.client = APIClient()
        self.user = User.objects.create_user(
            email="test@email.com",
            password="password123",
            username="jwt_test"
        )

    def test_jwt_token_and_api_access(self):
        """ Integration test for testing JWT authentication including:
                1. Obtaining JWT token
                2. Accessing protected API
                3. Refreshing token through the httpOnly cookie
        """
        # 1. Get JWT token
        response = self.client.post("/api/v1/auth/login/", {"email": self.user.email, "password": "password123"})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body["success"])
        self.assertIn("access", body["data"])
        self.assertIn("refresh_token", response.cookies)
        self.assertTrue(response.cookies["refresh_token"]["httponly"])

        access_token = body["data"]["access"]

        # 2. Access protected API
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {access_token}")
        # The profile endpoint requires log in
        response2 = self.client.get("/api/v1/users/me/")
        self.assertEqual(response2.status_code, 200)
        self.assertEqual(response2.json()["data"]["username"], "jwt_test")

        # 3. Refresh token, the test client replays the cookie it received
        self.client.credentials()
        response3 = self.client.post("/api/v1/auth/refresh/")
        self.assertEqual(response3.status_code, 200)
        self.assertIn("access", response3.json()["data"])

    def test_refresh_with_token_in_body(self):
        """ Clients that cannot hold cookies may post the refresh token """
        login = self.client.post("/api/v1/auth/login/", {"email": self.user.email, "password": "password123"})
        refresh_token = login.cookies["refresh_token"].value

        client = APIClient()
        response = client.post("/api/v1/auth/refresh/", {"refresh": refresh_token}, format="json")
        self.assertEqual(response.status_code, 200)
        self.assertIn("access", response.json()["data"])

    def test_protected_api_without_token(self):
        response = self.client.get("/api/v1/users/me/")
        self.assertEqual(response.status_code, 401)
        self.assertFalse(response.json()["success"])

    def test_invalid_bearer_token(self):
        self.client.credentials(HTTP_AUTHORIZATION="Bearer not-a-token")
        response = self.client.get("/api/v1/users/me/")
        self.assertEqual(response.status_code, 401)

    def test_refresh_without_token(self):
        response = self.client.post("/api/v1/auth/refresh/")
        self.assertEqual(response.status_code, 401)

    def test_refresh_with_garbage_token(self):
        response = self.client.post("/api/v1/auth/refresh/", {"refresh": "garbage"}, format="json")
        self.assertEqual(response.status_code, 401)

    def test_logout_revokes_refresh_token(self):
        login = self.client.post("/api/v1/auth/login/", {"email": self.user.email, "password": "password123"})
        refresh_token = login.cookies["refresh_token"].value

        response = self.client.post("/api/v1/auth/logout/")
        self.assertEqual(response.status_code, 204)
        self.assertEqual(response.cookies["refresh_token"].value, "")

        # The blacklisted token can no longer be exchanged
        response2 = APIClient().post("/api/v1/auth/refresh/", {"refresh": refresh_token}, format="json")
        self.assertEqual(response2.status_code, 401)

    def test_rotated_refresh_token_cannot_be_reused(self):
        login = self.client.post("/api/v1/auth/login/", {"email": self.user.email, "password": "password123"})
        old_token = login.cookies["refresh_token"].value

        client = APIClient()
        response = client.post("/api/v1/auth/refresh/", {"refresh": old_token}, format="json")
        self.assertEqual(response.status_code, 200)
        self.assertNotEqual(response.cookies["refresh_token"].value, old_token)

        response2 = APIClient().post("/api/v1/auth/refresh/", {"refresh": old_token}, format="json")
        self.assertEqual(response2.status_code, 401)
        self.assertFalse(response2.json()["success"])
