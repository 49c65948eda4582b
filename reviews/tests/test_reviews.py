import uuid

from django.core.cache import cache
from django.test import TestCase
from rest_framework.test import APIClient

from films.models import Film
from reviews.models import Review, ReviewLike
from reviews.services import ReviewError, create_review
from users.models import User


class ReviewServiceTest(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(email="ana@example.com", username="ana", password="password123")
        self.film = Film.objects.create(imdb_id="tt0111161", title="The Shawshank Redemption", year="1994")

    def test_rating_bounds(self):
        for rating in (0, 11, -1, 5.5, True):
            with self.assertRaises(ReviewError) as ctx:
                create_review(self.user.user_id, self.film.film_id, rating)
            self.assertEqual(ctx.exception.code, "INVALID_RATING")

        self.assertFalse(Review.objects.exists())

        for rating in (1, 10):
            Review.objects.all().delete()
            review = create_review(self.user.user_id, self.film.film_id, rating)
            self.assertEqual(review.rating, rating)

    def test_comment_too_long(self):
        with self.assertRaises(ReviewError) as ctx:
            create_review(self.user.user_id, self.film.film_id, 7, comment="x" * 1001)
        self.assertEqual(ctx.exception.code, "INVALID_COMMENT")

    def test_unknown_film(self):
        with self.assertRaises(ReviewError) as ctx:
            create_review(self.user.user_id, uuid.uuid4(), 7)
        self.assertEqual(ctx.exception.code, "FILM_NOT_FOUND")

    def test_one_review_per_film(self):
        create_review(self.user.user_id, self.film.film_id, 8, comment="Great")
        with self.assertRaises(ReviewError) as ctx:
            create_review(self.user.user_id, self.film.film_id, 3)
        self.assertEqual(ctx.exception.code, "ALREADY_REVIEWED")
        self.assertEqual(Review.objects.filter(user=self.user, film=self.film).count(), 1)

    def test_blank_comment_stored_as_null(self):
        review = create_review(self.user.user_id, self.film.film_id, 6, comment="")
        self.assertIsNone(review.comment)


class ReviewAPITest(TestCase):
    def setUp(self):
        cache.clear()
        self.client = APIClient()
        self.author = User.objects.create_user(email="ana@example.com", username="ana", password="password123")
        self.reader = User.objects.create_user(email="bob@example.com", username="bob", password="password123")
        self.admin = User.objects.create_user(
            email="admin@example.com", username="admin", password="password123", is_staff=True
        )
        self.film = Film.objects.create(imdb_id="tt0068646", title="The Godfather", year="1972", genre="Crime, Drama")
        self.review = Review.objects.create(user=self.author, film=self.film, rating=9, comment="A classic")

    def test_create_review(self):
        other_film = Film.objects.create(imdb_id="tt0071562", title="The Godfather Part II", year="1974")
        self.client.force_authenticate(self.reader)
        response = self.client.post("/api/v1/reviews/", {
            "film_id": str(other_film.film_id),
            "rating": 8,
            "comment": "Even better",
        }, format="json")

        self.assertEqual(response.status_code, 201)
        data = response.json()["data"]
        self.assertEqual(data["rating"], 8)
        self.assertEqual(data["user"]["username"], "bob")
        self.assertEqual(data["film_id"], str(other_film.film_id))
        self.assertEqual(data["likes_count"], 0)

    def test_create_requires_authentication(self):
        response = self.client.post("/api/v1/reviews/", {"film_id": str(self.film.film_id), "rating": 8}, format="json")
        self.assertEqual(response.status_code, 401)

    def test_create_out_of_range_rating(self):
        self.client.force_authenticate(self.reader)
        response = self.client.post("/api/v1/reviews/", {"film_id": str(self.film.film_id), "rating": 11}, format="json")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["details"][0]["path"], "rating")
        self.assertFalse(Review.objects.filter(user=self.reader).exists())

    def test_create_duplicate_review(self):
        self.client.force_authenticate(self.author)
        response = self.client.post("/api/v1/reviews/", {"film_id": str(self.film.film_id), "rating": 2}, format="json")

        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["code"], "ALREADY_REVIEWED")

    def test_create_for_unknown_film(self):
        self.client.force_authenticate(self.reader)
        response = self.client.post("/api/v1/reviews/", {"film_id": str(uuid.uuid4()), "rating": 5}, format="json")

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["code"], "FILM_NOT_FOUND")

    def test_only_author_can_update(self):
        self.client.force_authenticate(self.reader)
        response = self.client.patch(f"/api/v1/reviews/{self.review.review_id}/", {"rating": 1}, format="json")
        self.assertEqual(response.status_code, 403)

        # Admins can't edit other users reviews either
        self.client.force_authenticate(self.admin)
        response = self.client.patch(f"/api/v1/reviews/{self.review.review_id}/", {"rating": 1}, format="json")
        self.assertEqual(response.status_code, 403)

        self.client.force_authenticate(self.author)
        response = self.client.patch(f"/api/v1/reviews/{self.review.review_id}/", {"rating": 7}, format="json")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"]["rating"], 7)
        self.assertEqual(response.json()["data"]["comment"], "A classic")

    def test_admin_can_delete(self):
        self.client.force_authenticate(self.reader)
        response = self.client.delete(f"/api/v1/reviews/{self.review.review_id}/")
        self.assertEqual(response.status_code, 403)

        self.client.force_authenticate(self.admin)
        response = self.client.delete(f"/api/v1/reviews/{self.review.review_id}/")
        self.assertEqual(response.status_code, 204)
        self.assertFalse(Review.objects.filter(pk=self.review.pk).exists())

    def test_film_reviews_are_paginated_with_stats(self):
        ReviewLike.objects.create(user=self.reader, review=self.review)
        self.client.force_authenticate(self.reader)
        response = self.client.get(f"/api/v1/reviews/film/{self.film.film_id}/", {"page": 0, "page_size": 500})

        self.assertEqual(response.status_code, 200)
        data = response.json()["data"]
        self.assertEqual(data["page"], 1)
        self.assertEqual(data["page_size"], 100)
        self.assertEqual(data["total"], 1)
        self.assertEqual(data["total_pages"], 1)
        item = data["items"][0]
        self.assertEqual(item["likes_count"], 1)
        self.assertEqual(item["comments_count"], 0)
        self.assertTrue(item["is_liked"])

    def test_film_reviews_anonymous(self):
        response = self.client.get(f"/api/v1/reviews/film/{self.film.film_id}/", {"page": 3})

        self.assertEqual(response.status_code, 200)
        data = response.json()["data"]
        self.assertEqual(data["items"], [])
        self.assertEqual(data["total"], 1)

    def test_user_reviews_embed_film(self):
        response = self.client.get(f"/api/v1/reviews/user/{self.author.user_id}/")

        self.assertEqual(response.status_code, 200)
        data = response.json()["data"]
        self.assertEqual(len(data), 1)
        self.assertEqual(data[0]["film"]["title"], "The Godfather")
