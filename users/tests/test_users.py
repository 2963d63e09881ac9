# users/tests/test_users.py
from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework.test import APIClient

User = get_user_model()


class UserApiTest(TestCase):
    def setUp(self):
        self.faculty = User.objects.create_user(username="fac", password="pass123", role="faculty")
        self.other = User.objects.create_user(username="other", password="pass123", role="faculty")
        self.admin = User.objects.create_user(username="boss", password="pass123", role="admin")
        self.client_fac = APIClient()
        self.client_fac.force_authenticate(self.faculty)

    def test_me(self):
        r = self.client_fac.get(reverse("user-me"))
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.data["username"], "fac")
        self.assertEqual(r.data["role"], "faculty")

    def test_update_me_cannot_change_claims(self):
        r = self.client_fac.patch(
            reverse("user-update-me"), {"first_name": "Meera", "role": "admin", "department": "CSE"}, format="json"
        )
        self.assertEqual(r.status_code, 200)
        self.faculty.refresh_from_db()
        self.assertEqual(self.faculty.first_name, "Meera")
        self.assertEqual(self.faculty.role, "faculty")
        self.assertIsNone(self.faculty.department)

    def test_listing_is_scoped(self):
        r = self.client_fac.get(reverse("user-list"))
        self.assertEqual([u["username"] for u in r.data], ["fac"])

        client_admin = APIClient()
        client_admin.force_authenticate(self.admin)
        r = client_admin.get(reverse("user-list"))
        self.assertEqual([u["username"] for u in r.data], ["boss", "fac", "other"])

    def test_listing_follows_token_claims(self):
        # Profile says faculty; the identity provider's claim says admin
        client = APIClient()
        client.force_authenticate(self.other, token={"sub": "abc", "app_metadata": {"role": "admin"}})
        r = client.get(reverse("user-list"))
        self.assertEqual([u["username"] for u in r.data], ["boss", "fac", "other"])
