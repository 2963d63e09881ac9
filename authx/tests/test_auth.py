# authx/tests/test_auth.py
import time

import jwt
from django.conf import settings
from django.contrib.auth import get_user_model
from django.test import TestCase, override_settings
from django.urls import reverse
from rest_framework.test import APIClient

from core.constants import ACTIVITY_ROLE_ASSIGNED
from core.models import DomainActivity

User = get_user_model()

TEST_SECRET = "test-supabase-secret-with-enough-length-for-hs256"


class LoginSessionTest(TestCase):
    def setUp(self):
        self.client_api = APIClient()
        self.user = User.objects.create_user(
            username="fac", email="fac@college.edu", password="pass123", role="faculty"
        )

    def test_login_returns_tokens_and_sets_cookie(self):
        r = self.client_api.post(
            reverse("login"), {"email": "fac@college.edu", "password": "pass123"}, format="json"
        )
        self.assertEqual(r.status_code, 200, r.data)
        self.assertIn("access", r.data)
        self.assertIn("refresh", r.data)
        self.assertEqual(r.data["claims"]["role"], "faculty")
        self.assertIn(settings.PORTAL_SESSION_COOKIE, r.cookies)

    def test_login_rejects_bad_password(self):
        r = self.client_api.post(
            reverse("login"), {"email": "fac@college.edu", "password": "wrong"}, format="json"
        )
        self.assertEqual(r.status_code, 400)

    def test_logout_clears_cookie(self):
        r = self.client_api.post(reverse("auth-logout"))
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.cookies[settings.PORTAL_SESSION_COOKIE].value, "")

    def test_session_requires_token(self):
        self.client_api.force_authenticate(self.user)
        r = self.client_api.post(reverse("auth-session"), {}, format="json")
        self.assertEqual(r.status_code, 400)

        r = self.client_api.post(reverse("auth-session"), {"token": "abc"}, format="json")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.cookies[settings.PORTAL_SESSION_COOKIE].value, "abc")

    def test_me_reports_claims(self):
        hod = User.objects.create_user(username="hod", password="pass123", role="hod", department="ECE")
        self.client_api.force_authenticate(hod)
        r = self.client_api.get(reverse("auth-me"))
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.data["claims"], {"role": "hod", "user_id": hod.id, "department": "ECE"})


class SetRoleTest(TestCase):
    def setUp(self):
        self.admin = User.objects.create_user(username="admin1", password="pass123", role="admin")
        self.faculty = User.objects.create_user(username="fac", password="pass123", role="faculty")
        self.client_admin = APIClient()
        self.client_admin.force_authenticate(self.admin)
        self.client_fac = APIClient()
        self.client_fac.force_authenticate(self.faculty)

    def test_admin_assigns_hod_role(self):
        r = self.client_admin.post(
            reverse("auth-set-role"),
            {"user_id": self.faculty.id, "role": "hod", "department": "MECH"},
            format="json",
        )
        self.assertEqual(r.status_code, 200, r.data)
        self.faculty.refresh_from_db()
        self.assertEqual(self.faculty.role, "hod")
        self.assertEqual(self.faculty.department, "MECH")
        self.assertTrue(
            DomainActivity.objects.filter(verb=ACTIVITY_ROLE_ASSIGNED, object_id=str(self.faculty.id)).exists()
        )

    def test_hod_needs_department(self):
        r = self.client_admin.post(
            reverse("auth-set-role"), {"user_id": self.faculty.id, "role": "hod"}, format="json"
        )
        self.assertEqual(r.status_code, 400)

    def test_non_admin_is_denied(self):
        r = self.client_fac.post(
            reverse("auth-set-role"), {"user_id": self.faculty.id, "role": "admin"}, format="json"
        )
        self.assertEqual(r.status_code, 403)
        self.faculty.refresh_from_db()
        self.assertEqual(self.faculty.role, "faculty")


@override_settings(SUPABASE_JWT_SECRET=TEST_SECRET)
class SupabaseTokenTest(TestCase):
    def token(self, **claims):
        payload = {
            "sub": "5b0c4a52-8a55-4a8e-9e3e-0f7e1b2c3d4e",
            "email": "hod@college.edu",
            "aud": "authenticated",
            "role": "authenticated",
            "exp": int(time.time()) + 3600,
        }
        payload.update(claims)
        return jwt.encode(payload, TEST_SECRET, algorithm="HS256")

    def test_token_creates_user_and_syncs_claims(self):
        client = APIClient()
        client.credentials(
            HTTP_AUTHORIZATION="Bearer " + self.token(app_metadata={"role": "hod", "department": "IT"})
        )
        r = client.get(reverse("auth-me"))
        self.assertEqual(r.status_code, 200, r.data)
        self.assertEqual(r.data["claims"]["role"], "hod")
        self.assertEqual(r.data["claims"]["department"], "IT")

        user = User.objects.get(email="hod@college.edu")
        self.assertEqual(user.external_id, "5b0c4a52-8a55-4a8e-9e3e-0f7e1b2c3d4e")
        self.assertEqual(user.role, "hod")

    def test_expired_token_is_rejected(self):
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION="Bearer " + self.token(exp=int(time.time()) - 10))
        r = client.get(reverse("auth-me"))
        self.assertEqual(r.status_code, 401)
