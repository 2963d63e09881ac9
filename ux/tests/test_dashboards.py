# ux/tests/test_dashboards.py
from datetime import timedelta

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.utils import timezone
from django.urls import reverse
from rest_framework.test import APIClient

from projects.models import ProjectRecord

User = get_user_model()


class DashboardTestBase(TestCase):
    def setUp(self):
        self.faculty = User.objects.create_user(username="fac", password="pass123", role="faculty")
        self.hod = User.objects.create_user(username="hod", password="pass123", role="hod", department="CSE")
        self.admin = User.objects.create_user(username="boss", password="pass123", role="admin")

        self.client_fac = APIClient()
        self.client_fac.force_authenticate(self.faculty)
        self.client_hod = APIClient()
        self.client_hod.force_authenticate(self.hod)
        self.client_admin = APIClient()
        self.client_admin.force_authenticate(self.admin)
        self.client_anon = APIClient()

    def make(self, visibility, department="CSE", **extra):
        return ProjectRecord.objects.create(
            faculty=self.faculty,
            department=department,
            title=extra.pop("title", f"{visibility} {department}"),
            visibility=visibility,
            **extra,
        )

    def transition(self, client, record, action, **body):
        r = client.post(reverse("project-transition", args=[record.id, action]), body, format="json")
        self.assertEqual(r.status_code, 200, getattr(r, "data", r.content))
        return r


class ExplorerTest(DashboardTestBase):
    def test_explorer_lists_public_only(self):
        public = self.make("public", technologies=["Python", "ML"])
        self.make("public", department="IT", technologies=["Java"])
        self.make("pending")
        self.make("draft")

        r = self.client_anon.get(reverse("ux-explorer"))
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.data["meta"]["count"], 2)
        self.assertEqual(r.data["meta"]["limit"], 12)

        r = self.client_anon.get(reverse("ux-explorer"), {"tech": "python"})
        self.assertEqual([p["id"] for p in r.data["data"]["projects"]], [str(public.id)])

    def test_explorer_paginates_newest_first(self):
        now = timezone.now()
        for i in range(3):
            record = self.make("public", title=f"P{i}")
            ProjectRecord.objects.filter(pk=record.pk).update(created_at=now - timedelta(minutes=10 - i))

        r = self.client_anon.get(reverse("ux-explorer"), {"limit": 2, "offset": 0})
        self.assertEqual([p["title"] for p in r.data["data"]["projects"]], ["P2", "P1"])

        r = self.client_anon.get(reverse("ux-explorer"), {"limit": 2, "offset": 2})
        self.assertEqual([p["title"] for p in r.data["data"]["projects"]], ["P0"])

    def test_explorer_detail_hides_non_public(self):
        pending = self.make("pending")
        public = self.make("public", students=[{"name": "Asha", "regNo": "21CS001", "phone": "9999"}])

        self.assertEqual(self.client_anon.get(reverse("ux-explorer-detail", args=[pending.id])).status_code, 404)

        r = self.client_anon.get(reverse("ux-explorer-detail", args=[public.id]))
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.data["data"]["project"]["students"], [{"name": "Asha", "dept": "", "year": ""}])

    def test_hall_of_fame_showcase(self):
        famous = self.make("public", hall_of_fame=True)
        self.make("public")

        r = self.client_anon.get(reverse("ux-hall-of-fame"))
        self.assertEqual(r.status_code, 200)
        self.assertEqual([p["id"] for p in r.data["data"]["projects"]], [str(famous.id)])


class FacultyDashboardTest(DashboardTestBase):
    def test_tabs_and_counts(self):
        self.make("draft")
        self.make("pending")
        published = self.make("public")
        self.make("rejected")

        r = self.client_fac.get(reverse("ux-faculty-dashboard"), {"tab": "published"})
        self.assertEqual(r.status_code, 200)
        data = r.data["data"]
        self.assertEqual(data["counts"], {"drafts": 1, "pending": 1, "published": 1, "rejected": 1})
        self.assertEqual([p["id"] for p in data["projects"]], [str(published.id)])

    def test_hall_of_fame_stays_in_published(self):
        record = self.make("public")
        self.transition(self.client_hod, record, "toggle_hall_of_fame")

        r = self.client_fac.get(reverse("ux-faculty-dashboard"), {"tab": "published"})
        projects = r.data["data"]["projects"]
        self.assertEqual([p["id"] for p in projects], [str(record.id)])
        self.assertTrue(projects[0]["hall_of_fame"])

    def test_other_roles_denied(self):
        r = self.client_hod.get(reverse("ux-faculty-dashboard"))
        self.assertEqual(r.status_code, 403)


class HodDashboardTest(DashboardTestBase):
    def test_tabs_exclude_drafts_and_other_departments(self):
        self.make("draft")
        pending = self.make("pending")
        self.make("pending", department="IT")
        self.make("public")
        self.make("public", hall_of_fame=True)

        r = self.client_hod.get(reverse("ux-hod-dashboard"))
        self.assertEqual(r.status_code, 200)
        data = r.data["data"]
        self.assertEqual(data["tab"], "pending")
        self.assertEqual(data["counts"], {"pending": 1, "approved": 1, "hall-of-fame": 1})
        self.assertEqual([p["id"] for p in data["projects"]], [str(pending.id)])

    def test_analytics(self):
        self.make("draft")
        self.make("pending", project_type="Product")
        self.make("public")
        self.make("public", hall_of_fame=True)
        self.make("rejected")
        self.make("public", department="IT")

        r = self.client_hod.get(reverse("ux-hod-analytics"))
        self.assertEqual(r.status_code, 200)
        stats = r.data["data"]["stats"]
        self.assertEqual(stats["total_projects"], 4)
        self.assertEqual(stats["pending_count"], 1)
        self.assertEqual(stats["approved_count"], 1)
        self.assertEqual(stats["hall_of_fame_count"], 1)
        self.assertEqual(stats["by_type"], {"Product": 1, "College Project": 3})
        self.assertEqual(len(stats["recent_activity"]), 3)

    def test_faculty_denied(self):
        self.assertEqual(self.client_fac.get(reverse("ux-hod-dashboard")).status_code, 403)


class AdminDashboardTest(DashboardTestBase):
    def test_admin_sees_published_and_hall_of_fame_only(self):
        self.make("draft")
        self.make("pending")
        self.make("rejected")
        self.make("public")
        self.make("public", department="IT", hall_of_fame=True)

        r = self.client_admin.get(reverse("ux-admin-dashboard"))
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.data["data"]["counts"], {"all": 2, "approved": 2, "hall-of-fame": 1})

        stats = self.client_admin.get(reverse("ux-admin-analytics")).data["data"]["stats"]
        self.assertEqual(stats["by_department"], {"CSE": 1, "IT": 1})

    def test_approval_and_hall_of_fame_reach_admin_counts(self):
        record = self.make("pending")

        def stats():
            return self.client_admin.get(reverse("ux-admin-analytics")).data["data"]["stats"]

        self.assertEqual(stats()["approved_count"], 0)

        self.transition(self.client_hod, record, "approve")
        self.assertEqual(stats()["approved_count"], 1)
        self.assertEqual(stats()["hall_of_fame_count"], 0)

        self.transition(self.client_hod, record, "toggle_hall_of_fame")
        self.assertEqual(stats()["hall_of_fame_count"], 1)

        r = self.client_anon.get(reverse("ux-explorer"))
        self.assertEqual([p["id"] for p in r.data["data"]["projects"]], [str(record.id)])

    def test_hod_denied(self):
        self.assertEqual(self.client_hod.get(reverse("ux-admin-analytics")).status_code, 403)
