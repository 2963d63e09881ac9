from django.core.management.base import BaseCommand
from django.contrib.auth import get_user_model
from django.db import transaction

from projects import lifecycle
from projects.actor import ActorContext
from projects.models import ProjectRecord
from projects.services import ProjectService

User = get_user_model()

THUMBNAIL = "https://images.unsplash.com/photo-1518770660439-4636190af475?auto=format&fit=crop&w=800&q=80"

PROJECTS = [
    {
        "title": "Smart Irrigation Controller",
        "abstract": "Soil moisture sensors drive a low-power valve controller that cuts water use on campus lawns.",
        "technologies": ["Python", "ESP32", "MQTT"],
        "project_type": "College Project",
        "steps": [lifecycle.ACTION_APPROVE, lifecycle.ACTION_TOGGLE_HALL_OF_FAME],
    },
    {
        "title": "Campus Lost & Found",
        "abstract": "A web app that matches lost item reports with found item photos using image embeddings.",
        "technologies": ["Django", "React", "PyTorch"],
        "project_type": "Product",
        "steps": [lifecycle.ACTION_APPROVE],
    },
    {
        "title": "Lecture Transcription Study",
        "abstract": "Comparing speech recognition accuracy on accented classroom audio.",
        "technologies": ["Whisper", "Python"],
        "project_type": "Publication",
        "publication_title": "Evaluating ASR on Indian English Lectures",
        "publication_type": "Conference",
        "journal_name": "ICACCS",
        "paper_link": "https://example.org/papers/asr-lectures",
        "steps": [lifecycle.ACTION_REJECT],
    },
    {
        "title": "Library Seat Finder",
        "abstract": "Occupancy sensors publish free seats to a live map.",
        "technologies": ["Flutter", "Firebase"],
        "project_type": "College Project",
        "steps": [],
    },
]


class Command(BaseCommand):
    help = "Seeds the database with demo users and projects in every lifecycle state"

    def _user(self, username, role, department=None):
        user, _ = User.objects.get_or_create(
            username=username,
            defaults={"email": f"{username}@example.edu", "role": role, "department": department},
        )
        user.role = role
        user.department = department
        user.set_password("password")
        user.save()
        return user

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write("🌱 Seeding data...")

        self._user("admin", "admin")
        hod = self._user("hod_cse", "hod", "CSE")
        self._user("hod_it", "hod", "IT")
        faculty = self._user("faculty", "faculty")

        faculty_actor = ActorContext.for_user(faculty)
        hod_actor = ActorContext.for_user(hod)

        created = 0
        for data in PROJECTS:
            data = dict(data)
            steps = data.pop("steps")
            if ProjectRecord.objects.filter(title=data["title"], faculty=faculty).exists():
                continue

            payload = {
                "department": "CSE",
                "academic_year": "2024-2025",
                "thumbnail_url": THUMBNAIL,
                "students": [
                    {"name": "Asha Raman", "regNo": "21CS001", "dept": "CSE", "year": "4"},
                    {"name": "Vikram Das", "regNo": "21CS014", "dept": "CSE", "year": "4"},
                ],
                **data,
            }
            record = ProjectService.create_record(faculty_actor, payload, as_draft=False)

            for step in steps:
                feedback = "Please add the evaluation dataset." if step == lifecycle.ACTION_REJECT else None
                ProjectService.transition(hod_actor, record.id, step, feedback=feedback)
            created += 1

        # One untouched draft
        if not ProjectRecord.objects.filter(faculty=faculty, visibility=ProjectRecord.VISIBILITY_DRAFT).exists():
            ProjectService.create_record(
                faculty_actor,
                {"department": "CSE", "title": "Attendance via BLE beacons"},
                as_draft=True,
            )
            created += 1

        self.stdout.write(self.style.SUCCESS(f"✅ Seeded {created} projects. All passwords are 'password'."))
