# core/constants.py

# --- Departments (fixed enumeration, HoD scoping key) ---
DEPT_CSE = "CSE"
DEPT_IT = "IT"
DEPT_ECE = "ECE"
DEPT_EEE = "EEE"
DEPT_MECH = "MECH"
DEPT_CIVIL = "CIVIL"
DEPT_AIDS = "AIDS"
DEPT_OTHER = "OTHER"

DEPARTMENT_CHOICES = [
    (DEPT_CSE, "Computer Science and Engineering"),
    (DEPT_IT, "Information Technology"),
    (DEPT_ECE, "Electronics and Communication Engineering"),
    (DEPT_EEE, "Electrical and Electronics Engineering"),
    (DEPT_MECH, "Mechanical Engineering"),
    (DEPT_CIVIL, "Civil Engineering"),
    (DEPT_AIDS, "Artificial Intelligence and Data Science"),
    (DEPT_OTHER, "Other"),
]

DEPARTMENTS = [code for code, _ in DEPARTMENT_CHOICES]

# --- Actor roles (claims supplied by the identity provider) ---
ROLE_FACULTY = "faculty"
ROLE_HOD = "hod"
ROLE_ADMIN = "admin"
ROLE_ANONYMOUS = "anonymous"

ROLE_CHOICES = [
    (ROLE_FACULTY, "Faculty"),
    (ROLE_HOD, "Head of Department"),
    (ROLE_ADMIN, "Admin"),
]

# --- Activity Verbs (Standard Registry) ---

# Project lifecycle
ACTIVITY_PROJECT_CREATED = "project.created"
ACTIVITY_PROJECT_EDITED = "project.edited"
ACTIVITY_PROJECT_SUBMITTED = "project.submitted"
ACTIVITY_PROJECT_RESUBMITTED = "project.resubmitted"
ACTIVITY_PROJECT_APPROVED = "project.approved"
ACTIVITY_PROJECT_REJECTED = "project.rejected"
ACTIVITY_PROJECT_DELETED = "project.deleted"

# Hall of fame
ACTIVITY_HALL_OF_FAME_ADDED = "project.hall_of_fame.added"
ACTIVITY_HALL_OF_FAME_REMOVED = "project.hall_of_fame.removed"

# Identity
ACTIVITY_ROLE_ASSIGNED = "user.role_assigned"
