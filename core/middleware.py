# core/middleware.py
"""
Cookie-presence gate for the role-scoped page routes.

Mirrors the portal front-end routing: /faculty, /hod and /admin pages need a
session cookie, and their legacy per-role login pages all fold into the
shared /login page. This is a routing convenience, not a security boundary;
every API endpoint authorizes through the project policy layer.
"""
from django.conf import settings
from django.http import HttpResponseRedirect

GATED_PREFIXES = ("/faculty", "/hod", "/admin")


class RoleRouteSessionMiddleware:
    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        prefix = self._gated_prefix(request.path)
        if prefix is not None:
            login_url = settings.PORTAL_LOGIN_URL
            if request.path.rstrip("/") == f"{prefix}/login":
                return HttpResponseRedirect(login_url)
            if not request.COOKIES.get(settings.PORTAL_SESSION_COOKIE):
                return HttpResponseRedirect(login_url)

        return self.get_response(request)

    @staticmethod
    def _gated_prefix(path):
        for prefix in GATED_PREFIXES:
            if path == prefix or path.startswith(prefix + "/"):
                return prefix
        return None
