# projects/throttles.py

from rest_framework.throttling import ScopedRateThrottle


class ProjectCreateThrottle(ScopedRateThrottle):
    """
    Throttle project creation per user.

    Scope key: 'project-create' (views must set throttle_scope to it;
    ScopedRateThrottle reads the scope from the view)
    Cache key shape:
      throttle_project-create_u<user_id>
    """
    scope = "project-create"

    def get_cache_key(self, request, view):
        # Only throttle POST (record creation)
        if request.method != "POST":
            return None

        user = getattr(request, "user", None)
        if not user or not user.is_authenticated:
            return None

        return f"throttle_{self.scope}_u{user.id}"
