import logging

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework import status
from rest_framework_simplejwt.tokens import RefreshToken

from core.constants import ACTIVITY_ROLE_ASSIGNED, ROLE_HOD
from core.exceptions import AuthorizationError, LifecycleValidationError, UpstreamError
from core.models import DomainActivity
from core.services import ActivityService
from core.supabase_client import push_user_claims
from projects.actor import ActorContext
from users.serializers import RoleAssignmentSerializer, UserSerializer
from .serializers import LoginSerializer, SessionSerializer

logger = logging.getLogger("portal")

User = get_user_model()


def _set_session_cookie(response, token):
    response.set_cookie(
        settings.PORTAL_SESSION_COOKIE,
        token,
        max_age=settings.PORTAL_SESSION_COOKIE_AGE,
        httponly=True,
        secure=not settings.DEBUG,
        samesite="Lax",
    )
    return response


class LoginView(APIView):
    """
    POST /api/auth/login/
    Email/password login. Returns JWTs and sets the session cookie used by
    the role route gate.
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        user = serializer.validated_data["user"]
        refresh = RefreshToken.for_user(user)
        actor = ActorContext.for_user(user)
        response = Response(
            {
                "access": str(refresh.access_token),
                "refresh": str(refresh),
                "claims": actor.as_dict(),
            },
            status=status.HTTP_200_OK
        )
        return _set_session_cookie(response, str(refresh.access_token))


class MeView(APIView):
    """GET /api/auth/me/ : the caller's profile and resolved claims."""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        actor = ActorContext.from_request(request)
        return Response({
            **UserSerializer(request.user).data,
            "claims": actor.as_dict(),
        })


class SessionView(APIView):
    """
    POST /api/auth/session/
    Store the caller's token in the session cookie (for sign-ins that
    happened directly against the identity provider).
    """
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = SessionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        token = serializer.validated_data.get("token")
        if not token:
            header = request.headers.get("Authorization", "")
            token = header.split(" ", 1)[1] if header.startswith("Bearer ") else None
        if not token:
            raise LifecycleValidationError({"token": ["A token is required to start a session."]})

        actor = ActorContext.from_request(request)
        return _set_session_cookie(Response({"claims": actor.as_dict()}), token)


class LogoutView(APIView):
    """POST /api/auth/logout/ : clear the session cookie."""
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request):
        response = Response({"detail": "Logged out"})
        response.delete_cookie(settings.PORTAL_SESSION_COOKIE, samesite="Lax")
        return response


class SetRoleView(APIView):
    """
    POST /api/auth/set-role/
    Admin only: assign role (and department for HoDs) to a user.
    """
    permission_classes = [IsAuthenticated]

    def post(self, request):
        actor = ActorContext.from_request(request)
        if not actor.is_admin:
            raise AuthorizationError("Only administrators can assign roles")

        serializer = RoleAssignmentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        role = data["role"]
        department = data.get("department") if role == ROLE_HOD else None

        try:
            with transaction.atomic():
                user = User.objects.select_for_update().get(pk=data["user_id"])
                previous = {"role": user.role, "department": user.department}
                user.role = role
                user.department = department
                user.save(update_fields=["role", "department"])

                ActivityService.log_activity(
                    actor=request.user,
                    verb=ACTIVITY_ROLE_ASSIGNED,
                    target=user,
                    department=department,
                    visibility=DomainActivity.VISIBILITY_PRIVATE,
                    metadata={"role": role, "department": department, "previous": previous},
                )

                push_user_claims(user.external_id, role, department)
        except UpstreamError:
            raise
        except Exception:
            logger.exception(f"Failed to assign role to user {data['user_id']}")
            raise UpstreamError("Could not update the user's claims. Please try again.")

        logger.info(f"Role assigned: user={user.id}, role={role}, department={department}, by={actor.user_id}")
        return Response(UserSerializer(user).data)
