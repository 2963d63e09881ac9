# core/supabase_auth.py
# Custom DRF authentication class to verify Supabase JWTs

import logging
import jwt
from django.conf import settings
from django.contrib.auth import get_user_model
from rest_framework.authentication import BaseAuthentication
from rest_framework.exceptions import AuthenticationFailed

from core.constants import DEPARTMENTS, ROLE_CHOICES

logger = logging.getLogger("portal")

User = get_user_model()

VALID_ROLES = {role for role, _ in ROLE_CHOICES}


def extract_portal_claims(payload) -> dict:
    """
    Pull the portal's custom claims (role, department) out of a token payload.

    Claims may sit at the top level or, as Supabase stores admin-assigned
    claims, under ``app_metadata``. Top-level values win.
    """
    if not isinstance(payload, dict):
        return {}

    app_metadata = payload.get("app_metadata")
    if not isinstance(app_metadata, dict):
        app_metadata = {}

    claims = {}
    # Supabase always sets role="authenticated" at the top level; only portal roles count
    for source in (payload, app_metadata):
        if "role" not in claims and source.get("role") in VALID_ROLES:
            claims["role"] = source["role"]
        if "department" not in claims and source.get("department") in DEPARTMENTS:
            claims["department"] = source["department"]

    return claims


class SupabaseJWTAuthentication(BaseAuthentication):
    """
    Custom authentication class that validates Supabase JWTs.

    This authenticator:
    1. Extracts the JWT from the Authorization header
    2. Verifies the token signature using the Supabase JWT secret
    3. Looks up or creates a Django user based on the Supabase user ID
    4. Syncs the role/department claims onto the user and returns the
       payload as ``request.auth`` (the claim bag)
    """

    def authenticate(self, request):
        auth_header = request.headers.get("Authorization", "")

        if not auth_header.startswith("Bearer "):
            return None  # Let other auth backends handle it

        token = auth_header.split(" ")[1]

        supabase_jwt_secret = getattr(settings, "SUPABASE_JWT_SECRET", None)
        if not supabase_jwt_secret:
            logger.debug("SUPABASE_JWT_SECRET not configured")
            return None

        try:
            # Supabase uses HS256 by default
            payload = jwt.decode(
                token,
                supabase_jwt_secret,
                algorithms=["HS256"],
                audience="authenticated",
            )
        except jwt.ExpiredSignatureError:
            raise AuthenticationFailed("Token has expired")
        except jwt.InvalidTokenError as e:
            logger.debug(f"Invalid Supabase token: {e}")
            return None  # Let other auth backends try

        supabase_user_id = payload.get("sub")
        email = payload.get("email")

        if not supabase_user_id:
            raise AuthenticationFailed("Invalid token: missing user ID")

        user = self._get_or_create_user(supabase_user_id, email)
        self._sync_claims(user, extract_portal_claims(payload))

        return (user, payload)

    def authenticate_header(self, request):
        return 'Bearer realm="api"'

    def _get_or_create_user(self, supabase_user_id: str, email: str):
        """
        Get or create a Django user based on Supabase user ID.

        Falls back to email for accounts created before the IdP link existed.
        """
        user = User.objects.filter(external_id=supabase_user_id).first()
        if user:
            return user

        if not email:
            raise AuthenticationFailed("Token missing email claim")

        user = User.objects.filter(email=email).first()
        if user:
            user.external_id = supabase_user_id
            user.save(update_fields=["external_id"])
            return user

        username = email.split("@")[0]
        # Ensure unique username
        base_username = username
        counter = 1
        while User.objects.filter(username=username).exists():
            username = f"{base_username}_{counter}"
            counter += 1

        user = User.objects.create(
            username=username,
            email=email,
            external_id=supabase_user_id,
            # Password is not used for Supabase auth
        )
        user.set_unusable_password()
        user.save(update_fields=["password"])
        logger.info(f"Created new user from Supabase: {email}")

        return user

    def _sync_claims(self, user, claims: dict):
        changed = []
        for field in ("role", "department"):
            value = claims.get(field)
            if value and getattr(user, field) != value:
                setattr(user, field, value)
                changed.append(field)
        if changed:
            user.save(update_fields=changed)
            logger.info(f"Synced claims {changed} for user {user.id}")
