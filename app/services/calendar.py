import base64
import binascii
import json
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple
from urllib.parse import urlencode
import httpx
from fastapi import HTTPException, status
from pydantic import ValidationError
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from app.core.config import settings
from app.crud.calendar_connection import calendar_connection as calendar_connection_crud
from app.schemas.calendar import OAuthState
from app.core.logging_config import logger

GOOGLE_AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_USERINFO_URL = "https://www.googleapis.com/oauth2/v2/userinfo"
GOOGLE_PRIMARY_CALENDAR_URL = "https://www.googleapis.com/calendar/v3/users/me/calendarList/primary"

CALENDAR_SCOPES = (
    "https://www.googleapis.com/auth/calendar",
    "https://www.googleapis.com/auth/calendar.events",
)


class CalendarConnectError(Exception):
    """
    The OAuth callback could not finish. `code` is reported back to the
    dashboard as the calendar_error query parameter.
    """

    def __init__(self, code: str, message: Optional[str] = None):
        super().__init__(message or code)
        self.code = code


def encode_state(business_id: str, program_id: Optional[str] = None) -> str:
    payload = json.dumps({"business_id": business_id, "program_id": program_id})
    return base64.b64encode(payload.encode("utf-8")).decode("ascii")


def decode_state(state: str) -> OAuthState:
    """
    Raises:
        CalendarConnectError: invalid_state when the value is not ours
    """
    try:
        payload = json.loads(base64.b64decode(state, validate=True).decode("utf-8"))
        return OAuthState.model_validate(payload)
    except (binascii.Error, UnicodeDecodeError, ValueError, ValidationError) as e:
        raise CalendarConnectError("invalid_state", f"Could not decode OAuth state: {e}")


class CalendarService:
    """
    Google Calendar OAuth: builds the consent URL and finishes the
    authorization-code exchange.

    Args:
        transport: Optional httpx transport, used to stub Google in tests
    """

    def __init__(self, transport: Optional[httpx.BaseTransport] = None):
        self.transport = transport

    def _client(self) -> httpx.Client:
        return httpx.Client(transport=self.transport, timeout=10.0)

    def build_auth_url(self, business_id: str, program_id: Optional[str] = None) -> str:
        """
        Raises:
            HTTPException 400: If business_id is missing
            HTTPException 500: If Google OAuth credentials are not configured
        """
        if not business_id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="business_id is required"
            )
        if not settings.google_oauth_configured:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Google OAuth not configured. Missing GOOGLE_CLIENT_ID or GOOGLE_CLIENT_SECRET."
            )

        params = {
            "client_id": settings.GOOGLE_CLIENT_ID,
            "redirect_uri": settings.calendar_redirect_uri,
            "response_type": "code",
            "scope": " ".join(CALENDAR_SCOPES),
            "access_type": "offline",  # Required to get refresh token
            "prompt": "consent",       # Force consent to get refresh token
            "state": encode_state(business_id, program_id),
        }
        return f"{GOOGLE_AUTH_URL}?{urlencode(params)}"

    def complete_connection(self, db: Session, code: str, state: str) -> OAuthState:
        """
        Exchange the authorization code and store the calendar connection.

        Returns:
            The decoded state, telling the caller where to send the user

        Raises:
            CalendarConnectError: With the dashboard error code on any failure
        """
        target = decode_state(state)

        try:
            tokens, email, calendar_id = self._exchange_code(code)
        except httpx.HTTPError as e:
            logger.error(f"Google OAuth request failed: {type(e).__name__}: {e}")
            raise CalendarConnectError("unexpected_error")

        expires_in = tokens.get("expires_in") or 3600
        connection_data = {
            "business_id": target.business_id,
            "program_id": target.program_id,
            "provider": "google",
            "calendar_id": calendar_id,
            "email": email,
            "access_token": tokens["access_token"],
            "refresh_token": tokens.get("refresh_token"),
            "token_expires_at": datetime.now(timezone.utc) + timedelta(seconds=expires_in),
            "scope": tokens.get("scope"),
            "is_active": True,
            "sync_status": "pending",
        }

        try:
            calendar_connection_crud.upsert(db, data=connection_data)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error storing calendar connection for business {target.business_id}: {e}")
            raise CalendarConnectError("db_error")

        logger.info(f"Calendar connected for business {target.business_id} ({calendar_id})")
        return target

    def _exchange_code(self, code: str) -> Tuple[dict, Optional[str], str]:
        """Trade the code for tokens, then read the account email and primary calendar id."""
        with self._client() as client:
            token_response = client.post(GOOGLE_TOKEN_URL, data={
                "code": code,
                "client_id": settings.GOOGLE_CLIENT_ID or "",
                "client_secret": settings.GOOGLE_CLIENT_SECRET or "",
                "redirect_uri": settings.calendar_redirect_uri,
                "grant_type": "authorization_code",
            })
            if token_response.is_error:
                logger.error(f"Token exchange error: {token_response.status_code} {token_response.text}")
                raise CalendarConnectError("token_exchange_failed")

            try:
                tokens = token_response.json()
            except ValueError:
                raise CalendarConnectError("token_exchange_failed", "Token response is not JSON")
            if not isinstance(tokens, dict) or not tokens.get("access_token"):
                raise CalendarConnectError("token_exchange_failed", "Token response has no access_token")
            auth_headers = {"Authorization": f"Bearer {tokens['access_token']}"}

            userinfo_response = client.get(GOOGLE_USERINFO_URL, headers=auth_headers)
            if userinfo_response.is_error:
                logger.error(f"Failed to get user info: {userinfo_response.status_code}")
                raise CalendarConnectError("user_info_failed")

            try:
                email = userinfo_response.json().get("email")
            except (ValueError, AttributeError):
                raise CalendarConnectError("user_info_failed", "User info response is not a JSON object")

            calendar_id = "primary"
            calendar_response = client.get(GOOGLE_PRIMARY_CALENDAR_URL, headers=auth_headers)
            if calendar_response.is_success:
                try:
                    calendar_id = calendar_response.json().get("id") or "primary"
                except (ValueError, AttributeError):
                    logger.warning("Primary calendar response is not a JSON object, using primary")

        return tokens, email, calendar_id


# Create a singleton instance
calendar_service = CalendarService()
