# quintave/core/google_auth.py
import base64
import binascii
import json
from typing import Dict, Optional, Tuple

import httpx
from google_auth_oauthlib.flow import Flow

from quintave.core.config import settings

# Google OAuth2 endpoints
GOOGLE_AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_USERINFO_URL = "https://www.googleapis.com/oauth2/v3/userinfo"

# Scopes required for the application
SCOPES = [
    "openid",
    "https://www.googleapis.com/auth/userinfo.email",
    "https://www.googleapis.com/auth/userinfo.profile",
]

PLATFORM_WEB = "web"
PLATFORM_NATIVE = "native"


def encode_state(redirect_uri: str, platform: str) -> str:
    """Carry the callback URI and the calling platform through Google in the OAuth state"""
    payload = json.dumps({"redirectUri": redirect_uri, "platform": platform})
    return base64.b64encode(payload.encode("utf-8")).decode("ascii")


def decode_state(state: str) -> Tuple[str, str]:
    """Return (redirect_uri, platform) from an OAuth state value.

    Older clients sent the bare base64 redirect URI; those are treated as web logins.
    """
    try:
        raw = base64.b64decode(state).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        raise ValueError("Malformed OAuth state")

    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        return raw, PLATFORM_WEB

    if not isinstance(data, dict):
        return raw, PLATFORM_WEB
    return data.get("redirectUri") or settings.oauth_redirect_uri, data.get("platform") or PLATFORM_WEB


def create_oauth_flow(redirect_uri: Optional[str] = None) -> Flow:
    """Create a Google OAuth2 flow instance"""
    client_config = {
        "web": {
            "client_id": settings.GOOGLE_CLIENT_ID,
            "client_secret": settings.GOOGLE_CLIENT_SECRET,
            "auth_uri": GOOGLE_AUTH_URL,
            "token_uri": GOOGLE_TOKEN_URL,
            "redirect_uris": [redirect_uri or settings.oauth_redirect_uri],
        }
    }

    # The code is redeemed with httpx below, so no PKCE verifier is kept around
    flow = Flow.from_client_config(
        client_config=client_config,
        scopes=SCOPES,
        redirect_uri=redirect_uri or settings.oauth_redirect_uri,
        autogenerate_code_verifier=False,
    )

    return flow


def build_login_url(redirect_uri: str, platform: str = PLATFORM_WEB) -> str:
    flow = create_oauth_flow(redirect_uri)
    auth_url, _ = flow.authorization_url(
        state=encode_state(redirect_uri, platform),
        access_type="offline",
        prompt="select_account",
    )
    return auth_url


async def get_google_user_info(access_token: str) -> Dict:
    """Get user info from Google using the access token"""
    async with httpx.AsyncClient() as client:
        headers = {"Authorization": f"Bearer {access_token}"}
        response = await client.get(GOOGLE_USERINFO_URL, headers=headers)
        response.raise_for_status()
        return response.json()


async def exchange_code_for_token(code: str, redirect_uri: str) -> Tuple[str, Dict]:
    """Exchange an authorization code for an access token and the user's profile"""
    data = {
        "code": code,
        "client_id": settings.GOOGLE_CLIENT_ID,
        "client_secret": settings.GOOGLE_CLIENT_SECRET,
        "redirect_uri": redirect_uri,
        "grant_type": "authorization_code",
    }

    try:
        async with httpx.AsyncClient() as client:
            response = await client.post(GOOGLE_TOKEN_URL, data=data)
            response.raise_for_status()
            token_data = response.json()

        access_token = token_data.get("access_token")
        if not access_token:
            raise ValueError("No access token received from Google")

        user_info = await get_google_user_info(access_token)
        return access_token, user_info

    except httpx.HTTPError as e:
        raise ValueError(f"HTTP error during token exchange: {str(e)}")
