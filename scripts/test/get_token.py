# scripts/test/get_token.py
"""
Print an access token for manual API testing.

  remote:  password sign-in against the identity provider (SUPABASE_URL)
  sql:     mint an HS256 token signed with JWT_SECRET for an existing profile id

Usage:
  python scripts/test/get_token.py --email manager@test.com --password 'Test1234!'
  python scripts/test/get_token.py --mint <user-id> --hours 8
"""

import argparse
import sys
import os
import time
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

import httpx
import jwt

from app.config import get_settings


def sign_in(settings, email: str, password: str) -> str:
    resp = httpx.post(
        f"{settings.SUPABASE_URL.rstrip('/')}/auth/v1/token",
        params={"grant_type": "password"},
        headers={"apikey": settings.SUPABASE_ANON_KEY},
        json={"email": email, "password": password},
        timeout=10,
    )
    if resp.status_code != 200:
        body = resp.json() if resp.content else {}
        message = body.get("error_description") or body.get("msg") or resp.text
        print(f"❌ Login failed: {message}")
        sys.exit(1)
    return resp.json()["access_token"]


def mint(settings, user_id: str, hours: float) -> str:
    now = int(time.time())
    claims = {"sub": user_id, "iat": now, "exp": now + int(hours * 3600)}
    if settings.JWT_AUDIENCE:
        claims["aud"] = settings.JWT_AUDIENCE
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def main():
    parser = argparse.ArgumentParser(description="Obtain a bearer token for the fleet API")
    parser.add_argument("--email", default="manager@test.com")
    parser.add_argument("--password", default="Test1234!")
    parser.add_argument("--mint", metavar="USER_ID", help="Mint a local token instead of signing in")
    parser.add_argument("--hours", type=float, default=8)
    args = parser.parse_args()

    settings = get_settings()
    if args.mint:
        token = mint(settings, args.mint, args.hours)
    else:
        token = sign_in(settings, args.email, args.password)

    print("\nACCESS TOKEN:\n")
    print(token)


if __name__ == "__main__":
    main()
