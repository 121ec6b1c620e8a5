# app/dependencies.py
"""
Per-request gateway construction.

The bearer token is required before anything else runs. The gateway (and
the HTTP client or DB session behind it) lives for one request and is
released when the response has been produced.

In sql mode the token is verified here, so routes open to any
authenticated caller still reject a bad credential. In remote mode the
managed service rejects it on the first data call.
"""

from typing import AsyncIterator

from fastapi import Depends, Request

from app.auth.bearer import require_bearer
from app.exceptions import AuthenticationError
from app.services.fleet_gateway import FleetGateway
from app.services.remote_client import SupabaseClient
from app.services.remote_gateway import RemoteFleetGateway
from app.services.sql_gateway import SqlFleetGateway


async def get_gateway(
    request: Request,
    token: str = Depends(require_bearer),
) -> AsyncIterator[FleetGateway]:
    state = request.app.state
    settings = state.settings

    if settings.is_sql_backend:
        db = state.session_factory()
        try:
            gateway = SqlFleetGateway(db, token, settings)
            if await gateway.get_user_id() is None:
                raise AuthenticationError("Invalid token")
            yield gateway
        finally:
            db.close()
        return

    client = SupabaseClient(
        settings.SUPABASE_URL,
        settings.SUPABASE_ANON_KEY,
        token,
        transport=state.remote_transport,
        timeout=settings.REMOTE_TIMEOUT_SECONDS,
    )
    try:
        yield RemoteFleetGateway(client)
    finally:
        await client.aclose()
