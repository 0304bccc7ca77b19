# hospital/api/v1/session_router.py
from fastapi import APIRouter, Depends
from hospital.auth import IdentitySession, get_identity_session
from hospital.db.schemas import SessionState

session_router = APIRouter(
    prefix="/session",
    tags=["Session"],
)


@session_router.get("", response_model=SessionState, summary="Caller's sign-in state")
async def get_session_state(session: IdentitySession = Depends(get_identity_session)):
    return session.snapshot()


__all__ = ["session_router"]
