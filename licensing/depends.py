from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import sessionmaker

from licensing.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from licensing.api.utils.jwt import verify_jwt
from licensing.domain.entities import ActorRole
from licensing.domain.workflow import Actor

security = HTTPBearer()


def get_session_factory(request: Request) -> sessionmaker:
    """Session factory built by create_app for this application instance"""
    return request.app.state.session_factory


async def get_unit_of_work(session_factory: sessionmaker = Depends(get_session_factory)):
    async with session_factory() as session:
        yield SqlAlchemyUnitOfWork(session)


async def get_current_actor(
    request: Request,
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> Actor:
    """
    Dependency to extract and verify JWT token from Authorization header.

    Args:
        credentials: Bearer token from Authorization header

    Returns:
        Actor built from the email and role claims

    Raises:
        HTTPException: 401 if token is invalid, expired or lacks claims
        HTTPException: 403 if the role claim is not a known portal role
    """
    config = request.app.state.config
    payload = verify_jwt(credentials.credentials, config.JWT_SECRET, config.JWT_ALGORITHM)

    if payload is None or not payload.get("email") or not payload.get("role"):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    try:
        role = ActorRole(payload["role"])
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Unknown role",
        )

    return Actor(email=payload["email"], role=role)
