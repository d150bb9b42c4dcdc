from fastapi import Request

from reelwave.services.auth_service import AuthService
from reelwave.services.movie_session import MovieSession


# Dependency to get the session owned by the running app
def get_movie_session(request: Request) -> MovieSession:
    return request.app.state.movie_session


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service
