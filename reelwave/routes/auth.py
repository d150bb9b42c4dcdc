from fastapi import APIRouter, Depends, HTTPException, status

from reelwave.schemas.auth import MessageResponse, UserLogin, UserResponse
from reelwave.services.auth_service import AuthService
from reelwave.utils.dependencies import get_auth_service

# Define router
router = APIRouter(prefix="/api/auth", tags=["Authentication"])


# Login endpoint
@router.post("/login", response_model=UserResponse)
async def login(credentials: UserLogin, auth: AuthService = Depends(get_auth_service)):
    """Login with any email and password"""
    user = auth.login(credentials)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Please enter valid credentials")
    return user


@router.post("/logout", response_model=MessageResponse)
async def logout(auth: AuthService = Depends(get_auth_service)):
    auth.logout()
    return {"message": "Logged out"}


# Get current user
@router.get("/me", response_model=UserResponse)
async def get_me(auth: AuthService = Depends(get_auth_service)):
    """Get the logged in user"""
    if auth.user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not logged in")
    return auth.user
