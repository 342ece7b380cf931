# =============================================================================
# Auth API Routes
# =============================================================================
#
# Endpoints:
#   POST /auth/signup  - Create account, returns token
#   POST /auth/login   - Username or email + password, returns token
#   GET  /auth/me      - Get current user
#
# =============================================================================

from fastapi import APIRouter, Depends

from vidshare.api.dependencies import get_account_service
from vidshare.auth.context import AuthContext
from vidshare.auth.policies import require_auth
from vidshare.core.models import AccountView, AuthResult, LoginRequest, SignupRequest
from vidshare.services.accounts import AccountService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=AuthResult, status_code=201)
async def signup(
    data: SignupRequest,
    accounts: AccountService = Depends(get_account_service),
):
    """
    Create a new account.

    Returns the account (without credentials) and a token.
    """
    return await accounts.signup(data)


@router.post("/login", response_model=AuthResult)
async def login(
    data: LoginRequest,
    accounts: AccountService = Depends(get_account_service),
):
    """
    Authenticate and get a token.

    Wrong identifier and wrong password give the same response.
    """
    return await accounts.login(data.identifier, data.password)


@router.get("/me", response_model=AccountView)
async def get_current_user(
    ctx: AuthContext = Depends(require_auth),
    accounts: AccountService = Depends(get_account_service),
):
    """Get the current authenticated user."""
    return await accounts.current_account(ctx)
