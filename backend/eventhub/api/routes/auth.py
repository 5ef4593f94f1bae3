from fastapi import APIRouter, Depends

from eventhub.api.deps import get_accounts, get_current_identity
from eventhub.schemas.auth import AuthResponse, Identity, SignInBody, SignUpBody, SocialSignInBody, UserOut
from eventhub.services.accounts import AccountService, AuthResult

router = APIRouter()

def _auth_response(result: AuthResult) -> AuthResponse:
    return AuthResponse(
        user=UserOut.model_validate(result.user.model_dump()),
        token=result.token,
        message=result.message,
    )

@router.post("/signup", response_model=AuthResponse)
def signup(payload: SignUpBody, accounts: AccountService = Depends(get_accounts)):
    result = accounts.sign_up(payload.email, payload.password, payload.first_name, payload.last_name)
    return _auth_response(result)

@router.post("/signin", response_model=AuthResponse)
def signin(payload: SignInBody, accounts: AccountService = Depends(get_accounts)):
    return _auth_response(accounts.sign_in(payload.email, payload.password))

@router.post("/auth/social", response_model=AuthResponse)
def social_signin(payload: SocialSignInBody, accounts: AccountService = Depends(get_accounts)):
    """Simulated OAuth: google, facebook and github each map to one fixed account."""
    return _auth_response(accounts.social_sign_in(payload.provider))

@router.post("/signout")
def signout(identity: Identity = Depends(get_current_identity), accounts: AccountService = Depends(get_accounts)):
    accounts.sign_out(identity)
    return {"success": True, "message": "Signed out"}
