from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlmodel import Session, select
from datetime import datetime, timedelta, timezone
from typing import Optional
import logging
import jwt
import bcrypt

from storefront.auth.oauth import GoogleOAuthClient
from storefront.cart.dependencies import get_cart_provider
from storefront.cart.provider import CartProvider
from storefront.configuration.settings import Configuration
from storefront.database.connection import get_session
from storefront.enums.role import Role
from storefront.models.user import User
from storefront.schemas.auth import AuthResponse, GoogleSignInRequest, LoginRequest, RegisterRequest, UserRead

configuration = Configuration()

SECRET_KEY = configuration.secret_key
JWT_EXPIRATION_DAYS = configuration.jwt_expiration_days
TOKEN_COOKIE = configuration.token_cookie_name

db_session = get_session


def get_google_client() -> GoogleOAuthClient:
    return GoogleOAuthClient()


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def generate_jwt(user: User, is_new_user: bool = False) -> str:
    expiration = datetime.now(timezone.utc) + timedelta(days=JWT_EXPIRATION_DAYS)
    payload = {
        "id": user.id,
        "role": user.role.value if isinstance(user.role, Role) else user.role,
        "is_new_user": is_new_user,
        "exp": expiration,
    }
    return jwt.encode(payload, SECRET_KEY, algorithm="HS256")


def decode_jwt(token: str) -> dict:
    try:
        return jwt.decode(token, SECRET_KEY, algorithms=["HS256"])
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated: token expired")
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated: invalid token")


def extract_token(request: Request) -> Optional[str]:
    # Cookie primeiro; Authorization: Bearer como alternativa para clientes de API
    token = request.cookies.get(TOKEN_COOKIE)
    if token:
        return token

    authorization = request.headers.get("Authorization")
    if authorization:
        parts = authorization.split()
        if len(parts) == 2 and parts[0].lower() == "bearer":
            return parts[1]
    return None


class AuthRouter(APIRouter):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.add_api_route("/auth/register", self.register, methods=["POST"], response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
        self.add_api_route("/auth/login", self.login, methods=["POST"], response_model=AuthResponse)
        self.add_api_route("/auth/google", self.google_sign_in, methods=["POST"], response_model=AuthResponse)
        self.add_api_route("/auth/logout", self.logout, methods=["POST"], response_model=dict)
        self.add_api_route("/auth/me", self.me, methods=["GET"])

    def get_token_payload(self, request: Request) -> dict:
        token = extract_token(request)
        if not token:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
        return decode_jwt(token)

    def get_current_user(self, request: Request, session: Session = Depends(db_session)) -> User:
        payload = self.get_token_payload(request)
        user = session.get(User, payload["id"]) if payload.get("id") else None

        if not user:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
        return user

    def get_optional_user(self, request: Request, session: Session = Depends(db_session)) -> Optional[User]:
        token = extract_token(request)
        if not token:
            return None
        try:
            payload = decode_jwt(token)
        except HTTPException:
            return None
        return session.get(User, payload["id"]) if payload.get("id") else None

    def _set_token_cookie(self, response: Response, token: str) -> None:
        response.set_cookie(
            TOKEN_COOKIE,
            token,
            max_age=JWT_EXPIRATION_DAYS * 24 * 60 * 60,
            httponly=True,
            samesite="lax",
            secure=configuration.is_production,
            path="/",
        )

    def _auth_response(self, response: Response, user: User, is_new_user: bool = False) -> AuthResponse:
        token = generate_jwt(user, is_new_user=is_new_user)
        self._set_token_cookie(response, token)
        return AuthResponse(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role,
            token=token,
            is_new_user=is_new_user,
        )

    def register(self, data: RegisterRequest, response: Response, session: Session = Depends(db_session)):
        email = data.email.strip().lower()
        if session.exec(select(User).where(User.email == email)).first():
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User already exists")

        user = User(name=data.name, email=email, password_hash=hash_password(data.password), role=Role.USER)
        session.add(user)
        session.commit()
        session.refresh(user)

        logging.info(f"AUTH >>> Novo usuário registrado: {user.email}")
        return self._auth_response(response, user)

    def login(self, credentials: LoginRequest, response: Response, session: Session = Depends(db_session)):
        user = session.exec(select(User).where(User.email == credentials.email.strip().lower())).first()

        if not user or not user.password_hash or not bcrypt.checkpw(credentials.password.encode(), user.password_hash.encode()):
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

        return self._auth_response(response, user)

    async def google_sign_in(
        self,
        data: GoogleSignInRequest,
        response: Response,
        session: Session = Depends(db_session),
        google: GoogleOAuthClient = Depends(get_google_client),
    ):
        profile = await google.verify(data.id_token)

        user = session.exec(select(User).where(User.email == profile.email)).first()
        is_new_user = user is None

        if is_new_user:
            user = User(name=profile.name or profile.email, email=profile.email, role=Role.USER)
            session.add(user)
            session.commit()
            session.refresh(user)
            logging.info(f"AUTH >>> Novo usuário Google criado: {user.email}")
        else:
            logging.info(f"AUTH >>> Usuário Google existente entrou: {user.email}")

        return self._auth_response(response, user, is_new_user=is_new_user)

    def logout(self, response: Response, cart: CartProvider = Depends(get_cart_provider)):
        response.delete_cookie(TOKEN_COOKIE, path="/")
        cart.teardown()
        return {"message": "Logged out"}

    def me(self, request: Request, session: Session = Depends(db_session)):
        payload = self.get_token_payload(request)
        user = session.get(User, payload["id"]) if payload.get("id") else None
        if not user:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")

        return {
            "user": UserRead.model_validate(user).model_dump(),
            "is_new_user": bool(payload.get("is_new_user", False)),
        }
