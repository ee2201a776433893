import logging
from typing import Optional

import httpx
from fastapi import HTTPException, status

from storefront.configuration.settings import Configuration

configuration = Configuration()


class GoogleProfile:
    def __init__(self, email: str, name: Optional[str], subject: str):
        self.email = email
        self.name = name
        self.subject = subject


class GoogleOAuthClient:
    """Valida o id_token do Google pelo endpoint tokeninfo."""

    def __init__(self, client_id: Optional[str] = None, tokeninfo_url: Optional[str] = None, transport=None):
        self.client_id = client_id or configuration.google_client_id
        self.tokeninfo_url = tokeninfo_url or configuration.google_tokeninfo_url
        self.transport = transport

    async def verify(self, id_token: str) -> GoogleProfile:
        try:
            async with httpx.AsyncClient(transport=self.transport) as client:
                response = await client.get(self.tokeninfo_url, params={"id_token": id_token})
                response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            logging.error(f"OAUTH >>> Token do Google rejeitado: {e.response.status_code}")
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid Google token")
        except httpx.RequestError as e:
            logging.error(f"OAUTH >>> Erro ao acessar Google: {e}")
            raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Google sign-in unavailable")

        if self.client_id and data.get("aud") != self.client_id:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid Google token")
        if not data.get("email") or str(data.get("email_verified", "true")).lower() != "true":
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Google account email not verified")

        return GoogleProfile(email=data["email"].lower(), name=data.get("name"), subject=data.get("sub", ""))
