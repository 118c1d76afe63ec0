"""
Client Microsoft Graph pour l'envoi des emails de notification.

Authentification OAuth "client credentials" (application) puis appel de
l'endpoint sendMail de la boite expeditrice. Graph signale la limitation
de debit par 429 (et parfois 503) avec un header Retry-After : ces
reponses sont relancees via tenacity, apres le delai Retry-After s'il
est fourni, sinon avec backoff exponentiel.

Usage:
    client = GraphMailClient(tenant_id, client_id, secret, sender="noreply@example.com")
    await client.send_mail(["admin@example.com"], "Sujet", "<p>Bonjour</p>")
    await client.close()
"""

import time
from collections.abc import Callable, Sequence
from typing import Any, Optional

import httpx
from loguru import logger
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)

from vidselect.core.errors import NotificationError

# Statuts relances (limitation de debit Graph)
THROTTLED_STATUSES = (429, 503)


class GraphThrottledError(Exception):
    """
    Reponse de limitation de debit.

    Attributes:
        status_code: 429 ou 503
        retry_after: Secondes demandees par le header Retry-After, ou None
    """

    def __init__(self, status_code: int, retry_after: Optional[int] = None) -> None:
        self.status_code = status_code
        self.retry_after = retry_after
        super().__init__(f"Graph throttled ({status_code}). Retry after: {retry_after}s")


def _retry_after(response: httpx.Response) -> Optional[int]:
    value = response.headers.get("Retry-After")
    return int(value) if value and value.isdigit() else None


class wait_retry_after:
    """
    Strategie d'attente tenacity respectant le header Retry-After.

    Le delai demande par Graph est plafonne a max_wait. Sans header,
    la strategie de repli (backoff exponentiel) s'applique.
    """

    def __init__(self, fallback: Callable[[RetryCallState], float], max_wait: float) -> None:
        self._fallback = fallback
        self._max_wait = max_wait

    def __call__(self, retry_state: RetryCallState) -> float:
        error = retry_state.outcome.exception() if retry_state.outcome else None
        if isinstance(error, GraphThrottledError) and error.retry_after is not None:
            return float(min(error.retry_after, self._max_wait))
        return self._fallback(retry_state)


class GraphMailClient:
    """
    Client d'envoi d'emails via Microsoft Graph.

    Le jeton d'acces est mis en cache en memoire jusqu'a une minute
    avant son expiration.

    Attributes:
        LOGIN_BASE_URL: Endpoint OAuth Azure AD
        GRAPH_BASE_URL: URL de base de l'API Graph v1.0
        SCOPE: Scope demande pour le flux client credentials
    """

    LOGIN_BASE_URL = "https://login.microsoftonline.com"
    GRAPH_BASE_URL = "https://graph.microsoft.com/v1.0"
    SCOPE = "https://graph.microsoft.com/.default"

    def __init__(
        self,
        tenant_id: str,
        client_id: str,
        client_secret: str,
        sender: str,
        max_attempts: int = 4,
        max_wait: int = 30,
        min_wait: float = 1,
    ) -> None:
        """
        Initialise le client.

        Args:
            tenant_id: Tenant Azure AD
            client_id: Identifiant de l'application
            client_secret: Secret de l'application
            sender: Boite aux lettres expeditrice
            max_attempts: Tentatives maximum sur limitation de debit
            max_wait: Delai maximum entre deux tentatives (secondes)
            min_wait: Delai minimum entre deux tentatives (secondes)
        """
        self._tenant_id = tenant_id
        self._client_id = client_id
        self._client_secret = client_secret
        self._sender = sender
        self._max_attempts = max_attempts
        self._max_wait = max_wait
        self._min_wait = min_wait
        self._client: Optional[httpx.AsyncClient] = None
        self._token: Optional[str] = None
        self._token_expires_at = 0.0

    @property
    def sender(self) -> str:
        return self._sender

    def _get_client(self) -> httpx.AsyncClient:
        """Retourne le client HTTP, le cree si necessaire (lazy init)."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=30.0)
        return self._client

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Requete HTTP relancee sur 429/503, autres erreurs propagees."""

        @retry(
            retry=retry_if_exception_type(GraphThrottledError),
            wait=wait_retry_after(
                wait_random_exponential(multiplier=1, min=self._min_wait, max=self._max_wait),
                self._max_wait,
            ),
            stop=stop_after_attempt(self._max_attempts),
            reraise=True,
        )
        async def _do_request() -> httpx.Response:
            response = await self._get_client().request(method, url, **kwargs)
            if response.status_code in THROTTLED_STATUSES:
                logger.debug(f"Graph limite le debit ({response.status_code}) sur {url}")
                raise GraphThrottledError(response.status_code, _retry_after(response))
            response.raise_for_status()
            return response

        return await _do_request()

    async def _get_token(self) -> str:
        """Jeton d'acces applicatif (cache jusqu'a expiration - 60s)."""
        if self._token and time.monotonic() < self._token_expires_at:
            return self._token

        url = f"{self.LOGIN_BASE_URL}/{self._tenant_id}/oauth2/v2.0/token"
        response = await self._request(
            "POST",
            url,
            data={
                "client_id": self._client_id,
                "client_secret": self._client_secret,
                "scope": self.SCOPE,
                "grant_type": "client_credentials",
            },
        )
        payload = response.json()
        self._token = payload["access_token"]
        self._token_expires_at = time.monotonic() + int(payload.get("expires_in", 3600)) - 60
        return self._token

    async def send_mail(self, recipients: Sequence[str], subject: str, html_body: str) -> None:
        """
        Envoie un email HTML.

        Args:
            recipients: Adresses des destinataires
            subject: Sujet
            html_body: Corps HTML

        Raises:
            NotificationError: Echec d'authentification ou d'envoi
        """
        if not recipients:
            raise NotificationError("Aucun destinataire")

        message = {
            "message": {
                "subject": subject,
                "body": {"contentType": "HTML", "content": html_body},
                "toRecipients": [{"emailAddress": {"address": r}} for r in recipients],
            },
            "saveToSentItems": False,
        }
        url = f"{self.GRAPH_BASE_URL}/users/{self._sender}/sendMail"

        try:
            token = await self._get_token()
            await self._request(
                "POST",
                url,
                json=message,
                headers={"Authorization": f"Bearer {token}"},
            )
        except GraphThrottledError as e:
            raise NotificationError(f"Envoi abandonne apres limitation de debit: {e}") from e
        except (httpx.HTTPError, KeyError, ValueError) as e:
            raise NotificationError(f"Envoi Graph en echec: {e}") from e

        logger.info(f"Email '{subject}' envoye a {len(recipients)} destinataire(s)")

    async def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None
