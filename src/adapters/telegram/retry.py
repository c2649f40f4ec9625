"""
Mecanisme de retry avec backoff exponentiel pour l'API Bot Telegram.

Gere automatiquement les erreurs 429 (flood control) en relancant
les requetes apres le delai impose par l'API, ou avec un delai
croissant et du jitter aleatoire si l'API n'en indique pas.

Usage:
    @with_retry(max_attempts=5, max_wait=60)
    async def my_api_call():
        ...
"""

from typing import Optional

from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)


class RateLimitError(Exception):
    """
    Exception levee quand l'API retourne 429 Too Many Requests.

    Attributes:
        retry_after: Nombre de secondes a attendre (champ parameters.retry_after
                     de la reponse), ou None si non specifie.
    """

    def __init__(self, retry_after: Optional[int] = None) -> None:
        """
        Initialise l'erreur avec la valeur retry_after optionnelle.

        Args:
            retry_after: Secondes a attendre avant de relancer (optionnel)
        """
        self.retry_after = retry_after
        super().__init__(f"Rate limited. Retry after: {retry_after}s")


class wait_retry_after:
    """
    Strategie d'attente tenacity respectant le retry_after de l'API.

    Si la derniere exception porte un retry_after, on attend cette duree
    (bornee par max_wait). Sinon on delegue au backoff exponentiel avec jitter.
    """

    def __init__(self, max_wait: float) -> None:
        self.max_wait = max_wait
        self._fallback = wait_random_exponential(
            multiplier=1, min=min(1, max_wait), max=max_wait
        )

    def __call__(self, retry_state: RetryCallState) -> float:
        outcome = retry_state.outcome
        error = outcome.exception() if outcome is not None else None
        if isinstance(error, RateLimitError) and error.retry_after is not None:
            return float(min(error.retry_after, self.max_wait))
        return self._fallback(retry_state)


def with_retry(max_attempts: int = 5, max_wait: float = 60):
    """
    Decorateur pour relancer sur RateLimitError.

    Args:
        max_attempts: Nombre maximum de tentatives (defaut: 5)
        max_wait: Delai maximum entre les tentatives en secondes (defaut: 60)

    Returns:
        Decorateur a appliquer sur une fonction async

    Example:
        @with_retry(max_attempts=3, max_wait=30)
        async def send():
            # Sera relance jusqu'a 3 fois si RateLimitError est levee
            ...
    """
    return retry(
        retry=retry_if_exception_type(RateLimitError),
        wait=wait_retry_after(max_wait),
        stop=stop_after_attempt(max_attempts),
        reraise=True,
    )
