"""HTTP client for loading and saving a single character on the remote store."""

from typing import Annotated, Any

import aiohttp
import structlog
from pydantic import (
    BaseModel,
    BeforeValidator,
    Field,
    StrictInt,
    ValidationError,
    field_validator,
)

from charforge.game.character.model import Character
from charforge.game.errors import InvalidPayloadError, RequestFailedError

logger = structlog.get_logger(__name__)


def _integral_float_as_int(value: Any) -> Any:
    """JSON numbers such as 15.0 carry a whole score; pass them on as int."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


WholeNumber = Annotated[StrictInt, BeforeValidator(_integral_float_as_int)]
SkillPoints = Annotated[WholeNumber, Field(ge=0)]


class CharacterPayload(BaseModel):
    """
    Character data carried in a load response.

    Attributes:
        attributes: Attribute name -> score, taken as-is
        skills: Skill name -> points, empty when the remote omits it
    """

    attributes: dict[str, WholeNumber] = Field(..., description="Attribute scores")
    skills: dict[str, SkillPoints] = Field(
        default_factory=dict, description="Skill points spent"
    )

    @field_validator("skills", mode="before")
    @classmethod
    def _null_skills_as_empty(cls, value: Any) -> Any:
        return {} if value is None else value


class LoadResponse(BaseModel):
    """Envelope returned by the remote store on a read request."""

    body: CharacterPayload


class RemoteSyncClient:
    """
    Async client for the remote character endpoint.

    Each call opens its own aiohttp session; there is no retry and no
    cancellation. Failures are raised as RequestFailedError or
    InvalidPayloadError and never change local state.
    """

    def __init__(self, api_url: str, timeout_seconds: float = 30.0) -> None:
        """
        Initialize the client.

        Args:
            api_url: Endpoint used for both load (GET) and save (POST)
            timeout_seconds: Total timeout for a single request
        """
        self.api_url = api_url
        self.timeout_seconds = timeout_seconds
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    async def fetch_character(self) -> CharacterPayload:
        """
        Read one character from the remote store.

        Returns:
            The validated character payload

        Raises:
            RequestFailedError: On transport failure, timeout, or non-2xx status
            InvalidPayloadError: If the body is not JSON or lacks an attributes object
        """
        logger.debug("character_load_requested", url=self.api_url)
        try:
            async with (
                aiohttp.ClientSession(timeout=self._timeout) as session,
                session.get(self.api_url) as resp,
            ):
                if not 200 <= resp.status < 300:
                    raise RequestFailedError(f"Load request failed with status {resp.status}")
                try:
                    data = await resp.json(content_type=None)
                except ValueError as e:
                    raise InvalidPayloadError(f"Load response is not valid JSON: {e}") from e
        except TimeoutError as e:
            raise RequestFailedError(
                f"Load request timed out after {self.timeout_seconds}s"
            ) from e
        except aiohttp.ClientError as e:
            raise RequestFailedError(f"Load request failed: {e}") from e

        try:
            response = LoadResponse.model_validate(data)
        except ValidationError as e:
            raise InvalidPayloadError(f"Invalid character payload: {e}") from e

        return response.body

    async def save_character(self, character: Character) -> Any:
        """
        Submit a character to the remote store.

        Args:
            character: Character to serialize as {id, attributes, skills}

        Returns:
            The decoded response body, or None if it was not JSON

        Raises:
            RequestFailedError: On transport failure, timeout, or non-2xx status
        """
        payload = character.to_payload()
        logger.debug("character_save_requested", url=self.api_url, character_id=character.id)
        try:
            async with (
                aiohttp.ClientSession(timeout=self._timeout) as session,
                session.post(self.api_url, json=payload) as resp,
            ):
                if not 200 <= resp.status < 300:
                    raise RequestFailedError(f"Save request failed with status {resp.status}")
                try:
                    return await resp.json(content_type=None)
                except ValueError:
                    return None
        except TimeoutError as e:
            raise RequestFailedError(
                f"Save request timed out after {self.timeout_seconds}s"
            ) from e
        except aiohttp.ClientError as e:
            raise RequestFailedError(f"Save request failed: {e}") from e
