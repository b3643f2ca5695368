"""
HTTP client for the Anthropic Messages API.

This module provides the main interface to the API. It validates request
parameters locally, issues POST /v1/messages through a requests Session, maps
error responses onto the client's error taxonomy and, depending on the
``stream`` flag, returns either a parsed Message or a lazy MessageStream.
"""

from typing import Any, Dict, Literal, Optional, Union, overload

import requests
from pydantic import ValidationError as PydanticValidationError

from ..models.anthropic import Message, MessageCreateParams
from ..utils.error_handling import raise_for_response
from ..utils.loguru_utils import LoguruLogger
from ..utils.streaming import MessageStream
from .config import ClientConfig
from .exceptions import AnthropicError, NetworkError, ValidationError


log = LoguruLogger(__name__)

ANTHROPIC_VERSION = "2023-06-01"
MESSAGES_PATH = "/v1/messages"


def _format_validation_errors(exc: PydanticValidationError) -> str:
    details = []
    for error in exc.errors():
        field_path = " -> ".join(str(loc) for loc in error["loc"])
        details.append(f"{field_path}: {error['msg']}")
    return f"Invalid request parameters: {'; '.join(details)}"


def validate_params(params: Dict[str, Any]) -> MessageCreateParams:
    """
    Check request parameters before anything is sent.

    Raises:
        ValidationError: If a required parameter is missing or a field is invalid
    """
    if not params.get("model") or not params.get("max_tokens") or params.get("messages") is None:
        raise ValidationError(
            "Missing required parameters: model, max_tokens, and messages are required"
        )

    messages = params["messages"]
    if not isinstance(messages, (list, tuple)) or len(messages) == 0:
        raise ValidationError("messages array cannot be empty")

    try:
        return MessageCreateParams.model_validate(params)
    except PydanticValidationError as e:
        raise ValidationError(_format_validation_errors(e)) from e


class Messages:
    """The /v1/messages resource."""

    def __init__(self, client: "Anthropic"):
        self._client = client

    @overload
    def create(self, *, stream: Literal[True], **params: Any) -> MessageStream: ...

    @overload
    def create(self, *, stream: Literal[False] = False, **params: Any) -> Message: ...

    def create(self, *, stream: bool = False, **params: Any) -> Union[Message, MessageStream]:
        """
        Create a message.

        Args:
            stream: Stream the response as events instead of waiting for it
            **params: model, max_tokens, messages and the optional system,
                temperature, top_p, top_k and stop_sequences

        Returns:
            A Message, or a MessageStream when ``stream`` is true

        Raises:
            ValidationError: Parameters rejected locally, nothing was sent
            AuthenticationError, RateLimitError, APIError: Error response
            NetworkError: The request could not be completed
        """
        if stream:
            params["stream"] = True
        request = validate_params(params)
        return self._client._post_message(request)


class Anthropic:
    """
    Client for the Anthropic Messages API.

    Connection settings are resolved once, here: explicit arguments, then the
    ANTHROPIC_* environment, then defaults. Calls made through one client
    share its requests Session but each owns its own response and stream state.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Args:
            api_key: API key; falls back to ANTHROPIC_API_KEY
            base_url: API endpoint; falls back to ANTHROPIC_BASE_URL
            timeout: Transport timeout in seconds
            session: requests Session to send through; one is created if omitted

        Raises:
            ValidationError: If no API key is available
        """
        self.config = ClientConfig.resolve(api_key=api_key, base_url=base_url, timeout=timeout)
        self._owns_session = session is None
        self._session = session if session is not None else requests.Session()
        self.messages = Messages(self)

    @property
    def api_key(self) -> str:
        return self.config.api_key

    @property
    def base_url(self) -> str:
        return self.config.base_url

    def _headers(self, stream: bool) -> Dict[str, str]:
        headers = {
            "X-Api-Key": self.config.api_key,
            "Content-Type": "application/json",
            "anthropic-version": ANTHROPIC_VERSION,
        }
        if stream:
            headers["Accept"] = "text/event-stream"
        return headers

    def _post_message(self, request: MessageCreateParams) -> Union[Message, MessageStream]:
        url = f"{self.config.base_url}{MESSAGES_PATH}"
        stream = bool(request.stream)

        log.log_api_request("POST", url, model=request.model, stream=stream)
        timer_id = log.start_timer("messages.create")
        try:
            response = self._session.post(
                url,
                headers=self._headers(stream),
                json=request.to_request_body(),
                stream=stream,
                timeout=self.config.timeout,
            )
        except requests.RequestException as e:
            log.stop_timer(timer_id)
            raise NetworkError(f"Network error: {e}", cause=e) from e

        log.log_api_response("POST", url, response.status_code, log.stop_timer(timer_id))

        if not 200 <= response.status_code < 300:
            try:
                raise_for_response(response)
            except requests.RequestException as e:
                raise NetworkError(f"Network error: {e}", cause=e) from e
            finally:
                response.close()

        if stream:
            return MessageStream(response)

        try:
            return Message.model_validate_json(response.content)
        except requests.RequestException as e:
            raise NetworkError(f"Network error: {e}", cause=e) from e
        except PydanticValidationError as e:
            raise AnthropicError(f"Failed to parse response body: {e}") from e
        finally:
            response.close()

    def close(self) -> None:
        """Close the underlying Session if this client created it."""
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> "Anthropic":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


# Global client instance
_client: Optional[Anthropic] = None


def get_client() -> Anthropic:
    """
    Get the process-wide client, built from the environment on first use.

    Returns:
        Anthropic: The global client instance
    """
    global _client
    if _client is None:
        _client = Anthropic()
    return _client


def close_client() -> None:
    """
    Close and forget the process-wide client.
    """
    global _client
    if _client is not None:
        _client.close()
        _client = None
