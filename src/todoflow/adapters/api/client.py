"""
Todo API Client - Low-level HTTP client for the todo REST API.

This handles the raw HTTP communication and the response envelope
`{success, data?, error?, message?}`. The ApiTodoRepository uses this
to implement the TodoRepositoryPort.
"""

import logging
from typing import Any, Optional

import requests

from ...core.exceptions import (
    NotFoundError,
    TodoflowError,
    TransportError,
    ValidationError,
)


class TodoApiClient:
    """
    Low-level todo REST API client.

    Handles request/response, envelope unwrapping and error mapping.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: API root (e.g., http://localhost:3000/api)
            timeout: Per-request timeout in seconds
            session: Optional pre-configured requests session
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.logger = logging.getLogger("TodoApiClient")

        self.headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }

        self._session = session or requests.Session()
        self._session.headers.update(self.headers)

    # -------------------------------------------------------------------------
    # Core Request Methods
    # -------------------------------------------------------------------------

    def request(
        self,
        method: str,
        endpoint: str,
        **kwargs
    ) -> Any:
        """
        Make a request and unwrap the response envelope.

        Args:
            method: HTTP method (GET, POST, PUT, PATCH, DELETE)
            endpoint: API endpoint (e.g., 'todos/abc')
            **kwargs: Additional arguments for requests

        Returns:
            The envelope's `data` field (None when absent)

        Raises:
            ValidationError: On 400/422 responses
            NotFoundError: On 404 responses
            TransportError: On other failures
        """
        url = f"{self.base_url}/{endpoint}"
        self.logger.debug(f"{method} {url}")

        try:
            response = self._session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.ConnectionError as e:
            raise TransportError(f"Connection failed: {e}", cause=e)
        except requests.exceptions.Timeout as e:
            raise TransportError(f"Request timed out: {e}", cause=e)
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Request failed: {e}", cause=e)

        return self._handle_response(response, endpoint)

    def get(self, endpoint: str, **kwargs) -> Any:
        return self.request("GET", endpoint, **kwargs)

    def post(self, endpoint: str, json: Optional[dict] = None, **kwargs) -> Any:
        return self.request("POST", endpoint, json=json, **kwargs)

    def put(self, endpoint: str, json: Optional[dict] = None, **kwargs) -> Any:
        return self.request("PUT", endpoint, json=json, **kwargs)

    def delete(self, endpoint: str, **kwargs) -> Any:
        return self.request("DELETE", endpoint, **kwargs)

    # -------------------------------------------------------------------------
    # Response Handling
    # -------------------------------------------------------------------------

    def _handle_response(
        self,
        response: requests.Response,
        endpoint: str
    ) -> Any:
        """Map status codes and envelope errors to exceptions."""
        envelope = self._parse_envelope(response)
        error = envelope.get("error") or envelope.get("message")
        status = response.status_code

        if response.ok:
            if envelope and envelope.get("success") is False:
                raise TransportError(error or f"Request to {endpoint} failed")
            return envelope.get("data")

        if status in (400, 422):
            raise ValidationError(error or f"Invalid request to {endpoint}")

        if status == 404:
            raise NotFoundError(error or f"Not found: {endpoint}")

        body = response.text[:500] if response.text else ""
        raise TransportError(error or f"API error {status}: {body}")

    def _parse_envelope(self, response: requests.Response) -> dict[str, Any]:
        if not response.text:
            return {}
        try:
            payload = response.json()
        except ValueError:
            if response.ok:
                raise TransportError(f"Invalid JSON from {response.url}")
            return {}
        return payload if isinstance(payload, dict) else {}

    # -------------------------------------------------------------------------
    # Endpoints
    # -------------------------------------------------------------------------

    def list_todos(self) -> list[dict]:
        return self.get("todos") or []

    def list_active_todos(self) -> list[dict]:
        return self.get("todos/active") or []

    def list_completed_todos(self) -> list[dict]:
        return self.get("todos/completed") or []

    def get_stats(self) -> dict:
        return self.get("todos/stats") or {}

    def get_todo(self, todo_id: str) -> dict:
        return self.get(f"todos/{todo_id}")

    def create_todo(self, body: dict) -> dict:
        return self.post("todos", json=body)

    def update_todo(self, todo_id: str, body: dict) -> Optional[dict]:
        return self.put(f"todos/{todo_id}", json=body)

    def delete_todo(self, todo_id: str) -> None:
        self.delete(f"todos/{todo_id}")

    def test_connection(self) -> bool:
        """Test if the API is reachable."""
        try:
            self.get_stats()
            return True
        except TodoflowError:
            return False
