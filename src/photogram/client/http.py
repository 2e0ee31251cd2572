"""Shared httpx plumbing for the API clients."""

import httpx

from photogram.errors import ServerError, TransportError, error_for_response


async def send(
    http_client: httpx.AsyncClient,
    method: str,
    url: str,
    *,
    token: str | None = None,
    json: dict[str, object] | None = None,
    timeout: float = 10.0,
) -> object:
    """Send a request and return the decoded JSON body.

    Connectivity failures and timeouts raise ``TransportError``; non-2xx
    answers raise the error class named by the response body.
    """
    headers = {"Authorization": f"Bearer {token}"} if token else None
    try:
        response = await http_client.request(
            method, url, headers=headers, json=json, timeout=timeout
        )
    except httpx.TransportError as exc:
        raise TransportError(f"{type(exc).__name__}: {exc}") from exc
    if response.is_error:
        kind, message = _error_details(response)
        raise error_for_response(response.status_code, kind, message)
    try:
        return response.json()
    except ValueError as exc:
        raise ServerError("Malformed response") from exc


def _error_details(response: httpx.Response) -> tuple[str | None, str | None]:
    try:
        body = response.json()
    except ValueError:
        return None, None
    if not isinstance(body, dict):
        return None, None
    kind = body.get("error")
    message = body.get("message")
    return (
        kind if isinstance(kind, str) else None,
        message if isinstance(message, str) and message else None,
    )
