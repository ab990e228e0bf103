"""Fetch the raw clip payload from the data endpoint."""

from __future__ import annotations

import http.client
import json
import logging
import urllib.error
import urllib.request

logger = logging.getLogger(__name__)


class FetchError(RuntimeError):
    """The clip payload could not be retrieved or decoded."""


def fetch_payload(endpoint: str, timeout: float | None = None):
    """GET *endpoint* and return the decoded JSON body.

    Raises:
        FetchError: On network failure, a non-success status, or invalid JSON.
    """
    request = urllib.request.Request(endpoint, headers={"Accept": "application/json"})
    kwargs = {} if timeout is None else {"timeout": timeout}

    logger.debug("Fetching clips from %s", endpoint)
    try:
        with urllib.request.urlopen(request, **kwargs) as response:
            status = getattr(response, "status", 200)
            if not 200 <= status < 300:
                raise FetchError(f"Request failed with status {status}")
            body = response.read()
    except urllib.error.HTTPError as e:
        raise FetchError(f"Request failed with status {e.code}") from e
    except http.client.HTTPException as e:
        # Truncated bodies and malformed status lines
        raise FetchError(f"Bad response from {endpoint}: {e!r}") from e
    except (urllib.error.URLError, OSError, ValueError) as e:
        raise FetchError(f"Could not reach {endpoint}: {e}") from e

    try:
        return json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise FetchError(f"Endpoint returned invalid JSON: {e}") from e
