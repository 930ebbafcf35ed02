"""
Low-level HTTP request library for SmartOLT API communication.
This module handles all HTTP requests with automatic retry logic and proper error handling.
"""
import asyncio
import logging
import aiohttp

from custom_components.smartolt.const import REQUEST_TIMEOUT, REQUEST_ATTEMPTS, STATUSES_ENDPOINT

_LOGGER = logging.getLogger(__name__)


class ApiResponseError(Exception):
    """Exception raised when API returns a non-2xx response."""
    def __init__(self, status: int, error_json: dict | None = None):
        self.status = status
        self.error_json = error_json
        super().__init__(f"API Error {status}: {error_json}")


async def check_smartolt_availability(base_url: str, headers: dict, timeout: int = 15) -> str:
    """
    Check that the SmartOLT API is reachable with the given token.

    Uses the statuses endpoint because it is not rate limited.

    Returns:
        "ok", "invalid_auth" (HTTP 401/403 or a status:false body) or "cannot_connect"
    """
    try:
        timeout_config = aiohttp.ClientTimeout(total=timeout)
        async with aiohttp.ClientSession(timeout=timeout_config) as session:
            async with session.get(base_url.rstrip("/") + STATUSES_ENDPOINT, headers=headers) as response:
                if response.status in (401, 403):
                    _LOGGER.warning("SmartOLT rejected the API token (status %s)", response.status)
                    return "invalid_auth"
                if response.status != 200:
                    _LOGGER.warning("SmartOLT API is not reachable (status %s)", response.status)
                    return "cannot_connect"
                body = await response.json(content_type=None)
                if not isinstance(body, dict) or not body.get("status"):
                    return "invalid_auth"
                return "ok"

    except (asyncio.TimeoutError, TimeoutError):
        _LOGGER.warning("Timeout while checking SmartOLT API URL")
        return "cannot_connect"
    except Exception as e:
        _LOGGER.error("Error while checking SmartOLT availability: %s", e)
        return "cannot_connect"


async def make_request(
    url: str,
    headers: dict,
    params: dict = None,
    timeout: int = REQUEST_TIMEOUT,
    max_attempts: int = REQUEST_ATTEMPTS,
):
    """
    Make a GET request with automatic retry on timeout.

    Args:
        url: Target URL for the request
        headers: HTTP headers dictionary
        params: URL query parameters (optional)
        timeout: Base timeout in seconds (multiplied by attempt number for each retry)
        max_attempts: Maximum number of attempts

    Returns:
        Parsed JSON response

    Raises:
        asyncio.TimeoutError: If all attempts time out
        ApiResponseError: If the API answers with a non-2xx status
        ValueError: If response has unexpected content type
    """
    for attempt in range(max_attempts):
        try:
            # Timeout grows with each attempt
            timeout_config = aiohttp.ClientTimeout(total=timeout * (attempt + 1))
            async with aiohttp.ClientSession(timeout=timeout_config) as session:
                async with session.get(url, headers=headers, params=params) as response:
                    return await _process_response(response, url)

        except (asyncio.TimeoutError, TimeoutError):
            if attempt < max_attempts - 1:
                _LOGGER.debug("Timeout on attempt %s for %s, retrying", attempt + 1, url)
                continue
            _LOGGER.warning("Timeout on GET request to %s after %s attempts", url, max_attempts)
            raise

    return None


async def _process_response(response, url: str):
    """
    Process HTTP response and extract JSON data.

    Args:
        response: aiohttp response object
        url: Request URL (for logging)

    Returns:
        Parsed JSON response

    Raises:
        ApiResponseError: For non-2xx responses
        ValueError: If a successful response body is not JSON
    """
    content_type = response.headers.get('Content-Type', '')

    if 200 <= response.status < 300:
        # SmartOLT does not always label its JSON bodies
        try:
            return await response.json(content_type=None)
        except ValueError as err:
            text = await response.text()
            _LOGGER.warning(
                "Undecodable body in successful response: %s (status %s) from %s",
                content_type, response.status, url
            )
            raise ValueError(f"Expected JSON but got {content_type}: {text[:200]}") from err

    error_json = None
    if 'application/json' in content_type:
        try:
            error_json = await response.json()
        except (aiohttp.ContentTypeError, ValueError) as e:
            _LOGGER.debug("Failed to parse error response from %s: %s", url, e)
    else:
        text = await response.text()
        _LOGGER.debug(
            "Received non-JSON error response from %s: status %s, body preview: %s",
            url, response.status, text[:200]
        )
    raise ApiResponseError(response.status, error_json)


async def fetch_payload(
    base_url: str,
    endpoint: str,
    headers: dict,
    params: dict = None,
    max_attempts: int = REQUEST_ATTEMPTS,
) -> dict | None:
    """
    Fetch one SmartOLT endpoint and return its JSON body.

    Never raises: missing credentials, transport errors, non-2xx answers and
    bodies declaring ``status: false`` are all logged and reported as None.
    """
    if not base_url or not headers.get("X-Token"):
        _LOGGER.warning("Missing SmartOLT base URL or API token")
        return None

    url = base_url.rstrip("/") + endpoint
    try:
        payload = await make_request(url, headers, params=params, max_attempts=max_attempts)
    except ApiResponseError as e:
        _LOGGER.error("SmartOLT API error for %s: %s", endpoint, e)
        return None
    except (asyncio.TimeoutError, TimeoutError):
        _LOGGER.warning("Timeout while fetching %s", endpoint)
        return None
    except (aiohttp.ClientError, ValueError) as e:
        _LOGGER.error("Fetch error for %s: %s", endpoint, e)
        return None

    if not isinstance(payload, dict) or not payload.get("status"):
        _LOGGER.warning("SmartOLT %s returned no data", endpoint)
        return None
    return payload


def extract_records(payload: dict | None, key: str, parse) -> list:
    """
    Parse the list found under payload[key] with parse(raw_dict).

    Entries that are not objects, or that parse returns None for, are skipped.
    """
    if not payload:
        return []
    raw_items = payload.get(key)
    if not isinstance(raw_items, list):
        _LOGGER.warning("SmartOLT payload has no '%s' list", key)
        return []
    parsed = [parse(item) for item in raw_items if isinstance(item, dict)]
    return [record for record in parsed if record is not None]
