"""
Authentication headers for the SmartOLT API.

SmartOLT uses a static per-account token sent in the X-Token header; there is
no login or refresh step.
"""


def get_standard_headers(token: str) -> dict:
    """
    Build the standard HTTP headers used by all SmartOLT API requests.

    :param token: API token from the SmartOLT account settings.
    :return: Dictionary of HTTP headers.
    """
    return {
        "X-Token": token,
        "Content-Type": "application/json",
        "Cache-Control": "no-store",
    }
