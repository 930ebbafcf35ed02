"""
Unit tests for config_flow.py: CustomFlow (initial setup) and OptionsFlowHandler (options editing).

Coverage:
- validate_input:
    * empty entry name, incomplete credentials, non-http URL → error keys
    * both credentials empty → valid (demo mode), no API call
    * availability check result is passed through
- CustomFlow.async_step_user:
    * GET (no input) → FORM with step_id "user"
    * Valid input → CREATE_ENTRY with title, all fields and a generated guid
    * Rejected token → FORM with errors["base"] == "invalid_auth"
- OptionsFlowHandler.async_step_init:
    * GET → FORM whose defaults come from data, overridden by options
    * Valid input → entry data replaced, guid preserved, title renamed
    * Invalid input → FORM with error, entry untouched
"""

from __future__ import annotations

import unittest
import uuid
from typing import Any, Dict
from unittest.mock import AsyncMock, MagicMock, patch

from custom_components.smartolt.config_flow import CustomFlow, OptionsFlowHandler, validate_input

CHECK_PATH = "custom_components.smartolt.config_flow.check_smartolt_availability"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _make_mock_config_entry(data: Dict[str, Any], options: Dict[str, Any] | None = None) -> MagicMock:
    entry = MagicMock()
    entry.data = dict(data)
    entry.options = dict(options) if options is not None else {}
    return entry


def _make_flow() -> CustomFlow:
    flow = CustomFlow()
    flow.hass = MagicMock()
    flow.context = {"source": "user"}
    return flow


def _make_options_flow(data: Dict[str, Any], options: Dict[str, Any] | None = None) -> OptionsFlowHandler:
    entry = _make_mock_config_entry(data, options)
    handler = OptionsFlowHandler(entry)
    handler.hass = MagicMock()
    return handler


def _schema_defaults(result) -> Dict[str, Any]:
    schema = result["data_schema"].schema
    return {
        str(key): key.default()
        for key in schema
        if hasattr(key, "default") and callable(key.default)
    }


VALID_USER_INPUT = {
    "entry_name": "Jakarta Network",
    "base_url": "https://isp.smartolt.com",
    "api_token": "s3cr3t",
    "center_lat": -6.2088,
    "center_lng": 106.8456,
    "zoom": 12,
    "refresh_interval": 30,
    "mock_fallback": True,
}

VALID_ENTRY_DATA = dict(VALID_USER_INPUT, guid="existing-guid-1234", entry_name="Original Name")

VALID_OPTIONS_INPUT = dict(
    VALID_USER_INPUT,
    entry_name="Updated Name",
    api_token="new-token",
    center_lat=-7.25,
    refresh_interval=60,
    mock_fallback=False,
)


# ---------------------------------------------------------------------------
# validate_input
# ---------------------------------------------------------------------------

class TestValidateInput(unittest.IsolatedAsyncioTestCase):

    async def test_entry_name_required(self):
        self.assertEqual(await validate_input(dict(VALID_USER_INPUT, entry_name="")), "entry_name_required")

    async def test_demo_mode_without_credentials(self):
        with patch(CHECK_PATH, new=AsyncMock()) as mock_check:
            result = await validate_input(dict(VALID_USER_INPUT, base_url="", api_token=""))
        self.assertIsNone(result)
        mock_check.assert_not_awaited()

    async def test_token_without_url(self):
        self.assertEqual(await validate_input(dict(VALID_USER_INPUT, base_url="")), "credentials_incomplete")

    async def test_url_without_token(self):
        self.assertEqual(await validate_input(dict(VALID_USER_INPUT, api_token="  ")), "credentials_incomplete")

    async def test_url_scheme_required(self):
        self.assertEqual(await validate_input(dict(VALID_USER_INPUT, base_url="isp.smartolt.com")), "invalid_url")

    async def test_availability_ok(self):
        with patch(CHECK_PATH, new=AsyncMock(return_value="ok")) as mock_check:
            self.assertIsNone(await validate_input(dict(VALID_USER_INPUT)))
        headers = mock_check.call_args.args[1]
        self.assertEqual(headers["X-Token"], "s3cr3t")

    async def test_availability_error_passed_through(self):
        with patch(CHECK_PATH, new=AsyncMock(return_value="cannot_connect")):
            self.assertEqual(await validate_input(dict(VALID_USER_INPUT)), "cannot_connect")


# ---------------------------------------------------------------------------
# CustomFlow: initial config
# ---------------------------------------------------------------------------

class TestCustomFlow(unittest.IsolatedAsyncioTestCase):

    async def test_shows_form_on_get(self):
        flow = _make_flow()

        result = await flow.async_step_user(user_input=None)

        self.assertEqual(result["type"], "form")
        self.assertEqual(result["step_id"], "user")
        self.assertEqual(result.get("errors", {}), {})

    async def test_valid_input_creates_entry(self):
        flow = _make_flow()

        with patch(CHECK_PATH, new=AsyncMock(return_value="ok")):
            result = await flow.async_step_user(user_input=dict(VALID_USER_INPUT))

        self.assertEqual(result["type"], "create_entry")
        self.assertEqual(result["title"], VALID_USER_INPUT["entry_name"])
        for key, value in VALID_USER_INPUT.items():
            self.assertEqual(result["data"][key], value)

    async def test_creates_entry_with_valid_guid(self):
        flow = _make_flow()

        with patch(CHECK_PATH, new=AsyncMock(return_value="ok")):
            result = await flow.async_step_user(user_input=dict(VALID_USER_INPUT))

        generated_guid = result["data"]["guid"]
        self.assertEqual(str(uuid.UUID(generated_guid)), generated_guid)

    async def test_demo_mode_creates_entry(self):
        flow = _make_flow()

        result = await flow.async_step_user(user_input=dict(VALID_USER_INPUT, base_url="", api_token=""))

        self.assertEqual(result["type"], "create_entry")

    async def test_rejected_token_returns_form_with_error(self):
        flow = _make_flow()

        with patch(CHECK_PATH, new=AsyncMock(return_value="invalid_auth")):
            result = await flow.async_step_user(user_input=dict(VALID_USER_INPUT))

        self.assertEqual(result["type"], "form")
        self.assertEqual(result["errors"]["base"], "invalid_auth")

    async def test_empty_entry_name_returns_form_with_error(self):
        flow = _make_flow()

        result = await flow.async_step_user(user_input=dict(VALID_USER_INPUT, entry_name=""))

        self.assertEqual(result["type"], "form")
        self.assertEqual(result["errors"]["base"], "entry_name_required")


# ---------------------------------------------------------------------------
# OptionsFlowHandler: options editing
# ---------------------------------------------------------------------------

class TestOptionsFlowHandler(unittest.IsolatedAsyncioTestCase):

    async def test_shows_form_on_get(self):
        handler = _make_options_flow(VALID_ENTRY_DATA)

        result = await handler.async_step_init(user_input=None)

        self.assertEqual(result["type"], "form")
        self.assertEqual(result["step_id"], "init")

    async def test_form_defaults_come_from_entry_data(self):
        handler = _make_options_flow(VALID_ENTRY_DATA, options={})

        defaults = _schema_defaults(await handler.async_step_init(user_input=None))

        self.assertEqual(defaults["entry_name"], "Original Name")
        self.assertEqual(defaults["base_url"], VALID_ENTRY_DATA["base_url"])
        self.assertEqual(defaults["zoom"], VALID_ENTRY_DATA["zoom"])
        self.assertEqual(defaults["mock_fallback"], VALID_ENTRY_DATA["mock_fallback"])

    async def test_options_override_data_defaults(self):
        handler = _make_options_flow(VALID_ENTRY_DATA, options={"zoom": 15, "entry_name": "From Options"})

        defaults = _schema_defaults(await handler.async_step_init(user_input=None))

        self.assertEqual(defaults["zoom"], 15)
        self.assertEqual(defaults["entry_name"], "From Options")
        self.assertEqual(defaults["refresh_interval"], VALID_ENTRY_DATA["refresh_interval"])

    async def test_valid_update_replaces_entry_data(self):
        handler = _make_options_flow(VALID_ENTRY_DATA)

        with patch(CHECK_PATH, new=AsyncMock(return_value="ok")):
            result = await handler.async_step_init(user_input=dict(VALID_OPTIONS_INPUT))

        self.assertEqual(result["type"], "create_entry")
        handler.hass.config_entries.async_update_entry.assert_called_once()
        self.assertEqual(result["data"]["entry_name"], "Updated Name")
        call = handler.hass.config_entries.async_update_entry.call_args
        self.assertEqual(call.kwargs["title"], "Updated Name")
        new_data = call.kwargs["data"]
        self.assertEqual(new_data["guid"], VALID_ENTRY_DATA["guid"])
        self.assertEqual(new_data["api_token"], "new-token")
        self.assertEqual(new_data["center_lat"], -7.25)
        self.assertEqual(new_data["refresh_interval"], 60)
        self.assertFalse(new_data["mock_fallback"])

    async def test_invalid_update_returns_form_with_error(self):
        handler = _make_options_flow(VALID_ENTRY_DATA)

        with patch(CHECK_PATH, new=AsyncMock(return_value="cannot_connect")):
            result = await handler.async_step_init(user_input=dict(VALID_OPTIONS_INPUT))

        self.assertEqual(result["type"], "form")
        self.assertEqual(result["errors"]["base"], "cannot_connect")
        handler.hass.config_entries.async_update_entry.assert_not_called()
