"""Config flow for SmartOLT Network Map integration."""
from __future__ import annotations
import logging
import uuid
from typing import Any, Dict, Optional
import homeassistant.helpers.config_validation as cv
import voluptuous as vol

from homeassistant import config_entries
from homeassistant.core import callback

from .api.auth import get_standard_headers
from .const import (
    DOMAIN,
    CONF_ENTRY_NAME,
    CONF_BASE_URL,
    CONF_API_TOKEN,
    CONF_CENTER_LAT,
    CONF_CENTER_LNG,
    CONF_ZOOM,
    CONF_REFRESH_INTERVAL,
    CONF_MOCK_FALLBACK,
    DEFAULT_ENTRY_NAME,
    DEFAULT_CENTER_LAT,
    DEFAULT_CENTER_LNG,
    DEFAULT_ZOOM,
    DEFAULT_REFRESH_INTERVAL,
    MIN_REFRESH_INTERVAL,
)
from .requests import check_smartolt_availability

_LOGGER = logging.getLogger(__name__)

latitude = vol.All(vol.Coerce(float), vol.Range(min=-90, max=90))
longitude = vol.All(vol.Coerce(float), vol.Range(min=-180, max=180))
zoom_level = vol.All(vol.Coerce(int), vol.Range(min=1, max=20))
refresh_seconds = vol.All(vol.Coerce(int), vol.Range(min=MIN_REFRESH_INTERVAL))

# Order in which defaults are shown on the options form
FIELDS = (
    CONF_ENTRY_NAME, CONF_BASE_URL, CONF_API_TOKEN, CONF_CENTER_LAT,
    CONF_CENTER_LNG, CONF_ZOOM, CONF_REFRESH_INTERVAL, CONF_MOCK_FALLBACK,
)
DEFAULTS: Dict[str, Any] = {
    CONF_ENTRY_NAME: DEFAULT_ENTRY_NAME,
    CONF_BASE_URL: '',
    CONF_API_TOKEN: '',
    CONF_CENTER_LAT: DEFAULT_CENTER_LAT,
    CONF_CENTER_LNG: DEFAULT_CENTER_LNG,
    CONF_ZOOM: DEFAULT_ZOOM,
    CONF_REFRESH_INTERVAL: DEFAULT_REFRESH_INTERVAL,
    CONF_MOCK_FALLBACK: True,
}


def build_schema(defaults: Dict[str, Any]) -> vol.Schema:
    return vol.Schema(
        {
            vol.Required(CONF_ENTRY_NAME, default=defaults[CONF_ENTRY_NAME]): cv.string,
            vol.Optional(CONF_BASE_URL, default=defaults[CONF_BASE_URL]): cv.string,
            vol.Optional(CONF_API_TOKEN, default=defaults[CONF_API_TOKEN]): cv.string,
            vol.Required(CONF_CENTER_LAT, default=defaults[CONF_CENTER_LAT]): latitude,
            vol.Required(CONF_CENTER_LNG, default=defaults[CONF_CENTER_LNG]): longitude,
            vol.Required(CONF_ZOOM, default=defaults[CONF_ZOOM]): zoom_level,
            vol.Required(CONF_REFRESH_INTERVAL, default=defaults[CONF_REFRESH_INTERVAL]): refresh_seconds,
            vol.Required(CONF_MOCK_FALLBACK, default=defaults[CONF_MOCK_FALLBACK]): cv.boolean,
        }
    )


CONFIG_SCHEMA = build_schema(DEFAULTS)


async def validate_input(user_input: Dict[str, Any]) -> str | None:
    """
    Return an error key for the form, or None when the input is usable.

    Leaving both base URL and token empty is valid and selects demo mode.
    """
    if not user_input.get(CONF_ENTRY_NAME):
        return 'entry_name_required'
    base_url = (user_input.get(CONF_BASE_URL) or '').strip()
    token = (user_input.get(CONF_API_TOKEN) or '').strip()
    if not base_url and not token:
        return None
    if not base_url or not token:
        return 'credentials_incomplete'
    if not base_url.startswith(('http://', 'https://')):
        return 'invalid_url'
    result = await check_smartolt_availability(base_url, get_standard_headers(token))
    if result != 'ok':
        return result
    return None


class CustomFlow(config_entries.ConfigFlow, domain=DOMAIN):
    data: Optional[Dict[str, Any]]

    async def async_step_user(self, user_input: Optional[Dict[str, Any]] = None):
        errors: Dict[str, str] = {}
        if user_input is not None:
            self.data = dict(user_input)
            error = await validate_input(self.data)
            if error:
                errors['base'] = error
            else:
                # Create new guid for the entry
                self.data['guid'] = str(uuid.uuid4())
                return self.async_create_entry(title=f"{self.data[CONF_ENTRY_NAME]}", data=self.data)

        return self.async_show_form(step_id="user", data_schema=CONFIG_SCHEMA, errors=errors)

    @staticmethod
    @callback
    def async_get_options_flow(config_entry):
        """Get the options flow for this handler."""
        return OptionsFlowHandler(config_entry)


class OptionsFlowHandler(config_entries.OptionsFlow):
    """Handles options flow for the component."""

    def __init__(self, config_entry: config_entries.ConfigEntry) -> None:
        self._entry = config_entry

    def _current_defaults(self) -> Dict[str, Any]:
        # options override data, data overrides built-in defaults
        defaults = dict(DEFAULTS)
        for field in FIELDS:
            if field in self._entry.data:
                defaults[field] = self._entry.data[field]
            if field in self._entry.options:
                defaults[field] = self._entry.options[field]
        return defaults

    async def async_step_init(
        self, user_input: Dict[str, Any] = None
    ) -> Dict[str, Any]:
        errors: Dict[str, str] = {}

        if user_input is not None:
            error = await validate_input(user_input)
            if error:
                errors['base'] = error
            else:
                new_data = {'guid': self._entry.data['guid']}
                new_data.update({field: user_input[field] for field in FIELDS if field in user_input})

                # Rename the entry in the UI; the update listener reloads it
                self.hass.config_entries.async_update_entry(
                    self._entry,
                    data=new_data,
                    title=new_data[CONF_ENTRY_NAME],
                )
                return self.async_create_entry(title=f"{new_data[CONF_ENTRY_NAME]}", data=new_data)

        options_schema = build_schema(self._current_defaults())
        return self.async_show_form(step_id="init", data_schema=options_schema, errors=errors)
