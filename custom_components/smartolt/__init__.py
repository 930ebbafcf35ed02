import logging

from homeassistant import config_entries, core
from homeassistant.config_entries import ConfigEntryState
from homeassistant.const import Platform
from homeassistant.core import HomeAssistant, ServiceCall, ServiceResponse, SupportsResponse
from homeassistant.exceptions import HomeAssistantError

from .const import DOMAIN, SERVICE_SYNC
from .coordinator import SmartOltCoordinator
from .sync import SyncError

PLATFORMS: list[Platform] = [Platform.DEVICE_TRACKER, Platform.SENSOR, Platform.BINARY_SENSOR]
_LOGGER = logging.getLogger(__name__)


async def async_setup(hass: core.HomeAssistant, config: dict) -> bool:
    """Set up the integration."""
    hass.data.setdefault(DOMAIN, {})

    async def _async_handle_sync(call: ServiceCall) -> ServiceResponse:
        """Upsert the reconciled ONU list of every loaded entry into storage."""
        entries = [
            entry for entry in hass.config_entries.async_entries(DOMAIN)
            if entry.state is ConfigEntryState.LOADED
        ]
        if not entries:
            raise HomeAssistantError("No SmartOLT entry is loaded")

        synced = {}
        for entry in entries:
            try:
                synced[entry.title] = await entry.runtime_data.async_sync_storage()
            except SyncError as err:
                raise HomeAssistantError(f"{entry.title}: {err}") from err
            _LOGGER.info("Synced %s ONUs for %s", synced[entry.title], entry.title)

        if call.return_response:
            return {"synced": synced}
        return None

    hass.services.async_register(
        DOMAIN,
        SERVICE_SYNC,
        _async_handle_sync,
        supports_response=SupportsResponse.OPTIONAL,
    )
    return True


async def async_setup_entry(
    hass: core.HomeAssistant, entry: config_entries.ConfigEntry
) -> bool:
    """Set up platform from a ConfigEntry."""
    coordinator = SmartOltCoordinator(hass, dict(entry.data))
    # Raises ConfigEntryNotReady when the first refresh fails
    await coordinator.async_config_entry_first_refresh()

    entry.runtime_data = coordinator
    entry.async_on_unload(
        entry.add_update_listener(_async_update_listener)
    )

    await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)
    return True


async def _async_update_listener(hass: HomeAssistant, config_entry):
    """Handle config options update."""
    # Reload the integration when the options change.
    await hass.config_entries.async_reload(config_entry.entry_id)


async def async_unload_entry(
    hass: core.HomeAssistant, entry: config_entries.ConfigEntry
) -> bool:
    """Unload a config entry."""
    unloaded = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)
    if unloaded:
        await entry.runtime_data.async_shutdown()
    return unloaded
