# External libs
import asyncio
import dataclasses
import logging
from typing import Any, Dict, Optional

# Internal libs
from core.event_hub import init_event_hub, event_hub
from core.config_loader import config_loader
from core.models.config_data import dashboardConfigData
from core.services.dashboard_controller import DashboardController

logger = logging.getLogger(__name__)


class ServiceNotStartedError(RuntimeError):
    """Raised when the dashboard is used before startup or after shutdown."""


class ServiceManager:

    def __init__(self):
        self.controller: Optional[DashboardController] = None
        self.running = False

    def build_config(self, overrides: Optional[Dict[str, Any]] = None) -> dashboardConfigData:
        """Merge non-None overrides (environment) on top of the file configuration."""
        config = config_loader.get_dashboard_config()
        changes = {k: v for k, v in (overrides or {}).items() if v is not None}
        if changes:
            config = dataclasses.replace(config, **changes)
            logger.info(f"Applying configuration overrides: {changes}")
        config.validate()
        return config

    async def start_services(self, overrides: Optional[Dict[str, Any]] = None):
        """Create the dashboard controller for this session and start generation.

        Args:
            overrides: Tunables taking precedence over dashboard_config.json.

        Raises:
            GeneratorSchedulingError: generation could not be scheduled; the session cannot run.
        """
        if self.running:
            return

        logger.info("Starting background services...")
        loop = asyncio.get_running_loop()

        # Init Event Hub
        init_event_hub(loop)

        controller = DashboardController(self.build_config(overrides), hub=event_hub)
        controller.start()
        self.controller = controller
        self.running = True

        logger.info("Background services started.")

    def stop_services(self):
        """Stop background services."""
        self.running = False

        if self.controller is not None:
            self.controller.close()

        event_hub.unsubscribe_all()
        logger.info("Background services stopped.")

    def get_controller(self) -> DashboardController:
        if not self.running or self.controller is None:
            raise ServiceNotStartedError("Dashboard is not running")
        return self.controller

service_manager = ServiceManager()
