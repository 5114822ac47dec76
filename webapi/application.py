"""
Users API entrypoint: serves ``webapi.main:app`` with uvicorn.
"""

from typing import Optional

import uvicorn

from webapi.bootstrap import BootstrapConfig
from webapi.config.logger import get_logger


class WebApiApplication:
    """Runs the users API with settings from ``BootstrapConfig``."""

    def __init__(self, config: Optional[BootstrapConfig] = None):
        self.config = config or BootstrapConfig()
        self.logger = get_logger("WebApiApplication")

    def run(self, host: Optional[str] = None, port: Optional[int] = None):
        server = self.config.server
        if host:
            server["host"] = host
        if port:
            server["port"] = port

        self.logger.info(
            "Starting users API",
            url=self.config.get_server_url(),
            profile=self.config.profile,
        )
        uvicorn.run(
            "webapi.main:app",
            host=server["host"],
            port=server["port"],
            reload=bool(server.get("reload")),
            log_level=self.config.logging["level"].lower(),
        )
