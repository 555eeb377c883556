"""
FastAPI application entry point.

Run:  uvicorn --factory hostsdoc.app.main:create_app --port 8000

The served document comes from ``HOSTSDOC_HOSTS_FILE`` (default: the
platform hosts file) and is written to ``HOSTSDOC_WRITE_FILE`` (default:
the read path).  ``HOSTSDOC_AUTO_FLUSH=1`` flushes the DNS cache on save.
"""
from __future__ import annotations

import logging
import os
from typing import Optional

from fastapi import FastAPI

from hostsdoc.app.routes import router, init_service
from hostsdoc.core.config import HostsConfig
from hostsdoc.hosts import Hosts
from hostsdoc.services.hosts_service import HostsService

logger = logging.getLogger(__name__)


def service_from_env() -> HostsService:
    """Build the service from ``HOSTSDOC_*`` environment variables."""
    config = HostsConfig(
        read_file_path=os.environ.get("HOSTSDOC_HOSTS_FILE", ""),
        write_file_path=os.environ.get("HOSTSDOC_WRITE_FILE", ""),
        max_hosts_per_line=int(os.environ.get("HOSTSDOC_MAX_HOSTS_PER_LINE", "0")),
        auto_flush=os.environ.get("HOSTSDOC_AUTO_FLUSH") == "1",
    )
    return HostsService(Hosts(config))


def create_app(service: Optional[HostsService] = None) -> FastAPI:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s  %(name)s  %(levelname)s  %(message)s",
    )
    service = service or service_from_env()
    init_service(service)
    logger.info("Serving hosts document %s", service.hosts.read_file_path or "<raw text>")

    app = FastAPI(title="hostsdoc")
    app.include_router(router)
    return app
