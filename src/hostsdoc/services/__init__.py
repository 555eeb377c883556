from hostsdoc.services.hosts_service import HostsService, SaveResult

__all__ = ["HostsService", "SaveResult"]
