from hostsdoc.infrastructure.hosts_io import load_lines, save_lines, read_text, write_text
from hostsdoc.infrastructure.flush import CommandRunner, DnsFlusher, flush_dns_cache, run_command

__all__ = [
    "load_lines",
    "save_lines",
    "read_text",
    "write_text",
    "CommandRunner",
    "DnsFlusher",
    "flush_dns_cache",
    "run_command",
]
