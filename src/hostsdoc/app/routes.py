"""
API routes for the hosts document.
"""
from __future__ import annotations

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel
from typing import Optional

from hostsdoc.core.errors import InvalidCIDRError, RawTextModeError
from hostsdoc.hostsfile import validator
from hostsdoc.services.hosts_service import HostsService


router = APIRouter(prefix="/api")

# Singleton service, created in main.py and attached here
_service: Optional[HostsService] = None


def init_service(service: HostsService) -> None:
    global _service
    _service = service


def svc() -> HostsService:
    if _service is None:
        raise RuntimeError("HostsService not initialized")
    return _service


# ------------------------------------------------------------------
# Request / response models
# ------------------------------------------------------------------

class AddRequest(BaseModel):
    address: str
    hostnames: list[str]
    comment: str = ""


class UpdateRequest(BaseModel):
    old_address: str
    new_address: str
    hostnames: list[str]
    comment: str = ""


class ValuesRequest(BaseModel):
    values: list[str]


class SaveRequest(BaseModel):
    file_path: Optional[str] = None
    dry_run: bool = False


def _require_all(values: list[str], check, label: str) -> None:
    if not values:
        raise HTTPException(422, f"At least one {label} is required")
    bad = validator.first_invalid(values, check)
    if bad is not None:
        raise HTTPException(422, f'"{bad}" is not a valid {label}')


# ------------------------------------------------------------------
# Read endpoints
# ------------------------------------------------------------------

@router.get("/hosts")
def get_summary():
    """Summary of the loaded hosts document."""
    return svc().summary()


@router.get("/hosts/lines")
def get_lines(offset: int = 0, limit: Optional[int] = None):
    """All lines (or a window of them)."""
    return svc().get_lines(offset=offset, limit=limit)


@router.get("/hosts/render")
def render():
    """The document as hosts file text."""
    return {"content": svc().render()}


@router.get("/hosts/by-ip/{address}")
def list_by_ip(address: str):
    if not validator.is_valid_ip(address):
        raise HTTPException(422, f'"{address}" is not a valid ip address')
    return [{"address": a, "hostname": h} for a, h in svc().list_by_addresses([address])]


@router.get("/hosts/by-host/{hostname}")
def list_by_host(hostname: str, exact: bool = False):
    return [{"address": a, "hostname": h}
            for a, h in svc().list_by_hostnames([hostname], exact)]


@router.get("/hosts/by-cidr")
def list_by_cidr(cidr: str):
    if not validator.is_valid_cidr(cidr):
        raise HTTPException(422, f'"{cidr}" is not a valid CIDR')
    return [{"cidr": c, "address": a, "hostname": h} for c, a, h in svc().list_by_cidrs([cidr])]


@router.get("/hosts/by-comment")
def list_by_comment(comment: str):
    return svc().list_by_comment(comment)


# ------------------------------------------------------------------
# Mutations
# ------------------------------------------------------------------

@router.post("/hosts/add")
def add_hosts(req: AddRequest):
    """Map hostnames to an address (in memory; call /save to persist)."""
    vr = validator.validate_entry(req.address, req.hostnames, svc().hosts.hostname_addresses())
    if not vr.is_valid:
        raise HTTPException(422, "; ".join(vr.errors))
    result = svc().add(req.address, req.hostnames, req.comment)
    result["warnings"] = vr.warnings
    return result


@router.post("/hosts/update")
def update_hosts(req: UpdateRequest):
    if not validator.is_valid_ip(req.old_address):
        raise HTTPException(422, f'"{req.old_address}" is not a valid ip address')
    vr = validator.validate_entry(req.new_address, req.hostnames)
    if not vr.is_valid:
        raise HTTPException(422, "; ".join(vr.errors))
    return svc().update(req.old_address, req.new_address, req.hostnames, req.comment)


@router.post("/hosts/remove/hosts")
def remove_hosts(req: ValuesRequest):
    _require_all(req.values, validator.is_valid_hostname, "hostname")
    return svc().remove_hosts(req.values)


@router.post("/hosts/remove/ips")
def remove_ips(req: ValuesRequest):
    _require_all(req.values, validator.is_valid_ip, "ip address")
    return svc().remove_addresses(req.values)


@router.post("/hosts/remove/cidrs")
def remove_cidrs(req: ValuesRequest):
    if not req.values:
        raise HTTPException(422, "At least one CIDR is required")
    try:
        return svc().remove_cidrs(req.values)
    except InvalidCIDRError as e:
        raise HTTPException(422, str(e))


@router.post("/hosts/remove/comments")
def remove_comments(req: ValuesRequest):
    if not req.values:
        raise HTTPException(422, "At least one comment is required")
    return svc().remove_by_comments(req.values)


# ------------------------------------------------------------------
# Persistence
# ------------------------------------------------------------------

@router.post("/hosts/reload")
def reload():
    """Discard in-memory changes and re-read the hosts file."""
    try:
        return svc().reload()
    except RawTextModeError as e:
        raise HTTPException(409, str(e))
    except FileNotFoundError:
        raise HTTPException(404, f"File not found: {svc().hosts.read_file_path}")


@router.post("/hosts/save")
def save(req: SaveRequest):
    """Write the document back to disk (flush failures are reported, not raised)."""
    try:
        result = svc().commit(dry_run=req.dry_run, file_path=req.file_path)
    except RawTextModeError as e:
        raise HTTPException(409, str(e))
    except OSError as e:
        raise HTTPException(500, str(e))
    body = result.to_dict()
    if req.dry_run:
        body["content"] = result.rendered
    return body
