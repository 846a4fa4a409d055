"""Checks for user-edited network settings.

Every check returns None on success and raises ValidationError otherwise.
None of them touch the filesystem or logging.
"""
from __future__ import annotations

from proxycfg.core.errors import ValidationError
from proxycfg.model.settings import ServerProfile

RESERVED_LOCAL_PORT = 8123


def _is_blank(value: str | None) -> bool:
    return not value


def check_port(port: int) -> None:
    if isinstance(port, bool) or not isinstance(port, int) or not 1 <= port <= 65535:
        raise ValidationError("port_out_of_range", "Port out of range")


def check_local_port(port: int) -> None:
    check_port(port)
    if port == RESERVED_LOCAL_PORT:
        raise ValidationError("port_reserved", f"Port can't be {RESERVED_LOCAL_PORT}")


def check_server_address(address: str | None) -> None:
    if _is_blank(address):
        raise ValidationError("server_blank", "Server IP can not be blank")


def check_proxy_auth_user(user: str | None) -> None:
    if _is_blank(user):
        raise ValidationError("auth_user_blank", "Auth user can not be blank")


def check_proxy_auth_password(password: str | None) -> None:
    if _is_blank(password):
        raise ValidationError("auth_pwd_blank", "Auth pwd can not be blank")


def check_profile(profile: ServerProfile) -> None:
    """Validate address then port; raises on the first violation."""
    check_server_address(profile.server)
    check_port(profile.server_port)


def try_check_profile(profile: ServerProfile) -> bool:
    try:
        check_profile(profile)
    except ValidationError:
        return False
    return True
