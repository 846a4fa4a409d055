from __future__ import annotations

import pytest

from proxycfg.core.errors import ValidationError
from proxycfg.core.validator import (
    check_local_port,
    check_port,
    check_profile,
    check_proxy_auth_password,
    check_proxy_auth_user,
    check_server_address,
    try_check_profile,
)
from proxycfg.model.settings import ServerProfile


class TestCheckPort:
    @pytest.mark.parametrize("port", [0, 65536, -1])
    def test_out_of_range(self, port: int):
        with pytest.raises(ValidationError, match="Port out of range") as exc:
            check_port(port)
        assert exc.value.key == "port_out_of_range"

    @pytest.mark.parametrize("port", [1, 8388, 65535])
    def test_in_range(self, port: int):
        check_port(port)

    def test_bool_rejected(self):
        with pytest.raises(ValidationError):
            check_port(True)

    def test_is_a_value_error(self):
        with pytest.raises(ValueError):
            check_port(0)


class TestCheckLocalPort:
    def test_8123_reserved(self):
        check_port(8123)
        with pytest.raises(ValidationError) as exc:
            check_local_port(8123)
        assert exc.value.key == "port_reserved"

    def test_delegates_range_check(self):
        with pytest.raises(ValidationError) as exc:
            check_local_port(70000)
        assert exc.value.key == "port_out_of_range"

    def test_ok(self):
        check_local_port(1080)


class TestBlankChecks:
    @pytest.mark.parametrize("value", ["", None])
    def test_server_blank(self, value):
        with pytest.raises(ValidationError, match="Server IP can not be blank"):
            check_server_address(value)

    def test_server_ok(self):
        check_server_address("a")

    @pytest.mark.parametrize("value", ["", None])
    def test_auth_user_blank(self, value):
        with pytest.raises(ValidationError) as exc:
            check_proxy_auth_user(value)
        assert exc.value.key == "auth_user_blank"

    @pytest.mark.parametrize("value", ["", None])
    def test_auth_password_blank(self, value):
        with pytest.raises(ValidationError) as exc:
            check_proxy_auth_password(value)
        assert exc.value.key == "auth_pwd_blank"

    def test_auth_ok(self):
        check_proxy_auth_user("alice")
        check_proxy_auth_password("s3cret")


class TestCheckProfile:
    def test_valid(self):
        profile = ServerProfile(server="proxy.example.com", server_port=443)
        check_profile(profile)
        assert try_check_profile(profile) is True

    def test_address_checked_first(self):
        profile = ServerProfile(server="", server_port=0)
        with pytest.raises(ValidationError) as exc:
            check_profile(profile)
        assert exc.value.key == "server_blank"

    def test_bad_port(self):
        profile = ServerProfile(server="proxy.example.com", server_port=0)
        with pytest.raises(ValidationError) as exc:
            check_profile(profile)
        assert exc.value.key == "port_out_of_range"
        assert try_check_profile(profile) is False

    def test_default_profile_is_invalid(self):
        assert try_check_profile(ServerProfile()) is False
