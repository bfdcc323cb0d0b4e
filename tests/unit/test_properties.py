"""Tests for the property source and credential defaults."""

from __future__ import annotations

import pytest

from ravenfetch.core.properties import PropertySource, parse_properties, to_bool
from ravenfetch.protocols import TransferProtocol


class TestParsing:
    def test_key_value_forms(self):
        text = """
        # comment
        ! also a comment
        http.username = deployer
        sftp.password: s3cret
        smb.domain=CORP
        flag
        """
        assert parse_properties(text) == {
            "http.username": "deployer",
            "sftp.password": "s3cret",
            "smb.domain": "CORP",
            "flag": "",
        }

    def test_value_may_contain_separators(self):
        assert parse_properties("url = http://h:8080/a") == {"url": "http://h:8080/a"}

    @pytest.mark.parametrize("value", ["true", "TRUE", " yes ", "on", "1"])
    def test_truthy(self, value):
        assert to_bool(value, False) is True

    @pytest.mark.parametrize("value", ["false", "no", "0", ""])
    def test_falsy(self, value):
        assert to_bool(value, True) is False

    def test_none_uses_default(self):
        assert to_bool(None, True) is True


class TestPropertySource:
    def test_from_file_and_merge(self, tmp_path):
        path = tmp_path / "ravenfetch.properties"
        path.write_text("http.username=file\nhttp.password=filepw\n")

        source = PropertySource.from_file(path).merged({"http.username": "inline"})

        assert source.get("http.username") == "inline"
        assert source.get("http.password") == "filepw"
        assert "http.password" in source
        assert len(source) == 2

    def test_values_are_copied(self):
        values = {"http.username": "a"}
        source = PropertySource(values)
        values["http.username"] = "b"
        assert source.get("http.username") == "a"


class TestCredentials:
    def test_defaults_without_properties(self):
        creds = PropertySource().credentials(TransferProtocol.SFTP)

        assert creds.anonymous
        assert creds.host_checking is True
        assert creds.ignore_certificate_validation is True

    def test_properties_fill_gaps(self):
        source = PropertySource(
            {
                "smb.username": "deploy",
                "smb.password": "pw",
                "smb.domain": "CORP",
                "sftp.username": "other",
            }
        )

        creds = source.credentials("smb")

        assert creds.username == "deploy"
        assert creds.secret == "pw"
        assert creds.domain == "CORP"

    def test_explicit_values_win(self):
        source = PropertySource(
            {"http.username": "prop", "http.ignoreCertificateValidation": "true"}
        )

        creds = source.credentials(
            TransferProtocol.HTTP, username="explicit", ignore_certificate_validation=False
        )

        assert creds.username == "explicit"
        assert creds.ignore_certificate_validation is False

    def test_boolean_properties(self):
        source = PropertySource({"sftp.hostChecking": "false"})
        assert source.credentials(TransferProtocol.SFTP).host_checking is False

    def test_password_hidden_in_repr(self):
        creds = PropertySource({"http.password": "hunter2"}).credentials("http")
        assert "hunter2" not in repr(creds)
        assert creds.identity_fields() == [None, "hunter2", None]
