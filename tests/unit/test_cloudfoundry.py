"""
Unit tests for Cloud Foundry service binding lookup.
"""

import json

import pytest

from cloudenv.config.cloudfoundry import get_service, get_service_credentials, get_services
from cloudenv.config.store import ConfigurationStore, EnvironmentSource


def _store(vcap) -> ConfigurationStore:
    value = vcap if isinstance(vcap, str) else json.dumps(vcap)
    return ConfigurationStore([EnvironmentSource({"VCAP_SERVICES": value})])


@pytest.mark.unit
class TestGetServices:

    def test_services_keyed_by_name(self, vcap_services):
        services = get_services(_store(vcap_services))

        assert set(services) == {"my-cloudant", "orders-cache"}
        assert services["my-cloudant"].label == "cloudantNoSQLDB"
        assert services["my-cloudant"].plan == "Lite"

    def test_no_vcap_services(self):
        assert get_services(ConfigurationStore()) == {}

    def test_invalid_json_string(self):
        assert get_services(_store("{broken")) == {}

    def test_vcap_services_string_in_descriptor(self, tmp_path, vcap_services):
        """Descriptor files may embed VCAP_SERVICES as a JSON string."""
        from cloudenv.config.store import FileSource

        path = tmp_path / "cf.json"
        path.write_text(json.dumps({"VCAP_SERVICES": json.dumps(vcap_services)}))
        store = ConfigurationStore([FileSource(path)])

        assert "orders-cache" in get_services(store)

    def test_malformed_entries_skipped(self):
        vcap = {
            "user-provided": [
                {"label": "user-provided"},             # no name
                "not-a-dict",
                {"name": "ok", "credentials": {"k": "v"}},
                {"name": "bad-creds", "credentials": ["x"]},
            ],
            "broken": "not-a-list",
        }

        assert list(get_services(_store(vcap))) == ["ok"]


@pytest.mark.unit
class TestGetService:

    def test_exact_name(self, vcap_services):
        assert get_service(_store(vcap_services), "my-cloudant").name == "my-cloudant"

    def test_regex_on_name_is_case_insensitive(self, vcap_services):
        assert get_service(_store(vcap_services), "CLOUDANT").name == "my-cloudant"
        assert get_service(_store(vcap_services), "^orders-.*").name == "orders-cache"

    def test_label(self, vcap_services):
        assert get_service(_store(vcap_services), "compose-for-redis").name == "orders-cache"

    def test_tag(self, vcap_services):
        assert get_service(_store(vcap_services), "data_management").name == "my-cloudant"

    def test_invalid_regex_falls_back_to_label_and_tag(self):
        vcap = {"weird": [{"name": "svc", "tags": ["[unclosed"], "credentials": {"a": 1}}]}

        assert get_service(_store(vcap), "[unclosed").name == "svc"

    def test_unbound(self, vcap_services):
        assert get_service(_store(vcap_services), "postgres") is None


@pytest.mark.unit
class TestGetServiceCredentials:

    def test_credentials_returned(self, vcap_services):
        creds = get_service_credentials(_store(vcap_services), "my-cloudant")

        assert creds["username"] == "admin"

    def test_service_without_credentials(self):
        vcap = {"user-provided": [{"name": "no-creds"}]}

        assert get_service_credentials(_store(vcap), "no-creds") is None

    def test_empty_credentials_are_present(self):
        vcap = {"user-provided": [{"name": "empty", "credentials": {}}]}

        assert get_service_credentials(_store(vcap), "empty") == {}
