"""Tests for key_vault_comp.py."""

from __future__ import annotations

import pytest

from liveeventops.components.azure.key_vault_comp import (
    find_key_vault,
    get_secret_value,
    grant_access_policy,
    list_secrets,
    set_secret,
)
from liveeventops.helpers.dto.secrets_dto import SecretSpec
from liveeventops.helpers.exceptions import AzCliError, ResourceLookupFailed


class TestFindKeyVault:
    @pytest.mark.unit
    def test_first_match(self, fake_az):
        fake_az.on("keyvault", "list", returns=["liveeventops-kv-abc", "liveeventops-kv-def"])
        assert find_key_vault(fake_az, "rg", "liveeventops-kv") == "liveeventops-kv-abc"
        query = fake_az.calls[-1][fake_az.calls[-1].index("--query") + 1]
        assert "starts_with(name, 'liveeventops-kv')" in query

    @pytest.mark.unit
    def test_no_vault(self, fake_az):
        fake_az.on("keyvault", "list", returns=[])
        with pytest.raises(ResourceLookupFailed, match="no key vault"):
            find_key_vault(fake_az, "rg", "liveeventops-kv")


class TestSecrets:
    @pytest.mark.unit
    def test_set_secret_tags(self, fake_az):
        fake_az.on("secret", "set", returns="")
        set_secret(fake_az, "kv", SecretSpec("ssh-public-key", "ssh-rsa AAA", "vm-access", "migration"))

        call = fake_az.calls[-1]
        assert call[call.index("--name") + 1] == "ssh-public-key"
        assert call[call.index("--value") + 1] == "ssh-rsa AAA"
        assert "purpose=vm-access" in call
        assert "source=migration" in call

    @pytest.mark.unit
    def test_missing_secret_reads_as_none(self, fake_az):
        fake_az.on("secret", "show", raises=AzCliError("failed", stderr="(SecretNotFound) not there"))
        assert get_secret_value(fake_az, "kv", "ssh-public-key") is None

    @pytest.mark.unit
    def test_forbidden_read_raises(self, fake_az):
        fake_az.on("secret", "show", raises=AzCliError("failed", stderr="(Forbidden) no get permission"))
        with pytest.raises(AzCliError):
            get_secret_value(fake_az, "kv", "ssh-public-key")

    @pytest.mark.unit
    def test_read_value(self, fake_az):
        fake_az.on("secret", "show", returns={"id": "x", "value": "hello"})
        assert get_secret_value(fake_az, "kv", "greeting") == "hello"

    @pytest.mark.unit
    def test_list_uses_name_or_id(self, fake_az):
        fake_az.on(
            "secret",
            "list",
            returns=[
                {"name": "a", "attributes": {"created": "2024-01-01", "updated": "2024-01-02"}},
                {"id": "https://kv.vault.azure.net/secrets/b"},
            ],
        )
        secrets = list_secrets(fake_az, "kv")
        assert [s.name for s in secrets] == ["a", "b"]
        assert secrets[0].updated == "2024-01-02"
        assert secrets[1].created is None


class TestGrantAccessPolicy:
    @pytest.mark.unit
    def test_requires_exactly_one_principal(self, fake_az):
        with pytest.raises(ValueError):
            grant_access_policy(fake_az, "kv")
        with pytest.raises(ValueError):
            grant_access_policy(fake_az, "kv", object_id="u", spn="s")

    @pytest.mark.unit
    def test_service_principal(self, fake_az):
        fake_az.on("set-policy", returns="")
        grant_access_policy(fake_az, "kv", spn="client-id")
        call = fake_az.calls[-1]
        assert call[call.index("--spn") + 1] == "client-id"
        assert "--object-id" not in call
