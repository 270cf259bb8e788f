import dataclasses
import logging
from pathlib import Path

import pytest

from ls_hosts.constants import DEFAULT_FIELDS
from ls_hosts.core.config import BUILT_IN_DEFAULTS, ConfigLoader, Settings, resolve_settings


class TestSettings:
    @pytest.mark.parametrize("fields", [(), ("",), ("instance-id",)])
    def test_field_names_fall_back_to_defaults(self, fields) -> None:
        settings = Settings(fields=fields)

        assert settings.field_names() == (
            "tag:Name",
            "instance-id",
            "private-ip",
            "public-ip",
            "instance-state",
        )

    def test_field_names_use_configured_fields(self) -> None:
        settings = Settings(fields=["instance-id", "launch-time"])

        assert settings.field_names() == ("instance-id", "launch-time")

    def test_settings_are_frozen(self) -> None:
        settings = Settings()

        with pytest.raises(dataclasses.FrozenInstanceError):
            settings.region = "us-west-2"  # type: ignore[misc]

    def test_filter_mappings_are_read_only(self) -> None:
        source = {"instance-type": "t3.micro"}
        settings = Settings(filters=source)

        with pytest.raises(TypeError):
            settings.filters["instance-type"] = "m5.large"  # type: ignore[index]

        source["instance-type"] = "m5.large"
        assert settings.filters["instance-type"] == "t3.micro"


class TestResolveSettings:
    def test_defaults_only(self) -> None:
        settings = resolve_settings([BUILT_IN_DEFAULTS])

        assert settings.profile == "default"
        assert settings.region == ""
        assert settings.credentials == ""
        assert dict(settings.filters) == {}
        assert dict(settings.tag_filters) == {}
        assert settings.field_names() == DEFAULT_FIELDS
        assert settings.noheader is False

    def test_higher_layer_wins(self) -> None:
        settings = resolve_settings(
            [
                BUILT_IN_DEFAULTS,
                {"region": "us-west-1", "profile": "ops"},
                {"region": "eu-west-1"},
                {"region": "ap-southeast-1"},
            ]
        )

        assert settings.region == "ap-southeast-1"
        assert settings.profile == "ops"

    def test_filter_mappings_merge_per_key(self) -> None:
        settings = resolve_settings(
            [
                BUILT_IN_DEFAULTS,
                {"tag_filters": {"Role": "web", "Env": "prod"}},
                {"tag_filters": {"Env": "staging"}},
            ]
        )

        assert dict(settings.tag_filters) == {"Role": "web", "Env": "staging"}

    def test_fields_are_replaced_not_merged(self) -> None:
        settings = resolve_settings(
            [
                BUILT_IN_DEFAULTS,
                {"fields": ["instance-id", "private-ip", "public-ip"]},
                {"fields": ["tag:Name", "launch-time"]},
            ]
        )

        assert settings.fields == ("tag:Name", "launch-time")

    def test_noheader_from_config_survives_absent_flag(self) -> None:
        settings = resolve_settings([BUILT_IN_DEFAULTS, {"noheader": True}, {}])

        assert settings.noheader is True

    def test_noheader_cannot_be_turned_back_on(self) -> None:
        settings = resolve_settings(
            [BUILT_IN_DEFAULTS, {"noheader": True}, {"noheader": False}]
        )

        assert settings.noheader is True

    def test_values_are_not_interpolated(self) -> None:
        settings = resolve_settings([BUILT_IN_DEFAULTS, {"tag_filters": {"Name": "${oops}"}}])

        assert settings.tag_filters["Name"] == "${oops}"


class TestConfigLoader:
    def test_config_paths_order(self, isolated_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LS_HOSTS_CONFIG", "/tmp/override.conf")

        paths = ConfigLoader().config_paths()

        assert paths == [
            Path("/etc/ls-hosts.conf"),
            isolated_env / ".ls-hosts",
            Path("/tmp/override.conf"),
        ]

    def test_config_paths_without_home(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("HOME")

        assert ConfigLoader().config_paths() == [Path("/etc/ls-hosts.conf")]

    def test_load_config_reads_options_section(self, write_ini) -> None:
        path = write_ini(
            "ls-hosts.conf",
            "[options]\n"
            "profile = ops\n"
            "region = us-west-2\n"
            "tags = Role:web,Env:prod\n"
            "filters = instance-state-name:running\n"
            "fields = instance-id,tag:Name\n"
            "creds = shared\n"
            "noheader = true\n",
        )

        layer = ConfigLoader().load_config([path])

        assert layer == {
            "profile": "ops",
            "region": "us-west-2",
            "credentials": "shared",
            "filters": {"instance-state-name": "running"},
            "tag_filters": {"Role": "web", "Env": "prod"},
            "fields": ["instance-id", "tag:Name"],
            "noheader": True,
        }

    def test_load_config_missing_files(self, tmp_path: Path) -> None:
        layer = ConfigLoader().load_config([tmp_path / "nope", tmp_path / "neither"])

        assert layer == {}

    def test_load_config_without_options_section(self, write_ini) -> None:
        path = write_ini("other.conf", "[something]\nregion = us-west-2\n")

        assert ConfigLoader().load_config([path]) == {}

    def test_user_file_wins_over_system_file(self, write_ini) -> None:
        system = write_ini("etc/ls-hosts.conf", "[options]\nregion = us-east-1\ncreds = iam\n")
        user = write_ini("home/.ls-hosts", "[options]\nregion = eu-central-1\n")

        layer = ConfigLoader().load_config([system, user])

        assert layer["region"] == "eu-central-1"
        assert layer["credentials"] == "iam"

    def test_percent_signs_are_literal(self, write_ini) -> None:
        path = write_ini("ls-hosts.conf", "[options]\ntags = Owner:100%\n")

        assert ConfigLoader().load_config([path])["tag_filters"] == {"Owner": "100%"}

    def test_unparsable_file_is_ignored(self, write_ini, caplog) -> None:
        path = write_ini("broken.conf", "region = us-west-2\n[options\n")

        with caplog.at_level(logging.WARNING):
            layer = ConfigLoader().load_config([path])

        assert layer == {}
        assert any("Ignoring unreadable config file" in r.message for r in caplog.records)

    def test_repeated_option_keeps_last_value(self, write_ini) -> None:
        system = write_ini("etc/ls-hosts.conf", "[options]\ncreds = iam\ncreds = env\n")
        user = write_ini("home/.ls-hosts", "[options]\nregion = eu-central-1\n")

        layer = ConfigLoader().load_config([system, user])

        assert layer == {"credentials": "env", "region": "eu-central-1"}

    def test_broken_file_does_not_discard_other_files(self, write_ini) -> None:
        system = write_ini("etc/ls-hosts.conf", "[options]\nregion = us-east-1\ncreds = iam\n")
        user = write_ini("home/.ls-hosts", "region = eu-central-1\n[options\n")

        layer = ConfigLoader().load_config([system, user])

        assert layer == {"region": "us-east-1", "credentials": "iam"}

    def test_load_profile_region(self, write_ini) -> None:
        path = write_ini(
            "aws/config",
            "[default]\nregion = us-east-1\n\n[profile ops]\nregion = eu-west-1\n",
        )
        loader = ConfigLoader()

        assert loader.load_profile_region("default", str(path)) == "us-east-1"
        assert loader.load_profile_region("ops", str(path)) == "eu-west-1"
        assert loader.load_profile_region("missing", str(path)) is None

    def test_load_profile_region_missing_file(self, tmp_path: Path) -> None:
        assert ConfigLoader().load_profile_region("default", str(tmp_path / "none")) is None

    def test_load_profile_region_uses_aws_config_file_env(
        self, isolated_env: Path
    ) -> None:
        aws_config = isolated_env / ".aws" / "config"
        aws_config.parent.mkdir()
        aws_config.write_text("[default]\nregion = ap-northeast-1\n")

        assert ConfigLoader().load_profile_region("default") == "ap-northeast-1"


class TestLoadSettings:
    def test_precedence_of_all_layers(self, write_ini) -> None:
        config = write_ini(
            "ls-hosts.conf",
            "[options]\nprofile = ops\nregion = us-east-1\ntags = Role:web\n",
        )
        aws_config = write_ini("aws/config", "[profile ops]\nregion = eu-west-1\n")

        settings = ConfigLoader().load_settings(
            {"tag_filters": {"Env": "prod"}}, paths=[config], aws_config_path=str(aws_config)
        )

        assert settings.profile == "ops"
        assert settings.region == "eu-west-1"
        assert dict(settings.tag_filters) == {"Role": "web", "Env": "prod"}

    def test_cli_region_overrides_profile_region(self, write_ini) -> None:
        aws_config = write_ini("aws/config", "[default]\nregion = eu-west-1\n")

        settings = ConfigLoader().load_settings(
            {"region": "us-west-2"}, paths=[], aws_config_path=str(aws_config)
        )

        assert settings.region == "us-west-2"

    def test_cli_profile_selects_profile_region(self, write_ini) -> None:
        config = write_ini("ls-hosts.conf", "[options]\nprofile = ops\n")
        aws_config = write_ini(
            "aws/config",
            "[profile ops]\nregion = eu-west-1\n\n[profile dev]\nregion = us-west-1\n",
        )

        settings = ConfigLoader().load_settings(
            {"profile": "dev"}, paths=[config], aws_config_path=str(aws_config)
        )

        assert settings.profile == "dev"
        assert settings.region == "us-west-1"

    def test_config_noheader_with_absent_flag(self, write_ini, tmp_path: Path) -> None:
        config = write_ini("ls-hosts.conf", "[options]\nnoheader = true\n")

        settings = ConfigLoader().load_settings(
            {}, paths=[config], aws_config_path=str(tmp_path / "none")
        )

        assert settings.noheader is True
