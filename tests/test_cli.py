"""Tests for the command line interface."""

import hashlib
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from minecraft_utils.cli import cli
from minecraft_utils.models import (
    Profile,
    ProfileProperty,
    SkinData,
    SkinMetadata,
    Stats,
    Textures,
    TexturesEntry,
)
from minecraft_utils.mojang_api.blocked_servers import BlockedServers
from minecraft_utils.mojang_api.errors import FetchError, RequestError


SKIN_URL = "http://textures.minecraft.net/texture/b8130282b80cc08872bfc858975350ab"


def sha1(pattern: str) -> str:
    return hashlib.sha1(pattern.encode("utf-8")).hexdigest()


@pytest.fixture
def profile():
    return Profile(
        id="7a8084cd1f444a159bb1eef8d5b535a1",
        name="brecert",
        properties=[ProfileProperty(
            name="textures",
            value=TexturesEntry(
                timestamp=1640326151859,
                profile_id="7a8084cd1f444a159bb1eef8d5b535a1",
                profile_name="brecert",
                textures=Textures(
                    skin=SkinData(url=SKIN_URL, metadata=SkinMetadata(model="slim")),
                ),
            ),
        )],
    )


@pytest.fixture
def hashes_file(tmp_path):
    path = tmp_path / "blockedservers.txt"
    path.write_text("\n".join([sha1("*.example.com"), sha1("192.0.*"), sha1("127.0.0.1")]))
    return path


@pytest.fixture
def missing_config(tmp_path):
    return str(tmp_path / "none.yaml")


class TestBlockedCommand:
    def test_with_hash_file(self, hashes_file, missing_config):
        runner = CliRunner()
        result = runner.invoke(cli, [
            "blocked",
            "--hashes", str(hashes_file),
            "--config", missing_config,
            "mc.example.com", "192.0.2.235", "127.0.0.2",
        ])

        assert result.exit_code == 0
        assert "mc.example.com: blocked (*.example.com)" in result.output
        assert "192.0.2.235: blocked (192.0.*)" in result.output
        assert "127.0.0.2: not blocked" in result.output

    def test_fail_on_match(self, hashes_file, missing_config):
        runner = CliRunner()
        result = runner.invoke(cli, [
            "blocked", "--hashes", str(hashes_file), "--config", missing_config,
            "--fail-on-match", "127.0.0.1",
        ])
        assert result.exit_code == 1

        result = runner.invoke(cli, [
            "blocked", "--hashes", str(hashes_file), "--config", missing_config,
            "--fail-on-match", "mc.example.org",
        ])
        assert result.exit_code == 0

    def test_blocklist_file_from_config(self, tmp_path, hashes_file):
        config_path = tmp_path / "config.yaml"
        config_path.write_text(f"blocklist_file: {hashes_file}\n")

        runner = CliRunner()
        with patch("minecraft_utils.cli._fetch_blocked") as mock_fetch:
            result = runner.invoke(cli, [
                "blocked", "--config", str(config_path), "127.0.0.1",
            ])

        assert result.exit_code == 0
        assert "127.0.0.1: blocked (127.0.0.1)" in result.output
        mock_fetch.assert_not_called()

    def test_fetches_when_no_file(self, missing_config):
        runner = CliRunner()
        with patch("minecraft_utils.cli._fetch_blocked") as mock_fetch:
            mock_fetch.return_value = BlockedServers([sha1("*.example.com")])
            result = runner.invoke(cli, [
                "blocked", "--config", missing_config, "play.example.com",
            ])

        assert result.exit_code == 0
        assert "play.example.com: blocked (*.example.com)" in result.output
        mock_fetch.assert_called_once()

    def test_fetch_error(self, missing_config):
        runner = CliRunner()
        with patch("minecraft_utils.cli._fetch_blocked") as mock_fetch:
            mock_fetch.side_effect = FetchError("connection refused")
            result = runner.invoke(cli, [
                "blocked", "--config", missing_config, "mc.example.com",
            ])

        assert result.exit_code == 1
        assert "Error loading blocked servers" in result.output

    def test_requires_address(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["blocked"])
        assert result.exit_code != 0


class TestHashCommand:
    def test_prints_hashes(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["hash", "*.example.com", "192.0.*"])

        assert result.exit_code == 0
        assert "8c7122d652cb7be22d1986f1f30b07fd5108d9c0  *.example.com" in result.output
        assert "8c15fb642b3e8f58480df51798382f1016e748eb  192.0.*" in result.output


class TestProfileCommand:
    def test_by_username(self, profile, missing_config):
        runner = CliRunner()
        with patch("minecraft_utils.cli.get_username_uuid") as mock_uuid, \
                patch("minecraft_utils.cli.fetch_profile") as mock_profile:
            mock_uuid.return_value = profile.id
            mock_profile.return_value = profile
            result = runner.invoke(cli, ["profile", "--config", missing_config, "brecert"])

        assert result.exit_code == 0
        assert f"uuid: {profile.id}" in result.output
        assert "name: brecert" in result.output
        assert "skin model: alex" in result.output
        assert f"skin url: {SKIN_URL}" in result.output
        assert mock_profile.call_args.args[0] == profile.id

    def test_by_uuid_skips_lookup(self, profile, missing_config):
        runner = CliRunner()
        with patch("minecraft_utils.cli.get_username_uuid") as mock_uuid, \
                patch("minecraft_utils.cli.fetch_profile") as mock_profile:
            mock_profile.return_value = profile
            result = runner.invoke(cli, [
                "profile", "--config", missing_config,
                "7a8084cd-1f44-4a15-9bb1-eef8d5b535a1",
            ])

        assert result.exit_code == 0
        mock_uuid.assert_not_called()
        assert mock_profile.call_args.args[0] == "7a8084cd1f444a159bb1eef8d5b535a1"

    def test_invalid_username(self, missing_config):
        runner = CliRunner()
        with patch("minecraft_utils.cli.get_username_uuid") as mock_uuid:
            result = runner.invoke(cli, ["profile", "--config", missing_config, "bad name"])

        assert result.exit_code == 1
        assert "username contained invalid character ' '" in result.output
        mock_uuid.assert_not_called()

    def test_unknown_user(self, missing_config):
        runner = CliRunner()
        with patch("minecraft_utils.cli.get_username_uuid") as mock_uuid:
            mock_uuid.side_effect = RequestError(404, "Not Found")
            result = runner.invoke(cli, ["profile", "--config", missing_config, "nobody"])

        assert result.exit_code == 1
        assert "[404] API Request failed: Not Found" in result.output


class TestStatsCommand:
    def test_default_metrics(self, missing_config):
        runner = CliRunner()
        with patch("minecraft_utils.cli.fetch_stats") as mock_stats:
            mock_stats.return_value = Stats(
                total=100, last24h=5, sale_velocity_per_seconds=0.5
            )
            result = runner.invoke(cli, ["stats", "--config", missing_config])

        assert result.exit_code == 0
        assert "total: 100" in result.output
        assert "last 24h: 5" in result.output
        metrics = mock_stats.call_args.args[0]
        assert metrics.keys() == ["item_sold_minecraft", "prepaid_card_redeemed_minecraft"]

    def test_selected_metrics(self, missing_config):
        runner = CliRunner()
        with patch("minecraft_utils.cli.fetch_stats") as mock_stats:
            mock_stats.return_value = Stats(
                total=1, last24h=0, sale_velocity_per_seconds=0.0
            )
            result = runner.invoke(cli, [
                "stats", "--config", missing_config, "-m", "scrolls_items_sold",
            ])

        assert result.exit_code == 0
        assert mock_stats.call_args.args[0].keys() == ["item_sold_scrolls"]

    def test_unknown_metric(self, missing_config):
        runner = CliRunner()
        result = runner.invoke(cli, ["stats", "--config", missing_config, "-m", "nope"])
        assert result.exit_code != 0
