"""Tests for subscription management functionality."""

import os

from click.testing import CliRunner

from azure_rm_cmdlets import cli
from azure_rm_cmdlets.azure_client import SubscriptionManager


def test_subscriptions_command(fake_azure):
    """Test subscriptions command lists all subscriptions."""
    runner = CliRunner()

    result = runner.invoke(cli.cli, ["subscriptions"])
    assert result.exit_code == 0
    assert "Available Subscriptions" in result.output
    assert "Production" in result.output
    assert "Development" in result.output
    assert "sub-123" in result.output


def test_subscriptions_command_marks_current(monkeypatch, fake_azure):
    """Test the current subscription is marked in the listing."""
    monkeypatch.setattr(cli, "current_subscription", "sub-456")
    runner = CliRunner()

    result = runner.invoke(cli.cli, ["subscriptions"])
    assert result.exit_code == 0
    assert "Development ✓" in result.output
    assert "Production ✓" not in result.output


def test_use_subscription_by_id(fake_azure):
    """Test switching subscription by ID."""
    runner = CliRunner()

    result = runner.invoke(cli.cli, ["use-subscription", "sub-456"])
    assert result.exit_code == 0
    assert "Switched to subscription" in result.output
    assert "Development" in result.output
    assert cli.current_subscription == "sub-456"
    assert os.environ["AZURE_SUBSCRIPTION_ID"] == "sub-456"


def test_use_subscription_by_name_case_insensitive(fake_azure):
    """Test subscription name matching is case-insensitive."""
    runner = CliRunner()

    result = runner.invoke(cli.cli, ["use-subscription", "PRODUCTION"])
    assert result.exit_code == 0
    assert "sub-123" in result.output


def test_use_subscription_not_found(fake_azure):
    """Test error when subscription not found."""
    runner = CliRunner()

    result = runner.invoke(cli.cli, ["use-subscription", "nonexistent"])
    assert result.exit_code != 0
    assert "not found" in result.output
    assert cli.current_subscription is None


def test_selected_subscription_is_used_by_commands(monkeypatch, fake_azure):
    """Test remove-nsg falls back to the selected subscription."""
    monkeypatch.delenv("AZURE_SUBSCRIPTION_ID", raising=False)
    monkeypatch.setattr(cli, "current_subscription", "sub-456")
    runner = CliRunner()

    result = runner.invoke(cli.cli, ["remove-nsg", "web-nsg", "--resource-group", "rg", "--force"])
    assert result.exit_code == 0, result.output
    assert fake_azure.network_security_groups.deleted == [("rg", "web-nsg")]


def test_subscription_manager_list_subscriptions(fake_azure):
    """Test SubscriptionManager.list_subscriptions()."""
    subs = SubscriptionManager().list_subscriptions()

    assert len(subs) == 2
    assert subs[0] == {"subscription_id": "sub-123", "display_name": "Production", "state": "Enabled"}
