import pytest

from azure_rm_cmdlets import azure_client, cli

from azure_fakes import (
    FAKES,
    DummyCredential,
    DummyJobManagementClient,
    DummyJobOperations,
    DummyMetrics,
    DummyMonitorClient,
    DummyNetworkClient,
    DummyNetworkSecurityGroups,
    DummyPipelineClient,
    DummySubscriptionClient,
)


@pytest.fixture
def fake_azure(monkeypatch):
    """Replace every Azure SDK entry point used by the clients."""
    FAKES.job_operations = DummyJobOperations()
    FAKES.metrics = DummyMetrics()
    FAKES.intune_requests = []
    FAKES.intune_responses = []
    FAKES.network_security_groups = DummyNetworkSecurityGroups()

    monkeypatch.setenv("AZURE_SUBSCRIPTION_ID", "sub-123")
    monkeypatch.setattr(azure_client, "AzureCliCredential", DummyCredential)
    monkeypatch.setattr(azure_client, "DataLakeAnalyticsJobManagementClient", DummyJobManagementClient)
    monkeypatch.setattr(azure_client, "MonitorManagementClient", DummyMonitorClient)
    monkeypatch.setattr(azure_client, "PipelineClient", DummyPipelineClient)
    monkeypatch.setattr(azure_client, "NetworkManagementClient", DummyNetworkClient)
    monkeypatch.setattr(azure_client, "SubscriptionClient", DummySubscriptionClient)
    monkeypatch.setattr(cli, "current_subscription", None)

    return FAKES
