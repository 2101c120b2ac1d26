"""
Azure SDK integration for the management cmdlets.
"""

import os
from enum import Enum
from typing import Dict, List, Optional

from dotenv import load_dotenv
from azure.identity import DefaultAzureCredential, AzureCliCredential
from azure.common.credentials import BasicTokenAuthentication
from azure.core import PipelineClient
from azure.core.pipeline.policies import BearerTokenCredentialPolicy, RetryPolicy
from azure.core.rest import HttpRequest
from azure.mgmt.datalake.analytics.job import DataLakeAnalyticsJobManagementClient
from azure.mgmt.monitor import MonitorManagementClient
from azure.mgmt.network import NetworkManagementClient
from azure.mgmt.subscription import SubscriptionClient

from .models import Location, LocationCollection, ModelValidationError
from .odata_filter import ODataFilter
from .output_classes import Dimension


load_dotenv()

DEFAULT_ADLA_DNS_SUFFIX = "azuredatalakeanalytics.net"
DEFAULT_ARM_ENDPOINT = "https://management.azure.com"
DATALAKE_TOKEN_SCOPE = "https://datalake.azure.net/.default"
INTUNE_API_VERSION = "2015-01-14-preview"
USQL_JOB_TYPE = "usql"
# metrics.list returns 10 timeseries unless top is given
DIMENSION_VALUES_TOP = 1000


class ExtendedJobData(Enum):
    """Additional job data that can be requested with a single job."""

    NONE = "None"
    DEBUG_INFO = "DebugInfo"
    STATISTICS = "Statistics"
    ALL = "All"


def get_credential():
    """Azure CLI credential for local use, DefaultAzureCredential otherwise."""
    try:
        return AzureCliCredential()
    except Exception:
        return DefaultAzureCredential()


def _enum_text(value) -> Optional[str]:
    """SDK enums carry their wire text in .value."""
    return getattr(value, "value", value)


def _model_to_dict(model) -> Optional[Dict]:
    """Convert an SDK model to a dictionary."""
    if model is None:
        return None
    if hasattr(model, "as_dict"):
        return model.as_dict()
    return model


class SubscriptionManager:
    """Lists and resolves Azure subscriptions."""

    def __init__(self):
        self.credential = get_credential()
        self.subscription_client = SubscriptionClient(self.credential)

    def list_subscriptions(self) -> List[Dict]:
        """
        List all available subscriptions.

        Returns:
            List of subscription dictionaries with subscription_id, display_name, state
        """
        try:
            return [
                {
                    "subscription_id": sub.subscription_id,
                    "display_name": sub.display_name,
                    "state": _enum_text(sub.state),
                }
                for sub in self.subscription_client.subscriptions.list()
            ]
        except Exception as e:
            raise RuntimeError(f"Failed to list subscriptions: {e}")

    def find_subscription(self, id_or_name: str) -> Optional[Dict]:
        """
        Resolve a subscription by ID, then by display name (case-insensitive).

        Returns:
            Subscription dictionary or None if not found
        """
        subs = self.list_subscriptions()
        for sub in subs:
            if sub["subscription_id"] == id_or_name:
                return sub
        for sub in subs:
            if (sub["display_name"] or "").lower() == id_or_name.lower():
                return sub
        return None


class SubscriptionScopedClient:
    """Base for clients bound to one subscription."""

    def __init__(self, subscription_id: Optional[str] = None):
        """
        Args:
            subscription_id: Azure subscription ID (uses env var if not provided)
        """
        self.subscription_id = subscription_id or os.getenv("AZURE_SUBSCRIPTION_ID")
        if not self.subscription_id:
            raise ValueError("AZURE_SUBSCRIPTION_ID not set in environment or parameters")
        self.credential = get_credential()


class DataLakeAnalyticsJobClient:
    """Data Lake Analytics job service (account-addressed data plane)."""

    def __init__(self, dns_suffix: Optional[str] = None):
        """
        Args:
            dns_suffix: Job endpoint DNS suffix
                (default: AZURE_DATALAKE_ANALYTICS_DNS_SUFFIX or azuredatalakeanalytics.net)
        """
        self.dns_suffix = dns_suffix or os.getenv(
            "AZURE_DATALAKE_ANALYTICS_DNS_SUFFIX", DEFAULT_ADLA_DNS_SUFFIX
        )
        self.credential = get_credential()

        try:
            token = self.credential.get_token(DATALAKE_TOKEN_SCOPE)
        except Exception as e:
            raise RuntimeError(f"Failed to acquire Data Lake token: {e}")

        # The job SDK predates azure-identity and takes msrest-style credentials
        self.job_client = DataLakeAnalyticsJobManagementClient(
            BasicTokenAuthentication({"access_token": token.token}),
            self.dns_suffix,
        )

    def get_job(self, account: str, job_id) -> Dict:
        """
        Get a single job.

        Args:
            account: Data Lake Analytics account name
            job_id: Job identity (UUID)

        Returns:
            Job dictionary
        """
        try:
            return self._job_to_dict(self.job_client.job.get(account, job_id))
        except Exception as e:
            raise RuntimeError(f"Failed to get job: {e}")

    def list_jobs(
        self,
        account: str,
        job_filter: Optional[str] = None,
        top: Optional[int] = None,
        orderby: Optional[str] = None,
    ) -> List[Dict]:
        """
        List jobs in an account.

        Args:
            account: Data Lake Analytics account name
            job_filter: OData filter; omitted from the request when None
            top: Maximum number of jobs
            orderby: OData orderby clause

        Returns:
            List of job dictionaries
        """
        kwargs = {}
        if job_filter is not None:
            kwargs["filter"] = job_filter
        if top is not None:
            kwargs["top"] = top
        if orderby is not None:
            kwargs["orderby"] = orderby

        try:
            jobs = self.job_client.job.list(account, **kwargs)
            return [self._job_to_dict(job) for job in jobs]
        except Exception as e:
            raise RuntimeError(f"Failed to list jobs: {e}")

    def get_debug_data_paths(self, account: str, job_id) -> Dict:
        try:
            return _model_to_dict(self.job_client.job.get_debug_data_path(account, job_id))
        except Exception as e:
            raise RuntimeError(f"Failed to get job debug data paths: {e}")

    def get_job_statistics(self, account: str, job_id) -> Dict:
        try:
            return _model_to_dict(self.job_client.job.get_statistics(account, job_id))
        except Exception as e:
            raise RuntimeError(f"Failed to get job statistics: {e}")

    @staticmethod
    def supports_extended_data(job: Dict) -> bool:
        """Only U-SQL jobs carry debug data and statistics."""
        return (job.get("type") or "").lower() == USQL_JOB_TYPE

    def attach_extended_data(
        self, account: str, job: Dict, include: ExtendedJobData
    ) -> Dict:
        """
        Fetch the requested extended data and attach it to the job.

        Args:
            account: Data Lake Analytics account name
            job: Job dictionary from get_job()
            include: Which extended data to attach

        Returns:
            The same job dictionary
        """
        if include in (ExtendedJobData.ALL, ExtendedJobData.DEBUG_INFO):
            job["debug_data"] = self.get_debug_data_paths(account, job["job_id"])

        if include in (ExtendedJobData.ALL, ExtendedJobData.STATISTICS):
            job["statistics"] = self.get_job_statistics(account, job["job_id"])

        return job

    @staticmethod
    def _job_to_dict(job) -> Dict:
        """Convert JobInformation to dictionary."""
        return {
            "job_id": str(job.job_id) if job.job_id is not None else None,
            "name": job.name,
            "type": _enum_text(job.type),
            "submitter": job.submitter,
            "state": _enum_text(job.state),
            "result": _enum_text(job.result),
            "degree_of_parallelism": job.degree_of_parallelism,
            "priority": job.priority,
            "submit_time": job.submit_time,
            "start_time": job.start_time,
            "end_time": job.end_time,
        }


class InsightsClient(SubscriptionScopedClient):
    """Azure Monitor metric definitions and dimension values."""

    def __init__(self, subscription_id: Optional[str] = None):
        super().__init__(subscription_id)
        self.monitor_client = MonitorManagementClient(
            self.credential,
            self.subscription_id,
        )

    def list_metric_definitions(
        self, resource_id: str, metric_names: Optional[List[str]] = None
    ) -> List[Dict]:
        """
        List the metric definitions of a resource.

        Args:
            resource_id: Full ARM resource ID
            metric_names: Only these metrics (case-insensitive); all when empty

        Returns:
            List of definition dictionaries with Dimension lists
        """
        wanted = {m.lower() for m in metric_names or []}

        try:
            definitions = []
            for definition in self.monitor_client.metric_definitions.list(resource_id):
                name = definition.name.value
                if wanted and name.lower() not in wanted:
                    continue
                definitions.append(
                    {
                        "name": name,
                        "localized_name": definition.name.localized_value,
                        "unit": _enum_text(definition.unit),
                        "primary_aggregation_type": _enum_text(
                            definition.primary_aggregation_type
                        ),
                        "dimensions": [
                            Dimension(Name=d.value, LocalizedName=d.localized_value)
                            for d in definition.dimensions or []
                        ],
                    }
                )
            return definitions
        except Exception as e:
            raise RuntimeError(f"Failed to list metric definitions: {e}")

    def list_dimension_values(
        self,
        resource_id: str,
        metric_name: str,
        dimension_names: List[str],
        timespan: Optional[str] = None,
        top: int = DIMENSION_VALUES_TOP,
    ) -> Dict[str, List[str]]:
        """
        Collect the values reported for each dimension of a metric.

        Args:
            resource_id: Full ARM resource ID
            metric_name: Metric to query
            dimension_names: Dimensions to split by
            timespan: ISO 8601 "start/end" interval (service default when None)
            top: Maximum number of timeseries to request

        Returns:
            Mapping of dimension name to distinct values, in first-seen order
        """
        if not dimension_names:
            return {}

        kwargs = {
            "metricnames": metric_name,
            "filter": ODataFilter.join_and(
                [ODataFilter.eq_clause(name, "*") for name in dimension_names]
            ),
            "top": top,
        }
        if timespan:
            kwargs["timespan"] = timespan

        values: Dict[str, List[str]] = {name: [] for name in dimension_names}
        canonical = {name.lower(): name for name in dimension_names}

        try:
            response = self.monitor_client.metrics.list(resource_id, **kwargs)
            for metric in response.value or []:
                for series in metric.timeseries or []:
                    for metadata in series.metadatavalues or []:
                        key = metadata.name.value
                        bucket = values.setdefault(canonical.get(key.lower(), key), [])
                        if metadata.value not in bucket:
                            bucket.append(metadata.value)
            return values
        except Exception as e:
            raise RuntimeError(f"Failed to list dimension values: {e}")


class IntuneClient:
    """Intune REST endpoints under the Resource Manager endpoint."""

    def __init__(self, endpoint: Optional[str] = None):
        """
        Args:
            endpoint: Resource Manager endpoint
                (default: AZURE_RESOURCE_MANAGER_ENDPOINT or https://management.azure.com)
        """
        self.endpoint = (
            endpoint or os.getenv("AZURE_RESOURCE_MANAGER_ENDPOINT", DEFAULT_ARM_ENDPOINT)
        ).rstrip("/")
        self.credential = get_credential()
        self.pipeline_client = PipelineClient(
            base_url=self.endpoint,
            policies=[
                RetryPolicy(),
                BearerTokenCredentialPolicy(self.credential, f"{self.endpoint}/.default"),
            ],
        )

    def _get_location_page(self, url: str, params: Optional[Dict] = None) -> LocationCollection:
        request = HttpRequest("GET", url, params=params)
        response = self.pipeline_client.send_request(request)
        response.raise_for_status()

        page = LocationCollection.model_validate(response.json())
        page.validate()
        return page

    def list_locations(self) -> List[Location]:
        """
        List Intune locations, following nextlink continuation tokens.

        Returns:
            Locations from all pages

        Raises:
            ModelValidationError: A page failed validation
            RuntimeError: The request failed
        """
        url = self.pipeline_client.format_url("/providers/Microsoft.Intune/locations")
        params = {"api-version": INTUNE_API_VERSION}
        locations: List[Location] = []

        try:
            while url:
                page = self._get_location_page(url, params)
                locations.extend(loc for loc in page.Value if loc is not None)
                # nextlink already carries the query string
                url, params = page.Nextlink, None
        except ModelValidationError:
            raise
        except Exception as e:
            raise RuntimeError(f"Failed to list Intune locations: {e}")

        return locations


class NetworkClient(SubscriptionScopedClient):
    """Network security group operations."""

    def __init__(self, subscription_id: Optional[str] = None):
        super().__init__(subscription_id)
        self.network_client = NetworkManagementClient(
            self.credential,
            self.subscription_id,
        )

    def get_network_security_group(self, resource_group: str, name: str) -> Dict:
        """
        Get a network security group.

        Returns:
            NSG dictionary with id, name, location, rule count
        """
        try:
            nsg = self.network_client.network_security_groups.get(resource_group, name)
            return {
                "id": nsg.id,
                "name": nsg.name,
                "location": nsg.location,
                "security_rules": len(nsg.security_rules or []),
            }
        except Exception as e:
            raise RuntimeError(f"Failed to get network security group: {e}")

    def remove_network_security_group(self, resource_group: str, name: str) -> bool:
        """
        Delete a network security group and wait for completion.

        Returns:
            True if successful
        """
        try:
            poller = self.network_client.network_security_groups.begin_delete(
                resource_group, name
            )
            poller.result()
            return True
        except Exception as e:
            raise RuntimeError(f"Failed to remove network security group: {e}")
