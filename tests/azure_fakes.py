"""Azure SDK doubles shared by the test modules."""

from datetime import datetime, timezone
from types import SimpleNamespace


JOB_ID = "6a3d1f0e-0c1b-4f7e-9d6a-2a9f0b3c4d5e"


class DummyModel:
    """SDK model stand-in exposing as_dict()."""

    def __init__(self, data):
        self._data = data

    def as_dict(self):
        return dict(self._data)


class DummyCredential:
    def __init__(self, *args, **kwargs):
        self.scopes = []

    def get_token(self, *scopes):
        self.scopes.extend(scopes)
        return SimpleNamespace(token="fake-token", expires_on=0)


def make_job(job_id=JOB_ID, name="daily-rollup", type="USql", state="Ended", result="Succeeded"):
    return SimpleNamespace(
        job_id=job_id,
        name=name,
        type=type,
        submitter="alice@contoso.com",
        state=state,
        result=result,
        degree_of_parallelism=4,
        priority=1000,
        submit_time=datetime(2024, 1, 1, tzinfo=timezone.utc),
        start_time=None,
        end_time=None,
    )


class DummyJobOperations:
    def __init__(self):
        self.job_type = "USql"
        self.jobs = [make_job(), make_job(job_id="1b2c", name="hourly", state="Running", result="None")]
        self.list_calls = []
        self.debug_calls = []
        self.statistics_calls = []

    def get(self, account, job_identity):
        return make_job(job_id=job_identity, type=self.job_type)

    def list(self, account, **kwargs):
        self.list_calls.append((account, kwargs))
        return list(self.jobs)

    def get_debug_data_path(self, account, job_identity):
        self.debug_calls.append((account, job_identity))
        return DummyModel(
            {"job_id": job_identity, "command": "", "paths": ["adl://store/system/jobservice/jobs/debug"]}
        )

    def get_statistics(self, account, job_identity):
        self.statistics_calls.append((account, job_identity))
        return DummyModel(
            {
                "last_update_time_utc": None,
                "finalizing_time_utc": None,
                "stages": [
                    {"stage_name": "SV1_Extract", "succeeded_count": 3, "failed_count": 0, "total_count": 3}
                ],
            }
        )


class DummyJobManagementClient:
    def __init__(self, credentials, adla_job_dns_suffix):
        self.credentials = credentials
        self.adla_job_dns_suffix = adla_job_dns_suffix
        self.job = FAKES.job_operations


def localizable(value, localized_value=None):
    return SimpleNamespace(value=value, localized_value=localized_value or value)


def metadata(name, value):
    return SimpleNamespace(name=localizable(name), value=value)


def series_for(api_name, response_type):
    return SimpleNamespace(
        metadatavalues=[metadata("apiname", api_name), metadata("responsetype", response_type)]
    )


class DummyMetricDefinitions:
    def list(self, resource_uri):
        return [
            SimpleNamespace(
                name=localizable("Transactions", "Transactions"),
                unit="Count",
                primary_aggregation_type="Total",
                dimensions=[localizable("ApiName", "API name"), localizable("ResponseType", "Response type")],
            ),
            SimpleNamespace(
                name=localizable("UsedCapacity", "Used capacity"),
                unit="Bytes",
                primary_aggregation_type="Average",
                dimensions=None,
            ),
        ]


class DummyMetrics:
    def __init__(self):
        self.calls = []
        self.series = [
            series_for("GetBlob", "Success"),
            series_for("PutBlob", "Success"),
        ]

    def list(self, resource_uri, **kwargs):
        self.calls.append((resource_uri, kwargs))
        # the service returns 10 timeseries when top is not given
        top = kwargs.get("top", 10)
        return SimpleNamespace(value=[SimpleNamespace(timeseries=self.series[:top])])


class DummyMonitorClient:
    def __init__(self, credential, subscription_id):
        self.subscription_id = subscription_id
        self.metric_definitions = DummyMetricDefinitions()
        self.metrics = FAKES.metrics


class DummyResponse:
    def __init__(self, payload, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise Exception(f"HTTP {self.status_code}")

    def json(self):
        return self.payload


class DummyPipelineClient:
    def __init__(self, base_url, policies=None, **kwargs):
        self.base_url = base_url
        self.policies = policies

    def format_url(self, url_template):
        return self.base_url + url_template

    def send_request(self, request):
        FAKES.intune_requests.append(request)
        return FAKES.intune_responses.pop(0)


class DummyPoller:
    def __init__(self):
        self.waited = False

    def result(self):
        self.waited = True


class DummyNetworkSecurityGroups:
    def __init__(self):
        self.deleted = []
        self.poller = DummyPoller()

    def get(self, resource_group, name):
        if name == "missing":
            raise Exception("ResourceNotFound")
        return SimpleNamespace(
            id=f"/subscriptions/sub-123/resourceGroups/{resource_group}/providers/"
            f"Microsoft.Network/networkSecurityGroups/{name}",
            name=name,
            location="westeurope",
            security_rules=[object(), object()],
        )

    def begin_delete(self, resource_group, name):
        self.deleted.append((resource_group, name))
        return self.poller


class DummyNetworkClient:
    def __init__(self, credential, subscription_id):
        self.subscription_id = subscription_id
        self.network_security_groups = FAKES.network_security_groups


class DummySubscriptionClient:
    def __init__(self, credential):
        self.subscriptions = SimpleNamespace(
            list=lambda: [
                SimpleNamespace(subscription_id="sub-123", display_name="Production", state="Enabled"),
                SimpleNamespace(subscription_id="sub-456", display_name="Development", state="Enabled"),
            ]
        )


FAKES = SimpleNamespace()
