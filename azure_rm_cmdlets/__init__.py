"""
Azure Resource Manager Cmdlets

Command-line wrappers over Azure management clients: Data Lake Analytics jobs,
Azure Monitor metric dimensions, Intune locations and network security groups.
"""

__version__ = "1.0.0"
__author__ = "OI Technologies Platform Engineering"
__license__ = "Internal"

from .odata_filter import ODataFilter, JobState, JobResult, build_job_filter
from .models import (
    Location,
    LocationCollection,
    LocationProperties,
    MissingRequiredFieldError,
    ModelValidationError,
    Validatable,
)
from .output_classes import Dimension, DimensionCollection
from .azure_client import (
    DataLakeAnalyticsJobClient,
    ExtendedJobData,
    InsightsClient,
    IntuneClient,
    NetworkClient,
)

__all__ = [
    "ODataFilter",
    "JobState",
    "JobResult",
    "build_job_filter",
    "Location",
    "LocationCollection",
    "LocationProperties",
    "MissingRequiredFieldError",
    "ModelValidationError",
    "Validatable",
    "Dimension",
    "DimensionCollection",
    "DataLakeAnalyticsJobClient",
    "ExtendedJobData",
    "InsightsClient",
    "IntuneClient",
    "NetworkClient",
]
