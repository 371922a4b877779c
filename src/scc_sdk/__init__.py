# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""SCC SDK - Async Python client for IBM Cloud Security and Compliance Center.

This library wraps two SCC REST services behind async service handles that
share one request pipeline: URL resolution, request building, authentication,
retries with back-off, cooperative cancellation, JSON decoding and cursor
pagination.

Key Features:
    - Admin Service (V1): instance settings and test events
    - Results/Reports Service (V3): reports, controls, evaluations, resources
    - IAM, container, Cloud Pak for Data, basic and bearer-token authentication
    - Configuration from a credentials file or environment variables
    - Retries for 429 and 5xx responses, honouring Retry-After
    - Deadlines and cancellation through RequestContext
    - Prometheus metrics for requests, retries and latency

Quick Start:
    >>> from scc_sdk import IamAuthenticator, ResultsReportsApiV3
    >>> from scc_sdk.reports import ListReportsOptions
    >>>
    >>> service = ResultsReportsApiV3(IamAuthenticator(apikey="..."))
    >>> service.enable_retries()
    >>> async with service:
    ...     pager = service.new_reports_pager(ListReportsOptions(instance_id="..."))
    ...     reports = await pager.get_all()

Main Exports:
    - AdminServiceApiV1, ResultsReportsApiV3: Service handles
    - Authenticator and its variants: Credentials for every request
    - RequestContext: Deadlines and cancellation
    - DetailedResponse, ResponseStream: Operation results
    - SccError and subclasses: Error hierarchy

Version: 1.0.0
"""

__version__ = "1.0.0"

from .admin import AdminServiceApiV1
from .auth import (
    Authenticator,
    BasicAuthenticator,
    BearerTokenAuthenticator,
    CloudPakForDataAuthenticator,
    ContainerAuthenticator,
    IamAssumeAuthenticator,
    IamAuthenticator,
    NoAuthAuthenticator,
    get_authenticator_from_environment,
)
from .core import (
    BaseService,
    DetailedResponse,
    RequestContext,
    ResponseStream,
    RetryPolicy,
)
from .exceptions import (
    DeadlineExceededError,
    DecodeError,
    HttpStatusError,
    PaginationError,
    RequestCancelledError,
    SccError,
    TransportError,
    UrlMissingError,
    ValidationError,
)
from .observability import SdkMetricsCollector, get_metrics_collector
from .reports import ResultsReportsApiV3

__all__ = [
    "AdminServiceApiV1",
    "Authenticator",
    "BaseService",
    "BasicAuthenticator",
    "BearerTokenAuthenticator",
    "CloudPakForDataAuthenticator",
    "ContainerAuthenticator",
    "DeadlineExceededError",
    "DecodeError",
    "DetailedResponse",
    "HttpStatusError",
    "IamAssumeAuthenticator",
    "IamAuthenticator",
    "NoAuthAuthenticator",
    "PaginationError",
    "RequestCancelledError",
    "RequestContext",
    "ResponseStream",
    "ResultsReportsApiV3",
    "RetryPolicy",
    "SccError",
    "SdkMetricsCollector",
    "TransportError",
    "UrlMissingError",
    "ValidationError",
    "__version__",
    "get_authenticator_from_environment",
    "get_metrics_collector",
]
