"""
Unit tests for ResultsReportsApiV3.

Each operation is checked for its method, path, query parameters, analytics
header and decoded result type against a mocked HTTP transport.
"""

import pytest

from scc_sdk.auth import NoAuthAuthenticator
from scc_sdk.core.response import ResponseStream
from scc_sdk.exceptions import DecodeError, HttpStatusError, ValidationError
from scc_sdk.reports import (
    CSV_MIME,
    ComplianceStatus,
    EvaluationPage,
    EvaluationStatus,
    GetLatestReportsOptions,
    GetLatestReportsResponse,
    GetProfilesResponse,
    GetReportControlsOptions,
    GetReportControlsResponse,
    GetReportEvaluationOptions,
    GetReportOptions,
    GetReportRuleOptions,
    GetReportSummaryOptions,
    GetReportTagsOptions,
    GetReportViolationsDriftOptions,
    GetReportViolationsDriftResult,
    GetReportsProfilesOptions,
    GetReportsScopesOptions,
    GetScopesResponse,
    GetTagsResponse,
    ListReportEvaluationsOptions,
    ListReportResourcesOptions,
    ListReportsOptions,
    Report,
    ReportPage,
    ReportSummary,
    ReportType,
    ResourcePage,
    ResultsReportsApiV3,
    Rule,
)

SERVICE_URL = "https://scc.example.com"
BASE = f"{SERVICE_URL}/instances/inst/v3/reports"
PAGE = {"total_count": 0, "limit": 50}

OPERATIONS = [
    pytest.param(
        "get_latest_reports",
        GetLatestReportsOptions(instance_id="inst", home_account_id="acct", sort="profile_name"),
        f"{BASE}/latest",
        {"home_account_id": "acct", "sort": "profile_name"},
        "GetLatestReports",
        {},
        GetLatestReportsResponse,
        id="get_latest_reports",
    ),
    pytest.param(
        "list_reports",
        ListReportsOptions(
            instance_id="inst",
            attachment_id="att",
            group_id="grp",
            profile_id="prof",
            scope_id="scope",
            type=ReportType.SCHEDULED,
            limit=50,
            sort="scan_time",
        ),
        BASE,
        {
            "attachment_id": "att",
            "group_id": "grp",
            "profile_id": "prof",
            "scope_id": "scope",
            "type": "scheduled",
            "limit": "50",
            "sort": "scan_time",
        },
        "ListReports",
        PAGE,
        ReportPage,
        id="list_reports",
    ),
    pytest.param(
        "get_reports_profiles",
        GetReportsProfilesOptions(instance_id="inst", report_id="r1"),
        f"{BASE}/profiles",
        {"report_id": "r1"},
        "GetReportsProfiles",
        {},
        GetProfilesResponse,
        id="get_reports_profiles",
    ),
    pytest.param(
        "get_reports_scopes",
        GetReportsScopesOptions(instance_id="inst", home_account_id="acct"),
        f"{BASE}/scopes",
        {"home_account_id": "acct"},
        "GetReportsScopes",
        {},
        GetScopesResponse,
        id="get_reports_scopes",
    ),
    pytest.param(
        "get_report",
        GetReportOptions(instance_id="inst", report_id="r1"),
        f"{BASE}/r1",
        {},
        "GetReport",
        {"id": "r1"},
        Report,
        id="get_report",
    ),
    pytest.param(
        "get_report_summary",
        GetReportSummaryOptions(instance_id="inst", report_id="r1"),
        f"{BASE}/r1/summary",
        {},
        "GetReportSummary",
        {},
        ReportSummary,
        id="get_report_summary",
    ),
    pytest.param(
        "get_report_controls",
        GetReportControlsOptions(
            instance_id="inst",
            report_id="r1",
            control_name="SC-7",
            status=ComplianceStatus.NOT_COMPLIANT,
        ),
        f"{BASE}/r1/controls",
        {"control_name": "SC-7", "status": "not_compliant"},
        "GetReportControls",
        {},
        GetReportControlsResponse,
        id="get_report_controls",
    ),
    pytest.param(
        "get_report_rule",
        GetReportRuleOptions(instance_id="inst", report_id="r1", rule_id="rule-1"),
        f"{BASE}/r1/rules/rule-1",
        {},
        "GetReportRule",
        {"id": "rule-1"},
        Rule,
        id="get_report_rule",
    ),
    pytest.param(
        "list_report_evaluations",
        ListReportEvaluationsOptions(
            instance_id="inst", report_id="r1", status=EvaluationStatus.FAILURE, limit=10
        ),
        f"{BASE}/r1/evaluations",
        {"status": "failure", "limit": "10"},
        "ListReportEvaluations",
        PAGE,
        EvaluationPage,
        id="list_report_evaluations",
    ),
    pytest.param(
        "list_report_resources",
        ListReportResourcesOptions(
            instance_id="inst", report_id="r1", resource_name="bucket", account_id="acct"
        ),
        f"{BASE}/r1/resources",
        {"resource_name": "bucket", "account_id": "acct"},
        "ListReportResources",
        PAGE,
        ResourcePage,
        id="list_report_resources",
    ),
    pytest.param(
        "get_report_tags",
        GetReportTagsOptions(report_id="r1"),
        f"{SERVICE_URL}/v3/reports/r1/tags",
        {},
        "GetReportTags",
        {},
        GetTagsResponse,
        id="get_report_tags",
    ),
    pytest.param(
        "get_report_violations_drift",
        GetReportViolationsDriftOptions(instance_id="inst", report_id="r1", scan_time_duration=7),
        f"{BASE}/r1/violations_drift",
        {"scan_time_duration": "7"},
        "GetReportViolationsDrift",
        {},
        GetReportViolationsDriftResult,
        id="get_report_violations_drift",
    ),
]


class TestServiceIdentity:
    """Tests for the service constants and construction."""

    def test_defaults(self):
        """The handle defaults to the us-south endpoint."""
        service = ResultsReportsApiV3(NoAuthAuthenticator(), metrics_enabled=False)
        assert service.get_service_url() == "https://us-south.compliance.cloud.ibm.com"
        assert ResultsReportsApiV3.DEFAULT_SERVICE_NAME == "results_reports_api"

    def test_construct_service_url(self):
        """The environment is a template variable."""
        url = ResultsReportsApiV3.construct_service_url({"environment": "eu-de.compliance"})
        assert url == "https://eu-de.compliance.cloud.ibm.com"

    def test_construct_service_url_default(self):
        """Without overrides the default environment is used."""
        assert ResultsReportsApiV3.construct_service_url({}) == (
            ResultsReportsApiV3.DEFAULT_SERVICE_URL
        )

    def test_new_instance(self, monkeypatch):
        """new_instance reads the results_reports_api properties."""
        monkeypatch.setenv("RESULTS_REPORTS_API_AUTH_TYPE", "noauth")
        monkeypatch.setenv("RESULTS_REPORTS_API_URL", "https://env.example.com")
        service = ResultsReportsApiV3.new_instance(metrics_enabled=False)
        assert service.get_service_url() == "https://env.example.com"


class TestOperations:
    """Request shape and result decoding of every JSON operation."""

    @pytest.mark.parametrize(
        "method,options,url,query,operation_id,body,result_type", OPERATIONS
    )
    async def test_operation(
        self,
        reports_service,
        mock_server,
        method,
        options,
        url,
        query,
        operation_id,
        body,
        result_type,
    ):
        """The request is a GET to the expected URL and the result is decoded."""
        mock_server.add(200, json_body=body)

        response = await getattr(reports_service, method)(options)

        sent = mock_server.last_request
        assert sent.method == "GET"
        assert f"{sent.url.scheme}://{sent.url.host}{sent.url.path}" == url
        assert dict(sent.url.params) == query
        assert sent.headers["Accept"] == "application/json"
        analytics = sent.headers["X-IBMCloud-SDK-Analytics"]
        assert f"operation_id={operation_id}" in analytics
        assert "service_name=results_reports_api;service_version=V3" in analytics
        assert isinstance(response.get_result(), result_type)

    @pytest.mark.parametrize("method,options", [(p.values[0], p.values[1]) for p in OPERATIONS])
    async def test_none_options(self, reports_service, mock_server, method, options):
        """None options are rejected before any request."""
        with pytest.raises(ValidationError, match="options cannot be None"):
            await getattr(reports_service, method)(None)
        assert mock_server.requests == []

    async def test_correlation_id_and_headers(self, reports_service, mock_server):
        """The correlation id and caller headers are sent."""
        mock_server.add(200, json_body={"id": "r1"})
        await reports_service.get_report(
            GetReportOptions(
                instance_id="inst",
                report_id="r1",
                x_correlation_id="corr-9",
                headers={"X-Trace": "t"},
            )
        )
        sent = mock_server.last_request
        assert sent.headers["X-Correlation-Id"] == "corr-9"
        assert sent.headers["X-Trace"] == "t"


class TestPathParameters:
    """Tests for path parameter handling."""

    async def test_values_escaped(self, reports_service, mock_server):
        """Path values are percent-escaped as a single segment."""
        mock_server.add(200, json_body={})
        await reports_service.get_report_rule(
            GetReportRuleOptions(instance_id="inst", report_id="r 1", rule_id="a/b")
        )
        assert mock_server.last_request.url.raw_path == b"/instances/inst/v3/reports/r%201/rules/a%2Fb"

    @pytest.mark.parametrize(
        "options,field",
        [
            (GetReportOptions(instance_id="", report_id="r1"), "instance_id"),
            (GetReportOptions(instance_id="inst", report_id=""), "report_id"),
            (GetReportRuleOptions(instance_id="inst", report_id="r1", rule_id=""), "rule_id"),
        ],
    )
    async def test_empty_rejected(self, reports_service, mock_server, options, field):
        """Empty path parameters are rejected before any request."""
        method = (
            reports_service.get_report_rule
            if isinstance(options, GetReportRuleOptions)
            else reports_service.get_report
        )
        with pytest.raises(ValidationError, match=f"{field} must not be empty"):
            await method(options)
        assert mock_server.requests == []

    async def test_missing_rejected(self, reports_service, mock_server):
        """A None path parameter is reported as required."""
        with pytest.raises(ValidationError, match="GetReportTagsOptions.report_id is required"):
            await reports_service.get_report_tags(GetReportTagsOptions(report_id=None))
        assert mock_server.requests == []


class TestGetReportEvaluation:
    """Tests for the CSV download."""

    async def test_stream(self, reports_service, mock_server):
        """The body is handed back unread as a ResponseStream."""
        mock_server.add(
            200,
            content=b"control_id,status\nc1,pass\n",
            headers={"Content-Type": CSV_MIME},
        )

        response = await reports_service.get_report_evaluation(
            GetReportEvaluationOptions(instance_id="inst", report_id="r1")
        )

        sent = mock_server.last_request
        assert str(sent.url) == f"{BASE}/r1/download"
        assert sent.headers["Accept"] == CSV_MIME
        stream = response.get_result()
        assert isinstance(stream, ResponseStream)
        assert stream.content_type == CSV_MIME
        async with stream:
            assert await stream.aread() == b"control_id,status\nc1,pass\n"

    async def test_error_status(self, reports_service, mock_server):
        """Errors on a streamed operation still raise HttpStatusError."""
        mock_server.add(404, json_body={"errors": [{"message": "report not found"}]})
        with pytest.raises(HttpStatusError) as exc_info:
            await reports_service.get_report_evaluation(
                GetReportEvaluationOptions(instance_id="inst", report_id="missing")
            )
        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "report not found"


class TestDecoding:
    """Tests for malformed responses."""

    async def test_page_missing_envelope(self, reports_service, mock_server):
        """A page without total_count is a DecodeError naming the operation."""
        mock_server.add(200, json_body={"limit": 50})
        with pytest.raises(DecodeError, match="ListReports: required property 'total_count'"):
            await reports_service.list_reports(ListReportsOptions(instance_id="inst"))

    async def test_empty_body(self, reports_service, mock_server):
        """A 2xx with no body yields no result."""
        mock_server.add(200, content=b"")
        response = await reports_service.get_report(
            GetReportOptions(instance_id="inst", report_id="r1")
        )
        assert response.get_result() is None
