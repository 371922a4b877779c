# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Results/Reports Service API V3.

Read-only access to the compliance reports of an SCC instance: latest
reports, report listings with pagination, summaries, controls, rules,
evaluations, resources, tags and violation drift, plus a CSV download of
all evaluations of a report.

Usage:
    >>> async with ResultsReportsApiV3(IamAuthenticator(apikey="...")) as service:
    ...     pager = service.new_reports_pager(ListReportsOptions(instance_id="..."))
    ...     async for report in pager:
    ...         print(report.id, report.type)
"""

from __future__ import annotations

from typing import ClassVar

from ..core.context import RequestContext
from ..core.response import DetailedResponse, ResponseStream
from ..core.service import BaseService
from ..core.validation import validate_options
from .models import (
    EvaluationPage,
    GetLatestReportsResponse,
    GetProfilesResponse,
    GetReportControlsResponse,
    GetReportViolationsDriftResult,
    GetScopesResponse,
    GetTagsResponse,
    Report,
    ReportPage,
    ReportSummary,
    ResourcePage,
    Rule,
)
from .options import (
    GetLatestReportsOptions,
    GetReportControlsOptions,
    GetReportEvaluationOptions,
    GetReportOptions,
    GetReportRuleOptions,
    GetReportSummaryOptions,
    GetReportTagsOptions,
    GetReportViolationsDriftOptions,
    GetReportsProfilesOptions,
    GetReportsScopesOptions,
    ListReportEvaluationsOptions,
    ListReportResourcesOptions,
    ListReportsOptions,
)
from .pagers import ReportEvaluationsPager, ReportResourcesPager, ReportsPager

CSV_MIME = "application/csv"

REPORTS_PATH = "/instances/{instance_id}/v3/reports"
REPORT_PATH = REPORTS_PATH + "/{report_id}"


class ResultsReportsApiV3(BaseService):
    """Client for the SCC Results/Reports Service."""

    DEFAULT_SERVICE_URL: ClassVar[str] = "https://us-south.compliance.cloud.ibm.com"
    DEFAULT_SERVICE_NAME: ClassVar[str] = "results_reports_api"
    SERVICE_VERSION: ClassVar[str] = "V3"
    PARAMETERIZED_SERVICE_URL: ClassVar[str] = "https://{environment}.cloud.ibm.com"
    DEFAULT_URL_VARIABLES: ClassVar[dict[str, str]] = {
        "environment": "us-south.compliance",
    }

    # =========================================================================
    # Reports
    # =========================================================================

    async def get_latest_reports(
        self,
        options: GetLatestReportsOptions | None,
        *,
        context: RequestContext | None = None,
    ) -> DetailedResponse[GetLatestReportsResponse]:
        """Retrieve the latest reports of each attachment with aggregate statistics."""
        options = validate_options(options)
        return await self._invoke(
            "GetLatestReports",
            "GET",
            REPORTS_PATH + "/latest",
            path_params={"instance_id": options.instance_id},
            query={"home_account_id": options.home_account_id, "sort": options.sort},
            headers=options.headers,
            correlation_id=options.x_correlation_id,
            decoder=GetLatestReportsResponse.from_dict,
            context=context,
        )

    async def list_reports(
        self,
        options: ListReportsOptions | None,
        *,
        context: RequestContext | None = None,
    ) -> DetailedResponse[ReportPage]:
        """
        Retrieve one page of reports.

        Use new_reports_pager() to walk all pages.
        """
        options = validate_options(options)
        return await self._invoke(
            "ListReports",
            "GET",
            REPORTS_PATH,
            path_params={"instance_id": options.instance_id},
            query={
                "home_account_id": options.home_account_id,
                "attachment_id": options.attachment_id,
                "group_id": options.group_id,
                "profile_id": options.profile_id,
                "scope_id": options.scope_id,
                "type": options.type,
                "start": options.start,
                "limit": options.limit,
                "sort": options.sort,
            },
            headers=options.headers,
            correlation_id=options.x_correlation_id,
            decoder=ReportPage.from_dict,
            context=context,
        )

    async def get_reports_profiles(
        self,
        options: GetReportsProfilesOptions | None,
        *,
        context: RequestContext | None = None,
    ) -> DetailedResponse[GetProfilesResponse]:
        options = validate_options(options)
        return await self._invoke(
            "GetReportsProfiles",
            "GET",
            REPORTS_PATH + "/profiles",
            path_params={"instance_id": options.instance_id},
            query={
                "home_account_id": options.home_account_id,
                "report_id": options.report_id,
            },
            headers=options.headers,
            correlation_id=options.x_correlation_id,
            decoder=GetProfilesResponse.from_dict,
            context=context,
        )

    async def get_reports_scopes(
        self,
        options: GetReportsScopesOptions | None,
        *,
        context: RequestContext | None = None,
    ) -> DetailedResponse[GetScopesResponse]:
        options = validate_options(options)
        return await self._invoke(
            "GetReportsScopes",
            "GET",
            REPORTS_PATH + "/scopes",
            path_params={"instance_id": options.instance_id},
            query={"home_account_id": options.home_account_id},
            headers=options.headers,
            correlation_id=options.x_correlation_id,
            decoder=GetScopesResponse.from_dict,
            context=context,
        )

    async def get_report(
        self,
        options: GetReportOptions | None,
        *,
        context: RequestContext | None = None,
    ) -> DetailedResponse[Report]:
        options = validate_options(options)
        return await self._invoke(
            "GetReport",
            "GET",
            REPORT_PATH,
            path_params={"instance_id": options.instance_id, "report_id": options.report_id},
            headers=options.headers,
            correlation_id=options.x_correlation_id,
            decoder=Report.from_dict,
            context=context,
        )

    async def get_report_summary(
        self,
        options: GetReportSummaryOptions | None,
        *,
        context: RequestContext | None = None,
    ) -> DetailedResponse[ReportSummary]:
        options = validate_options(options)
        return await self._invoke(
            "GetReportSummary",
            "GET",
            REPORT_PATH + "/summary",
            path_params={"instance_id": options.instance_id, "report_id": options.report_id},
            headers=options.headers,
            correlation_id=options.x_correlation_id,
            decoder=ReportSummary.from_dict,
            context=context,
        )

    async def get_report_evaluation(
        self,
        options: GetReportEvaluationOptions | None,
        *,
        context: RequestContext | None = None,
    ) -> DetailedResponse[ResponseStream]:
        """
        Download all evaluations of a report as CSV.

        The result is an unread ResponseStream (or None for an empty body)
        which the caller must close.

        Usage:
            >>> response = await service.get_report_evaluation(options)
            >>> async with response.get_result() as stream:
            ...     csv_bytes = await stream.aread()
        """
        options = validate_options(options)
        return await self._invoke(
            "GetReportEvaluation",
            "GET",
            REPORT_PATH + "/download",
            path_params={"instance_id": options.instance_id, "report_id": options.report_id},
            headers=options.headers,
            correlation_id=options.x_correlation_id,
            accept=CSV_MIME,
            stream=True,
            context=context,
        )

    async def get_report_controls(
        self,
        options: GetReportControlsOptions | None,
        *,
        context: RequestContext | None = None,
    ) -> DetailedResponse[GetReportControlsResponse]:
        options = validate_options(options)
        return await self._invoke(
            "GetReportControls",
            "GET",
            REPORT_PATH + "/controls",
            path_params={"instance_id": options.instance_id, "report_id": options.report_id},
            query={
                "control_id": options.control_id,
                "control_name": options.control_name,
                "control_description": options.control_description,
                "control_category": options.control_category,
                "status": options.status,
                "sort": options.sort,
            },
            headers=options.headers,
            correlation_id=options.x_correlation_id,
            decoder=GetReportControlsResponse.from_dict,
            context=context,
        )

    async def get_report_rule(
        self,
        options: GetReportRuleOptions | None,
        *,
        context: RequestContext | None = None,
    ) -> DetailedResponse[Rule]:
        options = validate_options(options)
        return await self._invoke(
            "GetReportRule",
            "GET",
            REPORT_PATH + "/rules/{rule_id}",
            path_params={
                "instance_id": options.instance_id,
                "report_id": options.report_id,
                "rule_id": options.rule_id,
            },
            headers=options.headers,
            correlation_id=options.x_correlation_id,
            decoder=Rule.from_dict,
            context=context,
        )

    async def list_report_evaluations(
        self,
        options: ListReportEvaluationsOptions | None,
        *,
        context: RequestContext | None = None,
    ) -> DetailedResponse[EvaluationPage]:
        """Retrieve one page of evaluations; see new_report_evaluations_pager()."""
        options = validate_options(options)
        return await self._invoke(
            "ListReportEvaluations",
            "GET",
            REPORT_PATH + "/evaluations",
            path_params={"instance_id": options.instance_id, "report_id": options.report_id},
            query={
                "assessment_id": options.assessment_id,
                "component_id": options.component_id,
                "target_id": options.target_id,
                "target_name": options.target_name,
                "status": options.status,
                "start": options.start,
                "limit": options.limit,
            },
            headers=options.headers,
            correlation_id=options.x_correlation_id,
            decoder=EvaluationPage.from_dict,
            context=context,
        )

    async def list_report_resources(
        self,
        options: ListReportResourcesOptions | None,
        *,
        context: RequestContext | None = None,
    ) -> DetailedResponse[ResourcePage]:
        """Retrieve one page of resources; see new_report_resources_pager()."""
        options = validate_options(options)
        return await self._invoke(
            "ListReportResources",
            "GET",
            REPORT_PATH + "/resources",
            path_params={"instance_id": options.instance_id, "report_id": options.report_id},
            query={
                "id": options.id,
                "resource_name": options.resource_name,
                "account_id": options.account_id,
                "component_id": options.component_id,
                "status": options.status,
                "start": options.start,
                "limit": options.limit,
            },
            headers=options.headers,
            correlation_id=options.x_correlation_id,
            decoder=ResourcePage.from_dict,
            context=context,
        )

    async def get_report_tags(
        self,
        options: GetReportTagsOptions | None,
        *,
        context: RequestContext | None = None,
    ) -> DetailedResponse[GetTagsResponse]:
        """Retrieve the tags of a report. This path is not scoped to an instance."""
        options = validate_options(options)
        return await self._invoke(
            "GetReportTags",
            "GET",
            "/v3/reports/{report_id}/tags",
            path_params={"report_id": options.report_id},
            headers=options.headers,
            correlation_id=options.x_correlation_id,
            decoder=GetTagsResponse.from_dict,
            context=context,
        )

    async def get_report_violations_drift(
        self,
        options: GetReportViolationsDriftOptions | None,
        *,
        context: RequestContext | None = None,
    ) -> DetailedResponse[GetReportViolationsDriftResult]:
        options = validate_options(options)
        return await self._invoke(
            "GetReportViolationsDrift",
            "GET",
            REPORT_PATH + "/violations_drift",
            path_params={"instance_id": options.instance_id, "report_id": options.report_id},
            query={"scan_time_duration": options.scan_time_duration},
            headers=options.headers,
            correlation_id=options.x_correlation_id,
            decoder=GetReportViolationsDriftResult.from_dict,
            context=context,
        )

    # =========================================================================
    # Pagers
    # =========================================================================

    def new_reports_pager(self, options: ListReportsOptions | None) -> ReportsPager:
        return ReportsPager(self, options)

    def new_report_evaluations_pager(
        self, options: ListReportEvaluationsOptions | None
    ) -> ReportEvaluationsPager:
        return ReportEvaluationsPager(self, options)

    def new_report_resources_pager(
        self, options: ListReportResourcesOptions | None
    ) -> ReportResourcesPager:
        return ReportResourcesPager(self, options)


__all__ = ["CSV_MIME", "ResultsReportsApiV3"]
