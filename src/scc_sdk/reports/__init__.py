# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Results/Reports Service API V3: compliance reports, evaluations and resources."""

from .models import (
    Account,
    Assessment,
    Attachment,
    ComplianceScore,
    ComplianceStats,
    ComplianceStatus,
    ControlSpecificationWithStats,
    ControlWithStats,
    EvalDetails,
    EvalStats,
    Evaluation,
    EvaluationPage,
    EvaluationStatus,
    GetLatestReportsResponse,
    GetProfilesResponse,
    GetReportControlsResponse,
    GetReportViolationsDriftResult,
    GetScopesResponse,
    GetTagsResponse,
    PageHRef,
    Parameter,
    Profile,
    Property,
    Report,
    ReportPage,
    ReportSummary,
    ReportType,
    ReportViolationDataPoint,
    Resource,
    ResourcePage,
    ResourceSummary,
    ResourceSummaryItem,
    Rule,
    Scope,
    Tags,
    Target,
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
from .service import CSV_MIME, ResultsReportsApiV3

__all__ = [
    "CSV_MIME",
    "Account",
    "Assessment",
    "Attachment",
    "ComplianceScore",
    "ComplianceStats",
    "ComplianceStatus",
    "ControlSpecificationWithStats",
    "ControlWithStats",
    "EvalDetails",
    "EvalStats",
    "Evaluation",
    "EvaluationPage",
    "EvaluationStatus",
    "GetLatestReportsOptions",
    "GetLatestReportsResponse",
    "GetProfilesResponse",
    "GetReportControlsOptions",
    "GetReportControlsResponse",
    "GetReportEvaluationOptions",
    "GetReportOptions",
    "GetReportRuleOptions",
    "GetReportSummaryOptions",
    "GetReportTagsOptions",
    "GetReportViolationsDriftOptions",
    "GetReportViolationsDriftResult",
    "GetReportsProfilesOptions",
    "GetReportsScopesOptions",
    "GetScopesResponse",
    "GetTagsResponse",
    "ListReportEvaluationsOptions",
    "ListReportResourcesOptions",
    "ListReportsOptions",
    "PageHRef",
    "Parameter",
    "Profile",
    "Property",
    "Report",
    "ReportEvaluationsPager",
    "ReportPage",
    "ReportResourcesPager",
    "ReportSummary",
    "ReportType",
    "ReportViolationDataPoint",
    "ReportsPager",
    "Resource",
    "ResourcePage",
    "ResourceSummary",
    "ResourceSummaryItem",
    "ResultsReportsApiV3",
    "Rule",
    "Scope",
    "Tags",
    "Target",
]
