# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Operation options of the Results/Reports Service.

Path parameters are declared with ``path_param()`` and must be non-empty;
every other field is optional and omitted from the request when None.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..core.validation import path_param
from .models import ComplianceStatus, EvaluationStatus, ReportType


@dataclass
class GetLatestReportsOptions:
    instance_id: str = path_param()
    x_correlation_id: str | None = None
    home_account_id: str | None = None
    sort: str | None = None
    headers: dict[str, str] | None = None


@dataclass
class ListReportsOptions:
    """
    Options of list_reports.

    ``start`` is the opaque cursor from the previous page's ``next.href``;
    leave it unset when using a ReportsPager.
    """

    instance_id: str = path_param()
    x_correlation_id: str | None = None
    home_account_id: str | None = None
    attachment_id: str | None = None
    group_id: str | None = None
    profile_id: str | None = None
    scope_id: str | None = None
    type: ReportType | str | None = None
    start: str | None = None
    limit: int | None = None
    sort: str | None = None
    headers: dict[str, str] | None = None


@dataclass
class GetReportsProfilesOptions:
    instance_id: str = path_param()
    x_correlation_id: str | None = None
    home_account_id: str | None = None
    report_id: str | None = None
    headers: dict[str, str] | None = None


@dataclass
class GetReportsScopesOptions:
    instance_id: str = path_param()
    x_correlation_id: str | None = None
    home_account_id: str | None = None
    headers: dict[str, str] | None = None


@dataclass
class GetReportOptions:
    instance_id: str = path_param()
    report_id: str = path_param()
    x_correlation_id: str | None = None
    headers: dict[str, str] | None = None


@dataclass
class GetReportSummaryOptions:
    instance_id: str = path_param()
    report_id: str = path_param()
    x_correlation_id: str | None = None
    headers: dict[str, str] | None = None


@dataclass
class GetReportEvaluationOptions:
    """Options of get_report_evaluation, which downloads the evaluations as CSV."""

    instance_id: str = path_param()
    report_id: str = path_param()
    x_correlation_id: str | None = None
    headers: dict[str, str] | None = None


@dataclass
class GetReportControlsOptions:
    instance_id: str = path_param()
    report_id: str = path_param()
    control_id: str | None = None
    control_name: str | None = None
    control_description: str | None = None
    control_category: str | None = None
    status: ComplianceStatus | str | None = None
    sort: str | None = None
    x_correlation_id: str | None = None
    headers: dict[str, str] | None = None


@dataclass
class GetReportRuleOptions:
    instance_id: str = path_param()
    report_id: str = path_param()
    rule_id: str = path_param()
    x_correlation_id: str | None = None
    headers: dict[str, str] | None = None


@dataclass
class ListReportEvaluationsOptions:
    """Options of list_report_evaluations; see ListReportsOptions for ``start``."""

    instance_id: str = path_param()
    report_id: str = path_param()
    assessment_id: str | None = None
    component_id: str | None = None
    target_id: str | None = None
    target_name: str | None = None
    status: EvaluationStatus | str | None = None
    start: str | None = None
    limit: int | None = None
    x_correlation_id: str | None = None
    headers: dict[str, str] | None = None


@dataclass
class ListReportResourcesOptions:
    """Options of list_report_resources; see ListReportsOptions for ``start``."""

    instance_id: str = path_param()
    report_id: str = path_param()
    id: str | None = None
    resource_name: str | None = None
    account_id: str | None = None
    component_id: str | None = None
    status: ComplianceStatus | str | None = None
    start: str | None = None
    limit: int | None = None
    x_correlation_id: str | None = None
    headers: dict[str, str] | None = None


@dataclass
class GetReportTagsOptions:
    report_id: str = path_param()
    x_correlation_id: str | None = None
    headers: dict[str, str] | None = None


@dataclass
class GetReportViolationsDriftOptions:
    instance_id: str = path_param()
    report_id: str = path_param()
    scan_time_duration: int | None = None
    x_correlation_id: str | None = None
    headers: dict[str, str] | None = None


__all__ = [
    "GetLatestReportsOptions",
    "GetReportControlsOptions",
    "GetReportEvaluationOptions",
    "GetReportOptions",
    "GetReportRuleOptions",
    "GetReportSummaryOptions",
    "GetReportTagsOptions",
    "GetReportViolationsDriftOptions",
    "GetReportsProfilesOptions",
    "GetReportsScopesOptions",
    "ListReportEvaluationsOptions",
    "ListReportResourcesOptions",
    "ListReportsOptions",
]
