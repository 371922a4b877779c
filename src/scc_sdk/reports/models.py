# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Models of the Results/Reports Service.

Every model is a dataclass with a ``from_dict`` decoder and a ``to_dict``
encoder. All fields are optional except on the page envelopes, which
require ``total_count`` and ``limit``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, cast

from typing_extensions import Self

from ..core.codec import (
    JsonObject,
    compact,
    get_any,
    get_datetime,
    get_enum,
    get_int,
    get_model,
    get_model_list,
    get_str,
    get_str_list,
    require_object,
)
from ..core.pager import get_query_param

# =============================================================================
# Enums
# =============================================================================


class ComplianceStatus(str, Enum):
    """Compliance status of a control, resource or report."""

    COMPLIANT = "compliant"
    NOT_COMPLIANT = "not_compliant"
    UNABLE_TO_PERFORM = "unable_to_perform"
    USER_EVALUATION_REQUIRED = "user_evaluation_required"


class EvaluationStatus(str, Enum):
    """Outcome of a single evaluation."""

    PASS = "pass"
    FAILURE = "failure"
    ERROR = "error"
    SKIPPED = "skipped"


class ReportType(str, Enum):
    ONDEMAND = "ondemand"
    SCHEDULED = "scheduled"


# =============================================================================
# Small reference models
# =============================================================================


@dataclass
class Account:
    """The account that is associated with a report."""

    id: str | None = None
    name: str | None = None
    type: str | None = None

    @classmethod
    def from_dict(cls, data: JsonObject) -> Self:
        data = require_object(data, cls.__name__)
        return cls(
            id=get_str(data, "id"),
            name=get_str(data, "name"),
            type=get_str(data, "type"),
        )

    def to_dict(self) -> dict[str, Any]:
        return compact({"id": self.id, "name": self.name, "type": self.type})


@dataclass
class Attachment:
    """The attachment that is associated with a report."""

    id: str | None = None

    @classmethod
    def from_dict(cls, data: JsonObject) -> Self:
        data = require_object(data, cls.__name__)
        return cls(id=get_str(data, "id"))

    def to_dict(self) -> dict[str, Any]:
        return compact({"id": self.id})


@dataclass
class Profile:
    """The profile a report was run against."""

    id: str | None = None
    name: str | None = None
    version: str | None = None

    @classmethod
    def from_dict(cls, data: JsonObject) -> Self:
        data = require_object(data, cls.__name__)
        return cls(
            id=get_str(data, "id"),
            name=get_str(data, "name"),
            version=get_str(data, "version"),
        )

    def to_dict(self) -> dict[str, Any]:
        return compact({"id": self.id, "name": self.name, "version": self.version})


@dataclass
class Scope:
    id: str | None = None
    type: str | None = None

    @classmethod
    def from_dict(cls, data: JsonObject) -> Self:
        data = require_object(data, cls.__name__)
        return cls(id=get_str(data, "id"), type=get_str(data, "type"))

    def to_dict(self) -> dict[str, Any]:
        return compact({"id": self.id, "type": self.type})


@dataclass
class Tags:
    """User, access and service tags of a resource or report."""

    user: list[str] | None = None
    access: list[str] | None = None
    service: list[str] | None = None

    @classmethod
    def from_dict(cls, data: JsonObject) -> Self:
        data = require_object(data, cls.__name__)
        return cls(
            user=get_str_list(data, "user"),
            access=get_str_list(data, "access"),
            service=get_str_list(data, "service"),
        )

    def to_dict(self) -> dict[str, Any]:
        return compact({"user": self.user, "access": self.access, "service": self.service})


@dataclass
class Target:
    """The resource an evaluation ran against."""

    id: str | None = None
    account_id: str | None = None
    resource_crn: str | None = None
    resource_name: str | None = None
    service_name: str | None = None

    @classmethod
    def from_dict(cls, data: JsonObject) -> Self:
        data = require_object(data, cls.__name__)
        return cls(
            id=get_str(data, "id"),
            account_id=get_str(data, "account_id"),
            resource_crn=get_str(data, "resource_crn"),
            resource_name=get_str(data, "resource_name"),
            service_name=get_str(data, "service_name"),
        )

    def to_dict(self) -> dict[str, Any]:
        return compact(
            {
                "id": self.id,
                "account_id": self.account_id,
                "resource_crn": self.resource_crn,
                "resource_name": self.resource_name,
                "service_name": self.service_name,
            }
        )


@dataclass
class PageHRef:
    """A link to a page of results."""

    href: str

    @classmethod
    def from_dict(cls, data: JsonObject) -> Self:
        data = require_object(data, cls.__name__)
        return cls(href=cast(str, get_str(data, "href", required=True)))

    def to_dict(self) -> dict[str, Any]:
        return {"href": self.href}


# =============================================================================
# Assessments and evaluations
# =============================================================================


@dataclass
class Parameter:
    """A parameter of an assessment; ``parameter_value`` is any JSON value."""

    parameter_name: str | None = None
    parameter_display_name: str | None = None
    parameter_type: str | None = None
    parameter_value: Any = None

    @classmethod
    def from_dict(cls, data: JsonObject) -> Self:
        data = require_object(data, cls.__name__)
        return cls(
            parameter_name=get_str(data, "parameter_name"),
            parameter_display_name=get_str(data, "parameter_display_name"),
            parameter_type=get_str(data, "parameter_type"),
            parameter_value=get_any(data, "parameter_value"),
        )

    def to_dict(self) -> dict[str, Any]:
        return compact(
            {
                "parameter_name": self.parameter_name,
                "parameter_display_name": self.parameter_display_name,
                "parameter_type": self.parameter_type,
                "parameter_value": self.parameter_value,
            }
        )


@dataclass
class Assessment:
    assessment_id: str | None = None
    assessment_type: str | None = None
    assessment_method: str | None = None
    assessment_description: str | None = None
    parameter_count: int | None = None
    parameters: list[Parameter] | None = None

    @classmethod
    def from_dict(cls, data: JsonObject) -> Self:
        data = require_object(data, cls.__name__)
        return cls(
            assessment_id=get_str(data, "assessment_id"),
            assessment_type=get_str(data, "assessment_type"),
            assessment_method=get_str(data, "assessment_method"),
            assessment_description=get_str(data, "assessment_description"),
            parameter_count=get_int(data, "parameter_count"),
            parameters=get_model_list(data, "parameters", Parameter.from_dict),
        )

    def to_dict(self) -> dict[str, Any]:
        return compact(
            {
                "assessment_id": self.assessment_id,
                "assessment_type": self.assessment_type,
                "assessment_method": self.assessment_method,
                "assessment_description": self.assessment_description,
                "parameter_count": self.parameter_count,
                "parameters": self.parameters,
            }
        )


@dataclass
class Property:
    """One checked property of an evaluation; values are any JSON value."""

    property: str | None = None
    property_description: str | None = None
    operator: str | None = None
    expected_value: Any = None
    found_value: Any = None

    @classmethod
    def from_dict(cls, data: JsonObject) -> Self:
        data = require_object(data, cls.__name__)
        return cls(
            property=get_str(data, "property"),
            property_description=get_str(data, "property_description"),
            operator=get_str(data, "operator"),
            expected_value=get_any(data, "expected_value"),
            found_value=get_any(data, "found_value"),
        )

    def to_dict(self) -> dict[str, Any]:
        return compact(
            {
                "property": self.property,
                "property_description": self.property_description,
                "operator": self.operator,
                "expected_value": self.expected_value,
                "found_value": self.found_value,
            }
        )


@dataclass
class EvalDetails:
    properties: list[Property] | None = None

    @classmethod
    def from_dict(cls, data: JsonObject) -> Self:
        data = require_object(data, cls.__name__)
        return cls(properties=get_model_list(data, "properties", Property.from_dict))

    def to_dict(self) -> dict[str, Any]:
        return compact({"properties": self.properties})


@dataclass
class Evaluation:
    """The result of one assessment against one target."""

    home_account_id: str | None = None
    report_id: str | None = None
    control_id: str | None = None
    component_id: str | None = None
    assessment: Assessment | None = None
    evaluate_time: str | None = None
    target: Target | None = None
    status: EvaluationStatus | str | None = None
    reason: str | None = None
    details: EvalDetails | None = None

    @classmethod
    def from_dict(cls, data: JsonObject) -> Self:
        data = require_object(data, cls.__name__)
        return cls(
            home_account_id=get_str(data, "home_account_id"),
            report_id=get_str(data, "report_id"),
            control_id=get_str(data, "control_id"),
            component_id=get_str(data, "component_id"),
            assessment=get_model(data, "assessment", Assessment.from_dict),
            evaluate_time=get_str(data, "evaluate_time"),
            target=get_model(data, "target", Target.from_dict),
            status=get_enum(data, "status", EvaluationStatus),
            reason=get_str(data, "reason"),
            details=get_model(data, "details", EvalDetails.from_dict),
        )

    def to_dict(self) -> dict[str, Any]:
        return compact(
            {
                "home_account_id": self.home_account_id,
                "report_id": self.report_id,
                "control_id": self.control_id,
                "component_id": self.component_id,
                "assessment": self.assessment,
                "evaluate_time": self.evaluate_time,
                "target": self.target,
                "status": self.status,
                "reason": self.reason,
                "details": self.details,
            }
        )


# =============================================================================
# Statistics
# =============================================================================


def _compliance_counts(data: JsonObject) -> dict[str, Any]:
    return {
        "status": get_enum(data, "status", ComplianceStatus),
        "total_count": get_int(data, "total_count"),
        "compliant_count": get_int(data, "compliant_count"),
        "not_compliant_count": get_int(data, "not_compliant_count"),
        "unable_to_perform_count": get_int(data, "unable_to_perform_count"),
        "user_evaluation_required_count": get_int(data, "user_evaluation_required_count"),
    }


def _evaluation_counts(data: JsonObject) -> dict[str, Any]:
    return {
        "total_count": get_int(data, "total_count"),
        "pass_count": get_int(data, "pass_count"),
        "failure_count": get_int(data, "failure_count"),
        "error_count": get_int(data, "error_count"),
        "completed_count": get_int(data, "completed_count"),
    }


@dataclass
class ComplianceScore:
    """The compliance score of a report."""

    passed: int | None = None
    total_count: int | None = None
    percent: int | None = None

    @classmethod
    def from_dict(cls, data: JsonObject) -> Self:
        data = require_object(data, cls.__name__)
        return cls(
            passed=get_int(data, "passed"),
            total_count=get_int(data, "total_count"),
            percent=get_int(data, "percent"),
        )

    def to_dict(self) -> dict[str, Any]:
        return compact(
            {"passed": self.passed, "total_count": self.total_count, "percent": self.percent}
        )


@dataclass
class ComplianceStats:
    """Control counts by compliance status."""

    status: ComplianceStatus | str | None = None
    total_count: int | None = None
    compliant_count: int | None = None
    not_compliant_count: int | None = None
    unable_to_perform_count: int | None = None
    user_evaluation_required_count: int | None = None

    @classmethod
    def from_dict(cls, data: JsonObject) -> Self:
        data = require_object(data, cls.__name__)
        return cls(**_compliance_counts(data))

    def to_dict(self) -> dict[str, Any]:
        return compact(
            {
                "status": self.status,
                "total_count": self.total_count,
                "compliant_count": self.compliant_count,
                "not_compliant_count": self.not_compliant_count,
                "unable_to_perform_count": self.unable_to_perform_count,
                "user_evaluation_required_count": self.user_evaluation_required_count,
            }
        )


@dataclass
class EvalStats:
    """Evaluation counts by outcome."""

    status: ComplianceStatus | str | None = None
    total_count: int | None = None
    pass_count: int | None = None
    failure_count: int | None = None
    error_count: int | None = None
    completed_count: int | None = None

    @classmethod
    def from_dict(cls, data: JsonObject) -> Self:
        data = require_object(data, cls.__name__)
        return cls(
            status=get_enum(data, "status", ComplianceStatus),
            **_evaluation_counts(data),
        )

    def to_dict(self) -> dict[str, Any]:
        return compact(
            {
                "status": self.status,
                "total_count": self.total_count,
                "pass_count": self.pass_count,
                "failure_count": self.failure_count,
                "error_count": self.error_count,
                "completed_count": self.completed_count,
            }
        )


@dataclass
class ResourceSummaryItem:
    """One of the top failing resources in a report summary."""

    name: str | None = None
    id: str | None = None
    service: str | None = None
    tags: Tags | None = None
    account: str | None = None
    status: ComplianceStatus | str | None = None
    total_count: int | None = None
    pass_count: int | None = None
    failure_count: int | None = None
    error_count: int | None = None
    completed_count: int | None = None

    @classmethod
    def from_dict(cls, data: JsonObject) -> Self:
        data = require_object(data, cls.__name__)
        return cls(
            name=get_str(data, "name"),
            id=get_str(data, "id"),
            service=get_str(data, "service"),
            tags=get_model(data, "tags", Tags.from_dict),
            account=get_str(data, "account"),
            status=get_enum(data, "status", ComplianceStatus),
            **_evaluation_counts(data),
        )

    def to_dict(self) -> dict[str, Any]:
        return compact(
            {
                "name": self.name,
                "id": self.id,
                "service": self.service,
                "tags": self.tags,
                "account": self.account,
                "status": self.status,
                "total_count": self.total_count,
                "pass_count": self.pass_count,
                "failure_count": self.failure_count,
                "error_count": self.error_count,
                "completed_count": self.completed_count,
            }
        )


@dataclass
class ResourceSummary:
    """Resource counts by compliance status and the top failing resources."""

    status: ComplianceStatus | str | None = None
    total_count: int | None = None
    compliant_count: int | None = None
    not_compliant_count: int | None = None
    unable_to_perform_count: int | None = None
    user_evaluation_required_count: int | None = None
    top_failed: list[ResourceSummaryItem] | None = None

    @classmethod
    def from_dict(cls, data: JsonObject) -> Self:
        data = require_object(data, cls.__name__)
        return cls(
            **_compliance_counts(data),
            top_failed=get_model_list(data, "top_failed", ResourceSummaryItem.from_dict),
        )

    def to_dict(self) -> dict[str, Any]:
        return compact(
            {
                "status": self.status,
                "total_count": self.total_count,
                "compliant_count": self.compliant_count,
                "not_compliant_count": self.not_compliant_count,
                "unable_to_perform_count": self.unable_to_perform_count,
                "user_evaluation_required_count": self.user_evaluation_required_count,
                "top_failed": self.top_failed,
            }
        )


# =============================================================================
# Controls
# =============================================================================


@dataclass
class ControlSpecificationWithStats:
    """A control specification with its assessments and compliance counts."""

    id: str | None = None
    component_id: str | None = None
    description: str | None = None
    environment: str | None = None
    responsibility: str | None = None
    assessments: list[Assessment] | None = None
    status: ComplianceStatus | str | None = None
    total_count: int | None = None
    compliant_count: int | None = None
    not_compliant_count: int | None = None
    unable_to_perform_count: int | None = None
    user_evaluation_required_count: int | None = None

    @classmethod
    def from_dict(cls, data: JsonObject) -> Self:
        data = require_object(data, cls.__name__)
        return cls(
            id=get_str(data, "id"),
            component_id=get_str(data, "component_id"),
            description=get_str(data, "description"),
            environment=get_str(data, "environment"),
            responsibility=get_str(data, "responsibility"),
            assessments=get_model_list(data, "assessments", Assessment.from_dict),
            **_compliance_counts(data),
        )

    def to_dict(self) -> dict[str, Any]:
        return compact(
            {
                "id": self.id,
                "component_id": self.component_id,
                "description": self.description,
                "environment": self.environment,
                "responsibility": self.responsibility,
                "assessments": self.assessments,
                "status": self.status,
                "total_count": self.total_count,
                "compliant_count": self.compliant_count,
                "not_compliant_count": self.not_compliant_count,
                "unable_to_perform_count": self.unable_to_perform_count,
                "user_evaluation_required_count": self.user_evaluation_required_count,
            }
        )


@dataclass
class ControlWithStats:
    """A control with its specifications and compliance counts."""

    id: str | None = None
    control_library_id: str | None = None
    control_library_version: str | None = None
    control_name: str | None = None
    control_description: str | None = None
    control_category: str | None = None
    control_path: str | None = None
    control_specifications: list[ControlSpecificationWithStats] | None = None
    status: ComplianceStatus | str | None = None
    total_count: int | None = None
    compliant_count: int | None = None
    not_compliant_count: int | None = None
    unable_to_perform_count: int | None = None
    user_evaluation_required_count: int | None = None

    @classmethod
    def from_dict(cls, data: JsonObject) -> Self:
        data = require_object(data, cls.__name__)
        return cls(
            id=get_str(data, "id"),
            control_library_id=get_str(data, "control_library_id"),
            control_library_version=get_str(data, "control_library_version"),
            control_name=get_str(data, "control_name"),
            control_description=get_str(data, "control_description"),
            control_category=get_str(data, "control_category"),
            control_path=get_str(data, "control_path"),
            control_specifications=get_model_list(
                data, "control_specifications", ControlSpecificationWithStats.from_dict
            ),
            **_compliance_counts(data),
        )

    def to_dict(self) -> dict[str, Any]:
        return compact(
            {
                "id": self.id,
                "control_library_id": self.control_library_id,
                "control_library_version": self.control_library_version,
                "control_name": self.control_name,
                "control_description": self.control_description,
                "control_category": self.control_category,
                "control_path": self.control_path,
                "control_specifications": self.control_specifications,
                "status": self.status,
                "total_count": self.total_count,
                "compliant_count": self.compliant_count,
                "not_compliant_count": self.not_compliant_count,
                "unable_to_perform_count": self.unable_to_perform_count,
                "user_evaluation_required_count": self.user_evaluation_required_count,
            }
        )


@dataclass
class GetReportControlsResponse:
    """The controls of a report with overall compliance counts."""

    status: ComplianceStatus | str | None = None
    total_count: int | None = None
    compliant_count: int | None = None
    not_compliant_count: int | None = None
    unable_to_perform_count: int | None = None
    user_evaluation_required_count: int | None = None
    home_account_id: str | None = None
    report_id: str | None = None
    controls: list[ControlWithStats] | None = None

    @classmethod
    def from_dict(cls, data: JsonObject) -> Self:
        data = require_object(data, cls.__name__)
        return cls(
            **_compliance_counts(data),
            home_account_id=get_str(data, "home_account_id"),
            report_id=get_str(data, "report_id"),
            controls=get_model_list(data, "controls", ControlWithStats.from_dict),
        )

    def to_dict(self) -> dict[str, Any]:
        return compact(
            {
                "status": self.status,
                "total_count": self.total_count,
                "compliant_count": self.compliant_count,
                "not_compliant_count": self.not_compliant_count,
                "unable_to_perform_count": self.unable_to_perform_count,
                "user_evaluation_required_count": self.user_evaluation_required_count,
                "home_account_id": self.home_account_id,
                "report_id": self.report_id,
                "controls": self.controls,
            }
        )


# =============================================================================
# Reports, resources and rules
# =============================================================================


@dataclass
class Report:
    """A compliance report produced by a scan."""

    id: str | None = None
    group_id: str | None = None
    created_on: datetime | None = None
    scan_time: datetime | None = None
    type: ReportType | str | None = None
    cos_object: str | None = None
    account: Account | None = None
    profile: Profile | None = None
    scope: Scope | None = None
    attachment: Attachment | None = None

    @classmethod
    def from_dict(cls, data: JsonObject) -> Self:
        data = require_object(data, cls.__name__)
        return cls(
            id=get_str(data, "id"),
            group_id=get_str(data, "group_id"),
            created_on=get_datetime(data, "created_on"),
            scan_time=get_datetime(data, "scan_time"),
            type=get_enum(data, "type", ReportType),
            cos_object=get_str(data, "cos_object"),
            account=get_model(data, "account", Account.from_dict),
            profile=get_model(data, "profile", Profile.from_dict),
            scope=get_model(data, "scope", Scope.from_dict),
            attachment=get_model(data, "attachment", Attachment.from_dict),
        )

    def to_dict(self) -> dict[str, Any]:
        return compact(
            {
                "id": self.id,
                "group_id": self.group_id,
                "created_on": self.created_on,
                "scan_time": self.scan_time,
                "type": self.type,
                "cos_object": self.cos_object,
                "account": self.account,
                "profile": self.profile,
                "scope": self.scope,
                "attachment": self.attachment,
            }
        )


@dataclass
class ReportSummary:
    """Scores and counts of one report."""

    report_id: str | None = None
    account: Account | None = None
    score: ComplianceScore | None = None
    controls: ComplianceStats | None = None
    evaluations: EvalStats | None = None
    resources: ResourceSummary | None = None

    @classmethod
    def from_dict(cls, data: JsonObject) -> Self:
        data = require_object(data, cls.__name__)
        return cls(
            report_id=get_str(data, "report_id"),
            account=get_model(data, "account", Account.from_dict),
            score=get_model(data, "score", ComplianceScore.from_dict),
            controls=get_model(data, "controls", ComplianceStats.from_dict),
            evaluations=get_model(data, "evaluations", EvalStats.from_dict),
            resources=get_model(data, "resources", ResourceSummary.from_dict),
        )

    def to_dict(self) -> dict[str, Any]:
        return compact(
            {
                "report_id": self.report_id,
                "account": self.account,
                "score": self.score,
                "controls": self.controls,
                "evaluations": self.evaluations,
                "resources": self.resources,
            }
        )


@dataclass
class Resource:
    """A scanned resource with its evaluation counts."""

    report_id: str | None = None
    id: str | None = None
    resource_name: str | None = None
    component_id: str | None = None
    environment: str | None = None
    account: Account | None = None
    status: ComplianceStatus | str | None = None
    total_count: int | None = None
    pass_count: int | None = None
    failure_count: int | None = None
    error_count: int | None = None
    completed_count: int | None = None

    @classmethod
    def from_dict(cls, data: JsonObject) -> Self:
        data = require_object(data, cls.__name__)
        return cls(
            report_id=get_str(data, "report_id"),
            id=get_str(data, "id"),
            resource_name=get_str(data, "resource_name"),
            component_id=get_str(data, "component_id"),
            environment=get_str(data, "environment"),
            account=get_model(data, "account", Account.from_dict),
            status=get_enum(data, "status", ComplianceStatus),
            **_evaluation_counts(data),
        )

    def to_dict(self) -> dict[str, Any]:
        return compact(
            {
                "report_id": self.report_id,
                "id": self.id,
                "resource_name": self.resource_name,
                "component_id": self.component_id,
                "environment": self.environment,
                "account": self.account,
                "status": self.status,
                "total_count": self.total_count,
                "pass_count": self.pass_count,
                "failure_count": self.failure_count,
                "error_count": self.error_count,
                "completed_count": self.completed_count,
            }
        )


@dataclass
class Rule:
    """A rule evaluated by a report."""

    id: str | None = None
    type: str | None = None
    description: str | None = None
    version: str | None = None
    account_id: str | None = None
    creation_date: datetime | None = None
    created_by: str | None = None
    modification_date: datetime | None = None
    modified_by: str | None = None
    labels: list[str] | None = None

    @classmethod
    def from_dict(cls, data: JsonObject) -> Self:
        data = require_object(data, cls.__name__)
        return cls(
            id=get_str(data, "id"),
            type=get_str(data, "type"),
            description=get_str(data, "description"),
            version=get_str(data, "version"),
            account_id=get_str(data, "account_id"),
            creation_date=get_datetime(data, "creation_date"),
            created_by=get_str(data, "created_by"),
            modification_date=get_datetime(data, "modification_date"),
            modified_by=get_str(data, "modified_by"),
            labels=get_str_list(data, "labels"),
        )

    def to_dict(self) -> dict[str, Any]:
        return compact(
            {
                "id": self.id,
                "type": self.type,
                "description": self.description,
                "version": self.version,
                "account_id": self.account_id,
                "creation_date": self.creation_date,
                "created_by": self.created_by,
                "modification_date": self.modification_date,
                "modified_by": self.modified_by,
                "labels": self.labels,
            }
        )


@dataclass
class ReportViolationDataPoint:
    report_id: str | None = None
    report_group_id: str | None = None
    scan_time: datetime | None = None
    controls: ComplianceStats | None = None

    @classmethod
    def from_dict(cls, data: JsonObject) -> Self:
        data = require_object(data, cls.__name__)
        return cls(
            report_id=get_str(data, "report_id"),
            report_group_id=get_str(data, "report_group_id"),
            scan_time=get_datetime(data, "scan_time"),
            controls=get_model(data, "controls", ComplianceStats.from_dict),
        )

    def to_dict(self) -> dict[str, Any]:
        return compact(
            {
                "report_id": self.report_id,
                "report_group_id": self.report_group_id,
                "scan_time": self.scan_time,
                "controls": self.controls,
            }
        )


# =============================================================================
# Operation results
# =============================================================================


@dataclass
class GetLatestReportsResponse:
    """The latest reports with aggregate statistics."""

    home_account_id: str | None = None
    controls_summary: ComplianceStats | None = None
    evaluations_summary: EvalStats | None = None
    score: ComplianceScore | None = None
    reports: list[Report] | None = None

    @classmethod
    def from_dict(cls, data: JsonObject) -> Self:
        data = require_object(data, cls.__name__)
        return cls(
            home_account_id=get_str(data, "home_account_id"),
            controls_summary=get_model(data, "controls_summary", ComplianceStats.from_dict),
            evaluations_summary=get_model(data, "evaluations_summary", EvalStats.from_dict),
            score=get_model(data, "score", ComplianceScore.from_dict),
            reports=get_model_list(data, "reports", Report.from_dict),
        )

    def to_dict(self) -> dict[str, Any]:
        return compact(
            {
                "home_account_id": self.home_account_id,
                "controls_summary": self.controls_summary,
                "evaluations_summary": self.evaluations_summary,
                "score": self.score,
                "reports": self.reports,
            }
        )


@dataclass
class GetProfilesResponse:
    home_account_id: str | None = None
    profiles: list[Profile] | None = None

    @classmethod
    def from_dict(cls, data: JsonObject) -> Self:
        data = require_object(data, cls.__name__)
        return cls(
            home_account_id=get_str(data, "home_account_id"),
            profiles=get_model_list(data, "profiles", Profile.from_dict),
        )

    def to_dict(self) -> dict[str, Any]:
        return compact({"home_account_id": self.home_account_id, "profiles": self.profiles})


@dataclass
class GetScopesResponse:
    home_account_id: str | None = None
    scopes: list[Scope] | None = None

    @classmethod
    def from_dict(cls, data: JsonObject) -> Self:
        data = require_object(data, cls.__name__)
        return cls(
            home_account_id=get_str(data, "home_account_id"),
            scopes=get_model_list(data, "scopes", Scope.from_dict),
        )

    def to_dict(self) -> dict[str, Any]:
        return compact({"home_account_id": self.home_account_id, "scopes": self.scopes})


@dataclass
class GetTagsResponse:
    report_id: str | None = None
    tags: Tags | None = None

    @classmethod
    def from_dict(cls, data: JsonObject) -> Self:
        data = require_object(data, cls.__name__)
        return cls(
            report_id=get_str(data, "report_id"),
            tags=get_model(data, "tags", Tags.from_dict),
        )

    def to_dict(self) -> dict[str, Any]:
        return compact({"report_id": self.report_id, "tags": self.tags})


@dataclass
class GetReportViolationsDriftResult:
    """Control compliance of the reports in a group over time."""

    home_account_id: str | None = None
    report_id: str | None = None
    data_points: list[ReportViolationDataPoint] | None = None

    @classmethod
    def from_dict(cls, data: JsonObject) -> Self:
        data = require_object(data, cls.__name__)
        return cls(
            home_account_id=get_str(data, "home_account_id"),
            report_id=get_str(data, "report_id"),
            data_points=get_model_list(
                data, "data_points", ReportViolationDataPoint.from_dict
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        return compact(
            {
                "home_account_id": self.home_account_id,
                "report_id": self.report_id,
                "data_points": self.data_points,
            }
        )


# =============================================================================
# Page envelopes
# =============================================================================


def _read_page_items(data: JsonObject, key: str, decoder: Any) -> list[Any]:
    # Some deployments return the collection under a generic "items" key
    source = key if key in data or "items" not in data else "items"
    return get_model_list(data, source, decoder) or []


@dataclass
class _PageBase:
    total_count: int
    limit: int
    first: PageHRef | None = None
    start: str | None = None
    next: PageHRef | None = None
    home_account_id: str | None = None

    @staticmethod
    def _envelope(data: JsonObject) -> dict[str, Any]:
        total_count = get_int(data, "total_count", required=True)
        limit = get_int(data, "limit", required=True)
        first = get_model(data, "first", PageHRef.from_dict)
        return {
            "total_count": total_count,
            "limit": limit,
            "first": first,
            "start": get_str(data, "start"),
            "next": get_model(data, "next", PageHRef.from_dict),
            "home_account_id": get_str(data, "home_account_id"),
        }

    def get_next_start(self) -> str | None:
        """
        Return the ``start`` cursor of the next page, or None on the last page.

        Raises:
            PaginationError: If next.href cannot be parsed
        """
        if self.next is None:
            return None
        return get_query_param(self.next.href, "start")

    def _envelope_dict(self) -> dict[str, Any]:
        return {
            "total_count": self.total_count,
            "limit": self.limit,
            "start": self.start,
            "first": self.first,
            "next": self.next,
            "home_account_id": self.home_account_id,
        }


@dataclass
class ReportPage(_PageBase):
    """One page of list_reports results."""

    reports: list[Report] = field(default_factory=list)

    @property
    def items(self) -> list[Report]:
        return self.reports

    @classmethod
    def from_dict(cls, data: JsonObject) -> Self:
        data = require_object(data, cls.__name__)
        return cls(
            **cls._envelope(data),
            reports=_read_page_items(data, "reports", Report.from_dict),
        )

    def to_dict(self) -> dict[str, Any]:
        return compact({**self._envelope_dict(), "reports": self.reports})


@dataclass
class EvaluationPage(_PageBase):
    """One page of list_report_evaluations results."""

    report_id: str | None = None
    evaluations: list[Evaluation] = field(default_factory=list)

    @property
    def items(self) -> list[Evaluation]:
        return self.evaluations

    @classmethod
    def from_dict(cls, data: JsonObject) -> Self:
        data = require_object(data, cls.__name__)
        return cls(
            **cls._envelope(data),
            report_id=get_str(data, "report_id"),
            evaluations=_read_page_items(data, "evaluations", Evaluation.from_dict),
        )

    def to_dict(self) -> dict[str, Any]:
        return compact(
            {
                **self._envelope_dict(),
                "report_id": self.report_id,
                "evaluations": self.evaluations,
            }
        )


@dataclass
class ResourcePage(_PageBase):
    """One page of list_report_resources results."""

    report_id: str | None = None
    resources: list[Resource] = field(default_factory=list)

    @property
    def items(self) -> list[Resource]:
        return self.resources

    @classmethod
    def from_dict(cls, data: JsonObject) -> Self:
        data = require_object(data, cls.__name__)
        return cls(
            **cls._envelope(data),
            report_id=get_str(data, "report_id"),
            resources=_read_page_items(data, "resources", Resource.from_dict),
        )

    def to_dict(self) -> dict[str, Any]:
        return compact(
            {
                **self._envelope_dict(),
                "report_id": self.report_id,
                "resources": self.resources,
            }
        )


__all__ = [
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
    "GetLatestReportsResponse",
    "GetProfilesResponse",
    "GetReportControlsResponse",
    "GetReportViolationsDriftResult",
    "GetScopesResponse",
    "GetTagsResponse",
    "PageHRef",
    "Parameter",
    "Profile",
    "Property",
    "Report",
    "ReportPage",
    "ReportSummary",
    "ReportType",
    "ReportViolationDataPoint",
    "Resource",
    "ResourcePage",
    "ResourceSummary",
    "ResourceSummaryItem",
    "Rule",
    "Scope",
    "Tags",
    "Target",
]
