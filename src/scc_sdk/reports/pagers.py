# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Pagers over the list operations of the Results/Reports Service."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

from ..core.context import RequestContext
from ..core.pager import BasePager
from ..exceptions import ValidationError
from .models import Evaluation, EvaluationPage, Report, ReportPage, Resource, ResourcePage
from .options import (
    ListReportEvaluationsOptions,
    ListReportResourcesOptions,
    ListReportsOptions,
)

if TYPE_CHECKING:
    from .service import ResultsReportsApiV3

T = TypeVar("T")
OptionsT = TypeVar("OptionsT")

_EMPTY_PAGE = {"total_count": 0, "limit": 0}


class _ServicePager(BasePager[OptionsT, T]):
    """A pager bound to one ResultsReportsApiV3 handle."""

    def __init__(self, client: ResultsReportsApiV3 | None, options: OptionsT | None) -> None:
        if client is None:
            raise ValidationError("client cannot be None")
        super().__init__(options)
        self.client = client


class ReportsPager(_ServicePager[ListReportsOptions, Report]):
    """Walks list_reports page by page."""

    async def _fetch_page(
        self, options: ListReportsOptions, context: RequestContext | None
    ) -> ReportPage:
        response = await self.client.list_reports(options, context=context)
        # A 2xx with an empty body ends the walk
        return response.get_result() or ReportPage.from_dict(_EMPTY_PAGE)


class ReportEvaluationsPager(_ServicePager[ListReportEvaluationsOptions, Evaluation]):
    """Walks list_report_evaluations page by page."""

    async def _fetch_page(
        self, options: ListReportEvaluationsOptions, context: RequestContext | None
    ) -> EvaluationPage:
        response = await self.client.list_report_evaluations(options, context=context)
        return response.get_result() or EvaluationPage.from_dict(_EMPTY_PAGE)


class ReportResourcesPager(_ServicePager[ListReportResourcesOptions, Resource]):
    """Walks list_report_resources page by page."""

    async def _fetch_page(
        self, options: ListReportResourcesOptions, context: RequestContext | None
    ) -> ResourcePage:
        response = await self.client.list_report_resources(options, context=context)
        return response.get_result() or ResourcePage.from_dict(_EMPTY_PAGE)


__all__ = ["ReportEvaluationsPager", "ReportResourcesPager", "ReportsPager"]
