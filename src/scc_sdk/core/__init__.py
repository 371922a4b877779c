# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Request pipeline shared by the SCC services.

URL resolution, request building, transport with retries and cancellation,
JSON codec, response envelope, operation dispatch and pagination.
"""

from .context import RequestContext
from .headers import get_sdk_headers
from .pager import BasePager, Page, get_query_param
from .request import PreparedRequest, RequestBuilder
from .response import DetailedResponse, ResponseStream
from .retry import RetryPolicy, is_retryable_status, parse_retry_after
from .service import BaseService
from .transport import HttpTransport
from .url import construct_service_url
from .validation import path_param, required, validate_options

__all__ = [
    "BasePager",
    "BaseService",
    "DetailedResponse",
    "HttpTransport",
    "Page",
    "PreparedRequest",
    "RequestBuilder",
    "RequestContext",
    "ResponseStream",
    "RetryPolicy",
    "construct_service_url",
    "get_query_param",
    "get_sdk_headers",
    "is_retryable_status",
    "parse_retry_after",
    "path_param",
    "required",
    "validate_options",
]
