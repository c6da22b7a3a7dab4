"""PostgREST data provider: filters, compound keys and query strings for CRUD."""

from __future__ import annotations

from .config import ProviderConfig
from .exceptions import (
    FilterKeyError,
    HttpError,
    MalformedHeaderError,
    MalformedIdentifierError,
    MissingHeaderError,
    PostgrestProviderError,
    UnsupportedQueryError,
)
from .filters import FilterTranslator, FilterValue, FilterValueKind, translate
from .operators import PostgrestOperator, SortOrder
from .params import (
    CreateParams,
    DeleteManyParams,
    DeleteParams,
    GetListParams,
    GetManyParams,
    GetManyReferenceParams,
    GetOneParams,
    IdsResult,
    ListResult,
    ManyResult,
    PaginationSpec,
    RecordResult,
    SortSpec,
    UpdateManyParams,
    UpdateParams,
)
from .ports import HttpResponse, IHttpClient
from .primary_key import (
    PrimaryKeyRegistry,
    decode_id,
    encode_id,
    is_compound,
    key_projection,
    primary_key_for,
)
from .provider import PostgrestDataProvider
from .query_builder import QueryBuilder
from .response import extract_total, with_generic_id
from .transport import HttpxClient

__all__ = [
    "CreateParams",
    "DeleteManyParams",
    "DeleteParams",
    "FilterKeyError",
    "FilterTranslator",
    "FilterValue",
    "FilterValueKind",
    "GetListParams",
    "GetManyParams",
    "GetManyReferenceParams",
    "GetOneParams",
    "HttpError",
    "HttpResponse",
    "HttpxClient",
    "IHttpClient",
    "IdsResult",
    "ListResult",
    "MalformedHeaderError",
    "MalformedIdentifierError",
    "ManyResult",
    "MissingHeaderError",
    "PaginationSpec",
    "PostgrestDataProvider",
    "PostgrestOperator",
    "PostgrestProviderError",
    "PrimaryKeyRegistry",
    "ProviderConfig",
    "QueryBuilder",
    "RecordResult",
    "SortOrder",
    "SortSpec",
    "UnsupportedQueryError",
    "UpdateManyParams",
    "UpdateParams",
    "decode_id",
    "encode_id",
    "extract_total",
    "is_compound",
    "key_projection",
    "primary_key_for",
    "translate",
    "with_generic_id",
]
