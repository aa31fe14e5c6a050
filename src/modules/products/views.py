"""Product API views.

Exposes ``ProductRequestHandler`` via HTTP using a DRF ViewSet.  The view
only translates: request data in, ``HandlerResult`` out to a status code.
Caching, uniqueness checks and error capture all live in the handler.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.products.handlers import ProductRequestHandler
from modules.products.results import HandlerResult, HandlerStatus, PagedList
from modules.products.serializers import (
    ErrorSerializer,
    ProductPageSerializer,
    ProductSerializer,
)

NOT_FOUND = {"detail": "Product not found."}


def _dump(value: Any) -> Any:
    if hasattr(value, "model_dump"):
        return value.model_dump()
    return value


def _page_payload(page: PagedList) -> Dict[str, Any]:
    return {
        "results": [_dump(item) for item in page.items],
        "page": page.page_number,
        "page_size": page.page_size,
        "count": page.total_count,
        "num_pages": page.page_count,
        "has_previous": page.has_previous,
        "has_next": page.has_next,
    }


def _request_data(request: Request) -> Any:
    data = request.data
    # Form posts arrive as a QueryDict; collapse it to single values.
    if hasattr(data, "dict"):
        return data.dict()
    if isinstance(data, Mapping):
        return dict(data)
    return data


def _failure_response(result: HandlerResult) -> Response:
    """Map every non-OK ``HandlerResult`` to its HTTP response."""
    if result.status is HandlerStatus.INVALID:
        return Response({"errors": result.errors}, status=status.HTTP_400_BAD_REQUEST)
    if result.status is HandlerStatus.CONFLICT:
        return Response({"errors": result.errors}, status=status.HTTP_409_CONFLICT)
    if result.status is HandlerStatus.ERROR and result.errors:
        return Response(
            {"errors": result.errors}, status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )
    return Response(
        {"detail": result.message}, status=status.HTTP_500_INTERNAL_SERVER_ERROR
    )


class ProductViewSet(ViewSet):
    """ViewSet for Product CRUD operations.

    Reads are public; writes need an authenticated user (see
    ``REST_FRAMEWORK`` permission defaults).
    """

    lookup_value_regex = r"\d+"

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._handler = ProductRequestHandler.create_default()

    # ------------------------------------------------------------------
    # List
    # ------------------------------------------------------------------

    @extend_schema(
        parameters=[OpenApiParameter("page", int, required=False)],
        responses={200: ProductPageSerializer, 500: ErrorSerializer},
    )
    def list(self, request: Request) -> Response:
        """GET /api/v1/products/?page=N"""
        raw_page = request.query_params.get("page")
        page = None
        if raw_page not in (None, ""):
            try:
                page = int(raw_page)
            except ValueError:
                page = 0
            if page < 1:
                return Response(
                    {"errors": {"page": ["Page must be a positive integer."]}},
                    status=status.HTTP_400_BAD_REQUEST,
                )

        result = self._handler.list(page)
        if not result.is_ok:
            return _failure_response(result)
        return Response(_page_payload(result.value))

    @extend_schema(responses={200: ProductSerializer(many=True), 500: ErrorSerializer})
    @action(detail=False, methods=["get"], url_path="all")
    def list_all(self, request: Request) -> Response:
        """GET /api/v1/products/all/"""
        result = self._handler.list_all()
        if not result.is_ok:
            return _failure_response(result)
        return Response([_dump(item) for item in result.value])

    # ------------------------------------------------------------------
    # Retrieve
    # ------------------------------------------------------------------

    def _single(self, result: HandlerResult) -> Response:
        if not result.is_ok:
            return _failure_response(result)
        if result.value is None:
            return Response(NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        return Response(_dump(result.value))

    @extend_schema(responses={200: ProductSerializer, 404: ErrorSerializer})
    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/products/{pk}/"""
        return self._single(self._handler.get_detail(int(pk)))

    @extend_schema(responses={200: ProductSerializer, 404: ErrorSerializer})
    @action(detail=True, methods=["get"], url_path="edit")
    def edit(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/products/{pk}/edit/"""
        return self._single(self._handler.show_edit_form(int(pk)))

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    @extend_schema(
        request=ProductSerializer,
        responses={201: ProductSerializer, 400: ErrorSerializer, 409: ErrorSerializer},
    )
    def create(self, request: Request) -> Response:
        """POST /api/v1/products/"""
        result = self._handler.create(_request_data(request))
        if not result.is_ok:
            return _failure_response(result)
        return Response(_dump(result.value), status=status.HTTP_201_CREATED)

    @extend_schema(
        request=ProductSerializer,
        responses={204: None, 400: ErrorSerializer, 409: ErrorSerializer},
    )
    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/products/{pk}/"""
        data = _request_data(request)
        if isinstance(data, dict):
            data["id"] = int(pk)
        result = self._handler.update(data)
        if not result.is_ok:
            return _failure_response(result)
        return Response(status=status.HTTP_204_NO_CONTENT)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/products/{pk}/"""
        return self.update(request, pk)

    @extend_schema(responses={204: None, 500: ErrorSerializer})
    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/products/{pk}/"""
        result = self._handler.delete(int(pk))
        if not result.is_ok:
            return _failure_response(result)
        return Response(status=status.HTTP_204_NO_CONTENT)
