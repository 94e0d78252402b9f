"""Page-number pagination rendered with the success envelope."""

from __future__ import annotations

import math

from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class StandardResultsSetPagination(PageNumberPagination):
    page_size_query_param = "limit"
    max_page_size = 100

    def get_paginated_response(self, data) -> Response:
        total = self.page.paginator.count
        limit = self.get_page_size(self.request) or self.page_size
        return Response(
            {
                "success": True,
                "data": data,
                "pagination": {
                    "total": total,
                    "page": self.page.number,
                    "limit": limit,
                    "pages": math.ceil(total / limit) if limit else 0,
                },
            }
        )
