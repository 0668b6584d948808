"""Swagger and ReDoc documentation endpoints."""

import os

from django.urls import path, re_path
from drf_yasg import openapi
from drf_yasg.views import get_schema_view
from rest_framework import permissions

schema_view = get_schema_view(
    openapi.Info(
        title="Website Marketplace API",
        default_version="v1",
        description="""
        # Website Marketplace API

        Storefront and back office for buying and selling pre-built websites.

        ## API Organization

        ### Auth / Users
        - **Auth** - Register, log in (bearer token) and read the current profile
        - **Users** - Admin-only user listing and role management

        ### Catalog
        - **Categories** - Website categories with logos
        - **Websites** - Filtered, sorted listing; fetch by slug counts a view

        ### Sales
        - **Sales** - pending -> completed -> delivered -> confirmed, refunds and cancellations

        ### Export
        - **Export** - Export the filtered website listing to CSV
        """,
        license=openapi.License(name="BSD License"),
    ),
    url=os.getenv("SWAGGER_DEFAULT_API_URL", "http://localhost:8000"),
    public=True,
    permission_classes=[permissions.AllowAny],
)

urlpatterns = [
    path("api/doc/", schema_view.with_ui("swagger", cache_timeout=0), name="schema-swagger-ui"),
    path("api/redoc/", schema_view.with_ui("redoc", cache_timeout=0), name="schema-redoc"),
    re_path(r"^api/doc(?P<format>\.json|\.yaml)$", schema_view.without_ui(cache_timeout=0), name="schema-json"),
]
