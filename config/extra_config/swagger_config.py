"""Swagger/OpenAPI configuration for the marketplace API."""

import os


def get_swagger_settings() -> dict:
    """Return Swagger UI configuration."""
    is_production = os.getenv("DJANGO_ENV", "development") == "production"

    return {
        "SECURITY_DEFINITIONS": {
            "Bearer": {
                "type": "apiKey",
                "name": "Authorization",
                "in": "header",
                "description": "Token issued by /api/auth/login/, sent as `Bearer <token>`.",
            }
        },
        "USE_SESSION_AUTH": False,
        "JSON_EDITOR": True,
        "SUPPORTED_SUBMIT_METHODS": ["get", "post", "put", "delete", "patch"],
        "DOC_EXPANSION": "none",
        "OPERATIONS_SORTER": "alpha",
        "TAGS_SORTER": "alpha",
        "DEEP_LINKING": True,
        "DEFAULT_MODEL_RENDERING": "model",
        "DEFAULT_MODEL_DEPTH": 3,
        "VALIDATOR_URL": None if is_production else "https://validator.swagger.io/validator",
        "PERSIST_AUTH": True,
        "REFETCH_SCHEMA_WITH_AUTH": True,
        "REFETCH_SCHEMA_ON_LOGOUT": True,
        "DEFAULT_API_URL": os.getenv("SWAGGER_DEFAULT_API_URL", "http://localhost:8000"),
        "DEFAULT_GENERATOR_CLASS": "config.docs.swagger_generator.MarketplaceSchemaGenerator",
        "TAGS": [
            {"name": "Auth", "description": "Registration, login and profile"},
            {"name": "Users", "description": "Admin user management"},
            {"name": "Categories", "description": "Website categories"},
            {"name": "Websites", "description": "Browse, filter and manage websites"},
            {"name": "Sales", "description": "Purchase lifecycle: create, complete, deliver, confirm, refund"},
            {"name": "Export", "description": "Export filtered website data to CSV"},
        ],
    }


SWAGGER_SETTINGS = get_swagger_settings()
SWAGGER_USE_SESSION_AUTH = False
