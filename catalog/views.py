from django.conf import settings
from django.http import FileResponse
from drf_yasg import openapi
from drf_yasg.utils import swagger_auto_schema
from rest_framework import generics, permissions, status
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.permissions import IsAdminRole

from .export import export_websites_csv
from .models import Category, Website
from .serializers import (
    CategorySerializer,
    LikeResponseSerializer,
    WebsiteImagesSerializer,
    WebsiteQuerySerializer,
    WebsiteSerializer,
    WebsiteWriteSerializer,
)
from .services import CategoryService, WebsiteService


class AdminWritePermissionMixin:
    """Reads are public; writes need the admin role."""

    def get_permissions(self):
        if self.request.method in permissions.SAFE_METHODS:
            return [permissions.AllowAny()]
        return [IsAdminRole()]


class WebsiteListCreateView(AdminWritePermissionMixin, generics.ListCreateAPIView):
    """
    List and create websites.

    Filtering (all optional, combined with AND):
    - /?search=shop (name, slug, description, technologies, features)
    - /?category_id=1&type=ecommerce&status=available&created_by=3
    - /?available=true (same as status=available, wins over status)
    - /?min_price=100&max_price=200
    - /?is_responsive=true&has_admin_panel=false&has_database=true
    - /?technologies=React,Vue (any of)  /?features=Blog&features=Cart

    Ordering:
    - /?sort_by=price&sort_order=asc
    Available fields: name, price, created_at, views_count, type, status

    Pagination:
    - /?skip=20&limit=10 (no limit returns everything)
    """

    queryset = Website.objects.none()
    serializer_class = WebsiteSerializer
    pagination_class = None
    filter_backends = []
    parser_classes = [MultiPartParser, FormParser, JSONParser]

    @swagger_auto_schema(
        operation_summary="List websites",
        operation_description="Filtered, sorted listing with category and creator joined.",
        tags=["Websites"],
        query_serializer=WebsiteQuerySerializer,
        responses={200: WebsiteSerializer(many=True)},
    )
    def get(self, request, *args, **kwargs):
        query_serializer = WebsiteQuerySerializer(data=request.query_params)
        query_serializer.is_valid(raise_exception=True)
        websites = WebsiteService().list(query_serializer.to_query())
        return Response(WebsiteSerializer(websites, many=True).data)

    @swagger_auto_schema(
        operation_summary="Create website",
        operation_description="Create a website listing. At least one image is required; the first becomes the main image.",
        tags=["Websites"],
        request_body=WebsiteWriteSerializer,
        responses={201: WebsiteSerializer},
    )
    def post(self, request, *args, **kwargs):
        serializer = WebsiteWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        images = data.pop("images", None) or request.FILES.getlist("images")
        website = WebsiteService().create(data, images, request.user.pk)
        return Response(WebsiteSerializer(website).data, status=status.HTTP_201_CREATED)


class AvailableWebsiteListView(APIView):
    permission_classes = [permissions.AllowAny]

    @swagger_auto_schema(
        operation_summary="List available websites",
        tags=["Websites"],
        responses={200: WebsiteSerializer(many=True)},
    )
    def get(self, request, *args, **kwargs):
        return Response(WebsiteSerializer(WebsiteService().list_available(), many=True).data)


class MyWebsiteListView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @swagger_auto_schema(
        operation_summary="List my websites",
        operation_description="Websites created by the caller.",
        tags=["Websites"],
        responses={200: WebsiteSerializer(many=True)},
    )
    def get(self, request, *args, **kwargs):
        websites = WebsiteService().list_for_creator(request.user.pk)
        return Response(WebsiteSerializer(websites, many=True).data)


class WebsiteBySlugView(APIView):
    permission_classes = [permissions.AllowAny]

    @swagger_auto_schema(
        operation_summary="Retrieve website by slug",
        operation_description="Each successful call increments the view counter.",
        tags=["Websites"],
        responses={200: WebsiteSerializer},
    )
    def get(self, request, slug, *args, **kwargs):
        return Response(WebsiteSerializer(WebsiteService().get_by_slug(slug)).data)


class WebsiteDetailView(AdminWritePermissionMixin, APIView):
    parser_classes = [MultiPartParser, FormParser, JSONParser]

    @swagger_auto_schema(operation_summary="Retrieve website", tags=["Websites"], responses={200: WebsiteSerializer})
    def get(self, request, pk, *args, **kwargs):
        return Response(WebsiteSerializer(WebsiteService().get_by_id(pk)).data)

    @swagger_auto_schema(
        operation_summary="Update website",
        operation_description="Only the creator may update a website.",
        tags=["Websites"],
        request_body=WebsiteWriteSerializer,
        responses={200: WebsiteSerializer},
    )
    def patch(self, request, pk, *args, **kwargs):
        serializer = WebsiteWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        data.pop("images", None)
        website = WebsiteService().update(pk, data, request.user.pk)
        return Response(WebsiteSerializer(website).data)

    @swagger_auto_schema(
        operation_summary="Delete website",
        operation_description="Only the creator may delete a website; its images are removed from storage first.",
        tags=["Websites"],
        responses={204: "Deleted"},
    )
    def delete(self, request, pk, *args, **kwargs):
        WebsiteService().delete(pk, request.user.pk)
        return Response(status=status.HTTP_204_NO_CONTENT)


class WebsiteImagesView(APIView):
    permission_classes = [IsAdminRole]
    parser_classes = [MultiPartParser, FormParser]

    @swagger_auto_schema(
        operation_summary="Replace website images",
        tags=["Websites"],
        manual_parameters=[
            openapi.Parameter(
                "images",
                openapi.IN_FORM,
                type=openapi.TYPE_FILE,
                required=True,
                description="New images; the first becomes the main image.",
            ),
        ],
        responses={200: WebsiteSerializer},
    )
    def patch(self, request, pk, *args, **kwargs):
        serializer = WebsiteImagesSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        website = WebsiteService().replace_images(pk, serializer.validated_data["images"], request.user.pk)
        return Response(WebsiteSerializer(website).data)


class WebsiteLikeView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @swagger_auto_schema(
        operation_summary="Like / unlike website",
        tags=["Websites"],
        responses={200: LikeResponseSerializer},
    )
    def post(self, request, pk, *args, **kwargs):
        website, liked = WebsiteService().toggle_like(pk, request.user.pk)
        return Response({"liked": liked, "likes_count": len(website.likes.all())})


class WebsiteExportCsvView(APIView):
    """Export the filtered website listing to CSV."""

    permission_classes = [IsAdminRole]

    @swagger_auto_schema(
        operation_summary="Export websites to CSV",
        operation_description="Export websites to a CSV file (supports the same filters as listing).",
        tags=["Export"],
        query_serializer=WebsiteQuerySerializer,
        responses={200: "CSV file"},
    )
    def get(self, request, *args, **kwargs):
        query_serializer = WebsiteQuerySerializer(data=request.query_params)
        query_serializer.is_valid(raise_exception=True)
        websites = WebsiteService().list(query_serializer.to_query())

        path, file_name = export_websites_csv(websites, settings.TEMP_DIR)
        return FileResponse(open(path, "rb"), as_attachment=True, filename=file_name)


class CategoryListCreateView(AdminWritePermissionMixin, generics.ListCreateAPIView):
    serializer_class = CategorySerializer
    queryset = Category.objects.all()
    pagination_class = None
    filter_backends = []
    parser_classes = [MultiPartParser, FormParser, JSONParser]

    def get_queryset(self):
        return CategoryService().list()

    @swagger_auto_schema(operation_summary="List categories", tags=["Categories"], responses={200: CategorySerializer(many=True)})
    def get(self, *args, **kwargs):  # type: ignore[override]
        return super().get(*args, **kwargs)

    @swagger_auto_schema(
        operation_summary="Create category",
        tags=["Categories"],
        request_body=CategorySerializer,
        responses={201: CategorySerializer},
    )
    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        category = CategoryService().create(
            name=serializer.validated_data["name"],
            logo=serializer.validated_data.get("logo_file"),
        )
        return Response(self.get_serializer(category).data, status=status.HTTP_201_CREATED)


class CategoryDetailView(AdminWritePermissionMixin, APIView):
    parser_classes = [MultiPartParser, FormParser, JSONParser]

    @swagger_auto_schema(operation_summary="Retrieve category", tags=["Categories"], responses={200: CategorySerializer})
    def get(self, request, pk, *args, **kwargs):
        return Response(CategorySerializer(CategoryService().get(pk)).data)

    @swagger_auto_schema(
        operation_summary="Update category",
        tags=["Categories"],
        request_body=CategorySerializer,
        responses={200: CategorySerializer},
    )
    def patch(self, request, pk, *args, **kwargs):
        serializer = CategorySerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        category = CategoryService().update(
            pk,
            name=serializer.validated_data.get("name"),
            logo=serializer.validated_data.get("logo_file"),
        )
        return Response(CategorySerializer(category).data)

    @swagger_auto_schema(operation_summary="Delete category", tags=["Categories"], responses={204: "Deleted"})
    def delete(self, request, pk, *args, **kwargs):
        CategoryService().delete(pk)
        return Response(status=status.HTTP_204_NO_CONTENT)
