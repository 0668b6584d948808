from drf_yasg import openapi
from drf_yasg.utils import swagger_auto_schema
from rest_framework import generics, permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.permissions import IsAdminRole
from core.enums import SaleStatus

from .models import Sale
from .serializers import (
    ConfirmDeliverySerializer,
    RefundSerializer,
    SaleCompleteSerializer,
    SaleCreateSerializer,
    SaleSerializer,
)
from .services import SaleService

_SALE_FILTER_PARAMETERS = [
    openapi.Parameter("status", openapi.IN_QUERY, type=openapi.TYPE_STRING, enum=SaleStatus.values()),
    openapi.Parameter("buyer_id", openapi.IN_QUERY, type=openapi.TYPE_INTEGER),
    openapi.Parameter("seller_id", openapi.IN_QUERY, type=openapi.TYPE_INTEGER),
    openapi.Parameter("website_id", openapi.IN_QUERY, type=openapi.TYPE_INTEGER),
]


class SaleListCreateView(generics.ListCreateAPIView):
    """
    Open a sale (any authenticated user) or list every sale (admin).

    Filtering (admin listing):
    - /?status=pending
    - /?buyer_id=1&seller_id=2&website_id=3

    Pagination:
    - /?page=2&page_size=50
    """

    queryset = Sale.objects.none()
    serializer_class = SaleSerializer
    filter_backends = []

    def get_permissions(self):
        if self.request.method == "POST":
            return [permissions.IsAuthenticated()]
        return [IsAdminRole()]

    def get_queryset(self):
        if getattr(self, "swagger_fake_view", False):
            return Sale.objects.none()
        return SaleService().list_all(self.request.query_params)

    @swagger_auto_schema(
        operation_summary="List sales",
        tags=["Sales"],
        manual_parameters=_SALE_FILTER_PARAMETERS,
        responses={200: SaleSerializer(many=True)},
    )
    def get(self, *args, **kwargs):  # type: ignore[override]
        return super().get(*args, **kwargs)

    @swagger_auto_schema(
        operation_summary="Create sale",
        operation_description="Open a pending sale for an available website; the website is reserved.",
        tags=["Sales"],
        request_body=SaleCreateSerializer,
        responses={201: SaleSerializer},
    )
    def post(self, request, *args, **kwargs):
        serializer = SaleCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        sale = SaleService().create(serializer.to_data(), request.user.pk)
        return Response(SaleSerializer(sale).data, status=status.HTTP_201_CREATED)


class MyPurchaseListView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @swagger_auto_schema(operation_summary="My purchases", tags=["Sales"], responses={200: SaleSerializer(many=True)})
    def get(self, request, *args, **kwargs):
        return Response(SaleSerializer(SaleService().list_for_buyer(request.user.pk), many=True).data)


class MySaleListView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @swagger_auto_schema(operation_summary="My sales", tags=["Sales"], responses={200: SaleSerializer(many=True)})
    def get(self, request, *args, **kwargs):
        return Response(SaleSerializer(SaleService().list_for_seller(request.user.pk), many=True).data)


class SaleDetailView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @swagger_auto_schema(
        operation_summary="Retrieve sale",
        operation_description="Visible to the buyer and the seller only.",
        tags=["Sales"],
        responses={200: SaleSerializer},
    )
    def get(self, request, pk, *args, **kwargs):
        return Response(SaleSerializer(SaleService().get(pk, request.user.pk)).data)


class SaleBySaleIdView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @swagger_auto_schema(operation_summary="Retrieve sale by sale id", tags=["Sales"], responses={200: SaleSerializer})
    def get(self, request, sale_id, *args, **kwargs):
        return Response(SaleSerializer(SaleService().get_by_sale_id(sale_id, request.user.pk)).data)


class SaleCompleteView(APIView):
    permission_classes = [IsAdminRole]

    @swagger_auto_schema(
        operation_summary="Complete sale",
        operation_description="Mark a pending sale paid and completed; the website is marked sold to the buyer.",
        tags=["Sales"],
        request_body=SaleCompleteSerializer,
        responses={200: SaleSerializer},
    )
    def post(self, request, pk, *args, **kwargs):
        serializer = SaleCompleteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        sale = SaleService().complete(pk, serializer.validated_data.get("transaction_id"))
        return Response(SaleSerializer(sale).data)


class SaleDeliverView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @swagger_auto_schema(operation_summary="Mark sale delivered", tags=["Sales"], responses={200: SaleSerializer})
    def post(self, request, pk, *args, **kwargs):
        return Response(SaleSerializer(SaleService().mark_delivered(pk, request.user.pk)).data)


class SaleConfirmDeliveryView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @swagger_auto_schema(
        operation_summary="Confirm delivery",
        operation_description="The buyer confirms with is_buyer=true, the seller with is_buyer=false.",
        tags=["Sales"],
        request_body=ConfirmDeliverySerializer,
        responses={200: SaleSerializer},
    )
    def post(self, request, pk, *args, **kwargs):
        serializer = ConfirmDeliverySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        sale = SaleService().confirm_delivery(pk, request.user.pk, serializer.validated_data["is_buyer"])
        return Response(SaleSerializer(sale).data)


class SaleCancelView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @swagger_auto_schema(
        operation_summary="Cancel sale",
        operation_description="The buyer or an admin may cancel a pending sale; the website becomes available again.",
        tags=["Sales"],
        responses={200: SaleSerializer},
    )
    def post(self, request, pk, *args, **kwargs):
        sale = SaleService().cancel(pk, request.user.pk, is_admin=request.user.is_admin)
        return Response(SaleSerializer(sale).data)


class SaleRefundView(APIView):
    permission_classes = [IsAdminRole]

    @swagger_auto_schema(
        operation_summary="Refund sale",
        tags=["Sales"],
        request_body=RefundSerializer,
        responses={200: SaleSerializer},
    )
    def post(self, request, pk, *args, **kwargs):
        serializer = RefundSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        sale = SaleService().refund(
            pk,
            serializer.validated_data["refund_amount"],
            serializer.validated_data["refund_reason"],
        )
        return Response(SaleSerializer(sale).data)
