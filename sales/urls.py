from django.urls import path

from .views import (
    MyPurchaseListView,
    MySaleListView,
    SaleBySaleIdView,
    SaleCancelView,
    SaleCompleteView,
    SaleConfirmDeliveryView,
    SaleDeliverView,
    SaleDetailView,
    SaleListCreateView,
    SaleRefundView,
)

urlpatterns = [
    path("sales/", SaleListCreateView.as_view(), name="sale-list"),
    path("sales/my-purchases/", MyPurchaseListView.as_view(), name="sale-my-purchases"),
    path("sales/my-sales/", MySaleListView.as_view(), name="sale-my-sales"),
    path("sales/sale-id/<str:sale_id>/", SaleBySaleIdView.as_view(), name="sale-by-sale-id"),
    path("sales/<int:pk>/", SaleDetailView.as_view(), name="sale-detail"),
    path("sales/<int:pk>/complete/", SaleCompleteView.as_view(), name="sale-complete"),
    path("sales/<int:pk>/deliver/", SaleDeliverView.as_view(), name="sale-deliver"),
    path("sales/<int:pk>/confirm-delivery/", SaleConfirmDeliveryView.as_view(), name="sale-confirm-delivery"),
    path("sales/<int:pk>/cancel/", SaleCancelView.as_view(), name="sale-cancel"),
    path("sales/<int:pk>/refund/", SaleRefundView.as_view(), name="sale-refund"),
]
