from django.urls import path

from .views import (
    AvailableWebsiteListView,
    CategoryDetailView,
    CategoryListCreateView,
    MyWebsiteListView,
    WebsiteBySlugView,
    WebsiteDetailView,
    WebsiteExportCsvView,
    WebsiteImagesView,
    WebsiteLikeView,
    WebsiteListCreateView,
)

urlpatterns = [
    path("categories/", CategoryListCreateView.as_view(), name="category-list"),
    path("categories/<int:pk>/", CategoryDetailView.as_view(), name="category-detail"),
    path("websites/", WebsiteListCreateView.as_view(), name="website-list"),
    path("websites/available/", AvailableWebsiteListView.as_view(), name="website-available"),
    path("websites/my-websites/", MyWebsiteListView.as_view(), name="website-mine"),
    path("websites/export-csv/", WebsiteExportCsvView.as_view(), name="website-export-csv"),
    path("websites/slug/<slug:slug>/", WebsiteBySlugView.as_view(), name="website-by-slug"),
    path("websites/<int:pk>/", WebsiteDetailView.as_view(), name="website-detail"),
    path("websites/<int:pk>/images/", WebsiteImagesView.as_view(), name="website-images"),
    path("websites/<int:pk>/like/", WebsiteLikeView.as_view(), name="website-like"),
]
