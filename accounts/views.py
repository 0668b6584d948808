from django.contrib.auth import get_user_model
from drf_yasg.utils import swagger_auto_schema
from rest_framework import generics, permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from .filters import UserFilter
from .permissions import IsAdminRole
from .serializers import (
    AuthResponseSerializer,
    LoginSerializer,
    RegisterSerializer,
    UserAdminUpdateSerializer,
    UserSerializer,
)
from .services import AccountService

User = get_user_model()


class RegisterView(APIView):
    permission_classes = [permissions.AllowAny]

    @swagger_auto_schema(
        operation_summary="Register",
        operation_description="Create an account and return its bearer token.",
        tags=["Auth"],
        request_body=RegisterSerializer,
        responses={201: AuthResponseSerializer},
    )
    def post(self, request, *args, **kwargs):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user, token = AccountService().register(**serializer.validated_data)
        return Response(
            {"token": token, "user": UserSerializer(user).data},
            status=status.HTTP_201_CREATED,
        )


class LoginView(APIView):
    permission_classes = [permissions.AllowAny]

    @swagger_auto_schema(
        operation_summary="Log in",
        operation_description="Exchange email and password for a bearer token.",
        tags=["Auth"],
        request_body=LoginSerializer,
        responses={200: AuthResponseSerializer},
    )
    def post(self, request, *args, **kwargs):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user, token = AccountService().login(**serializer.validated_data)
        return Response({"token": token, "user": UserSerializer(user).data})


class LogoutView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @swagger_auto_schema(operation_summary="Log out", tags=["Auth"], responses={204: "Token revoked"})
    def post(self, request, *args, **kwargs):
        AccountService().logout(request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)


class ProfileView(generics.RetrieveUpdateAPIView):
    serializer_class = UserSerializer
    permission_classes = [permissions.IsAuthenticated]
    http_method_names = ["get", "patch", "head", "options"]

    def get_object(self):
        return self.request.user

    @swagger_auto_schema(operation_summary="Current profile", tags=["Auth"], responses={200: UserSerializer})
    def get(self, *args, **kwargs):  # type: ignore[override]
        return super().get(*args, **kwargs)

    @swagger_auto_schema(operation_summary="Update current profile", tags=["Auth"], responses={200: UserSerializer})
    def patch(self, *args, **kwargs):  # type: ignore[override]
        return super().patch(*args, **kwargs)


class UserListView(generics.ListAPIView):
    """
    Admin listing of accounts.

    Filtering:
    - /?search=query (name or email)
    - /?role=admin
    - /?is_active=true

    Pagination:
    - /?page=2&page_size=50
    """

    queryset = User.objects.all().order_by("-created_at")
    serializer_class = UserSerializer
    permission_classes = [IsAdminRole]
    filterset_class = UserFilter

    @swagger_auto_schema(operation_summary="List users", tags=["Users"], responses={200: UserSerializer(many=True)})
    def get(self, *args, **kwargs):  # type: ignore[override]
        return super().get(*args, **kwargs)


class UserDetailView(generics.RetrieveUpdateAPIView):
    queryset = User.objects.all()
    serializer_class = UserAdminUpdateSerializer
    permission_classes = [IsAdminRole]
    http_method_names = ["get", "patch", "head", "options"]

    @swagger_auto_schema(operation_summary="Retrieve user", tags=["Users"], responses={200: UserAdminUpdateSerializer})
    def get(self, *args, **kwargs):  # type: ignore[override]
        return super().get(*args, **kwargs)

    @swagger_auto_schema(
        operation_summary="Update user",
        operation_description="Change a user's name, phone, role or active flag.",
        tags=["Users"],
        responses={200: UserAdminUpdateSerializer},
    )
    def patch(self, *args, **kwargs):  # type: ignore[override]
        return super().patch(*args, **kwargs)
