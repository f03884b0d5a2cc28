from rest_framework import status, serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework_simplejwt.tokens import RefreshToken
from drf_spectacular.utils import extend_schema

from .permissions import IsAdmin
from .serializers import (
    UserSerializer,
    AdminSetupSerializer,
    ChangePasswordSerializer,
)
from .services import is_admin_configured, create_initial_admin, change_password


# Response serializers for API documentation
class SetupStatusResponseSerializer(serializers.Serializer):
    is_setup = serializers.BooleanField()


class TokensResponseSerializer(serializers.Serializer):
    refresh = serializers.CharField()
    access = serializers.CharField()


class SetupResponseSerializer(serializers.Serializer):
    user = UserSerializer()
    tokens = TokensResponseSerializer()


@extend_schema(
    responses={200: SetupStatusResponseSerializer},
    description="Whether an administrator account exists yet.",
    tags=['auth'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def setup_status(request):
    """Report whether initial setup has been done."""
    return Response({'is_setup': is_admin_configured()})


@extend_schema(
    request=AdminSetupSerializer,
    responses={201: SetupResponseSerializer},
    description="Create the administrator account. Only allowed once.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def setup(request):
    """Create the first administrator and return JWT tokens."""
    serializer = AdminSetupSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    user = create_initial_admin(**serializer.validated_data)
    refresh = RefreshToken.for_user(user)

    return Response({
        'user': UserSerializer(user).data,
        'tokens': {
            'refresh': str(refresh),
            'access': str(refresh.access_token),
        }
    }, status=status.HTTP_201_CREATED)


@extend_schema(
    responses={200: UserSerializer},
    description="Get the logged-in administrator.",
    tags=['auth'],
)
@api_view(['GET'])
@permission_classes([IsAdmin])
def get_current_user(request):
    """Return the current administrator."""
    return Response(UserSerializer(request.user).data)


@extend_schema(
    request=ChangePasswordSerializer,
    responses={204: None},
    description="Change the administrator password.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([IsAdmin])
def update_password(request):
    """Change password after confirming the current one."""
    serializer = ChangePasswordSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    change_password(
        user=request.user,
        current_password=serializer.validated_data['current_password'],
        new_password=serializer.validated_data['new_password'],
    )
    return Response(status=status.HTTP_204_NO_CONTENT)
