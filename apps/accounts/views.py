from rest_framework import status, serializers, viewsets
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.exceptions import ValidationError, NotFound
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.tokens import RefreshToken
from drf_spectacular.utils import extend_schema, extend_schema_view

from .models import User
from .permissions import IsAdminRole
from .serializers import (
    UserSerializer,
    UserCreateSerializer,
    UserUpdateSerializer,
    UserLoginSerializer,
    PasswordChangeSerializer,
    SetPasswordSerializer,
)
from .services import (
    authenticate_user,
    create_user_account,
    update_user_account,
    delete_user_account,
    change_password as change_user_password,
    set_user_password,
    InvalidCredentialsError,
    InactiveAccountError,
    UserNotFoundError,
    DuplicateUsernameError,
    PasswordConfirmationError,
    SelfDeletionError,
    FarmerAccountChangeError,
)


# Response serializers for API documentation
class TokensResponseSerializer(serializers.Serializer):
    refresh = serializers.CharField()
    access = serializers.CharField()


class AuthResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    user = UserSerializer()
    tokens = TokensResponseSerializer()


class MessageResponseSerializer(serializers.Serializer):
    message = serializers.CharField()


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()


@extend_schema(
    request=UserLoginSerializer,
    responses={
        200: AuthResponseSerializer,
        400: ErrorResponseSerializer,
        401: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
    },
    description="Authenticate with username (farmers: phone number) and password to receive JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    """Login with username and password."""
    serializer = UserLoginSerializer(data=request.data)

    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        user = authenticate_user(
            username=serializer.validated_data['username'],
            password=serializer.validated_data['password'],
        )
    except InvalidCredentialsError:
        return Response({
            'error': 'Invalid credentials'
        }, status=status.HTTP_401_UNAUTHORIZED)
    except InactiveAccountError:
        return Response({
            'error': 'Account is deactivated'
        }, status=status.HTTP_403_FORBIDDEN)

    refresh = RefreshToken.for_user(user)

    return Response({
        'message': 'Login successful',
        'user': UserSerializer(user).data,
        'tokens': {
            'refresh': str(refresh),
            'access': str(refresh.access_token),
        }
    })


@extend_schema(
    responses={200: UserSerializer},
    description="Get the current authenticated user's profile.",
    tags=['auth'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_current_user(request):
    """Get current authenticated user profile."""
    return Response(UserSerializer(request.user).data)


@extend_schema(
    request=PasswordChangeSerializer,
    responses={
        200: MessageResponseSerializer,
        400: ErrorResponseSerializer,
    },
    description="Change the current user's password.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def change_password(request):
    """Change password for the logged-in user."""
    serializer = PasswordChangeSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        change_user_password(
            user_id=request.user.id,
            current_password=serializer.validated_data['current_password'],
            new_password=serializer.validated_data['new_password'],
        )
    except PasswordConfirmationError as e:
        raise ValidationError({'current_password': [str(e)]})

    return Response({'message': 'Password changed successfully'})


@extend_schema_view(
    list=extend_schema(description="List all user accounts.", tags=['users']),
    retrieve=extend_schema(description="Get a user account.", tags=['users']),
    create=extend_schema(
        request=UserCreateSerializer,
        responses={201: UserSerializer},
        description="Create an operator or admin account.",
        tags=['users'],
    ),
    partial_update=extend_schema(
        request=UserUpdateSerializer,
        responses={200: UserSerializer},
        description="Update username, role or status of an account.",
        tags=['users'],
    ),
    update=extend_schema(
        request=UserUpdateSerializer,
        responses={200: UserSerializer},
        description="Update username, role or status of an account.",
        tags=['users'],
    ),
    destroy=extend_schema(description="Delete a user account.", tags=['users']),
    set_password=extend_schema(
        request=SetPasswordSerializer,
        responses={200: MessageResponseSerializer},
        description="Set a new password for an account, e.g. a farmer who forgot theirs.",
        tags=['users'],
    ),
)
class UserViewSet(viewsets.ModelViewSet):
    """Admin-only management of login accounts."""

    queryset = User.objects.select_related('farmer_profile').all()
    serializer_class = UserSerializer
    permission_classes = [IsAuthenticated, IsAdminRole]
    lookup_value_regex = r'[0-9a-fA-F-]{36}'

    def create(self, request, *args, **kwargs):
        serializer = UserCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            user = create_user_account(**serializer.validated_data)
        except DuplicateUsernameError as e:
            raise ValidationError({'username': [str(e)]})

        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        serializer = UserUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            user = update_user_account(user_id=kwargs['pk'], **serializer.validated_data)
        except UserNotFoundError:
            raise NotFound('User not found.')
        except DuplicateUsernameError as e:
            raise ValidationError({'username': [str(e)]})
        except FarmerAccountChangeError as e:
            raise ValidationError({'_form': [str(e)]})

        return Response(UserSerializer(user).data)

    def destroy(self, request, *args, **kwargs):
        try:
            delete_user_account(user_id=kwargs['pk'], acting_user_id=request.user.id)
        except UserNotFoundError:
            raise NotFound('User not found.')
        except SelfDeletionError as e:
            raise ValidationError({'_form': [str(e)]})

        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['post'], url_path='set-password')
    def set_password(self, request, pk=None):
        serializer = SetPasswordSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            set_user_password(user_id=pk, new_password=serializer.validated_data['new_password'])
        except UserNotFoundError:
            raise NotFound('User not found.')

        return Response({'message': 'Password updated successfully'})
