from rest_framework import status, serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.tokens import RefreshToken
from drf_spectacular.utils import extend_schema
from .models import User
from .permissions import IsStaffMember
from .serializers import (
    CustomerRegistrationSerializer,
    LoginSerializer,
    AccountDeletionSerializer,
    UserSerializer,
    UserMinimalSerializer,
)
from .services import (
    register_customer,
    authenticate_user,
    delete_customer_account,
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    InactiveAccountError,
    StaffAccountDeletionError,
)


# Response serializers for API documentation
class TokensResponseSerializer(serializers.Serializer):
    refresh = serializers.CharField()
    access = serializers.CharField()


class SessionResponseSerializer(serializers.Serializer):
    user = UserSerializer()
    tokens = TokensResponseSerializer()


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()


def _session_for(user):
    refresh = RefreshToken.for_user(user)
    return {
        'user': UserSerializer(user).data,
        'tokens': {
            'refresh': str(refresh),
            'access': str(refresh.access_token),
        },
    }


@extend_schema(
    request=CustomerRegistrationSerializer,
    responses={201: SessionResponseSerializer, 400: ErrorResponseSerializer},
    description="Create a customer account and sign in.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def register(request):
    """Customer sign-up."""
    serializer = CustomerRegistrationSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    data = serializer.validated_data.copy()
    data.pop('password_confirm', None)

    try:
        user = register_customer(**data)
    except EmailAlreadyRegisteredError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(_session_for(user), status=status.HTTP_201_CREATED)


@extend_schema(
    request=LoginSerializer,
    responses={
        200: SessionResponseSerializer,
        400: ErrorResponseSerializer,
        401: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
    },
    description="Sign in with email and password. The user's role tells the client which dashboard to open.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    """Email/password login for customers, employees and admins."""
    serializer = LoginSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        user = authenticate_user(**serializer.validated_data)
    except InvalidCredentialsError as e:
        return Response({'error': str(e)}, status=status.HTTP_401_UNAUTHORIZED)
    except InactiveAccountError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

    return Response(_session_for(user))


@extend_schema(
    methods=['GET'],
    responses={200: UserSerializer},
    description="Profile of the signed-in user.",
    tags=['auth'],
)
@extend_schema(
    methods=['PATCH'],
    request=UserSerializer,
    responses={200: UserSerializer},
    description="Change name or contact number. Email and role are fixed.",
    tags=['auth'],
)
@api_view(['GET', 'PATCH'])
@permission_classes([IsAuthenticated])
def me(request):
    if request.method == 'GET':
        return Response(UserSerializer(request.user).data)

    serializer = UserSerializer(request.user, data=request.data, partial=True)
    serializer.is_valid(raise_exception=True)
    serializer.save()
    return Response(serializer.data)


@extend_schema(
    request=AccountDeletionSerializer,
    responses={204: None, 400: ErrorResponseSerializer, 403: ErrorResponseSerializer},
    description="Delete the signed-in customer's account and their online orders.",
    tags=['auth'],
)
@api_view(['DELETE'])
@permission_classes([IsAuthenticated])
def delete_account(request):
    """Customer account deletion, confirmed with the password."""
    serializer = AccountDeletionSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        delete_customer_account(request.user, serializer.validated_data['password'])
    except StaffAccountDeletionError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
    except InvalidCredentialsError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(
    responses={200: UserMinimalSerializer(many=True)},
    description="Active employees, for assigning orders.",
    tags=['auth'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsStaffMember])
def list_employees(request):
    return Response(UserMinimalSerializer(User.objects.employees(), many=True).data)
