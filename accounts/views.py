from django.contrib.auth import get_user_model, authenticate
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import permissions, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework_simplejwt.tokens import RefreshToken

from core.api import api_errors
from core.errors import Forbidden
from . import directory
from .serializers import PrivateUserSerializer, ProfileUpdateSerializer, PublicUserSerializer

User = get_user_model()


def _tokens(user):
    refresh = RefreshToken.for_user(user)
    return {'refresh': str(refresh), 'access': str(refresh.access_token)}


def _user_data(user):
    return {
        'id': user.pk,
        'username': user.username,
        'name': user.display_name,
        'email': user.email,
        'role': user.role,
        'location': user.location,
        'availability': user.availability,
        'profile_photo': user.profile_photo,
        'is_public': user.is_public,
        'is_banned': user.is_banned,
    }


# --- REGISTER ---
class RegisterView(APIView):
    permission_classes = [AllowAny]

    def post(self, request):
        username = request.data.get('username')
        email = request.data.get('email', '')
        password = request.data.get('password')

        if not username or not password or not email:
            return Response({'success': False, 'error': 'Username, email and password are required'}, status=status.HTTP_400_BAD_REQUEST)

        if User.objects.filter(username=username).exists():
            return Response({'success': False, 'error': 'Username already exists'}, status=status.HTTP_400_BAD_REQUEST)
        if User.objects.filter(email__iexact=email).exists():
            return Response({'success': False, 'error': 'Email already registered'}, status=status.HTTP_400_BAD_REQUEST)

        user = User.objects.create_user(username=username, email=email, password=password)
        return Response({'success': True, 'message': 'User created successfully', **_tokens(user)}, status=status.HTTP_201_CREATED)


# --- LOGIN ---
class LoginView(APIView):
    permission_classes = [AllowAny]

    def post(self, request):
        username = request.data.get('username')
        password = request.data.get('password')

        user = authenticate(username=username, password=password)
        if user is None:
            return Response({'success': False, 'error': 'Invalid credentials'}, status=status.HTTP_401_UNAUTHORIZED)
        if user.is_banned:
            return Response({'success': False, 'error': 'Your account has been banned'}, status=status.HTTP_403_FORBIDDEN)

        return Response({'success': True, 'message': 'Login successful', **_tokens(user)}, status=status.HTTP_200_OK)


# --- USER DETAIL ---
class UserDetailView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response({'success': True, 'data': _user_data(request.user)}, status=status.HTTP_200_OK)


# --- DISCOVERY / PROFILE ---
@api_view(['GET'])
@permission_classes([permissions.IsAuthenticated])
def user_list_api(request):
    """Browse public users, e.g. to find someone to propose a swap to"""
    params = request.query_params
    users, page_info = directory.list_users(
        skill=params.get('skill'),
        search=params.get('search'),
        availability=params.get('availability'),
        page=params.get('page', 1),
        limit=params.get('limit'),
    )
    return Response({
        'success': True,
        'data': PublicUserSerializer(users, many=True).data,
        'pagination': page_info._asdict(),
    })


@api_view(['GET'])
@permission_classes([permissions.IsAuthenticated])
@api_errors
def user_profile_api(request, user_id):
    user = directory.get_public_user(user_id)
    serializer_class = PublicUserSerializer if directory.can_see_profile(user, request.user) else PrivateUserSerializer
    return Response({'success': True, 'data': serializer_class(user).data})


@api_view(['PUT', 'PATCH'])
@permission_classes([permissions.IsAuthenticated])
@api_errors
def edit_profile_api(request):
    serializer = ProfileUpdateSerializer(request.user, data=request.data, partial=True)
    if not serializer.is_valid():
        return Response({'success': False, 'code': 'validation_error', 'errors': serializer.errors},
                        status=status.HTTP_400_BAD_REQUEST)
    user = directory.update_profile(request.user.pk, serializer.validated_data)
    return Response({'success': True, 'data': _user_data(user)})


@api_view(['POST'])
@permission_classes([permissions.IsAuthenticated])
@api_errors
def toggle_visibility_api(request):
    user = directory.toggle_visibility(request.user.pk)
    return Response({'success': True, 'data': {'is_public': user.is_public}})


# --- ADMIN: BAN MANAGEMENT ---
@api_view(['POST'])
@permission_classes([permissions.IsAuthenticated])
@api_errors
def ban_user_api(request, user_id, action):
    if not request.user.is_admin:
        raise Forbidden('Admin access required')
    if action == 'ban':
        user = directory.ban_user(user_id, request.data.get('reason', ''))
    elif action == 'unban':
        user = directory.unban_user(user_id)
    else:
        return Response({'success': False, 'code': 'invalid_action', 'error': 'Unknown action'},
                        status=status.HTTP_400_BAD_REQUEST)
    return Response({'success': True, 'data': _user_data(user)}, status=status.HTTP_200_OK)
