from django.urls import path
from .views import (
    RegisterView, LoginView, UserDetailView, user_list_api, user_profile_api,
    edit_profile_api, toggle_visibility_api, ban_user_api,
)

urlpatterns = [
    path('auth/register/', RegisterView.as_view(), name='auth_register'),
    path('auth/login/', LoginView.as_view(), name='auth_login'),
    path('auth/user/', UserDetailView.as_view(), name='auth_user'),
    path('users/', user_list_api, name='api-users'),
    path('users/<int:user_id>/', user_profile_api, name='api-user-profile'),
    path('profile/', edit_profile_api, name='api-edit-profile'),
    path('profile/visibility/', toggle_visibility_api, name='api-toggle-visibility'),
    path('admin/users/<int:user_id>/<str:action>/', ban_user_api, name='admin_user_ban'),
]
