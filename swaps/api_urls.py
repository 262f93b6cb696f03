from django.urls import path
from .views import (
    swap_list_api, swap_detail_api, swap_action_api, swap_feedback_api,
    user_feedback_stats_api, admin_swap_list_api,
)

urlpatterns = [
    path('swaps/', swap_list_api, name='api-swaps'),
    path('swaps/<int:swap_id>/', swap_detail_api, name='api-swap-detail'),
    path('swaps/<int:swap_id>/feedback/', swap_feedback_api, name='api-swap-feedback'),
    path('swaps/<int:swap_id>/<str:action>/', swap_action_api, name='api-swap-action'),
    path('users/<int:user_id>/feedback-stats/', user_feedback_stats_api, name='api-user-feedback-stats'),
    path('admin/swaps/', admin_swap_list_api, name='api-admin-swaps'),
]
