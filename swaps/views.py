from rest_framework import permissions, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from core.api import api_errors
from core.errors import Forbidden
from . import feedback as feedback_ledger
from . import guards, ledger
from .serializers import (
    CreateSwapSerializer, FeedbackSerializer, FeedbackStatsSerializer,
    SwapRequestDetailSerializer, SwapRequestSerializer,
)


def _page_response(request, items, page_info):
    return Response({
        'success': True,
        'data': SwapRequestSerializer(items, many=True, context={'request': request}).data,
        'pagination': page_info._asdict(),
    })


def _swap_response(request, swap, code=status.HTTP_200_OK):
    return Response({'success': True, 'data': SwapRequestSerializer(swap, context={'request': request}).data}, status=code)


# --- SWAPS ---
@api_view(['GET', 'POST'])
@permission_classes([permissions.IsAuthenticated])
@api_errors
def swap_list_api(request):
    if request.method == 'GET':
        items, page_info = ledger.list_swap_requests(
            request.user.pk,
            status=request.query_params.get('status'),
            page=request.query_params.get('page', 1),
            limit=request.query_params.get('limit'),
        )
        return _page_response(request, items, page_info)

    serializer = CreateSwapSerializer(data=request.data)
    if not serializer.is_valid():
        return Response({'success': False, 'code': 'validation_error', 'errors': serializer.errors},
                        status=status.HTTP_400_BAD_REQUEST)
    data = serializer.validated_data
    swap = ledger.create_swap_request(
        request.user.pk, data['receiver_id'], data['offered_skill_id'], data['wanted_skill_id'], data.get('message'),
    )
    return _swap_response(request, swap, status.HTTP_201_CREATED)


@api_view(['GET', 'DELETE'])
@permission_classes([permissions.IsAuthenticated])
@api_errors
def swap_detail_api(request, swap_id):
    if request.method == 'DELETE':
        ledger.delete_swap_request(swap_id, request.user.pk)
        return Response({'success': True, 'data': {'message': 'Swap request deleted successfully'}})

    swap = ledger.get_swap_request(swap_id)
    guards.check_can_view(request.user, swap)
    serializer = SwapRequestDetailSerializer(swap, context={'request': request})
    return Response({'success': True, 'data': serializer.data})


ACTIONS = {
    'accept': ledger.accept_swap_request,
    'reject': ledger.reject_swap_request,
    'complete': ledger.complete_swap_request,
}


@api_view(['POST', 'PUT'])
@permission_classes([permissions.IsAuthenticated])
@api_errors
def swap_action_api(request, swap_id, action):
    if action not in ACTIONS:
        return Response({'success': False, 'code': 'invalid_action', 'error': 'Unknown action'},
                        status=status.HTTP_400_BAD_REQUEST)
    swap = ACTIONS[action](swap_id, request.user.pk)
    return _swap_response(request, swap)


# --- FEEDBACK ---
@api_view(['GET', 'POST'])
@permission_classes([permissions.IsAuthenticated])
@api_errors
def swap_feedback_api(request, swap_id):
    if request.method == 'GET':
        swap = ledger.get_swap_request(swap_id)
        guards.check_can_view(request.user, swap)
        rows = feedback_ledger.get_swap_feedback(swap.pk)
        return Response({'success': True, 'data': FeedbackSerializer(rows, many=True).data})

    fb = feedback_ledger.add_feedback(
        swap_id, request.user.pk, request.data.get('rating'), request.data.get('comment'),
    )
    return Response({'success': True, 'data': FeedbackSerializer(fb).data}, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([permissions.IsAuthenticated])
@api_errors
def user_feedback_stats_api(request, user_id):
    stats = feedback_ledger.get_user_feedback_stats(user_id)
    return Response({'success': True, 'data': FeedbackStatsSerializer(stats).data})


# --- ADMIN ---
@api_view(['GET'])
@permission_classes([permissions.IsAuthenticated])
@api_errors
def admin_swap_list_api(request):
    if not guards.is_admin(request.user):
        raise Forbidden('Admin access required')
    items, page_info = ledger.list_all_swap_requests(
        status=request.query_params.get('status'),
        user_id=request.query_params.get('user_id'),
        page=request.query_params.get('page', 1),
        limit=request.query_params.get('limit'),
    )
    return _page_response(request, items, page_info)
