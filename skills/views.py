from rest_framework import permissions, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from core.errors import Forbidden
from core.api import api_errors
from . import directory
from .models import Skill, SkillStatus
from .serializers import SkillModerationSerializer, SkillSerializer


@api_view(['GET'])
@permission_classes([permissions.AllowAny])
def skill_list_api(request):
    """Approved skills, alphabetical"""
    skills = Skill.objects.filter(status=SkillStatus.APPROVED).order_by('name')
    return Response({'success': True, 'data': SkillSerializer(skills, many=True).data})


@api_view(['GET'])
@permission_classes([permissions.AllowAny])
def skill_search_api(request):
    term = request.query_params.get('q', '')
    skills = directory.search_skills(term)
    return Response({'success': True, 'data': SkillSerializer(skills, many=True).data})


@api_view(['GET'])
@permission_classes([permissions.IsAuthenticated])
def my_skills_api(request):
    offered, wanted = directory.list_user_skills(request.user.pk)
    return Response({'success': True, 'data': {
        'offered': SkillModerationSerializer(offered, many=True).data,
        'wanted': SkillModerationSerializer(wanted, many=True).data,
    }})


@api_view(['POST'])
@permission_classes([permissions.IsAuthenticated])
@api_errors
def add_skill_api(request, kind):
    add = directory.add_offered_skill if kind == 'offered' else directory.add_wanted_skill
    skill = add(request.user.pk, request.data.get('name'))
    return Response({'success': True, 'data': SkillSerializer(skill).data}, status=status.HTTP_201_CREATED)


@api_view(['DELETE'])
@permission_classes([permissions.IsAuthenticated])
def remove_skill_api(request, kind, skill_id):
    remove = directory.remove_offered_skill if kind == 'offered' else directory.remove_wanted_skill
    if not remove(request.user.pk, skill_id):
        return Response({'success': False, 'code': 'skill_not_found', 'error': 'Skill not found in your list'},
                        status=status.HTTP_404_NOT_FOUND)
    return Response({'success': True, 'data': {'message': 'Skill removed'}})


@api_view(['POST'])
@permission_classes([permissions.IsAuthenticated])
@api_errors
def moderate_skill_api(request, skill_id):
    if not request.user.is_admin:
        raise Forbidden('Admin access required')
    skill = directory.moderate_skill(skill_id, request.data.get('status'), request.data.get('rejection_reason'))
    return Response({'success': True, 'data': SkillModerationSerializer(skill).data})
