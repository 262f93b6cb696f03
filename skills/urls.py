from django.urls import path
from .views import (
    skill_list_api, skill_search_api, my_skills_api, add_skill_api, remove_skill_api, moderate_skill_api,
)

urlpatterns = [
    path('skills/', skill_list_api, name='api-skills'),
    path('skills/search/', skill_search_api, name='api-skill-search'),
    path('skills/mine/', my_skills_api, name='api-my-skills'),
    path('skills/offered/', add_skill_api, {'kind': 'offered'}, name='api-add-offered-skill'),
    path('skills/wanted/', add_skill_api, {'kind': 'wanted'}, name='api-add-wanted-skill'),
    path('skills/offered/<int:skill_id>/', remove_skill_api, {'kind': 'offered'}, name='api-remove-offered-skill'),
    path('skills/wanted/<int:skill_id>/', remove_skill_api, {'kind': 'wanted'}, name='api-remove-wanted-skill'),
    path('admin/skills/<int:skill_id>/moderate/', moderate_skill_api, name='api-moderate-skill'),
]
