from django.contrib import admin
from .models import Skill, OfferedSkill, WantedSkill


@admin.register(Skill)
class SkillAdmin(admin.ModelAdmin):
    list_display = ('name', 'status', 'created_at')
    list_filter = ('status',)
    search_fields = ('name',)


@admin.register(OfferedSkill)
class OfferedSkillAdmin(admin.ModelAdmin):
    list_display = ('user', 'skill', 'created_at')
    search_fields = ('user__username', 'skill__name')


@admin.register(WantedSkill)
class WantedSkillAdmin(admin.ModelAdmin):
    list_display = ('user', 'skill', 'created_at')
    search_fields = ('user__username', 'skill__name')
