from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from .models import User


@admin.register(User)
class SkillSwapUserAdmin(UserAdmin):
    list_display = ('username', 'email', 'role', 'is_banned', 'is_public', 'date_joined')
    list_filter = ('role', 'is_banned', 'is_public')
    search_fields = ('username', 'email')
    fieldsets = UserAdmin.fieldsets + (
        ('SkillSwap', {'fields': ('role', 'location', 'availability', 'profile_photo', 'is_public', 'is_banned', 'ban_reason')}),
    )
