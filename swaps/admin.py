from django.contrib import admin
from .models import SwapRequest, Feedback


@admin.register(SwapRequest)
class SwapRequestAdmin(admin.ModelAdmin):
    list_display = ('id', 'sender', 'receiver', 'offered_skill', 'wanted_skill', 'status', 'created_at', 'updated_at')
    list_filter = ('status', 'created_at')
    search_fields = ('sender__username', 'receiver__username', 'offered_skill__name', 'wanted_skill__name')
    # status only moves through the ledger
    readonly_fields = ('status', 'created_at', 'updated_at')


@admin.register(Feedback)
class FeedbackAdmin(admin.ModelAdmin):
    list_display = ('swap', 'author', 'rating', 'short_comment', 'created_at')
    list_filter = ('rating',)

    def short_comment(self, obj):
        return obj.comment[:50]
