from rest_framework import serializers
from .models import SwapRequest, Feedback


class FeedbackSerializer(serializers.ModelSerializer):
    author_id = serializers.IntegerField(source='author.id', read_only=True)
    author_name = serializers.CharField(source='author.display_name', read_only=True)
    author_photo = serializers.CharField(source='author.profile_photo', read_only=True)

    class Meta:
        model = Feedback
        fields = ['id', 'swap', 'author_id', 'author_name', 'author_photo', 'rating', 'comment', 'created_at']
        read_only_fields = fields


class SwapRequestSerializer(serializers.ModelSerializer):
    sender_name = serializers.CharField(source='sender.display_name', read_only=True)
    sender_photo = serializers.CharField(source='sender.profile_photo', read_only=True)
    receiver_name = serializers.CharField(source='receiver.display_name', read_only=True)
    receiver_photo = serializers.CharField(source='receiver.profile_photo', read_only=True)
    offered_skill_name = serializers.CharField(source='offered_skill.name', read_only=True)
    wanted_skill_name = serializers.CharField(source='wanted_skill.name', read_only=True)
    is_user_sender = serializers.SerializerMethodField()

    class Meta:
        model = SwapRequest
        fields = [
            'id', 'sender', 'sender_name', 'sender_photo',
            'receiver', 'receiver_name', 'receiver_photo',
            'offered_skill', 'offered_skill_name', 'wanted_skill', 'wanted_skill_name',
            'message', 'status', 'created_at', 'updated_at', 'is_user_sender',
        ]
        read_only_fields = fields

    def get_is_user_sender(self, obj):
        request = self.context.get('request')
        if request and request.user.is_authenticated:
            return obj.sender_id == request.user.pk
        return None


class SwapRequestDetailSerializer(SwapRequestSerializer):
    feedback = FeedbackSerializer(many=True, read_only=True)

    class Meta(SwapRequestSerializer.Meta):
        fields = SwapRequestSerializer.Meta.fields + ['feedback']
        read_only_fields = fields


# --- INPUT ---
class CreateSwapSerializer(serializers.Serializer):
    receiver_id = serializers.IntegerField()
    offered_skill_id = serializers.IntegerField()
    wanted_skill_id = serializers.IntegerField()
    message = serializers.CharField(required=False, allow_blank=True, allow_null=True, default='', trim_whitespace=False)


class FeedbackStatsSerializer(serializers.Serializer):
    total_reviews = serializers.IntegerField()
    avg_rating = serializers.FloatField()
    five_star = serializers.IntegerField()
    four_star = serializers.IntegerField()
    three_star = serializers.IntegerField()
    two_star = serializers.IntegerField()
    one_star = serializers.IntegerField()
