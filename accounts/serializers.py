from django.contrib.auth import get_user_model
from rest_framework import serializers

User = get_user_model()


class PublicUserSerializer(serializers.ModelSerializer):
    name = serializers.CharField(source='display_name', read_only=True)
    avg_rating = serializers.SerializerMethodField()
    review_count = serializers.IntegerField(read_only=True)
    offered_skills = serializers.SerializerMethodField()
    wanted_skills = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            'id', 'username', 'name', 'location', 'availability', 'profile_photo', 'is_public',
            'avg_rating', 'review_count', 'offered_skills', 'wanted_skills',
        ]
        read_only_fields = fields

    def get_avg_rating(self, obj):
        return round(obj.avg_rating or 0, 1)

    def _skills(self, links):
        return [{'id': link.skill_id, 'name': link.skill.name} for link in links.all()]

    def get_offered_skills(self, obj):
        return self._skills(obj.offered_skills)

    def get_wanted_skills(self, obj):
        return self._skills(obj.wanted_skills)


class PrivateUserSerializer(serializers.ModelSerializer):
    """What a stranger sees of a private profile."""
    name = serializers.CharField(source='display_name', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'username', 'name', 'is_public']
        read_only_fields = fields


class ProfileUpdateSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ['first_name', 'last_name', 'location', 'availability', 'profile_photo', 'is_public']
        extra_kwargs = {
            'first_name': {'required': False, 'allow_blank': True},
            'last_name': {'required': False, 'allow_blank': True},
            'location': {'required': False, 'allow_blank': True},
            'availability': {'required': False, 'allow_blank': True},
            'profile_photo': {'required': False, 'allow_blank': True},
        }
