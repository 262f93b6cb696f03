from rest_framework import serializers
from .models import Skill


class SkillSerializer(serializers.ModelSerializer):
    class Meta:
        model = Skill
        fields = ['id', 'name', 'status']
        read_only_fields = fields


class SkillModerationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Skill
        fields = ['id', 'name', 'status', 'rejection_reason', 'updated_at']
        read_only_fields = fields
