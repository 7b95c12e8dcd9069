from rest_framework import serializers
from .models import User

class MeSerializer(serializers.ModelSerializer):
    can_manage_results = serializers.BooleanField(read_only=True)

    class Meta:
        model = User
        fields = ["id","username","first_name","last_name","email","role","can_manage_results"]
