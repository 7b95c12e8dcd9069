from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from rest_framework import serializers

from .models import GradingSystem, Grade
from .services import validate_bands

class GradeSerializer(serializers.ModelSerializer):
    class Meta:
        model = Grade
        fields = ["id","grade_name","min_percentage","max_percentage","points"]

class GradingSystemSerializer(serializers.ModelSerializer):
    grades = GradeSerializer(many=True, required=False)
    in_use = serializers.BooleanField(source="is_in_use", read_only=True)

    class Meta:
        model = GradingSystem
        fields = ["id","name","is_default","description","in_use","grades"]

    def validate_grades(self, value):
        try:
            validate_bands(value)
        except DjangoValidationError as exc:
            raise serializers.ValidationError(exc.messages)
        return value

    def validate(self, attrs):
        if self.instance is None and not attrs.get("grades"):
            raise serializers.ValidationError({"grades": "Missing required field: grades."})
        # les tranches référencées par des résultats ne bougent plus
        if self.instance is not None and "grades" in attrs and self.instance.is_in_use:
            raise serializers.ValidationError(
                {"grades": "Cannot change grade bands of a grading system that is being used in results."}
            )
        return attrs

    @transaction.atomic
    def create(self, validated):
        grades = validated.pop("grades")
        system = GradingSystem.objects.create(**validated)
        Grade.objects.bulk_create([Grade(system=system, **g) for g in grades])
        return system

    @transaction.atomic
    def update(self, instance, validated):
        grades = validated.pop("grades", None)
        for field, value in validated.items():
            setattr(instance, field, value)
        instance.save()
        if grades is not None:
            instance.grades.all().delete()
            Grade.objects.bulk_create([Grade(system=instance, **g) for g in grades])
        return instance
