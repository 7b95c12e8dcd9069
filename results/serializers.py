from rest_framework import serializers
from .models import Result

DECIMAL_FIELDS = ("total_marks", "total_full_marks", "percentage", "gpa", "grade_points")

class ResultSerializer(serializers.ModelSerializer):
    # champs plats lisibles pour le front
    student_id = serializers.IntegerField(source="enrollment.student.id", read_only=True)
    matricule = serializers.CharField(source="enrollment.student.matricule", read_only=True)
    student_name = serializers.CharField(source="enrollment.student.full_name", read_only=True)
    roll_number = serializers.IntegerField(source="enrollment.roll_number", read_only=True)
    class_level = serializers.CharField(source="enrollment.class_level.name", read_only=True)
    section = serializers.CharField(source="enrollment.section.name", read_only=True, default=None)
    exam_name = serializers.CharField(source="examination.name", read_only=True)
    academic_year = serializers.CharField(source="examination.academic_year.name", read_only=True)
    final_grade = serializers.CharField(source="final_grade.grade_name", read_only=True)
    grade_points = serializers.DecimalField(source="final_grade.points", max_digits=4, decimal_places=2, read_only=True)
    grading_system = serializers.CharField(source="grading_system.name", read_only=True)

    class Meta:
        model = Result
        fields = [
            "id", "uid",
            "enrollment", "student_id", "matricule", "student_name", "roll_number",
            "class_level", "section",
            "examination", "exam_name", "academic_year",
            "total_marks", "total_full_marks", "percentage", "gpa",
            "final_grade", "grade_points", "grading_system",
            "rank", "processed_at",
        ]
        read_only_fields = fields

    def to_representation(self, instance):
        data = super().to_representation(instance)
        # Decimal -> float pour confort front
        for key in DECIMAL_FIELDS:
            if data.get(key) is not None:
                data[key] = float(data[key])
        return data
