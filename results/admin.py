from django.contrib import admin
from .models import Result, ResultProcessingLock
# Register your models here.

@admin.register(Result)
class ResultAdmin(admin.ModelAdmin):
    list_display = ("enrollment", "examination", "percentage", "gpa", "final_grade", "rank", "processed_at")
    list_filter = ("examination__academic_year", "examination", "enrollment__class_level", "enrollment__section")
    search_fields = ("enrollment__student__matricule", "enrollment__student__last_name", "examination__name")
    # écrit uniquement par le traitement des résultats
    readonly_fields = ("uid", "enrollment", "examination", "total_marks", "total_full_marks", "percentage",
                       "gpa", "final_grade", "grading_system", "rank", "rank_section", "processed_at")

    def has_add_permission(self, request):
        return False

@admin.register(ResultProcessingLock)
class ResultProcessingLockAdmin(admin.ModelAdmin):
    list_display = ("key", "locked_until", "locked_by")
    search_fields = ("key",)
