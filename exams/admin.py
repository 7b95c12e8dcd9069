from django.contrib import admin
from .models import Examination, SubjectOffering, Mark
# Register your models here.

class SubjectOfferingInline(admin.TabularInline):
    model = SubjectOffering
    extra = 1

@admin.register(Examination)
class ExaminationAdmin(admin.ModelAdmin):
    list_display = ("name", "academic_year", "start_date", "end_date")
    list_filter = ("academic_year",)
    search_fields = ("name",)
    inlines = [SubjectOfferingInline]

@admin.register(SubjectOffering)
class SubjectOfferingAdmin(admin.ModelAdmin):
    list_display = ("examination", "class_level", "subject", "full_marks", "pass_marks", "exam_date")
    list_filter = ("examination__academic_year", "examination", "class_level")
    search_fields = ("examination__name", "subject__name", "subject__code")

@admin.register(Mark)
class MarkAdmin(admin.ModelAdmin):
    list_display = ("offering", "enrollment", "marks_obtained")
    list_filter = ("offering__examination", "offering__class_level", "enrollment__section")
    search_fields = ("enrollment__student__matricule", "enrollment__student__last_name", "offering__subject__name")
