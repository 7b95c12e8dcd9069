from django.contrib import admin
from .models import AcademicYear, ClassLevel, Section
# Register your models here.
class SectionInline(admin.TabularInline):
    model = Section
    extra = 1

@admin.register(AcademicYear)
class AcademicYearAdmin(admin.ModelAdmin):
    list_display = ("name", "start_date", "end_date")
    search_fields = ("name",)

@admin.register(ClassLevel)
class ClassLevelAdmin(admin.ModelAdmin):
    list_display = ("name", "numeric_level")
    search_fields = ("name",)
    inlines = [SectionInline]

@admin.register(Section)
class SectionAdmin(admin.ModelAdmin):
    list_display = ("name", "class_level")
    list_filter  = ("class_level",)
    search_fields = ("name", "class_level__name")
