from django.contrib import admin
from .models import Student, Enrollment
# Register your models here.

class EnrollmentInline(admin.TabularInline):
    model = Enrollment
    extra = 0

@admin.register(Student)
class StudentAdmin(admin.ModelAdmin):
    list_display = ("matricule","last_name","first_name","sex","dob")
    search_fields = ("matricule","last_name","first_name")
    inlines = [EnrollmentInline]

@admin.register(Enrollment)
class EnrollmentAdmin(admin.ModelAdmin):
    list_display = ("student","academic_year","class_level","section","roll_number","active")
    list_filter = ("academic_year","class_level","section","active")
    search_fields = ("student__matricule","student__last_name","student__first_name")
