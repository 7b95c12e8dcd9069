from django.contrib import admin
from django.forms.models import BaseInlineFormSet
from .models import GradingSystem, Grade
from .services import validate_bands
# Register your models here.

class GradeInlineFormSet(BaseInlineFormSet):
    def clean(self):
        super().clean()
        # lignes invalides: les erreurs de champ sont déjà affichées
        if any(f.errors for f in self.forms):
            return
        bands = [
            f.cleaned_data for f in self.forms
            if f.cleaned_data and not f.cleaned_data.get("DELETE", False)
        ]
        validate_bands(bands)

class GradeInline(admin.TabularInline):
    model = Grade
    formset = GradeInlineFormSet
    extra = 1

@admin.register(GradingSystem)
class GradingSystemAdmin(admin.ModelAdmin):
    list_display = ("name", "is_default", "description")
    list_filter = ("is_default",)
    search_fields = ("name",)
    inlines = [GradeInline]
