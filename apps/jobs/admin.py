from django.contrib import admin
from .models import Job

@admin.register(Job)
class JobAdmin(admin.ModelAdmin):
    list_display = ('title', 'client', 'freelancer', 'budget', 'status', 'created_at')
    list_filter = ('status', 'category')
    search_fields = ('title', 'client__email', 'freelancer__email')
