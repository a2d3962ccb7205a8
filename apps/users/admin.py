from django.contrib import admin
from .models import User

@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('email', 'name', 'role', 'balance', 'is_superuser', 'created_at')
    list_filter = ('role', 'is_superuser')
    search_fields = ('email', 'name', 'phone_number')
    readonly_fields = ('balance',)
