from django.contrib import admin
from .models import Payment

@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ('job', 'amount', 'status', 'method', 'created_at')
    list_filter = ('status', 'method')
    search_fields = ('job__title',)
    readonly_fields = ('job', 'amount', 'status', 'method', 'created_at')
