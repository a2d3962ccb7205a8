from django.contrib import admin
from .models import Message

@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    list_display = ('job', 'sender', 'created_at')
    search_fields = ('job__title', 'sender__email', 'content')
