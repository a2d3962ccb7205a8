from django.urls import path
from .views import JobMessagesView, MessageDeleteView

urlpatterns = [
    path('job/<int:job_id>/', JobMessagesView.as_view(), name='job_messages'),
    path('<int:pk>/', MessageDeleteView.as_view(), name='message_delete'),
]
