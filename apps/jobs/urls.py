from django.urls import path
from .views import (
    JobListCreateView, JobDetailView, JobTransitionView, UserJobsView,
    MyCreatedJobsView, MyAcceptedJobsView
)

urlpatterns = [
    path('', JobListCreateView.as_view(), name='job_list'),
    path('<int:pk>/', JobDetailView.as_view(), name='job_detail'),
    path('<int:pk>/accept/', JobTransitionView.as_view(transition='accept'), name='job_accept'),
    path('<int:pk>/complete/', JobTransitionView.as_view(transition='complete'), name='job_complete'),
    path('<int:pk>/cancel/', JobTransitionView.as_view(transition='cancel'), name='job_cancel'),
    path('user/<int:user_id>/', UserJobsView.as_view(), name='jobs_by_user'),
    path('my/created/', MyCreatedJobsView.as_view(), name='my_created_jobs'),
    path('my/accepted/', MyAcceptedJobsView.as_view(), name='my_accepted_jobs'),
]
