from django.urls import path
from .views import FreelancerReviewsView, ReviewDetailView, JobReviewCreateView

urlpatterns = [
    path('freelancer/<int:freelancer_id>/', FreelancerReviewsView.as_view(), name='freelancer_reviews'),
    path('job/<int:job_id>/', JobReviewCreateView.as_view(), name='review_create'),
    path('<int:pk>/', ReviewDetailView.as_view(), name='review_detail'),
]
