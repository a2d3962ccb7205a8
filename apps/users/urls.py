from django.urls import path
from .views import (
    AuthRegisterView, AuthLoginView, AuthLogoutView, AuthMeView,
    UserListView, FreelancerListView, UserProfileView
)

urlpatterns = [
    # Authentication
    path('auth/register/', AuthRegisterView.as_view(), name='auth_register'),
    path('auth/login/', AuthLoginView.as_view(), name='auth_login'),
    path('auth/logout/', AuthLogoutView.as_view(), name='auth_logout'),
    path('auth/me/', AuthMeView.as_view(), name='auth_me'),

    # Accounts
    path('', UserListView.as_view(), name='user_list'),
    path('freelancers/', FreelancerListView.as_view(), name='freelancer_list'),
    path('profile/<int:pk>/', UserProfileView.as_view(), name='user_profile'),
]
