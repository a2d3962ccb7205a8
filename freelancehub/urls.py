from django.contrib import admin
from django.urls import path, include
from drf_yasg.views import get_schema_view
from drf_yasg import openapi

schema_view = get_schema_view(
    openapi.Info(
        title="FreelanceHub API",
        default_version='v1',
        description="API for the FreelanceHub marketplace",
    ),
    public=True,
)

urlpatterns = [
    path('', schema_view.with_ui('swagger', cache_timeout=0), name='schema-swagger-ui'),
    path('admin/', admin.site.urls),
    path('users/', include('apps.users.urls')),
    path('jobs/', include('apps.jobs.urls')),
    path('messages/', include('apps.messaging.urls')),
    path('reviews/', include('apps.reviews.urls')),
    path('payments/', include('apps.payments.urls')),
]
