from django.urls import path
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView
from . import views

app_name = 'accounts'

urlpatterns = [
    # Setup
    path('setup-status/', views.setup_status, name='setup-status'),
    path('setup/', views.setup, name='setup'),

    # JWT login (email + password)
    path('token/', TokenObtainPairView.as_view(), name='token'),
    path('token/refresh/', TokenRefreshView.as_view(), name='token-refresh'),

    # Administrator profile
    path('user/', views.get_current_user, name='current-user'),
    path('password/', views.update_password, name='change-password'),
]
