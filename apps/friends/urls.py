from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'friends'

router = DefaultRouter()
router.register(r'', views.FriendViewSet, basename='friend')

urlpatterns = [
    # GET    /api/friends/                     - List friends with balances
    # POST   /api/friends/                     - Create friend
    # GET    /api/friends/{id}/                - Friend detail
    # PATCH  /api/friends/{id}/                - Update friend
    # DELETE /api/friends/{id}/                - Delete settled friend
    # GET    /api/friends/{id}/balance/        - Current balance
    # GET    /api/friends/{id}/transactions/   - Ledger entries
    path('', include(router.urls)),
]
