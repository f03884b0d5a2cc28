from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'cycles'

router = DefaultRouter()
router.register(r'', views.CycleViewSet, basename='cycle')

urlpatterns = [
    # GET    /api/cycles/                    - List cycles with order counts
    # POST   /api/cycles/                    - Create cycle
    # GET    /api/cycles/{id}/               - Cycle detail
    # PATCH  /api/cycles/{id}/               - Update name/status/password/markup
    # DELETE /api/cycles/{id}/               - Delete cycle
    # GET    /api/cycles/{id}/summary/       - Supplier order summary
    # GET    /api/cycles/{id}/distribution/  - Packing list
    # GET    /api/cycles/{id}/orders/        - Orders with fulfillment flags
    # GET    /api/cycles/{id}/public/        - Friend login screen (public)
    # POST   /api/cycles/{id}/auth/          - Friend password check (public)
    path('', include(router.urls)),
]
