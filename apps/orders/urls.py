from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'orders'

urlpatterns = [
    # Friend cart (X-Cycle-Password header or admin login)
    path(
        'cycles/<uuid:cycle_id>/friends/<uuid:friend_id>/cart/',
        views.cart,
        name='cart'
    ),
    path(
        'cycles/<uuid:cycle_id>/friends/<uuid:friend_id>/submit/',
        views.submit_order,
        name='submit'
    ),

    # Fulfillment (admin)
    path('<uuid:order_id>/paid/', views.order_paid, name='order-paid'),
    path('<uuid:order_id>/packed/', views.order_packed, name='order-packed'),
]


pickup_router = DefaultRouter()
pickup_router.register(r'', views.PickupLocationViewSet, basename='pickup-location')

# Mounted separately at /api/pickup-locations/
# GET    /api/pickup-locations/        - Active locations (public)
# GET    /api/pickup-locations/all/    - All locations (admin)
# POST   /api/pickup-locations/        - Create (admin)
# PATCH  /api/pickup-locations/{id}/   - Update (admin)
# DELETE /api/pickup-locations/{id}/   - Delete or deactivate (admin)
pickup_location_urlpatterns = [
    path('', include(pickup_router.urls)),
]
