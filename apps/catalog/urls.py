from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'catalog'

router = DefaultRouter()
router.register(r'products', views.ProductViewSet, basename='product')

urlpatterns = [
    # GET    /api/catalog/products/?cycle={id}  - List products
    # POST   /api/catalog/products/             - Create product
    # GET    /api/catalog/products/{id}/        - Product detail
    # PATCH  /api/catalog/products/{id}/        - Update product / price table
    # DELETE /api/catalog/products/{id}/        - Deactivate product
    path('import/<uuid:cycle_id>/', views.import_csv, name='import-csv'),
    path('import-multirow/<uuid:cycle_id>/', views.import_multirow, name='import-multirow'),
    path('', include(router.urls)),
]
