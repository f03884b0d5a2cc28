from django.urls import path
from . import views

app_name = 'ledger'

urlpatterns = [
    path('payment/', views.create_payment, name='payment'),
    path('adjustment/', views.create_adjustment, name='adjustment'),
    path('<uuid:transaction_id>/', views.transaction_detail, name='transaction-detail'),
]
