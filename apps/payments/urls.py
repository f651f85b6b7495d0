from django.urls import path, include
from rest_framework.routers import DefaultRouter

from . import views

app_name = 'payments'

router = DefaultRouter()
router.register(r'', views.PaymentViewSet, basename='payment')

urlpatterns = [
    # GET  /api/payments/                - List payment records
    # GET  /api/payments/{id}/           - Get payment record
    # POST /api/payments/{id}/process/   - Settle one payment
    # POST /api/payments/process-all/    - Settle all pending payments
    path('', include(router.urls)),
]
