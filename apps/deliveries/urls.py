from django.urls import path, include
from rest_framework.routers import DefaultRouter

from . import views

app_name = 'deliveries'

router = DefaultRouter()
router.register(r'', views.DeliveryViewSet, basename='delivery')

urlpatterns = [
    # GET    /api/deliveries/        - List deliveries
    # POST   /api/deliveries/        - Record a delivery
    # GET    /api/deliveries/{id}/   - Get delivery
    # PATCH  /api/deliveries/{id}/   - Edit delivery (re-priced)
    # DELETE /api/deliveries/{id}/   - Delete delivery
    path('', include(router.urls)),
]
