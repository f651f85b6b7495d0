from django.urls import path, include
from rest_framework.routers import DefaultRouter

from . import views

app_name = 'farmers'

router = DefaultRouter()
router.register(r'', views.FarmerViewSet, basename='farmer')

urlpatterns = [
    # GET    /api/farmers/        - List farmers
    # POST   /api/farmers/        - Register farmer (creates login)
    # GET    /api/farmers/{id}/   - Get farmer
    # PATCH  /api/farmers/{id}/   - Edit farmer
    # DELETE /api/farmers/{id}/   - Delete farmer and their records
    path('', include(router.urls)),
]
