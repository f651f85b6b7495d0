from django.urls import path, include
from rest_framework.routers import DefaultRouter

from . import views

app_name = 'accounts'

router = DefaultRouter()
router.register(r'users', views.UserViewSet, basename='user')

urlpatterns = [
    # Authentication
    path('login/', views.login, name='login'),

    # Current user
    path('user/', views.get_current_user, name='current-user'),
    path('user/password/', views.change_password, name='change-password'),

    # Admin user management
    path('', include(router.urls)),
]
