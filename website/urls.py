# website/urls.py
from django.urls import path
from .views import (
    RoleBasedLoginView,
    LogoutView,
    RegisterView,
    DashboardView,
    MeView,
    home,
)

urlpatterns = [
    path('', home, name='home'),
    path('login/', RoleBasedLoginView.as_view(), name='login'),
    path('logout/', LogoutView.as_view(), name='logout'),
    path('register/', RegisterView.as_view(), name='register'),
    path('dashboard/', DashboardView.as_view(), name='dashboard'),
    path('me/', MeView.as_view(), name='me'),
]
