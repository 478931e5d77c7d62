"""
Product URLs

URL routing for the products app.
"""

from django.urls import path
from .views import DriverListView, HealthView, ProductListView

urlpatterns = [
    path('health/', HealthView.as_view(), name='health'),
    path('drivers/', DriverListView.as_view(), name='drivers'),
    path('products/<str:driver_id>/', ProductListView.as_view(), name='products'),
]
