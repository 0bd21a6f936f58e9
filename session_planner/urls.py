"""
URL configuration for session_planner project.
"""
from django.urls import path, include

urlpatterns = [
    path('api/', include('bookings.urls')),
]
