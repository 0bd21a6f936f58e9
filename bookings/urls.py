"""
URL routing for the bookings API.
"""

from django.urls import path
from .views import BookingOptionsView, SessionReportView

urlpatterns = [
    path('bookings/report/', SessionReportView.as_view(), name='session-report'),
    path('bookings/options/', BookingOptionsView.as_view(), name='booking-options'),
]
