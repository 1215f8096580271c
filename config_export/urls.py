"""
Configuration Export URL Configuration
"""
from django.urls import path
from .views import ConfigExportView

app_name = 'config_export'

urlpatterns = [
    path('', ConfigExportView.as_view(), name='missing-name'),
    path('<str:config_name>', ConfigExportView.as_view(), name='export'),
]
