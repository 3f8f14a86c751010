"""mail_sim URL Configuration

The `urlpatterns` list routes URLs to views. For more information please see:
    https://docs.djangoproject.com/en/4.2/topics/http/urls/
"""

from django.conf import settings
from django.urls import path, include

urlpatterns = []

# Dynamically add URL patterns based on enabled apps
if settings.APP_MAIL_ENABLED:
    from app_mail import urls as app_mail_urls
    urlpatterns.append(path('api/mail/', include(app_mail_urls)))
