"""URL configuration for the public site."""

from django.urls import path

from .views import BlockPreviewView, HomeView

app_name = "cms"

urlpatterns = [
    path("", HomeView.as_view(), name="home"),
    path("preview/blocks/<int:block_id>/", BlockPreviewView.as_view(), name="block-preview"),
]
