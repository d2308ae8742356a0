from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

router = DefaultRouter()
router.register(r'cuotas', views.CuotasViewSet, basename='cuotas')
router.register(r'promociones', views.PromocionesViewSet, basename='promociones')

urlpatterns = [
    path('', include(router.urls)),
]
