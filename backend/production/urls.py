from rest_framework.routers import DefaultRouter

from .views import FormulationViewSet, PelletingBatchViewSet

router = DefaultRouter()
router.register(r'formulations', FormulationViewSet, basename='formulations')
router.register(r'pelleting', PelletingBatchViewSet, basename='pelleting')

urlpatterns = router.urls
