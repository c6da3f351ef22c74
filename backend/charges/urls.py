from rest_framework.routers import DefaultRouter

from .views import FeeConfigurationViewSet

router = DefaultRouter()
router.register(r'charges-config', FeeConfigurationViewSet, basename='charges-config')

urlpatterns = router.urls
