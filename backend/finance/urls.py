from rest_framework.routers import DefaultRouter

from .views import CustomerViewSet, InvoiceViewSet

router = DefaultRouter()
router.register(r'customers', CustomerViewSet, basename='customers')
router.register(r'invoices', InvoiceViewSet, basename='invoices')

urlpatterns = router.urls
