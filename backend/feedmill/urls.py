from django.contrib import admin
from django.urls import include, path
from rest_framework.routers import DefaultRouter

from charges.urls import router as charges_router
from finance.urls import router as finance_router
from production.urls import router as production_router

# One API root listing every resource
router = DefaultRouter()
for app_router in (charges_router, production_router, finance_router):
    router.registry.extend(app_router.registry)

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', include(router.urls)),
]
