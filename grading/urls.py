from rest_framework.routers import DefaultRouter
from .views import GradingSystemViewSet

router = DefaultRouter()
router.register(r"api/grading/systems", GradingSystemViewSet, basename="grading-systems")
urlpatterns = router.urls
