from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'ratings'

router = SimpleRouter()
router.register(r'', views.RatingViewSet, basename='rating')

urlpatterns = [
    # GET  /api/ratings/              - List ratings (public)
    # POST /api/ratings/              - Rate a completed order
    # GET  /api/ratings/{id}/         - Rating detail
    # GET  /api/ratings/statistics/   - Rating summary
    path('', include(router.urls)),
]
