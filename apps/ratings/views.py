from rest_framework import status, mixins, viewsets, serializers as drf_serializers
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from .models import Rating
from .serializers import RatingSerializer, RatingCreateSerializer, RatingStatisticsSerializer
from .services import (
    create_rating,
    get_ratings,
    get_rating_statistics,
    RatingOrderNotFoundError,
    InvalidRatingError,
    UnauthorizedRatingError,
    OrderNotCompletedError,
    DuplicateRatingError,
)


class ErrorResponseSerializer(drf_serializers.Serializer):
    error = drf_serializers.CharField()


class RatingPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class RatingViewSet(mixins.ListModelMixin,
                    mixins.RetrieveModelMixin,
                    viewsets.GenericViewSet):
    """
    ViewSet for customer ratings.

    list: Get ratings (filters: stars, search)
    retrieve: Get a specific rating
    create: Rate a completed order (the order's customer only)
    statistics: Rating summary
    """

    queryset = Rating.objects.select_related('order', 'customer')
    serializer_class = RatingSerializer
    pagination_class = RatingPagination

    def get_permissions(self):
        if self.action == 'create':
            return [IsAuthenticated()]
        return [AllowAny()]

    def get_queryset(self):
        stars = self.request.query_params.get('stars')
        return get_ratings(
            stars=int(stars) if stars and stars.isdigit() else None,
            search=self.request.query_params.get('search'),
        )

    @extend_schema(
        parameters=[
            OpenApiParameter('stars', OpenApiTypes.INT, description='Only ratings with this many stars'),
            OpenApiParameter('search', OpenApiTypes.STR, description='Search in feedback'),
        ],
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(
        request=RatingCreateSerializer,
        responses={
            201: RatingSerializer,
            400: ErrorResponseSerializer,
            403: ErrorResponseSerializer,
            404: ErrorResponseSerializer,
            409: ErrorResponseSerializer,
        },
    )
    def create(self, request):
        """Rate an order using service layer."""
        serializer = RatingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            rating = create_rating(customer=request.user, **serializer.validated_data)
        except RatingOrderNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except UnauthorizedRatingError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except (InvalidRatingError, OrderNotCompletedError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except DuplicateRatingError as e:
            return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)

        return Response(RatingSerializer(rating).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: RatingStatisticsSerializer})
    @action(detail=False, methods=['get'])
    def statistics(self, request):
        """Get rating statistics using service layer."""
        serializer = RatingStatisticsSerializer(get_rating_statistics())
        return Response(serializer.data)
