from rest_framework import status, viewsets, serializers as drf_serializers
from rest_framework.decorators import api_view, action, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.exceptions import ValidationError
from drf_spectacular.utils import extend_schema

from apps.accounts.permissions import IsAdmin
from .models import Promo
from .serializers import PromoSerializer, ServiceRateSerializer, ServiceRatePriceSerializer
from .services import (
    get_active_promo,
    create_promo,
    update_promo,
    activate_promo,
    get_service_rates,
    update_service_rate,
    PromoNotFoundError,
    InvalidPromoPeriodError,
    ServiceRateNotFoundError,
)


class ErrorResponseSerializer(drf_serializers.Serializer):
    error = drf_serializers.CharField()


class PromoViewSet(viewsets.ModelViewSet):
    """
    ViewSet for promo management (admins only).

    list: Get all promos, latest start first
    create: Schedule a promo
    retrieve: Get a specific promo
    update/partial_update: Edit a promo
    destroy: Delete a promo
    activate: Make a promo the only active one
    """

    queryset = Promo.objects.all()
    serializer_class = PromoSerializer
    permission_classes = [IsAuthenticated, IsAdmin]

    def perform_create(self, serializer):
        """Create promo using service layer."""
        try:
            promo = create_promo(created_by=self.request.user, **serializer.validated_data)
        except InvalidPromoPeriodError as e:
            raise ValidationError(str(e))
        serializer.instance = promo

    def perform_update(self, serializer):
        """Update promo using service layer."""
        try:
            promo = update_promo(serializer.instance.id, **serializer.validated_data)
        except (PromoNotFoundError, InvalidPromoPeriodError) as e:
            raise ValidationError(str(e))
        serializer.instance = promo

    @extend_schema(request=None, responses={200: PromoSerializer, 404: ErrorResponseSerializer})
    @action(detail=True, methods=['post'])
    def activate(self, request, pk=None):
        """Activate promo and deactivate all others."""
        try:
            promo = activate_promo(pk)
        except PromoNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(PromoSerializer(promo).data)


@extend_schema(
    responses={200: PromoSerializer, 204: None},
    description="Get the promo to announce (running or upcoming). 204 when there is none.",
    tags=['promos'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def active_promo(request):
    """Get the active promo using service layer."""
    promo = get_active_promo()
    if promo is None:
        return Response(status=status.HTTP_204_NO_CONTENT)

    return Response(PromoSerializer(promo).data)


@extend_schema(
    responses={200: ServiceRateSerializer(many=True)},
    description="Get the published service rates.",
    tags=['promos'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def service_rates(request):
    """List active service rates."""
    serializer = ServiceRateSerializer(get_service_rates(), many=True)
    return Response(serializer.data)


@extend_schema(
    request=ServiceRatePriceSerializer,
    responses={200: ServiceRateSerializer, 404: ErrorResponseSerializer},
    description="Change the price of a service rate (admins only).",
    tags=['promos'],
)
@api_view(['PATCH'])
@permission_classes([IsAuthenticated, IsAdmin])
def update_rate(request, rate_id):
    """Update a service rate price using service layer."""
    serializer = ServiceRatePriceSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        rate = update_service_rate(rate_id, serializer.validated_data['price'])
    except ServiceRateNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    return Response(ServiceRateSerializer(rate).data)
