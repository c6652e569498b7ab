import logging

from django.db import connection
from django.http import JsonResponse

logger = logging.getLogger(__name__)


def health_check(request):
    """Liveness check with a database round-trip."""
    try:
        with connection.cursor() as cursor:
            cursor.execute('SELECT 1')
    except Exception:
        logger.exception("Health check database query failed")
        return JsonResponse({'status': 'error', 'database': 'unavailable'}, status=503)
    return JsonResponse({'status': 'ok'})


def error_404(request, exception):
    return JsonResponse({'error': f'No route matches {request.path}'}, status=404)


def error_500(request):
    """Unhandled exceptions end up here after Django has logged the traceback."""
    logger.error("Unhandled server error on %s %s", request.method, request.path)
    return JsonResponse({'error': 'Something went wrong on our side. Please try again.'}, status=500)
