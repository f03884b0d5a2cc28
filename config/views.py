from django.db import connection
from django.http import JsonResponse
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response


@api_view(['GET'])
@permission_classes([AllowAny])
def health_check(request):
    """Liveness probe; also checks the database answers."""
    with connection.cursor() as cursor:
        cursor.execute('SELECT 1')
    return Response({'status': 'ok'})


def error_404(request, exception):
    """Custom 404 handler."""
    return JsonResponse({
        'code': 'not_found',
        'detail': 'Not found',
        'fields': {},
    }, status=404)


def error_500(request):
    """Custom 500 handler."""
    return JsonResponse({
        'code': 'error',
        'detail': 'Internal server error',
        'fields': {},
    }, status=500)
