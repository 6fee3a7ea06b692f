"""Core views for Jewelstore."""

from django.http import JsonResponse

from jewelstore.api import client


def health_check(request):
    """Health check endpoint for container orchestration."""
    if client.check_health():
        return JsonResponse({"status": "healthy", "backend": "reachable"})
    return JsonResponse(
        {"status": "unhealthy", "backend": "unreachable"},
        status=503,
    )
