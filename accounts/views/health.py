from django.http import JsonResponse

from ..apps import gate


def healthz(request):
    registry = gate().registry
    loaded = registry is not None and len(registry) > 0
    return JsonResponse({'ok': loaded, 'accounts': len(registry) if registry is not None else 0},
                        status=200 if loaded else 503)
