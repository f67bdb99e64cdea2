from django.http import JsonResponse

from core.services.requests import RequestDataError, get_all_requests


def healthz(request):
    try:
        count = len(get_all_requests())
        return JsonResponse({'ok': True, 'requests': count})
    except RequestDataError as e:
        return JsonResponse({'ok': False, 'error': str(e)}, status=500)
